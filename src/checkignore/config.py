from typing import Sequence

from attrs import frozen

from checkignore.error import UsageError


@frozen
class RunConfig:
    """
    Options of one check-ignore invocation

    Build it with RunConfig.from_options, which rejects every invalid
    combination before anything else happens.
    """

    quiet: bool = False
    verbose: bool = False
    stdin: bool = False
    null_terminated: bool = False
    show_non_matching: bool = False
    no_index: bool = False

    @property
    def terminator(self) -> bytes:
        """Separator of input records and of output records/fields"""
        return b"\0" if self.null_terminated else b"\n"

    @classmethod
    def from_options(
        cls,
        paths: Sequence[str],
        *,
        quiet: bool = False,
        verbose: bool = False,
        stdin: bool = False,
        null_terminated: bool = False,
        show_non_matching: bool = False,
        no_index: bool = False,
    ) -> "RunConfig":
        if stdin:
            if paths:
                raise UsageError("cannot specify pathnames with --stdin")
        else:
            if null_terminated:
                raise UsageError("-z only makes sense with --stdin")
            if not paths:
                raise UsageError("no path specified")

        if quiet:
            if len(paths) > 1:
                raise UsageError("--quiet is only valid with a single pathname")
            if verbose:
                raise UsageError("cannot have both --quiet and --verbose")

        if show_non_matching and not verbose:
            raise UsageError("--non-matching is only valid with --verbose")

        return cls(
            quiet=quiet,
            verbose=verbose,
            stdin=stdin,
            null_terminated=null_terminated,
            show_non_matching=show_non_matching,
            no_index=no_index,
        )
