import sys
from typing import Sequence

import click

from checkignore import __VERSION__
from checkignore.check_ignore import run_check_ignore
from checkignore.commands.wrapper import handle_command_errors
from checkignore.config import RunConfig
from checkignore.state import get_state
from checkignore.verbose_logging import getLogger

logger = getLogger(__name__)


@click.command(name="check-ignore")
@click.help_option("--help", "-h")
@click.version_option(__VERSION__, prog_name="check-ignore")
@click.argument("paths", nargs=-1)
@click.option("-q", "--quiet", is_flag=True, help="Suppress progress reporting.")
@click.option("-v", "--verbose", is_flag=True, help="Show the matching rule.")
@click.option("--stdin", is_flag=True, help="Read file names from stdin.")
@click.option(
    "-z",
    "null_terminated",
    is_flag=True,
    help="Terminate input and output records by a NUL character.",
)
@click.option(
    "-n",
    "--non-matching",
    "show_non_matching",
    is_flag=True,
    help="Show non-matching input paths.",
)
@click.option(
    "--no-index",
    is_flag=True,
    help="Ignore index when checking.",
)
@handle_command_errors
def check_ignore(
    paths: Sequence[str],
    quiet: bool,
    verbose: bool,
    stdin: bool,
    null_terminated: bool,
    show_non_matching: bool,
    no_index: bool,
) -> int:
    """
    Debug gitignore / exclude files.

    For each pathname given via the command line or from stdin, check
    whether the file is excluded by .gitignore (or other input files to
    the exclude mechanism) and output the path if it is excluded.

    Exit status is 0 if at least one path is ignored, 1 if none is, and
    128 on a fatal error.
    """
    state = get_state()
    state.terminal.init_for_cli(state.env)

    config = RunConfig.from_options(
        paths,
        quiet=quiet,
        verbose=verbose,
        stdin=stdin,
        null_terminated=null_terminated,
        show_non_matching=show_non_matching,
        no_index=no_index,
    )
    logger.debug(f"Running check-ignore with {config}")

    return run_check_ignore(
        config,
        paths,
        sys.stdin.buffer,
        sys.stdout.buffer,
    )
