import os

from checkignore.formatter.base import BaseFormatter
from checkignore.formatter.base import rule_text
from checkignore.types import Verdict


class NullFormatter(BaseFormatter):
    """
    NUL terminated fields, nothing is quoted

    Verbose records always have four fields (source, line, rule, path); the
    first three are empty for paths no rule matched.
    """

    def format(self, path: bytes, verdict: Verdict) -> bytes:
        if not self.verbose:
            return path + b"\0"

        if verdict is None:
            fields = [b"", b"", b"", path]
        else:
            fields = [
                os.fsencode(verdict.source),
                b"%d" % verdict.line,
                rule_text(verdict),
                path,
            ]
        return b"".join(field + b"\0" for field in fields)
