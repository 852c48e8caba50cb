import os

from checkignore.formatter.base import BaseFormatter
from checkignore.formatter.base import rule_text
from checkignore.quote import quote_c_style
from checkignore.quote import write_name_quoted
from checkignore.types import Verdict


class TextFormatter(BaseFormatter):
    """
    Newline terminated records

        build.log
        .gitignore:3:*.log<TAB>"build.log"
        ::<TAB>"README.md"
    """

    def format(self, path: bytes, verdict: Verdict) -> bytes:
        if not self.verbose:
            return write_name_quoted(path, b"\n")

        if verdict is None:
            location = b"::"
        else:
            location = b"%s:%d:%s" % (
                quote_c_style(os.fsencode(verdict.source)),
                verdict.line,
                rule_text(verdict),
            )
        return location + b"\t" + quote_c_style(path, always=True) + b"\n"
