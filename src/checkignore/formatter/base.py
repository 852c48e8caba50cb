import abc
import os

from checkignore.types import Match
from checkignore.types import Verdict


def rule_text(match: Match) -> bytes:
    """The rule as written in its ignore file: [!]pattern[/]"""
    bang = b"!" if match.negated else b""
    slash = b"/" if match.directory_only else b""
    return bang + os.fsencode(match.pattern) + slash


class BaseFormatter(abc.ABC):
    """
    Renders the record for one checked path

    `path` is the path as the user spelled it, already encoded with
    os.fsencode. Whether a record is emitted at all is decided by the
    OutputHandler, not here.
    """

    def __init__(self, verbose: bool = False) -> None:
        self.verbose = verbose

    @abc.abstractmethod
    def format(self, path: bytes, verdict: Verdict) -> bytes:
        raise NotImplementedError
