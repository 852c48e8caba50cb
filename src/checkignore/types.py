from enum import Enum
from typing import Iterable
from typing import Optional

from attrs import frozen

from checkignore.error import NO_MATCH_EXIT_CODE
from checkignore.error import OK_EXIT_CODE


class FileType(Enum):
    """What the caller knows about the path being checked"""

    UNKNOWN = "unknown"
    FILE = "file"
    DIRECTORY = "directory"


@frozen
class Match:
    """
    The ignore rule that decided a path

    `source` is the ignore file the rule was read from, spelled the way it is
    reported (relative to the work tree root for per-directory files), and
    `line` is its 1-based line number there. `pattern` is the pattern text
    without the leading "!" and trailing "/", which are recorded in
    `negated` and `directory_only`.
    """

    source: str
    line: int
    pattern: str
    negated: bool = False
    directory_only: bool = False


# None means no rule matched
Verdict = Optional[Match]


@frozen
class RunResult:
    """Cumulative result of one invocation"""

    ignored_count: int = 0

    def add(self, verdicts: Iterable[Verdict]) -> "RunResult":
        return RunResult(
            self.ignored_count + sum(1 for v in verdicts if v is not None)
        )

    @property
    def exit_code(self) -> int:
        """grep-like: success means at least one path was ignored"""
        return OK_EXIT_CODE if self.ignored_count > 0 else NO_MATCH_EXIT_CODE
