import attr

from checkignore.constants import Colors
from checkignore.util import with_color

# At least one path matched an ignore rule
OK_EXIT_CODE = 0
# No path matched
NO_MATCH_EXIT_CODE = 1
# git's die() status
FATAL_EXIT_CODE = 128
# 128 + SIGPIPE, what a shell reports for a writer killed by a closed pipe
BROKEN_PIPE_EXIT_CODE = 141


class CheckIgnoreError(Exception):
    """
    Parent class of all exceptions we anticipate in check-ignore

    All CheckIgnoreErrors are caught by the command wrapper, their message is
    printed to stderr and the process exits with `code`.

    For pretty-printing, exceptions should override `__str__`.
    """

    def __init__(self, *args: object, code: int = FATAL_EXIT_CODE) -> None:
        self.code = code
        super().__init__(*args)

    def format_for_terminal(self) -> str:
        return f"{with_color(Colors.red, 'fatal:', bold=True)} {self}"


class UsageError(CheckIgnoreError):
    """Conflicting or missing command line options"""


class GitError(CheckIgnoreError):
    """A git plumbing command failed"""


class CorruptIndexError(CheckIgnoreError):
    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__("index file corrupt")

    def __str__(self) -> str:
        if self.detail:
            return f"index file corrupt: {self.detail}"
        return "index file corrupt"


class BadlyQuotedLineError(CheckIgnoreError):
    def __init__(self, line: str) -> None:
        self.line = line
        super().__init__("line is badly quoted")


class OutputClosedError(CheckIgnoreError):
    """
    The reader of stdout went away, e.g. `check-ignore --stdin | head -1`

    Not reported on stderr; the command wrapper exits quietly.
    """

    def __init__(self) -> None:
        super().__init__("stdout closed by reader", code=BROKEN_PIPE_EXIT_CODE)


@attr.s(auto_attribs=True, frozen=True)
class PathOutsideRepositoryError(CheckIgnoreError):
    code = FATAL_EXIT_CODE
    path: str

    def __str__(self) -> str:
        return f"'{self.path}' is outside repository"


@attr.s(auto_attribs=True, frozen=True)
class PathInSubmoduleError(CheckIgnoreError):
    code = FATAL_EXIT_CODE
    path: str
    submodule: str

    def __str__(self) -> str:
        return f"Path '{self.path}' is in submodule '{self.submodule}'"


@attr.s(auto_attribs=True, frozen=True)
class PathBeyondSymlinkError(CheckIgnoreError):
    code = FATAL_EXIT_CODE
    path: str

    def __str__(self) -> str:
        return f"pathspec '{self.path}' is beyond a symbolic link"

