"""
Gitignore rule engine

Finds the rule that decides whether a path is ignored. Rules come from, in
order of precedence:

1. `.gitignore` files in the directories leading to the path, deepest first
2. `$GIT_DIR/info/exclude`
3. the file named by `core.excludesFile`

Within one file the last matching line wins. If a leading directory of the
path is itself ignored, the rule that ignored the directory is the answer:
git never descends into it, so deeper `.gitignore` files are not consulted.
"""
import os
import re
import stat
from pathlib import Path
from typing import Dict
from typing import Iterable
from typing import Iterator
from typing import List
from typing import Optional
from typing import Sequence
from typing import Tuple

from attrs import define
from attrs import frozen
from wcmatch import fnmatch
from wcmatch import glob

from checkignore.constants import IGNORE_FILE_NAME
from checkignore.constants import INFO_EXCLUDE_PATH
from checkignore.types import FileType
from checkignore.types import Match
from checkignore.verbose_logging import getLogger

logger = getLogger(__name__)

UTF8_BOM = "\ufeff"
# Trailing spaces are dropped unless the last one is escaped with a backslash
TRAILING_SPACES_RE = re.compile(r"(?<!\\)( +)$")

FNMATCH_FLAGS = fnmatch.CASE | fnmatch.DOTMATCH | fnmatch.FORCEUNIX
GLOB_FLAGS = glob.CASE | glob.DOTMATCH | glob.FORCEUNIX | glob.GLOBSTAR


@frozen
class ExcludePattern:
    """
    One parsed line of an ignore file

    `pattern` is the text as reported to users (no "!" prefix, no trailing
    "/"). `base` is the directory the rule applies to, relative to the work
    tree root, with a trailing slash ("" for the root and global files).
    """

    pattern: str
    source: str
    line: int
    base: str = ""
    negated: bool = False
    directory_only: bool = False

    @property
    def basename_only(self) -> bool:
        """Patterns without a slash match the last path component at any depth"""
        return "/" not in self.pattern

    def matches(self, path: str, basename: str, is_dir: bool) -> bool:
        if self.directory_only and not is_dir:
            return False

        if self.basename_only:
            return fnmatch.fnmatch(basename, self.pattern, flags=FNMATCH_FLAGS)

        if not path.startswith(self.base):
            return False
        relative = path[len(self.base) :]
        return glob.globmatch(relative, self.pattern.lstrip("/"), flags=GLOB_FLAGS)

    def to_match(self) -> Match:
        return Match(
            source=self.source,
            line=self.line,
            pattern=self.pattern,
            negated=self.negated,
            directory_only=self.directory_only,
        )


@frozen
class ExcludeList:
    source: str
    patterns: Tuple[ExcludePattern, ...] = ()

    def last_matching(
        self, path: str, basename: str, is_dir: bool
    ) -> Optional[ExcludePattern]:
        for pattern in reversed(self.patterns):
            if pattern.matches(path, basename, is_dir):
                return pattern
        return None


@define
class Parser:
    r"""
    A parser for gitignore syntax.

    For each line of the input:
    1. Skip blank lines and comments (a line starting with "#"; "\#" escapes it)
    2. Drop unescaped trailing spaces
    3. Turn the remaining text into an ExcludePattern: a leading "!" negates
       the rule ("\!" escapes it), a trailing "/" restricts it to directories

    Line numbers are kept, 1-based, since they are part of what we report.

    :param source: Name of the ignore file as reported to users
    :param base:   Directory the rules apply to, relative to the work tree root
    """

    source: str
    base: str = ""

    @staticmethod
    def remove_comments(line: str) -> Iterator[str]:
        if line and not line.startswith("#"):
            yield line

    @staticmethod
    def trim_trailing_spaces(line: str) -> Iterator[str]:
        trimmed = TRAILING_SPACES_RE.sub("", line)
        if trimmed:
            yield trimmed

    def to_pattern(self, line: str, line_number: int) -> Iterator[ExcludePattern]:
        negated = line.startswith("!")
        if negated:
            line = line[1:]
        directory_only = line.endswith("/")
        if directory_only:
            line = line[:-1]
        if not line:
            logger.debug(f"Skipping empty pattern at {self.source}:{line_number}")
            return
        yield ExcludePattern(
            pattern=line,
            source=self.source,
            line=line_number,
            base=self.base,
            negated=negated,
            directory_only=directory_only,
        )

    def parse(self, lines: Iterable[str]) -> ExcludeList:
        """Parse the lines of one ignore file, without their line terminators"""
        return ExcludeList(
            source=self.source,
            patterns=tuple(
                pattern
                for line_number, line in enumerate(lines, start=1)
                for no_comments in self.remove_comments(line)
                for trimmed in self.trim_trailing_spaces(no_comments)
                for pattern in self.to_pattern(trimmed, line_number)
            ),
        )

    def parse_file(self, path: Path) -> ExcludeList:
        """Parse `path`; a missing or unreadable file has no rules"""
        try:
            content = os.fsdecode(path.read_bytes())
        except OSError as e:
            logger.debug(f"No ignore rules read from {path}: {e}")
            return ExcludeList(source=self.source)

        if content.startswith(UTF8_BOM):
            content = content[len(UTF8_BOM) :]
        exclude_list = self.parse(content.split("\n"))
        logger.verbose(
            f"Loaded {len(exclude_list.patterns)} patterns from {self.source}"
        )
        return exclude_list


class IgnoreRuleEngine:
    """
    Answers "which rule, if any, ignores this path?" for one work tree

    Paths are relative to `root`, "/"-separated, without a leading "./".
    Per-directory ignore files are read lazily and cached for the lifetime
    of the engine.
    """

    def __init__(self, root: Path, global_lists: Sequence[ExcludeList] = ()) -> None:
        self.root = root
        # highest precedence first
        self.global_lists: List[ExcludeList] = list(global_lists)
        self._directory_lists: Dict[str, ExcludeList] = {}

    @classmethod
    def from_repository(
        cls, root: Path, git_dir: Path, excludes_file: Optional[Path]
    ) -> "IgnoreRuleEngine":
        info_exclude = git_dir / INFO_EXCLUDE_PATH
        global_lists = [
            Parser(_display_name(info_exclude, root)).parse_file(info_exclude)
        ]
        if excludes_file is not None:
            global_lists.append(
                Parser(_display_name(excludes_file, root)).parse_file(excludes_file)
            )
        return cls(root, global_lists)

    def directory_list(self, directory: str) -> ExcludeList:
        """Rules of the .gitignore in `directory` ("" or "a/b/")"""
        if directory not in self._directory_lists:
            source = f"{directory}{IGNORE_FILE_NAME}"
            self._directory_lists[directory] = Parser(source, directory).parse_file(
                self.root / source
            )
        return self._directory_lists[directory]

    def is_dir(self, path: str) -> bool:
        try:
            return stat.S_ISDIR(os.lstat(self.root / path).st_mode)
        except OSError:
            return False

    def _last_matching_from_lists(
        self, path: str, is_dir: bool, directories: Sequence[str]
    ) -> Optional[ExcludePattern]:
        basename = path.rsplit("/", 1)[-1]
        for directory in reversed(directories):
            pattern = self.directory_list(directory).last_matching(
                path, basename, is_dir
            )
            if pattern is not None:
                return pattern
        for exclude_list in self.global_lists:
            pattern = exclude_list.last_matching(path, basename, is_dir)
            if pattern is not None:
                return pattern
        return None

    def last_matching(
        self, path: str, file_type: FileType = FileType.UNKNOWN
    ) -> Optional[Match]:
        if path.endswith("/"):
            path = path.rstrip("/")
            file_type = FileType.DIRECTORY
        if not path:
            return None

        parts = path.split("/")
        # directories[i] holds the .gitignore that applies to parts[i]
        directories = [""] + ["/".join(parts[:i]) + "/" for i in range(1, len(parts))]

        for depth in range(1, len(parts)):
            leading = "/".join(parts[:depth])
            pattern = self._last_matching_from_lists(
                leading, True, directories[:depth]
            )
            if pattern is not None and not pattern.negated:
                logger.debug(f"{path}: leading directory {leading} is ignored")
                return pattern.to_match()

        if file_type is FileType.UNKNOWN:
            is_dir = self.is_dir(path)
        else:
            is_dir = file_type is FileType.DIRECTORY
        pattern = self._last_matching_from_lists(path, is_dir, directories)
        return pattern.to_match() if pattern is not None else None


def _display_name(path: Path, root: Path) -> str:
    """Files inside the work tree are reported relative to its root"""
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return str(path)
