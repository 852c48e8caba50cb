from pathlib import Path
from typing import FrozenSet
from typing import List
from typing import Sequence
from typing import Set

from attrs import frozen
from wcmatch import fnmatch

from checkignore.constants import GITLINK_MODE
from checkignore.error import CheckIgnoreError
from checkignore.error import CorruptIndexError
from checkignore.git import ls_files_stage
from checkignore.git import zsplit
from checkignore.paths import join_prefix
from checkignore.util import is_glob_pathspec
from checkignore.verbose_logging import getLogger

logger = getLogger(__name__)

# Pathspec wildcards match across directory separators, unlike ignore rules
PATHSPEC_FLAGS = fnmatch.CASE | fnmatch.DOTMATCH | fnmatch.FORCEUNIX


@frozen
class IndexEntry:
    mode: str
    stage: int
    path: str

    @property
    def is_gitlink(self) -> bool:
        return self.mode == GITLINK_MODE


def parse_ls_files_stage(output: str) -> List[IndexEntry]:
    """
    Parse `git ls-files --stage -z` output: "<mode> <object> <stage>\\t<path>\\0"
    """
    entries = []
    for record in zsplit(output):
        try:
            info, path = record.split("\t", 1)
            mode, _object_name, stage = info.split(" ")
            entries.append(IndexEntry(mode=mode, stage=int(stage), path=path))
        except ValueError:
            raise CorruptIndexError(f"unexpected index record {record!r}")
    return entries


class GitIndex:
    """
    The paths tracked in the index of one work tree

    `prefix` is the directory the command was started from, relative to the
    work tree root; pathspecs are interpreted relative to it.
    """

    def __init__(
        self, entries: Sequence[IndexEntry], root: Path, prefix: str = ""
    ) -> None:
        self.entries = list(entries)
        self.root = root
        self.prefix = prefix
        self._paths: FrozenSet[str] = frozenset(e.path for e in self.entries)
        leading: Set[str] = set()
        for path in self._paths:
            parts = path.split("/")
            for i in range(1, len(parts)):
                leading.add("/".join(parts[:i]))
        self._leading_directories: FrozenSet[str] = frozenset(leading)

    @classmethod
    def load(cls, root: Path, prefix: str = "") -> "GitIndex":
        try:
            output = ls_files_stage(cwd=str(root))
        except CheckIgnoreError as e:
            raise CorruptIndexError(str(e))
        entries = parse_ls_files_stage(output)
        logger.verbose(f"Read {len(entries)} index entries")
        return cls(entries, root, prefix)

    @property
    def gitlinks(self) -> List[str]:
        return [e.path for e in self.entries if e.is_gitlink]

    def match_pathspec(self, pathspec: str) -> bool:
        """
        True if `pathspec` names a tracked file, a directory holding tracked
        files, or is a glob matching a tracked file
        """
        try:
            full = join_prefix(self.prefix, pathspec, self.root).rstrip("/")
        except CheckIgnoreError:
            # reported when the path itself is normalized
            return False

        if not full:
            return bool(self._paths)
        if full in self._paths or full in self._leading_directories:
            return True
        if is_glob_pathspec(full):
            return any(
                fnmatch.fnmatch(path, full, flags=PATHSPEC_FLAGS)
                for path in self._paths
            )
        return False

    def match_pathspecs(self, pathspecs: Sequence[str]) -> List[bool]:
        seen = [self.match_pathspec(pathspec) for pathspec in pathspecs]
        for pathspec, tracked in zip(pathspecs, seen):
            if tracked:
                logger.debug(f"{pathspec} is tracked, not checking ignore rules")
        return seen
