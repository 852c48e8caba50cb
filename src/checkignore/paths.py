import os
import posixpath
import stat
from pathlib import Path
from typing import Iterable
from typing import Protocol
from typing import Tuple

from attrs import frozen

from checkignore.error import PathBeyondSymlinkError
from checkignore.error import PathInSubmoduleError
from checkignore.error import PathOutsideRepositoryError
from checkignore.verbose_logging import getLogger

logger = getLogger(__name__)


def join_prefix(prefix: str, path: str, root: Path) -> str:
    """
    Turn a path given relative to the current directory into a path relative
    to the work tree root

    `prefix` is the current directory relative to the root ("" or "a/b/").
    "." and ".." components are resolved lexically. A trailing slash is
    kept since it marks the path as a directory.

    Raises PathOutsideRepositoryError if the result is not inside the work tree.
    """
    if posixpath.isabs(path):
        root_str = root.as_posix()
        normalized = posixpath.normpath(path)
        if normalized == root_str:
            joined = ""
        elif normalized.startswith(root_str.rstrip("/") + "/"):
            joined = normalized[len(root_str.rstrip("/")) + 1 :]
        else:
            raise PathOutsideRepositoryError(path)
    else:
        joined = posixpath.normpath(prefix + path)
        if joined == ".":
            joined = ""
        elif joined == ".." or joined.startswith("../"):
            raise PathOutsideRepositoryError(path)

    if joined and path.endswith("/"):
        joined += "/"
    return joined


class PathValidator(Protocol):
    def validate(self, path: str) -> str:
        """Return the path to check, or raise if it crosses a boundary"""
        ...


class BoundaryValidator:
    """
    Rejects paths that reach into a submodule or through a symbolic link
    """

    def __init__(self, root: Path, gitlinks: Iterable[str] = ()) -> None:
        self.root = root
        self.gitlinks: Tuple[str, ...] = tuple(gitlinks)

    def check_path_for_gitlink(self, path: str) -> str:
        for gitlink in self.gitlinks:
            if not path.startswith(gitlink + "/"):
                continue
            # "sub/" names the submodule itself
            if len(path) == len(gitlink) + 1:
                return gitlink
            raise PathInSubmoduleError(path, gitlink)
        return path

    def die_if_path_beyond_symlink(self, path: str) -> None:
        current = self.root
        for part in path.rstrip("/").split("/")[:-1]:
            current = current / part
            try:
                mode = os.lstat(current).st_mode
            except OSError:
                return
            if stat.S_ISLNK(mode):
                raise PathBeyondSymlinkError(path)
            if not stat.S_ISDIR(mode):
                return

    def validate(self, path: str) -> str:
        path = self.check_path_for_gitlink(path)
        self.die_if_path_beyond_symlink(path)
        return path


@frozen
class PathNormalizer:
    root: Path
    prefix: str
    validator: PathValidator

    def normalize(self, path: str) -> str:
        full_path = join_prefix(self.prefix, path, self.root)
        logger.debug(f"{path} -> {full_path}")
        return self.validator.validate(full_path)
