import os
import subprocess
from pathlib import Path
from textwrap import dedent
from typing import List
from typing import Optional
from typing import Sequence

from checkignore.error import GitError
from checkignore.verbose_logging import getLogger


logger = getLogger(__name__)


def zsplit(s: str) -> List[str]:
    """Split a string on null characters."""
    s = s.strip("\0")
    if s:
        return s.split("\0")
    else:
        return []


def git_check_output(command: Sequence[str], cwd: Optional[str] = None) -> str:
    """
    Helper function to run a GIT command that prints out helpful debugging information

    Output is decoded like os.fsdecode does, so file names that are not valid
    UTF-8 round-trip through os.fsencode.
    """
    # Avoiding circular imports
    from checkignore.state import get_state

    env = get_state().env

    cwd = cwd if cwd is not None else os.getcwd()
    logger.debug(f"Running {' '.join(command)} in {cwd}")
    try:
        # nosemgrep: python.lang.security.audit.dangerous-subprocess-use.dangerous-subprocess-use
        return subprocess.check_output(
            command,
            stderr=subprocess.PIPE,
            encoding="utf-8",
            errors="surrogateescape",
            timeout=env.git_command_timeout,
            cwd=cwd,
        )
    except subprocess.CalledProcessError as e:
        command_str = " ".join(command)
        raise GitError(
            dedent(
                f"""
                Command failed with exit code: {e.returncode}
                -----
                Command failed with output:
                {e.stderr}

                Failed to run '{command_str}'. Possible reasons:

                - the git binary is not available
                - the current working directory is not a git repository
                - the current working directory is not marked as safe
                    (fix with `git config --global --add safe.directory $(pwd)`)

                Try running the command yourself to debug the issue.
                """
            ).strip()
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        raise GitError(f"Failed to run '{' '.join(command)}': {e}")


def get_git_root_path(cwd: Optional[str] = None) -> Path:
    git_output = git_check_output(["git", "rev-parse", "--show-toplevel"], cwd=cwd)
    root_path = Path(git_output.rstrip("\n"))
    logger.debug(f"Git root path: {root_path}")
    return root_path


def get_git_dir(cwd: Optional[str] = None) -> Path:
    git_output = git_check_output(["git", "rev-parse", "--absolute-git-dir"], cwd=cwd)
    return Path(git_output.rstrip("\n"))


def get_prefix(cwd: Optional[str] = None) -> str:
    """
    Returns the current directory relative to the work tree root, with a
    trailing slash ("" at the root)
    """
    git_output = git_check_output(["git", "rev-parse", "--show-prefix"], cwd=cwd)
    prefix = git_output.rstrip("\n")
    logger.debug(f"Invocation prefix: {prefix!r}")
    return prefix


def get_excludes_file(default: Path, cwd: Optional[str] = None) -> Path:
    """
    Returns the global excludes file (core.excludesFile), or `default`
    when it isn't configured

    `git config` exits with 1 for an unset key, which we don't treat as an error.
    """
    try:
        value = git_check_output(
            ["git", "config", "--path", "core.excludesFile"], cwd=cwd
        ).rstrip("\n")
    except GitError as e:
        logger.debug(f"core.excludesFile is not set: {e}")
        return default
    return Path(value) if value else default


def ls_files_stage(cwd: Optional[str] = None) -> str:
    """Raw `git ls-files --stage -z` output for the whole index"""
    return git_check_output(
        ["git", "ls-files", "--stage", "-z", "--full-name"], cwd=cwd
    )
