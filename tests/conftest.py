##############################################################################
# Prelude
##############################################################################
# Helper functions and fixtures useful for writing tests.
##############################################################################
# Imports
##############################################################################
import subprocess
from pathlib import Path
from typing import Callable
from typing import Dict
from typing import Iterable
from typing import Optional

import pytest
from click.testing import CliRunner
from click.testing import Result

from checkignore.cli import cli

##############################################################################
# Pytest hacks
##############################################################################


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "quick: fast unit tests")
    config.addinivalue_line(
        "markers", "kinda_slow: tests that create real git repositories"
    )


##############################################################################
# Helper functions
##############################################################################


def git(repo: Path, *args: str) -> str:
    return subprocess.check_output(
        ["git", *args], cwd=repo, encoding="utf-8", stderr=subprocess.STDOUT
    )


def write_files(root: Path, files: Dict[str, str]) -> None:
    for name, contents in files.items():
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(contents)


##############################################################################
# Fixtures
##############################################################################


@pytest.fixture
def isolated_git_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """
    Keep the user's and the system's git configuration out of the tests

    Returns the XDG config directory, where tests may put git/ignore.
    """
    home = tmp_path / "home"
    config_home = home / ".config"
    config_home.mkdir(parents=True)
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))
    monkeypatch.delenv("GIT_DIR", raising=False)
    monkeypatch.delenv("GIT_WORK_TREE", raising=False)
    monkeypatch.delenv("GIT_INDEX_FILE", raising=False)
    monkeypatch.delenv("CHECK_IGNORE_DEBUG", raising=False)
    monkeypatch.delenv("CHECK_IGNORE_LOG_FILE", raising=False)
    return config_home


@pytest.fixture
def make_git_repo(
    tmp_path: Path, isolated_git_env: Path, monkeypatch: pytest.MonkeyPatch
) -> Callable[..., Path]:
    """
    Create a git repository and chdir into it

    `files` are written to the work tree, `tracked` are added to the index.
    """

    def make(
        files: Optional[Dict[str, str]] = None, tracked: Iterable[str] = ()
    ) -> Path:
        repo = tmp_path / "repo"
        repo.mkdir()
        git(repo, "init", "-q")
        write_files(repo, files or {})
        tracked = list(tracked)
        if tracked:
            git(repo, "add", "-f", "--", *tracked)
        monkeypatch.chdir(repo)
        return repo

    return make


@pytest.fixture
def run_check_ignore() -> Callable[..., Result]:
    """
    Invoke the check-ignore command in-process

    Note that depending on the click version, `result.output` may hold
    stderr as well; only compare it exactly when nothing goes to stderr.
    """

    def run(*args: str, input: Optional[bytes] = None) -> Result:
        return CliRunner().invoke(cli, list(args), input=input)

    return run
