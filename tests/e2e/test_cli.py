import pytest

from checkignore import __VERSION__
from checkignore.error import FATAL_EXIT_CODE
from checkignore.error import NO_MATCH_EXIT_CODE
from checkignore.error import OK_EXIT_CODE

GITIGNORE = "# build products\n\n*.log\nbuild/\n!keep.log\n"


@pytest.fixture
def repo(make_git_repo):
    return make_git_repo(
        files={
            ".gitignore": GITIGNORE,
            "tracked.log": "",
            "build.log": "",
            "keep.log": "",
            "README.md": "",
            "build/out.o": "",
            "sub/.gitignore": "*.tmp\n",
            "sub/a.tmp": "",
        },
        tracked=[".gitignore", "tracked.log", "README.md", "sub/.gitignore"],
    )


@pytest.mark.kinda_slow
def test_tracked_path_is_not_reported(repo, run_check_ignore):
    result = run_check_ignore("tracked.log")
    assert result.exit_code == NO_MATCH_EXIT_CODE
    assert result.output == ""


@pytest.mark.kinda_slow
def test_ignored_path(repo, run_check_ignore):
    result = run_check_ignore("build.log")
    assert result.exit_code == OK_EXIT_CODE
    assert result.stdout_bytes == b"build.log\n"


@pytest.mark.kinda_slow
def test_verbose(repo, run_check_ignore):
    result = run_check_ignore("--verbose", "build.log", "keep.log", "build/out.o")
    assert result.exit_code == OK_EXIT_CODE
    assert result.stdout_bytes == (
        b'.gitignore:3:*.log\t"build.log"\n'
        b'.gitignore:5:!keep.log\t"keep.log"\n'
        b'.gitignore:4:build/\t"build/out.o"\n'
    )


@pytest.mark.kinda_slow
def test_verbose_non_matching(repo, run_check_ignore):
    result = run_check_ignore("-v", "-n", "README.md", "tracked.log", "sub/a.tmp")
    assert result.exit_code == OK_EXIT_CODE
    assert result.stdout_bytes == (
        b'::\t"README.md"\n'
        b'::\t"tracked.log"\n'
        b'sub/.gitignore:1:*.tmp\t"sub/a.tmp"\n'
    )


@pytest.mark.kinda_slow
def test_stdin_nul_terminated(make_git_repo, run_check_ignore):
    make_git_repo(files={".gitignore": "*.log\n", "a.txt": ""})
    result = run_check_ignore(
        "--stdin", "-z", "--verbose", "--non-matching", input=b"a.txt\0b.log\0"
    )
    assert result.exit_code == OK_EXIT_CODE
    assert result.stdout_bytes == b"\0\0\0a.txt\0.gitignore\x001\x00*.log\x00b.log\x00"


@pytest.mark.kinda_slow
def test_stdin_quoted_records(repo, run_check_ignore):
    result = run_check_ignore("--stdin", input=b'"with\\ttab.log"\nREADME.md\n')
    assert result.exit_code == OK_EXIT_CODE
    assert result.stdout_bytes == b'"with\\ttab.log"\n'


@pytest.mark.kinda_slow
def test_stdin_badly_quoted_line(repo, run_check_ignore):
    result = run_check_ignore("--stdin", input=b'build.log\n"bad\nkeep.log\n')
    assert result.exit_code == FATAL_EXIT_CODE
    assert "build.log\n" in result.output
    assert "fatal: line is badly quoted" in result.output
    assert "keep.log" not in result.output


@pytest.mark.kinda_slow
def test_quiet(repo, run_check_ignore):
    result = run_check_ignore("--quiet", "build.log")
    assert result.exit_code == OK_EXIT_CODE
    assert result.output == ""

    result = run_check_ignore("-q", "README.md")
    assert result.exit_code == NO_MATCH_EXIT_CODE
    assert result.output == ""


@pytest.mark.kinda_slow
@pytest.mark.parametrize(
    "args, message",
    [
        (
            ["--quiet", "a.log", "b.log"],
            "--quiet is only valid with a single pathname",
        ),
        (["--stdin", "a.log"], "cannot specify pathnames with --stdin"),
        (["-z", "a.log"], "-z only makes sense with --stdin"),
        ([], "no path specified"),
        (["-q", "-v", "a.log"], "cannot have both --quiet and --verbose"),
        (["-n", "a.log"], "--non-matching is only valid with --verbose"),
    ],
)
def test_usage_errors(repo, run_check_ignore, args, message):
    result = run_check_ignore(*args)
    assert result.exit_code == FATAL_EXIT_CODE
    assert result.output == f"fatal: {message}\n"


@pytest.mark.kinda_slow
def test_from_subdirectory(repo, run_check_ignore, monkeypatch):
    monkeypatch.chdir(repo / "sub")
    result = run_check_ignore("-v", "a.tmp", "../build.log")
    assert result.exit_code == OK_EXIT_CODE
    assert result.stdout_bytes == (
        b'sub/.gitignore:1:*.tmp\t"a.tmp"\n'
        b'.gitignore:3:*.log\t"../build.log"\n'
    )


@pytest.mark.kinda_slow
def test_outside_repository(repo, run_check_ignore):
    result = run_check_ignore("../elsewhere.log")
    assert result.exit_code == FATAL_EXIT_CODE
    assert "fatal: '../elsewhere.log' is outside repository" in result.output


@pytest.mark.kinda_slow
def test_no_index(repo, run_check_ignore):
    result = run_check_ignore("--no-index", "tracked.log")
    assert result.exit_code == OK_EXIT_CODE
    assert result.stdout_bytes == b"tracked.log\n"


@pytest.mark.kinda_slow
def test_info_exclude_and_global_excludes(repo, run_check_ignore, isolated_git_env):
    (repo / ".git" / "info").mkdir(exist_ok=True)
    (repo / ".git" / "info" / "exclude").write_text("*.bak\n")
    global_ignore = isolated_git_env / "git" / "ignore"
    global_ignore.parent.mkdir(parents=True)
    global_ignore.write_text("# editor files\n*.swp\n")

    result = run_check_ignore("-v", "a.bak", "a.swp")
    assert result.exit_code == OK_EXIT_CODE
    assert result.stdout_bytes == (
        b'.git/info/exclude:1:*.bak\t"a.bak"\n'
        + str(global_ignore).encode()
        + b':2:*.swp\t"a.swp"\n'
    )


@pytest.mark.kinda_slow
def test_not_a_git_repository(
    tmp_path, isolated_git_env, run_check_ignore, monkeypatch
):
    monkeypatch.chdir(tmp_path)
    result = run_check_ignore("a.log")
    assert result.exit_code == FATAL_EXIT_CODE
    assert "fatal:" in result.output


@pytest.mark.quick
def test_version(run_check_ignore):
    result = run_check_ignore("--version")
    assert result.exit_code == 0
    assert __VERSION__ in result.output
