from pathlib import Path

import pytest

from checkignore.error import CorruptIndexError
from checkignore.error import GitError
from checkignore.index import GitIndex
from checkignore.index import IndexEntry
from checkignore.index import parse_ls_files_stage

ROOT = Path("/work/repo")

LS_FILES_OUTPUT = (
    "100644 e69de29bb2d1d6434b8b29ae775ad8c2e48c5391 0\tREADME.md\0"
    "100644 e69de29bb2d1d6434b8b29ae775ad8c2e48c5391 0\tsrc/main.c\0"
    "100644 e69de29bb2d1d6434b8b29ae775ad8c2e48c5391 0\tsrc/with\ttab.c\0"
    "160000 8ab686eafeb1f44702738c8b0f24f2567c36da6d 0\tvendor/lib\0"
)


@pytest.mark.quick
def test_parse_ls_files_stage():
    entries = parse_ls_files_stage(LS_FILES_OUTPUT)
    assert entries[0] == IndexEntry(mode="100644", stage=0, path="README.md")
    assert entries[2].path == "src/with\ttab.c"
    assert [e.path for e in entries if e.is_gitlink] == ["vendor/lib"]


@pytest.mark.quick
def test_parse_ls_files_stage_corrupt():
    with pytest.raises(CorruptIndexError, match="index file corrupt"):
        parse_ls_files_stage("garbage\0")


@pytest.mark.quick
@pytest.mark.parametrize(
    "prefix, pathspec, expected",
    [
        ("", "README.md", True),
        ("", "readme.md", False),
        ("", "src", True),
        ("", "src/", True),
        ("", "sr", False),
        ("", "src/main.c", True),
        ("", "src/other.c", False),
        ("", "*.c", True),
        ("", "*.h", False),
        ("", ".", True),
        ("src/", "main.c", True),
        ("src/", "../README.md", True),
        ("src/", "README.md", False),
        ("", "../outside", False),
    ],
)
def test_match_pathspec(prefix, pathspec, expected):
    index = GitIndex(parse_ls_files_stage(LS_FILES_OUTPUT), ROOT, prefix)
    assert index.match_pathspec(pathspec) is expected


@pytest.mark.quick
def test_match_pathspecs_keeps_order():
    index = GitIndex(parse_ls_files_stage(LS_FILES_OUTPUT), ROOT)
    assert index.match_pathspecs(["b.log", "README.md", "a.log"]) == [
        False,
        True,
        False,
    ]


@pytest.mark.quick
def test_empty_index_matches_nothing():
    assert GitIndex([], ROOT).match_pathspec(".") is False


@pytest.mark.quick
def test_load(mocker):
    ls_files = mocker.patch(
        "checkignore.index.ls_files_stage", return_value=LS_FILES_OUTPUT
    )
    index = GitIndex.load(ROOT, "src/")
    ls_files.assert_called_once_with(cwd=str(ROOT))
    assert index.gitlinks == ["vendor/lib"]
    assert index.prefix == "src/"


@pytest.mark.quick
def test_load_failure_is_corrupt_index(mocker):
    mocker.patch(
        "checkignore.index.ls_files_stage", side_effect=GitError("fatal: bad index")
    )
    with pytest.raises(CorruptIndexError) as excinfo:
        GitIndex.load(ROOT)
    assert str(excinfo.value) == "index file corrupt: fatal: bad index"
