from enum import Enum

IGNORE_FILE_NAME = ".gitignore"
INFO_EXCLUDE_PATH = "info/exclude"

DEFAULT_GIT_COMMAND_TIMEOUT = 300  # seconds

# Index entry mode of a submodule (a "gitlink")
GITLINK_MODE = "160000"

# Characters that turn a pathspec into a glob
PATHSPEC_GLOB_CHARS = frozenset("*?[")


class Colors(Enum):
    red = "red"  # for errors
