import os
from pathlib import Path
from typing import Iterable
from typing import Optional
from typing import overload
from typing import Union

from attr import Factory
from attr import field
from attr import frozen

from checkignore.constants import DEFAULT_GIT_COMMAND_TIMEOUT


@overload
def EnvFactory(envvars: Union[str, Iterable[str]], default: str) -> str:
    ...


@overload
def EnvFactory(envvars: Union[str, Iterable[str]]) -> Optional[str]:
    ...


def EnvFactory(
    envvars: Union[str, Iterable[str]], default: Optional[str] = None
) -> Optional[str]:
    if isinstance(envvars, str):
        envvars = [envvars]

    def env_getter() -> Optional[str]:
        for envvar in envvars:
            if os.getenv(envvar):
                return os.getenv(envvar)
        return default

    return Factory(env_getter)


@frozen
class Env:
    """Returns the value of an environment variable at the time of command invocation.

    This is better than just keeping these values as constants on the module level,
    because tests and other non-CLI based invocations might change env variables
    between multiple invocations.
    """

    log_file: Optional[str] = field(default=EnvFactory("CHECK_IGNORE_LOG_FILE"))

    git_command_timeout: int = field()
    debug: bool = field()
    config_home: Path = field()

    @git_command_timeout.default
    def git_command_timeout_default(self) -> int:
        value = os.getenv(
            "CHECK_IGNORE_GIT_COMMAND_TIMEOUT", str(DEFAULT_GIT_COMMAND_TIMEOUT)
        )
        return int(value)

    @debug.default
    def debug_default(self) -> bool:
        return os.getenv("CHECK_IGNORE_DEBUG", "") not in ("", "0", "false")

    @config_home.default
    def config_home_default(self) -> Path:
        config_home = os.getenv("XDG_CONFIG_HOME")
        if not config_home:
            return Path.home() / ".config"
        return Path(config_home)

    @property
    def default_excludes_file(self) -> Path:
        """Where git looks for global ignore rules when core.excludesFile is unset"""
        return self.config_home / "git" / "ignore"
