import logging
from typing import Any
from typing import cast
from typing import Optional

# Between INFO (20) and DEBUG (10): per-file progress such as how many
# patterns were loaded from an ignore file or how many paths matched.
VERBOSE = 15


class VerboseLogger(logging.Logger):
    """A logging.Logger with a verbose() method for the VERBOSE level"""

    def verbose(self, msg: str, *args: Any, **kwargs: Any) -> None:
        if self.isEnabledFor(VERBOSE):
            self._log(VERBOSE, msg, args, **kwargs)


def install_verbose_logging() -> None:
    """
    Register the VERBOSE level and make logging.getLogger return VerboseLoggers

    Loggers created before this runs stay plain logging.Logger instances,
    which is why every module imports getLogger from here.
    """
    logging.addLevelName(VERBOSE, "VERBOSE")
    logging.setLoggerClass(VerboseLogger)


install_verbose_logging()


def getLogger(name: Optional[str]) -> VerboseLogger:
    """logging.getLogger, typed so that mypy knows about verbose()"""
    return cast(VerboseLogger, logging.getLogger(name))
