import logging
import os
import sys
from typing import Optional

from attr import define

from checkignore.env import Env


@define
class Terminal:
    """Fundamental settings on how to log output.

    Records go to stdout and are written by checkignore.output; everything
    configured here goes to stderr or a log file.
    """

    force_color_off: bool = False
    log_level: int = logging.WARNING

    def __attrs_post_init__(self) -> None:
        # provision with default config so that tests can immediately capture logging output
        self.configure()

    def init_for_cli(self, env: Env) -> None:
        """Call this when check-ignore is invoked as a CLI as opposed to a library."""
        self.configure(debug=env.debug, log_file=env.log_file)

    def configure(self, *, debug: bool = False, log_file: Optional[str] = None) -> None:
        """Set the relevant logging levels"""
        logger = logging.getLogger("checkignore")
        logger.handlers = []  # Reset to no handlers
        # The CLI owns its handlers; don't let the root logger print twice
        logger.propagate = False

        stderr_level = logging.DEBUG if debug else logging.WARNING

        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setFormatter(logging.Formatter("%(message)s"))
        stderr_handler.setLevel(stderr_level)
        logger.addHandler(stderr_handler)

        if log_file:
            file_handler = logging.FileHandler(log_file, "w")
            file_handler.setFormatter(
                logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
            )
            file_handler.setLevel(logging.DEBUG)
            logger.addHandler(file_handler)

        # Needs to be DEBUG otherwise will filter before sending to handlers
        logger.setLevel(logging.DEBUG)

        self.log_level = stderr_level

        if os.environ.get("NO_COLOR") is not None:  # https://no-color.org/
            self.force_color_off = True

    @property
    def is_color(self) -> bool:
        return sys.stderr.isatty() and not self.force_color_off
