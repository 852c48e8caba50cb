import os
import sys
from functools import wraps
from typing import Any
from typing import Callable
from typing import NoReturn

import click

from checkignore.error import CheckIgnoreError
from checkignore.error import FATAL_EXIT_CODE
from checkignore.error import OK_EXIT_CODE
from checkignore.error import OutputClosedError
from checkignore.verbose_logging import getLogger


def silence_stdout() -> None:
    """
    Point the stdout file descriptor at /dev/null

    The interpreter flushes sys.stdout on exit; after the reader closed the
    pipe that flush would fail again and print "Exception ignored ...".
    Streams without a file descriptor (click's CliRunner) are left alone.
    """
    try:
        fd = sys.stdout.fileno()
    except (AttributeError, OSError, ValueError):
        return
    devnull = os.open(os.devnull, os.O_WRONLY)
    try:
        os.dup2(devnull, fd)
    finally:
        os.close(devnull)


def handle_command_errors(func: Callable[..., int]) -> Callable[..., NoReturn]:
    """
    Adds the following functionality to our commands:
    - The wrapped function returns the exit code instead of exiting
    - Anticipated errors are reported as `fatal: <message>` on stderr
    - A reader closing stdout ends the run without any message
    - Anything else is logged with its traceback and exits with FATAL_EXIT_CODE

    This needed to be done in a decorator so testing
    using click.CliRunner would include this functionality.
    """

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> NoReturn:
        logger = getLogger("checkignore")
        logger.propagate = False

        try:
            exit_code = func(*args, **kwargs)
        except OutputClosedError as e:
            silence_stdout()
            exit_code = e.code
        # Catch custom exception, output the right message and exit
        except CheckIgnoreError as e:
            click.echo(e.format_for_terminal(), err=True)
            exit_code = e.code
        except Exception as e:  # noqa: W0718
            logger.exception(e)
            exit_code = FATAL_EXIT_CODE
        except SystemExit as e:
            if e.code is None:
                exit_code = OK_EXIT_CODE
            elif isinstance(e.code, str):
                exit_code = FATAL_EXIT_CODE
            else:
                exit_code = e.code

        # not inside the except blocks to avoid chaining the SystemExit
        sys.exit(exit_code)

    return wrapper
