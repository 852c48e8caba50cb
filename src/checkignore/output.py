import os
from contextlib import contextmanager
from typing import BinaryIO
from typing import Iterator
from typing import Mapping
from typing import Type

from checkignore.config import RunConfig
from checkignore.error import CheckIgnoreError
from checkignore.error import OutputClosedError
from checkignore.formatter.base import BaseFormatter
from checkignore.formatter.null import NullFormatter
from checkignore.formatter.text import TextFormatter
from checkignore.types import Verdict
from checkignore.verbose_logging import getLogger

logger = getLogger(__name__)

# keyed on RunConfig.null_terminated
FORMATTERS: Mapping[bool, Type[BaseFormatter]] = {
    False: TextFormatter,
    True: NullFormatter,
}


class OutputHandler:
    """
    Handle all record output in a central location.

    Records are written as bytes to `stream` (stdout). Nothing reaches the
    stream in quiet mode, and paths without a matching rule only produce a
    record with --non-matching.
    """

    def __init__(self, config: RunConfig, stream: BinaryIO) -> None:
        self.config = config
        self.stream = stream
        self.formatter = FORMATTERS[config.null_terminated](verbose=config.verbose)

    def should_emit(self, verdict: Verdict) -> bool:
        if self.config.quiet:
            return False
        return verdict is not None or self.config.show_non_matching

    def handle_verdict(self, path: str, verdict: Verdict) -> None:
        """`path` is the argument as given by the user, not the normalized path"""
        if not self.should_emit(verdict):
            return
        record = self.formatter.format(os.fsencode(path), verdict)
        with handle_write_errors():
            self.stream.write(record)

    def flush(self) -> None:
        with handle_write_errors():
            self.stream.flush()


@contextmanager
def handle_write_errors() -> Iterator[None]:
    """A closed pipe ends the run quietly, any other write error is fatal"""
    try:
        yield
    except BrokenPipeError:
        logger.debug("stdout was closed by its reader")
        raise OutputClosedError() from None
    except OSError as e:
        raise CheckIgnoreError(f"write failure on 'check-ignore to stdout': {e}")
