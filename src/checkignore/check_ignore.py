"""
The check-ignore driver

For every path: normalize it, skip it if the index tracks it, otherwise ask
the ignore rule engine which rule matches, and hand the verdict to the
output handler. Paths either come as one batch from the command line or one
by one from stdin.

The index, the rule engine and the normalizer are passed in, so this module
has no idea it is talking to git. See `from_repository` for the real wiring.
"""
import os
from typing import BinaryIO
from typing import Iterator
from typing import List
from typing import Optional
from typing import Protocol
from typing import Sequence

from attrs import define
from attrs import field

from checkignore.config import RunConfig
from checkignore.error import BadlyQuotedLineError
from checkignore.git import get_excludes_file
from checkignore.git import get_git_dir
from checkignore.git import get_git_root_path
from checkignore.git import get_prefix
from checkignore.ignores import IgnoreRuleEngine
from checkignore.index import GitIndex
from checkignore.output import OutputHandler
from checkignore.paths import BoundaryValidator
from checkignore.paths import PathNormalizer
from checkignore.quote import unquote_c_style
from checkignore.state import get_state
from checkignore.types import FileType
from checkignore.types import Match
from checkignore.types import RunResult
from checkignore.types import Verdict
from checkignore.verbose_logging import getLogger

logger = getLogger(__name__)

READ_CHUNK_SIZE = 64 * 1024


class IndexMembership(Protocol):
    def match_pathspecs(self, pathspecs: Sequence[str]) -> List[bool]:
        """One flag per pathspec: does it match a tracked path?"""
        ...


class IgnoreOracle(Protocol):
    def last_matching(
        self, path: str, file_type: FileType = FileType.UNKNOWN
    ) -> Optional[Match]:
        ...


class Normalizer(Protocol):
    def normalize(self, path: str) -> str:
        ...


class NoIndex:
    """Membership filter for --no-index: nothing counts as tracked"""

    def match_pathspecs(self, pathspecs: Sequence[str]) -> List[bool]:
        return [False] * len(pathspecs)


def decide(
    full_path: str,
    tracked: bool,
    oracle: IgnoreOracle,
    file_type: FileType = FileType.UNKNOWN,
) -> Verdict:
    # tracked paths are never reported as ignored, whatever the rules say
    if tracked:
        return None
    return oracle.last_matching(full_path, file_type)


def read_records(stream: BinaryIO, terminator: bytes) -> Iterator[bytes]:
    """
    Yield records from `stream` as soon as their terminator has been read

    The terminator is not part of the record. A last record without a
    terminator is still yielded.
    """
    # read1 returns what is available instead of waiting for a full chunk
    read = stream.read1 if hasattr(stream, "read1") else stream.read
    pending = b""
    while True:
        chunk = read(READ_CHUNK_SIZE)
        if not chunk:
            break
        pending += chunk
        *records, pending = pending.split(terminator)
        yield from records
    if pending:
        yield pending


@define
class CheckIgnore:
    config: RunConfig
    index: IndexMembership
    oracle: IgnoreOracle
    normalizer: Normalizer
    output: OutputHandler
    result: RunResult = field(factory=RunResult)

    def check_ignore(self, pathspecs: Sequence[str]) -> List[Verdict]:
        """Decide and output one batch of paths, in order"""
        if not pathspecs:
            if not self.config.quiet:
                logger.warning("no pathspec given.")
            return []

        seen = self.index.match_pathspecs(pathspecs)
        verdicts: List[Verdict] = []
        for path, tracked in zip(pathspecs, seen):
            full_path = self.normalizer.normalize(path)
            verdict = decide(full_path, tracked, self.oracle)
            self.output.handle_verdict(path, verdict)
            verdicts.append(verdict)

        self.result = self.result.add(verdicts)
        return verdicts

    def record_to_path(self, record: bytes) -> str:
        if not self.config.null_terminated and record.startswith(b'"'):
            try:
                record = unquote_c_style(record)
            except ValueError as e:
                logger.debug(f"Cannot unquote {record!r}: {e}")
                raise BadlyQuotedLineError(os.fsdecode(record))
        return os.fsdecode(record)

    def check_ignore_stdin_paths(self, stream: BinaryIO) -> None:
        for record in read_records(stream, self.config.terminator):
            self.check_ignore([self.record_to_path(record)])
            self.output.flush()

    def run(self, paths: Sequence[str], stdin: BinaryIO) -> RunResult:
        if self.config.stdin:
            self.check_ignore_stdin_paths(stdin)
        else:
            self.check_ignore(paths)
            self.output.flush()
        logger.verbose(f"{self.result.ignored_count} path(s) ignored")
        return self.result


def from_repository(
    config: RunConfig, stdout: BinaryIO, cwd: Optional[str] = None
) -> CheckIgnore:
    """
    Wire a CheckIgnore to the git work tree containing `cwd`

    Reads the index up front, so a broken repository is reported before
    any path is looked at.
    """
    env = get_state().env
    root = get_git_root_path(cwd)
    prefix = get_prefix(cwd)
    git_dir = get_git_dir(cwd)

    index = GitIndex.load(root, prefix)
    excludes_file = get_excludes_file(env.default_excludes_file, cwd)
    oracle = IgnoreRuleEngine.from_repository(root, git_dir, excludes_file)
    normalizer = PathNormalizer(root, prefix, BoundaryValidator(root, index.gitlinks))

    return CheckIgnore(
        config=config,
        index=NoIndex() if config.no_index else index,
        oracle=oracle,
        normalizer=normalizer,
        output=OutputHandler(config, stdout),
    )


def run_check_ignore(
    config: RunConfig,
    paths: Sequence[str],
    stdin: BinaryIO,
    stdout: BinaryIO,
) -> int:
    """Run check-ignore in the current directory and return the exit code"""
    return from_repository(config, stdout).run(paths, stdin).exit_code
