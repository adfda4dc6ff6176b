"""Sequential batch driver.

Files are processed one at a time, in the order given. Each file moves
through ``INSPECTING -> PLANNING -> (SKIPPED | ENCODING) -> DONE`` or ends in
``FAILED``. A failure is recorded and logged for that file only; the next
file is processed normally. Cancellation is the exception: it stops the batch
and propagates to the caller.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Protocol

from chromecastise.core.cancellation import CancellationToken
from chromecastise.core.capabilities import ContainerFormat
from chromecastise.exceptions import CancelledError, ChromecastiseError
from chromecastise.executor.types import ProcessResult
from chromecastise.introspector.interface import MediaInspector
from chromecastise.logging import file_context
from chromecastise.policy import EncodePlan, plan_encode
from chromecastise.tools.ffmpeg_progress import EncodeProgress, format_progress

logger = logging.getLogger(__name__)


class FileState(Enum):
    """Processing state of one file."""

    PENDING = "pending"
    INSPECTING = "inspecting"
    PLANNING = "planning"
    SKIPPED = "skipped"
    ENCODING = "encoding"
    DONE = "done"
    FAILED = "failed"


class Encoder(Protocol):
    """Anything that can carry out an EncodePlan."""

    def encode(
        self,
        plan: EncodePlan,
        token: CancellationToken | None = None,
        progress_callback: Callable[[EncodeProgress], None] | None = None,
    ) -> ProcessResult: ...


@dataclass
class FileResult:
    """Outcome for one input file."""

    path: Path
    state: FileState = FileState.PENDING
    plan: EncodePlan | None = None
    process_result: ProcessResult | None = None
    error: Exception | None = None


@dataclass
class BatchResult:
    """Outcome of a batch run."""

    results: list[FileResult] = field(default_factory=list)
    cancelled: bool = False

    @property
    def errors(self) -> list[Exception]:
        """One error per failed file, in processing order."""
        return [r.error for r in self.results if r.error is not None]

    def count(self, state: FileState) -> int:
        return sum(1 for r in self.results if r.state is state)

    @property
    def converted(self) -> int:
        return self.count(FileState.DONE)

    @property
    def skipped(self) -> int:
        return self.count(FileState.SKIPPED)

    @property
    def failed(self) -> int:
        return self.count(FileState.FAILED)


def _log_progress(progress: EncodeProgress) -> None:
    logger.debug("Progress: %s", format_progress(progress))


class BatchDriver:
    """Inspect, plan and encode a list of files sequentially.

    Args:
        inspector: Media inspector used for every file.
        encoder: Encoder used for files that need conversion.
        token: Shared cancellation token, checked between files and passed
            into every external call.
        dry_run: Plan only; never start the encoder.
        progress_callback: Receives encoder progress. Defaults to DEBUG logging.
        file_callback: Called with each FileResult as soon as its file is
            finished, before the next file starts.
    """

    def __init__(
        self,
        inspector: MediaInspector,
        encoder: Encoder,
        token: CancellationToken | None = None,
        dry_run: bool = False,
        progress_callback: Callable[[EncodeProgress], None] | None = _log_progress,
        file_callback: Callable[[FileResult], None] | None = None,
    ) -> None:
        self._inspector = inspector
        self._encoder = encoder
        self._token = token or CancellationToken()
        self._dry_run = dry_run
        self._progress_callback = progress_callback
        self._file_callback = file_callback
        self.result = BatchResult()
        """Results of the current or last run; complete up to a cancellation."""

    def run(
        self,
        paths: Sequence[str | Path],
        target: ContainerFormat | str,
        suffix: str,
    ) -> BatchResult:
        """Process ``paths`` in order.

        Args:
            paths: Input files.
            target: Output container.
            suffix: Appended to each output file's base name.

        Returns:
            BatchResult with one FileResult per file.

        Raises:
            CancelledError: If the token is cancelled. Files that were not
                started are not reported; ``self.result`` holds the files
                finished so far.
        """
        container = ContainerFormat.parse(target)
        self.result = BatchResult()
        width = max(2, len(str(len(paths))))

        logger.debug("Processing %d file(s) -> %s", len(paths), container.value)

        for index, raw_path in enumerate(paths, start=1):
            if self._token.cancelled:
                self.result.cancelled = True
                logger.info("Stopping: %d file(s) not started", len(paths) - index + 1)
                raise CancelledError()

            path = Path(os.path.normpath(raw_path))
            with file_context(f"F{index:0{width}d}", path):
                try:
                    file_result = self._process_file(path, container, suffix)
                except CancelledError:
                    self.result.cancelled = True
                    raise
            self.result.results.append(file_result)
            if self._file_callback is not None:
                self._file_callback(file_result)

        return self.result

    def _process_file(
        self, path: Path, container: ContainerFormat, suffix: str
    ) -> FileResult:
        result = FileResult(path=path)
        try:
            result.state = FileState.INSPECTING
            probe = self._inspector.inspect(path, self._token)

            result.state = FileState.PLANNING
            plan = plan_encode(probe, container, suffix, path)
            result.plan = plan

            if plan.skip:
                logger.info("[%s] no conversion required", path)
                result.state = FileState.SKIPPED
                return result

            if self._dry_run:
                logger.info("[%s] would convert: %s", path, plan.describe())
                result.state = FileState.DONE
                return result

            result.state = FileState.ENCODING
            result.process_result = self._encoder.encode(
                plan, self._token, self._progress_callback
            )
            result.state = FileState.DONE
        except CancelledError:
            raise
        except Exception as e:
            result.state = FileState.FAILED
            result.error = e
            if isinstance(e, ChromecastiseError):
                logger.error("%s", e)
            else:
                logger.exception("Unexpected error processing %s: %s", path, e)
        return result
