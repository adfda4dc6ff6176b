"""Run ffmpeg for an EncodePlan.

Output is read on a separate thread so the waiting loop can keep checking the
cancellation token while ffmpeg runs.
"""

from __future__ import annotations

import logging
import queue
import subprocess  # nosec B404 - subprocess is required for FFmpeg invocation
import threading
import time
from collections.abc import Callable
from pathlib import Path

from chromecastise.core.cancellation import CancellationToken
from chromecastise.core.subprocess_utils import (
    POLL_INTERVAL,
    TERMINATE_GRACE,
    terminate_process,
)
from chromecastise.exceptions import CancelledError, EncodeError
from chromecastise.executor.command import build_ffmpeg_command
from chromecastise.executor.types import ProcessResult
from chromecastise.policy.types import EncodePlan
from chromecastise.tools.ffmpeg_progress import EncodeProgress, parse_stderr_progress

logger = logging.getLogger(__name__)


class FFmpegEncoder:
    """Encode files with ffmpeg according to an EncodePlan."""

    READER_JOIN_TIMEOUT: float = 5.0

    def __init__(
        self,
        ffmpeg_path: Path | str = "ffmpeg",
        threads: int | None = None,
        poll_interval: float = POLL_INTERVAL,
        terminate_grace: float = TERMINATE_GRACE,
    ) -> None:
        """Initialize the encoder.

        Args:
            ffmpeg_path: Path to the ffmpeg executable.
            threads: Encoder thread count (None = one per CPU).
            poll_interval: Seconds between cancellation checks.
            terminate_grace: Seconds a cancelled ffmpeg gets before it is killed.
        """
        self._ffmpeg_path = ffmpeg_path
        self._threads = threads
        self._poll_interval = poll_interval
        self._terminate_grace = terminate_grace

    def build_command(self, plan: EncodePlan) -> list[str]:
        """Argument vector used for ``plan``."""
        return build_ffmpeg_command(plan, self._ffmpeg_path, self._threads)

    def encode(
        self,
        plan: EncodePlan,
        token: CancellationToken | None = None,
        progress_callback: Callable[[EncodeProgress], None] | None = None,
    ) -> ProcessResult:
        """Run ffmpeg for ``plan`` and wait for it to finish.

        Args:
            plan: Encode plan. Plans with ``skip`` set should not be passed.
            token: Cancellation token; when triggered ffmpeg is terminated.
            progress_callback: Called for each parsed progress line.

        Returns:
            ProcessResult with the combined ffmpeg output.

        Raises:
            EncodeError: If ffmpeg cannot be started or exits non-zero.
            CancelledError: If ``token`` is cancelled while ffmpeg runs.
        """
        cmd = self.build_command(plan)
        source = plan.source_path

        if _same_file(plan.output_path, source):
            raise EncodeError(
                source, cmd, reason="output path would overwrite the source file"
            )

        if token is not None:
            token.raise_if_cancelled(source)

        logger.info("Converting %s: %s", source, plan.describe())
        logger.debug("Executing command: %s", " ".join(cmd))

        start_time = time.monotonic()
        try:
            process = subprocess.Popen(  # nosec B603 - args built from the plan
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as e:
            raise EncodeError(
                source, cmd, reason=f"could not run ffmpeg: {e}"
            ) from e

        output_lines, cancelled = self._wait(process, token, progress_callback)
        elapsed = time.monotonic() - start_time
        output = "".join(output_lines)

        if cancelled:
            logger.warning("Cancelled while converting %s", source)
            _remove_partial_output(plan.output_path)
            raise CancelledError(source)

        result = ProcessResult(
            argv=tuple(cmd),
            returncode=process.returncode,
            output=output,
            elapsed_seconds=round(elapsed, 3),
        )

        if not result.success:
            _remove_partial_output(plan.output_path)
            raise EncodeError(source, cmd, output, returncode=process.returncode)

        logger.info("Converted %s -> %s in %.1fs", source, plan.output_path, elapsed)
        return result

    def _wait(
        self,
        process: subprocess.Popen,
        token: CancellationToken | None,
        progress_callback: Callable[[EncodeProgress], None] | None,
    ) -> tuple[list[str], bool]:
        """Collect output until ffmpeg exits or the token is cancelled.

        Returns:
            Tuple of (output_lines, cancelled).
        """
        output_lines: list[str] = []
        line_queue: queue.Queue[str | None] = queue.Queue()

        stdout = process.stdout

        def read_output() -> None:
            try:
                for line in stdout or ():
                    line_queue.put(line)
            except (ValueError, OSError) as e:
                logger.debug("Output reader stopped: %s", e)
            finally:
                line_queue.put(None)

        reader_thread = threading.Thread(target=read_output, daemon=True)
        reader_thread.start()

        cancelled = False
        eof = False
        while not eof or process.poll() is None:
            if token is not None and token.cancelled:
                cancelled = True
                break

            if eof:
                # Output closed; keep waiting for the exit status
                try:
                    process.wait(timeout=self._poll_interval)
                except subprocess.TimeoutExpired:
                    pass
                continue

            try:
                line = line_queue.get(timeout=self._poll_interval)
            except queue.Empty:
                continue
            if line is None:
                eof = True
                continue
            output_lines.append(line)
            self._report_progress(line, progress_callback)

        if cancelled:
            terminate_process(process, grace=self._terminate_grace, drain=False)

        reader_thread.join(timeout=self.READER_JOIN_TIMEOUT)
        while True:
            try:
                line = line_queue.get_nowait()
            except queue.Empty:
                break
            if line is not None:
                output_lines.append(line)

        process.wait()
        return output_lines, cancelled

    @staticmethod
    def _report_progress(
        line: str, progress_callback: Callable[[EncodeProgress], None] | None
    ) -> None:
        if progress_callback is None:
            return
        progress = parse_stderr_progress(line)
        if progress is None:
            return
        try:
            progress_callback(progress)
        except Exception as e:
            logger.warning("Progress callback error: %s", e)


def _same_file(a: Path, b: Path) -> bool:
    try:
        return a.resolve() == b.resolve()
    except OSError:
        return a == b


def _remove_partial_output(path: Path) -> None:
    """Delete an incomplete output file left behind by ffmpeg."""
    try:
        path.unlink(missing_ok=True)
        logger.debug("Removed partial output %s", path)
    except OSError as e:
        logger.warning("Could not remove partial output %s: %s", path, e)
