"""Subprocess helpers for external tool invocation.

Wraps ``subprocess.Popen`` with the handling every external call needs here:
UTF-8 decoding with replacement, an overall timeout, and cancellation through a
shared :class:`~chromecastise.core.cancellation.CancellationToken`.
"""

from __future__ import annotations

import logging
import subprocess  # nosec B404 - subprocess is required for mediainfo/ffmpeg
import time
from pathlib import Path

from chromecastise.core.cancellation import CancellationToken
from chromecastise.exceptions import CancelledError

logger = logging.getLogger(__name__)

# How often a waiting call wakes up to check for cancellation (seconds)
POLL_INTERVAL = 0.25

# How long a terminated child gets before it is killed (seconds)
TERMINATE_GRACE = 5.0


def terminate_process(
    process: subprocess.Popen,
    grace: float = TERMINATE_GRACE,
    drain: bool = True,
) -> None:
    """Terminate a child process, escalating to kill after ``grace`` seconds.

    With ``drain`` the pipes are read while waiting so a child blocked on a
    full pipe can exit. Pass ``drain=False`` when another thread already
    consumes the output.
    """
    if process.poll() is not None:
        return
    logger.debug("Terminating process %s", process.pid)
    process.terminate()
    if not drain:
        try:
            process.wait(timeout=grace)
        except subprocess.TimeoutExpired:
            logger.warning(
                "Process %s did not exit within %.1fs, killing", process.pid, grace
            )
            process.kill()
            process.wait()
        return
    try:
        process.communicate(timeout=grace)
    except subprocess.TimeoutExpired:
        logger.warning(
            "Process %s did not exit within %.1fs, killing", process.pid, grace
        )
        process.kill()
        process.communicate()
    except (ValueError, OSError) as e:
        # Pipes already closed
        logger.debug("Error draining terminated process: %s", e)
        process.wait()


def run_command(
    args: list[str | Path],
    token: CancellationToken | None = None,
    timeout: float | None = 120,
    errors: str = "replace",
    poll_interval: float = POLL_INTERVAL,
) -> tuple[str, str, int]:
    """Run an external command and capture its output.

    Args:
        args: Command and arguments. Path objects are converted to strings.
        token: Cancellation token checked while the command runs.
        timeout: Overall timeout in seconds (None = no limit).
        errors: Error handling mode for text decoding.
        poll_interval: Seconds between cancellation checks.

    Returns:
        Tuple of (stdout, stderr, returncode).

    Raises:
        CancelledError: If ``token`` was cancelled while the command ran, even
            if the child had already exited; a running child is terminated.
        subprocess.TimeoutExpired: If the command outlived ``timeout``; the
            child is terminated.
        OSError: If the command could not be started.
    """
    str_args = [str(arg) for arg in args]
    command_name = Path(str_args[0]).name if str_args else "unknown"

    if token is not None:
        token.raise_if_cancelled()

    logger.debug(
        "Executing command: %s",
        " ".join(str_args),
        extra={"command": command_name, "arg_count": len(str_args)},
    )

    start_time = time.monotonic()
    process = subprocess.Popen(  # nosec B603 - caller validates args
        str_args,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
        encoding="utf-8",
        errors=errors,
    )

    while True:
        try:
            stdout, stderr = process.communicate(timeout=poll_interval)
            break
        except subprocess.TimeoutExpired:
            if token is not None and token.cancelled:
                terminate_process(process)
                raise CancelledError() from None
            elapsed = time.monotonic() - start_time
            if timeout is not None and elapsed >= timeout:
                logger.warning(
                    "Command timed out after %ss: %s",
                    timeout,
                    " ".join(str_args[:3]) + ("..." if len(str_args) > 3 else ""),
                )
                terminate_process(process)
                raise subprocess.TimeoutExpired(str_args, timeout) from None

    # The child shares our process group, so a terminal Ctrl-C kills it too
    if token is not None and token.cancelled:
        raise CancelledError()

    elapsed = time.monotonic() - start_time
    logger.debug(
        "Command completed",
        extra={
            "command": command_name,
            "elapsed_seconds": round(elapsed, 3),
            "returncode": process.returncode,
        },
    )
    return stdout or "", stderr or "", process.returncode
