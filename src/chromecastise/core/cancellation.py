"""Process-wide cancellation shared by every external process invocation.

A single :class:`CancellationToken` is created per run. Signal handlers set it;
the batch driver checks it between files and the process runners check it
while waiting on a child process.
"""

from __future__ import annotations

import logging
import signal
import threading
from collections.abc import Callable, Iterable
from pathlib import Path
from types import FrameType

from chromecastise.exceptions import CancelledError

logger = logging.getLogger(__name__)

# Signals that request a graceful stop
DEFAULT_SIGNALS: tuple[signal.Signals, ...] = (signal.SIGINT, signal.SIGTERM)


class CancellationToken:
    """Thread-safe, one-way cancellation flag."""

    def __init__(self) -> None:
        self._event = threading.Event()
        self._reason: str | None = None

    @property
    def cancelled(self) -> bool:
        """True once cancel() has been called."""
        return self._event.is_set()

    @property
    def reason(self) -> str | None:
        """Why the token was cancelled, if a reason was given."""
        return self._reason

    def cancel(self, reason: str | None = None) -> None:
        """Trigger cancellation. Later calls are no-ops."""
        if self._event.is_set():
            return
        self._reason = reason
        self._event.set()
        logger.debug("Cancellation requested: %s", reason or "no reason given")

    def raise_if_cancelled(self, path: Path | None = None) -> None:
        """Raise CancelledError if the token has been triggered."""
        if self._event.is_set():
            raise CancelledError(path)


def install_signal_handlers(
    token: CancellationToken,
    signals: Iterable[signal.Signals] = DEFAULT_SIGNALS,
) -> Callable[[], None]:
    """Route termination signals to ``token``.

    The first signal cancels the token; the in-flight child process is then
    terminated by whoever is waiting on it.

    Args:
        token: Token to cancel when a signal arrives.
        signals: Signals to handle.

    Returns:
        A callable that restores the previous handlers.
    """
    previous: dict[signal.Signals, object] = {}

    def _handler(signum: int, frame: FrameType | None) -> None:
        sig_name = signal.Signals(signum).name
        logger.info("Received %s, stopping after cleanup...", sig_name)
        token.cancel(sig_name)

    for sig in signals:
        previous[sig] = signal.getsignal(sig)
        signal.signal(sig, _handler)

    def restore() -> None:
        for sig, handler in previous.items():
            signal.signal(sig, handler)  # type: ignore[arg-type]

    return restore
