"""Error types raised while converting files.

Every error that concerns a single input file carries that file's path so the
batch driver can report it without extra bookkeeping. Only ``CancelledError``
and ``ToolNotFoundError`` are fatal to a whole run.
"""

from __future__ import annotations

import shlex
from collections.abc import Sequence
from pathlib import Path


class ChromecastiseError(Exception):
    """Base class for all chromecastise errors."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class UnsupportedFormatError(ChromecastiseError):
    """Raised when a file's extension is not an accepted input extension."""

    def __init__(self, path: Path, extension: str) -> None:
        super().__init__(
            f"[{path}] unsupported video format found (extension {extension!r})",
            path,
        )
        self.extension = extension


class ProbeError(ChromecastiseError):
    """Raised when the media prober fails, times out, or cannot be started."""

    def __init__(
        self,
        path: Path,
        request: str,
        returncode: int | None = None,
        output: str = "",
        reason: str | None = None,
    ) -> None:
        detail = reason or (
            f"exit status {returncode}" if returncode is not None else "failed"
        )
        message = f"[{path}] mediainfo failed to get the {request}: {detail}"
        if output.strip():
            message += f"\n{output.strip()}"
        super().__init__(message, path)
        self.request = request
        self.returncode = returncode
        self.output = output


class EncodeError(ChromecastiseError):
    """Raised when the encoder exits non-zero or cannot be run.

    The full argument vector and the combined encoder output are kept so the
    message alone is enough to reproduce the failure by hand.
    """

    def __init__(
        self,
        path: Path,
        argv: Sequence[str],
        output: str = "",
        returncode: int | None = None,
        reason: str | None = None,
    ) -> None:
        self.argv = tuple(argv)
        self.output = output
        self.returncode = returncode
        detail = reason or (
            f"exit status {returncode}" if returncode is not None else "failed"
        )
        lines = [
            f"[{path}] ffmpeg failed to transcode the file: {detail}",
            f"command: {self.command_line}",
        ]
        if output.strip():
            lines.append("output:")
            lines.append(output.rstrip())
        super().__init__("\n".join(lines), path)

    @property
    def command_line(self) -> str:
        """Shell-quoted command line, suitable for copy and paste."""
        return shlex.join(self.argv)


class CancelledError(ChromecastiseError):
    """Raised when the run was interrupted while work was in flight."""

    def __init__(self, path: Path | None = None) -> None:
        message = f"[{path}] cancelled" if path is not None else "cancelled"
        super().__init__(message, path)


class ToolNotFoundError(ChromecastiseError):
    """Raised when a required external tool cannot be located."""

    def __init__(self, tool: str, hint: str = "") -> None:
        message = f"Required tool not available: {tool}."
        if hint:
            message += f" {hint}"
        super().__init__(message)
        self.tool = tool


class ConfigError(ChromecastiseError):
    """Raised when the configuration file or an option value is invalid."""
