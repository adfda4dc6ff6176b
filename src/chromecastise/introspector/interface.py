"""MediaInspector interface and the probe result type."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Protocol

from chromecastise.core.cancellation import CancellationToken
from chromecastise.core.capabilities import FILE_EXTENSIONS, is_supported
from chromecastise.exceptions import UnsupportedFormatError


class ProbeRequest(Enum):
    """The three properties queried for every file.

    Values are mediainfo ``--Inform`` templates.
    """

    CONTAINER = "General;%Format%"
    VIDEO_CODEC = "Video;%Format%"
    AUDIO_CODEC = "Audio;%Format%"

    @property
    def description(self) -> str:
        """Human readable name used in error messages."""
        return {
            ProbeRequest.CONTAINER: "container format",
            ProbeRequest.VIDEO_CODEC: "video encoding format",
            ProbeRequest.AUDIO_CODEC: "audio encoding format",
        }[self]


@dataclass(frozen=True)
class MediaProbe:
    """Container and codec names reported by the prober for one file.

    Values are exactly what the prober printed, with surrounding whitespace
    removed. An empty string means the prober found no such stream.
    """

    path: Path
    container: str
    video_codec: str
    audio_codec: str


def source_extension(path: Path) -> str:
    """Extension of ``path`` without the leading dot, case as given."""
    return path.suffix[1:] if path.suffix else ""


def check_extension(path: Path) -> str:
    """Validate that ``path`` has an accepted input extension.

    Returns:
        The extension without its leading dot.

    Raises:
        UnsupportedFormatError: If the extension is not accepted.
    """
    extension = source_extension(path)
    if not is_supported(extension, FILE_EXTENSIONS):
        raise UnsupportedFormatError(path, extension)
    return extension


class MediaInspector(Protocol):
    """Protocol for media inspection implementations."""

    def inspect(
        self, path: Path, token: CancellationToken | None = None
    ) -> MediaProbe:
        """Report container and codec names for a media file.

        Args:
            path: Path to the media file.
            token: Cancellation token bound to every external call.

        Returns:
            MediaProbe for the file.

        Raises:
            UnsupportedFormatError: If the extension is not accepted. Raised
                before any external process is started.
            ProbeError: If the prober fails.
            CancelledError: If the token is cancelled mid-inspection.
        """
        ...
