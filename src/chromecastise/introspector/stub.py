"""Stub implementation of MediaInspector for development and testing."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

from chromecastise.core.cancellation import CancellationToken
from chromecastise.exceptions import ChromecastiseError
from chromecastise.introspector.interface import MediaProbe, check_extension

# Container names mediainfo reports, inferred from the extension
CONTAINER_FORMAT_MAP = {
    "mkv": "Matroska",
    "mp4": "MPEG-4",
    "mov": "MPEG-4",
    "qt": "MPEG-4",
    "3gp": "MPEG-4",
    "avi": "AVI",
    "flv": "Flash Video",
    "m2ts": "BDAV",
    "mpg": "MPEG-PS",
    "mpeg": "MPEG-PS",
    "wmv": "Windows Media",
}


class StubInspector:
    """Inspector that never spawns a process.

    Results come from ``probes`` (keyed by path) when present; otherwise the
    container is inferred from the extension and the codecs default to
    ``video_codec``/``audio_codec``. Entries in ``errors`` are raised instead
    of returning a probe.
    """

    def __init__(
        self,
        probes: Mapping[Path, MediaProbe] | None = None,
        errors: Mapping[Path, ChromecastiseError] | None = None,
        video_codec: str = "AVC",
        audio_codec: str = "AAC",
    ) -> None:
        self._probes = dict(probes or {})
        self._errors = dict(errors or {})
        self._video_codec = video_codec
        self._audio_codec = audio_codec
        self.inspected: list[Path] = []

    def inspect(
        self, path: Path, token: CancellationToken | None = None
    ) -> MediaProbe:
        extension = check_extension(path)
        if token is not None:
            token.raise_if_cancelled(path)
        self.inspected.append(path)

        if path in self._errors:
            raise self._errors[path]
        if path in self._probes:
            return self._probes[path]

        return MediaProbe(
            path=path,
            container=CONTAINER_FORMAT_MAP.get(extension.lower(), "Unknown"),
            video_codec=self._video_codec,
            audio_codec=self._audio_codec,
        )
