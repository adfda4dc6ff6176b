"""Passthrough capability tables.

Single source of truth for which inputs chromecastise accepts and which
streams can be carried into the output untouched. Names are the strings
``mediainfo`` reports for ``%Format%`` (e.g. "AVC", "MPEG Audio").

Every lookup goes through :func:`is_supported`. A name that is missing from a
table is reported as not supported, so a codec we have never heard of is
re-encoded instead of being copied into a file the receiver cannot play.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from enum import Enum
from types import MappingProxyType

# Encoder identifier meaning "pass the stream through unmodified"
COPY = "copy"

# Encoders used when a stream is not passthrough-safe
DEFAULT_VIDEO_ENCODER = "libx264"
DEFAULT_AUDIO_ENCODER = "aac"


class ContainerFormat(Enum):
    """Output containers chromecastise can produce."""

    MP4 = "mp4"
    MKV = "mkv"

    @property
    def extension(self) -> str:
        """File extension without the leading dot."""
        return self.value

    @property
    def supports_subtitles(self) -> bool:
        """True if subtitle streams can be copied into this container."""
        return self is ContainerFormat.MKV

    @classmethod
    def parse(cls, value: str | ContainerFormat) -> ContainerFormat:
        """Convert a user supplied name ("mp4", "MKV") to a ContainerFormat.

        Raises:
            ValueError: If the name is not a known container.
        """
        if isinstance(value, ContainerFormat):
            return value
        try:
            return cls(value.strip().casefold())
        except ValueError:
            valid = ", ".join(c.value for c in cls)
            raise ValueError(
                f"unknown container format {value!r} (expected one of: {valid})"
            ) from None


class CapabilityTable:
    """Read-only mapping of a media property name to passthrough safety."""

    __slots__ = ("name", "_entries")

    def __init__(self, name: str, entries: Mapping[str, bool]) -> None:
        self.name = name
        self._entries: Mapping[str, bool] = MappingProxyType(dict(entries))

    def supported(self, key: str | None) -> bool:
        """Return True only for keys explicitly marked passthrough-safe."""
        if key is None:
            return False
        return self._entries.get(key, False)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"CapabilityTable({self.name!r}, {len(self._entries)} entries)"


def is_supported(name: str | None, table: CapabilityTable) -> bool:
    """Check whether ``name`` is passthrough-safe according to ``table``.

    Absent names are never an error; they are treated as unsupported.

    Args:
        name: Extension, container or codec name. None is allowed.
        table: The capability table to consult.

    Returns:
        True if the table marks the name as supported, False otherwise.
    """
    return table.supported(name)


# =============================================================================
# Tables
# =============================================================================

# Accepted input extensions, without the leading dot. Matching is case-sensitive.
FILE_EXTENSIONS = CapabilityTable(
    "extensions",
    {
        "mkv": True,
        "avi": True,
        "mp4": True,
        "3gp": True,
        "mov": True,
        "mpg": True,
        "mpeg": True,
        "qt": True,
        "wmv": True,
        "m2ts": True,
        "flv": True,
    },
)

CONTAINER_FORMATS = CapabilityTable(
    "containers",
    {
        "MPEG-4": True,
        "Matroska": True,
        "BDAV": False,
        "AVI": False,
        "Flash Video": False,
        "Unknown": False,
    },
)

VIDEO_CODECS = CapabilityTable(
    "video codecs",
    {
        "AVC": True,
        "MPEG-4 Visual": False,
        "xvid": False,
        "MPEG Video": False,
    },
)

# MP3 and Vorbis play on Chromecast but not on iOS receivers, so they are
# re-encoded as well.
AUDIO_CODECS = CapabilityTable(
    "audio codecs",
    {
        "AAC": True,
        "MPEG Audio": False,
        "Vorbis": False,
        "Ogg": False,
        "AC-3": False,
        "DTS": False,
        "PCM": False,
    },
)
