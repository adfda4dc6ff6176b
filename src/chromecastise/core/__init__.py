"""Core building blocks shared by the inspector, planner and executor."""

from chromecastise.core.cancellation import CancellationToken, install_signal_handlers
from chromecastise.core.capabilities import (
    AUDIO_CODECS,
    CONTAINER_FORMATS,
    COPY,
    DEFAULT_AUDIO_ENCODER,
    DEFAULT_VIDEO_ENCODER,
    FILE_EXTENSIONS,
    VIDEO_CODECS,
    CapabilityTable,
    ContainerFormat,
    is_supported,
)

__all__ = [
    "AUDIO_CODECS",
    "CONTAINER_FORMATS",
    "COPY",
    "DEFAULT_AUDIO_ENCODER",
    "DEFAULT_VIDEO_ENCODER",
    "FILE_EXTENSIONS",
    "VIDEO_CODECS",
    "CancellationToken",
    "CapabilityTable",
    "ContainerFormat",
    "install_signal_handlers",
    "is_supported",
]
