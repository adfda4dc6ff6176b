"""External tool resolution and ffmpeg output parsing."""

from chromecastise.tools.detection import (
    INSTALL_HINTS,
    find_tool,
    require_tool,
)
from chromecastise.tools.ffmpeg_progress import (
    EncodeProgress,
    format_progress,
    parse_stderr_progress,
)

__all__ = [
    "INSTALL_HINTS",
    "EncodeProgress",
    "find_tool",
    "format_progress",
    "parse_stderr_progress",
    "require_tool",
]
