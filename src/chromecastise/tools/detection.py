"""Locate the external tools chromecastise drives.

Configured paths (config file or environment) take precedence over a lookup
on ``PATH``.
"""

import logging
import shutil
from pathlib import Path

from chromecastise.exceptions import ToolNotFoundError

logger = logging.getLogger(__name__)

INSTALL_HINTS: dict[str, str] = {
    "ffmpeg": (
        "Install ffmpeg (e.g. 'apt install ffmpeg' or 'brew install ffmpeg') "
        "or set CHROMECASTISE_FFMPEG_PATH."
    ),
    "mediainfo": (
        "Install MediaInfo CLI (e.g. 'apt install mediainfo' or "
        "'brew install media-info') or set CHROMECASTISE_MEDIAINFO_PATH."
    ),
}


def find_tool(name: str, configured_path: Path | None = None) -> Path | None:
    """Find a tool executable.

    Args:
        name: Tool name (e.g., "ffmpeg").
        configured_path: Optional configured path override.

    Returns:
        Path to tool executable, or None if not found.
    """
    if configured_path:
        if configured_path.is_file():
            return configured_path
        logger.warning(
            "Configured path for %s is not a file: %s", name, configured_path
        )

    which_result = shutil.which(name)
    if which_result:
        return Path(which_result)

    return None


def require_tool(name: str, configured_path: Path | None = None) -> Path:
    """Get path to a required tool, raising if it is not available.

    Raises:
        ToolNotFoundError: If the tool cannot be found.
    """
    path = find_tool(name, configured_path)
    if path is None:
        raise ToolNotFoundError(name, INSTALL_HINTS.get(name, ""))
    logger.debug("Using %s at %s", name, path)
    return path
