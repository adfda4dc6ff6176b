"""Route log records to stderr and/or a rotating log file."""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

from chromecastise.logging.context import FileContextFilter
from chromecastise.logging.handlers import JSONFormatter

if TYPE_CHECKING:
    from chromecastise.config.models import LoggingConfig

LOG_LEVELS: dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

# file_tag is "[F01] " while a file is being processed
TEXT_FORMAT = "%(asctime)s - %(file_tag)s%(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


def _open_log_file(file: Path, config: LoggingConfig) -> logging.Handler | None:
    """Rotating handler for ``file``, or None if it cannot be opened."""
    path = Path(file).expanduser()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        return RotatingFileHandler(
            path,
            maxBytes=config.max_bytes,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"Warning: Could not open log file {path}: {e}\n")
        return None


def build_handlers(config: LoggingConfig) -> list[logging.Handler]:
    """Create the handlers ``config`` asks for.

    The log file comes first. stderr is added when ``include_stderr`` is set
    or when no log file could be opened. Format ``none`` yields no handlers.
    """
    kind = config.format.casefold()
    if kind == "none":
        return []

    handlers: list[logging.Handler] = []
    if config.file:
        file_handler = _open_log_file(config.file, config)
        if file_handler is not None:
            handlers.append(file_handler)
    if config.include_stderr or not handlers:
        handlers.append(logging.StreamHandler(sys.stderr))

    formatter = (
        JSONFormatter()
        if kind == "json"
        else logging.Formatter(TEXT_FORMAT, datefmt=DATE_FORMAT)
    )
    context_filter = FileContextFilter()
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.addFilter(context_filter)
    return handlers


def configure_logging(config: LoggingConfig) -> None:
    """Replace the root logger's handlers with those built from ``config``.

    With format ``none`` records are discarded.
    """
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(LOG_LEVELS.get(config.level.casefold(), logging.INFO))

    handlers = build_handlers(config) or [logging.NullHandler()]
    for handler in handlers:
        root_logger.addHandler(handler)
