"""Structured logging for chromecastise.

Provides configurable logging with JSON format support and file rotation,
plus per-file context injected into every record.
"""

from chromecastise.logging.config import build_handlers, configure_logging
from chromecastise.logging.context import (
    FileContextFilter,
    clear_file_context,
    file_context,
    get_file_context,
    set_file_context,
)
from chromecastise.logging.handlers import JSONFormatter

__all__ = [
    "FileContextFilter",
    "JSONFormatter",
    "build_handlers",
    "clear_file_context",
    "configure_logging",
    "file_context",
    "get_file_context",
    "set_file_context",
]
