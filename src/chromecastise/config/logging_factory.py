"""Logging configuration factory.

Merges CLI logging options with the configured LoggingConfig.
"""

from __future__ import annotations

from pathlib import Path

from chromecastise.config.models import LoggingConfig


def build_logging_config(
    base: LoggingConfig,
    *,
    level: str | None = None,
    file: Path | None = None,
    format: str | None = None,
    include_stderr: bool | None = None,
) -> LoggingConfig:
    """Build LoggingConfig by merging ``base`` with CLI overrides.

    Non-None arguments win. Validation runs in LoggingConfig.__post_init__,
    so invalid values raise ValueError.
    """
    return LoggingConfig(
        level=level if level is not None else base.level,
        file=file if file is not None else base.file,
        format=format if format is not None else base.format,
        include_stderr=(
            include_stderr if include_stderr is not None else base.include_stderr
        ),
        max_bytes=base.max_bytes,
        backup_count=base.backup_count,
    )


def configure_logging_from_cli(
    base: LoggingConfig,
    *,
    level: str | None = None,
    file: Path | None = None,
    format: str | None = None,
) -> LoggingConfig:
    """Apply CLI overrides to ``base`` and configure logging.

    Returns:
        The effective LoggingConfig.
    """
    from chromecastise.logging import configure_logging

    final_config = build_logging_config(base, level=level, file=file, format=format)
    configure_logging(final_config)
    return final_config
