"""Configuration data models."""

from dataclasses import dataclass, field
from pathlib import Path

from chromecastise.core.capabilities import ContainerFormat

VALID_LOG_LEVELS = frozenset({"debug", "info", "warning", "error"})
VALID_LOG_FORMATS = frozenset({"text", "json", "none"})


@dataclass
class ToolPathsConfig:
    """Paths to external tools. Unset tools are looked up in PATH."""

    ffmpeg: Path | None = None
    mediainfo: Path | None = None


@dataclass
class TranscodeConfig:
    """Defaults for conversion runs."""

    format: ContainerFormat = ContainerFormat.MP4
    """Target container used when neither --mp4 nor --mkv is given."""

    suffix: str = "_new"
    """Appended to the output file's base name."""

    threads: int | None = None
    """Encoder threads. None means one per CPU."""

    probe_timeout: float = 60.0
    """Time limit for a single mediainfo call, in seconds."""

    def __post_init__(self) -> None:
        """Validate configuration."""
        self.format = ContainerFormat.parse(self.format)
        if self.threads is not None and self.threads < 1:
            raise ValueError(f"threads must be at least 1, got {self.threads}")
        if self.probe_timeout <= 0:
            raise ValueError(
                f"probe_timeout must be positive, got {self.probe_timeout}"
            )


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "info"
    file: Path | None = None
    format: str = "text"
    """text, json, or none to discard log records."""

    include_stderr: bool = True
    max_bytes: int = 10_485_760  # 10 MB
    backup_count: int = 5

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.level.casefold() not in VALID_LOG_LEVELS:
            raise ValueError(
                f"level must be one of {sorted(VALID_LOG_LEVELS)}, got {self.level}"
            )
        if self.format.casefold() not in VALID_LOG_FORMATS:
            raise ValueError(
                f"format must be one of {sorted(VALID_LOG_FORMATS)}, "
                f"got {self.format}"
            )
        if self.max_bytes < 1:
            raise ValueError(f"max_bytes must be positive, got {self.max_bytes}")
        if self.backup_count < 0:
            raise ValueError(
                f"backup_count must be non-negative, got {self.backup_count}"
            )


@dataclass
class ChromecastiseConfig:
    """Complete configuration."""

    tools: ToolPathsConfig = field(default_factory=ToolPathsConfig)
    transcode: TranscodeConfig = field(default_factory=TranscodeConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
