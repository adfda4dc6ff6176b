"""Configuration loader with precedence handling.

Configuration is loaded with the following precedence (highest to lowest):
1. CLI arguments (applied by the CLI on top of the returned config)
2. Environment variables (CHROMECASTISE_*)
3. Config file (~/.chromecastise/config.toml)
4. Default values

Environment variables:
- CHROMECASTISE_CONFIG_PATH: Path to config file
- CHROMECASTISE_FFMPEG_PATH: Path to ffmpeg executable
- CHROMECASTISE_MEDIAINFO_PATH: Path to mediainfo executable
- CHROMECASTISE_THREADS: Encoder thread count
- CHROMECASTISE_PROBE_TIMEOUT: Time limit per mediainfo call (seconds)
- CHROMECASTISE_LOG_LEVEL: Log level (debug, info, warning, error)

An environment value that cannot be converted is a ConfigError, like a bad
value in the file.
"""

from __future__ import annotations

import logging
import threading
import tomllib
from pathlib import Path
from typing import Any

from chromecastise.config.env import EnvReader
from chromecastise.config.models import (
    ChromecastiseConfig,
    LoggingConfig,
    ToolPathsConfig,
    TranscodeConfig,
)
from chromecastise.exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path.home() / ".chromecastise"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.toml"

_config_cache: dict[Path, ChromecastiseConfig] = {}
_config_cache_lock = threading.Lock()


def get_default_config_path(env: EnvReader | None = None) -> Path:
    """Config file path, overridable with CHROMECASTISE_CONFIG_PATH."""
    reader = env or EnvReader()
    return reader.get_path("CONFIG_PATH") or DEFAULT_CONFIG_FILE


def load_config_file(path: Path) -> dict[str, Any]:
    """Read a TOML config file.

    Returns:
        Parsed dictionary, or an empty dict if the file does not exist.

    Raises:
        ConfigError: If the file cannot be read or is not valid TOML.
    """
    if not path.exists():
        logger.debug("Config file %s not found, using defaults", path)
        return {}
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Could not read config file {path}: {e}") from e


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    section = data.get(name, {})
    if not isinstance(section, dict):
        raise ConfigError(f"[{name}] must be a table")
    return section


def _optional_path(value: Any) -> Path | None:
    if value in (None, ""):
        return None
    return Path(str(value)).expanduser()


def build_config(
    file_data: dict[str, Any], env: EnvReader | None = None
) -> ChromecastiseConfig:
    """Build configuration from parsed file data, then environment overrides.

    Raises:
        ConfigError: If any value is invalid.
    """
    reader = env or EnvReader()
    tools = _section(file_data, "tools")
    transcode = _section(file_data, "transcode")
    logging_section = _section(file_data, "logging")

    try:
        tool_paths = ToolPathsConfig(
            ffmpeg=reader.get_path("FFMPEG_PATH", _optional_path(tools.get("ffmpeg"))),
            mediainfo=reader.get_path(
                "MEDIAINFO_PATH", _optional_path(tools.get("mediainfo"))
            ),
        )
        transcode_config = TranscodeConfig(
            format=transcode.get("format", TranscodeConfig.format.value),
            suffix=str(transcode.get("suffix", TranscodeConfig.suffix)),
            threads=reader.get_int("THREADS", transcode.get("threads")),
            probe_timeout=float(
                reader.get_float(
                    "PROBE_TIMEOUT",
                    transcode.get("probe_timeout", TranscodeConfig.probe_timeout),
                )
            ),
        )
        logging_config = LoggingConfig(
            level=reader.get_str("LOG_LEVEL", logging_section.get("level", "info"))
            or "info",
            file=_optional_path(logging_section.get("file")),
            format=str(logging_section.get("format", "text")),
            include_stderr=bool(logging_section.get("include_stderr", True)),
            max_bytes=int(logging_section.get("max_bytes", 10_485_760)),
            backup_count=int(logging_section.get("backup_count", 5)),
        )
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid configuration: {e}") from e

    return ChromecastiseConfig(
        tools=tool_paths, transcode=transcode_config, logging=logging_config
    )


def get_config(
    config_path: Path | None = None, env: EnvReader | None = None
) -> ChromecastiseConfig:
    """Load configuration, caching the result per config path.

    Raises:
        ConfigError: If the config file or an environment value is invalid.
    """
    path = config_path or get_default_config_path(env)
    with _config_cache_lock:
        cached = _config_cache.get(path)
        if cached is not None:
            return cached
        config = build_config(load_config_file(path), env)
        _config_cache[path] = config
        return config


def clear_config_cache() -> None:
    """Forget cached configuration (used by tests)."""
    with _config_cache_lock:
        _config_cache.clear()
