"""Configuration management for chromecastise.

Precedence:
1. CLI flags (highest priority)
2. Environment variables (CHROMECASTISE_*)
3. Config file (~/.chromecastise/config.toml)
4. Default values (lowest priority)
"""

from chromecastise.config.env import EnvReader
from chromecastise.config.loader import (
    build_config,
    clear_config_cache,
    get_config,
    get_default_config_path,
    load_config_file,
)
from chromecastise.config.logging_factory import (
    build_logging_config,
    configure_logging_from_cli,
)
from chromecastise.config.models import (
    ChromecastiseConfig,
    LoggingConfig,
    ToolPathsConfig,
    TranscodeConfig,
)

__all__ = [
    "ChromecastiseConfig",
    "EnvReader",
    "LoggingConfig",
    "ToolPathsConfig",
    "TranscodeConfig",
    "build_config",
    "build_logging_config",
    "clear_config_cache",
    "configure_logging_from_cli",
    "get_config",
    "get_default_config_path",
    "load_config_file",
]
