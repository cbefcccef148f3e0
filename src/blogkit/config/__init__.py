"""Configuration for blogkit."""

from blogkit.config.exceptions import (
    ConfigError,
    ConfigExistsError,
    ConfigParseError,
    ConfigValidationError,
)
from blogkit.config.loader import find_config, load_config, write_default_config
from blogkit.config.settings import CONFIG_FILENAME, BlogkitConfig, LintSettings

__all__ = [
    "CONFIG_FILENAME",
    "BlogkitConfig",
    "ConfigError",
    "ConfigExistsError",
    "ConfigParseError",
    "ConfigValidationError",
    "LintSettings",
    "find_config",
    "load_config",
    "write_default_config",
]
