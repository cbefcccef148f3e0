"""Custom exceptions for configuration handling."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any

from blogkit.exceptions import BlogkitError


class ConfigError(BlogkitError):
    """Base exception for all configuration-related errors."""


class ConfigParseError(ConfigError):
    """Raised when the configuration file is not valid TOML."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Could not parse {path}: {reason}")


class ConfigValidationError(ConfigError):
    """Raised when the configuration fails validation."""

    def __init__(self, errors: Sequence[dict[str, Any]] | None = None, path: Path | None = None) -> None:
        self.errors = list(errors or [])
        self.path = path
        where = f" in {path}" if path else ""
        details = "; ".join(
            f"{' -> '.join(str(part) for part in err.get('loc', ()))}: {err.get('msg', '')}"
            for err in self.errors
        )
        message = f"Configuration validation failed{where} with {len(self.errors)} error(s)"
        super().__init__(f"{message}: {details}" if details else f"{message}.")


class ConfigExistsError(ConfigError):
    """Raised when writing a default config would overwrite an existing file."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Configuration file already exists: {path}")
