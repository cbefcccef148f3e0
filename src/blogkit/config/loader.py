"""Loading and saving ``.blogkit.toml``."""

from __future__ import annotations

import logging
import os
import tomllib
from copy import deepcopy
from pathlib import Path
from typing import Any

import tomli_w
from pydantic import ValidationError

from blogkit.config.exceptions import (
    ConfigExistsError,
    ConfigParseError,
    ConfigValidationError,
)
from blogkit.config.settings import CONFIG_FILENAME, ENV_PREFIX, BlogkitConfig

logger = logging.getLogger(__name__)


def find_config(start_dir: Path) -> Path | None:
    """Search upward from ``start_dir`` for ``.blogkit.toml``."""
    current = start_dir.expanduser().resolve()
    for candidate in (current, *current.parents):
        config_path = candidate / CONFIG_FILENAME
        if config_path.is_file():
            return config_path
    return None


def _collect_env_override_paths() -> set[tuple[str, ...]]:
    env_paths: set[tuple[str, ...]] = set()
    for key in os.environ:
        if not key.startswith(ENV_PREFIX):
            continue
        parts = [part.lower() for part in key[len(ENV_PREFIX) :].split("__") if part]
        if parts:
            env_paths.add(tuple(parts))
    return env_paths


def _merge_config(
    base: dict[str, Any],
    override: dict[str, Any],
    env_override_paths: set[tuple[str, ...]],
    current_path: tuple[str, ...] = (),
) -> dict[str, Any]:
    """Merge override into base, skipping keys provided via env vars."""
    merged = deepcopy(base)

    for key, value in override.items():
        path = (*current_path, str(key).lower())
        if path in env_override_paths:
            continue

        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge_config(merged[key], value, env_override_paths, path)
        else:
            merged[key] = value

    return merged


def load_config(start_dir: Path | None = None, *, config_path: Path | None = None) -> BlogkitConfig:
    """Load configuration with priority env vars > config file > defaults.

    Relative ``content_dir``/``output_dir`` values are resolved against the
    directory holding the config file, or ``start_dir`` when there is none.

    Raises:
        ConfigParseError: If the file is not valid TOML.
        ConfigValidationError: If the merged settings are invalid.

    """
    start_dir = start_dir or Path.cwd()
    if config_path is None:
        config_path = find_config(start_dir)

    try:
        base = BlogkitConfig()
    except ValidationError as exc:
        raise ConfigValidationError(exc.errors()) from exc

    if config_path is None:
        logger.debug("No %s found from %s, using defaults", CONFIG_FILENAME, start_dir)
        return base.resolve_paths(start_dir.resolve())

    logger.debug("Loading config from %s", config_path)
    try:
        file_data = tomllib.loads(config_path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise ConfigParseError(config_path, str(exc)) from exc

    merged = _merge_config(base.model_dump(mode="json"), file_data, _collect_env_override_paths())
    try:
        config = BlogkitConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigValidationError(exc.errors(), path=config_path) from exc

    return config.resolve_paths(config_path.parent.resolve())


def write_default_config(directory: Path, *, overwrite: bool = False) -> Path:
    """Write a ``.blogkit.toml`` holding the defaults and return its path."""
    config_path = directory / CONFIG_FILENAME
    if config_path.exists() and not overwrite:
        raise ConfigExistsError(config_path)

    # Constructed without env overrides so the file records plain defaults.
    data = BlogkitConfig.model_construct().model_dump(mode="json")
    directory.mkdir(parents=True, exist_ok=True)
    config_path.write_text(tomli_w.dumps(data), encoding="utf-8")
    logger.info("Created default config at %s", config_path)
    return config_path
