"""Centralized logging configuration for blogkit."""

from __future__ import annotations

import logging
import os
from typing import Final

from rich.console import Console
from rich.logging import RichHandler

__all__ = ["configure_logging", "console"]

_LOG_LEVEL_ENV: Final[str] = "BLOGKIT_LOG_LEVEL"
_MANAGED_ATTR: Final[str] = "_blogkit_managed"

console = Console(stderr=True)


def _resolve_level(verbose: bool) -> int:
    if verbose:
        return logging.DEBUG
    return getattr(logging, os.getenv(_LOG_LEVEL_ENV, "INFO").upper(), logging.INFO)


def configure_logging(*, verbose: bool = False) -> None:
    """Route all logging through one Rich handler on stderr.

    Safe to call once per command; the handler installed by the first call
    is reused and only the level is updated.
    """
    root_logger = logging.getLogger()
    if not any(getattr(handler, _MANAGED_ATTR, False) for handler in root_logger.handlers):
        root_logger.handlers.clear()
        handler = RichHandler(
            console=console,
            rich_tracebacks=True,
            show_path=False,
            markup=False,
            log_time_format="[%Y-%m-%d %H:%M:%S]",
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        setattr(handler, _MANAGED_ATTR, True)
        root_logger.addHandler(handler)

    root_logger.setLevel(_resolve_level(verbose))
    logging.captureWarnings(True)
