"""Helpers for building content trees in tests."""

from __future__ import annotations

import os
from pathlib import Path
from textwrap import dedent


def write_post(root: Path, relative: str, text: str, *, mtime: float | None = None) -> Path:
    """Write a Markdown file under ``root``, creating parent directories."""
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dedent(text).lstrip(), encoding="utf-8")
    if mtime is not None:
        os.utime(path, (mtime, mtime))
    return path


def write_page(root: Path, relative: str, *, mtime: float | None = None) -> Path:
    """Write a placeholder HTML page under ``root``."""
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("<!doctype html><title>page</title>\n", encoding="utf-8")
    if mtime is not None:
        os.utime(path, (mtime, mtime))
    return path
