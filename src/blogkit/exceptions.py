"""Centralized exceptions for blogkit."""

from __future__ import annotations

from pathlib import Path


class BlogkitError(Exception):
    """Base exception for all blogkit errors."""


class ContentError(BlogkitError):
    """Raised when a content file cannot be read."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read {path}: {reason}")


class FrontmatterError(ContentError):
    """Raised when a front-matter block is malformed."""


class ContentDirectoryNotFoundError(BlogkitError):
    """Raised when the content directory does not exist."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Content directory not found: {path}")


class OutputDirectoryNotFoundError(BlogkitError):
    """Raised when the generated site directory does not exist."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Output directory not found: {path} (has the site been built?)")
