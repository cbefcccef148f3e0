"""Parsing YAML frontmatter from Markdown content."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from frontmatter.default_handlers import YAMLHandler

from blogkit.exceptions import FrontmatterError

_YAML = YAMLHandler()
_UNKNOWN_SOURCE = Path("<string>")


def parse_frontmatter(content: str, source: Path | None = None) -> tuple[dict[str, Any], str]:
    """Split Markdown content into its frontmatter mapping and body.

    Content without a leading ``---`` line has no frontmatter and is returned
    unchanged with empty metadata.

    Args:
        content: Markdown content that may include frontmatter.
        source: File the content came from, used in error messages.

    Returns:
        Tuple of (metadata dict, body string).

    Raises:
        FrontmatterError: If the block is unterminated, is invalid YAML, or
            does not hold a mapping.

    """
    source = source or _UNKNOWN_SOURCE
    if not _YAML.detect(content):
        return {}, content

    try:
        raw_fm, body = _YAML.split(content)
    except ValueError as exc:
        raise FrontmatterError(source, "frontmatter block is not closed with '---'") from exc

    try:
        metadata = _YAML.load(raw_fm)
    except yaml.YAMLError as exc:
        raise FrontmatterError(source, f"invalid YAML in frontmatter: {exc}") from exc

    if metadata is None:
        metadata = {}
    if not isinstance(metadata, dict):
        raise FrontmatterError(
            source, f"frontmatter must be a mapping, got {type(metadata).__name__}"
        )
    return dict(metadata), body.strip()
