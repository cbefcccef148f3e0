"""Discovering and loading posts from a content tree."""

from __future__ import annotations

import fnmatch
import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from datetime import UTC, tzinfo
from pathlib import Path
from typing import Any

from blogkit.date_utils import parse_post_date
from blogkit.exceptions import ContentDirectoryNotFoundError, ContentError
from blogkit.markdown.frontmatter import parse_frontmatter
from blogkit.models import BUNDLE_INDEX, Post
from blogkit.slugify import path_slug, slugify

logger = logging.getLogger(__name__)

__all__ = ["ContentTree", "discover_markdown", "load_post", "load_posts"]

MARKDOWN_SUFFIXES = frozenset({".md", ".markdown"})
SECTION_INDEX = "_index.md"


@dataclass(slots=True)
class ContentTree:
    """Posts loaded from a content directory plus files that failed to load."""

    root: Path
    posts: list[Post] = field(default_factory=list)
    failures: list[tuple[Path, ContentError]] = field(default_factory=list)

    @property
    def published(self) -> list[Post]:
        return [post for post in self.posts if post.published]

    @property
    def drafts(self) -> list[Post]:
        return [post for post in self.posts if post.draft]

    @property
    def sections(self) -> set[str]:
        return {post.section for post in self.posts if post.section}

    def __len__(self) -> int:
        return len(self.posts)

    def __iter__(self) -> Iterator[Post]:
        return iter(self.posts)


def _is_excluded(relative: Path, exclude: Iterable[str]) -> bool:
    rel = relative.as_posix()
    return any(fnmatch.fnmatch(rel, pattern) for pattern in exclude)


def discover_markdown(content_dir: Path, exclude: Iterable[str] = ()) -> list[Path]:
    """Return Markdown files under ``content_dir`` sorted by path.

    Section list pages (``_index.md``) and files matching an ``exclude``
    glob are skipped.
    """
    if not content_dir.is_dir():
        raise ContentDirectoryNotFoundError(content_dir)

    exclude = tuple(exclude)
    found = []
    for path in sorted(content_dir.rglob("*")):
        if not path.is_file() or path.suffix.lower() not in MARKDOWN_SUFFIXES:
            continue
        if path.name == SECTION_INDEX:
            continue
        if _is_excluded(path.relative_to(content_dir), exclude):
            logger.debug("Excluded %s", path)
            continue
        found.append(path)
    return found


def _derive_slug(relative: Path, metadata: dict[str, Any]) -> str:
    explicit = metadata.get("slug")
    if isinstance(explicit, str) and explicit.strip():
        return slugify(explicit, max_len=None)
    if relative.name == BUNDLE_INDEX and len(relative.parts) > 1:
        return path_slug(relative.parent.name)
    return path_slug(relative.stem)


def _coerce_title(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def load_post(path: Path, content_dir: Path, *, tz: tzinfo = UTC) -> Post:
    """Load one Markdown file as a :class:`Post`.

    ``draft`` only counts as set when it is literally ``true``; a non-boolean
    value is left in ``metadata`` for the linter to report.

    Raises:
        ContentError: If the file cannot be read or decoded.
        FrontmatterError: If the front matter is malformed.

    """
    try:
        text = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        raise ContentError(path, str(exc)) from exc

    metadata, body = parse_frontmatter(text, source=path)
    relative = path.relative_to(content_dir)
    section = relative.parts[0] if len(relative.parts) > 1 else ""

    return Post(
        path=relative,
        slug=_derive_slug(relative, metadata),
        section=section,
        title=_coerce_title(metadata.get("title")),
        date=parse_post_date(metadata.get("date"), tz=tz),
        draft=metadata.get("draft") is True,
        body=body,
        metadata=metadata,
        source=path,
    )


def load_posts(
    content_dir: Path,
    *,
    include_drafts: bool = True,
    exclude: Iterable[str] = (),
    tz: tzinfo = UTC,
) -> ContentTree:
    """Load every post under ``content_dir``.

    Files that fail to load are collected in ``ContentTree.failures`` so one
    broken header does not hide problems in the rest of the tree.
    """
    tree = ContentTree(root=content_dir)
    for path in discover_markdown(content_dir, exclude):
        try:
            post = load_post(path, content_dir, tz=tz)
        except ContentError as exc:
            logger.warning("Skipping %s: %s", path, exc.reason)
            tree.failures.append((path.relative_to(content_dir), exc))
            continue
        if post.draft and not include_drafts:
            continue
        tree.posts.append(post)

    logger.debug(
        "Loaded %d post(s) from %s (%d failure(s))", len(tree.posts), content_dir, len(tree.failures)
    )
    return tree
