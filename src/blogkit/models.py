"""Content data model: posts and the pages rendered from them."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any

INDEX_HTML = "index.html"
BUNDLE_INDEX = "index.md"


@dataclass(frozen=True, slots=True)
class Post:
    """A Markdown document with YAML front matter.

    Attributes:
        path: Location relative to the content root. This is the post's identity.
        slug: URL slug (front-matter ``slug`` or derived from the file name).
        section: Top-level content directory the post lives in ("" at the root).
        title: Title from front matter, empty when missing.
        date: Parsed publication date, ``None`` when missing or invalid.
        draft: Whether the post is excluded from the live site.
        body: Markdown body following the front matter.
        metadata: Full front-matter mapping.
        source: Absolute path of the Markdown file.

    """

    path: Path
    slug: str
    section: str
    title: str
    date: datetime | None
    draft: bool
    body: str
    metadata: dict[str, Any] = field(default_factory=dict)
    source: Path | None = None

    @property
    def published(self) -> bool:
        return not self.draft

    @property
    def has_body(self) -> bool:
        return bool(self.body.strip())

    @property
    def word_count(self) -> int:
        return len(self.body.split())

    @property
    def raw_date(self) -> Any:
        """The ``date`` value exactly as it appeared in front matter."""
        return self.metadata.get("date")

    @property
    def page_dir(self) -> Path:
        """Content-relative directory the page is published under.

        For a page bundle (``posts/2022/intro/index.md``) this is the bundle's
        parent, since the bundle directory itself becomes the page.
        """
        if self.path.name == BUNDLE_INDEX and len(self.path.parts) > 1:
            return self.path.parent.parent
        return self.path.parent

    def output_path(self, output_dir: Path, *, ugly_urls: bool = False) -> Path:
        """Where the generator writes this post's page.

        The content tree is mirrored: pretty URLs map ``posts/2022/intro.md``
        to ``posts/2022/intro/index.html``; ugly URLs to ``posts/2022/intro.html``.
        """
        base = output_dir / self.page_dir
        if ugly_urls:
            return base / f"{self.slug}.html"
        return base / self.slug / INDEX_HTML


@dataclass(frozen=True, slots=True)
class RenderedPage:
    """A generated HTML page and its relation to the source post."""

    post: Post
    path: Path
    exists: bool
    stale: bool = False
