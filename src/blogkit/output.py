"""Mapping posts to generated pages and checking the built site against them."""

from __future__ import annotations

import logging
from pathlib import Path

from blogkit.content import ContentTree
from blogkit.exceptions import OutputDirectoryNotFoundError
from blogkit.issues import Issue, Severity
from blogkit.models import INDEX_HTML, Post, RenderedPage

logger = logging.getLogger(__name__)

__all__ = ["find_orphan_pages", "output_path_for", "rendered_pages", "verify_output"]

# Directories the generator creates inside a section that do not belong to a post.
_GENERATED_DIRS = frozenset({"page", "tags", "categories"})


def output_path_for(post: Post, output_dir: Path, *, ugly_urls: bool = False) -> Path:
    return post.output_path(output_dir, ugly_urls=ugly_urls)


def _is_stale(page: Path, post: Post) -> bool:
    if post.source is None:
        return False
    try:
        return page.stat().st_mtime < post.source.stat().st_mtime
    except OSError:
        return False


def rendered_pages(tree: ContentTree, output_dir: Path, *, ugly_urls: bool = False) -> list[RenderedPage]:
    """Pair every post in ``tree`` with its expected page under ``output_dir``."""
    pages = []
    for post in tree.posts:
        page_path = output_path_for(post, output_dir, ugly_urls=ugly_urls)
        exists = page_path.is_file()
        pages.append(
            RenderedPage(
                post=post,
                path=page_path,
                exists=exists,
                stale=exists and _is_stale(page_path, post),
            )
        )
    return pages


def _list_page_dirs(tree: ContentTree) -> set[Path]:
    """Content directories the generator renders as list pages."""
    dirs: set[Path] = set()
    for post in tree.posts:
        dirs.update(d for d in (post.page_dir, *post.page_dir.parents) if d != Path("."))
    return dirs


def _is_generated(relative: Path) -> bool:
    return any(part in _GENERATED_DIRS for part in relative.parent.parts)


def find_orphan_pages(tree: ContentTree, output_dir: Path, *, ugly_urls: bool = False) -> list[Path]:
    """Return pages under known sections that no post accounts for.

    Sections are scanned recursively. List pages for content directories
    (``posts/index.html``, ``posts/2022/index.html``) are not orphans, and
    top-level pages such as the home page or 404 are never looked at.
    """
    expected = {post.output_path(output_dir, ugly_urls=ugly_urls) for post in tree.posts}
    list_dirs = _list_page_dirs(tree)
    orphans = []
    for section in sorted(tree.sections):
        section_dir = output_dir / section
        if not section_dir.is_dir():
            continue
        pattern = "*.html" if ugly_urls else INDEX_HTML
        for page in sorted(section_dir.rglob(pattern)):
            relative = page.relative_to(output_dir)
            if page in expected or _is_generated(relative):
                continue
            if page.name == INDEX_HTML and (ugly_urls or relative.parent in list_dirs):
                continue
            orphans.append(page)
    return orphans


def verify_output(tree: ContentTree, output_dir: Path, *, ugly_urls: bool = False) -> list[Issue]:
    """Check that ``output_dir`` matches the latest content.

    Raises:
        OutputDirectoryNotFoundError: If ``output_dir`` does not exist.

    """
    if not output_dir.is_dir():
        raise OutputDirectoryNotFoundError(output_dir)

    issues: list[Issue] = []
    for page in rendered_pages(tree, output_dir, ugly_urls=ugly_urls):
        relative = page.path.relative_to(output_dir)
        if page.post.draft:
            if page.exists:
                issues.append(
                    Issue(
                        relative,
                        "draft-published",
                        Severity.ERROR,
                        f"draft {page.post.path.as_posix()} is present in the built site",
                    )
                )
            continue
        if not page.exists:
            issues.append(
                Issue(
                    relative,
                    "missing-page",
                    Severity.ERROR,
                    f"no page generated for {page.post.path.as_posix()}",
                )
            )
        elif page.stale:
            issues.append(
                Issue(
                    relative,
                    "stale-page",
                    Severity.WARNING,
                    f"page is older than {page.post.path.as_posix()}; rebuild the site",
                )
            )

    for orphan in find_orphan_pages(tree, output_dir, ugly_urls=ugly_urls):
        issues.append(
            Issue(
                orphan.relative_to(output_dir),
                "orphan-page",
                Severity.WARNING,
                "page has no matching source post",
            )
        )

    logger.debug("Output verification found %d issue(s) in %s", len(issues), output_dir)
    return issues
