"""Content lint rules for posts.

Each per-post rule is a generator taking a :class:`RuleContext` and the post,
yielding :class:`~blogkit.issues.Issue` records. Rules are registered by id in
``POST_RULES``; ``duplicate-slug`` looks across the whole tree and
``frontmatter`` reports files that could not be loaded at all.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path

from blogkit.config.settings import LintSettings
from blogkit.content import ContentTree
from blogkit.issues import Issue, Severity
from blogkit.models import Post

logger = logging.getLogger(__name__)

__all__ = ["ALL_RULES", "POST_RULES", "LintReport", "RuleContext", "lint_post", "lint_tree"]

_FENCE_MARKERS = ("```", "~~~")


@dataclass(frozen=True, slots=True)
class RuleContext:
    settings: LintSettings
    now: datetime


Rule = Callable[[RuleContext, Post], Iterator[Issue]]


def _check_required_fields(ctx: RuleContext, post: Post) -> Iterator[Issue]:
    for key in ctx.settings.required_fields:
        if key not in post.metadata:
            yield Issue(post.path, "missing-field", Severity.ERROR, f"front matter has no '{key}' key")


def _check_title(ctx: RuleContext, post: Post) -> Iterator[Issue]:
    if "title" in post.metadata and not post.title:
        yield Issue(post.path, "empty-title", Severity.ERROR, "title is empty")


def _check_title_length(ctx: RuleContext, post: Post) -> Iterator[Issue]:
    limit = ctx.settings.max_title_length
    if len(post.title) > limit:
        yield Issue(
            post.path,
            "title-length",
            Severity.WARNING,
            f"title is {len(post.title)} characters long (limit {limit})",
        )


def _check_date(ctx: RuleContext, post: Post) -> Iterator[Issue]:
    if "date" in post.metadata and post.date is None:
        yield Issue(post.path, "invalid-date", Severity.ERROR, f"cannot parse date {post.raw_date!r}")


def _check_future_date(ctx: RuleContext, post: Post) -> Iterator[Issue]:
    if post.published and post.date is not None and post.date > ctx.now:
        yield Issue(
            post.path,
            "future-date",
            Severity.WARNING,
            f"published post is dated in the future ({post.date.isoformat()})",
        )


def _check_draft_type(ctx: RuleContext, post: Post) -> Iterator[Issue]:
    if "draft" in post.metadata and not isinstance(post.metadata["draft"], bool):
        yield Issue(
            post.path,
            "draft-type",
            Severity.ERROR,
            f"draft must be true or false, got {post.metadata['draft']!r}",
        )


def _check_body(ctx: RuleContext, post: Post) -> Iterator[Issue]:
    if post.published and not post.has_body:
        yield Issue(post.path, "empty-body", Severity.ERROR, "published post has no body")


def _check_fences(ctx: RuleContext, post: Post) -> Iterator[Issue]:
    open_marker: str | None = None
    for line in post.body.splitlines():
        stripped = line.lstrip()
        for marker in _FENCE_MARKERS:
            if stripped.startswith(marker):
                if open_marker is None:
                    open_marker = marker
                elif marker == open_marker:
                    open_marker = None
                break
    if open_marker is not None:
        yield Issue(
            post.path, "unclosed-fence", Severity.WARNING, f"code fence '{open_marker}' is never closed"
        )


POST_RULES: dict[str, Rule] = {
    "missing-field": _check_required_fields,
    "empty-title": _check_title,
    "title-length": _check_title_length,
    "invalid-date": _check_date,
    "future-date": _check_future_date,
    "draft-type": _check_draft_type,
    "empty-body": _check_body,
    "unclosed-fence": _check_fences,
}

ALL_RULES: tuple[str, ...] = ("frontmatter", *POST_RULES, "duplicate-slug")


@dataclass(slots=True)
class LintReport:
    """Issues found by :func:`lint_tree`, with the number of files checked."""

    checked: int = 0
    issues: list[Issue] = field(default_factory=list)

    @property
    def errors(self) -> list[Issue]:
        return [issue for issue in self.issues if issue.severity is Severity.ERROR]

    @property
    def warnings(self) -> list[Issue]:
        return [issue for issue in self.issues if issue.severity is Severity.WARNING]

    @property
    def has_errors(self) -> bool:
        return any(issue.is_error for issue in self.issues)

    def by_path(self) -> dict[Path, list[Issue]]:
        grouped: dict[Path, list[Issue]] = defaultdict(list)
        for issue in self.issues:
            grouped[issue.path].append(issue)
        return dict(grouped)


def lint_post(post: Post, ctx: RuleContext) -> list[Issue]:
    """Run every enabled per-post rule against ``post``."""
    disabled = set(ctx.settings.disabled_rules)
    issues: list[Issue] = []
    for rule_id, rule in POST_RULES.items():
        if rule_id in disabled:
            continue
        issues.extend(rule(ctx, post))
    return issues


def _duplicate_slugs(tree: ContentTree) -> Iterator[Issue]:
    seen: dict[tuple[Path, str], Path] = {}
    for post in tree.posts:
        key = (post.page_dir, post.slug)
        first = seen.setdefault(key, post.path)
        if first != post.path:
            yield Issue(
                post.path,
                "duplicate-slug",
                Severity.ERROR,
                f"slug '{post.slug}' is already used by {first.as_posix()}",
            )


def lint_tree(
    tree: ContentTree, settings: LintSettings | None = None, *, now: datetime | None = None
) -> LintReport:
    """Lint every post in ``tree``, including drafts.

    Body and future-date checks only apply to published posts.
    """
    settings = settings or LintSettings()
    ctx = RuleContext(settings=settings, now=now or datetime.now(UTC))
    disabled = set(settings.disabled_rules)
    unknown = disabled.difference(ALL_RULES)
    if unknown:
        logger.warning("Ignoring unknown rule id(s) in disabled_rules: %s", ", ".join(sorted(unknown)))

    report = LintReport(checked=len(tree.posts) + len(tree.failures))

    if "frontmatter" not in disabled:
        for path, error in tree.failures:
            report.issues.append(Issue(path, "frontmatter", Severity.ERROR, error.reason))

    for post in tree.posts:
        report.issues.extend(lint_post(post, ctx))

    if "duplicate-slug" not in disabled:
        report.issues.extend(_duplicate_slugs(tree))

    report.issues.sort(key=lambda issue: (issue.path.as_posix(), issue.rule))
    logger.debug("Linted %d file(s): %d issue(s)", report.checked, len(report.issues))
    return report
