"""Slug generation for post URLs."""

import re
from unicodedata import normalize

from pymdownx.slugs import slugify as _md_slugify

_slugify_lower = _md_slugify(case="lower", separator="-")

_WHITESPACE = re.compile(r"\s")


def slugify(text: str, max_len: int | None = 60) -> str:
    """Convert text to a URL-friendly ASCII slug.

    Uses Python-Markdown heading-id semantics. ``max_len=None`` disables
    truncation.

    Examples:
        >>> slugify("Hello World!")
        'hello-world'
        >>> slugify("Café à Paris")
        'cafe-a-paris'
        >>> slugify("EF Core: Interceptors")
        'ef-core-interceptors'

    """
    if text is None:
        return ""

    normalized = normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    slug = _slugify_lower(normalized, sep="-")

    slug = slug or "post"
    if max_len is not None and len(slug) > max_len:
        slug = slug[:max_len].rstrip("-")
    return slug


def path_slug(name: str) -> str:
    """URL segment the generator derives from a file or directory name.

    The name is lowercased and each whitespace character becomes ``-``.
    Nothing is stripped or truncated.

    Examples:
        >>> path_slug("EF Core Interceptors")
        'ef-core-interceptors'
        >>> path_slug("c#-tips")
        'c#-tips'

    """
    return _WHITESPACE.sub("-", name.strip().lower())
