"""blogkit: content checks for Markdown blogs built by a static-site generator."""

from blogkit.content import ContentTree, load_posts
from blogkit.lint import LintReport, lint_tree
from blogkit.models import Post, RenderedPage
from blogkit.output import verify_output

__version__ = "0.3.0"
__all__ = [
    "ContentTree",
    "LintReport",
    "Post",
    "RenderedPage",
    "lint_tree",
    "load_posts",
    "verify_output",
]
