from __future__ import annotations

import os
from pathlib import Path

import pytest

from tests.helpers import write_post


@pytest.fixture(autouse=True)
def _clean_blogkit_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in list(os.environ):
        if key.startswith("BLOGKIT_"):
            monkeypatch.delenv(key)


@pytest.fixture
def content_dir(tmp_path: Path) -> Path:
    """A small Hugo-style content tree with one published post and one draft."""
    root = tmp_path / "content"
    write_post(
        root,
        "posts/ef-core-interceptors.md",
        """
        ---
        title: "EF Core Interceptors"
        date: 2023-03-14T09:30:00+01:00
        draft: false
        ---

        Interceptors let you hook into EF Core operations.

        ```csharp
        public class AuditInterceptor : SaveChangesInterceptor { }
        ```
        """,
    )
    write_post(
        root,
        "posts/polly-retries.md",
        """
        ---
        title: "Retry policies with Polly"
        date: 2023-05-02
        draft: true
        ---
        """,
    )
    write_post(
        root,
        "posts/_index.md",
        """
        ---
        title: "Posts"
        ---
        """,
    )
    return root
