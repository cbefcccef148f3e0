from datetime import UTC, datetime
from pathlib import Path

import pytest

from blogkit.content import discover_markdown, load_post, load_posts
from blogkit.exceptions import ContentDirectoryNotFoundError, FrontmatterError
from blogkit.slugify import path_slug, slugify
from tests.helpers import write_post


class TestDiscovery:
    def test_skips_section_index_pages(self, content_dir: Path) -> None:
        found = [p.relative_to(content_dir).as_posix() for p in discover_markdown(content_dir)]

        assert found == ["posts/ef-core-interceptors.md", "posts/polly-retries.md"]

    def test_honours_exclude_globs(self, content_dir: Path) -> None:
        found = discover_markdown(content_dir, exclude=["posts/polly-*"])

        assert [p.name for p in found] == ["ef-core-interceptors.md"]

    def test_missing_directory_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ContentDirectoryNotFoundError):
            discover_markdown(tmp_path / "nope")


class TestLoadPost:
    def test_builds_post_from_file(self, content_dir: Path) -> None:
        post = load_post(content_dir / "posts/ef-core-interceptors.md", content_dir)

        assert post.path == Path("posts/ef-core-interceptors.md")
        assert post.section == "posts"
        assert post.slug == "ef-core-interceptors"
        assert post.title == "EF Core Interceptors"
        assert post.date == datetime(2023, 3, 14, 8, 30, tzinfo=UTC)
        assert post.published
        assert post.has_body
        assert post.source == content_dir / "posts/ef-core-interceptors.md"

    def test_explicit_slug_wins(self, tmp_path: Path) -> None:
        write_post(tmp_path, "posts/2021-01-01-hello.md", "---\ntitle: Hi\nslug: Hello Again\n---\nBody\n")

        post = load_post(tmp_path / "posts/2021-01-01-hello.md", tmp_path)

        assert post.slug == "hello-again"

    def test_page_bundle_uses_directory_name(self, tmp_path: Path) -> None:
        write_post(tmp_path, "posts/csrf-tokens/index.md", "---\ntitle: CSRF\n---\nBody\n")

        post = load_post(tmp_path / "posts/csrf-tokens/index.md", tmp_path)

        assert post.slug == "csrf-tokens"

    def test_root_level_post_has_no_section(self, tmp_path: Path) -> None:
        write_post(tmp_path, "about.md", "---\ntitle: About\n---\nMe.\n")

        post = load_post(tmp_path / "about.md", tmp_path)

        assert post.section == ""

    def test_missing_draft_defaults_to_published(self, tmp_path: Path) -> None:
        write_post(tmp_path, "posts/a.md", "---\ntitle: A\n---\nBody\n")

        assert load_post(tmp_path / "posts/a.md", tmp_path).draft is False

    def test_non_boolean_draft_is_not_treated_as_draft(self, tmp_path: Path) -> None:
        write_post(tmp_path, "posts/a.md", '---\ntitle: A\ndraft: "true"\n---\nBody\n')

        post = load_post(tmp_path / "posts/a.md", tmp_path)

        assert post.draft is False
        assert post.metadata["draft"] == "true"

    def test_long_file_name_is_kept_whole(self, tmp_path: Path) -> None:
        name = "ef-core-interceptors-for-auditing-and-soft-deletes-in-aspnet-core"
        write_post(tmp_path, f"posts/{name}.md", "---\ntitle: Long\n---\nBody\n")

        post = load_post(tmp_path / f"posts/{name}.md", tmp_path)

        assert post.slug == name

    def test_nested_post_keeps_its_directory(self, tmp_path: Path) -> None:
        write_post(tmp_path, "posts/2022/intro.md", "---\ntitle: Intro\n---\nBody\n")
        write_post(tmp_path, "posts/2022/csrf/index.md", "---\ntitle: CSRF\n---\nBody\n")

        post = load_post(tmp_path / "posts/2022/intro.md", tmp_path)
        bundle = load_post(tmp_path / "posts/2022/csrf/index.md", tmp_path)

        assert post.section == "posts"
        assert post.page_dir == Path("posts/2022")
        assert bundle.page_dir == Path("posts/2022")
        assert bundle.slug == "csrf"

    def test_byte_order_mark_is_ignored(self, tmp_path: Path) -> None:
        path = tmp_path / "posts/bom.md"
        path.parent.mkdir(parents=True)
        path.write_bytes(b"\xef\xbb\xbf---\ntitle: BOM\ndate: 2024-01-01\ndraft: false\n---\nBody\n")

        post = load_post(path, tmp_path)

        assert post.title == "BOM"
        assert post.metadata["draft"] is False

    def test_malformed_frontmatter_raises(self, tmp_path: Path) -> None:
        write_post(tmp_path, "posts/bad.md", "---\ntitle: [oops\n---\nBody\n")

        with pytest.raises(FrontmatterError):
            load_post(tmp_path / "posts/bad.md", tmp_path)


class TestLoadPosts:
    def test_loads_posts_and_drafts(self, content_dir: Path) -> None:
        tree = load_posts(content_dir)

        assert len(tree) == 2
        assert [p.slug for p in tree.published] == ["ef-core-interceptors"]
        assert [p.slug for p in tree.drafts] == ["polly-retries"]
        assert tree.sections == {"posts"}

    def test_can_exclude_drafts(self, content_dir: Path) -> None:
        tree = load_posts(content_dir, include_drafts=False)

        assert [p.slug for p in tree] == ["ef-core-interceptors"]

    def test_collects_failures_without_aborting(self, content_dir: Path) -> None:
        write_post(content_dir, "posts/broken.md", "---\ntitle: Broken\n")

        tree = load_posts(content_dir)

        assert len(tree) == 2
        assert [path for path, _ in tree.failures] == [Path("posts/broken.md")]
        assert isinstance(tree.failures[0][1], FrontmatterError)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("Hello World!", "hello-world"),
        ("Café à Paris", "cafe-a-paris"),
        ("!!!", "post"),
    ],
)
def test_slugify(text: str, expected: str) -> None:
    assert slugify(text) == expected


def test_slugify_truncates() -> None:
    assert slugify("a" * 100, max_len=20) == "a" * 20


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("EF Core Interceptors", "ef-core-interceptors"),
        ("c#-tips", "c#-tips"),
        ("x" * 80, "x" * 80),
    ],
)
def test_path_slug(name: str, expected: str) -> None:
    assert path_slug(name) == expected
