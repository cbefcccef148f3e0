"""Configuration models for blogkit.

Settings come from ``.blogkit.toml`` (looked up from the working directory
upwards), with ``BLOGKIT_*`` environment variables taking precedence:

- ``BLOGKIT_CONTENT_DIR=site/content``
- ``BLOGKIT_LINT__MAX_TITLE_LENGTH=80``
"""

from __future__ import annotations

from datetime import tzinfo
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

CONFIG_FILENAME = ".blogkit.toml"
ENV_PREFIX = "BLOGKIT_"

DEFAULT_REQUIRED_FIELDS = ("title", "date", "draft")
DEFAULT_MAX_TITLE_LENGTH = 100


class LintSettings(BaseModel):
    """Content lint configuration."""

    required_fields: list[str] = Field(
        default_factory=lambda: list(DEFAULT_REQUIRED_FIELDS),
        description="Front-matter keys every post must define",
    )
    max_title_length: int = Field(
        default=DEFAULT_MAX_TITLE_LENGTH,
        ge=1,
        description="Titles longer than this are reported as a warning",
    )
    disabled_rules: list[str] = Field(
        default_factory=list,
        description="Rule ids to skip (e.g. 'future-date')",
    )
    exclude: list[str] = Field(
        default_factory=list,
        description="Glob patterns, relative to the content dir, that are not loaded",
    )


class BlogkitConfig(BaseSettings):
    """Root configuration, mirroring the ``.blogkit.toml`` schema."""

    content_dir: Path = Field(default=Path("content"), description="Markdown source tree")
    output_dir: Path = Field(default=Path("public"), description="Generated site directory")
    timezone: str = Field(default="UTC", description="Zone assumed for naive front-matter dates")
    ugly_urls: bool = Field(
        default=False,
        description="Pages are written as <slug>.html instead of <slug>/index.html",
    )
    lint: LintSettings = Field(default_factory=LintSettings)

    model_config = SettingsConfigDict(
        extra="forbid",
        validate_assignment=True,
        env_prefix=ENV_PREFIX,
        env_nested_delimiter="__",
    )

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            msg = f"Unknown timezone: {v!r}"
            raise ValueError(msg) from exc
        return v

    @property
    def tz(self) -> tzinfo:
        return ZoneInfo(self.timezone)

    def resolve_paths(self, root: Path) -> BlogkitConfig:
        """Return a copy with relative directories anchored at ``root``."""

        def anchor(path: Path) -> Path:
            return path if path.is_absolute() else root / path

        return self.model_copy(
            update={"content_dir": anchor(self.content_dir), "output_dir": anchor(self.output_dir)}
        )
