"""Issue records shared by the linter and the output verifier."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class Severity(str, Enum):
    """Issue severity levels."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True, slots=True)
class Issue:
    """A single problem found in the content tree or the generated site.

    Attributes:
        path: File the issue concerns, relative to its root directory.
        rule: Stable rule id (e.g. ``empty-title``).
        severity: How serious the issue is.
        message: Human-readable description.

    """

    path: Path
    rule: str
    severity: Severity
    message: str

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    def to_dict(self) -> dict[str, str]:
        return {
            "path": self.path.as_posix(),
            "rule": self.rule,
            "severity": self.severity.value,
            "message": self.message,
        }
