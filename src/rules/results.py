"""Violation records and per-check results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal

from errors import CoverageViolationError
from graph.format import format_path, format_violations

if TYPE_CHECKING:
    from graph.visitors import Path

ViolationKind = Literal[
    "missing",
    "incompatible_version",
    "invalid_version",
    "missing_scope",
]


@dataclass(frozen=True)
class Violation:
    artifact: str
    kind: ViolationKind
    message: str
    paths: tuple[Path, ...] = ()
    closest_version: str | None = None
    location: str = ""

    def to_dict(self) -> dict[str, object]:
        return {
            "artifact": self.artifact,
            "kind": self.kind,
            "message": self.message,
            "paths": [format_path(path) for path in self.paths],
            "closest_version": self.closest_version,
            "location": self.location,
        }


@dataclass(frozen=True)
class CheckResult:
    """Outcome of one check; ``violations`` lists everything found."""

    check: str
    subject: str
    violations: tuple[Violation, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return not self.violations

    @property
    def violation_count(self) -> int:
        return len(self.violations)

    @property
    def messages(self) -> list[str]:
        return [violation.message for violation in self.violations]

    def summary(self) -> str:
        count = self.violation_count
        if count == 0:
            return f"{self.check}: no violations"
        if self.check == "explicit-scope":
            noun = "scope" if count == 1 else "scopes"
            head = f"Found {count} missing dependency {noun}"
        else:
            head = f"Found {count} missing runtime dependencies"
        return f"{head}:\n{format_violations(self.violations)}"

    def raise_for_violations(self) -> None:
        if not self.ok:
            raise CoverageViolationError(self)

    def to_dict(self) -> dict[str, object]:
        return {
            "check": self.check,
            "subject": self.subject,
            "ok": self.ok,
            "violation_count": self.violation_count,
            "violations": [violation.to_dict() for violation in self.violations],
        }


__all__ = [
    "CheckResult",
    "Violation",
    "ViolationKind",
]
