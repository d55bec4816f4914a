"""Error taxonomy for classpath audits."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from graph.node import DependencyNode
    from rules.results import CheckResult


class AuditError(Exception):
    """Base class for every error raised by an audit."""


class ConfigurationError(AuditError):
    """Raised when patterns, config or project files cannot be used."""


class VersionParseError(AuditError):
    """Raised when a version or version range is syntactically invalid."""


class ResolutionError(AuditError):
    """Raised when the resolver could not complete graph collection.

    The tree collected so far is kept on ``partial_root`` so callers can
    render it without re-running the resolver.
    """

    def __init__(self, message: str, partial_root: DependencyNode | None = None):
        super().__init__(message)
        self.partial_root = partial_root

    def describe(self) -> str:
        """Return the message with the partial dependency tree appended."""
        from graph.format import format_tree

        if self.partial_root is None:
            return str(self)
        return f"{self}. Partial dependency tree:\n{format_tree(self.partial_root)}"


class CoverageViolationError(AuditError):
    """Terminal signal carrying every violation found by one check."""

    def __init__(self, result: CheckResult):
        super().__init__(result.summary())
        self.result = result


__all__ = [
    "AuditError",
    "ConfigurationError",
    "CoverageViolationError",
    "ResolutionError",
    "VersionParseError",
]
