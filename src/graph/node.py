"""Dependency graph nodes and the edges that produced them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from coords.artifact import Artifact
    from coords.exclusion import ExclusionPattern

Scope = Literal["compile", "runtime", "provided", "test", "system", "import"]

SCOPES: tuple[str, ...] = ("compile", "runtime", "provided", "test", "system", "import")
DEFAULT_SCOPE = "compile"


@dataclass(frozen=True)
class Dependency:
    """A dependency edge as declared by its parent."""

    artifact: Artifact
    scope: str = DEFAULT_SCOPE
    optional: bool = False
    exclusions: tuple[ExclusionPattern, ...] = ()

    def __str__(self) -> str:
        suffix = " (optional)" if self.optional else ""
        return f"{self.artifact} ({self.scope}){suffix}"


@dataclass(eq=False)
class DependencyNode:
    """A node in a collected dependency tree.

    The root stands for the audited component and has no ``dependency``.
    Nodes compare by identity: the same artifact reached through two edges
    is two nodes.
    """

    artifact: Artifact
    dependency: Dependency | None = None
    children: list[DependencyNode] = field(default_factory=list)

    @property
    def scope(self) -> str | None:
        return self.dependency.scope if self.dependency is not None else None

    @property
    def optional(self) -> bool:
        return self.dependency.optional if self.dependency is not None else False

    def __repr__(self) -> str:
        return f"DependencyNode({self.artifact}, children={len(self.children)})"


@dataclass(frozen=True)
class CollectionContext:
    """What a selector knows when deriving the selector for a node's children."""

    artifact: Artifact
    dependency: Dependency | None = None


__all__ = [
    "DEFAULT_SCOPE",
    "SCOPES",
    "CollectionContext",
    "Dependency",
    "DependencyNode",
    "Scope",
]
