"""Interface between the audit and the dependency resolver it delegates to."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from coords.artifact import Artifact
    from graph.node import Dependency, DependencyNode
    from graph.selectors import Selector

DependencyFilter = Callable[["DependencyNode", Sequence["DependencyNode"]], bool]


class RemoteRepository(BaseModel):
    """A repository endpoint dependency metadata is looked up in."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(min_length=1, description="Repository identifier")
    url: str = Field(default="", description="Repository base URL")


@dataclass(frozen=True)
class CollectRequest:
    root: Dependency
    selector: Selector
    repositories: tuple[RemoteRepository, ...] = ()


@dataclass(frozen=True)
class CollectResult:
    root: DependencyNode


@dataclass(frozen=True)
class DependencyRequest:
    """Collect, then resolve the artifacts accepted by ``filter``.

    The filter only narrows ``DependencyResult.artifacts``; the returned
    root is the complete collected tree.
    """

    collect: CollectRequest
    filter: DependencyFilter | None = None


@dataclass(frozen=True)
class DependencyResult:
    root: DependencyNode
    artifacts: tuple[Artifact, ...] = field(default_factory=tuple)


class DependencyResolver(Protocol):
    """Service that turns a root dependency into a dependency graph.

    Both operations raise ``errors.ResolutionError`` carrying the partial
    tree when metadata cannot be found.
    """

    def collect_dependencies(self, request: CollectRequest) -> CollectResult: ...

    def resolve_dependencies(self, request: DependencyRequest) -> DependencyResult: ...


def root_pattern_filter(artifact: Artifact) -> DependencyFilter:
    """Accept nodes with the same group and artifact id as ``artifact``."""

    def _accept(node: DependencyNode, parents: Sequence[DependencyNode]) -> bool:
        return (
            node.artifact.group_id == artifact.group_id
            and node.artifact.artifact_id == artifact.artifact_id
        )

    return _accept


def scope_filter(*scopes: str) -> DependencyFilter:
    """Accept nodes whose edge scope is one of ``scopes``."""
    included = frozenset(scopes)

    def _accept(node: DependencyNode, parents: Sequence[DependencyNode]) -> bool:
        return node.scope in included

    return _accept


def or_filter(*filters: DependencyFilter) -> DependencyFilter:
    def _accept(node: DependencyNode, parents: Sequence[DependencyNode]) -> bool:
        return any(f(node, parents) for f in filters)

    return _accept


__all__ = [
    "CollectRequest",
    "CollectResult",
    "DependencyFilter",
    "DependencyRequest",
    "DependencyResolver",
    "DependencyResult",
    "RemoteRepository",
    "or_filter",
    "root_pattern_filter",
    "scope_filter",
]
