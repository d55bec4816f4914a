"""Dependency resolution: resolver interface, offline resolver, collectors."""

from resolution.api import (
    CollectRequest,
    CollectResult,
    DependencyRequest,
    DependencyResolver,
    DependencyResult,
    RemoteRepository,
)
from resolution.catalog import ArtifactDescriptor, CatalogResolver
from resolution.collect import collect_resolved_map, collect_tree

__all__ = [
    "ArtifactDescriptor",
    "CatalogResolver",
    "CollectRequest",
    "CollectResult",
    "DependencyRequest",
    "DependencyResolver",
    "DependencyResult",
    "RemoteRepository",
    "collect_resolved_map",
    "collect_tree",
]
