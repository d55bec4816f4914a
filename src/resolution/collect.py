"""Collect filtered dependency graphs through a resolver."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from graph.format import format_paths, format_tree
from graph.node import Dependency
from graph.visitors import paths_by_artifact
from resolution.api import (
    CollectRequest,
    DependencyRequest,
    or_filter,
    root_pattern_filter,
    scope_filter,
)

if TYPE_CHECKING:
    from coords.artifact import Artifact
    from graph.node import DependencyNode
    from graph.selectors import Selector
    from graph.visitors import Path
    from resolution.api import DependencyResolver, RemoteRepository

logger = logging.getLogger(__name__)

PROVIDED_SCOPE = "provided"


def root_dependency(artifact: Artifact) -> Dependency:
    """The edge standing for the audited component itself."""
    return Dependency(artifact=artifact, scope="")


def collect_tree(
    root: Artifact,
    selector: Selector,
    repositories: Sequence[RemoteRepository],
    resolver: DependencyResolver,
) -> DependencyNode:
    """Collect the dependency tree of ``root`` pruned by ``selector``.

    Raises:
        ResolutionError: With the partial tree if collection fails.
    """
    request = CollectRequest(
        root=root_dependency(root),
        selector=selector,
        repositories=tuple(repositories),
    )
    result = resolver.collect_dependencies(request)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("dependency tree:\n%s", format_tree(result.root))
    return result.root


def collect_resolved_map(
    root: Artifact,
    selector: Selector,
    repositories: Sequence[RemoteRepository],
    resolver: DependencyResolver,
    *,
    target_scope: str = PROVIDED_SCOPE,
) -> dict[Artifact, list[Path]]:
    """Map each artifact reachable in ``target_scope`` to all its paths.

    The root artifact is kept by the resolution filter regardless of scope
    and removed from the returned mapping.

    Raises:
        ResolutionError: With the partial tree if resolution fails.
    """
    request = DependencyRequest(
        collect=CollectRequest(
            root=root_dependency(root),
            selector=selector,
            repositories=tuple(repositories),
        ),
        filter=or_filter(root_pattern_filter(root), scope_filter(target_scope)),
    )
    result = resolver.resolve_dependencies(request)

    artifacts = [artifact for artifact in result.artifacts if str(artifact) != str(root)]
    artifact_map = paths_by_artifact(result.root, artifacts)

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Collected %d transitive dependencies:", len(artifact_map))
        for artifact, paths in artifact_map.items():
            logger.debug("%s (%s)", artifact, format_paths(paths))
    return artifact_map


__all__ = ["collect_resolved_map", "collect_tree", "root_dependency"]
