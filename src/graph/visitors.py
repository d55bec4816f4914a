"""Tree walks over collected dependency graphs."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from coords.artifact import Artifact
    from graph.node import DependencyNode

Path = tuple["DependencyNode", ...]
NodePredicate = Callable[["DependencyNode"], bool]


def walk(root: DependencyNode) -> Iterator[tuple[DependencyNode, Path]]:
    """Yield ``(node, ancestors)`` in depth-first pre-order.

    ``ancestors`` runs from the root down to the node's parent and is empty
    for the root itself. Children are visited in declaration order.
    """
    stack: list[tuple[DependencyNode, Path]] = [(root, ())]
    while stack:
        node, ancestors = stack.pop()
        yield node, ancestors
        # a node already on its own path would loop forever
        if any(ancestor is node for ancestor in ancestors):
            continue
        below = (*ancestors, node)
        for child in reversed(node.children):
            stack.append((child, below))


def record_paths(root: DependencyNode, predicate: NodePredicate) -> list[Path]:
    """Return every root-to-node path ending at a node matching ``predicate``.

    Paths include both the root and the matching node. A node reached via
    several edges yields one path per edge; matches below a match are
    reported as well.
    """
    return [
        (*ancestors, node)
        for node, ancestors in walk(root)
        if predicate(node)
    ]


def same_artifact(artifact: Artifact) -> NodePredicate:
    """Predicate matching nodes whose artifact equals ``artifact`` exactly."""

    def _matches(node: DependencyNode) -> bool:
        return node.artifact == artifact

    return _matches


def distinct_artifacts(root: DependencyNode) -> list[Artifact]:
    """Artifacts of the tree in first-visit order, each listed once."""
    seen: set[Artifact] = set()
    ordered: list[Artifact] = []
    for node, _ancestors in walk(root):
        if node.artifact not in seen:
            seen.add(node.artifact)
            ordered.append(node.artifact)
    return ordered


def paths_by_artifact(
    root: DependencyNode, artifacts: list[Artifact]
) -> dict[Artifact, list[Path]]:
    """Map each artifact to all of its paths, one tree walk per artifact."""
    return {artifact: record_paths(root, same_artifact(artifact)) for artifact in artifacts}


__all__ = [
    "NodePredicate",
    "Path",
    "distinct_artifacts",
    "paths_by_artifact",
    "record_paths",
    "same_artifact",
    "walk",
]
