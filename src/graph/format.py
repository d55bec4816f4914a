"""Text rendering of trees, paths and violations for diagnostics."""

from __future__ import annotations

from typing import TYPE_CHECKING

from graph.visitors import walk

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from graph.node import DependencyNode
    from graph.visitors import Path
    from rules.results import Violation

INDENT = "    "
PATH_SEPARATOR = " -> "


def format_tree(root: DependencyNode) -> str:
    """Render ``root`` and its descendants, one indented line per node."""
    lines: list[str] = []
    for node, ancestors in walk(root):
        scope = f" ({node.scope})" if node.dependency is not None else ""
        lines.append(f"{INDENT * len(ancestors)}{node.artifact}{scope}")
    return "\n".join(lines)


def format_path(path: Sequence[DependencyNode], *, skip_root: bool = False) -> str:
    """Render a path as ``a -> b -> c``."""
    nodes = path[1:] if skip_root else path
    return PATH_SEPARATOR.join(str(node.artifact) for node in nodes)


def format_paths(paths: Sequence[Path]) -> str:
    """Render the provenance of one artifact.

    Each path is rendered without its final node (the artifact itself).
    When every path is root -> artifact the result is ``direct``.
    """
    if all(len(path) <= 2 for path in paths):
        return "direct"
    return "via " + " and ".join(format_path(path[:-1]) for path in paths)


def format_intermediate_path(ancestors: Sequence[DependencyNode]) -> str:
    """Render the nodes between the root and a node as `` via a -> b``."""
    intermediate = ancestors[1:]
    if not intermediate:
        return ""
    return " via " + format_path(intermediate)


def format_violations(violations: Iterable[Violation]) -> str:
    return "\n".join(violation.message for violation in violations)


__all__ = [
    "format_intermediate_path",
    "format_path",
    "format_paths",
    "format_tree",
    "format_violations",
]
