"""Require the provided dependencies of a component on its runtime classpath.

Provided dependencies are not inherited by whoever runs the component, so
they have to be redeclared. The dependency tree is collected with the
selection policy, then every node below the root is looked up in the runtime
artifact list by identity and version compatibility.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import TYPE_CHECKING

from coords.artifact import identity_key
from errors import VersionParseError
from graph.format import format_intermediate_path
from graph.selectors import SelectionPolicy, build_selector_pipeline
from graph.visitors import walk
from resolution.collect import collect_tree
from rules.results import CheckResult, Violation, ViolationKind
from versioning.compat import closest_version, is_compatible
from versioning.version import ArtifactVersion

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from coords.artifact import Artifact, IdentityKey
    from graph.node import DependencyNode
    from graph.visitors import Path
    from resolution.api import DependencyResolver, RemoteRepository

logger = logging.getLogger(__name__)

CHECK_NAME = "provided"


class RuntimeIndex:
    """Runtime artifacts grouped by version-disregarding identity."""

    def __init__(self, runtime_artifacts: Iterable[Artifact]) -> None:
        grouped: dict[IdentityKey, set[str]] = defaultdict(set)
        for artifact in runtime_artifacts:
            grouped[identity_key(artifact)].add(artifact.version)
        self._versions = {
            key: sorted(versions, key=ArtifactVersion)
            for key, versions in grouped.items()
        }

    def __len__(self) -> int:
        return sum(len(versions) for versions in self._versions.values())

    def versions(self, artifact: Artifact) -> list[str]:
        return self._versions.get(identity_key(artifact), [])

    def contains_identity(self, artifact: Artifact) -> bool:
        return identity_key(artifact) in self._versions


@dataclass(frozen=True)
class Mismatch:
    kind: ViolationKind
    closest_version: str | None = None
    detail: str = ""


def find_mismatch(artifact: Artifact, index: RuntimeIndex) -> Mismatch | None:
    """Return why ``artifact`` is not satisfied by the runtime, or None."""
    candidates = index.versions(artifact)
    if not candidates:
        return Mismatch(kind="missing")

    try:
        for candidate in candidates:
            if is_compatible(artifact.version, candidate):
                return None
    except VersionParseError as e:
        logger.error("Invalid version given for artifact %s: %s", artifact, e)
        return Mismatch(kind="invalid_version", detail=str(e))

    closest = closest_version(artifact.version, candidates)
    logger.warning(
        "Found provided dependency %s only with potentially incompatible version %s "
        "in runtime classpath",
        artifact,
        closest,
    )
    return Mismatch(kind="incompatible_version", closest_version=closest)


def _describe(node: DependencyNode, via: str, mismatch: Mismatch) -> str:
    subject = f"Dependency {node.dependency}{via}"
    if mismatch.kind == "incompatible_version":
        return (
            f"{subject} found in runtime classpath only with potentially "
            f"incompatible version {mismatch.closest_version}!"
        )
    if mismatch.kind == "invalid_version":
        return f"{subject} has an invalid version: {mismatch.detail}"
    return f"{subject} not found as runtime dependency!"


def _join_vias(paths: Sequence[Path]) -> str:
    vias = [format_intermediate_path(path[:-1]) for path in paths]
    routes = [via for via in vias if via]
    if not routes:
        return ""
    if len(routes) < len(vias):
        routes.append(" directly")
    return " and".join(routes)


def check_tree(root: DependencyNode, runtime_artifacts: Iterable[Artifact]) -> CheckResult:
    """Check every node below ``root`` against the runtime artifacts.

    An artifact reached through several paths is reported once, listing
    every path.
    """
    index = RuntimeIndex(runtime_artifacts)
    mismatches: dict[Artifact, Mismatch | None] = {}
    first_node: dict[Artifact, DependencyNode] = {}
    paths: dict[Artifact, list[Path]] = defaultdict(list)

    for node, ancestors in walk(root):
        if not ancestors:
            continue
        artifact = node.artifact
        if artifact not in mismatches:
            mismatches[artifact] = find_mismatch(artifact, index)
            first_node[artifact] = node
        if mismatches[artifact] is not None:
            paths[artifact].append((*ancestors, node))

    violations: list[Violation] = []
    for artifact, mismatch in mismatches.items():
        if mismatch is None:
            continue
        message = _describe(first_node[artifact], _join_vias(paths[artifact]), mismatch)
        logger.warning(message)
        violations.append(
            Violation(
                artifact=str(artifact),
                kind=mismatch.kind,
                message=message,
                paths=tuple(paths[artifact]),
                closest_version=mismatch.closest_version,
            )
        )
    return CheckResult(
        check=CHECK_NAME, subject=str(root.artifact), violations=tuple(violations)
    )


def check_provided_coverage(
    root: Artifact,
    policy: SelectionPolicy,
    runtime_artifacts: Sequence[Artifact],
    resolver: DependencyResolver,
    repositories: Sequence[RemoteRepository] = (),
) -> CheckResult:
    """Collect the dependency tree of ``root`` and check it against the runtime.

    Raises:
        ResolutionError: If the tree cannot be collected.
    """
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Collected %d runtime dependencies", len(runtime_artifacts))
        for artifact in runtime_artifacts:
            logger.debug("%s", artifact)

    tree = collect_tree(root, build_selector_pipeline(policy), repositories, resolver)
    return check_tree(tree, runtime_artifacts)


__all__ = [
    "CHECK_NAME",
    "Mismatch",
    "RuntimeIndex",
    "check_provided_coverage",
    "check_tree",
    "find_mismatch",
]
