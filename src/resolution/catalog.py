"""Offline resolver over a catalog of artifact descriptors.

Descriptors list the dependencies each artifact declares. The resolver walks
them from the root, asking the installed selector which dependencies to
follow, and derives transitive scopes the way Maven does.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from coords.artifact import identity_key
from errors import ResolutionError, VersionParseError
from graph.node import CollectionContext, Dependency, DependencyNode
from graph.visitors import walk
from resolution.api import (
    CollectRequest,
    CollectResult,
    DependencyRequest,
    DependencyResult,
)
from versioning.range import VersionRange, is_range
from versioning.version import ArtifactVersion

if TYPE_CHECKING:
    from collections.abc import Iterable

    from coords.artifact import Artifact, IdentityKey
    from graph.selectors import Selector

logger = logging.getLogger(__name__)

_KEEP_DECLARED = frozenset({"provided", "test", "system", "import"})
_INHERITED = frozenset({"provided", "test"})


@dataclass(frozen=True)
class ArtifactDescriptor:
    """Dependency metadata of one artifact.

    ``repository`` is the id of the repository publishing it; ``None`` means
    the artifact is available locally and is visible to every request.
    """

    artifact: Artifact
    dependencies: tuple[Dependency, ...] = ()
    repository: str | None = None


def derive_scope(parent_scope: str | None, declared_scope: str) -> str:
    """Scope of a transitive dependency reached through ``parent_scope``."""
    if parent_scope is None or declared_scope in _KEEP_DECLARED:
        return declared_scope
    if parent_scope in _INHERITED:
        return parent_scope
    if parent_scope == "runtime":
        return "runtime"
    return declared_scope


class _Collection:
    """State of one collection run."""

    def __init__(self, resolver: CatalogResolver, request: CollectRequest) -> None:
        self.resolver = resolver
        self.visible = {repo.id for repo in request.repositories}
        self.missing: list[str] = []

    def expand(
        self,
        node: DependencyNode,
        selector: Selector,
        on_path: frozenset[IdentityKey],
    ) -> None:
        descriptor = self.resolver.find(node.artifact, self.visible)
        if descriptor is None:
            logger.debug("No dependency information available for %s", node.artifact)
            self.missing.append(str(node.artifact))
            return

        for declared in descriptor.dependencies:
            if not selector.select(declared):
                logger.debug("Skipping %s below %s", declared, node.artifact)
                continue

            artifact = self.resolve_version(declared.artifact)
            dependency = Dependency(
                artifact=artifact,
                scope=derive_scope(node.scope, declared.scope),
                optional=declared.optional,
                exclusions=declared.exclusions,
            )
            child = DependencyNode(artifact=artifact, dependency=dependency)
            node.children.append(child)

            key = identity_key(artifact)
            if key in on_path:
                logger.debug("Dependency cycle at %s", artifact)
                continue
            context = CollectionContext(artifact=artifact, dependency=dependency)
            self.expand(child, selector.derive_child(context), on_path | {key})

    def resolve_version(self, artifact: Artifact) -> Artifact:
        if not is_range(artifact.version):
            return artifact
        try:
            version_range = VersionRange.from_spec(artifact.version)
        except VersionParseError as exc:
            self.missing.append(f"{artifact} ({exc})")
            return artifact

        matching = [
            candidate.version
            for candidate in self.resolver.versions_of(artifact, self.visible)
            if version_range.contains(ArtifactVersion(candidate.version))
        ]
        if not matching:
            self.missing.append(f"{artifact} (no version in range)")
            return artifact
        return artifact.with_version(max(matching, key=ArtifactVersion))


class CatalogResolver:
    """Resolver backed by in-memory artifact descriptors."""

    def __init__(self, descriptors: Iterable[ArtifactDescriptor] = ()) -> None:
        self._descriptors: dict[Artifact, ArtifactDescriptor] = {}
        for descriptor in descriptors:
            self.add(descriptor)

    def add(self, descriptor: ArtifactDescriptor) -> None:
        self._descriptors[descriptor.artifact] = descriptor

    def __contains__(self, artifact: object) -> bool:
        return artifact in self._descriptors

    def __len__(self) -> int:
        return len(self._descriptors)

    def find(self, artifact: Artifact, visible: set[str]) -> ArtifactDescriptor | None:
        descriptor = self._descriptors.get(artifact)
        if descriptor is None or not self._is_visible(descriptor, visible):
            return None
        return descriptor

    def versions_of(self, artifact: Artifact, visible: set[str]) -> list[Artifact]:
        key = identity_key(artifact)
        return [
            candidate
            for candidate, descriptor in self._descriptors.items()
            if identity_key(candidate) == key and self._is_visible(descriptor, visible)
        ]

    @staticmethod
    def _is_visible(descriptor: ArtifactDescriptor, visible: set[str]) -> bool:
        return descriptor.repository is None or descriptor.repository in visible

    def collect_dependencies(self, request: CollectRequest) -> CollectResult:
        root_dependency = request.root
        root = DependencyNode(artifact=root_dependency.artifact)
        collection = _Collection(self, request)

        root_context = CollectionContext(
            artifact=root_dependency.artifact, dependency=root_dependency
        )
        collection.expand(
            root,
            request.selector.derive_child(root_context),
            frozenset({identity_key(root.artifact)}),
        )

        if collection.missing:
            msg = (
                f"Failed to collect dependencies for {root.artifact}: "
                f"missing metadata for {', '.join(collection.missing)}"
            )
            raise ResolutionError(msg, partial_root=root)
        return CollectResult(root=root)

    def resolve_dependencies(self, request: DependencyRequest) -> DependencyResult:
        root = self.collect_dependencies(request.collect).root

        seen: set[Artifact] = set()
        artifacts: list[Artifact] = []
        for node, ancestors in walk(root):
            if request.filter is not None and not request.filter(node, ancestors):
                continue
            if node.artifact not in seen:
                seen.add(node.artifact)
                artifacts.append(node.artifact)
        return DependencyResult(root=root, artifacts=tuple(artifacts))


__all__ = ["ArtifactDescriptor", "CatalogResolver", "derive_scope"]
