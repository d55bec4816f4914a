"""The audited project as supplied by the host build."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from coords.artifact import Artifact
from errors import ConfigurationError
from graph.node import DEFAULT_SCOPE, Dependency
from resolution.catalog import ArtifactDescriptor, CatalogResolver

if TYPE_CHECKING:
    from coords.exclusion import ExclusionPattern
    from resolution.api import RemoteRepository


@dataclass(frozen=True)
class SourceLocation:
    line: int = 0
    column: int = 0

    def format(self) -> str:
        """Render as ``line L, column C``; unknown parts are left out."""
        parts: list[str] = []
        if self.line > 0:
            parts.append(f"line {self.line}")
        if self.column > 0:
            parts.append(f"column {self.column}")
        return ", ".join(parts)


@dataclass(frozen=True)
class DeclaredDependency:
    """A dependency exactly as written in the project's own declaration.

    Nothing is inherited or interpolated, so ``version`` and ``scope`` may
    be missing.
    """

    group_id: str
    artifact_id: str
    version: str | None = None
    type: str = "jar"
    classifier: str = ""
    scope: str | None = None
    optional: bool = False
    exclusions: tuple[ExclusionPattern, ...] = ()
    location: SourceLocation = field(default_factory=SourceLocation)

    @property
    def management_key(self) -> str:
        key = f"{self.group_id}:{self.artifact_id}:{self.type}"
        if self.classifier:
            key += f":{self.classifier}"
        return key

    def to_dependency(self) -> Dependency:
        if self.version is None:
            msg = f"Dependency {self.management_key} has no version"
            raise ConfigurationError(msg)
        artifact = Artifact(
            group_id=self.group_id,
            artifact_id=self.artifact_id,
            version=self.version,
            extension=self.type,
            classifier=self.classifier,
        )
        return Dependency(
            artifact=artifact,
            scope=self.scope or DEFAULT_SCOPE,
            optional=self.optional,
            exclusions=self.exclusions,
        )


@dataclass(frozen=True)
class ProjectDescriptor:
    artifact: Artifact
    declared: tuple[DeclaredDependency, ...] = ()
    runtime_artifacts: tuple[Artifact, ...] = ()
    repositories: tuple[RemoteRepository, ...] = ()
    descriptors: tuple[ArtifactDescriptor, ...] = ()

    def root_descriptor(self) -> ArtifactDescriptor:
        """Descriptor of the project itself, built from its declarations."""
        return ArtifactDescriptor(
            artifact=self.artifact,
            dependencies=tuple(dep.to_dependency() for dep in self.declared),
        )

    def resolver(self) -> CatalogResolver:
        resolver = CatalogResolver(self.descriptors)
        if self.artifact not in resolver:
            resolver.add(self.root_descriptor())
        return resolver


__all__ = ["DeclaredDependency", "ProjectDescriptor", "SourceLocation"]
