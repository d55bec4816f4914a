"""Load project descriptors from ``classpath-project.toml``."""

from __future__ import annotations

import re
import tomllib
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from coords.artifact import parse_artifact
from coords.exclusion import parse_exclusion_patterns
from errors import ConfigurationError
from graph.node import DEFAULT_SCOPE, SCOPES, Dependency
from project.model import DeclaredDependency, ProjectDescriptor, SourceLocation
from resolution.api import RemoteRepository
from resolution.catalog import ArtifactDescriptor

if TYPE_CHECKING:
    from pathlib import Path

PROJECT_FILENAME = "classpath-project.toml"

_DEPENDENCY_HEADER = re.compile(r"^(\s*)\[\[\s*dependencies\s*\]\]")


class _Strict(BaseModel):
    model_config = ConfigDict(extra="forbid")


class DeclaredDependencyEntry(_Strict):
    """A ``[[dependencies]]`` table: the raw declaration of the project."""

    group_id: str = Field(min_length=1)
    artifact_id: str = Field(min_length=1)
    version: str | None = None
    type: str = "jar"
    classifier: str = ""
    scope: str | None = None
    optional: bool = False
    exclusions: list[str] = Field(default_factory=list)


class CatalogDependencyEntry(_Strict):
    coordinate: str
    scope: str = DEFAULT_SCOPE
    optional: bool = False
    exclusions: list[str] = Field(default_factory=list)


class CatalogEntry(_Strict):
    """Dependency metadata for one artifact, as published by a repository."""

    coordinate: str
    repository: str | None = None
    dependencies: list[CatalogDependencyEntry] = Field(default_factory=list)


class ProjectFile(_Strict):
    coordinate: str = Field(description="Coordinates of the audited artifact")
    runtime: list[str] = Field(
        default_factory=list,
        description="Artifacts present on the runtime classpath",
    )
    repositories: list[RemoteRepository] = Field(default_factory=list)
    dependencies: list[DeclaredDependencyEntry] = Field(default_factory=list)
    catalog: list[CatalogEntry] = Field(default_factory=list)


def _check_scope(scope: str | None, where: str) -> None:
    if scope is not None and scope not in SCOPES:
        msg = f"Unknown scope '{scope}' for {where}. Valid scopes: {', '.join(SCOPES)}"
        raise ConfigurationError(msg)


def dependency_locations(text: str) -> list[SourceLocation]:
    """Best-effort locations of each ``[[dependencies]]`` table, in order."""
    locations: list[SourceLocation] = []
    for line_number, line in enumerate(text.splitlines(), 1):
        match = _DEPENDENCY_HEADER.match(line)
        if match:
            locations.append(SourceLocation(line_number, len(match.group(1)) + 1))
    return locations


def _declared(
    entries: list[DeclaredDependencyEntry], locations: list[SourceLocation]
) -> tuple[DeclaredDependency, ...]:
    declared: list[DeclaredDependency] = []
    for index, entry in enumerate(entries):
        _check_scope(entry.scope, f"{entry.group_id}:{entry.artifact_id}")
        # inline-table declarations have no header to point at
        location = locations[index] if len(locations) == len(entries) else SourceLocation()
        declared.append(
            DeclaredDependency(
                group_id=entry.group_id,
                artifact_id=entry.artifact_id,
                version=entry.version,
                type=entry.type,
                classifier=entry.classifier,
                scope=entry.scope,
                optional=entry.optional,
                exclusions=tuple(parse_exclusion_patterns(entry.exclusions)),
                location=location,
            )
        )
    return tuple(declared)


def _descriptor(entry: CatalogEntry) -> ArtifactDescriptor:
    dependencies: list[Dependency] = []
    for dep in entry.dependencies:
        _check_scope(dep.scope, dep.coordinate)
        dependencies.append(
            Dependency(
                artifact=parse_artifact(dep.coordinate),
                scope=dep.scope,
                optional=dep.optional,
                exclusions=tuple(parse_exclusion_patterns(dep.exclusions)),
            )
        )
    return ArtifactDescriptor(
        artifact=parse_artifact(entry.coordinate),
        dependencies=tuple(dependencies),
        repository=entry.repository,
    )


def parse_project(text: str, source: str = PROJECT_FILENAME) -> ProjectDescriptor:
    """Build a project descriptor from TOML text.

    Raises:
        ConfigurationError: If the TOML or its content is invalid.
    """
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {source}: {e}"
        raise ConfigurationError(msg) from e

    try:
        project = ProjectFile.model_validate(data)
    except ValidationError as e:
        msg = f"Invalid project description in {source}: {e}"
        raise ConfigurationError(msg) from e

    return ProjectDescriptor(
        artifact=parse_artifact(project.coordinate),
        declared=_declared(project.dependencies, dependency_locations(text)),
        runtime_artifacts=tuple(parse_artifact(item) for item in project.runtime),
        repositories=tuple(project.repositories),
        descriptors=tuple(_descriptor(entry) for entry in project.catalog),
    )


def load_project(path: Path) -> ProjectDescriptor:
    """Load a project descriptor file, or ``root/classpath-project.toml``."""
    project_path = path / PROJECT_FILENAME if path.is_dir() else path
    if not project_path.is_file():
        msg = f"Project description not found: {project_path}"
        raise ConfigurationError(msg)

    try:
        text = project_path.read_text(encoding="utf-8")
    except OSError as e:
        msg = f"Failed to read {project_path}: {e}"
        raise ConfigurationError(msg) from e
    return parse_project(text, source=str(project_path))


__all__ = [
    "PROJECT_FILENAME",
    "CatalogEntry",
    "DeclaredDependencyEntry",
    "ProjectFile",
    "dependency_locations",
    "load_project",
    "parse_project",
]
