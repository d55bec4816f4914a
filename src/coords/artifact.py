"""Artifact coordinates and the keys used to compare them."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from errors import ConfigurationError

DEFAULT_EXTENSION = "jar"

IdentityKey = tuple[str, str, str, str]
ExactKey = tuple[str, str, str, str, str]


class Artifact(BaseModel):
    """Immutable artifact coordinate."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    group_id: str = Field(min_length=1)
    artifact_id: str = Field(min_length=1)
    version: str = Field(min_length=1)
    extension: str = Field(default=DEFAULT_EXTENSION, min_length=1)
    classifier: str = Field(default="")

    @field_validator("classifier", mode="before")
    @classmethod
    def normalize_classifier(cls, v: object) -> object:
        # unclassified and empty-classifier artifacts are the same artifact
        return "" if v is None else v

    def __str__(self) -> str:
        parts = [self.group_id, self.artifact_id, self.extension]
        if self.classifier:
            parts.append(self.classifier)
        parts.append(self.version)
        return ":".join(parts)

    def with_version(self, version: str) -> Artifact:
        return self.model_copy(update={"version": version})


def parse_artifact(text: str) -> Artifact:
    """Parse ``group:artifact[:extension[:classifier]]:version``.

    Raises:
        ConfigurationError: If the coordinate has fewer than three or more
            than five segments, or an empty mandatory segment.
    """
    parts = text.strip().split(":")
    if len(parts) < 3 or len(parts) > 5:
        msg = (
            f"Bad artifact coordinates {text!r}, expected format is "
            "<groupId>:<artifactId>[:<extension>[:<classifier>]]:<version>"
        )
        raise ConfigurationError(msg)

    group_id, artifact_id = parts[0], parts[1]
    version = parts[-1]
    extension = parts[2] if len(parts) > 3 else DEFAULT_EXTENSION
    classifier = parts[3] if len(parts) > 4 else ""
    if not group_id or not artifact_id or not version or not extension:
        msg = f"Bad artifact coordinates {text!r}, empty segment"
        raise ConfigurationError(msg)

    return Artifact(
        group_id=group_id,
        artifact_id=artifact_id,
        version=version,
        extension=extension,
        classifier=classifier,
    )


def identity_key(artifact: Artifact) -> IdentityKey:
    """Key for version-disregarding equality."""
    return (
        artifact.group_id,
        artifact.artifact_id,
        artifact.classifier,
        artifact.extension,
    )


def exact_key(artifact: Artifact) -> ExactKey:
    """Key for exact equality, version included."""
    return (*identity_key(artifact), artifact.version)


__all__ = [
    "DEFAULT_EXTENSION",
    "Artifact",
    "ExactKey",
    "IdentityKey",
    "exact_key",
    "identity_key",
    "parse_artifact",
]
