"""Wildcard exclusion patterns over artifact coordinates."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from coords.artifact import Artifact

WILDCARD = "*"
MAX_SEGMENTS = 4


class ExclusionPattern(BaseModel):
    """Coordinate pattern whose fields are literals or ``*``."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    group_id: str = WILDCARD
    artifact_id: str = WILDCARD
    extension: str = WILDCARD
    classifier: str = WILDCARD

    def __str__(self) -> str:
        return ":".join(
            (self.group_id, self.artifact_id, self.extension, self.classifier)
        )


# Aggregator poms carry no classes and are never checked.
POM_AGGREGATOR = ExclusionPattern(extension="pom")


def _field_matches(pattern: str, value: str) -> bool:
    return pattern == WILDCARD or pattern == value


def matches_exclusion(artifact: Artifact, pattern: ExclusionPattern) -> bool:
    """True iff every non-wildcard field of ``pattern`` equals the artifact's."""
    return (
        _field_matches(pattern.group_id, artifact.group_id)
        and _field_matches(pattern.artifact_id, artifact.artifact_id)
        and _field_matches(pattern.extension, artifact.extension)
        and _field_matches(pattern.classifier, artifact.classifier)
    )


def matches_any(artifact: Artifact, patterns: Iterable[ExclusionPattern]) -> bool:
    return any(matches_exclusion(artifact, pattern) for pattern in patterns)


def parse_exclusion_pattern(text: str | None) -> ExclusionPattern:
    """Parse ``<groupId>[:<artifactId>[:<extension>[:<classifier>]]]``.

    Omitted trailing segments default to the wildcard.

    Raises:
        ConfigurationError: If the text is missing or has more than four
            segments.
    """
    if text is None or not text.strip():
        msg = "Exclusion pattern must not be empty"
        raise ConfigurationError(msg)

    parts = text.strip().split(":")
    if len(parts) > MAX_SEGMENTS:
        msg = (
            f"Pattern must contain at most three colons, but contains "
            f"{len(parts) - 1}: {text}"
        )
        raise ConfigurationError(msg)

    padded = parts + [WILDCARD] * (MAX_SEGMENTS - len(parts))
    group_id, artifact_id, extension, classifier = (part or WILDCARD for part in padded)
    return ExclusionPattern(
        group_id=group_id,
        artifact_id=artifact_id,
        extension=extension,
        classifier=classifier,
    )


def parse_exclusion_patterns(texts: Iterable[str]) -> list[ExclusionPattern]:
    return [parse_exclusion_pattern(text) for text in texts]


__all__ = [
    "POM_AGGREGATOR",
    "WILDCARD",
    "ExclusionPattern",
    "matches_any",
    "matches_exclusion",
    "parse_exclusion_pattern",
    "parse_exclusion_patterns",
]
