"""Artifact coordinates and exclusion patterns."""

from coords.artifact import Artifact, exact_key, identity_key, parse_artifact
from coords.exclusion import (
    POM_AGGREGATOR,
    ExclusionPattern,
    matches_exclusion,
    parse_exclusion_pattern,
)

__all__ = [
    "POM_AGGREGATOR",
    "Artifact",
    "ExclusionPattern",
    "exact_key",
    "identity_key",
    "matches_exclusion",
    "parse_artifact",
    "parse_exclusion_pattern",
]
