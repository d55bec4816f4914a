"""Decide whether a runtime artifact version satisfies a required one."""

from __future__ import annotations

from collections.abc import Iterable

from versioning.range import VersionRange
from versioning.version import ArtifactVersion


def is_compatible(required_spec: str, candidate_version: str) -> bool:
    """Check ``candidate_version`` against ``required_spec``.

    Bracketed ranges are honoured literally. A bare version is treated
    permissively: any candidate with the same major version and an equal or
    higher minor version satisfies it.

    Raises:
        VersionParseError: If ``required_spec`` is not a valid version or
            range.
    """
    required = VersionRange.from_spec(required_spec)
    candidate = ArtifactVersion(candidate_version)

    if required.recommended is None:
        return required.contains(candidate)

    recommended = required.recommended
    return (
        recommended.major == candidate.major
        and recommended.minor <= candidate.minor
    )


def closest_version(required_version: str, candidates: Iterable[str]) -> str | None:
    """Pick the candidate version nearest to ``required_version``.

    Nearness is measured on (major, minor, incremental) distance; ties prefer
    the higher version so the result does not depend on input order.
    """
    required = ArtifactVersion(required_version)

    def distance(text: str) -> tuple[int, int, int]:
        version = ArtifactVersion(text)
        return (
            abs(version.major - required.major),
            abs(version.minor - required.minor),
            abs(version.incremental - required.incremental),
        )

    # equal versions spelled differently ("1", "1.0") are ordered by text
    ordered = sorted(
        set(candidates), key=lambda text: (ArtifactVersion(text), text), reverse=True
    )
    if not ordered:
        return None
    return min(ordered, key=distance)


__all__ = ["closest_version", "is_compatible"]
