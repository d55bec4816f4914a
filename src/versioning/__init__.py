"""Version parsing, ranges and compatibility checks."""

from versioning.compat import closest_version, is_compatible
from versioning.range import VersionRange
from versioning.version import ArtifactVersion

__all__ = ["ArtifactVersion", "VersionRange", "closest_version", "is_compatible"]
