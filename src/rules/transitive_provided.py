"""Require every transitive provided dependency on the runtime classpath.

Unlike the ``provided`` check this one looks at the full provided reach of
the component, direct dependencies included, and matches by identity only:
any version on the runtime classpath will do, but extension and classifier
must be exact.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from coords.exclusion import matches_any
from graph.format import format_paths
from graph.selectors import transitive_pipeline
from resolution.collect import collect_resolved_map
from rules.provided import RuntimeIndex
from rules.results import CheckResult, Violation

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from coords.artifact import Artifact
    from coords.exclusion import ExclusionPattern
    from graph.visitors import Path
    from resolution.api import DependencyResolver, RemoteRepository

logger = logging.getLogger(__name__)

CHECK_NAME = "transitive-provided"


def check_artifact_map(
    artifact_map: dict[Artifact, list[Path]],
    exclude_patterns: Iterable[ExclusionPattern],
    runtime_artifacts: Iterable[Artifact],
    subject: str = "",
) -> CheckResult:
    """Report each mapped artifact that has no runtime counterpart."""
    excludes = tuple(exclude_patterns)
    index = RuntimeIndex(runtime_artifacts)
    violations: list[Violation] = []

    for artifact, paths in artifact_map.items():
        if matches_any(artifact, excludes):
            logger.debug("Skip excluded dependency %s", artifact)
            continue
        if index.contains_identity(artifact):
            continue
        violations.append(
            Violation(
                artifact=str(artifact),
                kind="missing",
                message=(
                    f"Transitive provided dependency {artifact} "
                    f"({format_paths(paths)}) not found as runtime dependency!"
                ),
                paths=tuple(paths),
            )
        )
    return CheckResult(check=CHECK_NAME, subject=subject, violations=tuple(violations))


def check_transitive_provided_coverage(
    root: Artifact,
    exclude_patterns: Iterable[ExclusionPattern],
    runtime_artifacts: Sequence[Artifact],
    resolver: DependencyResolver,
    repositories: Sequence[RemoteRepository] = (),
) -> CheckResult:
    """Resolve the provided reach of ``root`` and check it against the runtime.

    All violations are collected before returning.

    Raises:
        ResolutionError: If the dependencies cannot be resolved.
    """
    artifact_map = collect_resolved_map(
        root, transitive_pipeline(), repositories, resolver
    )
    return check_artifact_map(
        artifact_map, exclude_patterns, runtime_artifacts, subject=str(root)
    )


__all__ = ["CHECK_NAME", "check_artifact_map", "check_transitive_provided_coverage"]
