"""Run the configured checks against one project."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from rules.explicit_scope import check_explicit_scopes
from rules.provided import check_provided_coverage
from rules.transitive_provided import check_transitive_provided_coverage

if TYPE_CHECKING:
    from project.model import ProjectDescriptor
    from resolution.api import DependencyResolver
    from rules.config import AuditConfig
    from rules.results import CheckResult

logger = logging.getLogger(__name__)

CHECK_NAMES = ("explicit-scope", "provided", "transitive-provided")
GRAPH_CHECKS = frozenset({"provided", "transitive-provided"})


def run_check(
    name: str,
    project: ProjectDescriptor,
    config: AuditConfig,
    resolver: DependencyResolver | None = None,
) -> CheckResult:
    """Run the check called ``name``.

    Raises:
        ResolutionError: If a graph-based check cannot collect the graph.
    """
    subject = str(project.artifact)
    logger.debug("Running %s check for %s", name, subject)

    if name == "explicit-scope":
        return check_explicit_scopes(project.declared, subject=subject)

    if name == "provided":
        if resolver is None:
            resolver = project.resolver()
        return check_provided_coverage(
            project.artifact,
            config.provided.policy(),
            project.runtime_artifacts,
            resolver,
            project.repositories,
        )

    if name == "transitive-provided":
        if resolver is None:
            resolver = project.resolver()
        return check_transitive_provided_coverage(
            project.artifact,
            config.transitive_provided.exclusion_patterns(),
            project.runtime_artifacts,
            resolver,
            project.repositories,
        )

    msg = f"Unknown check: {name}"
    raise ValueError(msg)


def enabled_checks(config: AuditConfig) -> list[str]:
    flags = {
        "explicit-scope": config.explicit_scope.enabled,
        "provided": config.provided.enabled,
        "transitive-provided": config.transitive_provided.enabled,
    }
    return [name for name in CHECK_NAMES if flags[name]]


def run_all(
    project: ProjectDescriptor,
    config: AuditConfig,
    resolver: DependencyResolver | None = None,
) -> list[CheckResult]:
    """Run every enabled check; a resolution failure aborts the run.

    The resolver is shared between the graph checks and only built when one
    of them is enabled.
    """
    checks = enabled_checks(config)
    if resolver is None and any(name in GRAPH_CHECKS for name in checks):
        resolver = project.resolver()
    return [run_check(name, project, config, resolver) for name in checks]


__all__ = ["CHECK_NAMES", "GRAPH_CHECKS", "enabled_checks", "run_all", "run_check"]
