"""Require an explicit scope on every dependency the project declares itself."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from rules.results import CheckResult, Violation

if TYPE_CHECKING:
    from collections.abc import Iterable

    from project.model import DeclaredDependency

logger = logging.getLogger(__name__)

CHECK_NAME = "explicit-scope"


def check_explicit_scopes(
    raw_dependencies: Iterable[DeclaredDependency], subject: str = ""
) -> CheckResult:
    """Flag raw dependencies declared without a scope.

    Only the project's own declaration is inspected; inherited or managed
    scopes do not count.
    """
    violations: list[Violation] = []
    for dependency in raw_dependencies:
        logger.debug("Found dependency %s", dependency.management_key)
        if dependency.scope is not None:
            continue
        location = dependency.location.format()
        message = (
            f"Dependency {dependency.management_key} @ {location} "
            "does not have an explicit scope defined!"
        )
        logger.warning(message)
        violations.append(
            Violation(
                artifact=dependency.management_key,
                kind="missing_scope",
                message=message,
                location=location,
            )
        )
    return CheckResult(check=CHECK_NAME, subject=subject, violations=tuple(violations))


__all__ = ["CHECK_NAME", "check_explicit_scopes"]
