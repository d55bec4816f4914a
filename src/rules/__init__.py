"""Coverage checks for provided dependencies and explicit scopes."""

from rules.config import (
    AuditConfig,
    ProvidedConfig,
    TransitiveProvidedConfig,
    load_config,
)
from rules.explicit_scope import check_explicit_scopes
from rules.provided import check_provided_coverage
from rules.results import CheckResult, Violation
from rules.runner import run_all, run_check
from rules.transitive_provided import check_transitive_provided_coverage

__all__ = [
    "AuditConfig",
    "CheckResult",
    "ProvidedConfig",
    "TransitiveProvidedConfig",
    "Violation",
    "check_explicit_scopes",
    "check_provided_coverage",
    "check_transitive_provided_coverage",
    "load_config",
    "run_all",
    "run_check",
]
