from __future__ import annotations

from pathlib import Path

import pytest

from errors import ConfigurationError
from project.loader import load_project, parse_project
from rules.config import AuditConfig, parse_config
from rules.runner import enabled_checks, run_all, run_check

FIXTURE = Path(__file__).parent / "fixtures" / "plugin_project"


def test_enabled_checks_follow_config() -> None:
    assert enabled_checks(AuditConfig()) == ["explicit-scope", "provided"]
    assert enabled_checks(
        parse_config({"transitive_provided": {"enabled": True}, "provided": {"enabled": False}})
    ) == ["explicit-scope", "transitive-provided"]


def test_run_all_collects_every_enabled_check() -> None:
    project = load_project(FIXTURE)
    config = parse_config({"transitive_provided": {"enabled": True}})

    results = run_all(project, config)

    assert [(result.check, result.violation_count) for result in results] == [
        ("explicit-scope", 0),
        ("provided", 1),
        ("transitive-provided", 1),
    ]
    assert all(result.subject == "org.example:example-plugin:jar:1.0.0" for result in results)


def test_including_directs_leaves_compatible_direct_dependency_alone() -> None:
    project = load_project(FIXTURE)
    config = parse_config({"provided": {"includeDirectDependencies": True}})

    result = run_check("provided", project, config)

    # plugin-api 1.0 is satisfied by runtime 1.3, model 1.0 is present
    assert [violation.artifact for violation in result.violations] == [
        "org.example:host:jar:3.0"
    ]


def test_transitive_excludes_applied() -> None:
    project = load_project(FIXTURE)
    config = parse_config({"transitive_provided": {"excludes": ["org.example:host"]}})

    assert run_check("transitive-provided", project, config).ok


def test_unknown_check_rejected() -> None:
    project = load_project(FIXTURE)

    with pytest.raises(ValueError, match="Unknown check: bogus"):
        run_check("bogus", project, AuditConfig())


_UNVERSIONED = """
coordinate = "org.example:app:1.0"

[[dependencies]]
group_id = "g"
artifact_id = "managed"
""".lstrip()


def test_explicit_scope_reports_dependency_without_version() -> None:
    project = parse_project(_UNVERSIONED)

    result = run_check("explicit-scope", project, AuditConfig())

    assert result.violation_count == 1
    assert result.violations[0].artifact == "g:managed:jar"


def test_run_all_without_graph_checks_skips_resolver() -> None:
    project = parse_project(_UNVERSIONED)
    config = parse_config({"provided": {"enabled": False}})

    results = run_all(project, config)

    assert [(result.check, result.violation_count) for result in results] == [
        ("explicit-scope", 1)
    ]


def test_graph_check_still_needs_versions() -> None:
    project = parse_project(_UNVERSIONED)

    with pytest.raises(ConfigurationError, match="g:managed:jar has no version"):
        run_check("provided", project, AuditConfig())
