from __future__ import annotations

from pathlib import Path

import pytest

from coords.exclusion import ExclusionPattern
from errors import ConfigurationError
from rules.config import load_config, parse_config


def _write_config(project_root: Path, toml_content: str) -> None:
    (project_root / "classpath-audit.toml").write_text(toml_content, encoding="utf-8")


def test_missing_config_uses_defaults(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert config.explicit_scope.enabled is True
    assert config.provided.enabled is True
    assert config.provided.include_optionals is False
    assert config.provided.include_directs is False
    assert config.transitive_provided.enabled is False
    assert config.transitive_provided.excludes == []


def test_empty_config_accepted(tmp_path: Path) -> None:
    _write_config(tmp_path, "")

    config = load_config(tmp_path)

    assert config.provided.excludes == []


def test_unknown_top_level_key_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, "bogus_key = true")

    with pytest.raises(ConfigurationError):
        load_config(tmp_path)


def test_unknown_nested_key_rejected(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        """
[provided]
includeTransitives = true
""".strip(),
    )

    with pytest.raises(ConfigurationError):
        load_config(tmp_path)


def test_invalid_toml_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, "[provided")

    with pytest.raises(ConfigurationError, match="Invalid TOML"):
        load_config(tmp_path)


def test_malformed_exclude_pattern_rejected(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        """
[transitive_provided]
excludes = ["a:b:c:d:e"]
""".strip(),
    )

    with pytest.raises(ConfigurationError, match="a:b:c:d:e"):
        load_config(tmp_path)


def test_valid_config_accepted(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        """
[explicit_scope]
enabled = false

[provided]
includeOptionalDependencies = true
includeDirectDependencies = true
excludes = ["org.osgi", "com.example:api::tests"]

[transitive_provided]
enabled = true
excludes = ["javax.servlet:servlet-api"]
""".strip(),
    )

    config = load_config(tmp_path)

    assert config.explicit_scope.enabled is False
    assert config.provided.include_optionals is True
    assert config.provided.include_directs is True
    assert config.transitive_provided.enabled is True

    policy = config.provided.policy()
    assert policy.include_optionals is True
    assert policy.include_directs is True
    assert policy.excludes == (
        ExclusionPattern(group_id="org.osgi"),
        ExclusionPattern(group_id="com.example", artifact_id="api", classifier="tests"),
    )
    assert config.transitive_provided.exclusion_patterns() == (
        ExclusionPattern(group_id="javax.servlet", artifact_id="servlet-api"),
    )


def test_python_field_names_accepted() -> None:
    config = parse_config({"provided": {"include_directs": True}})

    assert config.provided.include_directs is True


def test_explicit_config_file_must_exist(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="Config file not found"):
        load_config(tmp_path, tmp_path / "elsewhere.toml")


def test_explicit_config_file_used(tmp_path: Path) -> None:
    config_file = tmp_path / "custom.toml"
    config_file.write_text("[transitive_provided]\nenabled = true\n", encoding="utf-8")

    config = load_config(tmp_path, config_file)

    assert config.transitive_provided.enabled is True
