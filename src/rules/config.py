from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from coords.exclusion import ExclusionPattern, parse_exclusion_patterns
from errors import ConfigurationError
from graph.selectors import SelectionPolicy

CONFIG_FILENAME = "classpath-audit.toml"


class _RuleConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    enabled: bool = Field(default=True, description="Run this check")


class _ExcludingRuleConfig(_RuleConfig):
    excludes: list[str] = Field(
        default_factory=list,
        description=(
            "Artifacts to leave out, as "
            "<groupId>[:<artifactId>[:<extension>[:<classifier>]]]"
        ),
    )

    @field_validator("excludes")
    @classmethod
    def validate_excludes(cls, v: list[str]) -> list[str]:
        """Reject malformed patterns while the config is loaded.

        ``ConfigurationError`` is re-raised as ``ValueError`` so pydantic
        reports it with the offending field.
        """
        try:
            parse_exclusion_patterns(v)
        except ConfigurationError as e:
            raise ValueError(str(e)) from e
        return v

    def exclusion_patterns(self) -> tuple[ExclusionPattern, ...]:
        return tuple(parse_exclusion_patterns(self.excludes))


class ExplicitScopeConfig(_RuleConfig):
    """Every raw dependency must declare its scope."""


class ProvidedConfig(_ExcludingRuleConfig):
    """Provided dependencies must be present on the runtime classpath."""

    include_optionals: bool = Field(
        default=False,
        alias="includeOptionalDependencies",
        description="Also check optional dependencies",
    )
    include_directs: bool = Field(
        default=False,
        alias="includeDirectDependencies",
        description="Also check direct provided dependencies",
    )

    def policy(self) -> SelectionPolicy:
        return SelectionPolicy(
            include_optionals=self.include_optionals,
            include_directs=self.include_directs,
            excludes=self.exclusion_patterns(),
        )


class TransitiveProvidedConfig(_ExcludingRuleConfig):
    """Every transitive provided dependency must be on the runtime classpath."""

    enabled: bool = Field(default=False, description="Run this check")


class AuditConfig(BaseModel):
    """Configuration for classpath audits."""

    model_config = ConfigDict(extra="forbid")

    explicit_scope: ExplicitScopeConfig = Field(default_factory=ExplicitScopeConfig)
    provided: ProvidedConfig = Field(default_factory=ProvidedConfig)
    transitive_provided: TransitiveProvidedConfig = Field(
        default_factory=TransitiveProvidedConfig
    )


def parse_config(data: dict[str, Any], source: str = CONFIG_FILENAME) -> AuditConfig:
    try:
        return AuditConfig.model_validate(data)
    except Exception as e:
        msg = f"Invalid config in {source}: {e}"
        raise ConfigurationError(msg) from e


def load_config(root: Path, config_file: Path | None = None) -> AuditConfig:
    """Load configuration from classpath-audit.toml if it exists.

    An explicitly given ``config_file`` must exist.
    """
    config_path = config_file if config_file is not None else Path(root) / CONFIG_FILENAME

    if not config_path.is_file():
        if config_file is not None:
            msg = f"Config file not found: {config_path}"
            raise ConfigurationError(msg)
        return AuditConfig()

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigurationError(msg) from e

    return parse_config(data, source=str(config_path))


__all__ = [
    "CONFIG_FILENAME",
    "AuditConfig",
    "ExplicitScopeConfig",
    "ProvidedConfig",
    "TransitiveProvidedConfig",
    "load_config",
    "parse_config",
]
