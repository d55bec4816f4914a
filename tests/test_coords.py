from __future__ import annotations

import pytest
from pydantic import ValidationError

from coords.artifact import Artifact, exact_key, identity_key, parse_artifact
from coords.exclusion import (
    POM_AGGREGATOR,
    ExclusionPattern,
    matches_exclusion,
    parse_exclusion_pattern,
)
from errors import ConfigurationError


def test_parse_artifact_defaults_extension_and_classifier() -> None:
    artifact = parse_artifact("org.example:api:1.0")

    assert artifact.group_id == "org.example"
    assert artifact.artifact_id == "api"
    assert artifact.extension == "jar"
    assert artifact.classifier == ""
    assert artifact.version == "1.0"
    assert str(artifact) == "org.example:api:jar:1.0"


def test_parse_artifact_with_extension_and_classifier() -> None:
    artifact = parse_artifact("g:a:zip:sources:2.0")

    assert artifact.extension == "zip"
    assert artifact.classifier == "sources"
    assert str(artifact) == "g:a:zip:sources:2.0"


@pytest.mark.parametrize("text", ["g:a", "g", "g:a:e:c:v:x", "g::1.0"])
def test_parse_artifact_rejects_malformed_coordinates(text: str) -> None:
    with pytest.raises(ConfigurationError):
        parse_artifact(text)


def test_identity_key_ignores_version_but_exact_key_does_not() -> None:
    one = parse_artifact("g:a:1.0.0")
    two = parse_artifact("g:a:2.0.0")

    assert identity_key(one) == identity_key(two)
    assert exact_key(one) != exact_key(two)
    assert exact_key(one) == exact_key(parse_artifact("g:a:1.0.0"))


def test_identity_key_distinguishes_extension_and_classifier() -> None:
    base = parse_artifact("g:a:ext:cls:1.0.0")

    assert identity_key(base) == identity_key(parse_artifact("g:a:ext:cls:2.0.0"))
    assert identity_key(base) != identity_key(parse_artifact("g:a:ext1:cls:2.0.0"))
    assert identity_key(base) != identity_key(parse_artifact("g:a:ext:cls1:2.0.0"))


def test_missing_classifier_equals_empty_classifier() -> None:
    unclassified = Artifact(group_id="g", artifact_id="a", version="1", classifier=None)
    empty = Artifact(group_id="g", artifact_id="a", version="1", classifier="")

    assert unclassified == empty
    assert identity_key(unclassified) == identity_key(empty)


def test_artifacts_are_immutable_and_hashable() -> None:
    artifact = parse_artifact("g:a:1.0")

    with pytest.raises(ValidationError):
        artifact.version = "2.0"  # type: ignore[misc]
    assert {artifact, parse_artifact("g:a:1.0")} == {artifact}


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("g", ("g", "*", "*", "*")),
        ("g:a", ("g", "a", "*", "*")),
        ("g:a:e", ("g", "a", "e", "*")),
        ("g:a:e:c", ("g", "a", "e", "c")),
    ],
)
def test_parse_exclusion_pattern_fills_trailing_wildcards(
    text: str, expected: tuple[str, str, str, str]
) -> None:
    pattern = parse_exclusion_pattern(text)

    assert (
        pattern.group_id,
        pattern.artifact_id,
        pattern.extension,
        pattern.classifier,
    ) == expected


@pytest.mark.parametrize("text", ["g:a:e:c:x", "", None])
def test_parse_exclusion_pattern_rejects_invalid_input(text: str | None) -> None:
    with pytest.raises(ConfigurationError):
        parse_exclusion_pattern(text)


def test_matches_exclusion_compares_only_literal_fields() -> None:
    artifact = parse_artifact("org.example:api:jar:tests:1.0")

    assert matches_exclusion(artifact, parse_exclusion_pattern("org.example"))
    assert matches_exclusion(artifact, parse_exclusion_pattern("*:api"))
    assert matches_exclusion(artifact, parse_exclusion_pattern("org.example:api:jar:tests"))
    assert not matches_exclusion(artifact, parse_exclusion_pattern("org.example:impl"))
    assert not matches_exclusion(artifact, parse_exclusion_pattern("org.example:api:zip"))


def test_pom_aggregator_matches_only_pom_extension() -> None:
    assert POM_AGGREGATOR == ExclusionPattern(extension="pom")
    assert matches_exclusion(parse_artifact("g:bom:pom:1.0"), POM_AGGREGATOR)
    assert not matches_exclusion(parse_artifact("g:lib:1.0"), POM_AGGREGATOR)
