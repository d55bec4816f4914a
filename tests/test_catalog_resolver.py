from __future__ import annotations

import pytest

from coords.artifact import parse_artifact
from errors import ResolutionError
from graph.node import Dependency, DependencyNode
from graph.selectors import AcceptAll
from graph.visitors import walk
from resolution.api import CollectRequest, DependencyRequest, RemoteRepository, scope_filter
from resolution.catalog import ArtifactDescriptor, CatalogResolver, derive_scope
from resolution.collect import collect_resolved_map, collect_tree, root_dependency

ROOT = "org.example:plugin:1.0"
CENTRAL = RemoteRepository(id="central", url="https://repo.example.org/maven2")


def _dep(coordinate: str, scope: str = "compile") -> Dependency:
    return Dependency(artifact=parse_artifact(coordinate), scope=scope)


def _descriptor(
    coordinate: str, *deps: Dependency, repository: str | None = None
) -> ArtifactDescriptor:
    return ArtifactDescriptor(
        artifact=parse_artifact(coordinate), dependencies=deps, repository=repository
    )


def _scopes(root: DependencyNode) -> dict[str, str | None]:
    return {str(node.artifact): node.scope for node, ancestors in walk(root) if ancestors}


@pytest.mark.parametrize(
    ("parent", "declared", "expected"),
    [
        (None, "provided", "provided"),
        ("compile", "compile", "compile"),
        ("compile", "runtime", "runtime"),
        ("provided", "compile", "provided"),
        ("provided", "runtime", "provided"),
        ("runtime", "compile", "runtime"),
        ("test", "compile", "test"),
        ("compile", "provided", "provided"),
        ("provided", "system", "system"),
    ],
)
def test_derive_scope(parent: str | None, declared: str, expected: str) -> None:
    assert derive_scope(parent, declared) == expected


def test_collect_derives_transitive_scopes() -> None:
    resolver = CatalogResolver(
        [
            _descriptor(ROOT, _dep("g:api:1.0", "provided"), _dep("g:lib:1.0")),
            _descriptor("g:api:1.0", _dep("g:spi:1.0")),
            _descriptor("g:lib:1.0", _dep("g:rt:1.0", "runtime")),
            _descriptor("g:spi:1.0"),
            _descriptor("g:rt:1.0"),
        ]
    )

    root = collect_tree(parse_artifact(ROOT), AcceptAll(), [], resolver)

    assert root.dependency is None
    assert _scopes(root) == {
        "g:api:jar:1.0": "provided",
        "g:spi:jar:1.0": "provided",
        "g:lib:jar:1.0": "compile",
        "g:rt:jar:1.0": "runtime",
    }


def test_collect_resolves_ranges_to_highest_catalogued_version() -> None:
    resolver = CatalogResolver(
        [
            _descriptor(ROOT, _dep("g:lib:[1.0,2.0)")),
            _descriptor("g:lib:1.0"),
            _descriptor("g:lib:1.5"),
            _descriptor("g:lib:2.0"),
        ]
    )

    root = collect_tree(parse_artifact(ROOT), AcceptAll(), [], resolver)

    assert [str(child.artifact) for child in root.children] == ["g:lib:jar:1.5"]


def test_collect_only_sees_requested_repositories() -> None:
    descriptors = [
        _descriptor(ROOT, _dep("g:lib:1.0")),
        _descriptor("g:lib:1.0", repository="central"),
    ]

    tree = collect_tree(parse_artifact(ROOT), AcceptAll(), [CENTRAL], CatalogResolver(descriptors))
    assert len(tree.children) == 1

    with pytest.raises(ResolutionError):
        collect_tree(parse_artifact(ROOT), AcceptAll(), [], CatalogResolver(descriptors))


def test_missing_metadata_raises_with_partial_tree() -> None:
    resolver = CatalogResolver(
        [
            _descriptor(ROOT, _dep("g:a:1.0"), _dep("g:b:1.0")),
            _descriptor("g:a:1.0", _dep("g:c:1.0")),
            _descriptor("g:c:1.0"),
        ]
    )

    with pytest.raises(ResolutionError) as excinfo:
        collect_tree(parse_artifact(ROOT), AcceptAll(), [], resolver)

    error = excinfo.value
    assert "g:b:jar:1.0" in str(error)
    assert error.partial_root is not None
    assert set(_scopes(error.partial_root)) == {"g:a:jar:1.0", "g:b:jar:1.0", "g:c:jar:1.0"}
    description = error.describe()
    assert "Partial dependency tree:" in description
    assert "        g:c:jar:1.0 (compile)" in description


def test_unsatisfiable_range_is_a_resolution_error() -> None:
    resolver = CatalogResolver(
        [_descriptor(ROOT, _dep("g:lib:[3.0,)")), _descriptor("g:lib:1.0")]
    )

    with pytest.raises(ResolutionError, match="no version in range"):
        collect_tree(parse_artifact(ROOT), AcceptAll(), [], resolver)


def test_cycles_are_not_expanded_twice() -> None:
    resolver = CatalogResolver(
        [
            _descriptor(ROOT, _dep("g:a:1.0")),
            _descriptor("g:a:1.0", _dep("g:b:1.0")),
            _descriptor("g:b:1.0", _dep("g:a:1.0")),
        ]
    )

    root = collect_tree(parse_artifact(ROOT), AcceptAll(), [], resolver)

    back_edge = root.children[0].children[0].children[0]
    assert str(back_edge.artifact) == "g:a:jar:1.0"
    assert back_edge.children == []


def test_resolve_dependencies_filters_artifacts_but_keeps_full_tree() -> None:
    resolver = CatalogResolver(
        [
            _descriptor(ROOT, _dep("g:api:1.0", "provided"), _dep("g:lib:1.0")),
            _descriptor("g:api:1.0"),
            _descriptor("g:lib:1.0"),
        ]
    )
    request = DependencyRequest(
        collect=CollectRequest(
            root=root_dependency(parse_artifact(ROOT)), selector=AcceptAll()
        ),
        filter=scope_filter("provided"),
    )

    result = resolver.resolve_dependencies(request)

    assert [str(a) for a in result.artifacts] == ["g:api:jar:1.0"]
    assert len(result.root.children) == 2


def test_collect_resolved_map_drops_root_and_maps_paths() -> None:
    resolver = CatalogResolver(
        [
            _descriptor(ROOT, _dep("g:a:1.0"), _dep("g:b:1.0"), _dep("g:d:1.0", "provided")),
            _descriptor("g:a:1.0", _dep("g:c:1.0", "provided")),
            _descriptor("g:b:1.0", _dep("g:c:1.0", "provided")),
            _descriptor("g:c:1.0"),
            _descriptor("g:d:1.0"),
        ]
    )

    artifact_map = collect_resolved_map(parse_artifact(ROOT), AcceptAll(), [], resolver)

    assert {str(a): len(paths) for a, paths in artifact_map.items()} == {
        "g:c:jar:1.0": 2,
        "g:d:jar:1.0": 1,
    }
