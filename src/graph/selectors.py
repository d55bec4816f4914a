"""Dependency selectors that prune the graph while it is collected.

Each selector answers two questions: should this dependency be kept
(``select``), and which selector applies to the children of a node
(``derive_child``). A rejected dependency is never expanded, so its whole
subtree disappears from the collected graph.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

from coords.exclusion import POM_AGGREGATOR, ExclusionPattern, matches_any

if TYPE_CHECKING:
    from graph.node import CollectionContext, Dependency

TEST_SCOPE = "test"
PROVIDED_SCOPE = "provided"
DIRECT_LEVEL = 1


@dataclass(frozen=True)
class AcceptAll:
    """Selects everything, for itself and all descendants."""

    def select(self, dependency: Dependency) -> bool:
        return True

    def derive_child(self, context: CollectionContext) -> Selector:
        return self


@dataclass(frozen=True)
class ScopeExclusion:
    """Rejects dependencies declared with ``scope``."""

    scope: str

    def select(self, dependency: Dependency) -> bool:
        return dependency.scope != self.scope

    def derive_child(self, context: CollectionContext) -> Selector:
        return self


@dataclass(frozen=True)
class OptionalExclusion:
    """Rejects optional dependencies."""

    def select(self, dependency: Dependency) -> bool:
        return not dependency.optional

    def derive_child(self, context: CollectionContext) -> Selector:
        return self


@dataclass(frozen=True)
class PatternExclusion:
    """Rejects dependencies matching any exclusion pattern.

    Aggregator poms are always rejected. Exclusions declared on a
    dependency edge are added for the subtree below that edge.
    """

    patterns: tuple[ExclusionPattern, ...] = ()

    def __post_init__(self) -> None:
        if POM_AGGREGATOR not in self.patterns:
            object.__setattr__(self, "patterns", (*self.patterns, POM_AGGREGATOR))

    def select(self, dependency: Dependency) -> bool:
        return not matches_any(dependency.artifact, self.patterns)

    def derive_child(self, context: CollectionContext) -> Selector:
        if context.dependency is None or not context.dependency.exclusions:
            return self
        added = tuple(
            pattern
            for pattern in context.dependency.exclusions
            if pattern not in self.patterns
        )
        if not added:
            return self
        return PatternExclusion((*self.patterns, *added))


@dataclass(frozen=True)
class LevelAndScopeExclusion:
    """Rejects dependencies of ``target_scope`` found at ``target_level`` only.

    The level of the selector installed at the root is 0, so the default
    target level of 1 addresses direct dependencies. Past the target level
    every descendant is accepted.
    """

    target_level: int
    target_scope: str
    current_level: int = 0

    def select(self, dependency: Dependency) -> bool:
        if self.current_level == self.target_level:
            return dependency.scope != self.target_scope
        return True

    def derive_child(self, context: CollectionContext) -> Selector:
        if self.current_level < self.target_level:
            return LevelAndScopeExclusion(
                self.target_level, self.target_scope, self.current_level + 1
            )
        return AcceptAll()


@dataclass(frozen=True)
class AndSelector:
    """Keeps a dependency only if every member selector keeps it."""

    selectors: tuple[Selector, ...]

    def select(self, dependency: Dependency) -> bool:
        return all(selector.select(dependency) for selector in self.selectors)

    def derive_child(self, context: CollectionContext) -> Selector:
        derived = tuple(
            selector.derive_child(context)
            for selector in self.selectors
        )
        remaining = tuple(s for s in derived if not isinstance(s, AcceptAll))
        if not remaining:
            return AcceptAll()
        if remaining == self.selectors:
            return self
        return AndSelector(remaining)


Selector = Union[
    AcceptAll,
    ScopeExclusion,
    OptionalExclusion,
    PatternExclusion,
    LevelAndScopeExclusion,
    AndSelector,
]


@dataclass(frozen=True)
class SelectionPolicy:
    """User-facing switches that decide which selectors are installed."""

    include_optionals: bool = False
    include_directs: bool = False
    excludes: tuple[ExclusionPattern, ...] = ()


def build_selector_pipeline(policy: SelectionPolicy) -> AndSelector:
    """Compose the selectors for ``policy``.

    Order: scope exclusion of ``test``, pattern exclusion, optional
    exclusion, then the exclusion of direct ``provided`` dependencies.
    """
    selectors: list[Selector] = [
        ScopeExclusion(TEST_SCOPE),
        PatternExclusion(tuple(policy.excludes)),
    ]
    if not policy.include_optionals:
        selectors.append(OptionalExclusion())
    if not policy.include_directs:
        selectors.append(LevelAndScopeExclusion(DIRECT_LEVEL, PROVIDED_SCOPE))
    return AndSelector(tuple(selectors))


def transitive_pipeline() -> AndSelector:
    """Selectors used when collecting every transitive provided dependency.

    Configured excludes are applied to the resolved artifacts afterwards, so
    only edge exclusions and the pom aggregator prune the graph here.
    """
    return AndSelector(
        (
            OptionalExclusion(),
            ScopeExclusion(TEST_SCOPE),
            PatternExclusion(),
        )
    )


__all__ = [
    "DIRECT_LEVEL",
    "PROVIDED_SCOPE",
    "TEST_SCOPE",
    "AcceptAll",
    "AndSelector",
    "LevelAndScopeExclusion",
    "OptionalExclusion",
    "PatternExclusion",
    "ScopeExclusion",
    "SelectionPolicy",
    "Selector",
    "build_selector_pipeline",
    "transitive_pipeline",
]
