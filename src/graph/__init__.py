"""Dependency graph model, selectors and traversal."""

from graph.node import CollectionContext, Dependency, DependencyNode
from graph.selectors import SelectionPolicy, build_selector_pipeline
from graph.visitors import record_paths, same_artifact, walk

__all__ = [
    "CollectionContext",
    "Dependency",
    "DependencyNode",
    "SelectionPolicy",
    "build_selector_pipeline",
    "record_paths",
    "same_artifact",
    "walk",
]
