"""Project descriptions supplied by the host build."""

from project.loader import PROJECT_FILENAME, load_project, parse_project
from project.model import DeclaredDependency, ProjectDescriptor, SourceLocation

__all__ = [
    "PROJECT_FILENAME",
    "DeclaredDependency",
    "ProjectDescriptor",
    "SourceLocation",
    "load_project",
    "parse_project",
]
