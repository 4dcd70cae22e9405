"""Module dependency graph: model types, adjacency, cycles."""

from .dependency_graph import DependencyGraph
from .models import Dependency, DependencyKind, Module, ModuleKind

__all__ = ["DependencyGraph", "Dependency", "DependencyKind", "Module", "ModuleKind"]
