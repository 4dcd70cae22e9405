"""Data models for the module dependency graph.

A Module is identified by its name alone; path and kind are metadata that
ride along. A Dependency is a directed, weighted edge meaning "source depends
on target", so target must be refactored no later than source.
"""

import math
from dataclasses import dataclass, field
from enum import Enum

from ..exceptions import InvalidDependencyError


class ModuleKind(Enum):
    """What a module node stands for. Informational only."""

    PACKAGE = "package"
    CLASS = "class"
    GRADLE_MODULE = "gradle_module"
    MAVEN_MODULE = "maven_module"


class DependencyKind(Enum):
    """How a dependency was discovered. Not used by the algorithms."""

    DIRECT = "direct"
    TRANSITIVE = "transitive"
    CIRCULAR = "circular"  # edge known to participate in a cycle


@dataclass(frozen=True)
class Module:
    """A unit of code whose refactoring order is being computed."""

    name: str
    path: str = field(default="", compare=False)
    kind: ModuleKind = field(default=ModuleKind.PACKAGE, compare=False)

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Dependency:
    """Directed edge: ``source`` depends on ``target``."""

    source: Module
    target: Module
    weight: float = 1.0
    kind: DependencyKind = DependencyKind.DIRECT

    def __post_init__(self) -> None:
        if not math.isfinite(self.weight) or self.weight <= 0:
            raise InvalidDependencyError(
                self.source.name, self.target.name, f"weight must be positive, got {self.weight}"
            )

    @property
    def is_self_loop(self) -> bool:
        return self.source == self.target

    def __str__(self) -> str:
        return f"{self.source} -> {self.target} (weight={self.weight}, kind={self.kind.value})"
