"""Result models for refactoring analysis.

Everything here is immutable: a plan is produced once per run and handed
out as-is. The only field the engine never fills is
RefactoringStep.ai_suggestion, which belongs to an outside collaborator.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional

from ..graph.models import Module


class ComplexityLevel(Enum):
    """Coarse buckets over the [0, 1] complexity score."""

    LOW = "low"  # < 0.3
    MEDIUM = "medium"  # 0.3 - 0.7
    HIGH = "high"  # >= 0.7

    @classmethod
    def of(cls, score: float) -> "ComplexityLevel":
        if score < 0.3:
            return cls.LOW
        if score < 0.7:
            return cls.MEDIUM
        return cls.HIGH


@dataclass(frozen=True)
class StructureSummary:
    """Whole-graph shape measurements taken from the adjacency matrix."""

    module_count: int = 0
    total_dependencies: int = 0
    average_dependencies: float = 0.0
    max_dependencies: int = 0
    density: float = 0.0  # edges / (n * (n - 1))
    is_acyclic: bool = True

    def __str__(self) -> str:
        return (
            f"Structure: {self.module_count} modules, "
            f"{self.total_dependencies} dependencies "
            f"(avg {self.average_dependencies:.2f}, max {self.max_dependencies}), "
            f"density {self.density:.2f}, acyclic={self.is_acyclic}"
        )


@dataclass(frozen=True)
class RefactoringStep:
    """One module's place in the refactoring plan."""

    module: Module
    priority: int  # 1-based rank
    complexity_score: float
    dependencies: tuple[Module, ...] = ()
    dependents: tuple[Module, ...] = ()
    ai_suggestion: Optional[str] = None

    @property
    def complexity_level(self) -> ComplexityLevel:
        return ComplexityLevel.of(self.complexity_score)

    def with_suggestion(self, suggestion: str) -> "RefactoringStep":
        """Copy of this step carrying an externally produced suggestion."""
        return replace(self, ai_suggestion=suggestion)


@dataclass(frozen=True)
class RefactoringPlan:
    """Ordered steps plus the cycles that blocked (or did not block) ordering.

    When ``circular_dependencies`` is non-empty no dependency-respecting order
    exists and ``steps`` are ranked by descending complexity instead.
    """

    steps: tuple[RefactoringStep, ...] = ()
    circular_dependencies: tuple[tuple[Module, ...], ...] = ()
    total_complexity: float = 0.0
    estimated_time: str = "0 minutes"
    structure: StructureSummary = field(default_factory=StructureSummary)

    @property
    def is_ordered(self) -> bool:
        """True when steps follow a dependency-respecting order."""
        return not self.circular_dependencies

    @property
    def modules(self) -> list[Module]:
        return [step.module for step in self.steps]

    def __str__(self) -> str:
        lines = [
            "=== Refactoring Plan ===",
            f"Total Modules: {len(self.steps)}",
            f"Circular Dependencies: {len(self.circular_dependencies)}",
            f"Total Complexity: {self.total_complexity:.2f}",
            f"Estimated Time: {self.estimated_time}",
            "",
            "Steps:",
        ]
        for step in self.steps:
            lines.append(
                f"{step.priority}. {step.module.name} "
                f"(complexity={step.complexity_score:.2f}, {step.complexity_level.value})"
            )
        return "\n".join(lines)
