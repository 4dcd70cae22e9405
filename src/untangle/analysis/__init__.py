"""Refactoring analysis: scoring, ordering, plan assembly."""

from .models import ComplexityLevel, RefactoringPlan, RefactoringStep, StructureSummary
from .ordering import layers, priority_order, topological_order
from .planner import PlanAssembler, estimate_effort, priority_score
from .scorer import StructuralScorer, group_by_complexity, validate_matrix

__all__ = [
    "ComplexityLevel",
    "PlanAssembler",
    "RefactoringPlan",
    "RefactoringStep",
    "StructuralScorer",
    "StructureSummary",
    "estimate_effort",
    "group_by_complexity",
    "layers",
    "priority_order",
    "priority_score",
    "topological_order",
    "validate_matrix",
]
