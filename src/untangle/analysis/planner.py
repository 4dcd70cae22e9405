"""PlanAssembler: graph -> scores -> order -> RefactoringPlan.

The assembler always returns a plan for a structurally valid graph. When
cycles rule out a dependency-respecting order, steps fall back to
descending complexity and the plan's circular_dependencies says why.
"""

import math
from typing import Optional

from ..config import EffortConfig
from ..graph.dependency_graph import DependencyGraph
from ..graph.models import Module
from ..logging_config import get_logger
from .models import RefactoringPlan, RefactoringStep
from .ordering import layers, priority_order
from .scorer import StructuralScorer

logger = get_logger(__name__)


class PlanAssembler:
    """Orchestrates one analysis run over a frozen graph."""

    def __init__(
        self,
        scorer: Optional[StructuralScorer] = None,
        effort: Optional[EffortConfig] = None,
    ):
        self.scorer = scorer or StructuralScorer()
        self.effort = effort or EffortConfig()

    def assemble(self, graph: DependencyGraph) -> RefactoringPlan:
        logger.info(f"Starting refactoring analysis of {len(graph)} modules")

        if graph.is_empty():
            logger.warning("Empty dependency graph")
            return RefactoringPlan(estimated_time=estimate_effort(0, 0.0, self.effort))

        cycles = graph.detect_cycles()
        for i, cycle in enumerate(cycles, 1):
            logger.warning(f"Cycle {i}: " + " -> ".join(m.name for m in cycle))

        matrix = graph.to_adjacency_matrix()
        raw_scores = self.scorer.score(matrix)
        scores = {module: float(raw_scores[i]) for i, module in enumerate(graph.modules)}

        order = priority_order(graph, scores, cycles)
        if order is None:
            logger.warning("No dependency order exists; ranking steps by complexity")
            order = sorted(graph.modules, key=lambda m: -scores[m])

        steps = tuple(
            RefactoringStep(
                module=module,
                priority=rank,
                complexity_score=scores[module],
                dependencies=graph.successors(module),
                dependents=graph.predecessors(module),
            )
            for rank, module in enumerate(order, 1)
        )

        total = sum(step.complexity_score for step in steps)
        structure = self.scorer.analyze_structure(matrix, is_acyclic=not cycles)
        logger.info(str(structure))
        logger.info(f"Refactoring analysis completed: {len(steps)} steps")

        return RefactoringPlan(
            steps=steps,
            circular_dependencies=tuple(tuple(cycle) for cycle in cycles),
            total_complexity=total,
            estimated_time=estimate_effort(len(steps), total, self.effort),
            structure=structure,
        )

    def layers(self, graph: DependencyGraph) -> Optional[list[frozenset[Module]]]:
        return layers(graph)

    def recommended_order(self, graph: DependencyGraph) -> list[Module]:
        return self.assemble(graph).modules


def estimate_effort(
    module_count: int, total_complexity: float, config: Optional[EffortConfig] = None
) -> str:
    """Human-readable effort estimate.

    minutes = round(n * per_module * clamp(0.5 + total / n, 0.5, 2.0))

    Formatted as "N minutes" under an hour, "Hh Mm" under a workday, and
    "Dd Hh" beyond that.
    """
    cfg = config or EffortConfig()
    if module_count <= 0:
        return "0 minutes"

    base = module_count * cfg.minutes_per_module
    multiplier = 0.5 + total_complexity / module_count
    multiplier = min(max(multiplier, cfg.min_multiplier), cfg.max_multiplier)
    minutes = int(math.floor(base * multiplier + 0.5))

    if minutes < 60:
        return f"{minutes} minutes"
    if minutes < cfg.workday_minutes:
        return f"{minutes // 60}h {minutes % 60}m"
    days, rest = divmod(minutes, cfg.workday_minutes)
    return f"{days}d {rest // 60}h"


def priority_score(graph: DependencyGraph, module: Module) -> float:
    """Degree-only priority: many dependents up, many dependencies down."""
    return graph.in_degree(module) * 2.0 - graph.out_degree(module) * 0.5
