"""Dependency-first ordering: priority topological sort and parallel layers.

Both operations count, per module, how many of its dependencies are still
unrefactored (initially its out-degree). A module is ready when that count
hits zero. On a graph with cycles neither operation produces a partial
answer; both return None.
"""

import heapq
from typing import Mapping, Optional, Sequence

from ..graph.dependency_graph import DependencyGraph
from ..graph.models import Module
from ..logging_config import get_logger

logger = get_logger(__name__)


def priority_order(
    graph: DependencyGraph,
    scores: Optional[Mapping[Module, float]] = None,
    cycles: Optional[Sequence[Sequence[Module]]] = None,
) -> Optional[list[Module]]:
    """Kahn's algorithm, dependencies first, riskiest ready module first.

    Among ready modules the one with the highest score is emitted next. Ties
    go to whichever module became ready earliest, so the result is
    deterministic for a given graph insertion order. Missing scores count as
    0.0; with no scores at all this is plain FIFO Kahn. ``cycles`` is the
    result of graph.detect_cycles() when the caller already has it.

    Returns:
        Every module exactly once, each after all of its dependencies, or
        None if the graph has a cycle.
    """
    if graph.is_empty():
        return []

    if cycles is None:
        cycles = graph.detect_cycles()
    if cycles:
        logger.warning(
            f"Graph contains {len(cycles)} circular dependencies; no topological order exists"
        )
        return None

    scores = scores or {}
    remaining = {module: graph.out_degree(module) for module in graph}
    ready: list[tuple[float, int, Module]] = []
    sequence = 0

    for module, count in remaining.items():
        if count == 0:
            heapq.heappush(ready, (-scores.get(module, 0.0), sequence, module))
            sequence += 1

    order: list[Module] = []
    while ready:
        _, _, current = heapq.heappop(ready)
        order.append(current)
        for dependent in graph.predecessors(current):
            remaining[dependent] -= 1
            if remaining[dependent] == 0:
                heapq.heappush(ready, (-scores.get(dependent, 0.0), sequence, dependent))
                sequence += 1

    if len(order) != len(graph):
        logger.error(f"Topological sort failed: ordered {len(order)} of {len(graph)} modules")
        return None

    logger.info(f"Priority topological sort completed: {len(order)} modules ordered")
    return order


def topological_order(graph: DependencyGraph) -> Optional[list[Module]]:
    """Dependency-first order with no priority, in discovery order."""
    return priority_order(graph)


def layers(
    graph: DependencyGraph, cycles: Optional[Sequence[Sequence[Module]]] = None
) -> Optional[list[frozenset[Module]]]:
    """Group modules into waves that can be refactored in parallel.

    Layer 0 holds every module without dependencies; layer k holds the
    modules whose dependencies all sit in layers < k. No two modules in the
    same layer depend on each other.

    Returns:
        Layers in refactoring order, or None if the graph has a cycle.
    """
    if graph.is_empty():
        return []

    if cycles is None:
        cycles = graph.detect_cycles()
    if cycles:
        logger.warning("Graph contains cycles; cannot create layers")
        return None

    remaining = {module: graph.out_degree(module) for module in graph}
    placed: set[Module] = set()
    result: list[frozenset[Module]] = []

    while len(placed) < len(graph):
        current = [m for m, count in remaining.items() if count == 0 and m not in placed]
        if not current:
            logger.error(f"Layering stalled with {len(graph) - len(placed)} modules unplaced")
            return None

        result.append(frozenset(current))
        placed.update(current)
        for module in current:
            for dependent in graph.predecessors(module):
                remaining[dependent] -= 1

    logger.info(f"Created {len(result)} layers for parallel refactoring")
    return result
