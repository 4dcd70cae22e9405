"""Directed dependency graph of modules.

Edges are directed: an edge A -> B means A depends on B. Vertices are kept in
insertion order, which is also the row/column order of the adjacency matrix.

At most one edge exists per ordered pair. When the same pair is added twice
the first Dependency (and its weight) is kept and later ones are ignored.
"""

from collections import deque
from dataclasses import replace
from typing import Iterator, Optional

import numpy as np

from ..logging_config import get_logger
from .models import Dependency, Module

logger = get_logger(__name__)


class DependencyGraph:
    """Mutable module graph, read-only once analysis starts."""

    def __init__(self) -> None:
        self._modules: dict[Module, None] = {}
        self._by_name: dict[str, Module] = {}
        self._out: dict[Module, dict[Module, Dependency]] = {}
        self._in: dict[Module, dict[Module, Dependency]] = {}
        self._edge_count = 0

    # ── Construction ──────────────────────────────────────────────

    def add_module(self, module: Module) -> None:
        """Insert a vertex. Re-adding a module with the same name is a no-op."""
        if module in self._modules:
            return
        self._modules[module] = None
        self._by_name[module.name] = module
        self._out[module] = {}
        self._in[module] = {}

    def add_dependency(self, dependency: Dependency) -> None:
        """Insert an edge, adding missing endpoints first."""
        self.add_module(dependency.source)
        self.add_module(dependency.target)

        # Stored edges point at the stored vertices so metadata stays first-seen.
        source = self._by_name[dependency.source.name]
        target = self._by_name[dependency.target.name]

        outgoing = self._out[source]
        if target in outgoing:
            kept = outgoing[target]
            if kept.weight != dependency.weight:
                logger.debug(
                    f"Duplicate edge {source} -> {target}: keeping weight {kept.weight}, "
                    f"ignoring {dependency.weight}"
                )
            return

        if dependency.source is not source or dependency.target is not target:
            dependency = replace(dependency, source=source, target=target)
        outgoing[target] = dependency
        self._in[target][source] = dependency
        self._edge_count += 1

    # ── Vertex / edge access ──────────────────────────────────────

    @property
    def modules(self) -> tuple[Module, ...]:
        return tuple(self._modules)

    @property
    def dependencies(self) -> tuple[Dependency, ...]:
        return tuple(dep for edges in self._out.values() for dep in edges.values())

    @property
    def edge_count(self) -> int:
        return self._edge_count

    def get_module(self, name: str) -> Optional[Module]:
        return self._by_name.get(name)

    def module_index(self) -> dict[Module, int]:
        """Module -> row/column index in to_adjacency_matrix()."""
        return {module: i for i, module in enumerate(self._modules)}

    def weight(self, source: Module, target: Module) -> float:
        """Weight of the kept edge source -> target, 0.0 when absent."""
        dep = self._out.get(source, {}).get(target)
        return dep.weight if dep is not None else 0.0

    def is_empty(self) -> bool:
        return not self._modules

    def __len__(self) -> int:
        return len(self._modules)

    def __contains__(self, module: object) -> bool:
        return module in self._modules

    def __iter__(self) -> Iterator[Module]:
        return iter(self._modules)

    def __repr__(self) -> str:
        return f"DependencyGraph(modules={len(self._modules)}, dependencies={self._edge_count})"

    # ── Neighborhood queries (absent modules yield empty results) ─

    def dependencies_of(self, module: Module) -> set[Module]:
        """Modules that ``module`` depends on."""
        return set(self._out.get(module, ()))

    def dependents_of(self, module: Module) -> set[Module]:
        """Modules that depend on ``module``."""
        return set(self._in.get(module, ()))

    def successors(self, module: Module) -> tuple[Module, ...]:
        """dependencies_of() in edge insertion order."""
        return tuple(self._out.get(module, ()))

    def predecessors(self, module: Module) -> tuple[Module, ...]:
        """dependents_of() in edge insertion order."""
        return tuple(self._in.get(module, ()))

    def in_degree(self, module: Module) -> int:
        return len(self._in.get(module, ()))

    def out_degree(self, module: Module) -> int:
        return len(self._out.get(module, ()))

    # ── Matrix export ─────────────────────────────────────────────

    def to_adjacency_matrix(self) -> np.ndarray:
        """N x N weight matrix; ``m[i, j]`` is the weight of edge i -> j or 0."""
        index = self.module_index()
        n = len(index)
        matrix = np.zeros((n, n), dtype=float)
        for source, edges in self._out.items():
            i = index[source]
            for target, dep in edges.items():
                matrix[i, index[target]] = dep.weight
        return matrix

    # ── Cycles ────────────────────────────────────────────────────

    def detect_cycles(self) -> list[list[Module]]:
        """Return every distinct cycle found by a path-stack DFS.

        Candidate vertices are members of a strongly connected component with
        more than one node, or carriers of a self-loop. From each candidate a
        DFS restricted to its component walks the graph; reaching a vertex
        already on the current path closes a cycle, which is the path slice
        from that vertex to the top of the stack. Cycles covering the same
        vertex set (e.g. rotations) are reported once.

        This is not an enumeration of every simple cycle. Each DFS marks
        vertices visited for the rest of its walk, so a cycle whose only
        route is through an already-visited vertex can go unreported (for
        0->2, 0->3, 1->0, 1->1, 2->0, 2->1, 3->2 the set {0, 1, 2, 3} is
        missed). The result is empty iff the graph is acyclic, and every
        cycle returned is a real closed walk.
        """
        components = _strongly_connected_components(self._out, self._modules)

        component_of: dict[Module, int] = {}
        for cid, component in enumerate(components):
            for module in component:
                component_of[module] = cid

        cycles: list[list[Module]] = []
        seen: set[frozenset[Module]] = set()

        for start in self._modules:
            cid = component_of[start]
            if len(components[cid]) == 1 and start not in self._out[start]:
                continue
            for cycle in self._cycles_from(start, components[cid]):
                key = frozenset(cycle)
                if key not in seen:
                    seen.add(key)
                    cycles.append(cycle)

        return cycles

    def is_acyclic(self) -> bool:
        return not self.detect_cycles()

    def _cycles_from(self, start: Module, component: set[Module]) -> Iterator[list[Module]]:
        """Iterative DFS from ``start`` yielding each back-edge cycle."""
        visited: set[Module] = {start}
        path: list[Module] = [start]
        on_path: dict[Module, int] = {start: 0}
        stack = [iter(self._out[start])]

        while stack:
            pushed = False
            for neighbor in stack[-1]:
                if neighbor not in component:
                    continue
                if neighbor in on_path:
                    yield path[on_path[neighbor]:]
                elif neighbor not in visited:
                    visited.add(neighbor)
                    on_path[neighbor] = len(path)
                    path.append(neighbor)
                    stack.append(iter(self._out[neighbor]))
                    pushed = True
                    break

            if not pushed:
                stack.pop()
                del on_path[path.pop()]

    # ── Connectivity ──────────────────────────────────────────────

    def connected_components(self) -> list[set[Module]]:
        """Weakly connected components, in vertex discovery order."""
        seen: set[Module] = set()
        components: list[set[Module]] = []
        for root in self._modules:
            if root in seen:
                continue
            component: set[Module] = set()
            queue: deque[Module] = deque([root])
            seen.add(root)
            while queue:
                node = queue.popleft()
                component.add(node)
                for neighbor in (*self._out[node], *self._in[node]):
                    if neighbor not in seen:
                        seen.add(neighbor)
                        queue.append(neighbor)
            components.append(component)
        return components

    def is_connected(self) -> bool:
        return len(self.connected_components()) <= 1


def _strongly_connected_components(
    adjacency: dict[Module, dict[Module, Dependency]], nodes: dict[Module, None]
) -> list[set[Module]]:
    """Tarjan's algorithm for strongly connected components (iterative).

    Uses an explicit call stack to avoid Python recursion limits on deep
    dependency chains.
    """
    counter = 0
    scc_stack: list[Module] = []
    on_stack: set[Module] = set()
    index: dict[Module, int] = {}
    lowlink: dict[Module, int] = {}
    result: list[set[Module]] = []

    for root in nodes:
        if root in index:
            continue

        index[root] = lowlink[root] = counter
        counter += 1
        scc_stack.append(root)
        on_stack.add(root)
        call_stack: list[tuple[Module, Iterator[Module]]] = [(root, iter(adjacency[root]))]

        while call_stack:
            v, it = call_stack[-1]
            pushed = False
            for w in it:
                if w not in index:
                    index[w] = lowlink[w] = counter
                    counter += 1
                    scc_stack.append(w)
                    on_stack.add(w)
                    call_stack.append((w, iter(adjacency[w])))
                    pushed = True
                    break
                elif w in on_stack:
                    lowlink[v] = min(lowlink[v], index[w])

            if not pushed:
                call_stack.pop()
                if call_stack:
                    caller = call_stack[-1][0]
                    lowlink[caller] = min(lowlink[caller], lowlink[v])

                if lowlink[v] == index[v]:
                    component: set[Module] = set()
                    while True:
                        w = scc_stack.pop()
                        on_stack.discard(w)
                        component.add(w)
                        if w == v:
                            break
                    result.append(component)

    return result
