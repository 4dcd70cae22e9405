"""Public API for untangle.

Example:
    >>> from untangle import Dependency, Module, build_graph, run_analysis
    >>>
    >>> graph = build_graph()
    >>> core, web = Module("core"), Module("web")
    >>> graph.add_dependency(Dependency(web, core))
    >>> [m.name for m in run_analysis(graph).modules]
    ['core', 'web']
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from .analysis.models import RefactoringPlan
from .analysis.planner import PlanAssembler
from .analysis.scorer import StructuralScorer
from .config import AnalysisConfig, load_config
from .graph.dependency_graph import DependencyGraph
from .graph.models import Dependency, Module, ModuleKind
from .logging_config import get_logger, setup_logging_for

logger = get_logger(__name__)


def build_graph() -> DependencyGraph:
    """Fresh, empty graph for a scanner (or a caller) to populate."""
    return DependencyGraph()


def run_analysis(graph: DependencyGraph, config: Optional[AnalysisConfig] = None) -> RefactoringPlan:
    """Score, order and package a refactoring plan for ``graph``.

    Args:
        graph: Populated dependency graph; must not change during the call
        config: Scoring and effort parameters (defaults if omitted)

    Returns:
        RefactoringPlan. Never raises for a structurally valid graph, cyclic
        or not.
    """
    config = config or AnalysisConfig()
    assembler = PlanAssembler(StructuralScorer(config.scoring), config.effort)
    return assembler.assemble(graph)


def analyze(
    graph: DependencyGraph, config_file: Optional[Path] = None, **overrides
) -> RefactoringPlan:
    """Load configuration, set up logging, then run_analysis().

    This is the entry point for scripts: configuration is discovered the
    same way as load_config() (./untangle.toml, ``config_file``, UNTANGLE_*
    variables, then ``overrides``) and its ``verbosity`` decides the log
    level.

    Example:
        >>> plan = analyze(create_example_graph(), quiet=True)
        >>> len(plan.steps)
        5

    Raises:
        ConfigurationError: If configuration is invalid
    """
    config = load_config(config_file=config_file, **overrides)
    setup_logging_for(config.verbosity)
    logger.debug(f"Configuration loaded: {config.verbosity} mode")
    return run_analysis(graph, config)


def get_layers(graph: DependencyGraph) -> Optional[list[frozenset[Module]]]:
    """Parallel refactoring layers, or None if the graph has a cycle."""
    return PlanAssembler().layers(graph)


def find_cycles(graph: DependencyGraph) -> list[list[Module]]:
    """Circular dependencies only, without scoring."""
    return graph.detect_cycles()


def create_example_graph() -> DependencyGraph:
    """Small five-module sample: A -> {B, C}, B -> D, C -> {D, E}."""
    graph = build_graph()
    a, b, c, d, e = (
        Module(f"Module{x}", f"/example/{x}", ModuleKind.PACKAGE) for x in "ABCDE"
    )
    for module in (a, b, c, d, e):
        graph.add_module(module)

    graph.add_dependency(Dependency(a, b))
    graph.add_dependency(Dependency(a, c))
    graph.add_dependency(Dependency(b, d))
    graph.add_dependency(Dependency(c, d))
    graph.add_dependency(Dependency(c, e))

    logger.info("Created example graph with 5 modules and 5 dependencies")
    return graph
