"""
untangle - Dependency-graph analysis for safe refactoring order

Scores each module's structural risk (spectral, degree and PageRank-style
centrality), finds circular dependencies, and produces a deterministic
dependencies-first refactoring order plus layers that can be worked on in
parallel.
"""

__version__ = "0.1.0"

from .analysis import ComplexityLevel, RefactoringPlan, RefactoringStep, StructureSummary
from .api import (
    analyze,
    build_graph,
    create_example_graph,
    find_cycles,
    get_layers,
    run_analysis,
)
from .config import AnalysisConfig, EffortConfig, ScoringConfig, load_config
from .graph import Dependency, DependencyGraph, DependencyKind, Module, ModuleKind

__all__ = [
    "analyze",  # Configured entry point for scripts
    "build_graph",  # Graph construction entry point
    "run_analysis",  # Plan assembly entry point
    "get_layers",
    "find_cycles",
    "create_example_graph",
    "AnalysisConfig",
    "ScoringConfig",
    "EffortConfig",
    "load_config",
    "ComplexityLevel",
    "Dependency",
    "DependencyGraph",
    "DependencyKind",
    "Module",
    "ModuleKind",
    "RefactoringPlan",
    "RefactoringStep",
    "StructureSummary",
]
