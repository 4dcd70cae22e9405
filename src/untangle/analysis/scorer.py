"""StructuralScorer: per-module complexity in [0, 1] from an adjacency matrix.

Three sub-scores are computed independently, each min-max normalized, then
blended:

    combined = 0.4 * spectral + 0.3 * degree + 0.3 * centrality

and the blend is min-max normalized once more. Spectral captures long-range
structural weight, degree captures local fan-in/fan-out, and PageRank-style
centrality captures importance propagated along weighted paths.
"""

from typing import Optional, Sequence, Union

import numpy as np

from ..config import ScoringConfig
from ..exceptions import InvalidMatrixError, SpectralDecompositionError
from ..graph.dependency_graph import DependencyGraph
from ..graph.models import Module
from ..logging_config import get_logger
from ..math.graph import GraphMetrics
from ..math.normalization import Normalization
from .models import ComplexityLevel, StructureSummary

logger = get_logger(__name__)

MatrixLike = Union[np.ndarray, Sequence[Sequence[float]]]


class StructuralScorer:
    """Scores modules by structural risk. Stateless apart from its config."""

    def __init__(self, config: Optional[ScoringConfig] = None):
        self.config = config or ScoringConfig()

    def score(self, matrix: MatrixLike) -> np.ndarray:
        """Complexity score per matrix row, index-aligned with the matrix.

        Raises:
            InvalidMatrixError: If the matrix is not square, or holds
                negative or non-finite entries
        """
        adj = validate_matrix(matrix)
        n = adj.shape[0]
        if n == 0:
            return np.zeros(0)

        logger.debug(f"Scoring {n} modules")
        cfg = self.config

        spectral = Normalization.min_max(self._spectral(adj))
        degree = Normalization.min_max(GraphMetrics.degree_balance(adj))
        centrality = Normalization.min_max(
            GraphMetrics.pagerank(adj, damping=cfg.damping, iterations=cfg.iterations)
        )

        combined = (
            cfg.spectral_weight * spectral
            + cfg.degree_weight * degree
            + cfg.centrality_weight * centrality
        )
        if combined.max() <= 0:
            return np.zeros(n)

        return Normalization.min_max(combined)

    def score_graph(self, graph: DependencyGraph) -> dict[Module, float]:
        """score() keyed by module instead of matrix index."""
        scores = self.score(graph.to_adjacency_matrix())
        return {module: float(scores[i]) for i, module in enumerate(graph.modules)}

    def _spectral(self, adj: np.ndarray) -> np.ndarray:
        try:
            return GraphMetrics.dominant_eigenvector(
                adj, imaginary_tolerance=self.config.imaginary_tolerance
            )
        except SpectralDecompositionError as e:
            logger.warning(f"{e}; using uniform spectral sub-score")
            return np.full(adj.shape[0], self.config.spectral_fallback)

    def spectrum(self, matrix: MatrixLike) -> list[float]:
        """Real eigenvalue spectrum, largest first (diagnostics only)."""
        adj = validate_matrix(matrix)
        eigenvalues = GraphMetrics.real_spectrum(adj)
        if eigenvalues:
            logger.debug("Eigenvalues: " + ", ".join(f"{v:.3f}" for v in eigenvalues))
        return eigenvalues

    def analyze_structure(
        self, matrix: MatrixLike, is_acyclic: Optional[bool] = None
    ) -> StructureSummary:
        """Edge counts, density, and acyclicity straight from the matrix.

        When ``is_acyclic`` is not supplied it is read off the transitive
        closure: a cycle exists iff some vertex reaches itself. Callers that
        already ran cycle detection should pass the answer; the closure costs
        O(N^3 log N).
        """
        adj = validate_matrix(matrix)
        n = adj.shape[0]
        if n == 0:
            return StructureSummary()

        per_row = (adj > 0).sum(axis=1)
        total = int(per_row.sum())
        density = total / (n * (n - 1)) if n > 1 else 0.0
        if is_acyclic is None:
            is_acyclic = not bool(np.any(np.diag(GraphMetrics.reachability(adj))))

        return StructureSummary(
            module_count=n,
            total_dependencies=total,
            average_dependencies=total / n,
            max_dependencies=int(per_row.max()),
            density=density,
            is_acyclic=is_acyclic,
        )


def validate_matrix(matrix: MatrixLike) -> np.ndarray:
    """Coerce to a float ndarray and enforce the adjacency contract."""
    try:
        adj = np.asarray(matrix, dtype=float)
    except (TypeError, ValueError) as e:
        raise InvalidMatrixError(f"not numeric or ragged ({e})") from e

    if adj.ndim == 1 and adj.size == 0:
        return adj.reshape(0, 0)
    if adj.ndim != 2:
        raise InvalidMatrixError(f"expected 2 dimensions, got {adj.ndim}", adj.shape)
    if adj.shape[0] != adj.shape[1]:
        raise InvalidMatrixError("matrix is not square", adj.shape)
    if not np.all(np.isfinite(adj)):
        raise InvalidMatrixError("matrix contains non-finite entries", adj.shape)
    if np.any(adj < 0):
        raise InvalidMatrixError("matrix contains negative weights", adj.shape)
    return adj


def group_by_complexity(scores: dict[Module, float]) -> dict[ComplexityLevel, list[Module]]:
    """Bucket modules by complexity level. Every level is present as a key."""
    result: dict[ComplexityLevel, list[Module]] = {level: [] for level in ComplexityLevel}
    for module, score in scores.items():
        result[ComplexityLevel.of(score)].append(module)
    return result
