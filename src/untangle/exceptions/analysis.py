"""Analysis-related exceptions: malformed matrices, edges, eigen failures."""

from typing import Tuple

from .base import UntangleError


class AnalysisError(UntangleError):
    """Base class for analysis-related errors."""
    pass


class InvalidMatrixError(AnalysisError):
    """Raised when an adjacency matrix violates the scoring contract."""

    def __init__(self, reason: str, shape: Tuple[int, ...] = ()):
        super().__init__(
            f"Invalid adjacency matrix: {reason}",
            details={"shape": "x".join(str(d) for d in shape) or "unknown"},
        )
        self.reason = reason
        self.shape = shape


class InvalidDependencyError(AnalysisError):
    """Raised when a dependency edge carries an unusable weight."""

    def __init__(self, source: str, target: str, reason: str):
        super().__init__(
            f"Invalid dependency {source} -> {target}",
            details={"source": source, "target": target, "reason": reason},
        )
        self.source = source
        self.target = target
        self.reason = reason


class SpectralDecompositionError(AnalysisError):
    """Raised when the eigen-decomposition cannot produce a real dominant vector.

    The structural scorer catches this and substitutes a uniform sub-score.
    """

    def __init__(self, reason: str):
        super().__init__(f"Spectral decomposition failed: {reason}", details={"reason": reason})
        self.reason = reason
