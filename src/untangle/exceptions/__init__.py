"""Exception hierarchy for untangle."""

from .analysis import (
    AnalysisError,
    InvalidDependencyError,
    InvalidMatrixError,
    SpectralDecompositionError,
)
from .base import UntangleError
from .config import ConfigurationError, InvalidConfigError

__all__ = [
    "UntangleError",
    "AnalysisError",
    "InvalidMatrixError",
    "InvalidDependencyError",
    "SpectralDecompositionError",
    "ConfigurationError",
    "InvalidConfigError",
]
