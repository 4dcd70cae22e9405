"""Numerical building blocks for structural scoring."""

from .graph import GraphMetrics
from .normalization import Normalization

__all__ = [
    "GraphMetrics",
    "Normalization",
]
