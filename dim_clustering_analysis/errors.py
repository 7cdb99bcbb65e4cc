"""Exception types raised by the generation, clustering and alignment stages.

Contract violations (bad cluster counts, mismatched lengths, labels outside
the label space) subclass ``ValueError``. Expected failures of the black-box
clustering step subclass ``RuntimeError``/``TimeoutError`` and are recorded
by the experiment runner instead of aborting a grid.
"""

from __future__ import annotations


class ClusteringAnalysisError(Exception):
    """Base class for all errors raised by this package."""


class InvalidClusterCount(ClusteringAnalysisError, ValueError):
    """Raised when the requested number of clusters ``k`` is not positive."""

    def __init__(self, k: int) -> None:
        super().__init__(f"Cluster count must be a positive integer, got {k!r}.")
        self.k = k


class DimensionMismatch(ClusteringAnalysisError, ValueError):
    """Raised when array lengths or dimensionalities do not agree."""


class LabelOutOfRange(ClusteringAnalysisError, ValueError):
    """Raised when a label falls outside the label space ``[0, k)``."""


class DegenerateClustering(ClusteringAnalysisError, RuntimeError):
    """Raised when a clustering uses fewer distinct labels than requested."""

    def __init__(self, n_found: int, k: int) -> None:
        super().__init__(
            f"Clustering produced {n_found} distinct labels, expected {k}."
        )
        self.n_found = n_found
        self.k = k


class ClusteringTimeout(ClusteringAnalysisError, TimeoutError):
    """Raised when a clustering call exceeds its time or iteration budget."""


# Failures of the clustering step that a grid run records rather than raises.
TRIAL_FAILURES: tuple[type[Exception], ...] = (DegenerateClustering, ClusteringTimeout)

__all__ = [
    "ClusteringAnalysisError",
    "InvalidClusterCount",
    "DimensionMismatch",
    "LabelOutOfRange",
    "DegenerateClustering",
    "ClusteringTimeout",
    "TRIAL_FAILURES",
]
