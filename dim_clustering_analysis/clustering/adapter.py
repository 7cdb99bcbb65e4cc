"""The seam between the harness and an external clustering capability.

Any object with a ``cluster(points, k) -> labels`` method can be plugged in.
:class:`BaseClusteringAdapter` adds what every adapter needs on top of a raw
``fit_predict``: input checks, a wall-clock budget, and normalisation of the
returned labels to ``[0, k)``.
"""

from __future__ import annotations

import logging
import time
import warnings
from typing import Protocol, runtime_checkable

import numpy as np
from sklearn.exceptions import ConvergenceWarning

from dim_clustering_analysis.errors import (
    ClusteringTimeout,
    DegenerateClustering,
    DimensionMismatch,
    InvalidClusterCount,
    LabelOutOfRange,
)

logger = logging.getLogger(__name__)


@runtime_checkable
class ClusteringAdapter(Protocol):
    def cluster(self, points: np.ndarray, k: int) -> np.ndarray: ...


def normalize_predictions(raw_labels: np.ndarray, n_points: int, k: int) -> np.ndarray:
    """Map arbitrary predicted label values onto contiguous ids ``0..k-1``.

    Distinct raw values are ranked in ascending order. A clustering that uses
    fewer than ``k`` labels is reported, never padded.
    """
    labels = np.asarray(raw_labels)
    if labels.ndim != 1 or labels.shape[0] != n_points:
        raise DimensionMismatch(
            f"Clustering returned {labels.shape} labels for {n_points} points."
        )
    unique, inverse = np.unique(labels, return_inverse=True)
    if len(unique) > k:
        raise LabelOutOfRange(
            f"Clustering returned {len(unique)} distinct labels, expected {k}."
        )
    if len(unique) < k:
        raise DegenerateClustering(len(unique), k)
    return inverse.reshape(-1).astype(int)


class BaseClusteringAdapter:
    """Common behaviour for adapters wrapping a scikit-learn estimator."""

    def __init__(
        self,
        seed: int | None = None,
        timeout: float | None = None,
        fail_on_max_iter: bool = False,
    ) -> None:
        self.seed = seed
        self.timeout = timeout
        self.fail_on_max_iter = fail_on_max_iter
        self.last_elapsed_: float | None = None
        self.last_n_iter_: int | None = None

    def _fit_predict(self, X: np.ndarray, k: int) -> tuple[np.ndarray, int, bool]:
        """Return (labels, iterations used, converged)."""
        raise NotImplementedError

    def _validate(self, points: np.ndarray, k: int) -> np.ndarray:
        if int(k) <= 0:
            raise InvalidClusterCount(k)
        X = np.array(points, dtype=float)
        if X.ndim != 2 or X.shape[1] == 0:
            raise DimensionMismatch(
                f"Points must be a 2-D (n_points, n_dims) array, got shape {X.shape}."
            )
        if X.shape[0] < k:
            raise DegenerateClustering(X.shape[0], k)
        return X

    def cluster(self, points: np.ndarray, k: int) -> np.ndarray:
        X = self._validate(points, k)
        started = time.perf_counter()
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always", ConvergenceWarning)
            raw, n_iter, converged = self._fit_predict(X, int(k))
        elapsed = time.perf_counter() - started
        self.last_elapsed_ = elapsed
        self.last_n_iter_ = n_iter

        for warning in caught:
            logger.debug("%s: %s", type(self).__name__, warning.message)

        if self.timeout is not None and elapsed > self.timeout:
            raise ClusteringTimeout(
                f"{type(self).__name__} took {elapsed:.3f}s "
                f"(budget {self.timeout:.3f}s)."
            )
        if self.fail_on_max_iter and not converged:
            raise ClusteringTimeout(
                f"{type(self).__name__} reached its iteration cap ({n_iter}) "
                "without converging."
            )
        return normalize_predictions(raw, X.shape[0], int(k))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(seed={self.seed!r}, timeout={self.timeout!r})"
