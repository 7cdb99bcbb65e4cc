"""Contingency table between true and predicted labels."""

from __future__ import annotations

import numpy as np

from dim_clustering_analysis.errors import (
    DimensionMismatch,
    InvalidClusterCount,
    LabelOutOfRange,
)


def _as_label_array(labels: np.ndarray, name: str) -> np.ndarray:
    arr = np.asarray(labels)
    if arr.ndim != 1:
        raise DimensionMismatch(f"{name} must be one-dimensional, got shape {arr.shape}.")
    if arr.size and not np.issubdtype(arr.dtype, np.integer):
        as_int = arr.astype(int)
        if not np.array_equal(as_int, arr):
            raise LabelOutOfRange(f"{name} must contain integer labels.")
        arr = as_int
    return arr.astype(np.int64, copy=False)


def _check_range(labels: np.ndarray, k: int, name: str) -> None:
    if labels.size == 0:
        return
    lo, hi = int(labels.min()), int(labels.max())
    if lo < 0 or hi >= k:
        raise LabelOutOfRange(
            f"{name} must lie in [0, {k}), found values in [{lo}, {hi}]."
        )


def build_confusion_matrix(
    true_labels: np.ndarray, pred_labels: np.ndarray, k: int
) -> np.ndarray:
    """Count co-occurrences of true and predicted labels.

    Returns a ``(k, k)`` int64 matrix whose cell ``(i, j)`` is the number of
    points with true label ``i`` and predicted label ``j``. Row sums are the
    true cluster sizes; the total equals the number of points.
    """
    if int(k) <= 0:
        raise InvalidClusterCount(k)
    k = int(k)
    true_arr = _as_label_array(true_labels, "true_labels")
    pred_arr = _as_label_array(pred_labels, "pred_labels")
    if true_arr.shape[0] != pred_arr.shape[0]:
        raise DimensionMismatch(
            f"Label sequences differ in length: {true_arr.shape[0]} true vs "
            f"{pred_arr.shape[0]} predicted."
        )
    _check_range(true_arr, k, "true_labels")
    _check_range(pred_arr, k, "pred_labels")

    flat = np.bincount(true_arr * k + pred_arr, minlength=k * k)
    return flat.reshape(k, k).astype(np.int64)


def validate_confusion_matrix(confusion: np.ndarray) -> np.ndarray:
    """Return ``confusion`` as a square non-negative int64 array."""
    cm = np.asarray(confusion)
    if cm.ndim != 2 or cm.shape[0] != cm.shape[1]:
        raise DimensionMismatch(f"Confusion matrix must be square, got shape {cm.shape}.")
    if cm.shape[0] == 0:
        raise InvalidClusterCount(0)
    if cm.size and not np.issubdtype(cm.dtype, np.integer):
        as_int = np.rint(cm).astype(np.int64)
        if not np.array_equal(as_int, cm):
            raise ValueError("Confusion matrix must contain integer counts.")
        cm = as_int
    if (cm < 0).any():
        raise ValueError("Confusion matrix counts must be non-negative.")
    return cm.astype(np.int64, copy=False)
