"""Label alignment engine.

Finds the bijection from predicted to true labels that maximises the number
of points whose relabeled prediction matches the truth, and scores accuracy
under it.
"""

from __future__ import annotations

import logging
from typing import Callable

import numpy as np

from dim_clustering_analysis import config
from dim_clustering_analysis.alignment.brute_force import brute_force_assignment
from dim_clustering_analysis.alignment.confusion import (
    build_confusion_matrix,
    validate_confusion_matrix,
)
from dim_clustering_analysis.alignment.hungarian import hungarian_assignment
from dim_clustering_analysis.errors import DimensionMismatch
from dim_clustering_analysis.types import AccuracyResult, LabelMapping

logger = logging.getLogger(__name__)

AssignmentSolver = Callable[[np.ndarray], "tuple[tuple[int, ...], int]"]

ALIGNMENT_SOLVERS: dict[str, AssignmentSolver] = {
    "hungarian": hungarian_assignment,
    "brute_force": brute_force_assignment,
}


def _resolve_solver(method: str) -> AssignmentSolver:
    try:
        return ALIGNMENT_SOLVERS[method]
    except KeyError:
        raise ValueError(f"Unknown alignment method: {method}") from None


def accuracy_under_mapping(confusion: np.ndarray, mapping: LabelMapping) -> float:
    """Fraction of points on the diagonal after relabeling with ``mapping``."""
    cm = validate_confusion_matrix(confusion)
    if cm.shape[0] != mapping.k:
        raise DimensionMismatch(
            f"Mapping of size {mapping.k} cannot score a {cm.shape} confusion matrix."
        )
    total = int(cm.sum())
    if total == 0:
        raise DimensionMismatch("Cannot score an empty confusion matrix.")
    matched = int(cm[list(mapping.pred_to_true), np.arange(mapping.k)].sum())
    return matched / total


def align_confusion(
    confusion: np.ndarray, method: str = config.ALIGNMENT_METHOD
) -> AccuracyResult:
    """Optimal relabeling for a ``(true, pred)`` confusion matrix."""
    cm = validate_confusion_matrix(confusion)
    n_points = int(cm.sum())
    if n_points == 0:
        raise DimensionMismatch("Cannot align labels over zero points.")

    pred_to_true, matched = _resolve_solver(method)(cm)
    mapping = LabelMapping(pred_to_true)
    accuracy = matched / n_points
    logger.debug(
        "Aligned k=%d labels with %s: matched %d/%d (accuracy %.4f)",
        cm.shape[0],
        method,
        matched,
        n_points,
        accuracy,
    )
    return AccuracyResult(
        mapping=mapping,
        accuracy=accuracy,
        confusion=cm,
        matched=matched,
        n_points=n_points,
    )


def align_labels(
    true_labels: np.ndarray,
    pred_labels: np.ndarray,
    k: int,
    method: str = config.ALIGNMENT_METHOD,
) -> AccuracyResult:
    """Build the confusion matrix for two labelings and align it."""
    confusion = build_confusion_matrix(true_labels, pred_labels, k)
    return align_confusion(confusion, method=method)


class LabelAlignmentEngine:
    """Stateless front end over the alignment solvers.

    ``method="hungarian"`` is the production path; ``"brute_force"`` is the
    exhaustive reference used to validate it.
    """

    def __init__(self, method: str = config.ALIGNMENT_METHOD) -> None:
        _resolve_solver(method)
        self.method = method

    def align(
        self, true_labels: np.ndarray, pred_labels: np.ndarray, k: int
    ) -> AccuracyResult:
        return align_labels(true_labels, pred_labels, k, method=self.method)

    def align_confusion(self, confusion: np.ndarray) -> AccuracyResult:
        return align_confusion(confusion, method=self.method)

    def __repr__(self) -> str:
        return f"LabelAlignmentEngine(method={self.method!r})"
