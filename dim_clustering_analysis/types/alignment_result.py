"""Result types produced by the label alignment engine."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from dim_clustering_analysis.errors import DimensionMismatch, LabelOutOfRange


@dataclass(frozen=True)
class LabelMapping:
    """Bijection from predicted labels to true labels.

    ``pred_to_true[j]`` is the true label assigned to predicted label ``j``.
    """

    pred_to_true: tuple[int, ...]

    def __post_init__(self) -> None:
        values = tuple(int(v) for v in self.pred_to_true)
        if sorted(values) != list(range(len(values))):
            raise ValueError(f"Label mapping is not a bijection: {values}.")
        object.__setattr__(self, "pred_to_true", values)

    @property
    def k(self) -> int:
        return len(self.pred_to_true)

    def apply(self, pred_labels: np.ndarray) -> np.ndarray:
        """Translate predicted labels into the true label space."""
        pred = np.asarray(pred_labels, dtype=int)
        if pred.size and (pred.min() < 0 or pred.max() >= self.k):
            raise LabelOutOfRange(
                f"Predicted labels must lie in [0, {self.k}), "
                f"got range [{pred.min()}, {pred.max()}]."
            )
        return np.asarray(self.pred_to_true, dtype=int)[pred]

    def inverse(self) -> "LabelMapping":
        true_to_pred = [0] * self.k
        for pred, true in enumerate(self.pred_to_true):
            true_to_pred[true] = pred
        return LabelMapping(tuple(true_to_pred))

    def as_dict(self) -> dict[int, int]:
        return dict(enumerate(self.pred_to_true))


@dataclass(frozen=True)
class AccuracyResult:
    mapping: LabelMapping
    accuracy: float
    confusion: np.ndarray
    matched: int
    n_points: int

    def __post_init__(self) -> None:
        if self.confusion.shape != (self.mapping.k, self.mapping.k):
            raise DimensionMismatch(
                f"Confusion matrix shape {self.confusion.shape} does not match "
                f"mapping size {self.mapping.k}."
            )
        if not 0.0 <= self.accuracy <= 1.0:
            raise ValueError(f"Accuracy must lie in [0, 1], got {self.accuracy}.")

    @property
    def k(self) -> int:
        return self.mapping.k
