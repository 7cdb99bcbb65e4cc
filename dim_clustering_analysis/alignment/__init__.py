"""Label alignment: confusion matrices and optimal predicted-to-true mappings."""

from .confusion import build_confusion_matrix, validate_confusion_matrix
from .hungarian import hungarian_assignment, solve_assignment
from .brute_force import brute_force_assignment
from .engine import (
    ALIGNMENT_SOLVERS,
    LabelAlignmentEngine,
    accuracy_under_mapping,
    align_confusion,
    align_labels,
)

__all__ = [
    "build_confusion_matrix",
    "validate_confusion_matrix",
    "hungarian_assignment",
    "solve_assignment",
    "brute_force_assignment",
    "ALIGNMENT_SOLVERS",
    "LabelAlignmentEngine",
    "accuracy_under_mapping",
    "align_confusion",
    "align_labels",
]
