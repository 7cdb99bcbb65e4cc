import numpy as np
import pytest

from dim_clustering_analysis.alignment import (
    build_confusion_matrix,
    validate_confusion_matrix,
)
from dim_clustering_analysis.errors import (
    DimensionMismatch,
    InvalidClusterCount,
    LabelOutOfRange,
)


def test_swapped_labels_give_anti_diagonal_counts():
    cm = build_confusion_matrix([0, 0, 0, 1, 1, 1], [1, 1, 1, 0, 0, 0], k=2)
    assert cm.tolist() == [[0, 3], [3, 0]]
    assert cm.dtype == np.int64


def test_cells_sum_to_point_count_and_rows_to_cluster_sizes():
    rng = np.random.default_rng(0)
    true = rng.integers(0, 5, size=200)
    pred = rng.integers(0, 5, size=200)
    cm = build_confusion_matrix(true, pred, k=5)

    assert cm.shape == (5, 5)
    assert cm.sum() == len(true)
    assert cm.sum(axis=1).tolist() == np.bincount(true, minlength=5).tolist()
    assert cm.sum(axis=0).tolist() == np.bincount(pred, minlength=5).tolist()


def test_unused_labels_leave_zero_rows_and_columns():
    cm = build_confusion_matrix([0, 0, 2], [1, 1, 1], k=3)
    assert cm.tolist() == [[0, 2, 0], [0, 0, 0], [0, 1, 0]]


def test_length_mismatch_is_rejected():
    with pytest.raises(DimensionMismatch, match="differ in length"):
        build_confusion_matrix([0, 1, 1], [0, 1], k=2)


@pytest.mark.parametrize(
    "true, pred",
    [([0, 1, 2], [0, 1, 1]), ([0, 1, 1], [0, -1, 1]), ([0, 1, 1], [0, 1, 7])],
)
def test_labels_outside_label_space_are_rejected(true, pred):
    with pytest.raises(LabelOutOfRange):
        build_confusion_matrix(true, pred, k=2)


def test_non_positive_k_is_rejected():
    with pytest.raises(InvalidClusterCount):
        build_confusion_matrix([], [], k=0)


def test_validate_rejects_non_square_and_negative_matrices():
    with pytest.raises(DimensionMismatch, match="square"):
        validate_confusion_matrix(np.zeros((2, 3), dtype=int))
    with pytest.raises(ValueError, match="non-negative"):
        validate_confusion_matrix(np.array([[1, -1], [0, 2]]))
    with pytest.raises(InvalidClusterCount):
        validate_confusion_matrix(np.zeros((0, 0), dtype=int))


def test_validate_accepts_integer_valued_floats():
    cm = validate_confusion_matrix(np.array([[1.0, 2.0], [3.0, 0.0]]))
    assert cm.dtype == np.int64
    assert cm.tolist() == [[1, 2], [3, 0]]
