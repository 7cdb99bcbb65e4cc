import numpy as np
import pytest

from dim_clustering_analysis.errors import DimensionMismatch, LabelOutOfRange
from dim_clustering_analysis.types import AccuracyResult, LabelMapping


def test_mapping_must_be_a_bijection():
    with pytest.raises(ValueError, match="bijection"):
        LabelMapping((0, 0, 1))
    with pytest.raises(ValueError, match="bijection"):
        LabelMapping((0, 2))


def test_apply_and_inverse():
    mapping = LabelMapping((2, 0, 1))
    assert mapping.apply(np.array([0, 1, 2, 2])).tolist() == [2, 0, 1, 1]
    assert mapping.inverse().pred_to_true == (1, 2, 0)
    assert mapping.inverse().inverse() == mapping


def test_apply_rejects_labels_outside_mapping():
    with pytest.raises(LabelOutOfRange):
        LabelMapping((1, 0)).apply(np.array([0, 2]))


def test_accuracy_result_checks_shape_and_range():
    mapping = LabelMapping((0, 1))
    with pytest.raises(DimensionMismatch):
        AccuracyResult(mapping, 1.0, np.zeros((3, 3), dtype=int), 0, 3)
    with pytest.raises(ValueError, match="Accuracy"):
        AccuracyResult(mapping, 1.5, np.eye(2, dtype=int), 3, 2)
