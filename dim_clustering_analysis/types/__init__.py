"""Types package.

Re-export the small dataclasses shared across the pipeline.
"""

from __future__ import annotations

from .cluster_data import ClusterSpec, PointSet
from .alignment_result import AccuracyResult, LabelMapping
from .trial_result import RESULT_COLUMNS, TrialKey, TrialResult, TrialStatus
from .experiment_config import ExperimentConfig
from .method_spec import MethodSpec

__all__ = [
    "ClusterSpec",
    "PointSet",
    "AccuracyResult",
    "LabelMapping",
    "RESULT_COLUMNS",
    "TrialKey",
    "TrialResult",
    "TrialStatus",
    "ExperimentConfig",
    "MethodSpec",
]
