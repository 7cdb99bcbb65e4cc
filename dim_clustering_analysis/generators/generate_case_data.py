"""Create trial data from a case dictionary.

Exports:
- generate_case_data(test_case: dict) -> tuple[pd.DataFrame, np.ndarray, PointSet, dict]
"""

from __future__ import annotations

from typing import Any, Dict, Tuple

import numpy as np
import pandas as pd

from dim_clustering_analysis import config
from dim_clustering_analysis.generators.generate_gaussian_clusters import (
    generate_gaussian_clusters,
)
from dim_clustering_analysis.types import PointSet


def _generate_gaussian_case(
    test_case: dict,
) -> Tuple[pd.DataFrame, np.ndarray, PointSet, Dict[str, Any]]:
    try:
        k = int(test_case["n_clusters"])
        ndim = int(test_case["n_features"])
    except KeyError as exc:
        raise ValueError(f"Gaussian generator requires {exc.args[0]!r}.") from None
    sd_mult = float(test_case.get("sd_mult", 1.0))
    size_range = tuple(test_case.get("size_range", config.DEFAULT_SIZE_RANGE))
    seed = test_case.get("seed")

    point_set = generate_gaussian_clusters(k, ndim, sd_mult, size_range, seed=seed)

    data_df = pd.DataFrame(
        point_set.points,
        index=[f"S{j}" for j in range(point_set.n_points)],
        columns=[f"F{j}" for j in range(point_set.n_dims)],
    )
    metadata = {
        "n_samples": point_set.n_points,
        "n_features": point_set.n_dims,
        "n_clusters": point_set.n_clusters,
        "sd_mult": sd_mult,
        "cluster_sizes": point_set.cluster_sizes,
        "name": test_case.get("name", f"gaussian_k{k}_d{ndim}_sd{sd_mult:g}"),
        "generator": "gaussian",
    }
    return data_df, np.asarray(point_set.true_labels), point_set, metadata


def generate_case_data(
    test_case: dict,
) -> Tuple[pd.DataFrame, np.ndarray, PointSet, Dict[str, Any]]:
    """Create a feature dataframe, true labels, the point set, and metadata.

    Dispatches on ``test_case['generator']`` (default ``"gaussian"``).
    """
    generator = test_case.get("generator", "gaussian")
    if generator == "gaussian":
        return _generate_gaussian_case(test_case)
    raise ValueError(f"Unknown generator: {generator}")
