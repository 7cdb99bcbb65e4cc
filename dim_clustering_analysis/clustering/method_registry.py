"""Clustering method registry.

Export a direct ``METHOD_SPECS`` mapping so callers can import it as a
configuration constant, and ``make_adapter`` to build a configured adapter.
"""

from __future__ import annotations

from dim_clustering_analysis import config
from dim_clustering_analysis.clustering.adapter import ClusteringAdapter
from dim_clustering_analysis.clustering.gmm_runner import GaussianMixtureAdapter
from dim_clustering_analysis.clustering.kmeans_runner import KMeansAdapter
from dim_clustering_analysis.types.method_spec import MethodSpec

METHOD_SPECS: dict[str, MethodSpec] = {
    "kmeans": MethodSpec(
        name="K-Means (Lloyd)",
        factory=KMeansAdapter,
        default_params={
            "n_init": config.KMEANS_N_INIT,
            "max_iter": config.KMEANS_MAX_ITER,
            "algorithm": "lloyd",
        },
    ),
    "kmeans_elkan": MethodSpec(
        name="K-Means (Elkan)",
        factory=KMeansAdapter,
        default_params={
            "n_init": config.KMEANS_N_INIT,
            "max_iter": config.KMEANS_MAX_ITER,
            "algorithm": "elkan",
        },
    ),
    "gmm": MethodSpec(
        name="Gaussian Mixture",
        factory=GaussianMixtureAdapter,
        default_params={"n_init": config.KMEANS_N_INIT, "covariance_type": "diag"},
    ),
}


def make_adapter(
    method: str,
    seed: int | None = None,
    timeout: float | None = None,
    **params: object,
) -> ClusteringAdapter:
    """Instantiate the adapter registered under ``method``.

    ``params`` override the registry defaults.
    """
    if method not in METHOD_SPECS:
        raise ValueError(f"Unknown method: {method}")
    spec = METHOD_SPECS[method]
    kwargs = {**spec.default_params, **params}
    return spec.factory(seed=seed, timeout=timeout, **kwargs)
