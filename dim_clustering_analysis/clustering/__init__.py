"""Clustering adapters: the black-box clustering step behind one seam."""

from .adapter import BaseClusteringAdapter, ClusteringAdapter, normalize_predictions
from .gmm_runner import GaussianMixtureAdapter
from .kmeans_runner import KMeansAdapter
from .method_registry import METHOD_SPECS, make_adapter

__all__ = [
    "BaseClusteringAdapter",
    "ClusteringAdapter",
    "normalize_predictions",
    "GaussianMixtureAdapter",
    "KMeansAdapter",
    "METHOD_SPECS",
    "make_adapter",
]
