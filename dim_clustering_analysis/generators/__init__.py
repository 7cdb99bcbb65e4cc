from .cluster_specs import draw_cluster_specs
from .generate_gaussian_clusters import generate_gaussian_clusters, sample_points
from .generate_case_data import generate_case_data

__all__ = [
    "draw_cluster_specs",
    "generate_gaussian_clusters",
    "sample_points",
    "generate_case_data",
]
