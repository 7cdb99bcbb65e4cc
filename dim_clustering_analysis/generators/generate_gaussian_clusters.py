"""Synthetic labeled Gaussian point clouds."""

from __future__ import annotations

import numpy as np

from dim_clustering_analysis import config
from dim_clustering_analysis.generators.cluster_specs import draw_cluster_specs
from dim_clustering_analysis.types import ClusterSpec, PointSet


def _resolve_rng(
    seed: int | None, rng: np.random.Generator | None
) -> np.random.Generator:
    if rng is not None and seed is not None:
        raise ValueError("Pass either `seed` or `rng`, not both.")
    return rng if rng is not None else np.random.default_rng(seed)


def sample_points(
    specs: tuple[ClusterSpec, ...], rng: np.random.Generator
) -> PointSet:
    """Draw each cluster's points coordinate-wise from Normal(center, spread).

    Points are laid out cluster-major; the label of each point is the label
    of the ClusterSpec it was drawn from.
    """
    blocks = [
        rng.normal(loc=spec.center, scale=spec.spread, size=(spec.size, spec.n_dims))
        for spec in specs
    ]
    labels = [np.full(spec.size, spec.label, dtype=int) for spec in specs]
    points = np.vstack(blocks)
    true_labels = np.concatenate(labels)
    points.setflags(write=False)
    true_labels.setflags(write=False)
    return PointSet(points=points, true_labels=true_labels, specs=tuple(specs))


def generate_gaussian_clusters(
    k: int,
    ndim: int,
    sd_mult: float,
    size_range: tuple[int, int, int] = config.DEFAULT_SIZE_RANGE,
    *,
    seed: int | None = None,
    rng: np.random.Generator | None = None,
) -> PointSet:
    """Generate ``k`` Gaussian clusters in ``ndim`` dimensions.

    Parameters
    ----------
    k : int
        Number of clusters (> 0).
    ndim : int
        Dimensionality of every point (> 0).
    sd_mult : float
        Multiplier applied to each cluster's uniform(0, 1) standard deviation.
    size_range : tuple[int, int, int]
        Inclusive (min, max, step) range for per-cluster point counts.
    seed, rng
        Source of randomness; identical seeds give identical point sets.

    Returns
    -------
    PointSet
        Points in cluster-major order with ground-truth labels ``0..k-1``.

    Raises
    ------
    InvalidClusterCount
        If ``k <= 0``.
    DimensionMismatch
        If ``ndim <= 0``.
    ValueError
        If ``sd_mult <= 0`` or ``size_range`` is malformed.
    """
    generator = _resolve_rng(seed, rng)
    specs = draw_cluster_specs(k, ndim, sd_mult, size_range, generator)
    return sample_points(specs, generator)
