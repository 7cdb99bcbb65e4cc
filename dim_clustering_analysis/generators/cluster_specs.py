"""Draw the per-cluster parameters (center, spread, size) for a trial.

Centers come from a Latin hypercube design so that every axis is stratified
into ``k`` bins; scaling by ``k`` keeps the expected inter-center distance
growing with the cluster count.
"""

from __future__ import annotations

import numpy as np
from scipy.stats import qmc

from dim_clustering_analysis.errors import DimensionMismatch, InvalidClusterCount
from dim_clustering_analysis.types import ClusterSpec


def _validate_size_range(size_range: tuple[int, int, int]) -> np.ndarray:
    """Return the admissible cluster sizes for an inclusive (min, max, step)."""
    if len(size_range) != 3:
        raise ValueError("size_range must be a (min, max, step) triple.")
    lo, hi, step = (int(v) for v in size_range)
    if lo <= 0:
        raise ValueError(f"Minimum cluster size must be positive, got {lo}.")
    if hi < lo:
        raise ValueError(f"size_range max ({hi}) is below min ({lo}).")
    if step <= 0:
        raise ValueError(f"size_range step must be positive, got {step}.")
    return np.arange(lo, hi + 1, step, dtype=int)


def _validate_counts(k: int, ndim: int) -> None:
    if int(k) <= 0:
        raise InvalidClusterCount(k)
    if int(ndim) <= 0:
        raise DimensionMismatch(f"Number of dimensions must be positive, got {ndim}.")


def sample_centers(k: int, ndim: int, rng: np.random.Generator) -> np.ndarray:
    """Latin hypercube sample of ``k`` centers in ``[0, k)^ndim``."""
    _validate_counts(k, ndim)
    sampler = qmc.LatinHypercube(d=int(ndim), rng=rng)
    return sampler.random(n=int(k)) * k


def sample_spreads(k: int, sd_mult: float, rng: np.random.Generator) -> np.ndarray:
    """Independent uniform(0, 1) standard deviations scaled by ``sd_mult``."""
    if sd_mult <= 0:
        raise ValueError(f"sd_mult must be positive, got {sd_mult}.")
    # Open interval: exclude an exact zero so every spread stays positive.
    base = rng.uniform(np.finfo(float).tiny, 1.0, size=int(k))
    return base * float(sd_mult)


def sample_sizes(
    k: int, size_range: tuple[int, int, int], rng: np.random.Generator
) -> np.ndarray:
    choices = _validate_size_range(size_range)
    return rng.choice(choices, size=int(k), replace=True)


def draw_cluster_specs(
    k: int,
    ndim: int,
    sd_mult: float,
    size_range: tuple[int, int, int],
    rng: np.random.Generator,
) -> tuple[ClusterSpec, ...]:
    """Draw the immutable per-cluster parameters of one trial."""
    _validate_counts(k, ndim)
    centers = sample_centers(k, ndim, rng)
    spreads = sample_spreads(k, sd_mult, rng)
    sizes = sample_sizes(k, size_range, rng)
    return tuple(
        ClusterSpec(
            center=centers[label],
            spread=float(spreads[label]),
            size=int(sizes[label]),
            label=label,
        )
        for label in range(int(k))
    )
