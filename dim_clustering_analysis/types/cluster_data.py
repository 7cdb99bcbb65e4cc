"""Dataclasses describing generated cluster data."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class ClusterSpec:
    center: np.ndarray
    spread: float
    size: int
    label: int

    def __post_init__(self) -> None:
        if self.spread <= 0:
            raise ValueError(f"Cluster spread must be positive, got {self.spread}.")
        if self.size <= 0:
            raise ValueError(f"Cluster size must be positive, got {self.size}.")

    @property
    def n_dims(self) -> int:
        return int(np.asarray(self.center).shape[0])


@dataclass(frozen=True)
class PointSet:
    """Points in cluster-major order with their ground-truth labels."""

    points: np.ndarray
    true_labels: np.ndarray
    specs: tuple[ClusterSpec, ...]

    @property
    def n_points(self) -> int:
        return int(self.points.shape[0])

    @property
    def n_dims(self) -> int:
        return int(self.points.shape[1])

    @property
    def n_clusters(self) -> int:
        return len(self.specs)

    @property
    def cluster_sizes(self) -> list[int]:
        return [spec.size for spec in self.specs]
