"""Structured configuration for a dimensionality sweep."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields, replace
from typing import Any, Mapping

from dim_clustering_analysis import config
from dim_clustering_analysis.errors import DimensionMismatch, InvalidClusterCount


def _resolve_n_jobs(n_jobs: int) -> int:
    """Resolve the worker count, honouring the ``DCA_N_JOBS`` override."""
    env = os.environ.get(config.N_JOBS_ENV_VAR)
    if env is not None:
        try:
            return int(env)
        except ValueError:
            pass
    return int(n_jobs)


@dataclass(frozen=True)
class ExperimentConfig:
    """Settings for one sweep over (dim, sd_mult, k, trial).

    Defaults come from :mod:`dim_clustering_analysis.config`.
    """

    dims: tuple[int, ...] = config.DEFAULT_DIMS
    sd_mults: tuple[float, ...] = config.DEFAULT_SD_MULTS
    cluster_counts: tuple[int, ...] = config.DEFAULT_CLUSTER_COUNTS
    size_range: tuple[int, int, int] = config.DEFAULT_SIZE_RANGE
    trials_per_cell: int = config.DEFAULT_TRIALS_PER_CELL
    base_seed: int = config.BASE_SEED
    method: str = config.DEFAULT_METHOD
    method_params: dict[str, Any] = field(default_factory=dict)
    alignment_method: str = config.ALIGNMENT_METHOD
    timeout: float | None = config.CLUSTERING_TIMEOUT
    max_retries: int = config.MAX_RETRIES
    n_jobs: int = config.N_JOBS

    def __post_init__(self) -> None:
        object.__setattr__(self, "dims", tuple(int(d) for d in self.dims))
        object.__setattr__(self, "sd_mults", tuple(float(s) for s in self.sd_mults))
        object.__setattr__(
            self, "cluster_counts", tuple(int(k) for k in self.cluster_counts)
        )
        object.__setattr__(self, "size_range", tuple(int(v) for v in self.size_range))

        if any(d <= 0 for d in self.dims):
            raise DimensionMismatch(f"All dimensions must be positive, got {self.dims}.")
        if any(s <= 0 for s in self.sd_mults):
            raise ValueError(f"All sd multipliers must be positive, got {self.sd_mults}.")
        for k in self.cluster_counts:
            if k <= 0:
                raise InvalidClusterCount(k)
        if len(self.size_range) != 3:
            raise ValueError("size_range must be a (min, max, step) triple.")
        if self.trials_per_cell <= 0:
            raise ValueError("trials_per_cell must be positive.")
        if self.max_retries < 0:
            raise ValueError("max_retries must be non-negative.")
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError("timeout must be positive when given.")
        if self.resolved_n_jobs == 0:
            raise ValueError(
                f"n_jobs must be non-zero (set via n_jobs or {config.N_JOBS_ENV_VAR})."
            )

    @property
    def resolved_n_jobs(self) -> int:
        return _resolve_n_jobs(self.n_jobs)

    @property
    def n_trials(self) -> int:
        """Total number of trials in the configured grid."""
        return (
            len(self.dims)
            * len(self.sd_mults)
            * len(self.cluster_counts)
            * self.trials_per_cell
        )

    def with_overrides(self, **overrides: Any) -> "ExperimentConfig":
        """Return a copy with ``None``-valued overrides ignored."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "ExperimentConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise ValueError(f"Unknown configuration keys: {', '.join(unknown)}")
        return cls(**dict(values))
