"""One experiment trial: generate, cluster, align, score."""

from __future__ import annotations

import logging
import time
from typing import Callable

import numpy as np

from dim_clustering_analysis.alignment import align_labels
from dim_clustering_analysis.clustering import (
    ClusteringAdapter,
    make_adapter,
    normalize_predictions,
)
from dim_clustering_analysis.errors import TRIAL_FAILURES
from dim_clustering_analysis.generators import generate_gaussian_clusters
from dim_clustering_analysis.benchmarking.seeding import derive_trial_seed
from dim_clustering_analysis.types import ExperimentConfig, TrialKey, TrialResult

logger = logging.getLogger(__name__)

# Builds the adapter for one attempt from its derived seed.
AdapterFactory = Callable[[int], ClusteringAdapter]


def default_adapter_factory(config: ExperimentConfig) -> AdapterFactory:
    """Adapter factory for the method named in ``config``."""

    def _factory(seed: int) -> ClusteringAdapter:
        return make_adapter(
            config.method, seed=seed, timeout=config.timeout, **config.method_params
        )

    return _factory


def _run_attempt(
    key: TrialKey,
    seed: int,
    config: ExperimentConfig,
    adapter_factory: AdapterFactory,
) -> TrialResult:
    rng = np.random.default_rng(seed)
    point_set = generate_gaussian_clusters(
        key.k, key.dim, key.sd_mult, config.size_range, rng=rng
    )
    adapter = adapter_factory(seed)
    started = time.perf_counter()
    try:
        # Adapters outside the registry may return raw or degenerate labels.
        pred_labels = normalize_predictions(
            adapter.cluster(point_set.points, key.k), point_set.n_points, key.k
        )
    except TRIAL_FAILURES as exc:
        return TrialResult(
            key=key,
            seed=seed,
            status="failed",
            accuracy=float("nan"),
            failure_reason=f"{type(exc).__name__}: {exc}",
            n_points=point_set.n_points,
            elapsed=time.perf_counter() - started,
        )
    alignment = align_labels(
        point_set.true_labels, pred_labels, key.k, method=config.alignment_method
    )
    return TrialResult(
        key=key,
        seed=seed,
        status="ok",
        accuracy=alignment.accuracy,
        n_points=point_set.n_points,
        elapsed=time.perf_counter() - started,
        alignment=alignment,
    )


def run_trial(
    key: TrialKey,
    config: ExperimentConfig,
    adapter_factory: AdapterFactory | None = None,
) -> TrialResult:
    """Run a single trial, retrying expected failures up to ``max_retries``.

    Each retry uses a fresh seed derived from the attempt index, so retries
    stay deterministic. Contract errors (bad parameters, label-space
    violations) propagate.
    """
    factory = adapter_factory or default_adapter_factory(config)
    result: TrialResult | None = None
    for attempt in range(config.max_retries + 1):
        seed = derive_trial_seed(
            config.base_seed, key.dim, key.sd_mult, key.k, key.trial, attempt
        )
        result = _run_attempt(key, seed, config, factory)
        result.attempts = attempt + 1
        if result.ok:
            break
        logger.debug(
            "Attempt %d of %s failed: %s", attempt + 1, key, result.failure_reason
        )
    return result
