"""
Experiment runner for the dimensionality sweep.

Runs one trial (generate -> cluster -> align -> score) per grid cell and
repetition, sequentially or in parallel with joblib, and collects the results
into a tabular result set.
"""

from __future__ import annotations

import logging
import threading
from itertools import product
from typing import Callable, Iterable, Iterator, Sequence

import pandas as pd
from joblib import Parallel, delayed

from dim_clustering_analysis.benchmarking.logging import (
    log_cell_start as _log_cell_start,
    log_grid_completion as _log_grid_completion,
    log_grid_start as _log_grid_start,
    log_trial_failure as _log_trial_failure,
)
from dim_clustering_analysis.benchmarking.trial import (
    AdapterFactory,
    default_adapter_factory,
    run_trial,
)
from dim_clustering_analysis.errors import DimensionMismatch, InvalidClusterCount
from dim_clustering_analysis.types import (
    RESULT_COLUMNS,
    ExperimentConfig,
    TrialKey,
    TrialResult,
)

# Configure logger (library-friendly: leave handlers/levels to callers)
logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())

TrialCallback = Callable[[TrialResult], None]


def iter_trial_keys(
    dims: Sequence[int],
    sd_mults: Sequence[float],
    cluster_counts: Sequence[int],
    trials_per_cell: int,
) -> Iterator[TrialKey]:
    """Enumerate grid trials ordered by k, then dim, then sd_mult, then trial."""
    for k, dim, sd_mult in product(cluster_counts, dims, sd_mults):
        for trial in range(trials_per_cell):
            yield TrialKey(dim=int(dim), sd_mult=float(sd_mult), k=int(k), trial=trial)


def results_to_frame(results: Iterable[TrialResult]) -> pd.DataFrame:
    """Tabular result set with one row per trial."""
    rows = [result.to_row() for result in results]
    return pd.DataFrame(rows, columns=RESULT_COLUMNS)


class ExperimentRunner:
    """Run the trial grid described by an :class:`ExperimentConfig`.

    Parameters
    ----------
    config : ExperimentConfig, optional
        Grid and adapter settings. Defaults to ``ExperimentConfig()``.
    adapter_factory : callable, optional
        ``seed -> ClusteringAdapter``. Defaults to the registry adapter named
        by ``config.method``.
    cancel_event : threading.Event, optional
        When set, no further trials are issued. Results collected so far are
        kept and returned.
    on_trial : callable, optional
        Called in the calling process with every collected ``TrialResult``.
    verbose : bool, default=True
        Emit progress through the pipeline logger.
    prefer : {"processes", "threads"}, default="processes"
        joblib backend hint used when ``n_jobs != 1``.
    """

    def __init__(
        self,
        config: ExperimentConfig | None = None,
        adapter_factory: AdapterFactory | None = None,
        cancel_event: threading.Event | None = None,
        on_trial: TrialCallback | None = None,
        verbose: bool = True,
        prefer: str = "processes",
    ) -> None:
        self.config = config or ExperimentConfig()
        self.adapter_factory = adapter_factory or default_adapter_factory(self.config)
        self.cancel_event = cancel_event or threading.Event()
        self.on_trial = on_trial
        self.verbose = verbose
        self.prefer = prefer
        self.trial_results_: list[TrialResult] = []
        self.cancelled_: bool = False

    def cancel(self) -> None:
        """Stop issuing new trials."""
        self.cancel_event.set()

    @property
    def cancelled(self) -> bool:
        return self.cancel_event.is_set()

    def _issue(self, keys: Sequence[TrialKey]) -> Iterator[TrialKey]:
        n_cells = len({(key.k, key.dim, key.sd_mult) for key in keys})
        cell_index = 0
        last_cell = None
        for key in keys:
            if self.cancel_event.is_set():
                return
            cell = (key.k, key.dim, key.sd_mult)
            if cell != last_cell:
                cell_index += 1
                last_cell = cell
                if self.verbose:
                    _log_cell_start(cell_index, n_cells, key.dim, key.sd_mult, key.k)
            yield key

    def _collect(self, result: TrialResult) -> None:
        self.trial_results_.append(result)
        if not result.ok and self.verbose:
            k = result.key
            _log_trial_failure(k.dim, k.sd_mult, k.k, k.trial, result.failure_reason or "")
        if self.on_trial is not None:
            self.on_trial(result)

    def _execute(self, keys: Sequence[TrialKey]) -> list[TrialResult]:
        n_jobs = self.config.resolved_n_jobs
        tasks = self._issue(keys)
        collected: list[TrialResult] = []
        if n_jobs == 1:
            for key in tasks:
                result = run_trial(key, self.config, self.adapter_factory)
                collected.append(result)
                self._collect(result)
            return collected

        # Lazy dispatch: the task generator is consumed as workers free up,
        # so a cancellation stops new trials from being issued.
        parallel = Parallel(n_jobs=n_jobs, prefer=self.prefer, return_as="generator")
        outputs = parallel(
            delayed(run_trial)(key, self.config, self.adapter_factory) for key in tasks
        )
        for result in outputs:
            collected.append(result)
            self._collect(result)
        return collected

    def run_keys(self, keys: Sequence[TrialKey]) -> pd.DataFrame:
        """Run the given trials and return their rows."""
        keys = list(keys)
        self.trial_results_ = []
        if self.verbose:
            n_cells = len({(key.k, key.dim, key.sd_mult) for key in keys})
            _log_grid_start(len(keys), n_cells, self.config.resolved_n_jobs)

        results = self._execute(keys)
        self.cancelled_ = len(results) < len(keys)

        n_failed = sum(1 for result in results if not result.ok)
        if self.verbose:
            _log_grid_completion(len(results), n_failed, len(keys), self.cancelled_)

        df = results_to_frame(results)
        df.attrs["n_planned"] = len(keys)
        df.attrs["cancelled"] = self.cancelled_
        return df

    def run_grid(
        self,
        dims: Sequence[int],
        sd_mults: Sequence[float],
        k: int,
        trials_per_cell: int,
    ) -> pd.DataFrame:
        """Run ``trials_per_cell`` trials for every (dim, sd_mult) pair at ``k``.

        Returns
        -------
        pd.DataFrame
            Columns: dim, sd_mult, k, trial, seed, accuracy, status,
            failure_reason, attempts, n_points, elapsed. Failed trials keep
            their row with ``status="failed"`` and a NaN accuracy.
        """
        if int(k) <= 0:
            raise InvalidClusterCount(k)
        if any(int(d) <= 0 for d in dims):
            raise DimensionMismatch(f"All dimensions must be positive, got {list(dims)}.")
        if any(float(s) <= 0 for s in sd_mults):
            raise ValueError(f"All sd multipliers must be positive, got {list(sd_mults)}.")
        if int(trials_per_cell) <= 0:
            raise ValueError("trials_per_cell must be positive.")
        keys = iter_trial_keys(dims, sd_mults, [int(k)], int(trials_per_cell))
        return self.run_keys(list(keys))

    def run(self) -> pd.DataFrame:
        """Run the full grid in ``self.config`` across every cluster count."""
        cfg = self.config
        keys = iter_trial_keys(
            cfg.dims, cfg.sd_mults, cfg.cluster_counts, cfg.trials_per_cell
        )
        return self.run_keys(list(keys))


def run_grid(
    dims: Sequence[int],
    sd_mults: Sequence[float],
    k: int,
    trials_per_cell: int,
    config: ExperimentConfig | None = None,
    **runner_kwargs,
) -> pd.DataFrame:
    """Functional wrapper around :meth:`ExperimentRunner.run_grid`."""
    runner = ExperimentRunner(config=config, **runner_kwargs)
    return runner.run_grid(dims, sd_mults, k, trials_per_cell)


__all__ = [
    "ExperimentRunner",
    "iter_trial_keys",
    "results_to_frame",
    "run_grid",
]
