"""Small logging helpers for the experiment runner.

Functions are kept separate so they can be imported and reused elsewhere
without pulling in the entire `pipeline` module.
"""

from __future__ import annotations

import logging


def _default_pipeline_logger() -> logging.Logger:
    return logging.getLogger("dim_clustering_analysis.benchmarking.pipeline")


def log_grid_start(
    n_trials: int, n_cells: int, n_jobs: int, logger: logging.Logger | None = None
) -> None:
    """Log the start of a grid run."""
    logger = logger or _default_pipeline_logger()
    logger.info("%s", "=" * 80)
    logger.info("DIMENSIONALITY SWEEP")
    logger.info("%s", "=" * 80)
    logger.info(
        "Running %d trials across %d grid cells (n_jobs=%d).", n_trials, n_cells, n_jobs
    )


def log_cell_start(
    index: int,
    total: int,
    dim: int,
    sd_mult: float,
    k: int,
    logger: logging.Logger | None = None,
) -> None:
    """Log the start of a (dim, sd_mult, k) grid cell."""
    logger = logger or _default_pipeline_logger()
    logger.info("Grid cell %d/%d: dim=%d sd_mult=%g k=%d", index, total, dim, sd_mult, k)


def log_trial_failure(
    dim: int,
    sd_mult: float,
    k: int,
    trial: int,
    reason: str,
    logger: logging.Logger | None = None,
) -> None:
    """Log a trial recorded as failed."""
    logger = logger or _default_pipeline_logger()
    logger.warning(
        "Trial failed (dim=%d sd_mult=%g k=%d trial=%d): %s",
        dim,
        sd_mult,
        k,
        trial,
        reason,
    )


def log_grid_completion(
    n_done: int,
    n_failed: int,
    n_planned: int,
    cancelled: bool,
    logger: logging.Logger | None = None,
) -> None:
    """Log the completion (or cancellation) of a grid run."""
    logger = logger or _default_pipeline_logger()
    if cancelled:
        logger.info(
            "Grid cancelled after %d/%d trials (%d failed).", n_done, n_planned, n_failed
        )
    else:
        logger.info("Completed %d trials (%d failed).", n_done, n_failed)
