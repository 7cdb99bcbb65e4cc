"""Command-line entry point for the dimensionality sweep.

Usage:
    dim-clustering-sweep                                   # full default grid
    dim-clustering-sweep --dims 2 8 32 --sd-mults 1 4 --k 4 --trials 5
    dim-clustering-sweep --output results/sweep.csv --summary-output results/summary.csv
    dim-clustering-sweep --method gmm --n-jobs -1 --verbose
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

import pandas as pd

from dim_clustering_analysis import config
from dim_clustering_analysis.benchmarking import (
    ExperimentRunner,
    results_to_frame,
    save_results,
    summarize_results,
)
from dim_clustering_analysis.clustering import METHOD_SPECS
from dim_clustering_analysis.types import ExperimentConfig


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Measure clustering accuracy as dimensionality grows."
    )
    parser.add_argument(
        "--dims",
        type=int,
        nargs="+",
        default=None,
        help=f"Dimensions to sweep (default: {list(config.DEFAULT_DIMS)})",
    )
    parser.add_argument(
        "--sd-mults",
        type=float,
        nargs="+",
        default=None,
        help=f"Spread multipliers (default: {list(config.DEFAULT_SD_MULTS)})",
    )
    parser.add_argument(
        "--k",
        type=int,
        nargs="+",
        default=None,
        dest="cluster_counts",
        help=f"Cluster counts (default: {list(config.DEFAULT_CLUSTER_COUNTS)})",
    )
    parser.add_argument(
        "--size-range",
        type=int,
        nargs=3,
        default=None,
        metavar=("MIN", "MAX", "STEP"),
        help=f"Points per cluster (default: {config.DEFAULT_SIZE_RANGE})",
    )
    parser.add_argument("--trials", type=int, default=None, dest="trials_per_cell")
    parser.add_argument("--seed", type=int, default=None, dest="base_seed")
    parser.add_argument("--method", choices=sorted(METHOD_SPECS), default=None)
    parser.add_argument(
        "--alignment",
        choices=["hungarian", "brute_force"],
        default=None,
        dest="alignment_method",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Seconds allowed per clustering call before the trial is marked failed.",
    )
    parser.add_argument("--max-retries", type=int, default=None)
    parser.add_argument("--n-jobs", type=int, default=None)
    parser.add_argument("--output", default=None, help="CSV path for per-trial rows.")
    parser.add_argument("--summary-output", default=None, help="CSV path for the summary.")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def config_from_args(args: argparse.Namespace) -> ExperimentConfig:
    overrides = {
        "dims": args.dims,
        "sd_mults": args.sd_mults,
        "cluster_counts": args.cluster_counts,
        "size_range": args.size_range,
        "trials_per_cell": args.trials_per_cell,
        "base_seed": args.base_seed,
        "method": args.method,
        "alignment_method": args.alignment_method,
        "timeout": args.timeout,
        "max_retries": args.max_retries,
        "n_jobs": args.n_jobs,
    }
    return ExperimentConfig().with_overrides(**overrides)


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(name)s | %(message)s",
    )

    cfg = config_from_args(args)
    runner = ExperimentRunner(config=cfg, verbose=args.verbose)
    try:
        results = runner.run()
    except KeyboardInterrupt:
        runner.cancel()
        partial = results_to_frame(runner.trial_results_)
        if args.output:
            path = save_results(partial, args.output)
            print(
                f"Interrupted; wrote {len(partial)} completed trial rows to {path}",
                file=sys.stderr,
            )
        else:
            print("Interrupted; no results written.", file=sys.stderr)
        return 130

    summary = summarize_results(results)
    if args.output:
        path = save_results(results, args.output)
        print(f"Wrote {len(results)} trial rows to {path}")
    if args.summary_output:
        path = save_results(summary, args.summary_output)
        print(f"Wrote summary to {path}")

    with pd.option_context("display.max_rows", None, "display.width", 120):
        print(summary.to_string(index=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
