"""Aggregation of per-trial rows into per-cell statistics."""

from __future__ import annotations

import numpy as np
import pandas as pd

GROUP_COLUMNS: list[str] = ["k", "dim", "sd_mult"]


def summarize_results(results: pd.DataFrame) -> pd.DataFrame:
    """Per (k, dim, sd_mult) accuracy statistics with explicit failure counts.

    ``mean_accuracy``/``std_accuracy`` are taken over successful trials;
    ``n_failed`` and ``failure_rate`` report the rest, so a cell with low
    accuracy can be told apart from a cell whose trials failed. A cell whose
    trials all failed has a NaN mean.
    """
    missing = {*GROUP_COLUMNS, "accuracy", "status"} - set(results.columns)
    if missing:
        raise ValueError(f"Result table is missing columns: {sorted(missing)}")

    df = results.assign(is_ok=results["status"].eq("ok"))
    grouped = df.groupby(GROUP_COLUMNS, sort=True)
    summary = grouped.agg(
        mean_accuracy=("accuracy", "mean"),
        std_accuracy=("accuracy", "std"),
        min_accuracy=("accuracy", "min"),
        max_accuracy=("accuracy", "max"),
        n_trials=("status", "size"),
        n_ok=("is_ok", "sum"),
    ).reset_index()
    summary["n_ok"] = summary["n_ok"].astype(int)
    summary["n_failed"] = summary["n_trials"] - summary["n_ok"]
    summary["failure_rate"] = summary["n_failed"] / summary["n_trials"]
    return summary


def accuracy_trend_violations(
    summary: pd.DataFrame, tolerance: float = 0.0
) -> pd.DataFrame:
    """Cells where mean accuracy rises with ``sd_mult`` by more than ``tolerance``.

    Accuracy is expected to be non-increasing in the spread multiplier for
    fixed (k, dim); with finite trials this only holds up to noise, so the
    result is a sanity check rather than an invariant.
    """
    rows = []
    for (k, dim), group in summary.groupby(["k", "dim"], sort=True):
        ordered = group.sort_values("sd_mult")
        sd = ordered["sd_mult"].to_numpy()
        acc = ordered["mean_accuracy"].to_numpy(dtype=float)
        for i in range(1, len(acc)):
            if np.isnan(acc[i]) or np.isnan(acc[i - 1]):
                continue
            increase = acc[i] - acc[i - 1]
            if increase > tolerance:
                rows.append(
                    {
                        "k": k,
                        "dim": dim,
                        "sd_mult_low": sd[i - 1],
                        "sd_mult_high": sd[i],
                        "increase": float(increase),
                    }
                )
    return pd.DataFrame(
        rows, columns=["k", "dim", "sd_mult_low", "sd_mult_high", "increase"]
    )
