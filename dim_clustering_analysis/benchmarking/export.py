"""Persist result tables for downstream aggregation or plotting."""

from __future__ import annotations

from pathlib import Path

import pandas as pd

from dim_clustering_analysis.types import RESULT_COLUMNS


def save_results(df: pd.DataFrame, path: str | Path) -> Path:
    """Write a result (or summary) table as CSV, creating parent directories."""
    out = Path(path)
    if out.suffix == "":
        out = out.with_suffix(".csv")
    out.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(out, index=False)
    return out


def load_results(path: str | Path) -> pd.DataFrame:
    """Read a per-trial result table written by :func:`save_results`."""
    df = pd.read_csv(path, keep_default_na=True)
    missing = [col for col in RESULT_COLUMNS if col not in df.columns]
    if missing:
        raise ValueError(f"{path} is not a trial result table; missing {missing}")
    df["failure_reason"] = df["failure_reason"].fillna("")
    return df
