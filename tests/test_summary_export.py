import numpy as np
import pandas as pd
import pytest

from dim_clustering_analysis.benchmarking import (
    accuracy_trend_violations,
    load_results,
    save_results,
    summarize_results,
)
from dim_clustering_analysis.types import RESULT_COLUMNS


@pytest.fixture
def results_df():
    rows = [
        # k, dim, sd_mult, accuracy, status
        (4, 2, 1.0, 1.0, "ok"),
        (4, 2, 1.0, 0.8, "ok"),
        (4, 2, 1.0, np.nan, "failed"),
        (4, 2, 2.0, 0.6, "ok"),
        (4, 2, 2.0, 0.5, "ok"),
        (4, 2, 3.0, 0.9, "ok"),
        (4, 8, 1.0, np.nan, "failed"),
    ]
    return pd.DataFrame(
        [
            {
                "dim": dim,
                "sd_mult": sd,
                "k": k,
                "trial": i,
                "seed": i,
                "accuracy": acc,
                "status": status,
                "failure_reason": "" if status == "ok" else "DegenerateClustering: x",
                "attempts": 1,
                "n_points": 100,
                "elapsed": 0.01,
            }
            for i, (k, dim, sd, acc, status) in enumerate(rows)
        ],
        columns=RESULT_COLUMNS,
    )


def test_summary_separates_low_accuracy_from_failures(results_df):
    summary = summarize_results(results_df).set_index(["k", "dim", "sd_mult"])

    cell = summary.loc[(4, 2, 1.0)]
    assert cell["mean_accuracy"] == pytest.approx(0.9)
    assert cell["n_trials"] == 3
    assert cell["n_ok"] == 2
    assert cell["n_failed"] == 1
    assert cell["failure_rate"] == pytest.approx(1 / 3)

    failed_cell = summary.loc[(4, 8, 1.0)]
    assert np.isnan(failed_cell["mean_accuracy"])
    assert failed_cell["failure_rate"] == 1.0


def test_summary_requires_result_columns():
    with pytest.raises(ValueError, match="missing columns"):
        summarize_results(pd.DataFrame({"k": [1]}))


def test_trend_violations_flag_accuracy_rising_with_spread(results_df):
    violations = accuracy_trend_violations(summarize_results(results_df))
    assert len(violations) == 1
    row = violations.iloc[0]
    assert (row["dim"], row["sd_mult_low"], row["sd_mult_high"]) == (2, 2.0, 3.0)
    assert row["increase"] == pytest.approx(0.35)

    assert accuracy_trend_violations(summarize_results(results_df), tolerance=0.5).empty


def test_saved_results_load_back_with_empty_reasons(tmp_path, results_df):
    path = save_results(results_df, tmp_path / "nested" / "results")
    assert path.suffix == ".csv"
    assert path.exists()

    loaded = load_results(path)
    assert len(loaded) == len(results_df)
    assert loaded["failure_reason"].iloc[0] == ""
    assert loaded["status"].tolist() == results_df["status"].tolist()


def test_load_rejects_foreign_tables(tmp_path):
    path = tmp_path / "other.csv"
    pd.DataFrame({"a": [1]}).to_csv(path, index=False)
    with pytest.raises(ValueError, match="not a trial result table"):
        load_results(path)
