"""Per-trial outcome records collected by the experiment runner."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Literal

import numpy as np

from dim_clustering_analysis.types.alignment_result import AccuracyResult

TrialStatus = Literal["ok", "failed"]


@dataclass(frozen=True)
class TrialKey:
    dim: int
    sd_mult: float
    k: int
    trial: int


@dataclass
class TrialResult:
    key: TrialKey
    seed: int
    status: TrialStatus
    accuracy: float
    failure_reason: str | None = None
    attempts: int = 1
    n_points: int = 0
    elapsed: float = 0.0
    alignment: AccuracyResult | None = None

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    def to_row(self) -> dict[str, object]:
        """Flatten into one row of the tabular result set."""
        row: dict[str, object] = asdict(self.key)
        row.update(
            {
                "seed": self.seed,
                "accuracy": self.accuracy if self.ok else np.nan,
                "status": self.status,
                "failure_reason": self.failure_reason or "",
                "attempts": self.attempts,
                "n_points": self.n_points,
                "elapsed": self.elapsed,
            }
        )
        return row


RESULT_COLUMNS: list[str] = [
    "dim",
    "sd_mult",
    "k",
    "trial",
    "seed",
    "accuracy",
    "status",
    "failure_reason",
    "attempts",
    "n_points",
    "elapsed",
]
