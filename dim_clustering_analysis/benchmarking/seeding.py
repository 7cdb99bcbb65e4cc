"""Deterministic per-trial seed derivation."""

from __future__ import annotations

import hashlib


def derive_trial_seed(
    base_seed: int | None,
    dim: int,
    sd_mult: float,
    k: int,
    trial: int,
    attempt: int = 0,
) -> int:
    """Derive a deterministic seed for one trial of the grid.

    Parameters
    ----------
    base_seed
        Global base seed from configuration. May be None.
    dim, sd_mult, k, trial
        Coordinates of the trial in the experiment grid.
    attempt
        Retry index; attempt 0 is the first run of the trial.

    Returns
    -------
    int
        Deterministic 32-bit seed suitable for NumPy RNG initialization.
        Independent of process, thread and hash randomisation.
    """
    base = "none" if base_seed is None else str(int(base_seed))
    payload = f"{base}|dim={int(dim)}|sd={float(sd_mult)!r}|k={int(k)}|trial={int(trial)}"
    if attempt:
        payload += f"|attempt={int(attempt)}"
    digest = hashlib.blake2b(payload.encode("utf-8"), digest_size=8).digest()
    return int.from_bytes(digest, byteorder="big", signed=False) & 0xFFFFFFFF
