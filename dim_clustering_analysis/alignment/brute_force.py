"""Exhaustive reference solver for the label alignment problem.

Scores every one of the k! bijections. Only usable for small k; it exists to
validate the polynomial solver, not to run experiments.
"""

from __future__ import annotations

import itertools

import numpy as np

from dim_clustering_analysis import config
from dim_clustering_analysis.alignment.confusion import validate_confusion_matrix

_CHUNK_SIZE = 40320  # 8!


def iter_permutation_blocks(k: int, chunk_size: int = _CHUNK_SIZE):
    """Yield the permutations of ``0..k-1`` as int arrays of shape (m, k).

    Permutations arrive in lexicographic order across and within blocks.
    """
    perms = itertools.permutations(range(k))
    while True:
        block = list(itertools.islice(perms, chunk_size))
        if not block:
            return
        yield np.asarray(block, dtype=np.intp)


def brute_force_assignment(
    confusion: np.ndarray, max_k: int = config.BRUTE_FORCE_MAX_K
) -> tuple[tuple[int, ...], int]:
    """Best predicted-to-true mapping by exhaustive search.

    The first optimum found in lexicographic enumeration order is kept, which
    is the lexicographically smallest optimal mapping.

    Returns ``(pred_to_true, matched)``.
    """
    cm = validate_confusion_matrix(confusion)
    k = cm.shape[0]
    if k > max_k:
        raise ValueError(
            f"Brute-force alignment enumerates k! mappings; k={k} exceeds "
            f"the limit of {max_k}."
        )

    pred_idx = np.arange(k)
    best_perm: np.ndarray | None = None
    best_total = -1
    for block in iter_permutation_blocks(k):
        # block[p, j] is the true label that predicted label j maps to.
        totals = cm[block, pred_idx].sum(axis=1)
        idx = int(np.argmax(totals))
        if totals[idx] > best_total:
            best_total = int(totals[idx])
            best_perm = block[idx]
    return tuple(int(t) for t in best_perm), best_total
