"""Optimal label assignment via the Hungarian (Kuhn-Munkres) algorithm.

The solver works on integer weights so that dual potentials stay exact. That
matters for tie-breaking: every optimal assignment is a perfect matching on the
*equality subgraph* of an optimal dual (edges with zero reduced cost), so the
lexicographically smallest optimum can be found by fixing rows in order on
that subgraph, without re-solving the assignment problem.

Complexity is O(k^3) for the solve and O(k^4) worst case for the tie-break
pass; both are polynomial, unlike enumerating all k! permutations.
"""

from __future__ import annotations

import numpy as np

from dim_clustering_analysis.alignment.confusion import validate_confusion_matrix

_INF = float("inf")


def _min_cost_assignment(
    cost: list[list[int]],
) -> tuple[list[int], list[int], list[int]]:
    """Shortest augmenting path Hungarian method on a square cost matrix.

    Returns ``(row_to_col, u, v)`` where ``u``/``v`` are row/column potentials
    satisfying ``cost[i][j] - u[i] - v[j] >= 0`` with equality on the matching.
    """
    n = len(cost)
    # 1-indexed internally; index 0 is the virtual source column.
    u = [0] * (n + 1)
    v = [0] * (n + 1)
    col_owner = [0] * (n + 1)
    way = [0] * (n + 1)

    for row in range(1, n + 1):
        col_owner[0] = row
        j0 = 0
        minv = [_INF] * (n + 1)
        used = [False] * (n + 1)
        while True:
            used[j0] = True
            i0 = col_owner[j0]
            cost_row = cost[i0 - 1]
            delta = _INF
            j1 = 0
            for j in range(1, n + 1):
                if used[j]:
                    continue
                reduced = cost_row[j - 1] - u[i0] - v[j]
                if reduced < minv[j]:
                    minv[j] = reduced
                    way[j] = j0
                if minv[j] < delta:
                    delta = minv[j]
                    j1 = j
            for j in range(n + 1):
                if used[j]:
                    u[col_owner[j]] += delta
                    v[j] -= delta
                else:
                    minv[j] -= delta
            j0 = j1
            if col_owner[j0] == 0:
                break
        # Flip the augmenting path back to the source.
        while j0:
            j1 = way[j0]
            col_owner[j0] = col_owner[j1]
            j0 = j1

    row_to_col = [0] * n
    for j in range(1, n + 1):
        row_to_col[col_owner[j] - 1] = j - 1
    return row_to_col, u[1:], v[1:]


def _equality_subgraph(
    cost: list[list[int]], u: list[int], v: list[int]
) -> list[list[int]]:
    """Columns with zero reduced cost for each row, in ascending order."""
    n = len(cost)
    return [
        [j for j in range(n) if cost[i][j] - u[i] - v[j] == 0] for i in range(n)
    ]


def _reroute(
    row: int,
    target_col: int,
    banned_col: int,
    tight: list[list[int]],
    row_to_col: list[int],
    col_to_row: list[int],
    frozen: list[bool],
    visited: list[bool],
) -> bool:
    """Find new tight columns for ``row`` and its displaced successors.

    Searches an alternating path that starts at ``row`` and ends by taking
    ``target_col``. Frozen rows and ``banned_col`` are never touched. On
    success the matching is updated along the path.
    """
    for col in tight[row]:
        if col == banned_col or visited[col]:
            continue
        if col == target_col:
            row_to_col[row] = col
            col_to_row[col] = row
            return True
        owner = col_to_row[col]
        if frozen[owner]:
            continue
        visited[col] = True
        if _reroute(
            owner, target_col, banned_col, tight, row_to_col, col_to_row, frozen, visited
        ):
            row_to_col[row] = col
            col_to_row[col] = row
            return True
    return False


def _lexicographic_optimum(
    tight: list[list[int]], row_to_col: list[int]
) -> list[int]:
    """Smallest ``row_to_col`` vector among perfect matchings of ``tight``.

    Rows are fixed in ascending order. For each row the smallest tight column
    is taken for which the remaining unfixed rows can still be matched.
    """
    n = len(row_to_col)
    row_to_col = list(row_to_col)
    col_to_row = [0] * n
    for row, col in enumerate(row_to_col):
        col_to_row[col] = row
    frozen = [False] * n

    for row in range(n):
        current = row_to_col[row]
        for col in tight[row]:
            if col >= current:
                break
            owner = col_to_row[col]
            if frozen[owner]:
                continue
            frozen[row] = True
            visited = [False] * n
            moved = _reroute(
                owner, current, col, tight, row_to_col, col_to_row, frozen, visited
            )
            frozen[row] = False
            if moved:
                row_to_col[row] = col
                col_to_row[col] = row
                break
        frozen[row] = True
    return row_to_col


def solve_assignment(weights: np.ndarray) -> tuple[np.ndarray, int]:
    """Maximum-weight perfect matching on a square integer weight matrix.

    Parameters
    ----------
    weights : np.ndarray
        ``(n, n)`` matrix of non-negative integer weights. Row ``r`` is
        assigned to column ``assignment[r]``.

    Returns
    -------
    assignment : np.ndarray
        Permutation of ``0..n-1``. When several assignments reach the optimum,
        the lexicographically smallest one is returned.
    total : int
        ``sum(weights[r, assignment[r]])``.
    """
    w = validate_confusion_matrix(weights)
    n = w.shape[0]
    # Maximise weight by minimising its negation.
    cost = (-w).tolist()
    row_to_col, u, v = _min_cost_assignment(cost)
    tight = _equality_subgraph(cost, u, v)
    row_to_col = _lexicographic_optimum(tight, row_to_col)
    assignment = np.asarray(row_to_col, dtype=int)
    total = int(w[np.arange(n), assignment].sum())
    return assignment, total


def hungarian_assignment(confusion: np.ndarray) -> tuple[tuple[int, ...], int]:
    """Best predicted-to-true mapping for a ``(true, pred)`` confusion matrix.

    Returns ``(pred_to_true, matched)``.
    """
    cm = validate_confusion_matrix(confusion)
    # Rows of the assignment problem are predicted labels.
    assignment, matched = solve_assignment(cm.T)
    return tuple(int(t) for t in assignment), matched
