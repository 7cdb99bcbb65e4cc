"""K-Means adapter (Lloyd iterations with random restarts)."""

from __future__ import annotations

import numpy as np
from sklearn.cluster import KMeans

from dim_clustering_analysis import config
from dim_clustering_analysis.clustering.adapter import BaseClusteringAdapter


def _is_lloyd_fixed_point(
    X: np.ndarray, labels: np.ndarray, centers: np.ndarray, tol: float
) -> bool:
    """True when one more update step would move the centers by at most ``tol``.

    ``tol`` is scaled by the mean feature variance, as KMeans does internally.
    """
    scaled_tol = float(np.mean(np.var(X, axis=0))) * tol
    shift = 0.0
    for j, center in enumerate(centers):
        members = X[labels == j]
        if members.shape[0]:
            shift += float(((members.mean(axis=0) - center) ** 2).sum())
    return shift <= scaled_tol


class KMeansAdapter(BaseClusteringAdapter):
    """Run ``n_init`` k-means restarts and keep the lowest-inertia solution."""

    def __init__(
        self,
        n_init: int = config.KMEANS_N_INIT,
        max_iter: int = config.KMEANS_MAX_ITER,
        algorithm: str = "lloyd",
        init: str | np.ndarray = "random",
        tol: float = 1e-4,
        seed: int | None = None,
        timeout: float | None = None,
        fail_on_max_iter: bool = False,
    ) -> None:
        super().__init__(seed=seed, timeout=timeout, fail_on_max_iter=fail_on_max_iter)
        if int(n_init) < 1:
            raise ValueError(f"n_init must be at least 1, got {n_init}.")
        if int(max_iter) < 1:
            raise ValueError(f"max_iter must be at least 1, got {max_iter}.")
        self.n_init = int(n_init)
        self.max_iter = int(max_iter)
        self.algorithm = algorithm
        self.init = init
        self.tol = float(tol)
        self.last_inertia_: float | None = None

    def _fit_predict(self, X: np.ndarray, k: int) -> tuple[np.ndarray, int, bool]:
        model = KMeans(
            n_clusters=k,
            init=self.init,
            n_init=self.n_init,
            max_iter=self.max_iter,
            tol=self.tol,
            algorithm=self.algorithm,
            random_state=self.seed,
        )
        labels = model.fit_predict(X)
        self.last_inertia_ = float(model.inertia_)
        n_iter = int(model.n_iter_)
        # n_iter_ equals max_iter both when the cap cut the run short and when
        # the last allowed step converged.
        converged = n_iter < self.max_iter or _is_lloyd_fixed_point(
            X, labels, model.cluster_centers_, self.tol
        )
        return labels, n_iter, converged
