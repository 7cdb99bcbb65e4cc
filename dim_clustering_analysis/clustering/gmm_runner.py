"""Gaussian mixture adapter (EM with diagonal covariances)."""

from __future__ import annotations

import numpy as np
from sklearn.mixture import GaussianMixture

from dim_clustering_analysis import config
from dim_clustering_analysis.clustering.adapter import BaseClusteringAdapter


class GaussianMixtureAdapter(BaseClusteringAdapter):
    def __init__(
        self,
        n_init: int = config.KMEANS_N_INIT,
        max_iter: int = 100,
        covariance_type: str = "diag",
        seed: int | None = None,
        timeout: float | None = None,
        fail_on_max_iter: bool = False,
    ) -> None:
        super().__init__(seed=seed, timeout=timeout, fail_on_max_iter=fail_on_max_iter)
        self.n_init = int(n_init)
        self.max_iter = int(max_iter)
        self.covariance_type = covariance_type

    def _fit_predict(self, X: np.ndarray, k: int) -> tuple[np.ndarray, int, bool]:
        # Diagonal covariances keep EM well-posed when n_dims exceeds the
        # number of points per component.
        model = GaussianMixture(
            n_components=k,
            covariance_type=self.covariance_type,
            n_init=self.n_init,
            max_iter=self.max_iter,
            random_state=self.seed,
        )
        labels = model.fit(X).predict(X)
        return labels, int(model.n_iter_), bool(model.converged_)
