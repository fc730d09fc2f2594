"""Cluster title vectors using k-means."""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np
from sklearn.cluster import KMeans

from cluster_titles.models import ClusteringResult
from common.errors import SolverError
from embed_titles.models import TitleVector

logger = logging.getLogger(__name__)


def _require_positive(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValueError(f"{name} must be a positive integer, got {value!r}")


class KMeansClusterer:
    """
    Thin driver around scikit-learn KMeans.

    Results are reproducible only when ``seed`` is set; with seed=None the
    solver's initialization differs between runs and so may the clusters.
    """

    def __init__(
        self,
        num_clusters: int = 100,
        num_iterations: int = 25,
        seed: int | None = None,
        n_init: int = 1,
    ):
        _require_positive("num_clusters", num_clusters)
        _require_positive("num_iterations", num_iterations)
        _require_positive("n_init", n_init)
        self.num_clusters = num_clusters
        self.num_iterations = num_iterations
        self.seed = seed
        self.n_init = n_init

    def train(self, title_vectors: Sequence[TitleVector]) -> ClusteringResult:
        """
        Fit k-means on the title vectors.

        Args:
            title_vectors: Vectors of uniform dimension to cluster.

        Returns:
            ClusteringResult mapping each title index to a cluster id in [0, K).
            Empty input returns an empty result without calling the solver.
            K is clamped to the number of distinct vectors, so fewer clusters
            than requested may come back.

        Raises:
            SolverError: If scikit-learn fails to fit.
        """
        if not title_vectors:
            logger.warning("No title vectors to cluster")
            return ClusteringResult.empty()

        vectors = np.vstack([tv.vector for tv in title_vectors]).astype(np.float64)
        n_distinct = np.unique(vectors, axis=0).shape[0]
        n_clusters = min(self.num_clusters, n_distinct)
        if n_clusters < self.num_clusters:
            logger.warning(
                "Requested %d clusters but only %d distinct title vectors; using %d",
                self.num_clusters,
                n_distinct,
                n_clusters,
            )

        logger.info(
            "Clustering %d titles (k=%d, max_iter=%d, n_init=%d)",
            len(title_vectors),
            n_clusters,
            self.num_iterations,
            self.n_init,
        )
        try:
            model = KMeans(
                n_clusters=n_clusters,
                max_iter=self.num_iterations,
                n_init=self.n_init,
                random_state=self.seed,
            )
            labels = model.fit_predict(vectors)
        except Exception as exc:
            raise SolverError("kmeans", len(title_vectors), str(exc)) from exc

        assignments = {
            tv.index: int(label) for tv, label in zip(title_vectors, labels, strict=True)
        }
        cost = max(float(model.inertia_), 0.0)
        logger.info("Built %d clusters (cost=%.4f)", n_clusters, cost)
        return ClusteringResult(
            assignments=assignments,
            centroids=np.asarray(model.cluster_centers_, dtype=np.float64),
            cost=cost,
            num_clusters=n_clusters,
        )
