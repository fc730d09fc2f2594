"""Data models for cluster_titles pipeline stage."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import numpy as np

from embed_titles.models import TitleVector
from load_articles.models import Article


@dataclass(eq=False)
class ClusteringResult:
    """K-means output expressed against title identities."""
    assignments: dict[int, int]
    centroids: np.ndarray
    cost: float
    num_clusters: int

    @classmethod
    def empty(cls, dimension: int = 0) -> ClusteringResult:
        return cls(
            assignments={},
            centroids=np.empty((0, dimension), dtype=np.float64),
            cost=0.0,
            num_clusters=0,
        )

    def assign(self, vector: np.ndarray) -> int:
        """Id of the nearest centroid by squared Euclidean distance (lowest id on ties)."""
        if self.num_clusters == 0:
            raise ValueError("No centroids to assign against")
        vector = np.asarray(vector, dtype=np.float64)
        if vector.shape != (self.centroids.shape[1],):
            raise ValueError(
                f"Vector has shape {vector.shape}, expected ({self.centroids.shape[1]},)"
            )
        distances = np.sum((self.centroids - vector) ** 2, axis=1)
        return int(np.argmin(distances))

    def members(self, cluster_id: int) -> list[int]:
        """Title indices assigned to a cluster, in input order."""
        return sorted(index for index, label in self.assignments.items() if label == cluster_id)


@dataclass(frozen=True)
class ClusterLabel:
    """Representative tokens for one cluster, most similar first."""
    cluster_id: int
    tokens: tuple[str, ...]
    scores: tuple[float, ...] = ()


@dataclass
class ClusterReport:
    """Human-readable view of a cluster: its label and (a bounded list of) member titles."""
    cluster_id: int
    label: ClusterLabel
    titles: list[str]
    size: int


@dataclass
class PipelineResult:
    """Everything produced by one pipeline run, plus completion counters."""
    articles: list[Article] = field(default_factory=list)
    title_vectors: list[TitleVector] = field(default_factory=list)
    clustering: ClusteringResult = field(default_factory=ClusteringResult.empty)
    labels: list[ClusterLabel] = field(default_factory=list)
    reports: list[ClusterReport] = field(default_factory=list)
    embedding_model: Any = None
    records_read: int = 0
    records_skipped: int = 0
    empty_titles: int = 0
    oov_tokens: int = 0
    clustered_titles: int = 0
    unlabeled_clusters: int = 0

    def summary(self) -> dict[str, Any]:
        return {
            "records_read": self.records_read,
            "records_skipped": self.records_skipped,
            "articles_loaded": len(self.articles),
            "empty_titles": self.empty_titles,
            "oov_tokens": self.oov_tokens,
            "titles_clustered": self.clustered_titles,
            "clusters": self.clustering.num_clusters,
            "unlabeled_clusters": self.unlabeled_clusters,
            "cost": self.clustering.cost,
        }
