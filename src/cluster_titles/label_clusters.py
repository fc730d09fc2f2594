"""Describe clusters by the vocabulary tokens nearest their centroids."""

import logging

import numpy as np

from cluster_titles.models import ClusterLabel, ClusteringResult
from embed_titles.embedding_model import EmbeddingModel

logger = logging.getLogger(__name__)


def label_cluster(
    model: EmbeddingModel,
    centroid: np.ndarray,
    cluster_id: int,
    top_n: int = 5,
) -> ClusterLabel:
    """Top-N tokens nearest the centroid, most similar first.

    Ties follow the embedding model's own ordering. An empty label is
    returned when the model has no neighbours to offer.
    """
    neighbours = model.nearest(centroid, top_n)[:top_n]
    if not neighbours:
        logger.warning("No representative tokens for cluster %d", cluster_id)
    return ClusterLabel(
        cluster_id=cluster_id,
        tokens=tuple(token for token, _ in neighbours),
        scores=tuple(float(score) for _, score in neighbours),
    )


def label_clusters(
    model: EmbeddingModel,
    result: ClusteringResult,
    top_n: int = 5,
) -> list[ClusterLabel]:
    return [
        label_cluster(model, centroid, cluster_id, top_n)
        for cluster_id, centroid in enumerate(result.centroids)
    ]
