"""Main title clustering pipeline."""

from __future__ import annotations

import logging
import threading
from typing import Sequence

import numpy as np

from cluster_titles.cluster_titles import KMeansClusterer
from cluster_titles.config_loader import EmbeddingConfig, PipelineConfig
from cluster_titles.label_clusters import label_clusters
from cluster_titles.models import ClusteringResult, PipelineResult
from cluster_titles.report import build_cluster_reports
from common.errors import PipelineCancelled
from embed_titles.embedding_model import EmbeddingModel, load_embedding_model, train_embedding_model
from embed_titles.models import TitleVector
from embed_titles.tokenizer import tokenize_corpus, tokenize_title
from embed_titles.vectorize import TitleVectorizer
from load_articles.decode import ArticleDecoder
from load_articles.load_articles import load_articles
from load_articles.models import Article

logger = logging.getLogger(__name__)


def _check_cancelled(cancel_event: threading.Event | None, stage: str) -> None:
    if cancel_event is not None and cancel_event.is_set():
        logger.warning("Cancellation requested, stopping before %s", stage)
        raise PipelineCancelled(stage)


def build_embedding_model(
    articles: Sequence[Article],
    config: EmbeddingConfig,
    cancel_event: threading.Event | None = None,
) -> EmbeddingModel:
    """Load pretrained vectors if configured, otherwise train word2vec on the articles."""
    if config.pretrained_path:
        return load_embedding_model(config.pretrained_path)

    corpus = tokenize_corpus(articles, config.corpus_fields)
    _check_cancelled(cancel_event, "embedding")
    return train_embedding_model(
        corpus,
        vector_size=config.vector_size,
        window=config.window,
        min_count=config.min_count,
        epochs=config.epochs,
        workers=config.workers,
        seed=config.seed,
    )


def _all_titles_empty(
    articles: Sequence[Article],
    config: PipelineConfig,
    embedding_model: EmbeddingModel | None,
) -> PipelineResult:
    """Zero-cluster result for a batch whose titles have no tokens. Neither solver is run."""
    logger.warning("All %d titles are empty, skipping embedding and clustering", len(articles))
    dimension = config.embedding.vector_size if embedding_model is None else int(embedding_model.dimension)
    title_vectors = [
        TitleVector(index=index, title=article.title, tokens=(), vector=np.zeros(dimension, dtype=np.float64))
        for index, article in enumerate(articles)
    ]
    return PipelineResult(
        articles=list(articles),
        title_vectors=title_vectors,
        clustering=ClusteringResult.empty(dimension),
        embedding_model=embedding_model,
        empty_titles=len(title_vectors),
    )


def cluster_article_titles(
    articles: Sequence[Article],
    config: PipelineConfig,
    cancel_event: threading.Event | None = None,
    embedding_model: EmbeddingModel | None = None,
) -> PipelineResult:
    """
    Embed, cluster and label the titles of already-decoded articles.

    Args:
        articles: Decoded articles.
        config: Pipeline configuration.
        cancel_event: Checked before embedding training and before k-means.
        embedding_model: Use this model instead of loading or training one.

    Returns:
        PipelineResult with title vectors, clusters, labels and reports.

    Raises:
        PipelineCancelled: If cancel_event is set before a solver stage.
        SolverError: If embedding training or k-means fails.
    """
    if not articles:
        logger.warning("No articles to cluster, skipping embedding and clustering")
        return PipelineResult()

    if not any(tokenize_title(article.title) for article in articles):
        return _all_titles_empty(articles, config, embedding_model)

    model = embedding_model
    if model is None:
        model = build_embedding_model(articles, config.embedding, cancel_event)

    vectorizer = TitleVectorizer(model)
    title_vectors = vectorizer.vectorize_titles(
        [article.title for article in articles],
        workers=config.report.vectorize_workers,
    )

    empty_titles = sum(1 for tv in title_vectors if tv.is_empty)
    if config.clustering.include_empty_titles:
        clusterable = title_vectors
    else:
        clusterable = [tv for tv in title_vectors if not tv.is_empty]
        if empty_titles:
            logger.warning("Excluding %d empty titles from clustering", empty_titles)

    _check_cancelled(cancel_event, "kmeans")
    clusterer = KMeansClusterer(
        num_clusters=config.clustering.num_clusters,
        num_iterations=config.clustering.num_iterations,
        seed=config.clustering.seed,
        n_init=config.clustering.n_init,
    )
    clustering = clusterer.train(clusterable)

    labels = label_clusters(model, clustering, top_n=config.labels.top_n)
    reports = build_cluster_reports(title_vectors, clustering, labels, max_titles=config.report.max_titles)

    return PipelineResult(
        articles=list(articles),
        title_vectors=title_vectors,
        clustering=clustering,
        labels=labels,
        reports=reports,
        embedding_model=model,
        empty_titles=empty_titles,
        oov_tokens=sum(tv.oov_count for tv in title_vectors),
        clustered_titles=len(clustering.assignments),
        unlabeled_clusters=sum(1 for label in labels if not label.tokens),
    )


def run_pipeline(
    config: PipelineConfig,
    cancel_event: threading.Event | None = None,
) -> PipelineResult:
    """Run the full pipeline: load, embed, cluster, label.

    Args:
        config: Pipeline configuration

    Returns:
        PipelineResult with completion counters
    """
    decoder = ArticleDecoder(required_fields=tuple(config.input.required_fields))
    loaded = load_articles(config.input.paths, decoder, on_error=config.input.on_decode_error)

    result = cluster_article_titles(loaded.articles, config, cancel_event=cancel_event)
    result.records_read = loaded.records_read
    result.records_skipped = loaded.records_skipped

    summary = result.summary()
    logger.info("Pipeline complete")
    logger.info("  Records read: %d", summary["records_read"])
    logger.info("  Records skipped: %d", summary["records_skipped"])
    logger.info("  Empty titles: %d", summary["empty_titles"])
    logger.info("  Out-of-vocabulary tokens: %d", summary["oov_tokens"])
    logger.info("  Titles clustered: %d", summary["titles_clustered"])
    logger.info("  Clusters: %d (%d unlabeled)", summary["clusters"], summary["unlabeled_clusters"])
    return result
