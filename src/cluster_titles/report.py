"""Human-readable cluster listings and per-title output records."""

from __future__ import annotations

from typing import Any, Sequence

from cluster_titles.models import ClusterLabel, ClusteringResult, ClusterReport
from common.hashing import generate_title_id
from embed_titles.models import TitleVector
from load_articles.models import Article


def build_cluster_reports(
    title_vectors: Sequence[TitleVector],
    result: ClusteringResult,
    labels: Sequence[ClusterLabel],
    max_titles: int = 100,
) -> list[ClusterReport]:
    """Group member titles under each cluster label, keeping at most max_titles per cluster."""
    titles_by_index = {tv.index: tv.title for tv in title_vectors}
    reports = []
    for label in labels:
        members = result.members(label.cluster_id)
        reports.append(
            ClusterReport(
                cluster_id=label.cluster_id,
                label=label,
                titles=[titles_by_index[index] for index in members[:max_titles]],
                size=len(members),
            )
        )
    return reports


def format_cluster_report(report: ClusterReport) -> str:
    topic = ", ".join(report.label.tokens) if report.label.tokens else "(no representative tokens)"
    lines = [f"Cluster {report.cluster_id} ({report.size} titles): {topic}"]
    lines.extend(f"  {i:02d}. {title}" for i, title in enumerate(report.titles, 1))
    hidden = report.size - len(report.titles)
    if hidden > 0:
        lines.append(f"  ... and {hidden} more")
    return "\n".join(lines)


def build_assignment_records(
    articles: Sequence[Article],
    title_vectors: Sequence[TitleVector],
    result: ClusteringResult,
    labels: Sequence[ClusterLabel],
) -> list[dict[str, Any]]:
    """One output record per title; cluster_id is None for titles left out of clustering."""
    tokens_by_cluster = {label.cluster_id: list(label.tokens) for label in labels}
    records = []
    for tv in title_vectors:
        article = articles[tv.index]
        cluster_id = result.assignments.get(tv.index)
        records.append(
            {
                "title_id": generate_title_id(article.date, article.title),
                "index": tv.index,
                "date": article.date,
                "title": tv.title,
                "cluster_id": cluster_id,
                "topic": tokens_by_cluster.get(cluster_id, []),
                "oov_tokens": tv.oov_count,
                "low_confidence": tv.low_confidence,
            }
        )
    return records
