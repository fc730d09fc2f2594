"""Helper functions for cluster_titles CLI."""

from __future__ import annotations

import argparse

from cluster_titles.config_loader import PipelineConfig
from common.cli_helpers import positive_int
from load_articles.load_articles import ON_ERROR_CHOICES

OUTPUT_FORMATS = ("jsonl", "parquet")


def parse_cluster_titles_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments for cluster_titles."""

    parser = argparse.ArgumentParser(description="Cluster news article titles into topics")

    # Config options
    parser.add_argument(
        "--config",
        default=None,
        help="Config name (test/prod) or path to YAML file (default: $TITLE_CLUSTERS_CONFIG or prod)",
    )

    # Input options
    parser.add_argument(
        "--input",
        action="append",
        default=None,
        help="JSONL file, directory or s3:// prefix to read (repeatable, overrides config)",
    )
    parser.add_argument(
        "--on-decode-error",
        choices=ON_ERROR_CHOICES,
        default=None,
        help="Skip bad records or abort on the first one (overrides config)",
    )

    # Model options
    parser.add_argument("--pretrained-model", default=None, help="Load word vectors instead of training")
    parser.add_argument("--save-model", default=None, help="Save the word vectors to this path")

    # Clustering options
    parser.add_argument("--num-clusters", type=positive_int, default=None, help="Number of clusters K")
    parser.add_argument("--num-iterations", type=positive_int, default=None, help="Max k-means iterations")
    parser.add_argument("--top-n", type=positive_int, default=None, help="Tokens per cluster label")
    parser.add_argument("--max-titles", type=positive_int, default=None, help="Titles listed per cluster")

    # Output options
    parser.add_argument("--load-s3", action="store_true", help="Upload results to S3")
    parser.add_argument("--load-local", action="store_true", help="Save results to local file")
    parser.add_argument(
        "--output-format",
        choices=OUTPUT_FORMATS,
        default="jsonl",
        help="Local output format (default: jsonl)",
    )
    parser.add_argument("--output-dir", default="output", help="Local output directory (default: output)")

    return parser.parse_args(argv)


def apply_overrides(config: PipelineConfig, args: argparse.Namespace) -> PipelineConfig:
    """Apply CLI overrides on top of the loaded config."""
    if args.input:
        config.input.paths = list(args.input)
    if args.on_decode_error:
        config.input.on_decode_error = args.on_decode_error
    if args.pretrained_model:
        config.embedding.pretrained_path = args.pretrained_model
    if args.num_clusters:
        config.clustering.num_clusters = args.num_clusters
    if args.num_iterations:
        config.clustering.num_iterations = args.num_iterations
    if args.top_n:
        config.labels.top_n = args.top_n
    if args.max_titles:
        config.report.max_titles = args.max_titles
    return config
