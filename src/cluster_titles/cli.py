"""CLI for clustering article titles."""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime, timezone

from dotenv import load_dotenv

from cluster_titles.config_loader import load_config
from cluster_titles.helpers import apply_overrides, parse_cluster_titles_args
from cluster_titles.models import PipelineResult
from cluster_titles.pipeline import run_pipeline
from cluster_titles.report import build_assignment_records, format_cluster_report
from common.aws import build_s3_key, upload_jsonl_to_s3
from common.cli_helpers import setup_logging
from common.errors import PipelineCancelled, SolverError
from common.local_io import save_jsonl_local, save_parquet_local
from common.serialization import serialize_dataclass

logger = logging.getLogger(__name__)


def print_report(result: PipelineResult) -> None:
    for report in result.reports:
        print(format_cluster_report(report))
        print()

    print("Summary:")
    for key, value in result.summary().items():
        print(f"  {key}: {value}")


def save_results(result: PipelineResult, args) -> None:
    records = build_assignment_records(result.articles, result.title_vectors, result.clustering, result.labels)
    label_records = [serialize_dataclass(label) for label in result.labels]
    now = datetime.now(timezone.utc)

    if args.load_s3:
        bucket = os.environ["S3_BUCKET_NAME"]
        for prefix, rows in (("title_clusters", records), ("cluster_labels", label_records)):
            key = build_s3_key(prefix, now, f"{prefix}_{now.strftime('%Y_%m_%d_%H_%M')}.jsonl")
            upload_jsonl_to_s3(rows, bucket, key)
            logger.info("Uploaded %d records to s3://%s/%s", len(rows), bucket, key)

    if args.load_local:
        save = save_parquet_local if args.output_format == "parquet" else save_jsonl_local
        save(records, "title_clusters", now, args.output_dir)
        save(label_records, "cluster_labels", now, args.output_dir)


def main(argv: list[str] | None = None) -> int:
    setup_logging()
    args = parse_cluster_titles_args(argv)
    load_dotenv()

    try:
        config = apply_overrides(load_config(args.config), args)
        if not config.input.paths:
            logger.error("No input paths configured (use --input or input.paths)")
            return 1

        result = run_pipeline(config)
    except FileNotFoundError as e:
        logger.error("Input or config not found: %s", e)
        return 1
    except ValueError as e:
        logger.error("Invalid input or configuration: %s", e)
        return 1
    except SolverError as e:
        logger.error("Solver failed during %s (%d inputs): %s", e.stage, e.input_size, e)
        return 1
    except PipelineCancelled as e:
        logger.warning("%s", e)
        return 1

    if not result.articles:
        logger.warning("No articles loaded")
        return 0

    if args.save_model and hasattr(result.embedding_model, "save"):
        result.embedding_model.save(args.save_model)

    print_report(result)
    save_results(result, args)
    return 0


if __name__ == "__main__":
    sys.exit(main())
