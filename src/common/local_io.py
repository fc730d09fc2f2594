"""Local file I/O utilities."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any

import pyarrow as pa
import pyarrow.parquet as pq

logger = logging.getLogger(__name__)


def _build_output_path(prefix: str, timestamp: datetime, output_dir: str, suffix: str) -> Path:
    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)
    filename = f"{prefix}_{timestamp.strftime('%Y_%m_%d_%H_%M')}.{suffix}"
    return output_path / filename


def save_jsonl_local(
    records: list[dict[str, Any]],
    prefix: str,
    timestamp: datetime,
    output_dir: str = "output",
) -> Path:
    """Save records to a local JSONL file.

    Args:
        records: List of dictionaries to save.
        prefix: Filename prefix (e.g., "title_clusters").
        timestamp: Timestamp to include in filename.
        output_dir: Directory to save to (default: "output").

    Returns:
        Path to the created file.
    """
    filepath = _build_output_path(prefix, timestamp, output_dir, "jsonl")
    with filepath.open("w", encoding="utf-8") as f:
        for record in records:
            f.write(json.dumps(record, default=str, ensure_ascii=False) + "\n")
    logger.info("Saved %d records to %s", len(records), filepath)
    return filepath


def save_parquet_local(
    records: list[dict[str, Any]],
    prefix: str,
    timestamp: datetime,
    output_dir: str = "output",
) -> Path:
    """Save records to a local Parquet file."""
    filepath = _build_output_path(prefix, timestamp, output_dir, "parquet")
    table = pa.Table.from_pylist(records)
    pq.write_table(table, filepath)
    logger.info("Saved %d records to %s", len(records), filepath)
    return filepath
