import gzip
import json
import logging
from datetime import datetime
from typing import Iterable, Iterator, Mapping, Any

import boto3
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

JSONL_SUFFIXES = (".jsonl", ".jsonl.gz")


def get_s3_client():
    """Create S3 client."""
    return boto3.client("s3")


def is_s3_path(path: str) -> bool:
    return path.startswith("s3://")


def parse_s3_path(path: str) -> tuple[str, str]:
    """Parse s3://bucket/key into (bucket, key)."""
    path = path.removeprefix("s3://")
    parts = path.split("/", 1)
    bucket = parts[0]
    key = parts[1] if len(parts) > 1 else ""
    return bucket, key


def build_s3_key(prefix: str, timestamp: datetime, filename: str) -> str:
    """Build a partitioned S3 key path."""
    return (
        f"{prefix}/"
        f"year={timestamp.year:04d}/"
        f"month={timestamp.month:02d}/"
        f"day={timestamp.day:02d}/"
        f"{filename}"
    )


def upload_jsonl_to_s3(
    records: Iterable[Mapping[str, Any]],
    bucket: str,
    key: str,
) -> None:
    """Upload in-memory records to S3 as JSONL."""
    body = "\n".join(json.dumps(record, ensure_ascii=False, default=str) for record in records) + "\n"

    s3 = get_s3_client()
    s3.put_object(
        Bucket=bucket,
        Key=key,
        Body=body.encode("utf-8"),
        ContentType="application/jsonl",
    )


def list_s3_jsonl_files(path: str) -> list[str]:
    """List all .jsonl and .jsonl.gz files under an s3://bucket/prefix path.

    Returns:
        Sorted list of full S3 paths (s3://bucket/key)
    """
    bucket, prefix = parse_s3_path(path)
    s3 = get_s3_client()
    files = []
    paginator = s3.get_paginator("list_objects_v2")

    for page in paginator.paginate(Bucket=bucket, Prefix=prefix):
        for obj in page.get("Contents", []):
            key = obj["Key"]
            if key.endswith(JSONL_SUFFIXES):
                files.append(f"s3://{bucket}/{key}")

    return sorted(files)


def read_s3_lines(path: str) -> Iterator[bytes]:
    """Read raw byte lines from an S3 object, handling gzip if needed."""
    bucket, key = parse_s3_path(path)
    s3 = get_s3_client()
    response = s3.get_object(Bucket=bucket, Key=key)
    content = response["Body"].read()

    if key.endswith(".gz"):
        content = gzip.decompress(content)

    yield from content.splitlines()
