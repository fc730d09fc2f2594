"""Raw line sources for article records (local files, gzip, S3)."""

import gzip
from pathlib import Path
from typing import Iterator

from common.aws import JSONL_SUFFIXES, is_s3_path, list_s3_jsonl_files, read_s3_lines


def discover_input_files(path: str) -> list[str]:
    """Expand a directory or S3 prefix into its JSONL files.

    A path naming a single local file or S3 object is returned unchanged.
    """
    if is_s3_path(path):
        if path.endswith(JSONL_SUFFIXES):
            return [path]
        return list_s3_jsonl_files(path)

    local = Path(path)
    if local.is_dir():
        files = list(local.glob("*.jsonl")) + list(local.glob("*.jsonl.gz"))
        return sorted(str(f) for f in files)
    return [path]


def iter_lines(path: str) -> Iterator[bytes]:
    """Stream every physical line, undecoded, from a local file or S3 object (gzip or plain).

    Blank lines are kept so line numbers match the file. Text decoding is
    left to the record decoder.
    """
    if is_s3_path(path):
        yield from read_s3_lines(path)
        return

    opener = gzip.open if path.endswith(".gz") else open
    with opener(path, "rb") as f:
        for line in f:
            yield line.rstrip(b"\r\n")
