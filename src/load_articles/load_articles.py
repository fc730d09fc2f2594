"""Load and decode articles from one or more sources."""

import logging
from typing import Iterable

from load_articles.decode import ArticleDecoder, DecodeError
from load_articles.models import LoadResult
from load_articles.sources import discover_input_files, iter_lines

logger = logging.getLogger(__name__)

ON_ERROR_CHOICES = ("skip", "abort")
MAX_SAMPLED_ERRORS = 20


def decode_lines(
    lines: Iterable[str | bytes],
    decoder: ArticleDecoder,
    source: str = "<memory>",
    on_error: str = "skip",
    result: LoadResult | None = None,
) -> LoadResult:
    """
    Decode raw lines into articles, isolating per-record failures.

    Args:
        lines: Raw JSON lines (text or UTF-8 bytes), one per physical line.
            Blank lines are skipped but still counted for line numbers.
        decoder: Configured ArticleDecoder.
        source: Name used in log and error messages.
        on_error: "skip" to count and skip bad records, "abort" to raise on the first.
        result: Existing LoadResult to accumulate into.

    Returns:
        LoadResult with decoded articles and skip counts.

    Raises:
        DecodeError: On the first bad record when on_error is "abort".
    """
    if on_error not in ON_ERROR_CHOICES:
        raise ValueError(f"Invalid on_error: {on_error}. Must be one of {list(ON_ERROR_CHOICES)}")

    if result is None:
        result = LoadResult()

    for line_no, line in enumerate(lines, start=1):
        line = line.strip()
        if not line:
            continue

        result.records_read += 1
        try:
            article = decoder.decode(line)
        except DecodeError as exc:
            if on_error == "abort":
                raise DecodeError(f"{source}:{line_no}: {exc}") from exc
            result.records_skipped += 1
            message = f"{source}:{line_no}: {exc}"
            logger.warning("Skipping bad record %s", message)
            if len(result.errors) < MAX_SAMPLED_ERRORS:
                result.errors.append(message)
            continue
        result.articles.append(article)

    return result


def load_articles(
    paths: list[str],
    decoder: ArticleDecoder | None = None,
    on_error: str = "skip",
) -> LoadResult:
    """Read and decode every JSONL file found under the given paths."""
    decoder = decoder or ArticleDecoder()
    result = LoadResult()

    input_files = []
    for path in paths:
        input_files.extend(discover_input_files(path))

    if not input_files:
        logger.warning("No input files found under %s", paths)
        return result

    logger.info("Found %d input files", len(input_files))
    for input_file in input_files:
        logger.info("Reading %s", input_file)
        decode_lines(iter_lines(input_file), decoder, source=input_file, on_error=on_error, result=result)

    logger.info(
        "Loaded %d articles (%d records read, %d skipped)",
        len(result.articles),
        result.records_read,
        result.records_skipped,
    )
    return result
