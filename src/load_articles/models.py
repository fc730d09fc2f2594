"""Data models for load_articles pipeline stage."""

from dataclasses import dataclass, field

ARTICLE_FIELDS = ("date", "title", "byline", "fulltext")


@dataclass(frozen=True)
class Article:
    """News article record decoded from one JSON line."""
    date: str
    title: str
    byline: str
    fulltext: str


@dataclass
class LoadResult:
    """Articles decoded from a batch of sources, with skip accounting."""
    articles: list[Article] = field(default_factory=list)
    records_read: int = 0
    records_skipped: int = 0
    errors: list[str] = field(default_factory=list)
