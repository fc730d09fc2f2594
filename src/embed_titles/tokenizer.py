"""Whitespace tokenization for titles and training corpora."""

from typing import Iterable

from load_articles.models import Article

CORPUS_FIELDS = ("title", "fulltext")


def tokenize_title(title: str) -> tuple[str, ...]:
    """Split a title on whitespace. Case and punctuation are left as-is."""
    return tuple(title.split())


def tokenize_corpus(articles: Iterable[Article], fields: Iterable[str] = ("title",)) -> list[list[str]]:
    """Build a word2vec training corpus from the given article fields.

    Each non-empty field of each article contributes one sentence.
    """
    fields = tuple(fields)
    for name in fields:
        if name not in CORPUS_FIELDS:
            raise ValueError(f"Invalid corpus field: {name}. Must be one of {list(CORPUS_FIELDS)}")

    corpus = []
    for article in articles:
        for name in fields:
            tokens = getattr(article, name).split()
            if tokens:
                corpus.append(tokens)
    return corpus
