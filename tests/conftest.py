"""Shared fixtures for title clustering tests."""

import numpy as np
import pytest

from load_articles.models import Article


class FakeEmbeddingModel:
    """Dict-backed EmbeddingModel with cosine nearest-neighbour search."""

    def __init__(self, vectors: dict[str, list[float]], dimension: int | None = None):
        self.vectors = {token: np.asarray(v, dtype=np.float64) for token, v in vectors.items()}
        if dimension is None:
            dimension = len(next(iter(self.vectors.values())))
        self.dimension = dimension

    def embed(self, token: str) -> np.ndarray | None:
        vector = self.vectors.get(token)
        return None if vector is None else vector.copy()

    def nearest(self, vector: np.ndarray, k: int) -> list[tuple[str, float]]:
        norm = np.linalg.norm(vector)
        if k <= 0 or norm == 0 or not self.vectors:
            return []
        scored = []
        for token, candidate in self.vectors.items():
            candidate_norm = np.linalg.norm(candidate)
            if candidate_norm == 0:
                continue
            scored.append((token, float(candidate @ vector / (candidate_norm * norm))))
        # stable sort keeps insertion order for ties
        scored.sort(key=lambda item: -item[1])
        return scored[:k]


@pytest.fixture
def make_model():
    return FakeEmbeddingModel


@pytest.fixture
def animal_model() -> FakeEmbeddingModel:
    return FakeEmbeddingModel(
        {
            "cat": [1.0, 0.0],
            "dog": [0.0, 1.0],
            "rocket": [5.0, 5.0],
            "ship": [5.0, 5.0],
        }
    )


@pytest.fixture
def make_article():
    def _make(title: str, date: str = "2024-01-01", byline: str = "", fulltext: str = "") -> Article:
        return Article(date=date, title=title, byline=byline, fulltext=fulltext)

    return _make
