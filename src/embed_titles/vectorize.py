"""Average word vectors into one vector per title."""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Sequence

import numpy as np

from embed_titles.embedding_model import EmbeddingModel
from embed_titles.models import TitleVector
from embed_titles.tokenizer import tokenize_title

logger = logging.getLogger(__name__)


class TitleVectorizer:
    """
    Turns titles into fixed-length vectors using a read-only embedding model.

    Out-of-vocabulary tokens contribute a zero vector instead of raising,
    and an empty title maps to the zero vector rather than dividing by zero.
    Instances hold no mutable state and are safe to share across threads.
    """

    def __init__(self, model: EmbeddingModel):
        self.model = model
        self.dimension = int(model.dimension)

    def zero_vector(self) -> np.ndarray:
        return np.zeros(self.dimension, dtype=np.float64)

    def lookup(self, token: str) -> np.ndarray | None:
        """Model vector for a token, or None on any lookup failure."""
        try:
            vector = self.model.embed(token)
        except Exception:
            logger.debug("Embedding lookup failed for token %r", token, exc_info=True)
            return None
        if vector is None:
            return None
        vector = np.asarray(vector, dtype=np.float64)
        if vector.shape != (self.dimension,):
            logger.debug("Discarding vector of shape %s for token %r", vector.shape, token)
            return None
        return vector

    def embed(self, token: str) -> np.ndarray:
        vector = self.lookup(token)
        return self.zero_vector() if vector is None else vector

    def _average(self, tokens: Sequence[str]) -> tuple[np.ndarray, int]:
        total = self.zero_vector()
        oov_count = 0
        # summing in sorted order keeps the result identical for any permutation
        for token in sorted(tokens):
            vector = self.lookup(token)
            if vector is None:
                oov_count += 1
                continue
            total += vector
        if not tokens:
            return total, 0
        return total / len(tokens), oov_count

    def average_title(self, tokens: Sequence[str]) -> np.ndarray:
        """Component-wise mean of the token vectors (zero vector for no tokens)."""
        vector, _ = self._average(tokens)
        return vector

    def vectorize(self, index: int, title: str) -> TitleVector:
        tokens = tokenize_title(title)
        vector, oov_count = self._average(tokens)
        return TitleVector(index=index, title=title, tokens=tokens, vector=vector, oov_count=oov_count)

    def vectorize_titles(self, titles: Sequence[str], workers: int = 1) -> list[TitleVector]:
        """Vectorize every title, preserving input order."""
        if workers > 1 and len(titles) > 1:
            with ThreadPoolExecutor(max_workers=workers) as pool:
                title_vectors = list(pool.map(self.vectorize, range(len(titles)), titles))
        else:
            title_vectors = [self.vectorize(index, title) for index, title in enumerate(titles)]

        empty = sum(1 for tv in title_vectors if tv.is_empty)
        oov = sum(tv.oov_count for tv in title_vectors)
        logger.info(
            "Vectorized %d titles (%d empty, %d out-of-vocabulary tokens)",
            len(title_vectors),
            empty,
            oov,
        )
        return title_vectors
