"""Word-embedding model interface and gensim word2vec backend."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

import numpy as np
from gensim.models import KeyedVectors, Word2Vec

from common.errors import SolverError

logger = logging.getLogger(__name__)

WORD2VEC_FORMAT_SUFFIXES = (".bin", ".txt", ".vec")


class EmbeddingModel(Protocol):
    """Token -> vector lookup plus nearest-neighbour query."""

    dimension: int

    def embed(self, token: str) -> np.ndarray | None:
        ...

    def nearest(self, vector: np.ndarray, k: int) -> list[tuple[str, float]]:
        ...


class Word2VecEmbeddings:
    """EmbeddingModel backed by gensim KeyedVectors."""

    def __init__(self, vectors: KeyedVectors):
        self.vectors = vectors
        self.dimension = int(vectors.vector_size)

    def __len__(self) -> int:
        return len(self.vectors.index_to_key)

    def embed(self, token: str) -> np.ndarray | None:
        """Return the token's vector, or None when it is out of vocabulary."""
        if token not in self.vectors.key_to_index:
            return None
        return self.vectors[token]

    def nearest(self, vector: np.ndarray, k: int) -> list[tuple[str, float]]:
        """Top-k vocabulary tokens by cosine similarity, most similar first."""
        if k <= 0 or len(self) == 0:
            return []
        vector = np.asarray(vector, dtype=np.float32)
        if not np.any(vector):
            # cosine similarity is undefined for the zero vector
            return []
        neighbours = self.vectors.similar_by_vector(vector, topn=min(k, len(self)))
        return [(token, float(score)) for token, score in neighbours]

    def save(self, path: str) -> None:
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        self.vectors.save(path)
        logger.info("Saved %d word vectors to %s", len(self), path)


def load_embedding_model(path: str) -> Word2VecEmbeddings:
    """Load pretrained vectors (word2vec text/binary format or gensim KeyedVectors)."""
    if path.endswith(WORD2VEC_FORMAT_SUFFIXES):
        vectors = KeyedVectors.load_word2vec_format(path, binary=path.endswith(".bin"))
    else:
        vectors = KeyedVectors.load(path)
    logger.info("Loaded %d word vectors (dim=%d) from %s", len(vectors.index_to_key), vectors.vector_size, path)
    return Word2VecEmbeddings(vectors)


def train_embedding_model(
    corpus: list[list[str]],
    vector_size: int = 100,
    window: int = 5,
    min_count: int = 1,
    epochs: int = 5,
    workers: int = 1,
    seed: int | None = 42,
) -> Word2VecEmbeddings:
    """
    Train a word2vec model on a tokenized corpus.

    Training is reproducible only with workers=1, a fixed seed and a fixed
    PYTHONHASHSEED; otherwise vectors vary from run to run.

    Args:
        corpus: Token sequences to train on.
        vector_size: Embedding dimension D.
        window: Context window size.
        min_count: Ignore tokens with lower total frequency.
        epochs: Training passes over the corpus.
        workers: Worker threads used by gensim.
        seed: Random seed (None for gensim's default).

    Returns:
        Word2VecEmbeddings wrapping the trained vectors.

    Raises:
        SolverError: If the corpus is empty or gensim fails to train.
    """
    if not corpus:
        raise SolverError("embedding", 0, "empty training corpus")

    logger.info(
        "Training word2vec on %d sentences (vector_size=%d, window=%d, min_count=%d, epochs=%d)",
        len(corpus),
        vector_size,
        window,
        min_count,
        epochs,
    )
    kwargs = {}
    if seed is not None:
        kwargs["seed"] = seed
    try:
        model = Word2Vec(
            sentences=corpus,
            vector_size=vector_size,
            window=window,
            min_count=min_count,
            epochs=epochs,
            workers=workers,
            **kwargs,
        )
    except Exception as exc:
        raise SolverError("embedding", len(corpus), str(exc)) from exc

    logger.info("Trained %d word vectors", len(model.wv.index_to_key))
    return Word2VecEmbeddings(model.wv)
