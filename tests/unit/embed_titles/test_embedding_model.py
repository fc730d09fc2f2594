"""Tests for embed_titles.embedding_model module."""

from unittest.mock import patch

import numpy as np
import pytest
from gensim.models import KeyedVectors

from common.errors import SolverError
from embed_titles.embedding_model import (
    Word2VecEmbeddings,
    load_embedding_model,
    train_embedding_model,
)

CORPUS = [
    ["stocks", "rally", "markets"],
    ["markets", "rebound", "stocks"],
    ["team", "wins", "final"],
    ["final", "won", "team"],
] * 10


@pytest.fixture
def keyed_vectors() -> KeyedVectors:
    kv = KeyedVectors(vector_size=2)
    kv.add_vectors(["north", "east", "south"], np.array([[0.0, 1.0], [1.0, 0.0], [0.0, -1.0]]))
    return kv


class TestWord2VecEmbeddings:
    def test_embed_known_and_unknown(self, keyed_vectors) -> None:
        model = Word2VecEmbeddings(keyed_vectors)
        assert model.dimension == 2
        np.testing.assert_array_equal(model.embed("east"), [1.0, 0.0])
        assert model.embed("west") is None

    def test_nearest_orders_by_similarity(self, keyed_vectors) -> None:
        model = Word2VecEmbeddings(keyed_vectors)
        result = model.nearest(np.array([0.9, 0.1]), 2)
        assert [token for token, _ in result] == ["east", "north"]
        assert result[0][1] > result[1][1]

    def test_nearest_caps_k_at_vocabulary_size(self, keyed_vectors) -> None:
        assert len(Word2VecEmbeddings(keyed_vectors).nearest(np.array([1.0, 1.0]), 10)) == 3

    def test_nearest_zero_vector_is_empty(self, keyed_vectors) -> None:
        assert Word2VecEmbeddings(keyed_vectors).nearest(np.zeros(2), 3) == []

    def test_nearest_empty_vocabulary_is_empty(self) -> None:
        assert Word2VecEmbeddings(KeyedVectors(vector_size=2)).nearest(np.array([1.0, 0.0]), 3) == []

    def test_save_and_load(self, keyed_vectors, tmp_path) -> None:
        path = str(tmp_path / "models" / "vectors.kv")
        Word2VecEmbeddings(keyed_vectors).save(path)

        loaded = load_embedding_model(path)

        assert loaded.dimension == 2
        np.testing.assert_array_equal(loaded.embed("north"), [0.0, 1.0])

    def test_load_word2vec_text_format(self, keyed_vectors, tmp_path) -> None:
        path = str(tmp_path / "vectors.txt")
        keyed_vectors.save_word2vec_format(path, binary=False)

        loaded = load_embedding_model(path)

        assert len(loaded) == 3
        np.testing.assert_allclose(loaded.embed("south"), [0.0, -1.0])


class TestTrainEmbeddingModel:
    def test_trains_vectors_of_configured_size(self) -> None:
        model = train_embedding_model(CORPUS, vector_size=8, window=2, epochs=5, seed=1)

        assert model.dimension == 8
        assert model.embed("stocks").shape == (8,)
        assert model.embed("unknown") is None
        assert len(model.nearest(model.embed("team"), 3)) == 3

    def test_empty_corpus_raises_solver_error(self) -> None:
        with pytest.raises(SolverError) as exc_info:
            train_embedding_model([])
        assert exc_info.value.stage == "embedding"
        assert exc_info.value.input_size == 0

    def test_no_vocabulary_raises_solver_error(self) -> None:
        with pytest.raises(SolverError) as exc_info:
            train_embedding_model([["rare"]], min_count=5)
        assert exc_info.value.input_size == 1

    @patch("embed_titles.embedding_model.Word2Vec")
    def test_passes_configuration_to_gensim(self, mock_word2vec) -> None:
        mock_word2vec.return_value.wv = KeyedVectors(vector_size=4)

        train_embedding_model(CORPUS, vector_size=4, window=3, min_count=2, epochs=7, workers=2, seed=9)

        kwargs = mock_word2vec.call_args.kwargs
        assert kwargs["sentences"] is CORPUS
        assert kwargs["vector_size"] == 4
        assert kwargs["window"] == 3
        assert kwargs["min_count"] == 2
        assert kwargs["epochs"] == 7
        assert kwargs["workers"] == 2
        assert kwargs["seed"] == 9
