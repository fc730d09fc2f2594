"""Tests for cluster_titles.config_loader module."""

import pytest

from cluster_titles.config_loader import (
    ClusteringConfig,
    EmbeddingConfig,
    InputConfig,
    PipelineConfig,
    load_config,
    parse_config,
)


class TestParseConfig:
    def test_defaults(self) -> None:
        config = parse_config({})

        assert config.clustering.num_clusters == 100
        assert config.clustering.num_iterations == 25
        assert config.labels.top_n == 5
        assert config.report.max_titles == 100
        assert config.input.on_decode_error == "skip"
        assert config.embedding.corpus_fields == ["title"]

    def test_sections_override_defaults(self) -> None:
        config = parse_config(
            {
                "input": {"paths": "data/a.jsonl", "on_decode_error": "abort"},
                "embedding": {"vector_size": 50, "seed": None},
                "clustering": {"num_clusters": 7, "include_empty_titles": True},
            }
        )

        assert config.input.paths == ["data/a.jsonl"]
        assert config.input.on_decode_error == "abort"
        assert config.embedding.vector_size == 50
        assert config.embedding.seed is None
        assert config.clustering.num_clusters == 7
        assert config.clustering.include_empty_titles is True

    def test_unknown_key_raises_value_error(self) -> None:
        with pytest.raises(ValueError, match="clustering"):
            parse_config({"clustering": {"clusters": 3}})

    def test_section_must_be_mapping(self) -> None:
        with pytest.raises(ValueError):
            parse_config({"labels": [1, 2]})


class TestValidation:
    @pytest.mark.parametrize("kwargs", [{"num_clusters": 0}, {"num_iterations": -1}, {"num_clusters": True}])
    def test_clustering_counts_must_be_positive(self, kwargs) -> None:
        with pytest.raises(ValueError):
            ClusteringConfig(**kwargs)

    def test_invalid_corpus_field(self) -> None:
        with pytest.raises(ValueError):
            EmbeddingConfig(corpus_fields=["byline"])

    def test_invalid_on_decode_error(self) -> None:
        with pytest.raises(ValueError):
            InputConfig(on_decode_error="ignore")

    def test_invalid_required_field(self) -> None:
        with pytest.raises(ValueError):
            InputConfig(required_fields=["headline"])


class TestLoadConfig:
    def test_loads_bundled_configs(self) -> None:
        assert load_config("prod").clustering.num_clusters == 100
        assert load_config("test").clustering.num_clusters == 3

    def test_loads_from_path(self, tmp_path) -> None:
        path = tmp_path / "custom.yaml"
        path.write_text("labels:\n  top_n: 2\n")
        assert load_config(str(path)).labels.top_n == 2

    def test_env_var_selects_config(self, monkeypatch) -> None:
        monkeypatch.setenv("TITLE_CLUSTERS_CONFIG", "test")
        assert load_config().labels.top_n == 3

    def test_missing_config_raises(self) -> None:
        with pytest.raises(FileNotFoundError):
            load_config("does-not-exist")
