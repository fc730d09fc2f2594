"""Tests for cluster_titles.cli and cluster_titles.helpers modules."""

import json
from pathlib import Path
from unittest.mock import patch

import pyarrow.parquet as pq
import pytest

from cluster_titles.cli import main
from cluster_titles.config_loader import PipelineConfig
from cluster_titles.helpers import apply_overrides, parse_cluster_titles_args
from common.errors import PipelineCancelled, SolverError

DATA_FILE = str(Path(__file__).parents[2] / "data" / "articles.jsonl")


class TestParseArgs:
    def test_defaults(self) -> None:
        args = parse_cluster_titles_args([])
        assert args.config is None
        assert args.input is None
        assert args.output_format == "jsonl"
        assert not args.load_local

    def test_repeatable_input(self) -> None:
        args = parse_cluster_titles_args(["--input", "a.jsonl", "--input", "s3://b/p/"])
        assert args.input == ["a.jsonl", "s3://b/p/"]

    def test_rejects_non_positive_clusters(self) -> None:
        with pytest.raises(SystemExit):
            parse_cluster_titles_args(["--num-clusters", "0"])


class TestApplyOverrides:
    def test_overrides_config(self) -> None:
        args = parse_cluster_titles_args(
            [
                "--input", "a.jsonl",
                "--num-clusters", "4",
                "--num-iterations", "9",
                "--top-n", "2",
                "--max-titles", "10",
                "--on-decode-error", "abort",
                "--pretrained-model", "v.kv",
            ]
        )
        config = apply_overrides(PipelineConfig(), args)

        assert config.input.paths == ["a.jsonl"]
        assert config.input.on_decode_error == "abort"
        assert config.embedding.pretrained_path == "v.kv"
        assert config.clustering.num_clusters == 4
        assert config.clustering.num_iterations == 9
        assert config.labels.top_n == 2
        assert config.report.max_titles == 10

    def test_no_overrides_keeps_config(self) -> None:
        config = apply_overrides(PipelineConfig(), parse_cluster_titles_args([]))
        assert config.clustering.num_clusters == 100
        assert config.input.paths == []


class TestMain:
    def test_runs_and_saves_jsonl(self, tmp_path, capsys) -> None:
        exit_code = main(
            ["--config", "test", "--input", DATA_FILE, "--load-local", "--output-dir", str(tmp_path)]
        )

        assert exit_code == 0
        out = capsys.readouterr().out
        assert "Cluster 0" in out
        assert "records_skipped: 2" in out

        [assignments_file] = tmp_path.glob("title_clusters_*.jsonl")
        records = [json.loads(line) for line in assignments_file.read_text(encoding="utf-8").splitlines()]
        assert len(records) == 6
        assert sum(1 for r in records if r["cluster_id"] is None) == 1
        assert list(tmp_path.glob("cluster_labels_*.jsonl"))

    def test_saves_parquet_and_model(self, tmp_path) -> None:
        model_path = tmp_path / "model" / "vectors.kv"
        exit_code = main(
            [
                "--config", "test",
                "--input", DATA_FILE,
                "--load-local",
                "--output-format", "parquet",
                "--output-dir", str(tmp_path),
                "--save-model", str(model_path),
            ]
        )

        assert exit_code == 0
        [parquet_file] = tmp_path.glob("title_clusters_*.parquet")
        assert pq.read_table(parquet_file).num_rows == 6
        assert model_path.exists()

    @patch("cluster_titles.cli.upload_jsonl_to_s3")
    def test_load_s3_uploads_both_outputs(self, mock_upload, monkeypatch) -> None:
        monkeypatch.setenv("S3_BUCKET_NAME", "bucket")

        assert main(["--config", "test", "--input", DATA_FILE, "--load-s3"]) == 0

        keys = [call.args[2] for call in mock_upload.call_args_list]
        assert len(keys) == 2
        assert keys[0].startswith("title_clusters/year=")
        assert keys[1].startswith("cluster_labels/year=")
        assert all(call.args[1] == "bucket" for call in mock_upload.call_args_list)

    def test_missing_config_returns_error(self) -> None:
        assert main(["--config", "does-not-exist"]) == 1

    def test_missing_input_paths_returns_error(self, tmp_path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("labels:\n  top_n: 2\n")
        assert main(["--config", str(path)]) == 1

    def test_abort_on_bad_record_returns_error(self) -> None:
        assert main(["--config", "test", "--input", DATA_FILE, "--on-decode-error", "abort"]) == 1

    @pytest.mark.parametrize(
        "error", [SolverError("kmeans", 3, "boom"), PipelineCancelled("kmeans")]
    )
    def test_pipeline_failures_return_error(self, error) -> None:
        with patch("cluster_titles.cli.run_pipeline", side_effect=error):
            assert main(["--config", "test", "--input", DATA_FILE]) == 1
