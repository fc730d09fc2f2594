"""YAML configuration loader for title clustering."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from common.config import find_config_path, load_yaml
from embed_titles.tokenizer import CORPUS_FIELDS
from load_articles.load_articles import ON_ERROR_CHOICES
from load_articles.models import ARTICLE_FIELDS

# Load .env file if it exists
load_dotenv()

# Config directory at the repository root
CONFIG_DIR = Path(__file__).resolve().parents[2] / "configs"
CONFIG_ENV_VAR = "TITLE_CLUSTERS_CONFIG"


def _check_positive(section: str, **values: int) -> None:
    for name, value in values.items():
        if not isinstance(value, int) or isinstance(value, bool) or value < 1:
            raise ValueError(f"{section}.{name} must be a positive integer, got {value!r}")


@dataclass
class InputConfig:
    """Where article records come from and how bad records are handled."""

    paths: list[str] = field(default_factory=list)
    on_decode_error: str = "skip"
    required_fields: list[str] = field(default_factory=lambda: ["title"])

    def __post_init__(self) -> None:
        if self.on_decode_error not in ON_ERROR_CHOICES:
            raise ValueError(
                f"Invalid on_decode_error: {self.on_decode_error}. "
                f"Must be one of {list(ON_ERROR_CHOICES)}"
            )
        unknown = set(self.required_fields) - set(ARTICLE_FIELDS)
        if unknown:
            raise ValueError(f"Invalid required_fields: {sorted(unknown)}")


@dataclass
class EmbeddingConfig:
    """Configuration for word2vec training (or loading pretrained vectors)."""

    vector_size: int = 100
    window: int = 5
    min_count: int = 1
    epochs: int = 5
    workers: int = 1
    seed: int | None = 42
    corpus_fields: list[str] = field(default_factory=lambda: ["title"])
    pretrained_path: str = ""

    def __post_init__(self) -> None:
        _check_positive(
            "embedding",
            vector_size=self.vector_size,
            window=self.window,
            min_count=self.min_count,
            epochs=self.epochs,
            workers=self.workers,
        )
        if not self.corpus_fields:
            raise ValueError("embedding.corpus_fields must not be empty")
        for name in self.corpus_fields:
            if name not in CORPUS_FIELDS:
                raise ValueError(
                    f"Invalid corpus field: {name}. Must be one of {list(CORPUS_FIELDS)}"
                )


@dataclass
class ClusteringConfig:
    num_clusters: int = 100
    num_iterations: int = 25
    n_init: int = 1
    seed: int | None = 42
    include_empty_titles: bool = False

    def __post_init__(self) -> None:
        _check_positive(
            "clustering",
            num_clusters=self.num_clusters,
            num_iterations=self.num_iterations,
            n_init=self.n_init,
        )


@dataclass
class LabelConfig:
    top_n: int = 5

    def __post_init__(self) -> None:
        _check_positive("labels", top_n=self.top_n)


@dataclass
class ReportConfig:
    max_titles: int = 100
    vectorize_workers: int = 1

    def __post_init__(self) -> None:
        _check_positive("report", max_titles=self.max_titles, vectorize_workers=self.vectorize_workers)


@dataclass
class PipelineConfig:
    input: InputConfig = field(default_factory=InputConfig)
    embedding: EmbeddingConfig = field(default_factory=EmbeddingConfig)
    clustering: ClusteringConfig = field(default_factory=ClusteringConfig)
    labels: LabelConfig = field(default_factory=LabelConfig)
    report: ReportConfig = field(default_factory=ReportConfig)


def _section(data: dict, name: str) -> dict:
    value = data.get(name) or {}
    if not isinstance(value, dict):
        raise ValueError(f"Config section '{name}' must be a mapping")
    return value


def _build(cls, data: dict, name: str):
    try:
        return cls(**_section(data, name))
    except TypeError as exc:
        raise ValueError(f"Invalid keys in config section '{name}': {exc}") from exc


def parse_config(data: dict) -> PipelineConfig:
    """Build a PipelineConfig from parsed YAML data, applying defaults for missing keys."""
    input_data = _section(data, "input")
    paths = input_data.get("paths", [])
    if isinstance(paths, str):
        paths = [paths]

    return PipelineConfig(
        input=InputConfig(
            paths=list(paths),
            on_decode_error=input_data.get("on_decode_error", "skip"),
            required_fields=list(input_data.get("required_fields", ["title"])),
        ),
        embedding=_build(EmbeddingConfig, data, "embedding"),
        clustering=_build(ClusteringConfig, data, "clustering"),
        labels=_build(LabelConfig, data, "labels"),
        report=_build(ReportConfig, data, "report"),
    )


def load_config(name: str | None = None) -> PipelineConfig:
    """Load pipeline config by name (e.g., 'test' or 'prod') or path.

    Args:
        name: Config name without extension, full path to a config file,
            or None to use $TITLE_CLUSTERS_CONFIG (default 'prod')

    Returns:
        PipelineConfig instance
    """
    config_path = find_config_path(name, CONFIG_DIR, env_var=CONFIG_ENV_VAR)
    return parse_config(load_yaml(config_path))
