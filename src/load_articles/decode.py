"""Decode raw JSON lines into Article records."""

from __future__ import annotations

import json
from typing import Any

from load_articles.models import ARTICLE_FIELDS, Article


class DecodeError(ValueError):
    """A source record is not valid JSON or does not match the Article shape."""


class ArticleDecoder:
    """
    Decoder configured once with the Article shape.

    Fields listed in ``required_fields`` must be present and non-null.
    Other Article fields default to an empty string when missing or null.
    Any Article field holding a non-string value is rejected, and unknown
    keys are ignored.
    """

    def __init__(self, required_fields: tuple[str, ...] = ("title",)):
        unknown = set(required_fields) - set(ARTICLE_FIELDS)
        if unknown:
            raise ValueError(
                f"Unknown required fields: {sorted(unknown)}. Must be among {list(ARTICLE_FIELDS)}"
            )
        self.required_fields = tuple(required_fields)

    def decode(self, line: str | bytes) -> Article:
        """Decode one JSON line (text or UTF-8 bytes) into an Article, raising DecodeError on failure."""
        if isinstance(line, bytes):
            try:
                line = line.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise DecodeError(f"invalid UTF-8: {exc.reason} at byte {exc.start}") from exc

        try:
            obj = json.loads(line)
        except json.JSONDecodeError as exc:
            raise DecodeError(f"invalid JSON: {exc.msg} (column {exc.colno})") from exc

        if not isinstance(obj, dict):
            raise DecodeError(f"expected a JSON object, got {type(obj).__name__}")

        return Article(**{name: self._field(obj, name) for name in ARTICLE_FIELDS})

    def _field(self, obj: dict[str, Any], name: str) -> str:
        value = obj.get(name)
        if value is None:
            if name in self.required_fields:
                raise DecodeError(f"missing required field: {name}")
            return ""
        if not isinstance(value, str):
            raise DecodeError(f"field {name} must be a string, got {type(value).__name__}")
        return value
