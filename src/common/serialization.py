"""Serialization utilities."""

from dataclasses import asdict
from datetime import datetime

import numpy as np


def _to_plain(value):
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, np.ndarray):
        return value.tolist()
    if isinstance(value, np.generic):
        return value.item()
    if isinstance(value, (list, tuple)):
        return [_to_plain(v) for v in value]
    if isinstance(value, dict):
        return {k: _to_plain(v) for k, v in value.items()}
    return value


def serialize_dataclass(obj) -> dict:
    """Serialize a dataclass to a JSON-ready dict.

    Datetimes become ISO strings, numpy arrays and scalars become plain
    Python values and tuples become lists.
    """
    return {key: _to_plain(value) for key, value in asdict(obj).items()}
