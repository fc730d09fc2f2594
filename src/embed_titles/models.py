"""Data models for embed_titles pipeline stage."""

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True, eq=False)
class TitleVector:
    """Averaged embedding for one title, kept with its source tokens."""
    index: int
    title: str
    tokens: tuple[str, ...]
    vector: np.ndarray
    oov_count: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.tokens

    @property
    def low_confidence(self) -> bool:
        """Empty titles and titles with out-of-vocabulary tokens."""
        return self.is_empty or self.oov_count > 0
