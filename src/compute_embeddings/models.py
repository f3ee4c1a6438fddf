"""Data models for compute_embeddings pipeline stage."""

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True, eq=False)
class EmbeddedTab:
    """Tab with computed, L2-normalized embedding vector."""
    id: int | str
    title: str
    url: str
    content: str
    domain: str
    base_domain: str
    path_tokens: tuple[str, ...]
    embedding: np.ndarray
