"""Shared fixtures: deterministic embedders and embedded tabs built from unit vectors."""

import numpy as np
import pytest

from compute_embeddings.models import EmbeddedTab
from extract_content.parse_url import parse_url

DIM = 16


def unit_vector(*weights: tuple[int, float]) -> np.ndarray:
    """Unit-norm vector from (axis, weight) pairs."""
    vector = np.zeros(DIM, dtype="float32")
    for axis, weight in weights:
        vector[axis] += weight
    return vector / np.linalg.norm(vector)


def basis(axis: int) -> np.ndarray:
    return unit_vector((axis, 1.0))


class FakeEmbedder:
    """Looks texts up in a table; unknown texts map to the last axis."""

    def __init__(self, vectors: dict[str, np.ndarray] | None = None) -> None:
        self.vectors = vectors or {}
        self.calls: list[list[str]] = []

    def __call__(self, texts: list[str]) -> np.ndarray:
        self.calls.append(list(texts))
        return np.vstack([self.vectors.get(text, basis(DIM - 1)) for text in texts])


def embedded_tab(tab_id, url: str, embedding: np.ndarray, title: str = "") -> EmbeddedTab:
    features = parse_url(url)
    return EmbeddedTab(
        id=tab_id,
        title=title,
        url=url,
        content=title,
        domain=features.domain,
        base_domain=features.base_domain,
        path_tokens=features.path_tokens,
        embedding=embedding,
    )


@pytest.fixture
def make_vector():
    return unit_vector


@pytest.fixture
def make_basis():
    return basis


@pytest.fixture
def make_embedder():
    return FakeEmbedder


@pytest.fixture
def make_tab():
    return embedded_tab
