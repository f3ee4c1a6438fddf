"""Core embedding computation logic."""

from __future__ import annotations

import logging
from typing import Callable, Sequence

import numpy as np
from sentence_transformers import SentenceTransformer

from compute_embeddings.models import EmbeddedTab
from extract_content.models import EnrichedTab

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "all-MiniLM-L6-v2"

Embedder = Callable[[list[str]], Sequence[Sequence[float]]]


class EmbeddingError(RuntimeError):
    """Raised when the embedding model fails; aborts the clustering run."""


class SentenceTransformerEmbedder:
    """Batch text embedder backed by a sentence-transformers model (loaded on first use)."""

    def __init__(self, model: str = DEFAULT_MODEL, batch_size: int = 32) -> None:
        self.model = model
        self.batch_size = batch_size
        self._encoder: SentenceTransformer | None = None

    def __call__(self, texts: list[str]) -> np.ndarray:
        if self._encoder is None:
            logger.info("Loading model: %s", self.model)
            self._encoder = SentenceTransformer(self.model)
        return self._encoder.encode(
            texts,
            batch_size=self.batch_size,
            show_progress_bar=False,
            convert_to_numpy=True,
            normalize_embeddings=True,
        )


def normalize_rows(vectors: np.ndarray) -> np.ndarray:
    """L2-normalize each row; all-zero rows stay zero."""
    norms = np.linalg.norm(vectors, axis=1, keepdims=True)
    norms[norms == 0] = 1.0
    return vectors / norms


def embed_texts(texts: list[str], embedder: Embedder) -> np.ndarray:
    """
    Embed texts in one batch request.

    Rows of the result match the order of ``texts``.

    Args:
        texts: Texts to embed
        embedder: Callable returning one vector per text

    Returns:
        Array of shape (len(texts), dim) with unit-norm rows

    Raises:
        EmbeddingError: If the embedder fails or returns malformed vectors
    """
    if not texts:
        return np.empty((0, 0), dtype="float32")

    try:
        vectors = np.asarray(embedder(list(texts)), dtype="float32")
    except Exception as e:
        raise EmbeddingError(f"Embedding generation failed: {e}") from e

    if vectors.ndim != 2 or vectors.shape[0] != len(texts):
        raise EmbeddingError(
            f"Expected {len(texts)} embeddings, got array of shape {vectors.shape}"
        )

    return normalize_rows(vectors)


def compute_embeddings(tabs: list[EnrichedTab], embedder: Embedder) -> list[EmbeddedTab]:
    """
    Compute embeddings for a list of enriched tabs.

    Args:
        tabs: Tabs with content blobs
        embedder: Batch embedder (e.g. SentenceTransformerEmbedder)

    Returns:
        List of EmbeddedTab in input order

    Raises:
        EmbeddingError: If any embedding cannot be produced
    """
    if not tabs:
        logger.warning("No tabs to embed")
        return []

    for tab in tabs:
        if not tab.content:
            logger.warning("Empty text to embed for tab: id=%s", tab.id)

    logger.info("Computing embeddings for %d tabs", len(tabs))
    embeddings = embed_texts([tab.content for tab in tabs], embedder)

    results = []
    for tab, embedding in zip(tabs, embeddings, strict=True):
        results.append(
            EmbeddedTab(
                id=tab.id,
                title=tab.title,
                url=tab.url,
                content=tab.content,
                domain=tab.domain,
                base_domain=tab.base_domain,
                path_tokens=tab.path_tokens,
                embedding=embedding,
            )
        )

    logger.info("Computed embeddings for %d tabs", len(results))
    return results
