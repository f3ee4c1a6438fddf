"""Multi-signal pairwise similarity between embedded tabs."""

from __future__ import annotations

import logging

import numpy as np

from cluster_tabs.config import ClusterConfig
from compute_embeddings.models import EmbeddedTab

logger = logging.getLogger(__name__)


def cosine_similarity(a: np.ndarray, b: np.ndarray) -> float:
    """Cosine similarity for unit-norm vectors (a plain dot product)."""
    return float(np.dot(a, b))


def domain_boost(a: EmbeddedTab, b: EmbeddedTab, config: ClusterConfig) -> float:
    """Full boost for the same domain, half for the same base domain."""
    if a.domain == b.domain:
        return config.domain_affinity_boost
    if a.base_domain == b.base_domain:
        return config.domain_affinity_boost * 0.5
    return 0.0


def path_boost(a: EmbeddedTab, b: EmbeddedTab, config: ClusterConfig) -> float:
    """Boost scaled by the share of path tokens the two URLs have in common."""
    common = len(set(a.path_tokens) & set(b.path_tokens))
    if common == 0:
        return 0.0
    longest = max(len(a.path_tokens), len(b.path_tokens), 1)
    return config.url_path_boost * min(1.0, common / longest)


def pairwise_similarity(a: EmbeddedTab, b: EmbeddedTab, config: ClusterConfig) -> float:
    """
    Score two tabs on content, domain and URL path.

    The result is not capped at 1: the boosts sit on top of the cosine so that
    borderline same-site pairs clear the merge threshold.
    """
    return (
        cosine_similarity(a.embedding, b.embedding)
        + domain_boost(a, b, config)
        + path_boost(a, b, config)
    )


def build_similarity_matrix(tabs: list[EmbeddedTab], config: ClusterConfig) -> np.ndarray:
    """
    Build the symmetric n x n similarity matrix.

    Each unordered pair is scored once; the diagonal is left at zero.

    Args:
        tabs: Embedded tabs
        config: Clustering configuration

    Returns:
        Array of shape (n, n)
    """
    n = len(tabs)
    matrix = np.zeros((n, n), dtype="float64")

    for i in range(n):
        for j in range(i + 1, n):
            score = pairwise_similarity(tabs[i], tabs[j], config)
            matrix[i, j] = score
            matrix[j, i] = score

    logger.debug("Built %dx%d similarity matrix", n, n)
    return matrix
