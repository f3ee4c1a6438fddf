"""Bottom-up agglomerative clustering with average linkage."""

from __future__ import annotations

import logging
import math

import numpy as np

from cluster_tabs.config import ClusterConfig
from cluster_tabs.models import Cluster
from compute_embeddings.models import EmbeddedTab

logger = logging.getLogger(__name__)

MIN_THRESHOLD_SCALE = 0.85
THRESHOLD_STEP_PER_TAB = 0.01
THRESHOLD_PIVOT_TABS = 10


def stack_embeddings(tabs: list[EmbeddedTab]) -> np.ndarray:
    """Stack tab embeddings into an (n, dim) array indexed like ``tabs``."""
    return np.vstack([tab.embedding for tab in tabs])


def compute_centroid(embeddings: np.ndarray) -> np.ndarray:
    """Normalized mean of embedding rows; a single row is returned as-is."""
    if len(embeddings) == 1:
        return embeddings[0].copy()

    centroid = embeddings.sum(axis=0)
    magnitude = np.linalg.norm(centroid)
    if magnitude > 0:
        centroid = centroid / magnitude
    return centroid


def singleton_clusters(tabs: list[EmbeddedTab]) -> list[Cluster]:
    """One cluster per tab, in input order."""
    return [
        Cluster(indices=(idx,), domains=(tab.domain,), centroid=tab.embedding.copy())
        for idx, tab in enumerate(tabs)
    ]


def merge_clusters(a: Cluster, b: Cluster, embeddings: np.ndarray, is_misc: bool = False) -> Cluster:
    """Union two clusters and recompute the centroid from every member embedding."""
    indices = tuple(sorted(a.indices + b.indices))
    domains = a.domains + tuple(d for d in b.domains if d not in a.domains)
    return Cluster(
        indices=indices,
        domains=domains,
        centroid=compute_centroid(embeddings[list(indices)]),
        is_misc=is_misc,
    )


def calculate_group_capacity(screen_width: int, tab_count: int, config: ClusterConfig) -> int:
    """
    Estimate how many groups fit in the tab strip.

    The screen-based estimate is clamped to [min_groups, max_groups] and then
    capped at half the tab count (never below 2).
    """
    estimated = math.floor(screen_width / config.pixels_per_group)
    clamped = max(config.min_groups, min(config.max_groups, estimated))
    max_for_tabs = max(2, math.ceil(tab_count / 2))
    return min(clamped, max_for_tabs)


def compute_adaptive_threshold(tab_count: int, config: ClusterConfig) -> float:
    """Merge threshold, relaxed by 1% per tab above 10 down to 85% of the base."""
    scale = max(
        MIN_THRESHOLD_SCALE,
        1 - (tab_count - THRESHOLD_PIVOT_TABS) * THRESHOLD_STEP_PER_TAB,
    )
    return config.content_similarity_threshold * scale


def average_linkage(a: Cluster, b: Cluster, matrix: np.ndarray) -> float:
    """Mean item-level similarity over every cross-cluster pair."""
    block = matrix[np.ix_(a.indices, b.indices)]
    if block.size == 0:
        return 0.0
    return float(block.mean())


def find_best_merge(clusters: list[Cluster], matrix: np.ndarray) -> tuple[int, int, float]:
    """
    Find the pair of clusters with the highest average linkage.

    Ties keep the first pair in (i, j) scan order.

    Returns:
        Tuple of (i, j, similarity) with i < j; (-1, -1, -inf) for fewer than two clusters
    """
    best_i, best_j, best_sim = -1, -1, -math.inf

    for i in range(len(clusters)):
        for j in range(i + 1, len(clusters)):
            sim = average_linkage(clusters[i], clusters[j], matrix)
            if sim > best_sim:
                best_i, best_j, best_sim = i, j, sim

    return best_i, best_j, best_sim


def agglomerative_clustering(
    tabs: list[EmbeddedTab],
    matrix: np.ndarray,
    target_groups: int,
    config: ClusterConfig,
) -> list[Cluster]:
    """
    Merge singleton clusters until the target count or the similarity floor is reached.

    A merge below the adaptive threshold is never forced, even when more than
    ``target_groups`` clusters remain.

    Args:
        tabs: Embedded tabs
        matrix: Item-level similarity matrix
        target_groups: Stop once this many clusters remain
        config: Clustering configuration

    Returns:
        Clusters; merged clusters are appended after the untouched ones
    """
    embeddings = stack_embeddings(tabs)
    clusters = singleton_clusters(tabs)

    threshold = compute_adaptive_threshold(len(tabs), config)
    logger.info("Adaptive threshold: %.3f, target: %d groups", threshold, target_groups)

    while len(clusters) > target_groups:
        i, j, similarity = find_best_merge(clusters, matrix)
        if i < 0:
            break

        if similarity < threshold:
            logger.info("Stopping: best similarity %.3f < threshold %.3f", similarity, threshold)
            break

        merged = merge_clusters(clusters[i], clusters[j], embeddings)
        clusters = [c for idx, c in enumerate(clusters) if idx not in (i, j)]
        clusters.append(merged)

        logger.debug("Merged clusters (sim: %.3f), now %d groups", similarity, len(clusters))

    return clusters
