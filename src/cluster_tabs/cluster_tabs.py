"""Group tabs into named clusters."""

from __future__ import annotations

import logging
import time
from typing import Any

from cluster_tabs.agglomerative import agglomerative_clustering, calculate_group_capacity
from cluster_tabs.config import ClusterConfig
from cluster_tabs.consolidate import consolidate_singletons
from cluster_tabs.models import ClusterResult
from cluster_tabs.similarity import build_similarity_matrix
from compute_embeddings.compute_embeddings import Embedder, compute_embeddings
from extract_content.extract_content import enrich_tabs
from name_clusters.name_clusters import generate_cluster_metadata

logger = logging.getLogger(__name__)

MIN_TABS_TO_CLUSTER = 3
DEFAULT_SCREEN_WIDTH = 1920


def cluster_tabs(
    tabs: list[Any],
    embedder: Embedder,
    config: ClusterConfig,
    screen_width: int = DEFAULT_SCREEN_WIDTH,
    fetch_content: bool = False,
) -> list[ClusterResult]:
    """
    Cluster tabs and name the resulting groups.

    Fewer than three tabs are never clustered. An embedding failure aborts the
    whole run; no partial grouping is returned.

    Args:
        tabs: Tab dicts or objects with id, title, url and optional content
        embedder: Batch text embedder
        config: Clustering configuration
        screen_width: Window width in pixels, used to size the group budget
        fetch_content: Download page content for tabs without a content blob

    Returns:
        List of ClusterResult; tabs not listed stay ungrouped

    Raises:
        EmbeddingError: If tab or name embeddings cannot be produced
    """
    start = time.perf_counter()
    logger.info("Clustering %d tabs (screen: %dpx)", len(tabs), screen_width)

    if len(tabs) < MIN_TABS_TO_CLUSTER:
        logger.info("Too few tabs, skipping clustering")
        return []

    enriched = enrich_tabs(tabs, fetch=fetch_content)
    embedded = compute_embeddings(enriched, embedder)

    matrix = build_similarity_matrix(embedded, config)

    capacity = calculate_group_capacity(screen_width, len(embedded), config)
    clusters = agglomerative_clustering(embedded, matrix, capacity, config)
    clusters = consolidate_singletons(clusters, embedded, capacity, config)

    results = generate_cluster_metadata(clusters, embedded, embedder)

    logger.info(
        "Created %d groups from %d tabs in %.0fms",
        len(results),
        len(tabs),
        (time.perf_counter() - start) * 1000,
    )
    return results
