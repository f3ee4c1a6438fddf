"""Multi-pass handling of single-tab clusters left over by agglomerative clustering.

Strategy:
1. cluster singletons with each other
2. absorb the rest into the closest multi-tab cluster
3. bundle true orphans into a MISC cluster only when the tab strip is over capacity
"""

from __future__ import annotations

import logging

import numpy as np

from cluster_tabs.agglomerative import compute_centroid, merge_clusters, stack_embeddings
from cluster_tabs.config import ClusterConfig
from cluster_tabs.models import Cluster
from cluster_tabs.similarity import cosine_similarity
from compute_embeddings.models import EmbeddedTab

logger = logging.getLogger(__name__)


def consolidate_singletons(
    clusters: list[Cluster],
    tabs: list[EmbeddedTab],
    capacity: int,
    config: ClusterConfig,
) -> list[Cluster]:
    """
    Regroup, absorb or bundle single-tab clusters.

    Args:
        clusters: Output of agglomerative clustering
        tabs: Embedded tabs the cluster indices refer to
        capacity: Group capacity of the tab strip
        config: Clustering configuration

    Returns:
        Multi-tab clusters first, followed by either the remaining singletons
        or a single MISC cluster
    """
    singletons = [c for c in clusters if c.size == 1]
    multi_clusters = [c for c in clusters if c.size > 1]

    if not singletons:
        return clusters

    logger.info("Processing %d singleton(s)", len(singletons))
    embeddings = stack_embeddings(tabs)

    # Pass 1: cluster singletons with each other
    singleton_groups = cluster_singletons_together(singletons, embeddings, config)
    new_multi = [c for c in singleton_groups if c.size > 1]
    orphans = [c for c in singleton_groups if c.size == 1]

    multi_clusters = multi_clusters + new_multi
    logger.info("Pass 1: %d new groups formed, %d orphans remain", len(new_multi), len(orphans))

    # Pass 2: absorb orphans into existing clusters
    final_orphans = []
    for orphan in orphans:
        idx, similarity = find_closest_cluster(orphan, multi_clusters)
        if idx >= 0 and similarity >= config.singleton_absorption_threshold:
            multi_clusters[idx] = merge_clusters(multi_clusters[idx], orphan, embeddings)
            logger.debug("Pass 2: absorbed orphan (sim: %.3f)", similarity)
        else:
            final_orphans.append(orphan)

    # Pass 3: remaining orphans
    if not final_orphans:
        return multi_clusters

    logger.info("%d true orphan(s) remain", len(final_orphans))

    if len(multi_clusters) + len(final_orphans) <= capacity:
        return multi_clusters + final_orphans

    if len(final_orphans) >= config.min_orphans_for_misc:
        logger.info("Creating MISC group for %d orphans", len(final_orphans))
        return multi_clusters + [create_misc_cluster(final_orphans, embeddings)]

    return multi_clusters + final_orphans


def cluster_singletons_together(
    singletons: list[Cluster],
    embeddings: np.ndarray,
    config: ClusterConfig,
) -> list[Cluster]:
    """
    Greedily group singletons in input order.

    Each singleton joins the best-scoring group formed so far (centroid cosine
    plus the domain boost when its domain is already in the group) if the
    score reaches ``singleton_cluster_threshold``; otherwise it starts a new group.
    """
    if len(singletons) <= 1:
        return list(singletons)

    groups: list[Cluster] = []
    for singleton in singletons:
        best_idx, best_score = -1, -1.0
        domain = singleton.domains[0] if singleton.domains else ""

        for idx, group in enumerate(groups):
            score = cosine_similarity(singleton.centroid, group.centroid)
            if domain in group.domains:
                score += config.domain_affinity_boost
            if score > best_score:
                best_idx, best_score = idx, score

        if best_idx >= 0 and best_score >= config.singleton_cluster_threshold:
            groups[best_idx] = merge_clusters(groups[best_idx], singleton, embeddings)
        else:
            groups.append(singleton)

    return groups


def find_closest_cluster(singleton: Cluster, clusters: list[Cluster]) -> tuple[int, float]:
    """Index and raw centroid cosine of the closest cluster; (-1, -1.0) when there are none."""
    best_idx, best_sim = -1, -1.0
    for idx, cluster in enumerate(clusters):
        sim = cosine_similarity(singleton.centroid, cluster.centroid)
        if sim > best_sim:
            best_idx, best_sim = idx, sim
    return best_idx, best_sim


def create_misc_cluster(orphans: list[Cluster], embeddings: np.ndarray) -> Cluster:
    """Bundle orphans into one terminal catch-all cluster."""
    indices = tuple(sorted(idx for orphan in orphans for idx in orphan.indices))
    domains: list[str] = []
    for orphan in orphans:
        for domain in orphan.domains:
            if domain not in domains:
                domains.append(domain)

    return Cluster(
        indices=indices,
        domains=tuple(domains),
        centroid=compute_centroid(embeddings[list(indices)]),
        is_misc=True,
    )
