"""Name tab clusters from title/domain keywords re-ranked against the cluster centroid."""

from __future__ import annotations

import logging
import re

import numpy as np

from cluster_tabs.models import Cluster, ClusterResult
from compute_embeddings.compute_embeddings import Embedder, EmbeddingError, embed_texts
from compute_embeddings.models import EmbeddedTab

logger = logging.getLogger(__name__)

MISC_LABEL = "MISC"
FALLBACK_LABEL = "GROUP"

GROUP_COLORS = ("blue", "green", "yellow", "red", "pink", "purple", "cyan", "orange", "grey")

DOMAIN_WEIGHT = 3
UNIGRAM_WEIGHT = 1
BIGRAM_WEIGHT = 2
TOP_CANDIDATES = 6
MIN_WORD_LENGTH = 3

GENERIC_DOMAIN_LABELS = frozenset({"com", "org", "net", "io", "co", "www"})

STOPWORDS = frozenset({
    "the", "and", "is", "in", "at", "of", "for", "to", "with", "on", "a", "an",
    "http", "https", "com", "www", "video", "watch", "google", "youtube",
    "org", "en", "this", "that", "your", "you", "are", "was", "were", "been",
    "have", "has", "had", "will", "would", "could", "should", "may", "might",
    "new", "latest", "home", "page", "site", "web", "online", "free", "best",
})

_WORD_SPLIT = re.compile(r"[\W_]+")


def extract_domain_label(domain: str) -> str:
    """Longest label of a domain that is not a TLD/subdomain filler (later labels win ties)."""
    label = ""
    for part in domain.split("."):
        if len(part) < MIN_WORD_LENGTH or part in GENERIC_DOMAIN_LABELS:
            continue
        if len(part) >= len(label):
            label = part
    return label


def tokenize_title(title: str) -> list[str]:
    """Lowercase title words without stopwords or short tokens."""
    return [
        word
        for word in _WORD_SPLIT.split(title.lower())
        if len(word) >= MIN_WORD_LENGTH and word not in STOPWORDS
    ]


def collect_name_candidates(cluster: Cluster, tabs: list[EmbeddedTab]) -> dict[str, int]:
    """
    Weighted label candidates in first-seen order.

    Domain labels score 3 per distinct member domain, title unigrams 1 and
    consecutive title bigrams 2, all in one table.
    """
    candidates: dict[str, int] = {}

    for domain in cluster.domains:
        if not domain:
            continue
        label = extract_domain_label(domain)
        if label:
            candidates[label] = candidates.get(label, 0) + DOMAIN_WEIGHT

    for idx in cluster.indices:
        words = tokenize_title(tabs[idx].title)

        for word in words:
            candidates[word] = candidates.get(word, 0) + UNIGRAM_WEIGHT

        for first, second in zip(words, words[1:]):
            bigram = f"{first} {second}"
            candidates[bigram] = candidates.get(bigram, 0) + BIGRAM_WEIGHT

    return candidates


def format_cluster_name(candidate: str) -> str:
    """Capitalize each word of a bigram; uppercase a single word."""
    if " " in candidate:
        return " ".join(word[:1].upper() + word[1:] for word in candidate.split(" "))
    return candidate.upper()


def generate_cluster_name(cluster: Cluster, tabs: list[EmbeddedTab], embedder: Embedder) -> str:
    """
    Pick the frequent candidate closest in meaning to the cluster centroid.

    The top candidates by weight are embedded in one batch and the best cosine
    to the centroid wins (earlier candidates win ties).

    Raises:
        EmbeddingError: If the candidate embeddings cannot be produced or do not
            match the dimension of the cluster centroid
    """
    candidates = collect_name_candidates(cluster, tabs)
    if not candidates:
        return FALLBACK_LABEL

    ranked = sorted(candidates.items(), key=lambda item: item[1], reverse=True)
    top = [word for word, _ in ranked[:TOP_CANDIDATES]]

    vectors = embed_texts(top, embedder)
    if vectors.shape[1] != cluster.centroid.shape[0]:
        raise EmbeddingError(
            f"Name embeddings have dimension {vectors.shape[1]}, "
            f"expected {cluster.centroid.shape[0]}"
        )
    scores = vectors @ cluster.centroid
    best = int(np.argmax(scores))

    logger.debug(
        "Name candidates %s -> '%s' (score %.3f)", top, top[best], float(scores[best])
    )
    return format_cluster_name(top[best])


def generate_cluster_metadata(
    clusters: list[Cluster],
    tabs: list[EmbeddedTab],
    embedder: Embedder,
) -> list[ClusterResult]:
    """
    Name and color every multi-tab cluster.

    Single-tab clusters are skipped (left ungrouped). Colors cycle through the
    palette by position in the returned list.
    """
    results = []
    for cluster in clusters:
        if cluster.size < 2:
            continue

        name = MISC_LABEL if cluster.is_misc else generate_cluster_name(cluster, tabs, embedder)
        results.append(
            ClusterResult(
                name=name,
                color=GROUP_COLORS[len(results) % len(GROUP_COLORS)],
                tab_ids=tuple(tabs[idx].id for idx in cluster.indices),
            )
        )

    return results
