"""Tests for cluster_tabs.similarity module."""

import itertools

import numpy as np
import pytest

from cluster_tabs.config import ClusterConfig
from cluster_tabs.similarity import (
    build_similarity_matrix,
    domain_boost,
    pairwise_similarity,
    path_boost,
)

CONFIG = ClusterConfig()


@pytest.fixture
def tabs(make_tab, make_vector, make_basis):
    return [
        make_tab(1, "https://reactjs.org/docs/hooks-intro", make_vector((0, 1.0), (1, 0.2))),
        make_tab(2, "https://legacy.reactjs.org/docs/state-and-lifecycle", make_vector((0, 1.0), (2, 0.3))),
        make_tab(3, "https://reactjs.org/docs/hooks-intro/hooks", make_basis(0)),
        make_tab(4, "https://weather.example.net/today", make_basis(3)),
        make_tab(5, "not a url", make_vector((3, 1.0), (4, 1.0))),
    ]


class TestDomainBoost:
    def test_same_domain_full_boost(self, tabs) -> None:
        assert domain_boost(tabs[0], tabs[2], CONFIG) == pytest.approx(0.15)

    def test_same_base_domain_half_boost(self, tabs) -> None:
        assert domain_boost(tabs[0], tabs[1], CONFIG) == pytest.approx(0.075)

    def test_unrelated_domains_no_boost(self, tabs) -> None:
        assert domain_boost(tabs[0], tabs[3], CONFIG) == 0.0


class TestPathBoost:
    def test_scaled_by_longest_token_list(self, tabs) -> None:
        # (docs, hooks, intro) vs (docs, state, and, lifecycle): 1 shared of 4
        assert path_boost(tabs[0], tabs[1], CONFIG) == pytest.approx(0.08 / 4)

    def test_duplicate_tokens_count_once(self, tabs) -> None:
        # (docs, hooks, intro) vs (docs, hooks, intro, hooks): 3 shared of 4
        assert path_boost(tabs[0], tabs[2], CONFIG) == pytest.approx(0.08 * 3 / 4)
        assert path_boost(tabs[2], tabs[0], CONFIG) == pytest.approx(0.08 * 3 / 4)

    def test_no_common_tokens(self, tabs) -> None:
        assert path_boost(tabs[0], tabs[3], CONFIG) == 0.0


class TestPairwiseSimilarity:
    def test_sums_signals(self, tabs) -> None:
        cosine = float(np.dot(tabs[0].embedding, tabs[2].embedding))
        expected = cosine + 0.15 + 0.08 * 3 / 4
        assert pairwise_similarity(tabs[0], tabs[2], CONFIG) == pytest.approx(expected)

    def test_can_exceed_one(self, tabs) -> None:
        assert pairwise_similarity(tabs[0], tabs[2], CONFIG) > 1.0

    def test_symmetric(self, tabs) -> None:
        for a, b in itertools.combinations(tabs, 2):
            assert pairwise_similarity(a, b, CONFIG) == pytest.approx(pairwise_similarity(b, a, CONFIG))

    def test_empty_domains_match(self, tabs, make_tab, make_basis) -> None:
        other = make_tab(6, "also not a url", make_basis(5))
        assert pairwise_similarity(tabs[4], other, CONFIG) == pytest.approx(0.15)


class TestBuildSimilarityMatrix:
    def test_matrix_matches_pairwise(self, tabs) -> None:
        matrix = build_similarity_matrix(tabs, CONFIG)

        assert matrix.shape == (5, 5)
        np.testing.assert_allclose(matrix, matrix.T)
        np.testing.assert_allclose(np.diag(matrix), 0.0)
        assert matrix[0, 3] == pytest.approx(pairwise_similarity(tabs[0], tabs[3], CONFIG))

    def test_empty_input(self) -> None:
        assert build_similarity_matrix([], CONFIG).shape == (0, 0)
