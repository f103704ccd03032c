"""Tests for local and mean clustering coefficients and the network summary."""

import math

import numpy as np
import pytest

from culturenet.graph import Graph, build_small_world
from culturenet.metrics import (
    clustering_coefficients,
    local_clustering,
    mean_clustering,
    network_summary,
)


class TestLocalClustering:
    """Single-node coefficients."""

    def test_fully_connected_neighbourhood(self) -> None:
        # Node 0 with three neighbours that are all joined to each other
        graph = Graph.from_edges(4, [(0, 1), (0, 2), (0, 3), (1, 2), (2, 3), (1, 3)])
        assert local_clustering(graph, 0) == 1.0

    def test_star_neighbourhood(self) -> None:
        graph = Graph.from_edges(5, [(0, 1), (0, 2), (0, 3), (0, 4)])
        assert local_clustering(graph, 0) == 0.0

    def test_partial_neighbourhood(self) -> None:
        # One of three neighbour pairs joined
        graph = Graph.from_edges(4, [(0, 1), (0, 2), (0, 3), (1, 2)])
        assert local_clustering(graph, 0) == pytest.approx(1 / 3)

    def test_degenerate_nodes_are_zero(self) -> None:
        graph = Graph.from_edges(3, [(0, 1)])
        assert local_clustering(graph, 0) == 0.0
        assert local_clustering(graph, 2) == 0.0

    def test_ring_lattice_value(self) -> None:
        # 3(k - 2) / (4(k - 1)) for a ring lattice
        lattice = build_small_world(20, 4, 0.0, rng_seed=0)
        for node in range(20):
            assert local_clustering(lattice, node) == pytest.approx(0.5)


class TestMeanClustering:
    """Graph-wide means and the vectorised coefficients."""

    @pytest.mark.parametrize("k,expected", [(4, 0.5), (6, 0.6), (10, 2 / 3)])
    def test_lattice_mean(self, k: int, expected: float) -> None:
        assert mean_clustering(build_small_world(50, k, 0.0, rng_seed=0)) == pytest.approx(expected)

    def test_vectorised_matches_local(self) -> None:
        graph = build_small_world(40, 6, 0.3, rng_seed=3)
        coeffs = clustering_coefficients(graph)
        expected = [local_clustering(graph, i) for i in range(graph.n)]
        assert np.allclose(coeffs, expected)

    def test_degenerate_nodes_count_as_zero(self) -> None:
        # Triangle plus an isolated node and a pendant edge
        graph = Graph.from_edges(6, [(0, 1), (1, 2), (0, 2), (4, 5)])
        assert mean_clustering(graph) == pytest.approx(3 / 6)

    def test_rewiring_lowers_clustering(self) -> None:
        lattice_c = mean_clustering(build_small_world(100, 6, 0.0, rng_seed=0))
        random_c = mean_clustering(build_small_world(100, 6, 1.0, rng_seed=0))
        assert lattice_c == pytest.approx(0.6)
        assert random_c < 0.2

    def test_empty_graph(self) -> None:
        assert math.isnan(mean_clustering(Graph.from_edges(0, [])))


class TestNetworkSummary:
    """Scalar statistics bundle."""

    def test_lattice_summary(self) -> None:
        summary = network_summary(build_small_world(40, 4, 0.0, rng_seed=0))
        assert summary.n == 40
        assert summary.n_edges == 80
        assert summary.mean_degree == pytest.approx(4.0)
        assert summary.min_degree == summary.max_degree == 4
        assert summary.mean_path_length == pytest.approx(210 / 39)
        assert summary.mean_clustering == pytest.approx(0.5)
        assert summary.connected

    def test_disconnected_summary(self) -> None:
        summary = network_summary(Graph.from_edges(4, [(0, 1), (2, 3)]))
        assert not summary.connected
        assert summary.mean_path_length == pytest.approx(1.0)
