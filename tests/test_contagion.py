"""Tests for simple and complex contagion."""

import numpy as np
import pytest

from culturenet.diffusion import UpdateDiscipline, neighbourhood_seed, run_contagion
from culturenet.errors import InvalidParameter
from culturenet.graph import Graph, build_small_world


def _complete_graph(n: int) -> Graph:
    return Graph.from_edges(n, [(i, j) for i in range(n) for j in range(i + 1, n)])


class TestSimpleContagion:
    """Threshold 1: one infected neighbour is enough."""

    @pytest.mark.parametrize("discipline", list(UpdateDiscipline))
    def test_complete_graph_saturates_in_one_step(self, discipline) -> None:
        series = list(
            run_contagion(_complete_graph(10), 1, [0], 20, np.random.default_rng(0), discipline)
        )
        assert series == [1.0]

    @pytest.mark.parametrize("discipline", list(UpdateDiscipline))
    def test_lattice_saturates(self, discipline) -> None:
        graph = build_small_world(30, 4, 0.0, rng_seed=1)
        series = list(run_contagion(graph, 1, [0], 100, np.random.default_rng(1), discipline))
        assert series[-1] == 1.0
        assert len(series) < 100

    def test_batch_spreads_one_layer_per_step(self) -> None:
        ring = build_small_world(20, 2, 0.0, rng_seed=0)
        series = list(
            run_contagion(ring, 1, [0], 3, np.random.default_rng(0), UpdateDiscipline.BATCH)
        )
        assert series == pytest.approx([3 / 20, 5 / 20, 7 / 20])

    def test_streaming_chains_within_a_step(self) -> None:
        # A node infected early in the visiting order passes it on later in
        # the same step, so one step can cover more than the seed's layer
        ring = build_small_world(20, 2, 0.0, rng_seed=0)
        first = [
            next(run_contagion(ring, 1, [0], 1, np.random.default_rng(seed)))
            for seed in range(20)
        ]
        assert min(first) >= 3 / 20
        assert max(first) > 3 / 20

    def test_series_is_monotone(self) -> None:
        graph = build_small_world(50, 4, 0.05, rng_seed=2)
        series = list(run_contagion(graph, 1, [10], 40, np.random.default_rng(2)))
        assert all(a <= b for a, b in zip(series, series[1:]))


class TestComplexContagion:
    """Threshold 2: needs two infected neighbours."""

    def test_isolated_seeds_never_spread(self) -> None:
        # Nodes 0 and 10 share no neighbours on a k=4 ring of 20
        lattice = build_small_world(20, 4, 0.0, rng_seed=0)
        series = list(run_contagion(lattice, 2, [0, 10], 30, np.random.default_rng(3)))
        assert len(series) == 30
        assert all(v == pytest.approx(0.1) for v in series)

    def test_neighbourhood_seed_spreads_on_lattice(self) -> None:
        lattice = build_small_world(20, 4, 0.0, rng_seed=0)
        seeds = neighbourhood_seed(lattice, 0)
        series = list(run_contagion(lattice, 2, seeds, 50, np.random.default_rng(4)))
        assert series[-1] == 1.0

    def test_neighbourhood_seed_contents(self) -> None:
        lattice = build_small_world(20, 4, 0.0, rng_seed=0)
        assert sorted(neighbourhood_seed(lattice, 0).tolist()) == [0, 1, 2, 18, 19]

    def test_threshold_above_degree_never_spreads(self) -> None:
        lattice = build_small_world(20, 4, 0.0, rng_seed=0)
        series = list(run_contagion(lattice, 5, neighbourhood_seed(lattice, 0), 10, np.random.default_rng(0)))
        assert all(v == pytest.approx(5 / 20) for v in series)


class TestContagionContract:
    """Eager validation, lazy single-use output."""

    def test_invalid_threshold_fails_at_call(self) -> None:
        with pytest.raises(InvalidParameter, match="n_threshold"):
            run_contagion(_complete_graph(4), 0, [0], 5, np.random.default_rng(0))

    def test_negative_steps_fails_at_call(self) -> None:
        with pytest.raises(InvalidParameter, match="steps"):
            run_contagion(_complete_graph(4), 1, [0], -1, np.random.default_rng(0))

    def test_out_of_range_seed(self) -> None:
        with pytest.raises(InvalidParameter, match="Seed"):
            run_contagion(_complete_graph(4), 1, [4], 5, np.random.default_rng(0))

    def test_not_restartable(self) -> None:
        series = run_contagion(_complete_graph(6), 1, [0], 5, np.random.default_rng(0))
        assert list(series) == [1.0]
        assert list(series) == []

    def test_fully_seeded_yields_nothing(self) -> None:
        series = run_contagion(_complete_graph(3), 1, [0, 1, 2], 5, np.random.default_rng(0))
        assert list(series) == []

    def test_zero_steps(self) -> None:
        assert list(run_contagion(_complete_graph(4), 1, [0], 0, np.random.default_rng(0))) == []

    def test_reproducible(self) -> None:
        graph = build_small_world(60, 4, 0.1, rng_seed=5)
        a = list(run_contagion(graph, 2, neighbourhood_seed(graph, 3), 30, np.random.default_rng(9)))
        b = list(run_contagion(graph, 2, neighbourhood_seed(graph, 3), 30, np.random.default_rng(9)))
        assert a == b
