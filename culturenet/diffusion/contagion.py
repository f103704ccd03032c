"""Simple and complex contagion over a fixed graph.

A Susceptible node becomes Infected once at least n_threshold of its
neighbours are Infected: n_threshold = 1 is simple contagion, 2 or more is
complex contagion (Centola & Macy 2007). Nobody recovers, so the all-Infected
state is absorbing and the run stops there.
"""

import logging
from collections.abc import Iterable, Iterator

import numpy as np

from culturenet.diffusion.types import NodeState, UpdateDiscipline, as_seed_array
from culturenet.errors import InvalidParameter
from culturenet.graph.types import Graph

log = logging.getLogger(__name__)


def neighbourhood_seed(graph: Graph, node: int) -> np.ndarray:
    """A node together with all of its neighbours.

    Complex contagion cannot start from a single node, so runs are usually
    seeded with a whole neighbourhood.
    """
    return np.concatenate(([node], graph.neighbors(node))).astype(np.int64)


def _streaming_step(
    graph: Graph, state: np.ndarray, n_threshold: int, rng: np.random.Generator
) -> int:
    """Visit Susceptible nodes in random order, flipping in place."""
    infected = state == NodeState.INFECTED
    order = rng.permutation(np.flatnonzero(~infected))
    flipped = 0
    for node in order:
        if infected[graph.neighbors(node)].sum() >= n_threshold:
            infected[node] = True
            flipped += 1
    state[infected] = NodeState.INFECTED
    return flipped


def _batch_step(graph: Graph, state: np.ndarray, n_threshold: int) -> int:
    """Flip every Susceptible node whose snapshot count reaches the threshold."""
    infected = (state == NodeState.INFECTED).astype(np.int32)
    counts = graph.adjacency @ infected
    flips = (infected == 0) & (counts >= n_threshold)
    state[flips] = NodeState.INFECTED
    return int(flips.sum())


def run_contagion(
    graph: Graph,
    n_threshold: int,
    seed_infected: Iterable[int],
    steps: int,
    rng: np.random.Generator,
    discipline: UpdateDiscipline = UpdateDiscipline.STREAMING,
) -> Iterator[float]:
    """Run threshold contagion and stream the infected fraction per step.

    Parameters are checked when this function is called. The returned
    iterator is lazy and single-use: it yields the fraction of Infected
    nodes after each step, for at most ``steps`` steps, and stops early once
    every node is Infected.

    Args:
        graph: Fixed contact graph (not mutated).
        n_threshold: Infected neighbours needed to flip a Susceptible node.
        seed_infected: Nodes Infected before the first step.
        steps: Maximum number of steps.
        rng: Generator for the per-step visiting order.
        discipline: STREAMING (default) or BATCH updates.

    Returns:
        Iterator over per-step infected fractions.

    Raises:
        InvalidParameter: If n_threshold < 1, steps < 0, or a seed is out
            of range.
    """
    if n_threshold < 1:
        raise InvalidParameter(f"n_threshold must be >= 1, got {n_threshold}")
    if steps < 0:
        raise InvalidParameter(f"steps must be >= 0, got {steps}")
    seeds = as_seed_array(graph, seed_infected)

    state = np.full(graph.n, NodeState.SUSCEPTIBLE, dtype=np.int8)
    state[seeds] = NodeState.INFECTED
    log.debug(
        "Contagion: n=%d, threshold=%d, seeds=%d, discipline=%s",
        graph.n, n_threshold, seeds.size, discipline.value,
    )
    return _contagion_steps(graph, state, n_threshold, steps, rng, discipline)


def _contagion_steps(
    graph: Graph,
    state: np.ndarray,
    n_threshold: int,
    steps: int,
    rng: np.random.Generator,
    discipline: UpdateDiscipline,
) -> Iterator[float]:
    n_infected = int((state == NodeState.INFECTED).sum())
    for step in range(steps):
        if n_infected == graph.n:
            log.debug("All nodes infected before step %d", step)
            return
        if discipline is UpdateDiscipline.STREAMING:
            n_infected += _streaming_step(graph, state, n_threshold, rng)
        else:
            n_infected += _batch_step(graph, state, n_threshold)
        yield n_infected / graph.n
