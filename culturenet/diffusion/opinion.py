"""Opinion formation with paired compensating switches.

Each node holds a Pro or Anti opinion. Its dissimilarity d_i is the
fraction of its neighbours holding the other opinion. Every step visits all
nodes in random order and node i switches with probability d_i * omega, so
opinions drift towards local agreement and like-minded clusters form
(Salathe & Bonhoeffer 2008).

Every switch is paired with a compensating switch of another node that
holds the first node's new opinion, drawn at random and accepted with its
own probability d_j * omega, redrawing until one is accepted. The number of
Pro nodes therefore never changes, which separates the effect of clustering
from any drift in opinion frequency. Redraws are capped by max_retries, past
which NonTerminatingRetry is raised.

Dissimilarities are kept as per-node counts of opposite-opinion neighbours
and updated for the switching node and its neighbours only.
"""

import logging

import numpy as np

from culturenet.diffusion.types import Opinion, OpinionResult
from culturenet.errors import InvalidParameter, NonTerminatingRetry
from culturenet.graph.types import Graph

log = logging.getLogger(__name__)


def assign_opinions(
    n: int, pro_fraction: float, rng: np.random.Generator
) -> np.ndarray:
    """Give exactly round(pro_fraction * n) randomly chosen nodes a Pro opinion.

    Returns:
        int8 array of Opinion values, length n.
    """
    if not 0.0 <= pro_fraction <= 1.0:
        raise InvalidParameter(
            f"pro_fraction must be in [0, 1], got {pro_fraction}"
        )
    opinions = np.full(n, Opinion.ANTI, dtype=np.int8)
    n_pro = round(pro_fraction * n)
    opinions[rng.choice(n, size=n_pro, replace=False)] = Opinion.PRO
    return opinions


def opposite_counts(graph: Graph, opinions: np.ndarray) -> np.ndarray:
    """Number of neighbours holding the other opinion, per node."""
    pro = (opinions == Opinion.PRO).astype(np.int32)
    pro_neighbours = graph.adjacency @ pro
    return np.where(pro == 1, graph.degrees() - pro_neighbours, pro_neighbours)


def dissimilarity(graph: Graph, opinions: np.ndarray) -> np.ndarray:
    """Fraction of opposite-opinion neighbours per node (0 for isolated nodes)."""
    degrees = graph.degrees()
    return np.divide(
        opposite_counts(graph, opinions),
        degrees,
        out=np.zeros(graph.n, dtype=np.float64),
        where=degrees > 0,
    )


class _OpinionState:
    """Mutable opinion vector with incrementally maintained dissimilarity."""

    def __init__(self, graph: Graph, opinions: np.ndarray) -> None:
        self.graph = graph
        self.opinions = opinions
        self.degrees = graph.degrees()
        self.opposite = opposite_counts(graph, opinions)
        self.d = dissimilarity(graph, opinions)

    def flip(self, node: int) -> None:
        self.opinions[node] = 1 - self.opinions[node]
        nbrs = self.graph.neighbors(node)
        agrees = self.opinions[nbrs] == self.opinions[node]
        self.opposite[nbrs] += np.where(agrees, -1, 1)
        self.opposite[node] = self.degrees[node] - self.opposite[node]

        touched = np.append(nbrs, node)
        self.d[touched] = self.opposite[touched] / self.degrees[touched]

    def mean_dissimilarity(self) -> float:
        connected = self.degrees > 0
        if not connected.any():
            return 0.0
        return float(self.d[connected].mean())


def _compensate(
    state: _OpinionState,
    node: int,
    omega: float,
    max_retries: int,
    rng: np.random.Generator,
) -> int:
    """Flip one other holder of node's new opinion back; return the draws used."""
    target = state.opinions[node]
    candidates = np.flatnonzero(state.opinions == target)
    candidates = candidates[candidates != node]
    if not np.any(state.d[candidates] > 0):
        raise NonTerminatingRetry(node, int(target), 0)

    for attempt in range(1, max_retries + 1):
        j = int(candidates[rng.integers(candidates.size)])
        if rng.random() < state.d[j] * omega:
            state.flip(j)
            return attempt

    raise NonTerminatingRetry(node, int(target), max_retries)


def form_opinions(
    graph: Graph,
    opinions: np.ndarray,
    omega: float,
    rng: np.random.Generator,
    steps: int = 50,
    max_retries: int = 10_000,
) -> OpinionResult:
    """Run opinion formation from a given initial opinion vector.

    Args:
        graph: Fixed social graph (not mutated).
        opinions: Initial Opinion vector, length n. Copied, never mutated.
        omega: Opinion clustering strength in [0, 1].
        rng: Generator for visiting order and switch draws.
        steps: Number of steps.
        max_retries: Cap on compensating draws per switch.

    Returns:
        OpinionResult with the final opinions and per-step mean
        dissimilarity.

    Raises:
        InvalidParameter: If omega, steps, max_retries or the opinion
            vector are malformed.
        NonTerminatingRetry: If a switch cannot be compensated.
    """
    if not 0.0 <= omega <= 1.0:
        raise InvalidParameter(f"omega must be in [0, 1], got {omega}")
    if steps < 0:
        raise InvalidParameter(f"steps must be >= 0, got {steps}")
    if max_retries < 1:
        raise InvalidParameter(f"max_retries must be >= 1, got {max_retries}")
    opinions = np.array(opinions, dtype=np.int8)
    if opinions.shape != (graph.n,) or not np.isin(opinions, list(Opinion)).all():
        raise InvalidParameter(
            f"opinions must be a length-{graph.n} vector of Opinion values"
        )

    state = _OpinionState(graph, opinions)
    n_isolated = int((state.degrees == 0).sum())
    if n_isolated:
        log.info("%d isolated nodes will never switch opinion", n_isolated)

    trajectory = [state.mean_dissimilarity()]
    n_flips = 0
    n_draws = 0

    for _ in range(steps):
        for node in rng.permutation(graph.n):
            p = state.d[node] * omega
            if p > 0 and rng.random() < p:
                state.flip(node)
                n_draws += _compensate(state, int(node), omega, max_retries, rng)
                n_flips += 1
        trajectory.append(state.mean_dissimilarity())

    log.debug(
        "Opinion formation: %d paired flips, %d compensating draws, "
        "dissimilarity %.3f -> %.3f",
        n_flips, n_draws, trajectory[0], trajectory[-1],
    )
    return OpinionResult(
        opinions=state.opinions,
        dissimilarity=np.array(trajectory),
        n_flips=n_flips,
        n_compensating_draws=n_draws,
    )


def run_opinion_formation(
    graph: Graph,
    omega: float,
    pro_fraction: float,
    rng: np.random.Generator,
    steps: int = 50,
    max_retries: int = 10_000,
) -> OpinionResult:
    """Assign opinions at random with the given Pro fraction, then form opinions.

    See form_opinions for the dynamics and the raised errors.
    """
    opinions = assign_opinions(graph.n, pro_fraction, rng)
    return form_opinions(graph, opinions, omega, rng, steps, max_retries)
