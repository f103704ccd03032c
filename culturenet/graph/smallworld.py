"""Watts-Strogatz small-world graph generator.

Builds a k-regular ring lattice and then rewires each lattice edge with a
fixed probability (Watts & Strogatz 1998). Rewiring walks the lattice in a
fixed order, offset by offset and node by node, and every step sees the
graph as left by the steps before it, so the enumeration order is part of
the algorithm and must not be shuffled.
"""

import logging

import numpy as np

from culturenet.config.experiment import GraphConfig
from culturenet.errors import InvalidParameter
from culturenet.graph.types import Graph

log = logging.getLogger(__name__)


def check_small_world_params(n: int, k: int, rewire_prob: float) -> None:
    """Reject malformed generator parameters before any work is done.

    Raises:
        InvalidParameter: If k is odd or < 2, n < k + 1, or rewire_prob is
            outside [0, 1].
    """
    if not isinstance(n, (int, np.integer)) or not isinstance(k, (int, np.integer)):
        raise InvalidParameter(f"n and k must be integers, got n={n!r}, k={k!r}")
    if k < 2 or k % 2 != 0:
        raise InvalidParameter(f"k must be even and >= 2, got {k}")
    if n < k + 1:
        raise InvalidParameter(f"n ({n}) must be >= k + 1 ({k + 1})")
    if not 0.0 <= rewire_prob <= 1.0:
        raise InvalidParameter(
            f"rewire_prob must be in [0, 1], got {rewire_prob}"
        )


def build_ring_lattice(n: int, k: int) -> np.ndarray:
    """Build the dense boolean adjacency of a k-regular ring lattice.

    Node i is joined to the k/2 nodes on either side of it on the ring,
    with indices wrapping modulo n.

    Args:
        n: Number of nodes.
        k: Lattice degree (even, >= 2, < n).

    Returns:
        Symmetric boolean matrix of shape (n, n) with a zero diagonal.
    """
    check_small_world_params(n, k, 0.0)
    adj = np.zeros((n, n), dtype=bool)
    nodes = np.arange(n)
    for offset in range(1, k // 2 + 1):
        clockwise = (nodes + offset) % n
        adj[nodes, clockwise] = True
        adj[clockwise, nodes] = True
    return adj


def rewire_lattice(
    adj: np.ndarray, k: int, rewire_prob: float, rng: np.random.Generator
) -> int:
    """Rewire a ring lattice in place.

    For each clockwise offset j = 1..k/2 and each node i in ascending order,
    with probability rewire_prob the edge (i, i+j mod n) is replaced by an
    edge from i to a node drawn uniformly from those that are neither i nor
    adjacent to i. The old edge is dropped before candidates are taken, so
    the old endpoint is itself a candidate. When no candidate exists the
    edge is put back where it was.

    One uniform draw is consumed per lattice edge whatever the outcome,
    followed by one integer draw for each edge selected for rewiring.

    Args:
        adj: Dense boolean adjacency from build_ring_lattice (mutated).
        k: Lattice degree the matrix was built with.
        rewire_prob: Per-edge rewiring probability.
        rng: numpy random Generator for reproducibility.

    Returns:
        Number of edges that ended up on a different endpoint. Redrawing
        the old endpoint does not count.
    """
    n = adj.shape[0]
    n_rewired = 0

    for offset in range(1, k // 2 + 1):
        for i in range(n):
            if rng.random() >= rewire_prob:
                continue

            old = (i + offset) % n
            adj[i, old] = adj[old, i] = False
            candidates = np.flatnonzero(~adj[i])
            candidates = candidates[candidates != i]
            if candidates.size == 0:
                adj[i, old] = adj[old, i] = True
                log.debug(
                    "Node %d has no replacement endpoint; "
                    "edge (%d, %d) left in place",
                    i, i, old,
                )
                continue

            new = int(candidates[rng.integers(candidates.size)])
            adj[i, new] = adj[new, i] = True
            if new != old:
                n_rewired += 1

    return n_rewired


def build_small_world(
    n: int,
    k: int,
    rewire_prob: float,
    rng_seed: int | None = None,
    *,
    rng: np.random.Generator | None = None,
) -> Graph:
    """Generate a Watts-Strogatz small-world graph.

    Args:
        n: Number of nodes (>= k + 1).
        k: Lattice degree (even, >= 2).
        rewire_prob: Per-edge rewiring probability in [0, 1].
        rng_seed: Seed for a fresh Generator. Ignored when rng is given.
        rng: Generator to draw from, for callers threading one stream
            through a whole run.

    Returns:
        Graph with n * k / 2 undirected edges, symmetric and self-loop free.

    Raises:
        InvalidParameter: If the parameters are malformed.
    """
    check_small_world_params(n, k, rewire_prob)
    if rng is None:
        rng = np.random.default_rng(rng_seed)

    adj = build_ring_lattice(n, k)
    n_rewired = rewire_lattice(adj, k, rewire_prob, rng)

    graph = Graph.from_dense(
        adj,
        k=k,
        rewire_prob=rewire_prob,
        generation_seed=rng_seed,
        n_rewired=n_rewired,
    )
    log.info(
        "Small-world graph built (n=%d, k=%d, p=%.3f, edges=%d, rewired=%d)",
        n, k, rewire_prob, graph.n_edges, n_rewired,
    )
    return graph


def generate_small_world(
    config: GraphConfig, rng: np.random.Generator
) -> Graph:
    """Generate a small-world graph from a GraphConfig using the run's Generator."""
    return build_small_world(config.n, config.k, config.rewire_prob, rng=rng)
