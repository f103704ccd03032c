"""Shortest-path metrics over unweighted undirected graphs.

shortest_path_length expands breadth-first by distance layers and stops as
soon as the target shows up among the frontier's neighbours. Every layer
adds at least one unvisited node, so the search ends within n - 1
expansions and a disconnected target comes back as UNREACHABLE instead of
looping.

mean_path_length needs every pair, so it runs one BFS per source through
scipy's csgraph (O(n * (n + m)) time, O(n^2) memory for the distance
matrix). That is the ceiling for the low-thousands node counts used here.
"""

import logging

import numpy as np
from scipy.sparse.csgraph import shortest_path

from culturenet.errors import InvalidParameter
from culturenet.graph.types import Graph

log = logging.getLogger(__name__)

# Distance reported for a target that cannot be reached from the source.
UNREACHABLE: int = -1


def _check_node(graph: Graph, node: int, name: str) -> None:
    if not 0 <= node < graph.n:
        raise InvalidParameter(f"{name} {node} outside 0..{graph.n - 1}")


def shortest_path_length(graph: Graph, source: int, target: int) -> int:
    """Number of edges on a shortest path from source to target.

    Args:
        graph: Graph to search.
        source: Start node.
        target: End node.

    Returns:
        Hop count (0 when source == target), or UNREACHABLE if the two
        nodes lie in different components.

    Raises:
        InvalidParameter: If either node is out of range.
    """
    _check_node(graph, source, "source")
    _check_node(graph, target, "target")
    if source == target:
        return 0

    visited = np.zeros(graph.n, dtype=bool)
    visited[source] = True
    frontier = np.array([source])
    distance = 0

    while frontier.size:
        distance += 1
        reached = np.concatenate([graph.neighbors(v) for v in frontier])
        if np.any(reached == target):
            return distance
        reached = np.unique(reached)
        frontier = reached[~visited[reached]]
        visited[frontier] = True

    return UNREACHABLE


def pairwise_distances(graph: Graph) -> np.ndarray:
    """All-pairs hop counts, shape (n, n), with np.inf for unreachable pairs."""
    return shortest_path(
        graph.adjacency, method="D", directed=False, unweighted=True
    )


def _upper_pair_distances(graph: Graph) -> np.ndarray:
    dist = pairwise_distances(graph)
    rows, cols = np.triu_indices(graph.n, k=1)
    return dist[rows, cols]


def mean_path_length(graph: Graph) -> float:
    """Mean shortest-path length over all unordered node pairs.

    Pairs in different components are left out of the mean and reported
    with a warning.

    Returns:
        Mean hop count, or nan if no pair is reachable (including n < 2).
    """
    pair_dist = _upper_pair_distances(graph)
    finite = np.isfinite(pair_dist)
    n_unreachable = int(pair_dist.size - finite.sum())
    if n_unreachable:
        log.warning(
            "%d of %d node pairs unreachable; excluded from mean path length",
            n_unreachable, pair_dist.size,
        )
    if not finite.any():
        return float("nan")
    return float(pair_dist[finite].mean())


def path_length_distribution(graph: Graph) -> np.ndarray:
    """Histogram of pair distances.

    Returns:
        Integer array where entry d counts the unordered pairs at distance
        d (entry 0 is always 0). Unreachable pairs are not counted.
    """
    pair_dist = _upper_pair_distances(graph)
    finite = pair_dist[np.isfinite(pair_dist)].astype(np.int64)
    if finite.size == 0:
        return np.zeros(1, dtype=np.int64)
    return np.bincount(finite)
