"""Local and mean clustering coefficients.

A node's clustering coefficient is the fraction of its neighbour pairs that
are themselves joined. Nodes with fewer than two neighbours have no pairs;
they are given a coefficient of 0 and still count towards the mean.
"""

import logging

import numpy as np

from culturenet.graph.types import Graph

log = logging.getLogger(__name__)


def local_clustering(graph: Graph, node: int) -> float:
    """Clustering coefficient of a single node.

    Counts edges among all unordered pairs of the node's neighbours and
    divides by k_i * (k_i - 1) / 2.

    Args:
        graph: Graph to inspect.
        node: Node index.

    Returns:
        Coefficient in [0, 1]; 0.0 for nodes of degree < 2.
    """
    neighbors = graph.neighbors(node)
    k_i = neighbors.size
    if k_i < 2:
        log.debug("Node %d has degree %d; clustering set to 0", node, k_i)
        return 0.0

    # Each neighbour-neighbour edge appears twice in the submatrix
    links = graph.adjacency[neighbors][:, neighbors].sum() / 2
    return float(links / (k_i * (k_i - 1) / 2))


def clustering_coefficients(graph: Graph) -> np.ndarray:
    """Clustering coefficient of every node, shape (n,).

    Uses the sparse triangle count: row i of (A @ A) * A sums to twice the
    number of triangles through i.
    """
    adj = graph.adjacency
    triangles = np.asarray((adj @ adj).multiply(adj).sum(axis=1)).ravel() / 2
    degrees = graph.degrees().astype(np.float64)
    pairs = degrees * (degrees - 1) / 2

    coeffs = np.zeros(graph.n, dtype=np.float64)
    defined = pairs > 0
    coeffs[defined] = triangles[defined] / pairs[defined]

    n_degenerate = int(graph.n - defined.sum())
    if n_degenerate:
        log.info(
            "%d nodes with degree < 2 given clustering 0", n_degenerate
        )
    return coeffs


def mean_clustering(graph: Graph) -> float:
    """Mean clustering coefficient over all nodes (degree < 2 counted as 0)."""
    if graph.n == 0:
        return float("nan")
    return float(clustering_coefficients(graph).mean())
