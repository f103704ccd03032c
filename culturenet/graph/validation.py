"""Structural validation for generated graphs.

Checks the invariants every Graph handed to the metrics and the diffusion
engine must satisfy: binary entries, symmetry, no self-loops, and (for
small-world graphs) the n * k / 2 edge count that rewiring conserves.
"""

import logging

import numpy as np
from scipy.sparse.csgraph import connected_components

from culturenet.graph.types import Graph

log = logging.getLogger(__name__)


def validate_graph(graph: Graph, expected_edges: int | None = None) -> list[str]:
    """Validate a graph against its structural invariants.

    Checks (cheapest first):
    1. Square adjacency matching n
    2. No self-loops
    3. Binary entries
    4. Symmetry
    5. Edge count (expected_edges, or n * k / 2 for lattice-derived graphs)

    Args:
        graph: Graph to check.
        expected_edges: Undirected edge count to require. Defaults to
            n * k / 2 when the graph records a lattice degree.

    Returns:
        List of error strings (empty = valid graph).
    """
    errors: list[str] = []
    adj = graph.adjacency

    if adj.shape != (graph.n, graph.n):
        errors.append(f"Adjacency shape {adj.shape} does not match n={graph.n}")
        return errors

    diag_sum = adj.diagonal().sum()
    if diag_sum != 0:
        errors.append(f"Self-loops detected: diagonal sum = {diag_sum}")

    if adj.nnz and not np.all(adj.data == 1):
        errors.append("Adjacency has non-binary entries")

    asymmetric = (adj != adj.T).nnz
    if asymmetric:
        errors.append(f"Adjacency is not symmetric: {asymmetric} mismatched entries")

    if expected_edges is None and graph.k:
        expected_edges = graph.n * graph.k // 2
    if expected_edges is not None and graph.n_edges != expected_edges:
        errors.append(
            f"Edge count {graph.n_edges} != expected {expected_edges}"
        )

    return errors


def is_connected(graph: Graph) -> bool:
    """True if every node can reach every other node."""
    if graph.n == 0:
        return True
    n_components, _ = connected_components(graph.adjacency, directed=False)
    return n_components == 1
