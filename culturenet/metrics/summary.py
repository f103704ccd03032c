"""Scalar network statistics for a generated graph."""

from dataclasses import dataclass

from culturenet.graph.types import Graph
from culturenet.graph.validation import is_connected
from culturenet.metrics.clustering import mean_clustering
from culturenet.metrics.paths import mean_path_length


@dataclass(frozen=True, slots=True)
class NetworkSummary:
    """Structural statistics reported for one graph."""

    n: int
    n_edges: int
    mean_degree: float
    min_degree: int
    max_degree: int
    mean_path_length: float  # nan if no pair is reachable
    mean_clustering: float
    connected: bool


def network_summary(graph: Graph) -> NetworkSummary:
    """Compute the degree, path-length and clustering statistics of a graph."""
    degrees = graph.degrees()
    return NetworkSummary(
        n=graph.n,
        n_edges=graph.n_edges,
        mean_degree=float(degrees.mean()) if graph.n else float("nan"),
        min_degree=int(degrees.min()) if graph.n else 0,
        max_degree=int(degrees.max()) if graph.n else 0,
        mean_path_length=mean_path_length(graph),
        mean_clustering=mean_clustering(graph),
        connected=is_connected(graph),
    )
