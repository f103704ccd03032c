"""Read-only network metrics: shortest paths, clustering, and summaries."""

from culturenet.metrics.clustering import (
    clustering_coefficients,
    local_clustering,
    mean_clustering,
)
from culturenet.metrics.paths import (
    UNREACHABLE,
    mean_path_length,
    pairwise_distances,
    path_length_distribution,
    shortest_path_length,
)
from culturenet.metrics.summary import NetworkSummary, network_summary

__all__ = [
    "NetworkSummary",
    "UNREACHABLE",
    "clustering_coefficients",
    "local_clustering",
    "mean_clustering",
    "mean_path_length",
    "network_summary",
    "pairwise_distances",
    "path_length_distribution",
    "shortest_path_length",
]
