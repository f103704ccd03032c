"""Small-world graph generation, the Graph type, and structural validation."""

from culturenet.graph.smallworld import (
    build_ring_lattice,
    build_small_world,
    check_small_world_params,
    generate_small_world,
    rewire_lattice,
)
from culturenet.graph.types import Graph
from culturenet.graph.validation import is_connected, validate_graph

__all__ = [
    "Graph",
    "build_ring_lattice",
    "build_small_world",
    "check_small_world_params",
    "generate_small_world",
    "is_connected",
    "rewire_lattice",
    "validate_graph",
]
