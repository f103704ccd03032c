"""Graph data structures for small-world generation and the diffusion engine."""

from collections.abc import Iterable
from dataclasses import dataclass

import numpy as np
import scipy.sparse


@dataclass(frozen=True)
class Graph:
    """Immutable undirected graph over nodes 0..n-1.

    Holds a symmetric, zero-diagonal binary CSR adjacency matrix alongside
    the generation provenance. CSR keeps each node's neighbours contiguous in
    ``indices[indptr[i]:indptr[i + 1]]``, so neighbour queries are O(degree)
    slices with no copying. Uses frozen=True but omits slots=True since
    numpy/scipy objects don't interact well with __slots__.
    """

    adjacency: scipy.sparse.csr_matrix  # symmetric binary adjacency (n x n)
    n: int  # number of nodes
    k: int = 0  # lattice degree before rewiring (0 for hand-built graphs)
    rewire_prob: float = 0.0
    generation_seed: int | None = None
    n_rewired: int = 0  # edges moved to a new endpoint during construction

    @classmethod
    def from_dense(cls, matrix: np.ndarray, **provenance) -> "Graph":
        """Wrap a dense 0/1 adjacency matrix (assumed symmetric, zero diagonal)."""
        adj = scipy.sparse.csr_matrix(np.asarray(matrix, dtype=np.int32))
        adj.eliminate_zeros()
        adj.sort_indices()
        return cls(adjacency=adj, n=adj.shape[0], **provenance)

    @classmethod
    def from_edges(cls, n: int, edges: Iterable[tuple[int, int]]) -> "Graph":
        """Build a graph from an undirected edge list, adding both directions."""
        dense = np.zeros((n, n), dtype=np.int32)
        for u, v in edges:
            if u == v:
                raise ValueError(f"Self-loop ({u}, {v}) not allowed")
            dense[u, v] = 1
            dense[v, u] = 1
        return cls.from_dense(dense)

    @property
    def indptr(self) -> np.ndarray:
        return self.adjacency.indptr

    @property
    def indices(self) -> np.ndarray:
        return self.adjacency.indices

    @property
    def n_edges(self) -> int:
        """Number of undirected edges."""
        return self.adjacency.nnz // 2

    def neighbors(self, node: int) -> np.ndarray:
        """Neighbour indices of ``node`` as a read-only view into the CSR arrays."""
        return self.indices[self.indptr[node]:self.indptr[node + 1]]

    def degree(self, node: int) -> int:
        return int(self.indptr[node + 1] - self.indptr[node])

    def degrees(self) -> np.ndarray:
        """Degree of every node, shape (n,)."""
        return np.diff(self.indptr)

    def has_edge(self, u: int, v: int) -> bool:
        return bool(self.adjacency[u, v])
