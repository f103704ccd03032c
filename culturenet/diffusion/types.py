"""State labels, update disciplines, and result containers for diffusion runs."""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum, IntEnum

import numpy as np

from culturenet.errors import InvalidParameter
from culturenet.graph.types import Graph


class NodeState(IntEnum):
    """Compartment of a node in the contagion and SIR variants."""

    SUSCEPTIBLE = 0
    INFECTED = 1
    RECOVERED = 2


class Opinion(IntEnum):
    """Vaccination opinion held by a node."""

    ANTI = 0
    PRO = 1


class UpdateDiscipline(Enum):
    """How transitions within one timestep see each other.

    STREAMING visits nodes in a fresh random order and applies each
    transition in place, so later nodes in the order observe earlier flips
    of the same step. BATCH computes every transition from one snapshot of
    the step's starting state and applies them together.
    """

    STREAMING = "streaming"
    BATCH = "batch"


@dataclass(frozen=True)
class SIRResult:
    """Outcome of one SIR run.

    Unpacks as ``outbreak_size, steps_run = result``. The count arrays have
    one entry per executed step plus the initial state (length
    steps_run + 1).
    """

    outbreak_size: int  # S -> I transitions after seeding
    steps_run: int
    susceptible: np.ndarray
    infected: np.ndarray
    recovered: np.ndarray

    def __iter__(self):
        return iter((self.outbreak_size, self.steps_run))


@dataclass(frozen=True)
class OpinionResult:
    """Outcome of one opinion formation run.

    Holds the final opinion vector, mean dissimilarity before the first
    step and after every step, the number of paired flips, and the total
    number of compensating draws made.
    """

    opinions: np.ndarray  # int8 array of Opinion values, length n
    dissimilarity: np.ndarray  # length steps + 1
    n_flips: int
    n_compensating_draws: int

    @property
    def pro_fraction(self) -> float:
        return float(np.mean(self.opinions == Opinion.PRO))


def as_seed_array(graph: Graph, seeds: Iterable[int]) -> np.ndarray:
    """Validate seed node indices and return them as a unique int array.

    Raises:
        InvalidParameter: If any seed lies outside 0..n-1.
    """
    arr = np.unique(np.asarray(list(seeds), dtype=np.int64))
    if arr.size and (arr[0] < 0 or arr[-1] >= graph.n):
        raise InvalidParameter(
            f"Seed nodes must lie in 0..{graph.n - 1}, got {arr.tolist()}"
        )
    return arr
