"""Scenario configuration dataclasses, frozen and slotted."""

from dataclasses import dataclass, field

from culturenet.errors import InvalidParameter


def _check_probability(name: str, value: float) -> None:
    if not 0.0 <= value <= 1.0:
        raise InvalidParameter(f"{name} must be in [0, 1], got {value}")


@dataclass(frozen=True, slots=True)
class GraphConfig:
    """Small-world graph generation parameters."""

    n: int = 2000  # number of nodes
    k: int = 10  # lattice degree (even)
    rewire_prob: float = 0.01  # per-edge rewiring probability

    def __post_init__(self) -> None:
        if self.k < 2 or self.k % 2 != 0:
            raise InvalidParameter(f"k must be even and >= 2, got {self.k}")
        if self.n < self.k + 1:
            raise InvalidParameter(
                f"n ({self.n}) must be >= k + 1 ({self.k + 1})"
            )
        _check_probability("rewire_prob", self.rewire_prob)


@dataclass(frozen=True, slots=True)
class OpinionConfig:
    """Opinion formation parameters."""

    omega: float = 1.0  # opinion clustering strength
    pro_fraction: float = 0.5  # vaccination coverage c
    steps: int = 50
    max_retries: int = 10_000  # compensating-flip draws per flip

    def __post_init__(self) -> None:
        _check_probability("omega", self.omega)
        _check_probability("pro_fraction", self.pro_fraction)
        if self.steps < 0:
            raise InvalidParameter(f"steps must be >= 0, got {self.steps}")
        if self.max_retries < 1:
            raise InvalidParameter(
                f"max_retries must be >= 1, got {self.max_retries}"
            )


@dataclass(frozen=True, slots=True)
class EpidemicConfig:
    """SIR-on-network parameters."""

    beta: float = 0.05  # per-infected-neighbour infection hazard
    gamma: float = 0.1  # per-step recovery probability
    max_steps: int = 300
    n_seed_infected: int = 1

    def __post_init__(self) -> None:
        if self.beta < 0:
            raise InvalidParameter(f"beta must be >= 0, got {self.beta}")
        _check_probability("gamma", self.gamma)
        if self.max_steps < 0:
            raise InvalidParameter(
                f"max_steps must be >= 0, got {self.max_steps}"
            )
        if self.n_seed_infected < 1:
            raise InvalidParameter(
                f"n_seed_infected must be >= 1, got {self.n_seed_infected}"
            )


@dataclass(frozen=True, slots=True)
class ScenarioConfig:
    """Top-level configuration for the vaccination scenario.

    Composes the graph, opinion and epidemic sub-configs. Cross-parameter
    validation runs in __post_init__ to reject invalid configurations early.
    """

    graph: GraphConfig = field(default_factory=GraphConfig)
    opinion: OpinionConfig = field(default_factory=OpinionConfig)
    epidemic: EpidemicConfig = field(default_factory=EpidemicConfig)
    n_runs: int = 100
    seed: int = 42
    description: str = ""
    tags: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.n_runs < 1:
            raise InvalidParameter(f"n_runs must be >= 1, got {self.n_runs}")
        n_anti = self.graph.n - round(self.opinion.pro_fraction * self.graph.n)
        if self.epidemic.n_seed_infected > n_anti:
            raise InvalidParameter(
                f"n_seed_infected ({self.epidemic.n_seed_infected}) exceeds "
                f"the {n_anti} unvaccinated nodes"
            )
