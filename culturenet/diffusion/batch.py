"""Independent repeated runs with per-run seed streams and failure isolation.

Each run draws from its own Generator spawned from the config's master seed,
so runs share no random state and the batch is reproducible as a whole. A
run that fails with a CultureNetError is recorded and its siblings carry on;
any other exception is a bug and propagates.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

import numpy as np

from culturenet.config.experiment import ScenarioConfig
from culturenet.diffusion.scenario import ScenarioOutcome, run_vaccination_scenario
from culturenet.errors import CultureNetError
from culturenet.graph.smallworld import generate_small_world
from culturenet.graph.types import Graph
from culturenet.reproducibility.seed import make_rng, spawn_run_seeds

log = logging.getLogger(__name__)

Runner = Callable[[ScenarioConfig, np.random.Generator, Graph | None], ScenarioOutcome]


@dataclass(frozen=True, slots=True)
class RunFailure:
    """A run that ended in a CultureNetError."""

    run_index: int
    error_type: str
    message: str


@dataclass(frozen=True)
class BatchResult:
    """Outcomes of the successful runs and records of the failed ones."""

    outcomes: list[ScenarioOutcome] = field(default_factory=list)
    failures: list[RunFailure] = field(default_factory=list)

    @property
    def n_runs(self) -> int:
        return len(self.outcomes) + len(self.failures)

    def outbreak_sizes(self) -> np.ndarray:
        return np.array([o.outbreak_size for o in self.outcomes], dtype=np.int64)


def run_batch(
    config: ScenarioConfig,
    runner: Runner = run_vaccination_scenario,
    reuse_graph: bool = False,
) -> BatchResult:
    """Run config.n_runs independent repetitions of a scenario.

    Args:
        config: Scenario configuration (n_runs and seed are read here).
        runner: Callable executing one run from (config, rng, graph).
        reuse_graph: Build one graph up front and hand it to every run
            instead of letting each run generate its own.

    Returns:
        BatchResult with one entry per run, in run order.
    """
    graph = None
    if reuse_graph:
        # Offset seed keeps the shared graph uncorrelated with the run streams
        graph = generate_small_world(config.graph, make_rng(config.seed + 1000))

    outcomes: list[ScenarioOutcome] = []
    failures: list[RunFailure] = []

    for run_index, run_seed in enumerate(spawn_run_seeds(config.seed, config.n_runs)):
        rng = make_rng(run_seed)
        try:
            outcomes.append(runner(config, rng, graph))
        except CultureNetError as exc:
            log.warning("Run %d failed: %s", run_index, exc)
            failures.append(
                RunFailure(
                    run_index=run_index,
                    error_type=type(exc).__name__,
                    message=str(exc),
                )
            )

    log.info(
        "Batch complete: %d runs, %d failed", config.n_runs, len(failures)
    )
    return BatchResult(outcomes=outcomes, failures=failures)
