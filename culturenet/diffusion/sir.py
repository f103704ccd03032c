"""SIR epidemic on a fixed contact graph.

Each step applies the infection rule and then the recovery rule:

- a Susceptible node with I_n Infected neighbours becomes Infected with
  probability 1 - exp(-beta * I_n), a constant per-contact hazard rather
  than one Bernoulli trial per neighbour;
- every node that was Infected when the step began recovers with
  probability gamma. Nodes infected during the step stay infectious for at
  least the next one.

The run stops early as soon as no Susceptible or no Infected node is left,
because neither rule can change anything after that.
"""

import logging
import math
from collections.abc import Iterable

import numpy as np

from culturenet.diffusion.types import (
    NodeState,
    SIRResult,
    UpdateDiscipline,
    as_seed_array,
)
from culturenet.errors import InvalidParameter
from culturenet.graph.types import Graph

log = logging.getLogger(__name__)


def _infect_streaming(
    graph: Graph, state: np.ndarray, beta: float, rng: np.random.Generator
) -> int:
    infected = state == NodeState.INFECTED
    order = rng.permutation(np.flatnonzero(state == NodeState.SUSCEPTIBLE))
    new_cases = 0
    for node in order:
        i_n = int(infected[graph.neighbors(node)].sum())
        if i_n and rng.random() < -math.expm1(-beta * i_n):
            infected[node] = True
            state[node] = NodeState.INFECTED
            new_cases += 1
    return new_cases


def _infect_batch(
    graph: Graph, state: np.ndarray, beta: float, rng: np.random.Generator
) -> int:
    infected = (state == NodeState.INFECTED).astype(np.int32)
    hazard = -np.expm1(-beta * (graph.adjacency @ infected))
    draws = rng.random(graph.n)
    new = (state == NodeState.SUSCEPTIBLE) & (draws < hazard)
    state[new] = NodeState.INFECTED
    return int(new.sum())


def run_sir(
    graph: Graph,
    beta: float,
    gamma: float,
    seed_infected: Iterable[int],
    max_steps: int,
    rng: np.random.Generator,
    initial_states: np.ndarray | None = None,
    discipline: UpdateDiscipline = UpdateDiscipline.STREAMING,
) -> SIRResult:
    """Run one SIR epidemic.

    Args:
        graph: Fixed contact graph (not mutated).
        beta: Infection hazard per Infected neighbour per step (>= 0).
        gamma: Per-step recovery probability in [0, 1].
        seed_infected: Nodes Infected at the start. Must be Susceptible in
            initial_states.
        max_steps: Upper bound on the number of steps.
        rng: Generator for visiting order, infection and recovery draws.
        initial_states: Optional NodeState vector (e.g. vaccinated nodes
            already Recovered). Defaults to all Susceptible. Copied, never
            mutated.
        discipline: STREAMING (default) or BATCH infection updates.

    Returns:
        SIRResult with the outbreak size (S -> I transitions after seeding),
        the number of steps run, and per-step compartment counts.

    Raises:
        InvalidParameter: On negative beta, gamma outside [0, 1], negative
            max_steps, mis-shaped or out-of-range initial_states, or seeds that are out of
            range or not Susceptible.
    """
    if beta < 0:
        raise InvalidParameter(f"beta must be >= 0, got {beta}")
    if not 0.0 <= gamma <= 1.0:
        raise InvalidParameter(f"gamma must be in [0, 1], got {gamma}")
    if max_steps < 0:
        raise InvalidParameter(f"max_steps must be >= 0, got {max_steps}")
    seeds = as_seed_array(graph, seed_infected)

    if initial_states is None:
        state = np.full(graph.n, NodeState.SUSCEPTIBLE, dtype=np.int8)
    else:
        raw = np.asarray(initial_states)
        if raw.shape != (graph.n,):
            raise InvalidParameter(
                f"initial_states has shape {raw.shape}, expected ({graph.n},)"
            )
        if not np.isin(raw, list(NodeState)).all():
            raise InvalidParameter("initial_states must hold NodeState values")
        state = raw.astype(np.int8)
    if np.any(state[seeds] != NodeState.SUSCEPTIBLE):
        raise InvalidParameter("Seed nodes must be Susceptible")
    state[seeds] = NodeState.INFECTED

    infect = _infect_streaming
    if discipline is UpdateDiscipline.BATCH:
        infect = _infect_batch

    counts = [np.bincount(state, minlength=3)]
    outbreak_size = 0
    steps_run = 0

    while steps_run < max_steps:
        n_s, n_i, _ = counts[-1]
        if n_s == 0 or n_i == 0:
            log.debug(
                "SIR stopped after %d steps (S=%d, I=%d)", steps_run, n_s, n_i
            )
            break

        was_infected = np.flatnonzero(state == NodeState.INFECTED)
        outbreak_size += infect(graph, state, beta, rng)
        recovers = was_infected[rng.random(was_infected.size) < gamma]
        state[recovers] = NodeState.RECOVERED

        steps_run += 1
        counts.append(np.bincount(state, minlength=3))

    counts_arr = np.stack(counts)
    log.debug(
        "SIR run: outbreak=%d, steps=%d, beta=%.3f, gamma=%.3f",
        outbreak_size, steps_run, beta, gamma,
    )
    return SIRResult(
        outbreak_size=outbreak_size,
        steps_run=steps_run,
        susceptible=counts_arr[:, NodeState.SUSCEPTIBLE],
        infected=counts_arr[:, NodeState.INFECTED],
        recovered=counts_arr[:, NodeState.RECOVERED],
    )
