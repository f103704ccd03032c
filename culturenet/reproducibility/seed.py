"""Centralized seed management for full reproducibility.

Every random draw in a run goes through a single ``numpy.random.Generator``
passed by argument. Independent runs get independent streams spawned from
one master ``SeedSequence``, so a batch is reproducible from its master seed
and any subset of runs can be farmed out without correlated streams.
"""

import numpy as np


def make_rng(seed: int | np.random.SeedSequence | None) -> np.random.Generator:
    """Build a PCG64 Generator from an int, a SeedSequence, or None (fresh entropy)."""
    return np.random.default_rng(seed)


def spawn_run_seeds(seed: int, n_runs: int) -> list[np.random.SeedSequence]:
    """Spawn one independent child SeedSequence per run.

    Args:
        seed: Master seed value (e.g., 42).
        n_runs: Number of runs in the batch.

    Returns:
        List of n_runs child SeedSequences, stable for a given master seed.
    """
    return np.random.SeedSequence(seed).spawn(n_runs)


def spawn_run_rngs(seed: int, n_runs: int) -> list[np.random.Generator]:
    """Spawn one independent Generator per run from a master seed."""
    return [make_rng(child) for child in spawn_run_seeds(seed, n_runs)]


def verify_seed_determinism(seed: int) -> bool:
    """Verify that the same master seed reproduces every run stream.

    Spawns the per-run generators twice and draws 10 values from the first
    three streams each time. This is the self-test that proves seed control
    works.

    Args:
        seed: Seed value to test.

    Returns:
        True if all streams produce identical sequences after re-spawning.
    """
    first = [rng.random(10).tolist() for rng in spawn_run_rngs(seed, 3)]
    second = [rng.random(10).tolist() for rng in spawn_run_rngs(seed, 3)]
    return first == second
