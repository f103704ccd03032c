"""Reproducibility infrastructure: explicit generators and per-run seed spawning."""

from culturenet.reproducibility.seed import (
    make_rng,
    spawn_run_rngs,
    spawn_run_seeds,
    verify_seed_determinism,
)

__all__ = [
    "make_rng",
    "spawn_run_rngs",
    "spawn_run_seeds",
    "verify_seed_determinism",
]
