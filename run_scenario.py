#!/usr/bin/env python3
"""Entry point for the vaccination-opinion scenario.

Chains the stages of each run: small-world graph generation -> opinion
formation -> vaccination -> SIR outbreak, repeated n_runs times with
independent seed streams.

Usage:
    python run_scenario.py
    python run_scenario.py --config config.json
    python run_scenario.py --config config.json --omega 0 --dry-run
    python run_scenario.py --verbose
"""

import argparse
import logging
import sys
import time
from contextlib import contextmanager
from dataclasses import replace
from pathlib import Path
from typing import Generator

from dacite import DaciteError

from culturenet.config import (
    ANCHOR_CONFIG,
    ScenarioConfig,
    config_from_json,
    full_config_hash,
    graph_config_hash,
)

log = logging.getLogger(__name__)


@contextmanager
def stage_timer(name: str) -> Generator[None, None, None]:
    """Context manager that prints stage banners with elapsed time."""
    print(f"\n=== {name} ===")
    log.info("Starting: %s", name)
    t0 = time.monotonic()
    yield
    elapsed = time.monotonic() - t0
    print(f"... done in {elapsed:.1f}s")
    log.info("Completed: %s in %.1fs", name, elapsed)


def run_pipeline(config: ScenarioConfig) -> None:
    """Run the network summary and the scenario batch, printing results."""
    from culturenet.diffusion import run_batch
    from culturenet.graph import generate_small_world
    from culturenet.metrics import network_summary
    from culturenet.reproducibility import make_rng

    pipeline_start = time.monotonic()

    with stage_timer("Network Summary"):
        summary = network_summary(
            generate_small_world(config.graph, make_rng(config.seed))
        )
        log.info(
            "Example graph: edges=%d, L=%.3f, C=%.3f, connected=%s",
            summary.n_edges, summary.mean_path_length,
            summary.mean_clustering, summary.connected,
        )

    with stage_timer("Scenario Runs"):
        batch = run_batch(config)

    sizes = batch.outbreak_sizes()
    total_elapsed = time.monotonic() - pipeline_start
    print(f"\n{'=' * 60}")
    print(f"Scenario complete in {total_elapsed:.1f}s")
    print(f"  Mean path length:   {summary.mean_path_length:.3f}")
    print(f"  Mean clustering:    {summary.mean_clustering:.3f}")
    print(f"  Runs:               {batch.n_runs} ({len(batch.failures)} failed)")
    if sizes.size:
        print(f"  Mean outbreak size: {sizes.mean():.1f}")
        print(f"  Max outbreak size:  {sizes.max()}")
    print(f"{'=' * 60}")


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Run the vaccination-opinion clustering scenario"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to scenario config JSON file (default: anchor config)",
    )
    parser.add_argument(
        "--omega",
        type=float,
        default=None,
        help="Override opinion clustering strength",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show the run plan without simulating",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable DEBUG-level logging",
    )
    args = parser.parse_args()

    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = ANCHOR_CONFIG
    if args.config is not None:
        config_path = Path(args.config)
        if not config_path.exists():
            print(f"Error: config file not found: {config_path}", file=sys.stderr)
            sys.exit(1)
    try:
        if args.config is not None:
            config = config_from_json(config_path.read_text())
        if args.omega is not None:
            config = replace(config, opinion=replace(config.opinion, omega=args.omega))
    except (DaciteError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(2)

    print(f"Config hash:   {full_config_hash(config)}")
    print(f"Graph hash:    {graph_config_hash(config)}")
    print()
    print(f"Graph:    n={config.graph.n}, k={config.graph.k}, "
          f"p={config.graph.rewire_prob}")
    print(f"Opinion:  omega={config.opinion.omega}, "
          f"coverage={config.opinion.pro_fraction}, steps={config.opinion.steps}")
    print(f"Epidemic: beta={config.epidemic.beta}, gamma={config.epidemic.gamma}, "
          f"max_steps={config.epidemic.max_steps}")
    print(f"Runs:     {config.n_runs} (seed {config.seed})")

    if args.dry_run:
        print("\n[dry-run] Config loaded successfully. Exiting.")
        return

    try:
        run_pipeline(config)
    except Exception:
        log.exception("Scenario failed")
        sys.exit(1)


if __name__ == "__main__":
    main()
