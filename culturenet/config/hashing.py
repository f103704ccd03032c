"""Deterministic config identity: SHA-256 over canonical JSON."""

import hashlib
import json
from collections.abc import Iterable
from dataclasses import asdict
from typing import Any

from culturenet.config.experiment import ScenarioConfig


def _drop_path(d: dict[str, Any], dotted: str) -> None:
    """Delete a dotted key such as "opinion.omega" if every level exists."""
    *parents, leaf = dotted.split(".")
    for key in parents:
        d = d.get(key)
        if not isinstance(d, dict):
            return
    d.pop(leaf, None)


def config_hash(config: Any, exclude_fields: Iterable[str] = ()) -> str:
    """Short SHA-256 digest of any config dataclass.

    Args:
        config: Dataclass instance (top-level or sub-config).
        exclude_fields: Dotted field paths left out of the digest.

    Returns:
        First 16 hex characters of the digest.
    """
    d = asdict(config)
    for dotted in exclude_fields:
        _drop_path(d, dotted)
    canonical = json.dumps(d, sort_keys=True, ensure_ascii=True, separators=(",", ":"))
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()[:16]


def graph_config_hash(config: ScenarioConfig) -> str:
    """Hash of n, k and rewire_prob only.

    Scenarios that differ only in opinion or epidemic settings report the
    same graph hash, which run_scenario.py prints next to the full hash.
    """
    return config_hash(config.graph)


def full_config_hash(config: ScenarioConfig) -> str:
    """Identity of the whole scenario, seed included."""
    return config_hash(config)
