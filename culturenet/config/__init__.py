"""Scenario configuration system with frozen, hashable, serializable dataclasses."""

from culturenet.config.defaults import ANCHOR_CONFIG
from culturenet.config.experiment import (
    EpidemicConfig,
    GraphConfig,
    OpinionConfig,
    ScenarioConfig,
)
from culturenet.config.hashing import config_hash, full_config_hash, graph_config_hash
from culturenet.config.serialization import (
    config_from_dict,
    config_from_json,
    config_to_dict,
    config_to_json,
)

__all__ = [
    "ANCHOR_CONFIG",
    "EpidemicConfig",
    "GraphConfig",
    "OpinionConfig",
    "ScenarioConfig",
    "config_from_dict",
    "config_from_json",
    "config_hash",
    "config_to_dict",
    "config_to_json",
    "full_config_hash",
    "graph_config_hash",
]
