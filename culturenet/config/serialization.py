"""JSON serialization and deserialization for scenario configs."""

import json
from dataclasses import asdict
from typing import Any

from dacite import Config as DaciteConfig
from dacite import from_dict

from culturenet.config.experiment import ScenarioConfig

_DACITE_CONFIG = DaciteConfig(cast=[tuple], check_types=True, strict=True)


def config_to_json(config: ScenarioConfig) -> str:
    """Serialize a ScenarioConfig to a JSON string (sorted keys, 2-space indent)."""
    return json.dumps(asdict(config), indent=2, sort_keys=True)


def config_from_json(json_str: str) -> ScenarioConfig:
    """Deserialize a JSON string to a ScenarioConfig.

    Uses dacite with strict=True to reject unknown keys and cast=[tuple]
    to turn JSON arrays back into tuples for tags. Missing keys fall back
    to dataclass defaults, so a partial file only overrides what it names.
    """
    return config_from_dict(json.loads(json_str))


def config_to_dict(config: ScenarioConfig) -> dict[str, Any]:
    """Convert a ScenarioConfig to a plain dictionary."""
    return asdict(config)


def config_from_dict(d: dict[str, Any]) -> ScenarioConfig:
    """Reconstruct a ScenarioConfig from a plain dictionary."""
    return from_dict(data_class=ScenarioConfig, data=d, config=_DACITE_CONFIG)
