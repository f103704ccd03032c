"""Tests for the scenario configuration system."""

import re
from dataclasses import FrozenInstanceError, replace

import pytest
from dacite import UnexpectedDataError

from culturenet.config import (
    ANCHOR_CONFIG,
    EpidemicConfig,
    GraphConfig,
    OpinionConfig,
    ScenarioConfig,
    config_from_dict,
    config_from_json,
    config_hash,
    config_to_dict,
    config_to_json,
    full_config_hash,
    graph_config_hash,
)
from culturenet.errors import InvalidParameter


class TestAnchorConfigDefaults:
    """ANCHOR_CONFIG has the documented end-to-end values."""

    def test_anchor_config_defaults(self):
        assert ANCHOR_CONFIG.graph.n == 2000
        assert ANCHOR_CONFIG.graph.k == 10
        assert ANCHOR_CONFIG.graph.rewire_prob == 0.01
        assert ANCHOR_CONFIG.opinion.omega == 1.0
        assert ANCHOR_CONFIG.opinion.pro_fraction == 0.5
        assert ANCHOR_CONFIG.epidemic.beta == 0.05
        assert ANCHOR_CONFIG.epidemic.gamma == 0.1
        assert ANCHOR_CONFIG.epidemic.max_steps == 300
        assert ANCHOR_CONFIG.n_runs == 100
        assert ANCHOR_CONFIG.seed == 42


class TestConfigImmutability:
    """Frozen dataclasses prevent mutation."""

    def test_config_frozen(self):
        with pytest.raises(FrozenInstanceError):
            ANCHOR_CONFIG.seed = 99  # type: ignore[misc]

    def test_graph_config_frozen(self):
        with pytest.raises(FrozenInstanceError):
            ANCHOR_CONFIG.graph.n = 1000  # type: ignore[misc]

    def test_opinion_config_frozen(self):
        with pytest.raises(FrozenInstanceError):
            ANCHOR_CONFIG.opinion.omega = 0.0  # type: ignore[misc]


class TestConfigRoundTrip:
    """JSON serialization round-trip preserves identity."""

    def test_config_round_trip_hash(self):
        restored = config_from_json(config_to_json(ANCHOR_CONFIG))
        assert config_hash(ANCHOR_CONFIG) == config_hash(restored)
        assert restored == ANCHOR_CONFIG

    def test_tags_restored_as_tuple(self):
        cfg = replace(ANCHOR_CONFIG, tags=("clustered", "baseline"))
        restored = config_from_json(config_to_json(cfg))
        assert restored.tags == ("clustered", "baseline")

    def test_dict_round_trip(self):
        assert config_from_dict(config_to_dict(ANCHOR_CONFIG)) == ANCHOR_CONFIG

    def test_partial_json_uses_defaults(self):
        cfg = config_from_json('{"n_runs": 5, "graph": {"n": 100}}')
        assert cfg.n_runs == 5
        assert cfg.graph.n == 100
        assert cfg.graph.k == 10

    def test_unknown_key_rejected(self):
        with pytest.raises(UnexpectedDataError):
            config_from_json('{"n_runz": 5}')

    def test_invalid_value_rejected_on_load(self):
        with pytest.raises(InvalidParameter, match="k must be even"):
            config_from_json('{"graph": {"n": 100, "k": 3}}')


class TestConfigHashing:
    """Hashing behavior for graph identity and full identity."""

    def test_graph_hash_ignores_seed(self):
        cfg2 = replace(ANCHOR_CONFIG, seed=99)
        assert graph_config_hash(ANCHOR_CONFIG) == graph_config_hash(cfg2)

    def test_graph_hash_ignores_dynamics(self):
        cfg2 = replace(ANCHOR_CONFIG, opinion=OpinionConfig(omega=0.0))
        assert graph_config_hash(ANCHOR_CONFIG) == graph_config_hash(cfg2)

    def test_full_hash_includes_seed(self):
        cfg2 = replace(ANCHOR_CONFIG, seed=99)
        assert full_config_hash(ANCHOR_CONFIG) != full_config_hash(cfg2)

    def test_config_hash_is_hex_string(self):
        h = full_config_hash(ANCHOR_CONFIG)
        assert re.match(r"^[0-9a-f]{16}$", h)

    def test_exclude_fields(self):
        cfg2 = replace(ANCHOR_CONFIG, seed=7)
        assert config_hash(ANCHOR_CONFIG, exclude_fields=["seed"]) == config_hash(
            cfg2, exclude_fields=["seed"]
        )


class TestConfigValidation:
    """Validation rejects malformed parameters early."""

    @pytest.mark.parametrize(
        "kwargs,match",
        [
            ({"k": 3}, "k must be even"),
            ({"k": 0}, "k must be even"),
            ({"n": 10, "k": 10}, "n \\(10\\) must be >= k \\+ 1"),
            ({"rewire_prob": 1.5}, "rewire_prob"),
            ({"rewire_prob": -0.1}, "rewire_prob"),
        ],
    )
    def test_graph_config_rejects(self, kwargs, match):
        with pytest.raises(InvalidParameter, match=match):
            GraphConfig(**kwargs)

    def test_opinion_config_rejects_omega(self):
        with pytest.raises(InvalidParameter, match="omega"):
            OpinionConfig(omega=2.0)

    def test_opinion_config_rejects_retries(self):
        with pytest.raises(InvalidParameter, match="max_retries"):
            OpinionConfig(max_retries=0)

    def test_epidemic_config_rejects(self):
        with pytest.raises(InvalidParameter, match="beta"):
            EpidemicConfig(beta=-1.0)
        with pytest.raises(InvalidParameter, match="gamma"):
            EpidemicConfig(gamma=1.1)
        with pytest.raises(InvalidParameter, match="n_seed_infected"):
            EpidemicConfig(n_seed_infected=0)

    def test_invalid_parameter_is_value_error(self):
        with pytest.raises(ValueError):
            GraphConfig(k=5)

    def test_scenario_rejects_zero_runs(self):
        with pytest.raises(InvalidParameter, match="n_runs"):
            ScenarioConfig(n_runs=0)

    def test_scenario_rejects_too_many_seeds(self):
        with pytest.raises(InvalidParameter, match="unvaccinated"):
            ScenarioConfig(
                graph=GraphConfig(n=20, k=4),
                opinion=OpinionConfig(pro_fraction=0.9),
                epidemic=EpidemicConfig(n_seed_infected=5),
            )
