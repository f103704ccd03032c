"""Anchor configuration: the default end-to-end scenario parameters."""

from culturenet.config.experiment import ScenarioConfig

# Instantiated with all-default values: n=2000, k=10, rewire_prob=0.01,
# omega=1, coverage=0.5, beta=0.05, gamma=0.1, max_steps=300, 100 runs, seed=42.
ANCHOR_CONFIG = ScenarioConfig()
