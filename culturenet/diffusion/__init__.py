"""Diffusion engine: contagion, SIR, opinion formation, and the vaccination scenario."""

from culturenet.diffusion.batch import BatchResult, RunFailure, run_batch
from culturenet.diffusion.contagion import neighbourhood_seed, run_contagion
from culturenet.diffusion.opinion import (
    assign_opinions,
    dissimilarity,
    form_opinions,
    run_opinion_formation,
)
from culturenet.diffusion.scenario import (
    ScenarioOutcome,
    opinions_to_states,
    run_vaccination_scenario,
)
from culturenet.diffusion.sir import run_sir
from culturenet.diffusion.types import (
    NodeState,
    Opinion,
    OpinionResult,
    SIRResult,
    UpdateDiscipline,
)

__all__ = [
    "BatchResult",
    "NodeState",
    "Opinion",
    "OpinionResult",
    "RunFailure",
    "SIRResult",
    "ScenarioOutcome",
    "UpdateDiscipline",
    "assign_opinions",
    "dissimilarity",
    "form_opinions",
    "neighbourhood_seed",
    "opinions_to_states",
    "run_batch",
    "run_contagion",
    "run_opinion_formation",
    "run_sir",
    "run_vaccination_scenario",
]
