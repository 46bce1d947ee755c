"""Core package for the circular-economy strategy model.

This package contains the deterministic profit model for the four
business strategies (sell or lease, integral or modular product), the
lattice searches used where no closed form is available, and the grid
builders that sweep the model into strategy maps for the Streamlit
dashboard.

Each submodule exposes pure functions.  Parameters are passed as typed
pydantic models or plain floats and results come back as numpy arrays
wrapped in small dataclasses that can be exported as pandas DataFrames.
"""

from .params import ModelParams, DurabilityCase, Scenario, Strategy
from .model import evaluate_point, profit_si, profit_li, profit_sm, profit_lm, best_strategy
from .grids import (
    sweep_architecture_choice,
    sweep_switching,
    sweep_business_model,
    sweep_joint_choice,
    sweep_integration_cost,
    sweep_endogenous_durability,
)

__all__ = [
    "ModelParams",
    "DurabilityCase",
    "Scenario",
    "Strategy",
    "evaluate_point",
    "profit_si",
    "profit_li",
    "profit_sm",
    "profit_lm",
    "best_strategy",
    "sweep_architecture_choice",
    "sweep_switching",
    "sweep_business_model",
    "sweep_joint_choice",
    "sweep_integration_cost",
    "sweep_endogenous_durability",
]
