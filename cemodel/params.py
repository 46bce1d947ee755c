# MIT License
"""Data models for the circular-economy strategy model.

All parameter models are defined using [`pydantic.BaseModel`](https://pydantic-docs.helpmanual.io/)
to provide type checking, validation and JSON serialisation.

:class:`ModelParams` is the immutable parameter point consumed by the
profit functions.  :class:`Scenario` holds the values the dashboard
exposes as sliders and converts itself into a :class:`ModelParams`.
"""
from __future__ import annotations
from enum import IntEnum
from pydantic import BaseModel, ConfigDict, Field
from pydantic import model_validator

# leasing durabilities stay strictly below one
LEASE_DURABILITY_CAP = 0.999


class Strategy(IntEnum):
    """Business strategies, in the order used for grid codes and legends."""

    SI = 0
    LI = 1
    SM = 2
    LM = 3


class ModelParams(BaseModel):
    """One parameter point of the model.

    Attributes
    ----------
    d1:
        Durability of the strong component under direct sale.
    d2:
        Durability of the weak component.  The model is defined for
        ``d2 < d1`` only; see :attr:`feasible`.
    gamma:
        Leasing spillover multiplier, typically in [0.5, 1.5].
    c:
        Per-unit production cost, typically in (0, 0.35).
    k:
        Additional modular integration cost, typically in [0, 0.05].
    """

    model_config = ConfigDict(frozen=True)

    d1: float = Field(..., gt=0.0, lt=1.0, allow_inf_nan=False, description="Strong-component durability")
    d2: float = Field(..., gt=0.0, lt=1.0, allow_inf_nan=False, description="Weak-component durability")
    gamma: float = Field(1.0, allow_inf_nan=False, description="Leasing durability multiplier")
    c: float = Field(..., allow_inf_nan=False, description="Per-unit production cost")
    k: float = Field(0.0, allow_inf_nan=False, description="Modular integration cost")

    @property
    def d1L(self) -> float:
        return min(self.gamma * self.d1, LEASE_DURABILITY_CAP)

    @property
    def d2L(self) -> float:
        return min(self.gamma * self.d2, LEASE_DURABILITY_CAP)

    @property
    def d_sum_S(self) -> float:
        """Durability sum under selling."""
        return self.d1 + self.d2

    @property
    def d_sum_L(self) -> float:
        """Durability sum under leasing."""
        return self.d1L + self.d2L

    @property
    def feasible(self) -> bool:
        return self.d2 < self.d1


class DurabilityCase(BaseModel):
    """A fixed (d1, d2) pair swept over cost and spillover."""

    model_config = ConfigDict(frozen=True)

    d1: float = Field(..., gt=0.0, lt=1.0, allow_inf_nan=False)
    d2: float = Field(..., gt=0.0, lt=1.0, allow_inf_nan=False)
    label: str = Field("", description="Legend label for the case")


class Scenario(BaseModel):
    """Parameter set driven by the dashboard sliders.

    The bounds mirror the slider ranges.  The scenario is serialisable so
    that a configuration can be exported and shared as JSON.
    """

    d1: float = Field(0.5, ge=0.05, le=0.99, allow_inf_nan=False, description="Strong durability δ1")
    d2: float = Field(0.2, ge=0.01, le=0.98, allow_inf_nan=False, description="Weak durability δ2")
    gamma: float = Field(1.0, ge=0.5, le=1.5, allow_inf_nan=False, description="Leasing spillover γ")
    c: float = Field(0.15, ge=0.01, le=0.35, allow_inf_nan=False, description="Unit production cost c")
    k: float = Field(0.0, ge=0.0, le=0.05, allow_inf_nan=False, description="Modular integration cost k")
    resolution: int = Field(40, ge=2, le=100, description="Grid points per swept axis")

    @model_validator(mode="after")
    def _weak_below_strong(self) -> "Scenario":
        if self.d2 >= self.d1:
            raise ValueError(f"d2 ({self.d2}) must be strictly below d1 ({self.d1})")
        return self

    def to_model_params(self) -> ModelParams:
        return ModelParams(d1=self.d1, d2=self.d2, gamma=self.gamma, c=self.c, k=self.k)
