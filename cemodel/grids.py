# MIT License
"""Grid builders for the strategy maps.

Every builder sweeps one or two parameters over a fixed linear range,
evaluates the profit model once per cell and assembles plain numpy
matrices for the plotting layer.  Rows of a matrix follow the second
axis of the sweep (``d2`` or ``gamma``) and columns follow the first
(``d1`` or ``c``).

Cells where ``d2 >= d1`` are outside the model's domain.  They are never
evaluated and hold ``NaN`` (:data:`INFEASIBLE`) in the output.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple
import numpy as np
import pandas as pd
from .model import best_strategy, durability_cost, profits
from .params import DurabilityCase, ModelParams, Strategy
from .utils import axis, check_finite, check_resolution

logger = logging.getLogger(__name__)

INFEASIBLE = float("nan")
# modular must beat integral by more than this on the durability maps
ARCH_TOLERANCE = 1e-8

DURABILITY_RANGE = (0.05, 0.95)
COST_MIN = 0.01
GAMMA_MIN = 0.5
COST_RANGE = (COST_MIN, 0.35)
GAMMA_RANGE = (GAMMA_MIN, 1.5)
SWITCHING_GAMMAS = (0.8, 1.2)
JOINT_CASES = (
    DurabilityCase(d1=0.28, d2=0.10, label="High Diff (δ2=0.1)"),
    DurabilityCase(d1=0.20, d2=0.18, label="Low Diff (δ2=0.18)"),
)
INTEGRATION_K_VALUES = (0.0, 0.02)
ENDOGENOUS_GAMMAS = (0.72, 1.02)
ENDOGENOUS_SEARCH_RANGE = (0.1, 0.9)


def _frame(matrix: np.ndarray, rows: np.ndarray, cols: np.ndarray, row_name: str, col_name: str, value_name: str) -> pd.DataFrame:
    """Long-form table of a matrix, one row per cell."""
    return pd.DataFrame({
        row_name: np.repeat(rows, len(cols)),
        col_name: np.tile(cols, len(rows)),
        value_name: matrix.ravel(),
    })


@dataclass(frozen=True)
class ArchitectureChoice:
    """Integral (0) vs modular (1) over the durability plane."""

    axis_d1: np.ndarray
    axis_d2: np.ndarray
    sell: np.ndarray
    lease: np.ndarray

    def to_frame(self) -> pd.DataFrame:
        df = _frame(self.sell, self.axis_d2, self.axis_d1, "d2", "d1", "sell")
        df["lease"] = self.lease.ravel()
        return df


@dataclass(frozen=True)
class SwitchingMap:
    gamma: float
    matrix: np.ndarray


@dataclass(frozen=True)
class ArchitectureSwitching:
    """Architecture codes under selling and leasing for a few spillovers.

    Codes: 0 integral in both regimes, 1 modular only when leasing,
    2 modular only when selling, 3 modular in both.
    """

    axis_d1: np.ndarray
    axis_d2: np.ndarray
    per_gamma: List[SwitchingMap] = field(default_factory=list)

    def to_frame(self) -> pd.DataFrame:
        parts = []
        for m in self.per_gamma:
            df = _frame(m.matrix, self.axis_d2, self.axis_d1, "d2", "d1", "code")
            df.insert(0, "gamma", m.gamma)
            parts.append(df)
        return pd.concat(parts, ignore_index=True)


@dataclass(frozen=True)
class BusinessModelChoice:
    """Selling (0) vs leasing (1) preferences over cost and spillover."""

    axis_c: np.ndarray
    axis_gamma: np.ndarray
    integral_pref: np.ndarray
    modular_pref: np.ndarray
    switch_code: np.ndarray

    def to_frame(self) -> pd.DataFrame:
        df = _frame(self.integral_pref, self.axis_gamma, self.axis_c, "gamma", "c", "integral_pref")
        df["modular_pref"] = self.modular_pref.ravel()
        df["switch_code"] = self.switch_code.ravel()
        return df


@dataclass(frozen=True)
class StrategyMap:
    """Winning :class:`Strategy` code per (gamma, c) cell."""

    label: str
    strategy_code: np.ndarray
    k: float = 0.0


@dataclass(frozen=True)
class StrategyMaps:
    axis_c: np.ndarray
    axis_gamma: np.ndarray
    maps: List[StrategyMap] = field(default_factory=list)

    @property
    def per_case(self) -> List[StrategyMap]:
        return self.maps

    @property
    def per_k(self) -> List[StrategyMap]:
        return self.maps

    def to_frame(self) -> pd.DataFrame:
        parts = []
        for m in self.maps:
            df = _frame(m.strategy_code, self.axis_gamma, self.axis_c, "gamma", "c", "strategy_code")
            df.insert(0, "label", m.label)
            df.insert(1, "k", m.k)
            parts.append(df)
        return pd.concat(parts, ignore_index=True)


@dataclass(frozen=True)
class DurabilityPath:
    """Optimal durabilities and winning strategy along a base-cost sweep."""

    gamma: float
    c0_values: np.ndarray
    opt_d1: np.ndarray
    opt_d2: np.ndarray
    winning_strategy: List[str]

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame({
            "gamma": self.gamma,
            "c0": self.c0_values,
            "opt_d1": self.opt_d1,
            "opt_d2": self.opt_d2,
            "strategy": self.winning_strategy,
        })


def architecture_switch_code(modular_sell: bool, modular_lease: bool) -> int:
    """Combine two architecture flags into the 0..3 switching code."""
    return 2 * int(modular_sell) + int(modular_lease)


def business_switch_code(integral_leases: bool, modular_leases: bool) -> int:
    """Combine the integral and modular regime preferences.

    1 when the integral firm leases but the modular firm sells; 2 when
    both lease; 0 when both sell.  The remaining disagreement (integral
    sells, modular leases) is also 0.
    """
    if integral_leases and not modular_leases:
        return 1
    if integral_leases == modular_leases:
        return 2 if modular_leases else 0
    return 0


def _empty(rows: int, cols: int) -> np.ndarray:
    return np.full((rows, cols), INFEASIBLE)


def _log_matrix(name: str, matrix: np.ndarray) -> None:
    logger.debug("%s: shape %s, %d feasible cells", name, matrix.shape, int(np.count_nonzero(~np.isnan(matrix))))


def sweep_architecture_choice(gamma: float, c: float, k: float = 0.0, resolution: int = 60) -> ArchitectureChoice:
    """Integral vs modular over the (d1, d2) plane for selling and leasing.

    A cell is 1 when the modular profit beats the integral one by more
    than :data:`ARCH_TOLERANCE`, 0 otherwise.
    """
    n = check_resolution(resolution)
    check_finite(gamma=gamma, c=c, k=k)
    logger.info("Sweeping architecture choice at resolution %d", n)
    d1_axis = axis(*DURABILITY_RANGE, n)
    d2_axis = axis(*DURABILITY_RANGE, n)
    sell = _empty(n, n)
    lease = _empty(n, n)
    for i, d2 in enumerate(d2_axis):
        for j, d1 in enumerate(d1_axis):
            if d2 >= d1:
                continue
            pi = profits(ModelParams(d1=d1, d2=d2, gamma=gamma, c=c, k=k))
            sell[i, j] = 1.0 if pi["SM"] > pi["SI"] + ARCH_TOLERANCE else 0.0
            lease[i, j] = 1.0 if pi["LM"] > pi["LI"] + ARCH_TOLERANCE else 0.0
    _log_matrix("Architecture choice", sell)
    return ArchitectureChoice(axis_d1=d1_axis, axis_d2=d2_axis, sell=sell, lease=lease)


def sweep_switching(c: float = 0.15, resolution: int = 50, gammas: Sequence[float] = SWITCHING_GAMMAS) -> ArchitectureSwitching:
    """Architecture switching between selling and leasing, one map per gamma."""
    n = check_resolution(resolution)
    check_finite(c=c)
    if not gammas:
        raise ValueError("gammas must not be empty")
    check_finite(**{f"gammas[{i}]": g for i, g in enumerate(gammas)})
    logger.info("Sweeping architecture switching for gammas %s at resolution %d", list(gammas), n)
    d1_axis = axis(*DURABILITY_RANGE, n)
    d2_axis = axis(*DURABILITY_RANGE, n)
    maps = []
    for gamma in gammas:
        z = _empty(n, n)
        for i, d2 in enumerate(d2_axis):
            for j, d1 in enumerate(d1_axis):
                if d2 >= d1:
                    continue
                pi = profits(ModelParams(d1=d1, d2=d2, gamma=gamma, c=c, k=0.0))
                z[i, j] = architecture_switch_code(pi["SM"] > pi["SI"], pi["LM"] > pi["LI"])
        _log_matrix(f"Switching gamma={gamma}", z)
        maps.append(SwitchingMap(gamma=float(gamma), matrix=z))
    return ArchitectureSwitching(axis_d1=d1_axis, axis_d2=d2_axis, per_gamma=maps)


def sweep_business_model(
    d1: float = 0.5,
    d2: float = 0.1,
    resolution: int = 50,
    c_max: float = 0.15,
    gamma_max: float = 1.3,
) -> BusinessModelChoice:
    """Selling vs leasing preferences over cost and spillover for fixed durabilities."""
    n = check_resolution(resolution)
    check_finite(d1=d1, d2=d2, c_max=c_max, gamma_max=gamma_max)
    logger.info("Sweeping business model choice for d1=%s d2=%s at resolution %d", d1, d2, n)
    c_axis = axis(COST_MIN, c_max, n)
    g_axis = axis(GAMMA_MIN, gamma_max, n)
    z_int = _empty(n, n)
    z_mod = _empty(n, n)
    z_switch = _empty(n, n)
    if d2 >= d1:
        logger.warning("d2=%s is not below d1=%s, business model map is empty", d2, d1)
        return BusinessModelChoice(c_axis, g_axis, z_int, z_mod, z_switch)
    for i, gamma in enumerate(g_axis):
        for j, c in enumerate(c_axis):
            pi = profits(ModelParams(d1=d1, d2=d2, gamma=gamma, c=c, k=0.0))
            integral_leases = pi["LI"] > pi["SI"]
            modular_leases = pi["LM"] > pi["SM"]
            z_int[i, j] = float(integral_leases)
            z_mod[i, j] = float(modular_leases)
            z_switch[i, j] = business_switch_code(integral_leases, modular_leases)
    _log_matrix("Business model", z_switch)
    return BusinessModelChoice(c_axis, g_axis, z_int, z_mod, z_switch)


def _strategy_grid(d1: float, d2: float, k: float, c_axis: np.ndarray, g_axis: np.ndarray) -> np.ndarray:
    z = _empty(len(g_axis), len(c_axis))
    if d2 >= d1:
        logger.warning("d2=%s is not below d1=%s, strategy map is empty", d2, d1)
        return z
    for i, gamma in enumerate(g_axis):
        for j, c in enumerate(c_axis):
            pi = profits(ModelParams(d1=d1, d2=d2, gamma=gamma, c=c, k=k))
            z[i, j] = int(best_strategy(pi))
    _log_matrix(f"Strategy map d1={d1} d2={d2} k={k}", z)
    return z


def sweep_joint_choice(
    resolution: int = 60,
    cases: Optional[Sequence[DurabilityCase]] = None,
    c_range: Tuple[float, float] = COST_RANGE,
    gamma_range: Tuple[float, float] = GAMMA_RANGE,
) -> StrategyMaps:
    """Winning strategy over cost and spillover, one map per durability case."""
    n = check_resolution(resolution)
    cases = JOINT_CASES if cases is None else cases
    if not cases:
        raise ValueError("cases must not be empty")
    logger.info("Sweeping joint choice for %d cases at resolution %d", len(cases), n)
    c_axis = axis(*c_range, n)
    g_axis = axis(*gamma_range, n)
    maps = [
        StrategyMap(label=cs.label, strategy_code=_strategy_grid(cs.d1, cs.d2, 0.0, c_axis, g_axis))
        for cs in cases
    ]
    return StrategyMaps(axis_c=c_axis, axis_gamma=g_axis, maps=maps)


def sweep_integration_cost(
    resolution: int = 50,
    k_values: Sequence[float] = INTEGRATION_K_VALUES,
    d1: float = 0.28,
    d2: float = 0.1,
    c_range: Tuple[float, float] = COST_RANGE,
    gamma_range: Tuple[float, float] = GAMMA_RANGE,
) -> StrategyMaps:
    """Winning strategy over cost and spillover, one map per integration cost."""
    n = check_resolution(resolution)
    if not k_values:
        raise ValueError("k_values must not be empty")
    check_finite(d1=d1, d2=d2, **{f"k_values[{i}]": v for i, v in enumerate(k_values)})
    logger.info("Sweeping integration cost for k=%s at resolution %d", list(k_values), n)
    c_axis = axis(*c_range, n)
    g_axis = axis(*gamma_range, n)
    maps = [
        StrategyMap(label=f"k = {k:g}", strategy_code=_strategy_grid(d1, d2, k, c_axis, g_axis), k=float(k))
        for k in k_values
    ]
    return StrategyMaps(axis_c=c_axis, axis_gamma=g_axis, maps=maps)


def design_label(pi: Dict[str, float]) -> str:
    """Strategy label for a durability design.

    Unlike the strategy maps, ties go to the later strategy, so a modular
    strategy that only matches its integral fallback is still reported.
    """
    label = Strategy.SI.name
    for s in Strategy:
        if pi[s.name] >= pi[label]:
            label = s.name
    return label


def _best_design(c0: float, gamma: float, search: np.ndarray) -> Tuple[float, float, str]:
    best_pi = -np.inf
    best = (float(search[0]), float(search[0]), Strategy.SI.name)
    for d1 in search:
        for d2 in search:
            if d2 >= d1:
                continue
            pi: Dict[str, float] = profits(
                ModelParams(d1=d1, d2=d2, gamma=gamma, c=durability_cost(c0, d1, d2), k=0.0)
            )
            strat = design_label(pi)
            if pi[strat] > best_pi:
                best_pi = pi[strat]
                best = (float(d1), float(d2), strat)
    return best


def sweep_endogenous_durability(
    c0_min: float = 0.01,
    c0_max: float = 0.15,
    steps: int = 20,
    gammas: Sequence[float] = ENDOGENOUS_GAMMAS,
    search_points: int = 15,
) -> List[DurabilityPath]:
    """Profit-maximising durabilities when durability raises unit cost.

    For each base cost ``c0`` the (d1, d2) lattice over
    :data:`ENDOGENOUS_SEARCH_RANGE` is searched with unit cost
    :func:`~cemodel.model.durability_cost`; the pair and strategy with the
    highest profit are kept.
    """
    steps = check_resolution(steps, "steps")
    search_points = check_resolution(search_points, "search_points")
    check_finite(c0_min=c0_min, c0_max=c0_max)
    if c0_min > c0_max:
        raise ValueError(f"c0_min ({c0_min}) must not exceed c0_max ({c0_max})")
    if not gammas:
        raise ValueError("gammas must not be empty")
    check_finite(**{f"gammas[{i}]": g for i, g in enumerate(gammas)})
    logger.info("Sweeping endogenous durability over %d base costs for gammas %s", steps, list(gammas))
    c0_values = axis(c0_min, c0_max, steps)
    search = axis(*ENDOGENOUS_SEARCH_RANGE, search_points)
    paths = []
    for gamma in gammas:
        designs = [_best_design(c0, gamma, search) for c0 in c0_values]
        paths.append(DurabilityPath(
            gamma=float(gamma),
            c0_values=c0_values,
            opt_d1=np.array([d[0] for d in designs]),
            opt_d2=np.array([d[1] for d in designs]),
            winning_strategy=[d[2] for d in designs],
        ))
        logger.debug("gamma=%s strategies: %s", gamma, paths[-1].winning_strategy)
    return paths
