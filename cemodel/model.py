# MIT License
"""Profit model for the four circular-economy strategies.

Each function takes a :class:`~cemodel.params.ModelParams` and returns the
profit of one strategy:

* ``SI`` sell an integral product,
* ``LI`` lease an integral product,
* ``SM`` sell a modular product,
* ``LM`` lease a modular product.

Profits are floored at zero by construction: a strategy whose cost or
margin condition fails contributes exactly 0.  The modular strategies can
always fall back to integral production, so ``SM >= SI`` and
``LM >= LI`` hold for every parameter point.
"""

from __future__ import annotations
from typing import Dict, Sequence
from .optimizers import optimize_leasing_integral, optimize_leasing_modular
from .params import ModelParams, Strategy


def _integral_closed_form(d_sum: float, c: float) -> float:
    cost = 2.0 * c
    # cost above the maximum willingness to pay
    if cost > 1.0 + d_sum / 2.0:
        return 0.0
    numerator = (2.0 - 2.0 * cost + d_sum) ** 2
    denominator = 8.0 * (2.0 + 3.0 * d_sum)
    return numerator / denominator


def profit_si(p: ModelParams) -> float:
    """Sell-integral profit ``(2 - 4c + d_sum_S)^2 / (8 (2 + 3 d_sum_S))``."""
    return _integral_closed_form(p.d_sum_S, p.c)


def li_cost_threshold(p: ModelParams) -> float:
    """Cost below which the leasing firm does not lease out every used unit."""
    return (2.0 - p.d_sum_L) / 8.0


def profit_li(p: ModelParams) -> float:
    """Lease-integral profit.

    Below :func:`li_cost_threshold` the closed form is not valid and the
    lease quantities are found by lattice search instead.
    """
    if p.c < li_cost_threshold(p):
        return optimize_leasing_integral(p.d_sum_L, p.c)
    return _integral_closed_form(p.d_sum_L, p.c)


def modular_components(p: ModelParams) -> Dict[str, float]:
    """Profit of each component sold separately.

    Returns
    -------
    dict
        ``{"strong": pi1, "weak": pi2}``; a component with a non-positive
        margin contributes 0.
    """
    margin2 = 1.0 - 2.0 * p.c - p.d2 - p.k
    pi2 = 0.0 if margin2 <= 0 else margin2 ** 2 / (8.0 * (1.0 - p.d2))
    margin1 = 1.0 - 2.0 * p.c - p.k + 2.0 * p.d2 + p.d1
    pi1 = 0.0 if margin1 <= 0 else margin1 ** 2 / (8.0 * (1.0 + 3.0 * p.d1 + 4.0 * p.d2))
    return {"strong": pi1, "weak": pi2}


def _sm(p: ModelParams, pi_si: float) -> float:
    parts = modular_components(p)
    return max(pi_si, parts["strong"] + parts["weak"])


def _lm(p: ModelParams, pi_li: float) -> float:
    searched = optimize_leasing_modular(p.d1L, p.d2L, p.c, p.k)
    return max(searched, pi_li, 0.0)


def profit_sm(p: ModelParams) -> float:
    """Sell-modular profit, never below :func:`profit_si`."""
    return _sm(p, profit_si(p))


def profit_lm(p: ModelParams) -> float:
    """Lease-modular profit, never below :func:`profit_li`."""
    return _lm(p, profit_li(p))


def profits(p: ModelParams) -> Dict[str, float]:
    """All four profits for one parameter point, keyed in strategy order."""
    pi_si = profit_si(p)
    pi_li = profit_li(p)
    return {
        Strategy.SI.name: pi_si,
        Strategy.LI.name: pi_li,
        Strategy.SM.name: _sm(p, pi_si),
        Strategy.LM.name: _lm(p, pi_li),
    }


def evaluate_point(d1: float, d2: float, gamma: float, c: float, k: float = 0.0) -> Dict[str, float]:
    """Profits ``{"SI", "LI", "SM", "LM"}`` at a single parameter point.

    Raises ``pydantic.ValidationError`` for non-finite inputs or
    durabilities outside (0, 1).
    """
    return profits(ModelParams(d1=d1, d2=d2, gamma=gamma, c=c, k=k))


def best_strategy(values: Sequence[float] | Dict[str, float]) -> Strategy:
    """Strategy with the highest profit.

    Ties go to the strategy that comes first in :class:`Strategy` order.
    """
    if isinstance(values, dict):
        values = [values[s.name] for s in Strategy]
    best = 0
    for i, v in enumerate(values):
        if v > values[best]:
            best = i
    return Strategy(best)


def durability_cost(c0: float, d1: float, d2: float) -> float:
    """Unit cost when durability is a design choice: ``c0 + 0.08 d1^2 + 0.16 d2^2``."""
    return c0 + 0.08 * d1 ** 2 + 0.16 * d2 ** 2
