# MIT License
"""Deterministic lattice searches for the leasing strategies.

Leasing profits have no tractable closed form over the whole parameter
range, so the firm's choice of lease quantities is approximated by an
exhaustive search over a regular lattice of market shares.  Each search
evaluates every lattice point at once with numpy and keeps the best
feasible profit; the result only depends on the inputs and the lattice
resolution.
"""

from __future__ import annotations
import numpy as np
from .utils import check_resolution, unit_lattice

LI_RESOLUTION = 25
LM_STEPS = 16


def optimize_leasing_integral(d_sum_L: float, c: float, resolution: int = LI_RESOLUTION) -> float:
    """Best leasing profit for an integral product.

    Searches the shares of new-product lessees ``Ln`` and used-product
    lessees ``Lu`` on an ``resolution x resolution`` lattice over [0, 1]
    with ``Lu <= Ln``.

    Parameters
    ----------
    d_sum_L:
        Sum of the leasing durabilities ``d1L + d2L``.
    c:
        Per-unit production cost; a new unit costs ``2c``.
    resolution:
        Lattice points per axis.

    Returns
    -------
    float
        Maximum profit over the feasible lattice, floored at 0.
    """
    s = check_resolution(resolution)
    grid = unit_lattice(s)
    Ln, Lu = np.meshgrid(grid, grid, indexing="ij")
    half = d_sum_L / 2.0
    rn = 1.0 - Ln - half * Lu
    ru = half * (1.0 - Ln - Lu)
    # rental prices must be non-negative
    ok = (Lu <= Ln) & (rn >= 0.0) & (ru >= 0.0)
    profit = rn * Ln + ru * Lu - 2.0 * c * Ln
    best = float(profit[ok].max()) if ok.any() else 0.0
    return max(best, 0.0)


def optimize_leasing_modular(d1L: float, d2L: float, c: float, k: float = 0.0, steps: int = LM_STEPS) -> float:
    """Best leasing profit for a modular product.

    The lease market splits into new/new (``Lnn``), used/new (``Lun``)
    and used/used (``Luu``) segments.  Feasible points satisfy
    ``Lun + Luu <= Lnn`` and ``Lnn + Lun + Luu < 1``.  Prices are built
    from the top segment down: ``ruu`` first, then ``run`` and ``rnn``.
    Unit costs are ``2c + k``, ``c + k`` and ``k``.

    Returns the maximum profit over the feasible lattice; the origin is
    always feasible so the value is never negative.
    """
    s = check_resolution(steps, "steps")
    grid = unit_lattice(s)
    Lnn, Lun, Luu = np.meshgrid(grid, grid, grid, indexing="ij")
    Q = Lnn + Lun + Luu
    ok = (Lun + Luu <= Lnn) & (Q < 1.0)

    u_un = (1.0 + d1L) / 2.0
    u_uu = (d1L + d2L) / 2.0
    ruu = u_uu * (1.0 - Q)
    run = ruu + (u_un - u_uu) * (1.0 - Lnn - Lun)
    rnn = run + (1.0 - u_un) * (1.0 - Lnn)

    revenue = rnn * Lnn + run * Lun + ruu * Luu
    cost = (2.0 * c + k) * Lnn + (c + k) * Lun + k * Luu
    profit = revenue - cost
    return float(profit[ok].max())
