"""Tests for the lattice searches used by the leasing strategies."""

import math

import numpy as np
import pytest

from cemodel.optimizers import optimize_leasing_integral, optimize_leasing_modular


def _li_loop(d_sum_L, c, s):
    best = -1e9
    for i in range(s):
        Ln = i / (s - 1)
        for j in range(s):
            Lu = j / (s - 1)
            if Lu > Ln:
                continue
            rn = 1 - Ln - (d_sum_L / 2) * Lu
            ru = (d_sum_L / 2) * (1 - Ln - Lu)
            if rn < 0 or ru < 0:
                continue
            best = max(best, rn * Ln + ru * Lu - 2 * c * Ln)
    return max(best, 0.0)


def test_li_matches_reference_loop():
    for d_sum_L, c in [(0.7, 0.05), (1.2, 0.01), (1.9, 0.1)]:
        assert math.isclose(optimize_leasing_integral(d_sum_L, c, 11), _li_loop(d_sum_L, c, 11), abs_tol=1e-12)


def test_li_zero_when_unprofitable():
    assert optimize_leasing_integral(0.5, 5.0) == 0.0


def test_lm_origin_feasible():
    # costs above any price: only the empty lease book is profitable
    assert optimize_leasing_modular(0.5, 0.2, 1.0, 0.0) == 0.0


def test_lm_positive_for_cheap_production():
    assert optimize_leasing_modular(0.5, 0.2, 0.05, 0.0) > 0.0


def test_lm_decreasing_in_integration_cost():
    a = optimize_leasing_modular(0.6, 0.3, 0.1, 0.0)
    b = optimize_leasing_modular(0.6, 0.3, 0.1, 0.05)
    assert b <= a


def test_finer_lattice_not_worse_on_nested_grid():
    # every point of the 6-lattice is on the 11-lattice
    assert optimize_leasing_integral(0.8, 0.05, 11) >= optimize_leasing_integral(0.8, 0.05, 6)
    assert optimize_leasing_modular(0.5, 0.2, 0.05, 0.0, 11) >= optimize_leasing_modular(0.5, 0.2, 0.05, 0.0, 6)


@pytest.mark.parametrize("bad", [0, 1, -3])
def test_resolution_validated(bad):
    with pytest.raises(ValueError):
        optimize_leasing_integral(0.7, 0.05, bad)
    with pytest.raises(ValueError):
        optimize_leasing_modular(0.5, 0.2, 0.05, 0.0, bad)
