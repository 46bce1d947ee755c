"""Smoke tests for the plotly figure builders."""

import numpy as np
import pandas as pd

from cemodel.grids import sweep_architecture_choice
from cemodel.plots import (
    discrete_colorscale,
    fig_architecture_map,
    fig_durability_path,
    fig_profit_bars,
    fig_strategy_map,
)


def test_discrete_colorscale_covers_unit_interval():
    scale = discrete_colorscale(["a", "b", "c"])
    assert scale[0] == (0.0, "a")
    assert scale[-1] == (1.0, "c")
    assert len(scale) == 6


def test_architecture_map_heatmap():
    res = sweep_architecture_choice(1.0, 0.15, 0.0, 4)
    fig = fig_architecture_map(res.sell, res.axis_d1, res.axis_d2, "Selling")
    assert fig.data[0].type == "heatmap"
    assert list(fig.data[0].colorbar.ticktext) == ["Integral", "Modular"]


def test_strategy_map_legend():
    z = np.array([[0, 1], [2, 3]], dtype=float)
    fig = fig_strategy_map(z, np.array([0.1, 0.2]), np.array([0.5, 1.0]), "Joint")
    assert list(fig.data[0].colorbar.ticktext) == ["SI", "LI", "SM", "LM"]


def test_durability_path_traces():
    df = pd.DataFrame({
        "gamma": [0.72, 0.72, 1.02, 1.02],
        "c0": [0.01, 0.02, 0.01, 0.02],
        "opt_d1": [0.9, 0.8, 0.9, 0.8],
        "opt_d2": [0.2, 0.1, 0.3, 0.2],
        "strategy": ["LM", "SM", "LI", "SI"],
    })
    fig = fig_durability_path(df)
    assert len(fig.data) == 4


def test_profit_bars():
    fig = fig_profit_bars({"SI": 0.1, "LI": 0.2, "SM": 0.15, "LM": 0.25})
    assert list(fig.data[0].x) == ["SI", "LI", "SM", "LM"]
