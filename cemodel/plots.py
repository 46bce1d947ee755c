# MIT License
"""Plotly figure builders for the strategy dashboard.

This module turns the matrices produced by :mod:`cemodel.grids` into
discrete heatmaps.  Keeping the plotting code separate from the page
logic keeps the colour legends consistent across pages.  ``NaN`` cells
(infeasible ``d2 >= d1``) are left transparent by plotly.
"""

from __future__ import annotations
from typing import List, Sequence, Tuple
import numpy as np
import pandas as pd
import plotly.graph_objects as go
from .params import Strategy

ARCH_COLORS = ["rgb(240,240,240)", "rgb(200,30,30)"]
STRATEGY_COLORS = ["rgb(31,119,180)", "rgb(255,127,14)", "rgb(44,160,44)", "rgb(214,39,40)"]
SWITCH_COLORS = ["rgb(240,240,240)", "rgb(255,127,14)", "rgb(44,160,44)", "rgb(31,119,180)"]


def discrete_colorscale(colors: Sequence[str]) -> List[Tuple[float, str]]:
    """Step colorscale with one flat band per category."""
    n = len(colors)
    scale = []
    for i, col in enumerate(colors):
        scale.append((i / n, col))
        scale.append(((i + 1) / n, col))
    return scale


def fig_category_map(
    z: np.ndarray,
    x: np.ndarray,
    y: np.ndarray,
    labels: Sequence[str],
    colors: Sequence[str],
    title: str,
    xaxis_title: str,
    yaxis_title: str,
) -> go.Figure:
    """Heatmap of integer category codes ``0..len(labels)-1``.

    Parameters
    ----------
    z:
        Matrix of codes, rows follow ``y`` and columns follow ``x``.
    labels:
        Legend text for each code.
    colors:
        One colour per code.

    Returns
    -------
    plotly.graph_objects.Figure
        A heatmap without smoothing and a categorical colour bar.
    """
    n = len(labels)
    fig = go.Figure(go.Heatmap(
        z=z,
        x=x,
        y=y,
        zmin=-0.5,
        zmax=n - 0.5,
        zsmooth=False,
        colorscale=discrete_colorscale(colors),
        colorbar=dict(tickvals=list(range(n)), ticktext=list(labels)),
        hovertemplate=f"{xaxis_title}: %{{x:.3f}}<br>{yaxis_title}: %{{y:.3f}}<br>code: %{{z}}<extra></extra>",
    ))
    fig.update_layout(
        title=title,
        xaxis_title=xaxis_title,
        yaxis_title=yaxis_title,
        template="plotly_white",
    )
    return fig


def fig_architecture_map(z: np.ndarray, x: np.ndarray, y: np.ndarray, title: str) -> go.Figure:
    return fig_category_map(z, x, y, ["Integral", "Modular"], ARCH_COLORS, title, "δ1 (strong)", "δ2 (weak)")


def fig_switching_map(z: np.ndarray, x: np.ndarray, y: np.ndarray, title: str) -> go.Figure:
    labels = ["Integral in both", "Modular when leasing", "Modular when selling", "Modular in both"]
    return fig_category_map(z, x, y, labels, SWITCH_COLORS, title, "δ1 (strong)", "δ2 (weak)")


def fig_business_switch_map(z: np.ndarray, x: np.ndarray, y: np.ndarray, title: str) -> go.Figure:
    labels = ["Sell", "Lease integral, sell modular", "Lease"]
    return fig_category_map(z, x, y, labels, SWITCH_COLORS[:3], title, "c", "γ")


def fig_strategy_map(z: np.ndarray, x: np.ndarray, y: np.ndarray, title: str) -> go.Figure:
    labels = [s.name for s in Strategy]
    return fig_category_map(z, x, y, labels, STRATEGY_COLORS, title, "c", "γ")


def fig_durability_path(df: pd.DataFrame) -> go.Figure:
    """Optimal durabilities against base cost, markers coloured by strategy.

    Parameters
    ----------
    df:
        Output of :meth:`DurabilityPath.to_frame` for one or more gammas.
    """
    fig = go.Figure()
    colors = dict(zip([s.name for s in Strategy], STRATEGY_COLORS))
    for gamma, part in df.groupby("gamma"):
        marker = dict(color=[colors[s] for s in part["strategy"]], size=8)
        fig.add_scatter(x=part["c0"], y=part["opt_d1"], mode="lines+markers", marker=marker,
                        text=part["strategy"], name=f"δ1*, γ={gamma:g}")
        fig.add_scatter(x=part["c0"], y=part["opt_d2"], mode="lines+markers", marker=marker,
                        line=dict(dash="dash"), text=part["strategy"], name=f"δ2*, γ={gamma:g}")
    fig.update_layout(
        title="Endogenous Durability",
        xaxis_title="Base cost c0",
        yaxis_title="Optimal durability",
        template="plotly_white",
    )
    return fig


def fig_profit_bars(profits: dict) -> go.Figure:
    fig = go.Figure()
    fig.add_bar(x=list(profits.keys()), y=list(profits.values()), marker_color=STRATEGY_COLORS)
    fig.update_layout(template="plotly_white", title="Profit by strategy", yaxis_title="Profit")
    return fig
