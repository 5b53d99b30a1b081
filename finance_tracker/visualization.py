"""Plotly figures for the finance tracker charts.

Each function accepts a series produced by :mod:`aggregation` or
:mod:`budgets` and returns a ``plotly.graph_objects.Figure``.  An empty
series yields a blank figure titled "No data to display".
"""

from __future__ import annotations

from typing import Sequence

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from .aggregation import MonthlyAmount, Share
from .budgets import BudgetSeries

PIE_COLORS = [
    "#8884d8",
    "#82ca9d",
    "#ffc658",
    "#ff8042",
    "#0088FE",
    "#00C49F",
    "#FFBB28",
    "#FF8042",
    "#a4de6c",
    "#d0ed57",
]
AMOUNT_COLOR = "rgba(75, 192, 192, 0.6)"
SPENT_COLOR = "rgba(255, 99, 132, 0.6)"
MONTHLY_COLOR = "#dc2626"


def _empty_figure() -> go.Figure:
    fig = go.Figure()
    fig.update_layout(title="No data to display")
    return fig


def create_share_pie_chart(shares: Sequence[Share], title: str | None = None) -> go.Figure:
    """Pie chart of group shares.

    Parameters
    ----------
    shares : sequence of Share
        Output of :func:`aggregation.aggregate` or one of its wrappers.
    title : str, optional
        Chart title.

    Returns
    -------
    plotly.graph_objects.Figure
        Pie chart whose slices read ``"<key> (<percentage>%)"``.
    """
    if not shares:
        return _empty_figure()
    df = pd.DataFrame(
        {
            "Label": [f"{share.key} ({share.percentage}%)" for share in shares],
            "Name": [str(share.key) for share in shares],
            "Value": [share.total for share in shares],
        }
    )
    fig = px.pie(
        df,
        names="Label",
        values="Value",
        custom_data=["Name"],
        color_discrete_sequence=PIE_COLORS,
    )
    fig.update_traces(
        textinfo="label",
        hovertemplate="%{customdata[0]}: $%{value:.2f}<extra></extra>",
        sort=False,
    )
    fig.update_layout(title=title or "Breakdown")
    return fig


def create_monthly_bar_chart(series: Sequence[MonthlyAmount], title: str | None = None) -> go.Figure:
    """Bar chart of a monthly series, oldest month on the left."""
    if not series:
        return _empty_figure()
    df = pd.DataFrame({"Month": [m.month for m in series], "Amount": [m.amount for m in series]})
    fig = px.bar(df, x="Month", y="Amount")
    fig.update_traces(marker_color=MONTHLY_COLOR, hovertemplate="%{x}: $%{y:.2f}<extra></extra>")
    fig.update_layout(
        title=title or "Monthly totals",
        xaxis_title="Month",
        yaxis_title="Amount",
        xaxis={"categoryorder": "array", "categoryarray": list(df["Month"])},
    )
    return fig


def create_budget_bar_chart(series: BudgetSeries, title: str | None = None) -> go.Figure:
    """Grouped bars comparing budgeted amount and amount spent.

    Parameters
    ----------
    series : BudgetSeries
        Labels with parallel amount/spent values.
    title : str, optional
        Chart title.
    """
    if series.empty:
        return _empty_figure()
    fig = go.Figure(
        data=[
            go.Bar(name="Amount", x=series.labels, y=series.amount, marker_color=AMOUNT_COLOR),
            go.Bar(name="Spent", x=series.labels, y=series.spent, marker_color=SPENT_COLOR),
        ]
    )
    fig.update_layout(barmode="group", title=title or "Budget vs. spent")
    return fig
