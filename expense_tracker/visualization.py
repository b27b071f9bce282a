"""Plotly charts for the spending breakdown.

Both functions accept the Series returned by
:func:`expense_tracker.aggregation.category_totals_series` and keep its
order, which is the order categories first appear in the list.
"""

from __future__ import annotations

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go


def _empty_figure() -> go.Figure:
    fig = go.Figure()
    fig.update_layout(title="No data to display")
    return fig


def create_category_bar_chart(series: pd.Series, title: str | None = None) -> go.Figure:
    """Generate a bar chart of spending per category.

    Parameters
    ----------
    series : pandas.Series
        Series indexed by category with summed amounts.
    title : str, optional
        Title for the chart.

    Returns
    -------
    plotly.graph_objects.Figure
        Bar chart of categories vs amounts.
    """
    if series.empty:
        return _empty_figure()
    df = series.reset_index()
    df.columns = ["Category", "Amount"]
    fig = px.bar(df, x="Category", y="Amount")
    fig.update_layout(
        title=title or "Spending by category",
        xaxis_title="Category",
        yaxis_title="Amount",
        xaxis={"categoryorder": "array", "categoryarray": list(df["Category"])},
    )
    fig.update_yaxes(tickprefix="$")
    return fig


def create_category_pie_chart(series: pd.Series, title: str | None = None) -> go.Figure:
    """Generate a pie chart of spending per category."""
    if series.empty:
        return _empty_figure()
    df = series.reset_index()
    df.columns = ["Category", "Amount"]
    fig = px.pie(df, names="Category", values="Amount")
    fig.update_traces(sort=False)
    fig.update_layout(title=title or "Category breakdown")
    return fig
