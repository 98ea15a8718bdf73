"""
Plotly figure builders for the dashboard charts.

Each builder takes a ``Series`` from the pipeline and returns a new
``go.Figure``; figures are not cached or shared between renders.
"""

import logging
import math

import plotly.graph_objects as go

from .config import (
    ACCENT_COLOR,
    GAUGE_EMPTY_COLOR,
    SATISFACTION_COLORS,
    TREND_COLORS,
)
from .pipeline import Series

logger = logging.getLogger(__name__)

_LAYOUT = dict(
    plot_bgcolor="rgba(0,0,0,0)",
    margin=dict(l=10, r=10, t=40, b=40),
)


def _as_float(value) -> float | None:
    try:
        out = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(out):
        return None
    return out


def _floats(values) -> list[float | None]:
    return [_as_float(v) for v in values]


def yearly_performance_figure(series: Series) -> go.Figure:
    """Bar of calls handled per year with the handling-time line on top."""
    years = [str(y) for y in series.labels]
    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=years,
        y=series.values["Total Calls Handled"],
        name="Total Calls Handled",
        marker_color="rgba(106, 90, 205, 0.4)",
        marker_line_color="rgba(106, 90, 205, 1)",
        marker_line_width=1,
    ))
    fig.add_trace(go.Scatter(
        x=years,
        y=_floats(series.values["Avg Handling Time (mins)"]),
        name="Avg Handling Time (mins)",
        mode="lines+markers",
        line=dict(color="rgba(255, 206, 86, 1)", width=2),
    ))
    fig.update_layout(title="Yearly Performance", height=400, **_LAYOUT)
    fig.update_yaxes(rangemode="tozero")
    return fig


def handling_time_figure(series: Series) -> go.Figure:
    """Average handling time per year."""
    fig = go.Figure(go.Scatter(
        x=[str(y) for y in series.labels],
        y=_floats(series.values["Avg Handling Time (mins)"]),
        name="Avg Handling Time (mins)",
        mode="lines+markers",
        line=dict(color="rgba(231, 76, 60, 1)", width=2),
        fill="tozeroy",
        fillcolor="rgba(231, 76, 60, 0.2)",
    ))
    fig.update_layout(title="Average Handling Time", yaxis_title="Minutes", height=350, **_LAYOUT)
    fig.update_yaxes(rangemode="tozero")
    return fig


def satisfaction_doughnut_figure(series: Series) -> go.Figure:
    """Customer satisfaction split as a doughnut."""
    fig = go.Figure(go.Pie(
        labels=series.labels,
        values=series.values["Customers"],
        hole=0.5,
        marker=dict(colors=SATISFACTION_COLORS),
        sort=False,
        hovertemplate="%{label}: %{value}<extra></extra>",
    ))
    fig.update_layout(title="Customer Satisfaction", height=400, **_LAYOUT)
    return fig


def satisfaction_histogram_figure(series: Series) -> go.Figure:
    """Customer satisfaction counts per score as bars."""
    fig = go.Figure(go.Bar(
        x=series.labels,
        y=series.values["Customers"],
        marker_color=SATISFACTION_COLORS,
        text=series.values["Customers"],
        textposition="outside",
    ))
    fig.update_layout(title="Satisfaction Distribution", yaxis_title="Customers", height=350, **_LAYOUT)
    return fig


def radar_figure(series: Series, value_key: str, title: str = "Overall KPI") -> go.Figure:
    """Closed radar polygon of one value array over the series labels."""
    labels = list(series.labels)
    values = _floats(series.values[value_key])
    fig = go.Figure(go.Scatterpolar(
        r=values + values[:1],
        theta=labels + labels[:1],
        fill="toself",
        fillcolor="rgba(255, 99, 132, 0.2)",
        line=dict(color="rgba(255, 99, 132, 1)", width=1),
        name=value_key,
    ))
    fig.update_layout(
        title=title,
        polar=dict(radialaxis=dict(visible=True, rangemode="tozero")),
        showlegend=False,
        height=400,
        **_LAYOUT,
    )
    return fig


def trend_figure(series: Series) -> go.Figure:
    """Daily mean of each KPI as smoothed lines over a date axis."""
    fig = go.Figure()
    for i, (name, values) in enumerate(series.values.items()):
        fig.add_trace(go.Scatter(
            x=series.labels,
            y=_floats(values),
            name=name,
            mode="lines+markers",
            line=dict(color=TREND_COLORS[i % len(TREND_COLORS)], width=2, shape="spline"),
        ))
    fig.update_layout(title="KPI Trend", height=400, **_LAYOUT)
    fig.update_xaxes(type="date", tickformat="%b %d, %Y", nticks=5)
    return fig


def gauge_figure(value: float, color: str, label: str = "") -> go.Figure:
    """Two-slice doughnut showing a 0-1 score as the filled share.

    The drawn share is clipped to 0-1; the centre text shows the raw value.
    """
    share = min(max(value, 0.0), 1.0)
    fig = go.Figure(go.Pie(
        labels=["Filled", "Empty"],
        values=[share, 1 - share],
        hole=0.8,
        marker=dict(colors=[color, GAUGE_EMPTY_COLOR]),
        sort=False,
        direction="clockwise",
        textinfo="none",
        hoverinfo="skip",
    ))
    fig.update_layout(
        title=label,
        showlegend=False,
        height=250,
        annotations=[dict(text=f"{value:.2f}", x=0.5, y=0.5, showarrow=False, font=dict(size=22, color=color))],
        **_LAYOUT,
    )
    return fig


def boolean_counts_figure(series: Series) -> go.Figure:
    """Grouped bars of true/false counts with the counts printed above."""
    fig = go.Figure()
    colors = {"True": "rgba(255, 111, 0, 0.6)", "False": "rgba(247, 147, 30, 0.6)"}
    for name, values in series.values.items():
        fig.add_trace(go.Bar(
            x=series.labels,
            y=values,
            name=name,
            marker_color=colors.get(name, ACCENT_COLOR),
            text=values,
            textposition="outside",
        ))
    fig.update_layout(
        title="Distribution of KPI",
        barmode="group",
        height=450,
        legend=dict(orientation="h", y=1.1),
        **_LAYOUT,
    )
    fig.update_yaxes(visible=False, rangemode="tozero")
    return fig


def agent_summary_figure(series: Series, metric: str = "Calls") -> go.Figure:
    """One bar per agent for the chosen summary metric."""
    fig = go.Figure(go.Bar(
        x=[str(a) for a in series.labels],
        y=_floats(series.values[metric]),
        marker_color=ACCENT_COLOR,
    ))
    fig.update_layout(title=f"{metric} by Agent", xaxis_title="Agent ID", height=350, **_LAYOUT)
    return fig


def sentiment_pie_figure(series: Series) -> go.Figure:
    """Share of calls per sentiment label."""
    fig = go.Figure(go.Pie(
        labels=series.labels,
        values=series.values["Calls"],
        hovertemplate="%{label}: %{value}<extra></extra>",
    ))
    fig.update_layout(title="Call Sentiment Mix", height=350, **_LAYOUT)
    return fig


def figure_to_png(fig: go.Figure, width: int = 1000, height: int = 600) -> bytes:
    """Render a figure to PNG bytes (uses kaleido)."""
    try:
        return fig.to_image(format="png", width=width, height=height)
    except Exception:
        logger.exception("PNG export failed")
        raise
