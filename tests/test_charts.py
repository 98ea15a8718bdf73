import pytest

from agent_kpi_dashboard.charts import (
    agent_summary_figure,
    boolean_counts_figure,
    gauge_figure,
    handling_time_figure,
    radar_figure,
    satisfaction_doughnut_figure,
    satisfaction_histogram_figure,
    sentiment_pie_figure,
    trend_figure,
    yearly_performance_figure,
)
from agent_kpi_dashboard.filters import FilterState, TimeWindow
from agent_kpi_dashboard.pipeline import run_agent_pipeline, run_yearly_pipeline


@pytest.fixture
def yearly_result(scenario_df):
    return run_yearly_pipeline(scenario_df)


@pytest.fixture
def agent_result(agent_df, now):
    return run_agent_pipeline(agent_df, FilterState(TimeWindow.ALL_TIME), now)


def test_yearly_performance_figure(yearly_result):
    fig = yearly_performance_figure(yearly_result.series["yearly"])
    assert [trace.type for trace in fig.data] == ["bar", "scatter"]
    assert list(fig.data[0].x) == ["2023", "2024"]
    assert list(fig.data[1].y) == [6.0, 6.0]


def test_handling_time_figure(yearly_result):
    fig = handling_time_figure(yearly_result.series["yearly"])
    assert fig.data[0].type == "scatter"


def test_satisfaction_figures(yearly_result):
    doughnut = satisfaction_doughnut_figure(yearly_result.series["satisfaction"])
    assert doughnut.data[0].type == "pie"
    assert doughnut.data[0].hole == 0.5

    bars = satisfaction_histogram_figure(yearly_result.series["satisfaction"])
    assert len(bars.data[0].x) == 5


def test_radar_figure_closes_polygon(agent_result):
    series = agent_result.series["overall_kpi"]
    fig = radar_figure(series, "KPI Scores")
    trace = fig.data[0]
    assert trace.type == "scatterpolar"
    assert len(trace.r) == len(series.labels) + 1
    assert trace.theta[0] == trace.theta[-1]


def test_trend_figure_has_one_line_per_metric(agent_result):
    fig = trend_figure(agent_result.series["trend"])
    assert [trace.name for trace in fig.data] == ["Call Sentiment", "Agent Enthusiasm", "Empathy"]


def test_gauge_figure():
    fig = gauge_figure(0.7, "#f39c12", "Call Sentiment")
    assert list(fig.data[0].values) == [pytest.approx(0.7), pytest.approx(0.3)]
    assert fig.layout.annotations[0].text == "0.70"


def test_gauge_figure_clips_share():
    fig = gauge_figure(1.4, "#27ae60")
    assert list(fig.data[0].values) == [1.0, 0.0]
    assert fig.layout.annotations[0].text == "1.40"


def test_boolean_counts_figure(agent_result):
    fig = boolean_counts_figure(agent_result.series["boolean"])
    assert [trace.name for trace in fig.data] == ["True", "False"]
    assert fig.layout.barmode == "group"


def test_agent_and_sentiment_figures(agent_result):
    bars = agent_summary_figure(agent_result.series["agents"], "Call Duration")
    assert list(bars.data[0].x) == ["A1", "A2", "A3"]

    pie = sentiment_pie_figure(agent_result.series["sentiment"])
    assert sum(pie.data[0].values) == 6
