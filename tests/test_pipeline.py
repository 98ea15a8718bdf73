import math

import pandas as pd
import pytest

from agent_kpi_dashboard.filters import FilterState, GroupingLevel, TimeWindow
from agent_kpi_dashboard.kpis import boolean_counts, overall_kpi_averages
from agent_kpi_dashboard.pipeline import (
    Series,
    collect_parse_issues,
    run_agent_pipeline,
    run_yearly_pipeline,
)


def test_series_rejects_mismatched_lengths():
    with pytest.raises(ValueError):
        Series(labels=["a", "b"], values={"x": [1]})


def test_series_to_frame():
    frame = Series(labels=["a", "b"], values={"x": [1, 2]}).to_frame()
    assert frame.columns.tolist() == ["label", "x"]
    assert len(frame) == 2


def test_yearly_pipeline_scenario(scenario_df):
    result = run_yearly_pipeline(scenario_df)
    yearly = result.series["yearly"]
    assert yearly.labels == [2023, 2024]
    assert yearly.values["Total Calls Handled"] == [30, 15]
    assert yearly.values["Avg Handling Time (mins)"] == ["6.00", "6.00"]
    assert result.scalars["grand_total_calls"] == 45


def test_yearly_pipeline_series(yearly_df):
    result = run_yearly_pipeline(yearly_df)
    assert result.has_data
    assert result.series["satisfaction"].values["Customers"] == [1, 0, 1, 1, 1]
    assert len(result.series["kpi"]) == 4
    fields = {(i.field, i.reason) for i in result.parse_issues}
    assert ("Calls_Handled", "not a number") in fields
    assert ("Average_Handling_Time", "not a number") in fields
    assert ("Clarity_of_Speech", "not a number") not in fields


def test_yearly_pipeline_empty_dataset():
    result = run_yearly_pipeline(pd.DataFrame(columns=["Year", "Calls_Handled"]))
    assert result.is_empty
    assert result.series == {}


def test_agent_pipeline_series_lengths(agent_df, now):
    result = run_agent_pipeline(agent_df, FilterState(TimeWindow.ALL_TIME), now)
    assert result.has_data
    assert set(result.series) == {"trend", "overall_kpi", "boolean", "agents", "sentiment"}
    for series in result.series.values():
        for values in series.values.values():
            assert len(values) == len(series.labels)
    assert result.scalars["row_count"] == 6


def test_agent_pipeline_gauge_scalars(agent_df, now):
    state = FilterState(TimeWindow.LAST_7_DAYS)
    result = run_agent_pipeline(agent_df, state, now)
    assert result.scalars["Call Sentiment"] == pytest.approx(0.7)
    assert result.scalars["Empathy"] == pytest.approx(0.6)


def test_agent_pipeline_agent_totals_match_rows(agent_df, now):
    result = run_agent_pipeline(agent_df, FilterState(TimeWindow.ALL_TIME), now)
    assert sum(result.series["agents"].values["Calls"]) == len(result.filtered)


def test_agent_pipeline_empty_group(agent_df, now):
    state = FilterState(TimeWindow.ALL_TIME, GroupingLevel.AGENT, "A999")
    result = run_agent_pipeline(agent_df, state, now)
    assert result.is_empty
    assert not result.has_data
    assert result.series == {}
    assert result.parse_issues == []


def test_parse_issues_reported(agent_df, now):
    result = run_agent_pipeline(agent_df, FilterState(TimeWindow.ALL_TIME), now)
    reported = {(i.field, i.value, i.reason) for i in result.parse_issues}
    assert reported == {
        ("CallDate", "not a date", "unparseable date"),
        ("IdentifiedCustomer", "yes", "not true/false"),
    }


def test_parse_issue_reporting_leaves_aggregates_unchanged(agent_df, now):
    result = run_agent_pipeline(agent_df, FilterState(TimeWindow.ALL_TIME), now)
    boolean = result.series["boolean"]
    counts = boolean_counts(agent_df)
    assert boolean.values["True"] == list(counts["true"].values())
    assert boolean.values["False"] == list(counts["false"].values())
    radar = result.series["overall_kpi"].values["KPI Scores"]
    assert radar == pytest.approx(list(overall_kpi_averages(agent_df).values()))


def test_collect_parse_issues_numeric_and_satisfaction():
    df = pd.DataFrame({"Calls_Handled": ["1", "x"], "Customer_Satisfaction": ["3", "9"]})
    issues = collect_parse_issues(
        df,
        numeric_fields=["Calls_Handled", "Missing"],
        satisfaction_field="Customer_Satisfaction",
    )
    assert [(i.row, i.field, i.reason) for i in issues] == [
        (1, "Calls_Handled", "not a number"),
        (1, "Customer_Satisfaction", "score outside 1-5"),
    ]


def test_nan_sentiment_reaches_gauge(agent_df, now):
    df = agent_df.copy()
    df.loc[0, "CallSentiment"] = "n/a"
    result = run_agent_pipeline(df, FilterState(TimeWindow.LAST_7_DAYS), now)
    assert math.isnan(result.scalars["Call Sentiment"])
    assert math.isnan(result.series["trend"].values["Call Sentiment"][0])
