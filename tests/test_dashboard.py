import pandas as pd

from agent_kpi_dashboard.config import BAND_COLORS, DETAIL_TABLE_COLUMNS
from agent_kpi_dashboard.dashboard import (
    detail_cell_color,
    get_agent_detail_table,
    get_available_ids,
    get_gauges,
    get_parse_issue_summary,
    get_yearly_cards,
)
from agent_kpi_dashboard.filters import FilterState, GroupingLevel, TimeWindow
from agent_kpi_dashboard.pipeline import run_agent_pipeline, run_yearly_pipeline


def test_yearly_cards(scenario_df):
    cards = get_yearly_cards(run_yearly_pipeline(scenario_df))
    assert cards == {"total_calls": "45", "avg_handling_time": "6.00 mins"}


def test_yearly_cards_no_data():
    cards = get_yearly_cards(run_yearly_pipeline(pd.DataFrame()))
    assert cards == {"total_calls": "N/A", "avg_handling_time": "N/A"}


def test_gauges(agent_df, now):
    result = run_agent_pipeline(agent_df, FilterState(TimeWindow.LAST_7_DAYS), now)
    gauges = {g["label"]: g for g in get_gauges(result)}
    assert gauges["Call Sentiment"]["display"] == "0.70"
    assert gauges["Call Sentiment"]["band"] == "amber"
    assert gauges["Empathy"]["color"] == BAND_COLORS["amber"]


def test_gauges_no_data(agent_df, now):
    state = FilterState(TimeWindow.ALL_TIME, GroupingLevel.TEAM, "T9")
    gauges = get_gauges(run_agent_pipeline(agent_df, state, now))
    assert [g["display"] for g in gauges] == ["N/A", "N/A", "N/A"]
    assert all(g["band"] == "grey" for g in gauges)


def test_agent_detail_table(agent_df):
    table = get_agent_detail_table(agent_df)
    assert table.columns.tolist() == list(DETAIL_TABLE_COLUMNS)
    assert table["Agent ID"].tolist() == agent_df["AgentID"].tolist()
    assert table.loc[1, "Rude Behaviour"] == "TRUE"


def test_agent_detail_table_empty(agent_df):
    table = get_agent_detail_table(agent_df.iloc[0:0])
    assert table.empty
    assert table.columns.tolist() == list(DETAIL_TABLE_COLUMNS)


def test_detail_cell_color():
    assert detail_cell_color("Agent ID", "A1") == ""
    assert detail_cell_color("Rude Behaviour", "true") == BAND_COLORS["red"]
    assert detail_cell_color("Rude Behaviour", "false") == BAND_COLORS["green"]
    assert detail_cell_color("Accurate Info", "TRUE") == BAND_COLORS["green"]
    assert detail_cell_color("Identified Customer", "yes") == BAND_COLORS["red"]
    assert detail_cell_color("Call Sentiment", "0.8") == BAND_COLORS["green"]
    assert detail_cell_color("Empathy", "0.6") == BAND_COLORS["amber"]
    assert detail_cell_color("Call Clarity", "0.2") == BAND_COLORS["red"]
    assert detail_cell_color("Enthusiasm", "abc") == BAND_COLORS["grey"]


def test_available_ids(agent_df):
    assert get_available_ids(agent_df, GroupingLevel.TEAM) == ["T1", "T2"]
    assert get_available_ids(agent_df, GroupingLevel.AGENT) == ["A1", "A2", "A3"]
    assert get_available_ids(agent_df, GroupingLevel.ENTERPRISE) == []


def test_parse_issue_summary(agent_df, now):
    result = run_agent_pipeline(agent_df, FilterState(TimeWindow.ALL_TIME), now)
    summary = get_parse_issue_summary(result)
    assert summary.columns.tolist() == ["field", "reason", "rows"]
    assert summary["rows"].sum() == 2


def test_parse_issue_summary_empty(scenario_df):
    summary = get_parse_issue_summary(run_yearly_pipeline(scenario_df))
    assert summary.empty
