"""
Configuration: column names, filter options, file paths, constants.

Column lists describe the two CSV layouts the dashboard understands:
the yearly call-center export and the per-call agent KPI export.
"""

from pathlib import Path

# ---------------------------------------------------------------------------
# File paths
# ---------------------------------------------------------------------------
DATA_DIR = Path(__file__).resolve().parent.parent / "data"

YEARLY_KPI_FILE = DATA_DIR / "call_center_kpis.csv"
AGENT_CALLS_FILE = DATA_DIR / "agent_calls_kpi_dashboard.csv"

# ---------------------------------------------------------------------------
# Identity / logging
# ---------------------------------------------------------------------------
DASHBOARD_TITLE = "Call Center KPI Dashboard"

LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"

# ---------------------------------------------------------------------------
# Yearly performance export
# ---------------------------------------------------------------------------
YEAR_COL = "Year"
CALLS_HANDLED_COL = "Calls_Handled"
AVG_HANDLING_TIME_COL = "Average_Handling_Time"
SATISFACTION_COL = "Customer_Satisfaction"

# Radar axis label -> source column
YEARLY_KPI_FIELDS: dict[str, str] = {
    "Listening Skill": "Listening_Skill",
    "Clarity of Speech": "Clarity_of_Speech",
    "Agent Enthusiasm": "Agent_Enthusiasm",
    "Agent Empathy": "Agent_Empathy",
}

YEARLY_COLUMNS = [
    YEAR_COL,
    CALLS_HANDLED_COL,
    AVG_HANDLING_TIME_COL,
    SATISFACTION_COL,
    *YEARLY_KPI_FIELDS.values(),
]

SATISFACTION_LABELS = [
    "Very Unsatisfied",
    "Unsatisfied",
    "Neutral",
    "Satisfied",
    "Very Satisfied",
]
SATISFACTION_COLORS = ["#e74c3c", "#f39c12", "#f1c40f", "#3498db", "#2ecc71"]

# ---------------------------------------------------------------------------
# Agent KPI export
# ---------------------------------------------------------------------------
AGENT_ID_COL = "AgentID"
TEAM_ID_COL = "TeamID"
CALL_DATE_COL = "CallDate"
SENTIMENT_LABEL_COL = "Sentiment"

# Metrics averaged per day in the trend chart, label -> column
TREND_METRICS: dict[str, str] = {
    "Call Sentiment": "CallSentiment",
    "Agent Enthusiasm": "AgentEnthusiasm",
    "Empathy": "Empathy",
}

# Boolean-like fields, label -> column
BOOLEAN_FIELDS: dict[str, str] = {
    "Rude Behaviour": "RudeBehaviour",
    "Identified Customer": "IdentifiedCustomer",
    "Accurate Info": "AccurateInfo",
}

# Radar axes for the overall KPI chart, label -> column
RADAR_FIELDS: dict[str, str] = {
    "Call Sentiment": "CallSentiment",
    "Agent Enthusiasm": "AgentEnthusiasm",
    "Empathy": "Empathy",
    "Rude Behaviour": "RudeBehaviour",
    "Identified Customer": "IdentifiedCustomer",
    "Accurate Info": "AccurateInfo",
    "Call Clarity": "CallClarity",
}

# Speech / duration metrics summarised per agent, label -> column
AGENT_SUMMARY_METRICS: dict[str, str] = {
    "Speech Score": "SpeechScore",
    "Words / Min": "AvgWordsPerMinute",
    "Syllables / Min": "AvgSyllablesPerMinute",
    "Call Duration": "CallDuration",
}

AGENT_NUMERIC_FIELDS = [
    "CallSentiment",
    "AgentEnthusiasm",
    "Empathy",
    "CallClarity",
    "SpeechScore",
    "AvgWordsPerMinute",
    "AvgSyllablesPerMinute",
    "CallDuration",
]

AGENT_COLUMNS = [
    AGENT_ID_COL,
    TEAM_ID_COL,
    CALL_DATE_COL,
    "CallSentiment",
    "AgentEnthusiasm",
    "Empathy",
    "RudeBehaviour",
    "IdentifiedCustomer",
    "AccurateInfo",
    "CallClarity",
    "SpeechScore",
    "AvgWordsPerMinute",
    "AvgSyllablesPerMinute",
    SENTIMENT_LABEL_COL,
    "CallDuration",
]

# Columns shown in the agent-wise detail table, header -> column
DETAIL_TABLE_COLUMNS: dict[str, str] = {
    "Agent ID": AGENT_ID_COL,
    "Call Sentiment": "CallSentiment",
    "Enthusiasm": "AgentEnthusiasm",
    "Empathy": "Empathy",
    "Rude Behaviour": "RudeBehaviour",
    "Identified Customer": "IdentifiedCustomer",
    "Accurate Info": "AccurateInfo",
    "Call Clarity": "CallClarity",
}

# ---------------------------------------------------------------------------
# Filters
# ---------------------------------------------------------------------------
# Look-back length in days per time window; all_time has no cutoff
TIME_WINDOW_DAYS: dict[str, int | None] = {
    "last_7_days": 7,
    "last_1_month": 30,
    "last_1_year": 365,
    "last_5_years": 5 * 365,
    "all_time": None,
}

TIME_WINDOW_LABELS: dict[str, str] = {
    "last_7_days": "Last 7 days",
    "last_1_month": "Last 1 Month",
    "last_1_year": "Last 1 Year",
    "last_5_years": "Last 5 Years",
    "all_time": "All time",
}

GROUPING_LABELS: dict[str, str] = {
    "enterprise": "Enterprise",
    "team": "Team",
    "agent": "Agent",
}

# Identifier column matched for each grouping level
GROUPING_ID_COLUMNS: dict[str, str | None] = {
    "enterprise": None,
    "team": TEAM_ID_COL,
    "agent": AGENT_ID_COL,
}

GROUPING_VALUE_LABELS: dict[str, str] = {
    "enterprise": "Enterprise ID",
    "team": "Team ID",
    "agent": "Agent ID",
}

# ---------------------------------------------------------------------------
# Score bands (0-1 scores) and chart colours
# ---------------------------------------------------------------------------
SCORE_BANDS = [
    (0.75, "green"),
    (0.5, "amber"),
]

BAND_COLORS = {
    "green": "#27ae60",
    "amber": "#f39c12",
    "red": "#e74c3c",
    "grey": "#95a5a6",
}

GAUGE_EMPTY_COLOR = "#e0e0e0"
ACCENT_COLOR = "#ff6f00"

TREND_COLORS = ["#ff6f00", "#f7931e", "#e74c3c"]

NO_DATA_TEXT = "N/A"
