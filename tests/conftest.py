import pandas as pd
import pytest

# Fixed "now" for time-window tests
NOW = pd.Timestamp("2026-10-19T12:00:00Z")

AGENT_ROWS = [
    # AgentID, TeamID, CallDate, CallSentiment, AgentEnthusiasm, Empathy,
    # RudeBehaviour, IdentifiedCustomer, AccurateInfo, CallClarity, SpeechScore,
    # AvgWordsPerMinute, AvgSyllablesPerMinute, Sentiment, CallDuration
    ("A1", "T1", "2026-10-18T10:00:00", "0.8", "0.6", "0.7", "false", "true", "true", "0.9", "0.7", "140", "210", "Positive", "5.0"),
    ("A2", "T1", "2026-10-18T15:00:00", "0.6", "0.8", "0.5", "TRUE", "false", "true", "0.7", "0.8", "150", "220", "Neutral", "7.0"),
    ("A3", "T2", "2026-10-01T09:00:00", "0.9", "0.9", "0.9", "false", "true", "false", "0.8", "0.9", "130", "190", "Positive", "4.0"),
    ("A3", "T2", "2026-02-01T09:00:00", "0.5", "0.5", "0.5", "false", "yes", "true", "0.6", "0.6", "160", "230", "Negative", "6.0"),
    ("A2", "T1", "2022-06-15T09:00:00", "0.4", "0.3", "0.2", "true", "true", "true", "0.5", "0.5", "120", "180", "Negative", "3.0"),
    ("A1", "T1", "not a date", "0.7", "0.7", "0.7", "false", "true", "true", "0.7", "0.7", "140", "200", "Positive", "5.0"),
]

AGENT_COLUMNS = [
    "AgentID", "TeamID", "CallDate", "CallSentiment", "AgentEnthusiasm", "Empathy",
    "RudeBehaviour", "IdentifiedCustomer", "AccurateInfo", "CallClarity", "SpeechScore",
    "AvgWordsPerMinute", "AvgSyllablesPerMinute", "Sentiment", "CallDuration",
]


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def agent_df():
    return pd.DataFrame(AGENT_ROWS, columns=AGENT_COLUMNS)


@pytest.fixture
def scenario_df():
    return pd.DataFrame([
        {"Year": 2023, "Calls_Handled": "10", "Average_Handling_Time": "5.0"},
        {"Year": 2023, "Calls_Handled": "20", "Average_Handling_Time": "7.0"},
        {"Year": 2024, "Calls_Handled": "15", "Average_Handling_Time": "6.0"},
    ])


@pytest.fixture
def yearly_df():
    return pd.DataFrame([
        {"Year": "2022", "Calls_Handled": "100", "Average_Handling_Time": "4.5", "Customer_Satisfaction": "5",
         "Listening_Skill": "4", "Clarity_of_Speech": "5", "Agent_Enthusiasm": "3", "Agent_Empathy": "4"},
        {"Year": "2022", "Calls_Handled": "abc", "Average_Handling_Time": "", "Customer_Satisfaction": "3",
         "Listening_Skill": "2", "Clarity_of_Speech": "3", "Agent_Enthusiasm": "5", "Agent_Empathy": "1"},
        {"Year": "2023", "Calls_Handled": "250", "Average_Handling_Time": "6.25", "Customer_Satisfaction": "4",
         "Listening_Skill": "5", "Clarity_of_Speech": "0", "Agent_Enthusiasm": "", "Agent_Empathy": "5"},
        {"Year": "2024", "Calls_Handled": "75.9", "Average_Handling_Time": "5", "Customer_Satisfaction": "1",
         "Listening_Skill": "3", "Clarity_of_Speech": "4", "Agent_Enthusiasm": "4", "Agent_Empathy": "2"},
    ])
