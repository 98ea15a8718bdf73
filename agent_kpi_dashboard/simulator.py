"""
Simulated data generator for the call-center KPI dashboard.

Generates realistic call records for both export layouts, as the literal
strings a CSV file would hold. All values are synthetic.
"""

from pathlib import Path

import numpy as np
import pandas as pd

from .config import AGENT_COLUMNS, YEARLY_COLUMNS

# ---------------------------------------------------------------------------
# Typical contact-centre parameters (realistic ranges)
# ---------------------------------------------------------------------------
_TEAMS = {
    "T1": ["A101", "A102", "A103"],
    "T2": ["A201", "A202", "A203"],
    "T3": ["A301", "A302"],
}

_SENTIMENT_LABELS = ["Positive", "Neutral", "Negative"]

# mean, std of each 0-1 score
_SCORE_PARAMS = {
    "CallSentiment": (0.68, 0.15),
    "AgentEnthusiasm": (0.72, 0.12),
    "Empathy": (0.65, 0.14),
    "CallClarity": (0.78, 0.10),
    "SpeechScore": (0.74, 0.11),
}

# probability of a "true" literal
_BOOLEAN_RATES = {
    "RudeBehaviour": 0.06,
    "IdentifiedCustomer": 0.88,
    "AccurateInfo": 0.91,
}


def _rng(seed: int | None) -> np.random.Generator:
    return np.random.default_rng(42 if seed is None else seed)


def generate_yearly_kpis(
    years: tuple[int, ...] = (2021, 2022, 2023, 2024),
    rows_per_year: int = 12,
    seed: int | None = None,
) -> pd.DataFrame:
    """Generate the yearly call-center export, one row per team-month."""
    rng = _rng(seed)
    rows = []

    for year in years:
        for _ in range(rows_per_year):
            rows.append({
                "Year": str(year),
                "Calls_Handled": str(int(rng.integers(800, 1600))),
                "Average_Handling_Time": f"{rng.normal(6.0, 0.8):.2f}",
                "Customer_Satisfaction": str(int(rng.choice([1, 2, 3, 4, 5], p=[0.05, 0.1, 0.2, 0.4, 0.25]))),
                "Listening_Skill": str(int(rng.integers(2, 6))),
                "Clarity_of_Speech": str(int(rng.integers(2, 6))),
                "Agent_Enthusiasm": str(int(rng.integers(1, 6))),
                "Agent_Empathy": str(int(rng.integers(2, 6))),
            })

    return pd.DataFrame(rows, columns=YEARLY_COLUMNS)


def generate_agent_calls(
    end_date: str | pd.Timestamp | None = None,
    n_days: int = 90,
    calls_per_day: int = 6,
    seed: int | None = None,
) -> pd.DataFrame:
    """Generate per-call agent KPI records covering ``n_days`` up to ``end_date``."""
    rng = _rng(seed)
    end = pd.Timestamp.now(tz="UTC").normalize() if end_date is None else pd.Timestamp(end_date)
    days = pd.date_range(end=end, periods=n_days, freq="D")

    agents = [(team, agent) for team, members in _TEAMS.items() for agent in members]
    rows = []

    for day in days:
        for _ in range(calls_per_day):
            team, agent = agents[int(rng.integers(len(agents)))]
            call_time = day + pd.Timedelta(minutes=int(rng.integers(8 * 60, 18 * 60)))

            record = {
                "AgentID": agent,
                "TeamID": team,
                "CallDate": call_time.strftime("%Y-%m-%dT%H:%M:%S"),
            }
            for col, (mu, sigma) in _SCORE_PARAMS.items():
                score = float(np.clip(rng.normal(mu, sigma), 0, 1))
                record[col] = f"{score:.2f}"
            for col, rate in _BOOLEAN_RATES.items():
                record[col] = "true" if rng.random() < rate else "false"

            wpm = rng.normal(145, 15)
            record["AvgWordsPerMinute"] = f"{wpm:.1f}"
            record["AvgSyllablesPerMinute"] = f"{wpm * rng.uniform(1.4, 1.6):.1f}"
            record["Sentiment"] = str(rng.choice(_SENTIMENT_LABELS, p=[0.55, 0.3, 0.15]))
            record["CallDuration"] = f"{max(rng.normal(6.5, 2.0), 0.5):.1f}"
            rows.append(record)

    return pd.DataFrame(rows, columns=AGENT_COLUMNS)


def write_sample_files(out_dir: str | Path, seed: int | None = None) -> dict[str, Path]:
    """Write both sample CSVs into ``out_dir`` and return their paths."""
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    paths = {
        "yearly": out_dir / "call_center_kpis.csv",
        "agent": out_dir / "agent_calls_kpi_dashboard.csv",
    }
    generate_yearly_kpis(seed=seed).to_csv(paths["yearly"], index=False)
    generate_agent_calls(seed=seed).to_csv(paths["agent"], index=False)
    return paths
