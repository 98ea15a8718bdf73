"""
KPI computation functions. Pure functions with no side effects.

Provides the yearly call summary, satisfaction histogram, daily KPI trend,
true/false counts, overall KPI averages and per-agent summaries.

Parse policy
------------
- Sums read numbers leniently and count bad values as 0.
- Trend, radar and gauge means read numbers strictly, so a non-numeric
  value turns the mean into NaN instead of being hidden.
- Boolean-like fields are compared as lowercase "true"/"false" literals.
"""

import logging
import math

import pandas as pd

from .config import (
    AGENT_ID_COL,
    AGENT_SUMMARY_METRICS,
    AVG_HANDLING_TIME_COL,
    BOOLEAN_FIELDS,
    CALL_DATE_COL,
    CALLS_HANDLED_COL,
    RADAR_FIELDS,
    SATISFACTION_COL,
    SATISFACTION_LABELS,
    SCORE_BANDS,
    SENTIMENT_LABEL_COL,
    TREND_METRICS,
    YEAR_COL,
    YEARLY_KPI_FIELDS,
)
from .loaders.utils import (
    bool_literal,
    column_as_series,
    parse_dates,
    parse_float_default,
    parse_float_strict,
    parse_int_default,
)

logger = logging.getLogger(__name__)


def mean(values) -> float:
    """Sum divided by count; NaN for no values, NaN values propagate."""
    values = list(values)
    if not values:
        return math.nan
    return sum(values) / len(values)


def format_fixed(value: float, digits: int = 2) -> str:
    """Format a number with fixed decimals; NaN formats as "NaN"."""
    if value is None or math.isnan(value):
        return "NaN"
    return f"{value:.{digits}f}"


# ---------------------------------------------------------------------------
# Yearly performance export
# ---------------------------------------------------------------------------

def distinct_in_order(values: pd.Series) -> list:
    """Distinct values in order of first appearance."""
    return values.drop_duplicates().tolist()


def _year_label(year):
    # whole-number floats come from numeric Year columns holding a gap
    if isinstance(year, float) and year.is_integer():
        return int(year)
    return year


def yearly_summary(df: pd.DataFrame) -> dict:
    """Calls handled and handling time per year.

    Groups are the distinct ``Year`` values in order of first appearance.
    Each year gets the sum of ``Calls_Handled`` (leading integer, 0 on
    failure) and the mean ``Average_Handling_Time`` (leading float, 0 on
    failure) as a 2-decimal string. Rows with a missing year form one group
    labelled None. A group whose rows carry no handling time averages to
    "NaN".

    Returns
    -------
    Dict with structure:
    {
        "years": [2023, 2024],
        "total_calls": [30, 15],
        "avg_handling_time": ["6.00", "6.00"],
        "grand_total_calls": 45,
        "overall_avg_handling_time": "6.00",
    }
    """
    year_col = column_as_series(df, YEAR_COL)
    calls = column_as_series(df, CALLS_HANDLED_COL).map(parse_int_default)
    handling = column_as_series(df, AVG_HANDLING_TIME_COL).map(parse_float_default)

    missing = year_col.isna()
    years = distinct_in_order(year_col[~missing])
    if missing.any():
        # the missing-year group keeps its first-appearance position
        first_missing = int(missing.to_numpy().argmax())
        years.insert(len(distinct_in_order(year_col.iloc[:first_missing])), None)
    total_calls = []
    avg_handling = []
    for year in years:
        in_year = missing if year is None else year_col == year
        total_calls.append(int(calls[in_year].sum()))
        avg_handling.append(format_fixed(mean(handling[in_year])))

    summary = {
        "years": [_year_label(y) for y in years],
        "total_calls": total_calls,
        "avg_handling_time": avg_handling,
        "grand_total_calls": sum(total_calls),
        "overall_avg_handling_time": format_fixed(mean(handling)),
    }
    logger.info("Summarised %d rows into %d years", len(df), len(years))
    return summary


def satisfaction_bucket(val) -> int | None:
    """Histogram bin (0-4) for a 1-5 satisfaction score, None if out of range."""
    score = parse_int_default(val, default=0)
    if 1 <= score <= len(SATISFACTION_LABELS):
        return score - 1
    return None


def satisfaction_histogram(df: pd.DataFrame) -> list[int]:
    """Count rows per satisfaction score 1-5.

    Scores outside 1-5 and non-numeric values are not counted.
    """
    counts = [0] * len(SATISFACTION_LABELS)
    dropped = 0
    for val in column_as_series(df, SATISFACTION_COL):
        bucket = satisfaction_bucket(val)
        if bucket is None:
            dropped += 1
            continue
        counts[bucket] += 1
    if dropped:
        logger.warning("Skipped %d rows with satisfaction outside 1-5", dropped)
    return counts


def kpi_averages(df: pd.DataFrame, fields: dict[str, str] | None = None) -> dict[str, str]:
    """Average score per yearly KPI field (leading integer, 0 on failure)."""
    fields = YEARLY_KPI_FIELDS if fields is None else fields
    averages = {}
    for label, col in fields.items():
        scores = column_as_series(df, col).map(parse_int_default)
        averages[label] = format_fixed(mean(scores))
    return averages


# ---------------------------------------------------------------------------
# Agent KPI export
# ---------------------------------------------------------------------------

def metric_mean(df: pd.DataFrame, col: str) -> float:
    """Strict mean of one metric over all rows; NaN if empty or any bad value."""
    return mean(column_as_series(df, col).map(parse_float_strict))


def daily_trend(
    df: pd.DataFrame,
    metrics: dict[str, str] | None = None,
    date_col: str = CALL_DATE_COL,
) -> tuple[list[str], dict[str, list[float]]]:
    """Daily mean of each metric.

    Rows are bucketed by the UTC calendar date of ``date_col``; rows without a
    valid date are left out. Dates are returned in ascending ISO order.

    Returns
    -------
    (labels, values) where labels are "YYYY-MM-DD" strings and values maps
    each metric label to one mean per date.
    """
    metrics = TREND_METRICS if metrics is None else metrics
    dates = parse_dates(column_as_series(df, date_col))
    valid = dates.notna()
    if not valid.all():
        logger.info("Trend skips %d rows without a valid %s", int((~valid).sum()), date_col)

    day = dates[valid].dt.strftime("%Y-%m-%d")
    labels = sorted(day.unique().tolist())

    values: dict[str, list[float]] = {}
    for label, col in metrics.items():
        parsed = column_as_series(df, col)[valid].map(parse_float_strict)
        by_day = {d: mean(parsed[day == d]) for d in labels}
        values[label] = [by_day[d] for d in labels]
    return labels, values


def boolean_counts(
    df: pd.DataFrame,
    fields: dict[str, str] | None = None,
) -> dict[str, dict[str, int]]:
    """Count "true" and "false" literals per boolean-like field.

    Returns
    -------
    {"true": {label: n, ...}, "false": {label: n, ...}}. Values other than
    the two literals are counted in neither.
    """
    fields = BOOLEAN_FIELDS if fields is None else fields
    counts: dict[str, dict[str, int]] = {"true": {}, "false": {}}
    for label, col in fields.items():
        literals = column_as_series(df, col).map(bool_literal)
        counts["true"][label] = int((literals == "true").sum())
        counts["false"][label] = int((literals == "false").sum())
    return counts


def overall_kpi_averages(
    df: pd.DataFrame,
    fields: dict[str, str] | None = None,
) -> dict[str, float]:
    """Average of each radar field over the whole frame.

    Boolean-like fields count as 1 for "true" and 0 otherwise; the rest are
    read strictly as floats.
    """
    fields = RADAR_FIELDS if fields is None else fields
    boolean_cols = set(BOOLEAN_FIELDS.values())
    averages = {}
    for label, col in fields.items():
        series = column_as_series(df, col)
        if col in boolean_cols:
            values = series.map(lambda v: 1 if bool_literal(v) == "true" else 0)
        else:
            values = series.map(parse_float_strict)
        averages[label] = mean(values)
    return averages


def agent_summary(
    df: pd.DataFrame,
    metrics: dict[str, str] | None = None,
) -> tuple[list[str], dict[str, list[float]]]:
    """Call count and strict metric means per agent, agents in first-seen order."""
    metrics = AGENT_SUMMARY_METRICS if metrics is None else metrics
    agent_col = column_as_series(df, AGENT_ID_COL).astype(str)
    agents = distinct_in_order(agent_col)

    values: dict[str, list[float]] = {"Calls": []}
    for label in metrics:
        values[label] = []

    parsed = {label: column_as_series(df, col).map(parse_float_strict) for label, col in metrics.items()}
    for agent in agents:
        rows = agent_col == agent
        values["Calls"].append(int(rows.sum()))
        for label in metrics:
            values[label].append(mean(parsed[label][rows]))
    return agents, values


def sentiment_distribution(df: pd.DataFrame, col: str = SENTIMENT_LABEL_COL) -> dict[str, int]:
    """Number of calls per sentiment label, most frequent first."""
    labels = column_as_series(df, col).astype(str).str.strip()
    labels = labels[~labels.isin(["", "None", "nan"])]
    counts = labels.value_counts()
    return {str(k): int(v) for k, v in counts.items()}


def classify_score(value: float | None) -> str:
    """Return 'green', 'amber', 'red' band for a 0-1 score, 'grey' if missing."""
    if value is None or pd.isna(value):
        return "grey"
    for threshold, band in SCORE_BANDS:
        if value >= threshold:
            return band
    return "red"
