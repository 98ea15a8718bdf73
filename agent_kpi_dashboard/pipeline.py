"""
Aggregation pipeline: filtered rows in, chart-ready series out.

``run_yearly_pipeline`` and ``run_agent_pipeline`` are the two entry points,
one per dashboard view. Both return a ``PipelineResult`` that separates
"no data" (an empty filtered set, no series) from per-row parse issues,
which are reported alongside the aggregates without changing them.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable

import pandas as pd

from .config import (
    AGENT_NUMERIC_FIELDS,
    AVG_HANDLING_TIME_COL,
    BOOLEAN_FIELDS,
    CALL_DATE_COL,
    CALLS_HANDLED_COL,
    SATISFACTION_COL,
    SATISFACTION_LABELS,
    TREND_METRICS,
    YEARLY_KPI_FIELDS,
)
from .filters import FilterState, apply_filters
from .kpis import (
    agent_summary,
    boolean_counts,
    daily_trend,
    kpi_averages,
    metric_mean,
    overall_kpi_averages,
    satisfaction_bucket,
    satisfaction_histogram,
    sentiment_distribution,
    yearly_summary,
)
from .loaders.utils import bool_literal, is_numeric_literal, parse_dates

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Series:
    """Label axis plus one or more value arrays of the same length."""

    labels: list
    values: dict[str, list] = field(default_factory=dict)

    def __post_init__(self):
        for name, data in self.values.items():
            if len(data) != len(self.labels):
                raise ValueError(
                    f"Series '{name}' has {len(data)} values for {len(self.labels)} labels"
                )

    def __len__(self) -> int:
        return len(self.labels)

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame({"label": self.labels, **self.values})


@dataclass(frozen=True)
class ParseIssue:
    row: Any
    field: str
    value: Any
    reason: str


@dataclass
class PipelineResult:
    filtered: pd.DataFrame
    series: dict[str, Series] = field(default_factory=dict)
    scalars: dict[str, Any] = field(default_factory=dict)
    parse_issues: list[ParseIssue] = field(default_factory=list)

    @property
    def has_data(self) -> bool:
        return not self.filtered.empty

    @property
    def is_empty(self) -> bool:
        return self.filtered.empty


def collect_parse_issues(
    df: pd.DataFrame,
    numeric_fields: Iterable[str] = (),
    bool_fields: Iterable[str] = (),
    date_field: str | None = None,
    satisfaction_field: str | None = None,
) -> list[ParseIssue]:
    """List per-row parse failures for the given fields.

    Only columns present in ``df`` are checked; a missing column is reported
    once by the loader instead.
    """
    issues: list[ParseIssue] = []

    for col in numeric_fields:
        if col not in df.columns:
            continue
        for idx, val in df[col].items():
            if not is_numeric_literal(val):
                issues.append(ParseIssue(idx, col, val, "not a number"))

    for col in bool_fields:
        if col not in df.columns:
            continue
        for idx, val in df[col].items():
            if bool_literal(val) not in ("true", "false"):
                issues.append(ParseIssue(idx, col, val, "not true/false"))

    if date_field is not None and date_field in df.columns:
        dates = parse_dates(df[date_field])
        for idx in dates[dates.isna()].index:
            issues.append(ParseIssue(idx, date_field, df.at[idx, date_field], "unparseable date"))

    if satisfaction_field is not None and satisfaction_field in df.columns:
        for idx, val in df[satisfaction_field].items():
            if satisfaction_bucket(val) is None:
                issues.append(ParseIssue(idx, satisfaction_field, val, "score outside 1-5"))

    if issues:
        logger.warning("Found %d field parse issues in %d rows", len(issues), len(df))
    return issues


def run_yearly_pipeline(df: pd.DataFrame) -> PipelineResult:
    """Aggregate the yearly call-center export.

    Series
    ------
    yearly        : years -> Total Calls Handled, Avg Handling Time (mins)
    satisfaction  : satisfaction labels -> Customers
    kpi           : KPI labels -> Average KPI Score

    Scalars
    -------
    grand_total_calls, overall_avg_handling_time
    """
    issues = collect_parse_issues(
        df,
        numeric_fields=[CALLS_HANDLED_COL, AVG_HANDLING_TIME_COL, *YEARLY_KPI_FIELDS.values()],
        satisfaction_field=SATISFACTION_COL,
    )
    if df.empty:
        logger.warning("Yearly dataset is empty, nothing to aggregate")
        return PipelineResult(filtered=df, parse_issues=issues)

    summary = yearly_summary(df)
    averages = kpi_averages(df)

    series = {
        "yearly": Series(
            labels=summary["years"],
            values={
                "Total Calls Handled": summary["total_calls"],
                "Avg Handling Time (mins)": summary["avg_handling_time"],
            },
        ),
        "satisfaction": Series(
            labels=list(SATISFACTION_LABELS),
            values={"Customers": satisfaction_histogram(df)},
        ),
        "kpi": Series(
            labels=list(averages),
            values={"Average KPI Score": list(averages.values())},
        ),
    }
    scalars = {
        "grand_total_calls": summary["grand_total_calls"],
        "overall_avg_handling_time": summary["overall_avg_handling_time"],
    }
    return PipelineResult(filtered=df, series=series, scalars=scalars, parse_issues=issues)


def run_agent_pipeline(
    df: pd.DataFrame,
    state: FilterState,
    now: pd.Timestamp | None = None,
) -> PipelineResult:
    """Filter the agent KPI export and aggregate the filtered rows.

    Series
    ------
    trend        : ISO dates -> one daily mean per trend metric
    overall_kpi  : radar labels -> KPI Scores
    boolean      : boolean field labels -> True, False
    agents       : agent ids -> Calls plus speech/duration means
    sentiment    : sentiment labels -> Calls

    Scalars
    -------
    One strict mean per trend metric label (gauge values), and row_count.
    """
    filtered = apply_filters(df, state, now)
    if filtered.empty:
        return PipelineResult(filtered=filtered)

    issues = collect_parse_issues(
        filtered,
        numeric_fields=AGENT_NUMERIC_FIELDS,
        bool_fields=list(BOOLEAN_FIELDS.values()),
        date_field=CALL_DATE_COL,
    )

    trend_labels, trend_values = daily_trend(filtered)
    radar = overall_kpi_averages(filtered)
    counts = boolean_counts(filtered)
    agents, agent_values = agent_summary(filtered)
    sentiment = sentiment_distribution(filtered)

    series = {
        "trend": Series(labels=trend_labels, values=trend_values),
        "overall_kpi": Series(labels=list(radar), values={"KPI Scores": list(radar.values())}),
        "boolean": Series(
            labels=list(BOOLEAN_FIELDS),
            values={
                "True": [counts["true"][label] for label in BOOLEAN_FIELDS],
                "False": [counts["false"][label] for label in BOOLEAN_FIELDS],
            },
        ),
        "agents": Series(labels=agents, values=agent_values),
        "sentiment": Series(labels=list(sentiment), values={"Calls": list(sentiment.values())}),
    }
    scalars: dict[str, Any] = {label: metric_mean(filtered, col) for label, col in TREND_METRICS.items()}
    scalars["row_count"] = len(filtered)

    logger.info("Aggregated %d rows into %d trend dates", len(filtered), len(trend_labels))
    return PipelineResult(filtered=filtered, series=series, scalars=scalars, parse_issues=issues)
