"""
Filter state and row filters for the agent KPI view.

A ``FilterState`` is built from raw UI input with ``normalize_filters`` and
applied to the loaded dataset with ``apply_filters``: first the time window
on the call date, then the team/agent grouping.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

import pandas as pd

from .config import (
    CALL_DATE_COL,
    GROUPING_ID_COLUMNS,
    GROUPING_LABELS,
    TIME_WINDOW_DAYS,
    TIME_WINDOW_LABELS,
)
from .loaders.utils import column_as_series, normalise_date, parse_dates

logger = logging.getLogger(__name__)

EPOCH = pd.Timestamp("1970-01-01T00:00:00", tz="UTC")


class TimeWindow(str, Enum):
    LAST_7_DAYS = "last_7_days"
    LAST_1_MONTH = "last_1_month"
    LAST_1_YEAR = "last_1_year"
    LAST_5_YEARS = "last_5_years"
    ALL_TIME = "all_time"

    @property
    def days(self) -> int | None:
        return TIME_WINDOW_DAYS[self.value]

    @property
    def label(self) -> str:
        return TIME_WINDOW_LABELS[self.value]


class GroupingLevel(str, Enum):
    ENTERPRISE = "enterprise"
    TEAM = "team"
    AGENT = "agent"

    @property
    def id_column(self) -> str | None:
        return GROUPING_ID_COLUMNS[self.value]

    @property
    def label(self) -> str:
        return GROUPING_LABELS[self.value]


@dataclass(frozen=True)
class FilterState:
    time_window: TimeWindow = TimeWindow.LAST_7_DAYS
    level: GroupingLevel = GroupingLevel.ENTERPRISE
    level_value: str = ""


def _lookup(enum_cls, raw: Any, labels: dict[str, str]):
    if isinstance(raw, enum_cls):
        return raw
    text = str(raw or "").strip()
    for member in enum_cls:
        if text == member.value or text.lower() == labels[member.value].lower():
            return member
    return None


def normalize_filters(raw: dict) -> FilterState:
    """Build a FilterState from raw UI values.

    Accepts enum members, enum values ("last_7_days") or display labels
    ("Last 7 days"). An unrecognised time window means all time; an
    unrecognised level means enterprise.
    """
    window = _lookup(TimeWindow, raw.get("time_window"), TIME_WINDOW_LABELS)
    if window is None:
        if raw.get("time_window") not in (None, ""):
            logger.warning("Unknown time window %r, using all time", raw.get("time_window"))
        window = TimeWindow.ALL_TIME

    level = _lookup(GroupingLevel, raw.get("level"), GROUPING_LABELS)
    if level is None:
        if raw.get("level") not in (None, ""):
            logger.warning("Unknown grouping level %r, using enterprise", raw.get("level"))
        level = GroupingLevel.ENTERPRISE

    level_value = raw.get("level_value")
    level_value = "" if level_value is None else str(level_value)

    return FilterState(time_window=window, level=level, level_value=level_value)


def utc_now() -> pd.Timestamp:
    return pd.Timestamp.now(tz="UTC")


def window_cutoff(window: TimeWindow, now: pd.Timestamp | None = None) -> pd.Timestamp:
    """Return the earliest call instant kept by ``window``; the epoch for all time."""
    if window.days is None:
        return EPOCH
    now = utc_now() if now is None else normalise_date(now)
    return now - pd.Timedelta(days=window.days)


def filter_by_time_window(
    df: pd.DataFrame,
    window: TimeWindow,
    now: pd.Timestamp | None = None,
    date_col: str = CALL_DATE_COL,
) -> pd.DataFrame:
    """Keep rows whose call date falls on or after the window cutoff.

    Rows with a missing or unparseable date are dropped under every window
    except all time, which keeps them.
    """
    cutoff = window_cutoff(window, now)
    dates = parse_dates(column_as_series(df, date_col))
    mask = (dates >= cutoff).fillna(False).astype(bool)
    if window is TimeWindow.ALL_TIME:
        mask = mask | dates.isna()
    return df[mask]


def filter_by_grouping(
    df: pd.DataFrame,
    level: GroupingLevel,
    value: str,
) -> pd.DataFrame:
    """Keep rows whose team or agent identifier equals ``value`` exactly."""
    id_col = level.id_column
    if id_col is None:
        return df
    if id_col not in df.columns:
        logger.warning("Column '%s' not present; %s filter matches nothing", id_col, level.label)
        return df.iloc[0:0]
    return df[df[id_col].astype(str) == value]


def apply_filters(
    df: pd.DataFrame,
    state: FilterState,
    now: pd.Timestamp | None = None,
) -> pd.DataFrame:
    """Apply the time window, then the grouping filter."""
    filtered = filter_by_time_window(df, state.time_window, now)
    filtered = filter_by_grouping(filtered, state.level, state.level_value)

    logger.info(
        "Filtered %d -> %d rows (%s, %s=%r)",
        len(df), len(filtered), state.time_window.label, state.level.label, state.level_value,
    )
    if filtered.empty:
        logger.warning("No rows left after filtering")
    return filtered
