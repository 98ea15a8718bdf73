"""
Dashboard-ready output functions.

These are the entry points for the Streamlit front end. Each function
returns plain dicts or DataFrames suitable for rendering cards, gauges,
and tables, and renders an empty result as "N/A" / an empty table.
"""

import logging

import pandas as pd

from .config import (
    BAND_COLORS,
    BOOLEAN_FIELDS,
    DETAIL_TABLE_COLUMNS,
    NO_DATA_TEXT,
    TREND_METRICS,
)
from .filters import GroupingLevel
from .kpis import classify_score
from .loaders.utils import bool_literal, parse_float_strict
from .pipeline import PipelineResult

logger = logging.getLogger(__name__)


def get_yearly_cards(result: PipelineResult) -> dict:
    """Headline numbers for the yearly view.

    Returns
    -------
    {"total_calls": "45", "avg_handling_time": "6.00 mins"}, or "N/A" values
    when the dataset is empty.
    """
    if not result.has_data:
        return {"total_calls": NO_DATA_TEXT, "avg_handling_time": NO_DATA_TEXT}
    return {
        "total_calls": str(result.scalars["grand_total_calls"]),
        "avg_handling_time": f"{result.scalars['overall_avg_handling_time']} mins",
    }


def get_gauges(result: PipelineResult) -> list[dict]:
    """One gauge per trend metric.

    Each entry: label, value (float or None), display text, band and colour.
    """
    gauges = []
    for label in TREND_METRICS:
        value = result.scalars.get(label) if result.has_data else None
        band = classify_score(value)
        if value is None:
            display = NO_DATA_TEXT
        elif pd.isna(value):
            display = "NaN"
        else:
            display = f"{value:.2f}"
        gauges.append({
            "label": label,
            "value": value,
            "display": display,
            "band": band,
            "color": BAND_COLORS[band],
        })
    return gauges


def get_agent_detail_table(filtered: pd.DataFrame) -> pd.DataFrame:
    """Per-call detail rows with readable headers.

    Returns
    -------
    DataFrame with the DETAIL_TABLE_COLUMNS headers, values as loaded.
    Absent source columns are shown blank.
    """
    columns = list(DETAIL_TABLE_COLUMNS)
    if filtered.empty:
        return pd.DataFrame(columns=columns)

    table = pd.DataFrame(index=filtered.index)
    for header, col in DETAIL_TABLE_COLUMNS.items():
        table[header] = filtered[col] if col in filtered.columns else ""
    return table.reset_index(drop=True)


def detail_cell_color(header: str, value) -> str:
    """Text colour for one detail-table cell.

    Score columns use the score bands; "Rude Behaviour" is red when true,
    the other boolean columns are green when true.
    """
    if header == "Agent ID":
        return ""
    if header in BOOLEAN_FIELDS:
        is_true = bool_literal(value) == "true"
        good = not is_true if header == "Rude Behaviour" else is_true
        return BAND_COLORS["green"] if good else BAND_COLORS["red"]
    band = classify_score(parse_float_strict(value))
    return BAND_COLORS[band]


def style_detail_table(table: pd.DataFrame):
    """Return a pandas Styler colouring each cell with detail_cell_color."""

    def colour_column(col: pd.Series) -> list[str]:
        return [
            f"color: {c}" if c else ""
            for c in (detail_cell_color(col.name, v) for v in col)
        ]

    return table.style.apply(colour_column, axis=0)


def get_available_ids(df: pd.DataFrame, level: GroupingLevel) -> list[str]:
    """Sorted identifiers present for a grouping level, for UI hints."""
    col = level.id_column
    if col is None or col not in df.columns:
        return []
    ids = df[col].astype(str).str.strip()
    return sorted(ids[ids != ""].unique().tolist())


def get_parse_issue_summary(result: PipelineResult) -> pd.DataFrame:
    """Count parse issues per field and reason.

    Returns
    -------
    DataFrame with columns: field, reason, rows
    """
    if not result.parse_issues:
        return pd.DataFrame(columns=["field", "reason", "rows"])

    issues = pd.DataFrame(
        [{"field": i.field, "reason": i.reason} for i in result.parse_issues]
    )
    summary = (
        issues.groupby(["field", "reason"]).size()
        .reset_index(name="rows")
        .sort_values("rows", ascending=False)
        .reset_index(drop=True)
    )
    return summary
