"""
Loaders for call-center KPI exports.

Sources
-------
- CSV with a header row (local path, URL, or uploaded file object).
- Excel workbook holding the same table on its first sheet.

Every cell is kept as its literal string and empty cells become "",
so that each aggregation decides how to parse a field.
"""

import logging
from pathlib import Path
from typing import IO, Iterable, Union

import pandas as pd

from ..config import AGENT_COLUMNS, YEARLY_COLUMNS

logger = logging.getLogger(__name__)

Source = Union[str, Path, IO]

_EXCEL_SUFFIXES = {".xlsx", ".xlsm"}


def _source_name(source: Source) -> str:
    name = getattr(source, "name", None)
    if name is not None:
        return str(name)
    return str(source)


def _is_excel(source: Source) -> bool:
    return Path(_source_name(source)).suffix.lower() in _EXCEL_SUFFIXES


def check_columns(df: pd.DataFrame, expected: Iterable[str], source: str = "") -> list[str]:
    """Return expected columns missing from ``df``, logging them as a warning."""
    missing = [c for c in expected if c not in df.columns]
    if missing:
        logger.warning("Columns missing from %s: %s", source or "dataset", ", ".join(missing))
    return missing


def load_call_records(source: Source) -> pd.DataFrame:
    """Load a KPI export into a DataFrame of literal strings.

    Parameters
    ----------
    source : File path, http(s) URL, or a file-like object (e.g. a Streamlit
             upload). Names ending in .xlsx/.xlsm are read as Excel.

    Returns
    -------
    DataFrame with one row per data row in file order. Column names are
    stripped of surrounding whitespace; blank rows are dropped.
    """
    name = _source_name(source)
    try:
        if _is_excel(source):
            df = pd.read_excel(source, sheet_name=0, dtype=str, engine="openpyxl")
            df = df.fillna("")
        else:
            df = pd.read_csv(
                source,
                dtype=str,
                keep_default_na=False,
                skip_blank_lines=True,
            )
    except Exception:
        logger.exception("Failed to load call records: %s", name)
        raise

    df.columns = [str(c).strip() for c in df.columns]

    # Rows where every cell is blank carry no record
    if not df.empty:
        blank = (df.apply(lambda col: col.str.strip()) == "").all(axis=1)
        if blank.any():
            logger.info("Dropping %d blank rows from %s", int(blank.sum()), name)
            df = df[~blank]
    df = df.reset_index(drop=True)

    logger.info("Loaded %d call records from %s", len(df), name)
    return df


def load_yearly_kpis(source: Source) -> pd.DataFrame:
    """Load the yearly call-center export and check its columns."""
    df = load_call_records(source)
    check_columns(df, YEARLY_COLUMNS, _source_name(source))
    return df


def load_agent_calls(source: Source) -> pd.DataFrame:
    """Load the per-call agent KPI export and check its columns."""
    df = load_call_records(source)
    check_columns(df, AGENT_COLUMNS, _source_name(source))
    return df
