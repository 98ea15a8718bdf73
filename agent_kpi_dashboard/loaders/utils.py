"""
Shared utilities for field parsing: lenient numbers, boolean literals,
call dates.

Records arrive with every cell as its literal string, so each aggregation
decides how to read a field. Two number readers exist:

* ``parse_int_default`` / ``parse_float_default`` read the leading number of
  a value and fall back to a default (used where missing values count as 0).
* ``parse_float_strict`` reads the leading number and returns NaN otherwise
  (used for means where bad values must stay visible).
"""

import logging
import math
import re
from typing import Any

import pandas as pd

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_LEADING_FLOAT = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def _is_missing(val: Any) -> bool:
    if val is None:
        return True
    if isinstance(val, float) and math.isnan(val):
        return True
    if val is pd.NA or val is pd.NaT:
        return True
    if isinstance(val, str) and not val.strip():
        return True
    return False


def parse_int_default(val: Any, default: int = 0) -> int:
    """Read the leading integer of a value ("12.7" -> 12, "7 calls" -> 7).

    Missing or non-numeric values return ``default``.
    """
    if _is_missing(val):
        return default
    if isinstance(val, bool):
        return int(val)
    if isinstance(val, (int, float)):
        if isinstance(val, float) and math.isinf(val):
            return default
        return int(val)
    match = _LEADING_INT.match(str(val))
    if not match:
        return default
    return int(match.group(1))


def parse_float_strict(val: Any) -> float:
    """Read the leading float of a value; NaN when there is none."""
    if _is_missing(val):
        return math.nan
    if isinstance(val, bool):
        return float(val)
    if isinstance(val, (int, float)):
        return float(val)
    match = _LEADING_FLOAT.match(str(val))
    if not match:
        return math.nan
    return float(match.group(1))


def parse_float_default(val: Any, default: float = 0.0) -> float:
    """Read the leading float of a value, returning ``default`` on failure."""
    result = parse_float_strict(val)
    if math.isnan(result):
        return default
    return result


def is_numeric_literal(val: Any) -> bool:
    """True when ``parse_float_strict`` finds a number in the value."""
    return not math.isnan(parse_float_strict(val))


def bool_literal(val: Any) -> str:
    """Lowercase string form used for "true"/"false" comparisons."""
    return str(val).lower()


def column_as_series(df: pd.DataFrame, col: str) -> pd.Series:
    """Return ``df[col]``, or a column of None aligned to ``df`` if absent."""
    if col not in df.columns:
        return pd.Series([None] * len(df), index=df.index, dtype=object)
    return df[col]


def parse_dates(values: pd.Series) -> pd.Series:
    """Parse call dates to UTC timestamps; unparseable values become NaT.

    Naive timestamps are read as UTC.
    """
    as_text = values.astype("string").str.strip()
    return pd.to_datetime(as_text, errors="coerce", utc=True, format="mixed")


def normalise_date(val: Any) -> pd.Timestamp | None:
    """Convert a single date value to a UTC ``pd.Timestamp``.

    Returns None for missing or unparseable values.
    """
    if _is_missing(val):
        return None
    try:
        ts = pd.Timestamp(val)
    except (ValueError, TypeError):
        logger.debug("Could not parse date value: %s", val)
        return None
    if pd.isna(ts):
        return None
    if ts.tzinfo is None:
        return ts.tz_localize("UTC")
    return ts.tz_convert("UTC")
