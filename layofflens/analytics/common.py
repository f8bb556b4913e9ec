"""
Safe math, grouping keys, and JSON helpers used across all analytics modules.
"""
from __future__ import annotations

import datetime as dt
import math

import numpy as np
import pandas as pd

from layofflens.config import UNKNOWN


def utc_now() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


def safe_divide(numerator: float, denominator: float, default: float = 0.0) -> float:
    """Divide safely, returning default if denominator is zero or NaN."""
    if denominator == 0 or pd.isna(denominator):
        return default
    result = numerator / denominator
    return default if pd.isna(result) else result


def pct_change(current: float, previous: float) -> float | None:
    """Percentage change from previous to current. Returns None if previous is 0."""
    if previous == 0 or pd.isna(previous):
        return None
    return (current - previous) * 100 / abs(previous)


# ---------------------------------------------------------------------------
# Grouping keys — every grouping site goes through these two functions
# ---------------------------------------------------------------------------

def group_label(value) -> str:
    """Sector/location grouping key: trimmed text, blank or missing → "Unknown"."""
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return UNKNOWN
    text = str(value).strip()
    return text or UNKNOWN


def company_key(value) -> str:
    """Company identity for de-duplication: trimmed and case-folded."""
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return ""
    return str(value).strip().lower()


def counts(df: pd.DataFrame) -> pd.Series:
    """Head-counts with unknown (NaN) treated as zero."""
    return df["count"].fillna(0)


def sum_by(df: pd.DataFrame, column: str) -> pd.Series:
    """Sum of head-counts per grouping label, in first-encountered order."""
    keys = df[column].map(group_label)
    return counts(df).groupby(keys, sort=False).sum()


def top_label(totals: pd.Series) -> str:
    """Label with the largest total; ties go to the first encountered."""
    if totals.empty:
        return UNKNOWN
    return str(totals.idxmax())


# ---------------------------------------------------------------------------
# JSON
# ---------------------------------------------------------------------------

def sanitize_for_json(obj):
    """Recursively convert numpy/pandas types to native Python for JSON serialization."""
    if isinstance(obj, dict):
        return {str(k): sanitize_for_json(v) for k, v in obj.items() if k is not None}
    if isinstance(obj, (list, tuple)):
        return [sanitize_for_json(v) for v in obj]
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, np.floating):
        v = float(obj)
        return 0.0 if (math.isnan(v) or math.isinf(v)) else v
    if isinstance(obj, np.bool_):
        return bool(obj)
    if isinstance(obj, float):
        return 0.0 if (math.isnan(obj) or math.isinf(obj)) else obj
    if isinstance(obj, pd.Timestamp):
        return obj.strftime("%Y-%m-%dT%H:%M:%SZ")
    if pd.api.types.is_scalar(obj) and pd.isna(obj):
        return None
    return obj
