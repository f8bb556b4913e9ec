"""
Dashboard analytics — the aggregation engine behind the stats cards and charts.

Every function is a pure function of a record snapshot (the DataFrame built
by `records_frame`) and, where time matters, an explicit `now`.
"""
from __future__ import annotations

import datetime as dt
import math
from typing import Optional

import pandas as pd

from layofflens.config import (
    DISTRIBUTION_TOP_N,
    SECTOR_PALETTE,
    TIME_SERIES_MONTHS,
    TREND_THRESHOLD_PCT,
    TREND_WINDOW_DAYS,
)
from layofflens.data.schemas import RecordFilter, to_utc
from layofflens.analytics.common import (
    company_key,
    counts,
    pct_change,
    safe_divide,
    sum_by,
    top_label,
    utc_now,
)


INCREASING = "increasing"
DECREASING = "decreasing"
STABLE = "stable"


def _number(value: float) -> int | float:
    """Whole floats come back as int; fractional head-counts stay float."""
    value = float(value)
    return int(value) if value.is_integer() else value


def js_round(value: float) -> int:
    """Round half up (2.5 → 3), the way the dashboard charts round percentages."""
    return int(math.floor(value + 0.5))


# ---------------------------------------------------------------------------
# Filtering
# ---------------------------------------------------------------------------

def filter_records(df: pd.DataFrame, flt: RecordFilter | None) -> pd.DataFrame:
    """Exact-match sector/location and inclusive [start, end] date range.

    Unset filter fields place no constraint. Filtering twice with the same
    filter returns the same rows.
    """
    if flt is None or flt.is_empty or df.empty:
        return df

    mask = pd.Series(True, index=df.index)
    if flt.sector:
        mask &= df["sector"] == flt.sector
    if flt.location:
        mask &= df["location"] == flt.location
    if flt.start_date:
        mask &= df["date"] >= pd.Timestamp(to_utc(flt.start_date))
    if flt.end_date:
        mask &= df["date"] <= pd.Timestamp(to_utc(flt.end_date))
    return df[mask]


# ---------------------------------------------------------------------------
# Recent trend
# ---------------------------------------------------------------------------

def trend_windows(df: pd.DataFrame, now: dt.datetime) -> tuple[float, float]:
    """(recent, previous) head-count sums.

    recent = (now - 30d, now], previous = (now - 60d, now - 30d].
    """
    if df.empty:
        return 0.0, 0.0
    now_ts = pd.Timestamp(to_utc(now))
    window = pd.Timedelta(days=TREND_WINDOW_DAYS)
    dates = df["date"]
    n = counts(df)

    recent_mask = (dates > now_ts - window) & (dates <= now_ts)
    previous_mask = (dates > now_ts - 2 * window) & (dates <= now_ts - window)
    return float(n[recent_mask].sum()), float(n[previous_mask].sum())


def classify_trend(recent: float, previous: float) -> str:
    """increasing / decreasing when the change is beyond ±10%, else stable."""
    if previous > 0:
        change = pct_change(recent, previous)
        if change > TREND_THRESHOLD_PCT:
            return INCREASING
        if change < -TREND_THRESHOLD_PCT:
            return DECREASING
        return STABLE
    if recent > 0:
        return INCREASING
    return STABLE


def recent_trend(df: pd.DataFrame, now: Optional[dt.datetime] = None) -> str:
    recent, previous = trend_windows(df, now or utc_now())
    return classify_trend(recent, previous)


# ---------------------------------------------------------------------------
# Summary statistics
# ---------------------------------------------------------------------------

def compute_stats(df: pd.DataFrame, now: Optional[dt.datetime] = None) -> dict:
    """The stats-card numbers for a snapshot. Empty input gives zeros and "Unknown"."""
    total_layoffs = int(len(df))
    total_affected = float(counts(df).sum()) if total_layoffs else 0.0

    if total_layoffs:
        companies = df["company"].map(company_key)
        total_companies = int(companies[companies != ""].nunique())
    else:
        total_companies = 0

    return {
        "totalLayoffs": total_layoffs,
        "totalCompanies": total_companies,
        "totalEmployeesAffected": _number(total_affected),
        "averageLayoffSize": js_round(safe_divide(total_affected, total_layoffs)),
        "mostAffectedIndustry": top_label(sum_by(df, "sector")),
        "mostAffectedCountry": top_label(sum_by(df, "location")),
        "recentTrend": recent_trend(df, now),
    }


# ---------------------------------------------------------------------------
# Industry distribution
# ---------------------------------------------------------------------------

def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value >= 0x80000000 else value


def sector_color(sector: str) -> str:
    """Stable palette color for a sector name (case-insensitive).

    The string hash (h = c + (h << 5) - h over UTF-16 code units, with 32-bit
    shift semantics) matches the colors the web charts already show.
    """
    data = sector.lower().encode("utf-16-le")
    h = 0
    for i in range(0, len(data), 2):
        unit = data[i] | (data[i + 1] << 8)
        h = unit + (_to_int32(_to_int32(h) << 5) - h)
    return SECTOR_PALETTE[abs(h) % len(SECTOR_PALETTE)]


def industry_distribution(df: pd.DataFrame, top_n: int = DISTRIBUTION_TOP_N) -> list[dict]:
    """Top sectors by share of employees affected: [{name, value (%), color}]."""
    if df.empty:
        return []
    totals = sum_by(df, "sector")
    grand_total = float(totals.sum())
    if grand_total == 0:
        return []

    rows = [
        {
            "name": str(name),
            "value": js_round(float(total) / grand_total * 100),
            "color": sector_color(str(name)),
        }
        for name, total in totals.items()
    ]
    rows.sort(key=lambda r: r["value"], reverse=True)
    return rows[:top_n]


# ---------------------------------------------------------------------------
# Monthly time series
# ---------------------------------------------------------------------------

def monthly_time_series(
    df: pd.DataFrame,
    months: int = TIME_SERIES_MONTHS,
    now: Optional[dt.datetime] = None,
) -> list[dict]:
    """Employees affected per calendar month, `months` buckets ending this month.

    Oldest first; months without records are zero. Each bucket carries the
    `YYYY-MM` key and a short label like "Jan 24".
    """
    if months <= 0:
        return []
    now = to_utc(now or utc_now())

    if df.empty:
        monthly = pd.Series(dtype="float64")
    else:
        keys = df["date"].dt.strftime("%Y-%m")
        monthly = counts(df).groupby(keys).sum()

    end = pd.Period(f"{now.year}-{now.month:02d}", freq="M")
    series = []
    for period in pd.period_range(end=end, periods=months, freq="M"):
        key = period.strftime("%Y-%m")
        series.append({
            "date": period.strftime("%b %y"),
            "month": key,
            "value": _number(monthly.get(key, 0)),
        })
    return series


# ---------------------------------------------------------------------------
# Bundle
# ---------------------------------------------------------------------------

def dashboard_summary(
    df: pd.DataFrame,
    flt: RecordFilter | None = None,
    now: Optional[dt.datetime] = None,
) -> dict:
    """Stats, industry distribution, and time series for one filtered snapshot."""
    now = now or utc_now()
    view = filter_records(df, flt)
    return {
        "filter_label": flt.label if flt else "All Records",
        "stats": compute_stats(view, now),
        "industries": industry_distribution(view),
        "time_series": monthly_time_series(view, now=now),
    }
