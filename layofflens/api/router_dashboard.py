"""
Dashboard endpoints — stats cards, industry distribution, monthly series, map data.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from layofflens.analytics.common import sanitize_for_json
from layofflens.analytics.dashboard import (
    compute_stats,
    industry_distribution,
    monthly_time_series,
)
from layofflens.analytics.geo import geographic_summary
from layofflens.api.dependencies import failed, get_store, parse_date_range, parse_filter
from layofflens.api.response_models import DataResponse, StatsResponse
from layofflens.config import DISTRIBUTION_TOP_N, TIME_SERIES_MONTHS
from layofflens.data.schemas import RecordFilter
from layofflens.data.store import LayoffStore, StoreError

router = APIRouter(prefix="/api", tags=["dashboard"])


def _ok(data) -> dict:
    return {"data": sanitize_for_json(data), "success": True}


@router.get("/stats", response_model=StatsResponse)
def stats(
    flt: RecordFilter = Depends(parse_filter),
    store: LayoffStore = Depends(get_store),
):
    """Totals, most affected sector/location, and the 30-day trend."""
    try:
        df = store.snapshot(flt)
    except StoreError as exc:
        return failed("stats", exc)
    return _ok(compute_stats(df))


@router.get("/industry-distribution", response_model=DataResponse)
def industries(
    top_n: int = Query(DISTRIBUTION_TOP_N, alias="topN", ge=1, le=50),
    flt: RecordFilter = Depends(parse_filter),
    store: LayoffStore = Depends(get_store),
):
    """Share of employees affected per sector, top N."""
    try:
        df = store.snapshot(flt)
    except StoreError as exc:
        return failed("industry distribution", exc)
    return _ok(industry_distribution(df, top_n))


@router.get("/time-series", response_model=DataResponse)
def time_series(
    months: int = Query(TIME_SERIES_MONTHS, ge=1, le=120),
    flt: RecordFilter = Depends(parse_filter),
    store: LayoffStore = Depends(get_store),
):
    """Employees affected per month, ending with the current month."""
    try:
        df = store.snapshot(flt)
    except StoreError as exc:
        return failed("time series", exc)
    return _ok(monthly_time_series(df, months))


@router.get("/geographic", response_model=DataResponse)
def geographic(
    flt: RecordFilter = Depends(parse_date_range),
    store: LayoffStore = Depends(get_store),
):
    """Map points per known city plus the top countries."""
    try:
        df = store.snapshot(flt)
    except StoreError as exc:
        return failed("geographic data", exc)
    return _ok(geographic_summary(df))
