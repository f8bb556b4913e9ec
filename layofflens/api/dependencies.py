"""
FastAPI dependencies — LayoffStore singleton, filter and pagination parsing.
"""
from __future__ import annotations

import datetime as dt
import logging
from typing import Optional

from fastapi import HTTPException, Query
from fastapi.responses import JSONResponse

from layofflens.data.schemas import RecordFilter, parse_instant
from layofflens.data.store import LayoffStore

log = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Global store singleton (set during startup)
# ---------------------------------------------------------------------------
_store: LayoffStore | None = None


def set_store(store: LayoffStore | None) -> None:
    global _store
    _store = store


def get_store() -> LayoffStore:
    if _store is None or not _store.is_ready:
        raise HTTPException(503, "Record store not initialized yet")
    return _store


# ---------------------------------------------------------------------------
# Filter parsing from query params
# ---------------------------------------------------------------------------

def _parse_date(value: Optional[str], name: str) -> Optional[dt.datetime]:
    if not value:
        return None
    try:
        return parse_instant(value)
    except ValueError:
        raise HTTPException(400, f"Invalid {name}: {value} (expected YYYY-MM-DD or ISO-8601)")


def parse_filter(
    sector: Optional[str] = Query(None, description="Exact sector match"),
    location: Optional[str] = Query(None, description="Exact location match"),
    start_date: Optional[str] = Query(None, alias="startDate", description="YYYY-MM-DD, inclusive"),
    end_date: Optional[str] = Query(None, alias="endDate", description="YYYY-MM-DD, inclusive"),
) -> RecordFilter:
    """Parse filter query parameters into a RecordFilter."""
    return RecordFilter(
        sector=sector or None,
        location=location or None,
        start_date=_parse_date(start_date, "startDate"),
        end_date=_parse_date(end_date, "endDate"),
    )


def parse_date_range(
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
) -> RecordFilter:
    """Date-only filter, for the map endpoint."""
    return RecordFilter(
        start_date=_parse_date(start_date, "startDate"),
        end_date=_parse_date(end_date, "endDate"),
    )


# ---------------------------------------------------------------------------
# Error responses
# ---------------------------------------------------------------------------

def failed(what: str, exc: Exception) -> JSONResponse:
    """The single retryable failure shape the dashboard pages understand."""
    log.error("Error fetching %s: %s", what, exc)
    return JSONResponse(status_code=500, content={"error": f"Failed to fetch {what}", "success": False})
