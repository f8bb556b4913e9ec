"""
Layoff record endpoints: paginated list, single insert, CSV export.
"""
from __future__ import annotations

import csv
import io
import math
from datetime import datetime, timezone
from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import StreamingResponse

from layofflens.analytics.labels import decorate
from layofflens.api.dependencies import failed, get_store, parse_filter
from layofflens.api.response_models import DataResponse, LayoffCreateRequest, LayoffListResponse
from layofflens.config import MAX_PAGE
from layofflens.data.schemas import LayoffRecord, RecordFilter, parse_instant
from layofflens.data.store import LayoffStore, StoreError

router = APIRouter(prefix="/api", tags=["layoffs"])

SortBy = Literal["date", "company", "count", "sector", "location"]

EXPORT_HEADERS = ["Company", "Date", "Employees Laid Off", "Industry/Sector", "Location", "Source URL"]


@router.get("/layoffs", response_model=LayoffListResponse)
def list_layoffs(
    page: int = Query(1, ge=1, le=MAX_PAGE),
    limit: int = Query(10, ge=1, le=1000),
    search: Optional[str] = Query(None, description="Substring of company, sector, or location"),
    sort_by: SortBy = Query("date", alias="sortBy"),
    sort_order: Literal["asc", "desc"] = Query("desc", alias="sortOrder"),
    flt: RecordFilter = Depends(parse_filter),
    store: LayoffStore = Depends(get_store),
):
    """One page of records, newest first by default."""
    try:
        records, total = store.query_records(
            flt, page=page, page_size=limit, search=search,
            sort_by=sort_by, descending=sort_order == "desc",
        )
    except StoreError as exc:
        return failed("layoffs", exc)

    return {
        "data": [decorate(r.to_dict()) for r in records],
        "pagination": {
            "page": page,
            "limit": limit,
            "total": total,
            "totalPages": math.ceil(total / limit),
        },
        "success": True,
    }


@router.post("/layoffs", response_model=DataResponse)
def create_layoff(body: LayoffCreateRequest, store: LayoffStore = Depends(get_store)):
    """Insert a single record."""
    company = body.company.strip()
    if not company:
        raise HTTPException(400, "Missing company name")
    try:
        date = parse_instant(body.date)
    except ValueError:
        raise HTTPException(400, f"Invalid date: {body.date}")

    record = LayoffRecord(
        company=company,
        date=date,
        count=body.count,
        sector=body.sector.strip() or "Unknown",
        location=body.location.strip(),
        source_url=body.source_url.strip(),
    )
    try:
        created = store.insert_record(record)
    except StoreError as exc:
        return failed("layoff insert", exc)
    return {"data": created.to_dict(), "success": True}


def _csv_rows(records: list[LayoffRecord]):
    buf = io.StringIO()
    writer = csv.writer(buf)
    writer.writerow(EXPORT_HEADERS)
    for r in records:
        writer.writerow([
            r.company,
            r.to_dict()["date"],
            r.count if r.count is not None else "N/A",
            r.sector,
            r.location,
            r.source_url or "N/A",
        ])
    return buf.getvalue()


@router.get("/layoffs/export")
def export_layoffs(
    search: Optional[str] = Query(None),
    sort_by: SortBy = Query("date", alias="sortBy"),
    sort_order: Literal["asc", "desc"] = Query("desc", alias="sortOrder"),
    flt: RecordFilter = Depends(parse_filter),
    store: LayoffStore = Depends(get_store),
):
    """All matching records as a CSV download."""
    try:
        records, _ = store.query_records(
            flt, search=search, sort_by=sort_by, descending=sort_order == "desc",
        )
    except StoreError as exc:
        return failed("layoffs", exc)

    filename = f"layoffs_data_{datetime.now(timezone.utc):%Y-%m-%d}.csv"
    return StreamingResponse(
        iter([_csv_rows(records)]),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
