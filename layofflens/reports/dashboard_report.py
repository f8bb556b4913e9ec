"""
Dashboard Report — stats cards, industry mix, monthly series, and map data.

JSON-first: generate_json() produces canonical data, generate_excel() renders it.
"""
from __future__ import annotations

import datetime as dt
from pathlib import Path
from typing import Optional

from layofflens.analytics.common import sanitize_for_json, utc_now
from layofflens.analytics.dashboard import dashboard_summary
from layofflens.analytics.geo import geographic_summary
from layofflens.analytics.labels import format_number
from layofflens.data.schemas import RecordFilter, format_instant
from layofflens.data.store import LayoffStore
from layofflens.excel.styles import TREND_FONTS
from layofflens.excel.writer import WorkbookBuilder


# =====================================================================
# JSON generation
# =====================================================================

def generate_json(
    store: LayoffStore,
    flt: RecordFilter | None = None,
    now: Optional[dt.datetime] = None,
) -> dict:
    """The whole dashboard for one filter as a JSON-serialisable dict."""
    now = now or utc_now()
    df = store.snapshot(flt)
    summary = dashboard_summary(df, flt, now)
    summary["geographic"] = geographic_summary(df)
    summary["generated_at"] = format_instant(now)
    return sanitize_for_json(summary)


# =====================================================================
# Excel rendering
# =====================================================================

def generate_excel(
    store: LayoffStore,
    output_path: str | Path,
    flt: RecordFilter | None = None,
    now: Optional[dt.datetime] = None,
) -> Path:
    data = generate_json(store, flt, now)
    stats = data["stats"]
    geo = data["geographic"]
    wb = WorkbookBuilder()

    # Summary
    ws = wb.sheet("Summary")
    wb.title(ws, "LAYOFFLENS", f"Layoff Dashboard  |  {data['filter_label']}  |  {data['generated_at'][:10]}")
    row = wb.section(ws, 4, "KEY NUMBERS")
    row = wb.kpis(ws, row, [
        (stats["totalLayoffs"], "Layoff Events", "number"),
        (stats["totalCompanies"], "Companies", "number"),
        (stats["totalEmployeesAffected"], "Employees Affected", "number"),
        (stats["averageLayoffSize"], "Average Layoff Size", "number"),
    ])
    row = wb.section(ws, row, "MOST AFFECTED")
    wb.kpis(ws, row, [
        (stats["mostAffectedIndustry"], "Industry", "text"),
        (stats["mostAffectedCountry"], "Location", "text"),
        (stats["recentTrend"].upper(), "30-Day Trend", "text", TREND_FONTS[stats["recentTrend"]]),
    ])

    # Industries
    ws = wb.sheet("Industries")
    wb.table(ws, 1, [
        ("name", "text", "Industry"),
        ("value", "percent", "Share of Employees Affected"),
        ("color", "text", "Chart Color"),
    ], data["industries"], tint=lambda i, r: "lead" if i == 0 else None)

    # Monthly
    ws = wb.sheet("Monthly")
    wb.table(ws, 1, [
        ("date", "text", "Month"),
        ("month", "text", "Period"),
        ("value", "number", "Employees Affected"),
    ], data["time_series"], total_label="TOTAL")

    # Locations
    ws = wb.sheet("Locations")
    wb.table(ws, 1, [
        ("location", "text", "Location"),
        ("city", "text", "Matched City"),
        ("country", "text", "Country"),
        ("lat", "coord", "Latitude"),
        ("lng", "coord", "Longitude"),
        ("count", "number", "Employees Affected"),
        ("intensity", "ratio", "Intensity"),
    ], geo["locations"], tint=lambda i, r: "alert" if r["intensity"] >= 1 else None)

    # Countries
    ws = wb.sheet("Countries")
    next_row = wb.table(ws, 1, [
        ("country", "text", "Country"),
        ("count", "number", "Employees Affected"),
    ], geo["topCountries"], total_label="TOTAL", freeze=False)
    ws.cell(row=next_row + 1, column=1).value = (
        f"{format_number(geo['totalLocations'])} mapped locations"
    )

    return wb.save(output_path)
