#!/usr/bin/env python3
"""
LayoffLens CLI — CSV import, quick stats, Excel export, and API server.

USAGE:
  python -m layofflens.cli import                            # Replace store contents with data/layoffs.csv
  python -m layofflens.cli import path/to/layoffs.csv --keep-existing
  python -m layofflens.cli import --batch-size 250 --delay 0

  python -m layofflens.cli stats                             # Dashboard cards for all records
  python -m layofflens.cli stats --sector Tech --start 2024-01-01

  python -m layofflens.cli geo                               # Top countries + mapped cities

  python -m layofflens.cli export                            # Excel dashboard to data/reports/
  python -m layofflens.cli export --output ./dashboard.xlsx

  python -m layofflens.cli serve                             # Start API server
  python -m layofflens.cli serve --port 8000
"""
from __future__ import annotations

import argparse
import os
import sys
from datetime import datetime
from pathlib import Path

import pandas as pd

from layofflens.config import (
    BATCH_DELAY_SECONDS,
    BATCH_SIZE,
    DB_PATH,
    DEFAULT_CSV_PATH,
    MAX_ERRORS_SHOWN,
    REPORTS_FOLDER,
    configure_logging,
)
from layofflens.data.schemas import RecordFilter, parse_instant
from layofflens.data.store import LayoffStore

CSV_READ_ERRORS = (
    OSError,
    UnicodeDecodeError,
    pd.errors.ParserError,
    pd.errors.EmptyDataError,
)


def _banner(title: str) -> None:
    print("\n" + "=" * 70)
    print(f"  LAYOFFLENS — {title}")
    print("=" * 70)


def _build_filter(args) -> RecordFilter:
    """Build a RecordFilter from CLI args."""
    try:
        return RecordFilter(
            sector=getattr(args, "sector", None),
            location=getattr(args, "location", None),
            start_date=parse_instant(args.start) if getattr(args, "start", None) else None,
            end_date=parse_instant(args.end) if getattr(args, "end", None) else None,
        )
    except ValueError as exc:
        sys.exit(f"Invalid date: {exc}")


def _open_store(args) -> LayoffStore:
    return LayoffStore(args.db).bootstrap()


def cmd_import(args):
    """Load a layoffs CSV into the record store."""
    from layofflens.data.loader import import_csv

    _banner("CSV IMPORT")
    store = _open_store(args)
    try:
        report = import_csv(
            store,
            args.csv,
            batch_size=args.batch_size,
            delay=args.delay,
            wipe=not args.keep_existing,
        )
    except CSV_READ_ERRORS as exc:
        print(f"\nCould not read {args.csv}: {exc}")
        sys.exit(1)

    print()
    for line in report.summary_lines(MAX_ERRORS_SHOWN):
        print(line)
    print(f"\nRecords now in store: {store.count():,}")


def cmd_stats(args):
    """Print the dashboard cards, industry mix, and monthly series."""
    from layofflens.analytics.dashboard import dashboard_summary

    flt = _build_filter(args)
    _banner("DASHBOARD STATS")
    summary = dashboard_summary(_open_store(args).snapshot(flt), flt)
    stats = summary["stats"]

    print(f"\n  Filter:                 {summary['filter_label']}")
    print(f"  Layoff events:          {stats['totalLayoffs']:,}")
    print(f"  Companies:              {stats['totalCompanies']:,}")
    print(f"  Employees affected:     {stats['totalEmployeesAffected']:,}")
    print(f"  Average layoff size:    {stats['averageLayoffSize']:,}")
    print(f"  Most affected industry: {stats['mostAffectedIndustry']}")
    print(f"  Most affected location: {stats['mostAffectedCountry']}")
    print(f"  30-day trend:           {stats['recentTrend']}")

    if summary["industries"]:
        print("\nINDUSTRIES:\n")
        for item in summary["industries"]:
            print(f"  {item['name'][:40]:<42}{item['value']:>4}%")

    print("\nMONTHLY:\n")
    for point in summary["time_series"]:
        print(f"  {point['date']:<10}{point['value']:>12,}")


def cmd_geo(args):
    """Print mapped locations grouped by country."""
    from layofflens.analytics.geo import geographic_summary
    from layofflens.analytics.labels import country_flag, location_display_name

    flt = _build_filter(args)
    _banner("GEOGRAPHIC SUMMARY")
    geo = geographic_summary(_open_store(args).snapshot(flt))

    print(f"\nMAPPED LOCATIONS ({geo['totalLocations']}):\n")
    for p in geo["locations"]:
        name = location_display_name(p["location"])
        print(f"  {country_flag(p['location'])} {name[:36]:<38}{p['count']:>10,}  ({p['lat']:.2f}, {p['lng']:.2f})")

    print("\nTOP COUNTRIES:\n")
    for i, c in enumerate(geo["topCountries"], 1):
        print(f"  {i:<4}{c['country'][:36]:<38}{c['count']:>10,}")


def cmd_export(args):
    """Write the Excel dashboard report."""
    from layofflens.reports.dashboard_report import generate_excel

    flt = _build_filter(args)
    _banner("EXCEL EXPORT")
    output = args.output or REPORTS_FOLDER / f"LayoffLens_Dashboard_{datetime.now():%Y%m%d}.xlsx"
    path = generate_excel(_open_store(args), output, flt)
    print(f"\nSaved: {path}")


def cmd_serve(args):
    """Start the API server."""
    import uvicorn
    print(f"\nStarting LayoffLens API on port {args.port}...")
    uvicorn.run("layofflens.main:app", host="0.0.0.0", port=args.port, reload=args.reload,
                timeout_keep_alive=65)


def _add_filter_args(p: argparse.ArgumentParser, with_fields: bool = True) -> None:
    if with_fields:
        p.add_argument("--sector", help="Exact sector match")
        p.add_argument("--location", help="Exact location match")
    p.add_argument("--start", help="Start date YYYY-MM-DD (inclusive)")
    p.add_argument("--end", help="End date YYYY-MM-DD (inclusive)")


def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(
        description="LayoffLens — layoff records dashboard and analytics",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--db", type=Path, default=DB_PATH, help=f"SQLite file (default {DB_PATH})")
    parser.add_argument("--log-level", help="Logging level (default LAYOFFLENS_LOG_LEVEL or INFO)")
    subparsers = parser.add_subparsers(dest="command", help="Command")

    # import subcommand
    import_parser = subparsers.add_parser("import", help="Import a layoffs CSV")
    import_parser.add_argument("csv", nargs="?", type=Path, default=DEFAULT_CSV_PATH, help="CSV file")
    import_parser.add_argument("--keep-existing", action="store_true", help="Do not wipe the store first")
    import_parser.add_argument("--batch-size", type=int, default=BATCH_SIZE, help=f"Rows per batch (default {BATCH_SIZE})")
    import_parser.add_argument("--delay", type=float, default=BATCH_DELAY_SECONDS, help="Seconds between batches")
    import_parser.set_defaults(func=cmd_import)

    # stats subcommand
    stats_parser = subparsers.add_parser("stats", help="Print dashboard statistics")
    _add_filter_args(stats_parser)
    stats_parser.set_defaults(func=cmd_stats)

    # geo subcommand
    geo_parser = subparsers.add_parser("geo", help="Print map data")
    _add_filter_args(geo_parser, with_fields=False)
    geo_parser.set_defaults(func=cmd_geo)

    # export subcommand
    export_parser = subparsers.add_parser("export", help="Export the Excel dashboard report")
    export_parser.add_argument("--output", type=Path, help="Output .xlsx path")
    _add_filter_args(export_parser)
    export_parser.set_defaults(func=cmd_export)

    # serve subcommand
    serve_parser = subparsers.add_parser("serve", help="Start API server")
    serve_parser.add_argument("--port", type=int, default=int(os.environ.get("PORT", "8000")), help="Port (default 8000)")
    serve_parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    serve_parser.set_defaults(func=cmd_serve)

    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return

    configure_logging(args.log_level)
    args.func(args)


if __name__ == "__main__":
    main()
