"""
LayoffStore — the record store: a single SQLite table of layoff events.

Every call opens its own short-lived connection, so request handlers never
share connection state. Reads hand back fresh objects (records or a pandas
snapshot); nothing is cached between calls.
"""
from __future__ import annotations

import logging
import sqlite3
from contextlib import closing, contextmanager
from pathlib import Path
from typing import Iterator, Optional, Sequence

import pandas as pd

from layofflens.config import DB_PATH, UNKNOWN
from layofflens.data.schemas import (
    LayoffRecord,
    RecordFilter,
    format_instant,
    parse_instant,
)

log = logging.getLogger(__name__)

RECORD_COLUMNS = ["id", "company", "date", "count", "sector", "location", "source_url"]

# sort key → SQL expression (whitelist; never interpolate user input)
SORT_COLUMNS = {
    "date": "date",
    "company": "lower(company)",
    "count": "COALESCE(count, 0)",
    "sector": "lower(sector)",
    "location": "lower(location)",
}

_SCHEMA = (
    "CREATE TABLE IF NOT EXISTS layoffs (\n"
    "  id INTEGER PRIMARY KEY AUTOINCREMENT,\n"
    "  company TEXT NOT NULL,\n"
    "  date TEXT NOT NULL,\n"
    "  count INTEGER,\n"
    "  sector TEXT NOT NULL DEFAULT 'Unknown',\n"
    "  location TEXT NOT NULL DEFAULT '',\n"
    "  source_url TEXT NOT NULL DEFAULT '',\n"
    "  created_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ', 'now')),\n"
    "  CHECK (length(trim(company)) > 0),\n"
    "  CHECK (count IS NULL OR count >= 0)\n"
    ")"
)


class StoreError(RuntimeError):
    """A query, insert, or delete against the record store failed."""


def get_connection(db_path: str | Path, timeout: float = 30.0) -> sqlite3.Connection:
    """Open a SQLite connection with WAL journaling for concurrent readers."""
    conn = sqlite3.connect(str(db_path), timeout=timeout)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL;")
    conn.execute("PRAGMA synchronous=NORMAL;")
    return conn


def _row_to_record(row: sqlite3.Row) -> LayoffRecord:
    return LayoffRecord(
        id=row["id"],
        company=row["company"],
        date=parse_instant(row["date"]),
        count=row["count"],
        sector=row["sector"],
        location=row["location"],
        source_url=row["source_url"],
    )


def _where(flt: RecordFilter | None, search: str | None = None) -> tuple[str, list]:
    """Build a WHERE clause for a filter. Absent fields add no constraint."""
    clauses: list[str] = []
    params: list = []
    if flt is not None:
        if flt.sector:
            clauses.append("sector = ?")
            params.append(flt.sector)
        if flt.location:
            clauses.append("location = ?")
            params.append(flt.location)
        if flt.start_date:
            clauses.append("date >= ?")
            params.append(format_instant(flt.start_date))
        if flt.end_date:
            clauses.append("date <= ?")
            params.append(format_instant(flt.end_date))
    if search and search.strip():
        like = f"%{search.strip().lower()}%"
        clauses.append("(lower(company) LIKE ? OR lower(sector) LIKE ? OR lower(location) LIKE ?)")
        params.extend([like, like, like])
    sql = (" WHERE " + " AND ".join(clauses)) if clauses else ""
    return sql, params


class LayoffStore:
    """Query/insert/delete access to the layoffs table."""

    def __init__(self, db_path: str | Path = DB_PATH) -> None:
        self.db_path = Path(db_path)
        self._ready = False

    # ------------------------------------------------------------------
    # Connection / schema
    # ------------------------------------------------------------------

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        try:
            with closing(get_connection(self.db_path)) as conn:
                with conn:
                    yield conn
        except (sqlite3.Error, OverflowError) as exc:
            # OverflowError: an int outside SQLite's 64-bit INTEGER range
            raise StoreError(str(exc)) from exc

    def bootstrap(self) -> "LayoffStore":
        """Create the table and indexes (idempotent)."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        with self._connect() as conn:
            conn.execute(_SCHEMA)
            conn.execute("CREATE INDEX IF NOT EXISTS idx_layoffs_date ON layoffs(date);")
            conn.execute("CREATE INDEX IF NOT EXISTS idx_layoffs_sector ON layoffs(sector);")
            conn.execute("CREATE INDEX IF NOT EXISTS idx_layoffs_location ON layoffs(location);")
        self._ready = True
        return self

    @property
    def is_ready(self) -> bool:
        return self._ready

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def query_records(
        self,
        flt: RecordFilter | None = None,
        page: Optional[int] = None,
        page_size: Optional[int] = None,
        search: Optional[str] = None,
        sort_by: str = "date",
        descending: bool = True,
    ) -> tuple[list[LayoffRecord], int]:
        """Return (records, total matching count), optionally one page of them."""
        where, params = _where(flt, search)
        order = SORT_COLUMNS.get(sort_by, "date")
        direction = "DESC" if descending else "ASC"
        sql = (
            f"SELECT {', '.join(RECORD_COLUMNS)} FROM layoffs{where} "
            f"ORDER BY {order} {direction}, id {direction}"
        )
        page_params: list = []
        if page is not None and page_size is not None:
            sql += " LIMIT ? OFFSET ?"
            page_params = [page_size, (page - 1) * page_size]

        with self._connect() as conn:
            total = conn.execute(f"SELECT COUNT(*) FROM layoffs{where}", params).fetchone()[0]
            rows = conn.execute(sql, params + page_params).fetchall()
        return [_row_to_record(r) for r in rows], int(total)

    def snapshot(self, flt: RecordFilter | None = None) -> pd.DataFrame:
        """All matching records as a DataFrame, in insertion order."""
        where, params = _where(flt)
        sql = f"SELECT {', '.join(RECORD_COLUMNS)} FROM layoffs{where} ORDER BY id"
        with self._connect() as conn:
            rows = conn.execute(sql, params).fetchall()
        return records_frame([_row_to_record(r) for r in rows])

    def count(self) -> int:
        with self._connect() as conn:
            return int(conn.execute("SELECT COUNT(*) FROM layoffs").fetchone()[0])

    def sectors(self) -> list[str]:
        """Distinct non-empty sectors, sorted."""
        return self._distinct("sector")

    def locations(self) -> list[str]:
        """Distinct non-empty locations, sorted."""
        return self._distinct("location")

    def _distinct(self, column: str) -> list[str]:
        with self._connect() as conn:
            rows = conn.execute(
                f"SELECT DISTINCT {column} FROM layoffs WHERE {column} != '' ORDER BY {column}"
            ).fetchall()
        return [r[0] for r in rows]

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def insert_records(self, records: Sequence[LayoffRecord]) -> list[LayoffRecord]:
        """Insert records in one transaction; all or nothing. Returns them with ids."""
        inserted: list[LayoffRecord] = []
        with self._connect() as conn:
            for rec in records:
                cur = conn.execute(
                    "INSERT INTO layoffs (company, date, count, sector, location, source_url) "
                    "VALUES (?, ?, ?, ?, ?, ?)",
                    (
                        rec.company,
                        format_instant(rec.date),
                        rec.count,
                        rec.sector or UNKNOWN,
                        rec.location or "",
                        rec.source_url or "",
                    ),
                )
                inserted.append(_with_id(rec, cur.lastrowid))
        return inserted

    def insert_record(self, record: LayoffRecord) -> LayoffRecord:
        return self.insert_records([record])[0]

    def delete_all_records(self) -> int:
        """Wipe the table. Returns the number of rows removed."""
        with self._connect() as conn:
            cur = conn.execute("DELETE FROM layoffs")
            removed = cur.rowcount
        log.info("Deleted %d existing records", removed)
        return removed


def _with_id(rec: LayoffRecord, new_id: int | None) -> LayoffRecord:
    return LayoffRecord(
        id=new_id,
        company=rec.company,
        date=rec.date,
        count=rec.count,
        sector=rec.sector or UNKNOWN,
        location=rec.location or "",
        source_url=rec.source_url or "",
    )


def records_frame(records: Sequence[LayoffRecord]) -> pd.DataFrame:
    """Build the analytics DataFrame from records.

    `count` is float with NaN for unknown head-counts; `date` is tz-aware UTC.
    """
    if not records:
        df = pd.DataFrame({c: pd.Series(dtype="object") for c in RECORD_COLUMNS})
        df["count"] = df["count"].astype("float64")
        df["date"] = pd.to_datetime(df["date"], utc=True)
        return df

    df = pd.DataFrame([
        {
            "id": r.id,
            "company": r.company,
            "date": r.date,
            "count": r.count,
            "sector": r.sector,
            "location": r.location,
            "source_url": r.source_url,
        }
        for r in records
    ], columns=RECORD_COLUMNS)
    df["count"] = pd.to_numeric(df["count"], errors="coerce").astype("float64")
    df["date"] = pd.to_datetime(df["date"], utc=True)
    return df
