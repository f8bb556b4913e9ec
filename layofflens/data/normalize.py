"""
Row normalization for the layoffs CSV extract: field parsing, fallbacks, validation.
"""
from __future__ import annotations

import datetime as dt
import logging
import re
from typing import Iterable, Mapping, Optional

import pandas as pd

from layofflens.config import COLUMN_MAP, HEADER_COMPANY, UNKNOWN
from layofflens.data.schemas import LayoffRecord, ValidationIssue, to_utc

log = logging.getLogger(__name__)


class RowValidationError(ValueError):
    """A CSV row that cannot become a LayoffRecord."""
    reason = "Invalid row"

    def __init__(self, reason: str | None = None) -> None:
        super().__init__(reason or self.reason)
        if reason:
            self.reason = reason


class MissingCompany(RowValidationError):
    reason = "Missing company name"


# ---------------------------------------------------------------------------
# Field parsers
# ---------------------------------------------------------------------------

_NON_NUMERIC_RE = re.compile(r"[^\d.]")
_LEADING_NUMBER_RE = re.compile(r"\d+(?:\.\d*)?|\.\d+")


def _text(row: Mapping[str, object], column: str) -> str:
    value = row.get(column)
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return ""
    return str(value).strip()


def parse_count(value: str | None) -> int | float | None:
    """Parse a head-count like "1,200" → 1200. Blank or garbled → None.

    Every character except digits and "." is dropped first, then the longest
    leading decimal number is read ("1.2.3" reads as 1.2).
    """
    if value is None or not str(value).strip():
        return None
    cleaned = _NON_NUMERIC_RE.sub("", str(value))
    m = _LEADING_NUMBER_RE.match(cleaned)
    if not m:
        return None
    number = float(m.group(0))
    return int(number) if number.is_integer() else number


def parse_date(value: str | None, now: dt.datetime) -> dt.datetime:
    """Parse a human-readable date as a UTC instant; blank/unparseable → now."""
    if value is None or not str(value).strip():
        return now
    try:
        ts = pd.to_datetime(str(value).strip(), errors="coerce", utc=True)
    except (ValueError, TypeError, OverflowError):
        return now
    if ts is None or pd.isna(ts):
        return now
    return ts.to_pydatetime().replace(microsecond=0)


# ---------------------------------------------------------------------------
# Row normalization
# ---------------------------------------------------------------------------

def normalize_row(row: Mapping[str, object], now: dt.datetime) -> LayoffRecord:
    """Turn one raw CSV row into a LayoffRecord, or raise RowValidationError."""
    company = _text(row, HEADER_COMPANY)
    if not company:
        raise MissingCompany()

    fields = {internal: _text(row, raw) for raw, internal in COLUMN_MAP.items()}
    return LayoffRecord(
        company=company,
        location=fields["location"],
        count=parse_count(fields["count"]),
        date=parse_date(fields["date"], now),
        sector=fields["sector"] or UNKNOWN,
        source_url=fields["source_url"],
    )


def is_duplicate_header(row: Mapping[str, object]) -> bool:
    """True when a data row is a repeat of the header line."""
    return _text(row, HEADER_COMPANY) == HEADER_COMPANY


def normalize_rows(
    rows: Iterable[Mapping[str, object]],
    now: Optional[dt.datetime] = None,
) -> tuple[list[LayoffRecord], list[ValidationIssue], int]:
    """Normalize every row, collecting rejects instead of aborting.

    Returns (records, validation issues, rows read). Row numbers are 1-based
    over data rows; a duplicated header on row 1 is read but skipped.
    """
    now = to_utc(now or dt.datetime.now(dt.timezone.utc)).replace(microsecond=0)
    records: list[LayoffRecord] = []
    issues: list[ValidationIssue] = []
    row_count = 0

    for row in rows:
        row_count += 1
        if row_count == 1 and is_duplicate_header(row):
            continue
        try:
            records.append(normalize_row(row, now))
        except RowValidationError as exc:
            issues.append(ValidationIssue(row_count, exc.reason))
            log.debug("Row %d rejected: %s", row_count, exc.reason)
        except Exception as exc:
            issues.append(ValidationIssue(row_count, str(exc) or type(exc).__name__))
            log.debug("Row %d failed to parse: %s", row_count, exc)

    return records, issues, row_count
