"""
Record and filter schemas shared by the importer, store, and analytics.
"""
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field, asdict
from typing import Optional


ISO_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def to_utc(value: dt.datetime) -> dt.datetime:
    """Naive datetimes are taken as UTC; aware ones are converted."""
    if value.tzinfo is None:
        return value.replace(tzinfo=dt.timezone.utc)
    return value.astimezone(dt.timezone.utc)


def format_instant(value: dt.datetime) -> str:
    """Render a datetime as the stored ISO instant, e.g. 2024-01-15T00:00:00Z."""
    return to_utc(value).strftime(ISO_FORMAT)


def parse_instant(value: str) -> dt.datetime:
    """Inverse of format_instant; also accepts offsets and plain dates."""
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    if len(text) == 10:
        return dt.datetime.fromisoformat(text).replace(tzinfo=dt.timezone.utc)
    return to_utc(dt.datetime.fromisoformat(text))


@dataclass(frozen=True)
class LayoffRecord:
    """One layoff event, as persisted in the record store."""
    company: str
    date: dt.datetime
    count: Optional[int] = None
    sector: str = "Unknown"
    location: str = ""
    source_url: str = ""
    id: Optional[int] = None

    def to_dict(self) -> dict:
        d = asdict(self)
        d["date"] = format_instant(self.date)
        return d


@dataclass(frozen=True)
class RecordFilter:
    """Optional equality filters on sector/location plus an inclusive date range.

    A field left as None places no constraint on the result.
    """
    sector: Optional[str] = None
    location: Optional[str] = None
    start_date: Optional[dt.datetime] = None
    end_date: Optional[dt.datetime] = None

    @property
    def is_empty(self) -> bool:
        return not (self.sector or self.location or self.start_date or self.end_date)

    @property
    def label(self) -> str:
        """Human-readable label for report subtitles."""
        parts = []
        if self.sector:
            parts.append(self.sector)
        if self.location:
            parts.append(self.location)
        if self.start_date or self.end_date:
            s = self.start_date.date().isoformat() if self.start_date else "?"
            e = self.end_date.date().isoformat() if self.end_date else "?"
            parts.append(f"{s} to {e}")
        return "  |  ".join(parts) if parts else "All Records"


@dataclass(frozen=True)
class ValidationIssue:
    """A row the normalizer rejected: 1-based data row index + reason."""
    row: int
    reason: str

    def __str__(self) -> str:
        return f"Row {self.row}: {self.reason}"


@dataclass
class ImportReport:
    """Counters for one import run."""
    rows_read: int = 0
    rows_valid: int = 0
    rows_inserted: int = 0
    rows_failed_insert: int = 0
    batches: int = 0
    batches_failed: int = 0
    wiped: bool = False
    validation_errors: list[ValidationIssue] = field(default_factory=list)
    insert_errors: list[str] = field(default_factory=list)

    @property
    def rows_failed_validation(self) -> int:
        return len(self.validation_errors)

    def summary_lines(self, max_errors: int = 10) -> list[str]:
        """Textual end-of-run summary for the operator."""
        lines = [
            "Import completed!",
            f"  Total records processed: {self.rows_read:,}",
            f"  Valid records:           {self.rows_valid:,}",
            f"  Successfully imported:   {self.rows_inserted:,}",
            f"  Import errors:           {self.rows_failed_insert:,} rows in {self.batches_failed} batch(es)",
            f"  Validation errors:       {self.rows_failed_validation:,}",
        ]
        if self.validation_errors:
            lines.append("")
            lines.append("Validation errors:")
            for issue in self.validation_errors[:max_errors]:
                lines.append(f"  - {issue}")
            extra = len(self.validation_errors) - max_errors
            if extra > 0:
                lines.append(f"  ... and {extra} more errors")
        if self.insert_errors:
            lines.append("")
            lines.append("Batch errors:")
            for msg in self.insert_errors:
                lines.append(f"  - {msg}")
        return lines
