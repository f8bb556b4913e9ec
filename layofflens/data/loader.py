"""
CSV reading and the batch import job: wipe the table, then insert in fixed-size batches.

The job is single-pass and not resumable. A crash part-way leaves the table
partially loaded; re-run the whole import to recover. Two imports running at
once race each other's wipe and inserts.
"""
from __future__ import annotations

import datetime as dt
import logging
import time
from pathlib import Path
from typing import Callable, Iterator, Optional, Sequence

import pandas as pd

from layofflens.config import (
    BATCH_DELAY_SECONDS,
    BATCH_SIZE,
    DEFAULT_CSV_PATH,
    PROGRESS_EVERY,
)
from layofflens.data.normalize import normalize_rows
from layofflens.data.schemas import ImportReport, LayoffRecord
from layofflens.data.store import LayoffStore, StoreError

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# CSV reading
# ---------------------------------------------------------------------------

def read_layoffs_csv(filepath: Path | str = DEFAULT_CSV_PATH) -> pd.DataFrame:
    """Load the raw CSV with every cell as a string.

    `utf-8-sig` drops a leading byte-order mark so the first header is "Company".
    Blank cells stay "" rather than NaN.
    """
    df = pd.read_csv(
        filepath,
        dtype=str,
        keep_default_na=False,
        encoding="utf-8-sig",
    )
    df.columns = [str(c).strip() for c in df.columns]
    return df


def iter_rows(df: pd.DataFrame) -> Iterator[dict]:
    """Yield rows as plain dicts, logging progress on large files."""
    for i, row in enumerate(df.to_dict("records"), 1):
        if i % PROGRESS_EVERY == 0:
            log.info("Processed %d rows...", i)
        yield row


# ---------------------------------------------------------------------------
# Batching
# ---------------------------------------------------------------------------

def batches(records: Sequence[LayoffRecord], size: int = BATCH_SIZE) -> Iterator[list[LayoffRecord]]:
    """Split records into consecutive lists of at most `size`."""
    if size < 1:
        raise ValueError("batch size must be >= 1")
    for i in range(0, len(records), size):
        yield list(records[i:i + size])


def load_records(
    store: LayoffStore,
    records: Sequence[LayoffRecord],
    report: Optional[ImportReport] = None,
    batch_size: int = BATCH_SIZE,
    delay: float = BATCH_DELAY_SECONDS,
    wipe: bool = True,
    sleep: Callable[[float], None] = time.sleep,
) -> ImportReport:
    """Replace the table contents with `records`, batch by batch.

    A failed wipe is logged and the import goes on. A failed batch is
    recorded against its batch number and the next batch still runs; earlier
    batches are not rolled back. `delay` seconds pass between batches.
    """
    report = report or ImportReport(rows_read=len(records), rows_valid=len(records))

    if wipe:
        print("  Clearing existing data...")
        try:
            store.delete_all_records()
            report.wiped = True
            print("  Existing data cleared")
        except StoreError as exc:
            log.error("Error clearing existing data: %s", exc)
            print(f"  Error clearing existing data: {exc}")

    chunks = list(batches(records, batch_size))
    for number, chunk in enumerate(chunks, 1):
        report.batches += 1
        print(f"  Processing batch {number} with {len(chunk)} records...")
        try:
            inserted = store.insert_records(chunk)
        except StoreError as exc:
            report.batches_failed += 1
            report.rows_failed_insert += len(chunk)
            report.insert_errors.append(f"Batch {number}: {exc}")
            log.error("Batch %d failed: %s", number, exc)
        else:
            report.rows_inserted += len(inserted)
            log.info("Batch %d imported: %d records", number, len(inserted))

        if number < len(chunks) and delay > 0:
            sleep(delay)

    return report


# ---------------------------------------------------------------------------
# Full job
# ---------------------------------------------------------------------------

def import_csv(
    store: LayoffStore,
    filepath: Path | str = DEFAULT_CSV_PATH,
    batch_size: int = BATCH_SIZE,
    delay: float = BATCH_DELAY_SECONDS,
    wipe: bool = True,
    now: Optional[dt.datetime] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> ImportReport:
    """Read → normalize → wipe → batch insert. Returns the run's counters.

    Reading errors (missing file, unreadable CSV) propagate; everything
    after that is logged and counted instead.
    """
    print(f"Reading {filepath}...")
    df = read_layoffs_csv(filepath)

    records, issues, rows_read = normalize_rows(iter_rows(df), now=now)
    report = ImportReport(
        rows_read=rows_read,
        rows_valid=len(records),
        validation_errors=issues,
    )
    print(f"  CSV parsing completed. Total rows: {rows_read:,}")
    print(f"  Total valid records: {len(records):,}")
    print(f"  Total validation errors: {len(issues):,}")

    if not records:
        print("  No valid records to import")
        return report

    return load_records(
        store,
        records,
        report=report,
        batch_size=batch_size,
        delay=delay,
        wipe=wipe,
        sleep=sleep,
    )
