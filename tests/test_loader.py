from __future__ import annotations

import pytest

from layofflens.data.loader import batches, import_csv, load_records
from layofflens.data.schemas import ImportReport, ValidationIssue
from layofflens.data.store import StoreError


class FlakyStore:
    """Store double whose Nth insert batch fails."""

    def __init__(self, fail_batch=None, fail_wipe=False):
        self.fail_batch = fail_batch
        self.fail_wipe = fail_wipe
        self.calls = 0
        self.rows = []

    def delete_all_records(self):
        if self.fail_wipe:
            raise StoreError("database is locked")
        removed = len(self.rows)
        self.rows = []
        return removed

    def insert_records(self, records):
        self.calls += 1
        if self.calls == self.fail_batch:
            raise StoreError("constraint failed")
        self.rows.extend(records)
        return list(records)


def test_batches_are_fixed_size():
    sizes = [len(b) for b in batches(list(range(250)), 100)]
    assert sizes == [100, 100, 50]


def test_batches_reject_non_positive_size():
    with pytest.raises(ValueError):
        list(batches([1, 2, 3], 0))


def test_load_records_sleeps_between_batches_only(store, make_record):
    records = [make_record(company=f"Co {i}") for i in range(250)]
    sleeps = []
    report = load_records(store, records, batch_size=100, delay=0.5, sleep=sleeps.append)
    assert sleeps == [0.5, 0.5]
    assert report.batches == 3
    assert report.rows_inserted == 250
    assert store.count() == 250


def test_failed_batch_does_not_stop_the_import(make_record):
    fake = FlakyStore(fail_batch=2)
    records = [make_record(company=f"Co {i}") for i in range(250)]
    report = load_records(fake, records, batch_size=100, delay=0, sleep=lambda s: None)
    assert report.batches == 3
    assert report.batches_failed == 1
    assert report.rows_inserted == 150
    assert report.rows_failed_insert == 100
    assert report.insert_errors == ["Batch 2: constraint failed"]
    assert len(fake.rows) == 150


def test_wipe_failure_is_logged_and_import_continues(make_record):
    fake = FlakyStore(fail_wipe=True)
    report = load_records(fake, [make_record()], delay=0, sleep=lambda s: None)
    assert report.wiped is False
    assert report.rows_inserted == 1


def test_load_records_replaces_existing_rows(store, make_record):
    store.insert_records([make_record(company="Old")])
    report = load_records(store, [make_record(company="New")], delay=0)
    assert report.wiped
    records, total = store.query_records()
    assert total == 1
    assert records[0].company == "New"


def test_keep_existing_appends(store, make_record):
    store.insert_records([make_record(company="Old")])
    load_records(store, [make_record(company="New")], delay=0, wipe=False)
    assert store.count() == 2


def test_import_csv_end_to_end(store, tmp_path, now, make_record):
    store.insert_records([make_record(company="Stale")])
    path = tmp_path / "layoffs.csv"
    path.write_text(
        "Company,Location HQ,# Laid Off,Date,Industry,Source\n"
        "Acme,SF Bay Area,\"1,200\",2024-01-15,Tech,https://example.com/acme\n"
        ",Seattle,50,2024-01-20,Retail,\n"
        "Globex,,,2024-02-01,,\n",
        encoding="utf-8",
    )
    report = import_csv(store, path, delay=0, now=now)

    assert report.rows_read == 3
    assert report.rows_valid == 2
    assert report.rows_inserted == 2
    assert [str(i) for i in report.validation_errors] == ["Row 2: Missing company name"]

    records, total = store.query_records(sort_by="company", descending=False)
    assert total == 2
    acme, globex = records
    assert acme.count == 1200
    assert acme.to_dict()["date"] == "2024-01-15T00:00:00Z"
    assert globex.count is None
    assert globex.sector == "Unknown"


def test_import_csv_with_no_valid_rows_leaves_store_alone(store, tmp_path, make_record):
    store.insert_records([make_record()])
    path = tmp_path / "layoffs.csv"
    path.write_text("Company,Location HQ,# Laid Off,Date,Industry,Source\n,,,,,\n", encoding="utf-8")
    report = import_csv(store, path, delay=0)
    assert report.rows_inserted == 0
    assert report.rows_failed_validation == 1
    assert store.count() == 1


def test_import_csv_missing_file_raises(store, tmp_path):
    with pytest.raises(FileNotFoundError):
        import_csv(store, tmp_path / "nope.csv", delay=0)


def test_summary_lists_first_ten_errors():
    report = ImportReport(
        rows_read=15,
        validation_errors=[ValidationIssue(i, "Missing company name") for i in range(1, 16)],
    )
    lines = report.summary_lines(10)
    listed = [line for line in lines if line.startswith("  - Row")]
    assert len(listed) == 10
    assert listed[0] == "  - Row 1: Missing company name"
    assert "  ... and 5 more errors" in lines


def test_oversized_count_fails_only_its_batch(store, tmp_path):
    lines = ["Company,Location HQ,# Laid Off,Date,Industry,Source"]
    for i in range(1, 151):
        count = "99999999999999999999" if i == 120 else "10"
        lines.append(f"Co {i},Seattle,{count},2024-01-15,Tech,")
    path = tmp_path / "layoffs.csv"
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")

    report = import_csv(store, path, delay=0)

    assert report.batches == 2
    assert report.batches_failed == 1
    assert report.rows_inserted == 100
    assert report.rows_failed_insert == 50
    assert report.insert_errors[0].startswith("Batch 2:")
    assert store.count() == 100
