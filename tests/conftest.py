from __future__ import annotations

import datetime as dt

import pytest

from layofflens.data.schemas import LayoffRecord
from layofflens.data.store import LayoffStore, records_frame

UTC = dt.timezone.utc


@pytest.fixture()
def now() -> dt.datetime:
    return dt.datetime(2024, 3, 15, 12, 0, 0, tzinfo=UTC)


@pytest.fixture()
def db_path(tmp_path):
    return tmp_path / "layoffs.db"


@pytest.fixture()
def store(db_path) -> LayoffStore:
    return LayoffStore(db_path).bootstrap()


@pytest.fixture()
def make_record():
    """Factory for LayoffRecord with sensible defaults; date may be 'YYYY-MM-DD'."""
    def _make(company="Acme", date="2024-01-15", count=100, sector="Tech", location="Seattle", source_url=""):
        if isinstance(date, str):
            date = dt.datetime.fromisoformat(date).replace(tzinfo=UTC)
        return LayoffRecord(
            company=company,
            date=date,
            count=count,
            sector=sector,
            location=location,
            source_url=source_url,
        )
    return _make


@pytest.fixture()
def frame(make_record):
    """Build an analytics snapshot from keyword dicts."""
    def _frame(*rows):
        return records_frame([make_record(**r) for r in rows])
    return _frame
