from __future__ import annotations

import datetime as dt

import pytest

from layofflens.analytics.dashboard import (
    DECREASING,
    INCREASING,
    STABLE,
    classify_trend,
    compute_stats,
    dashboard_summary,
    filter_records,
    industry_distribution,
    js_round,
    monthly_time_series,
    recent_trend,
    sector_color,
)
from layofflens.config import SECTOR_PALETTE
from layofflens.data.schemas import RecordFilter
from layofflens.data.store import records_frame

UTC = dt.timezone.utc


def _day(s):
    return dt.datetime.fromisoformat(s).replace(tzinfo=UTC)


def test_empty_snapshot_gives_zero_stats(now):
    stats = compute_stats(records_frame([]), now)
    assert stats == {
        "totalLayoffs": 0,
        "totalCompanies": 0,
        "totalEmployeesAffected": 0,
        "averageLayoffSize": 0,
        "mostAffectedIndustry": "Unknown",
        "mostAffectedCountry": "Unknown",
        "recentTrend": STABLE,
    }


def test_companies_are_deduplicated_case_insensitively(frame, now):
    df = frame({"company": "Acme"}, {"company": "acme "}, {"company": "Globex"})
    assert compute_stats(df, now)["totalCompanies"] == 2


def test_unknown_counts_add_nothing_but_still_count_as_events(frame, now):
    df = frame({"count": 100}, {"count": None})
    stats = compute_stats(df, now)
    assert stats["totalLayoffs"] == 2
    assert stats["totalEmployeesAffected"] == 100
    assert stats["averageLayoffSize"] == 50


def test_average_rounds_half_up(frame, now):
    df = frame({"count": 1}, {"count": 2})
    assert compute_stats(df, now)["averageLayoffSize"] == 2
    assert js_round(2.5) == 3
    assert js_round(2.49) == 2


def test_most_affected_ties_go_to_first_seen(frame, now):
    df = frame(
        {"sector": "Tech", "location": "Seattle", "count": 100},
        {"sector": "Retail", "location": "Austin", "count": 100},
    )
    stats = compute_stats(df, now)
    assert stats["mostAffectedIndustry"] == "Tech"
    assert stats["mostAffectedCountry"] == "Seattle"


def test_blank_location_groups_as_unknown(frame, now):
    df = frame({"location": "", "count": 500}, {"location": "Seattle", "count": 100})
    assert compute_stats(df, now)["mostAffectedCountry"] == "Unknown"


@pytest.mark.parametrize("recent, previous, expected", [
    (110, 100, STABLE),
    (111, 100, INCREASING),
    (90, 100, STABLE),
    (89, 100, DECREASING),
    (5, 0, INCREASING),
    (0, 0, STABLE),
])
def test_classify_trend(recent, previous, expected):
    assert classify_trend(recent, previous) == expected


def test_trend_windows_from_dates(make_record, now):
    df = records_frame([
        make_record(date=now - dt.timedelta(days=1), count=200),
        make_record(date=now - dt.timedelta(days=30), count=100),
        make_record(date=now - dt.timedelta(days=90), count=5000),
    ])
    # day -30 belongs to the previous window: 200 vs 100
    assert recent_trend(df, now) == INCREASING


def test_future_records_are_outside_the_recent_window(make_record, now):
    df = records_frame([make_record(date=now + dt.timedelta(days=2), count=999)])
    assert recent_trend(df, now) == STABLE


def test_distribution_percentages_sum_to_about_100(frame):
    df = frame(
        {"sector": "Tech", "count": 1},
        {"sector": "Retail", "count": 1},
        {"sector": "Healthcare", "count": 1},
    )
    rows = industry_distribution(df)
    assert [r["value"] for r in rows] == [33, 33, 33]
    assert abs(sum(r["value"] for r in rows) - 100) <= len(rows)


def test_distribution_is_sorted_and_truncated(frame):
    df = frame(
        {"sector": "Tech", "count": 10},
        {"sector": "Retail", "count": 70},
        {"sector": "Energy", "count": 20},
    )
    rows = industry_distribution(df, top_n=2)
    assert [(r["name"], r["value"]) for r in rows] == [("Retail", 70), ("Energy", 20)]


def test_distribution_is_empty_when_nothing_counted(frame):
    assert industry_distribution(frame({"count": None}, {"count": 0})) == []
    assert industry_distribution(records_frame([])) == []


def test_sector_color_is_stable_and_case_insensitive():
    assert sector_color("A") == "#10B981"
    assert sector_color("Tech") == sector_color("tech")
    assert sector_color("Healthcare") in SECTOR_PALETTE


def test_time_series_has_one_bucket_per_month(frame, now):
    df = frame(
        {"date": "2024-02-10", "count": 50},
        {"date": "2024-02-20", "count": 25},
        {"date": "2023-06-01", "count": 999},
    )
    series = monthly_time_series(df, months=3, now=now)
    assert series == [
        {"date": "Jan 24", "month": "2024-01", "value": 0},
        {"date": "Feb 24", "month": "2024-02", "value": 75},
        {"date": "Mar 24", "month": "2024-03", "value": 0},
    ]


def test_time_series_for_empty_snapshot_is_all_zero(now):
    series = monthly_time_series(records_frame([]), now=now)
    assert len(series) == 12
    assert series[0]["month"] == "2023-04"
    assert series[-1]["month"] == "2024-03"
    assert all(p["value"] == 0 for p in series)


def test_filter_is_inclusive_and_idempotent(frame):
    df = frame(
        {"company": "A", "date": "2024-01-01", "sector": "Tech"},
        {"company": "B", "date": "2024-01-31", "sector": "Tech"},
        {"company": "C", "date": "2024-02-01", "sector": "Tech"},
        {"company": "D", "date": "2024-01-15", "sector": "Retail"},
    )
    flt = RecordFilter(sector="Tech", start_date=_day("2024-01-01"), end_date=_day("2024-01-31"))
    once = filter_records(df, flt)
    assert list(once["company"]) == ["A", "B"]
    assert list(filter_records(once, flt)["company"]) == ["A", "B"]


def test_empty_filter_returns_everything(frame):
    df = frame({"company": "A"}, {"company": "B"})
    assert len(filter_records(df, RecordFilter())) == 2
    assert len(filter_records(df, None)) == 2


def test_dashboard_summary_bundle(frame, now):
    df = frame({"sector": "Tech", "count": 10}, {"sector": "Retail", "count": 30})
    summary = dashboard_summary(df, RecordFilter(sector="Tech"), now)
    assert summary["filter_label"] == "Tech"
    assert summary["stats"]["totalLayoffs"] == 1
    assert summary["industries"][0]["name"] == "Tech"
    assert len(summary["time_series"]) == 12
