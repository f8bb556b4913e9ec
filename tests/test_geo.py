from __future__ import annotations

from layofflens.analytics.geo import (
    UNKNOWN_MATCH,
    geographic_summary,
    location_points,
    resolve_location,
    top_countries,
)
from layofflens.data.store import records_frame


def test_exact_city_match():
    match = resolve_location("SF Bay Area")
    assert (match.lat, match.lng, match.country) == (37.7749, -122.4194, "United States")


def test_substring_match_uses_table_order():
    assert resolve_location("Seattle, WA").city == "Seattle"
    assert resolve_location("London").country == "United Kingdom"


def test_unresolvable_location_is_unknown():
    assert resolve_location("Atlantis") is UNKNOWN_MATCH
    assert resolve_location("") is UNKNOWN_MATCH


def test_substring_match_is_case_sensitive():
    assert resolve_location("seattle") is UNKNOWN_MATCH


def test_points_exclude_unknown_and_cap_intensity(frame):
    df = frame(
        {"location": "SF Bay Area", "count": 1500},
        {"location": "Seattle", "count": 200},
        {"location": "Atlantis", "count": 999},
        {"location": "", "count": 50},
    )
    points = location_points(df)
    assert [p["city"] for p in points] == ["SF Bay Area", "Seattle"]
    assert points[0]["intensity"] == 1
    assert points[1]["intensity"] == 0.2
    assert points[1]["count"] == 200


def test_points_sum_repeated_locations(frame):
    df = frame({"location": "Boston", "count": 30}, {"location": "Boston", "count": 20})
    (point,) = location_points(df)
    assert point["count"] == 50


def test_top_countries_sum_cities(frame):
    df = frame(
        {"location": "SF Bay Area", "count": 1500},
        {"location": "Seattle", "count": 200},
        {"location": "London", "count": 300},
    )
    assert top_countries(location_points(df)) == [
        {"country": "United States", "count": 1700},
        {"country": "United Kingdom", "count": 300},
    ]


def test_top_countries_limit(frame):
    df = frame(
        {"location": "Toronto", "count": 10},
        {"location": "Berlin", "count": 20},
        {"location": "Tokyo", "count": 30},
    )
    assert [c["country"] for c in top_countries(location_points(df), limit=2)] == ["Japan", "Germany"]


def test_empty_summary():
    assert geographic_summary(records_frame([])) == {
        "locations": [],
        "topCountries": [],
        "totalLocations": 0,
    }
