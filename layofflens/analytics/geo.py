"""
Geographic analytics — resolve free-text locations to map coordinates.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict

import pandas as pd

from layofflens.config import CITY_COORDINATES, INTENSITY_SCALE, TOP_COUNTRIES, UNKNOWN
from layofflens.analytics.common import sum_by


@dataclass(frozen=True)
class CityMatch:
    city: str
    lat: float
    lng: float
    country: str


UNKNOWN_MATCH = CityMatch(UNKNOWN, 0.0, 0.0, UNKNOWN)


def resolve_location(location: str) -> CityMatch:
    """Map a location string to a known city.

    Exact table key first, then the first table entry (in table order) where
    either string contains the other. No match → UNKNOWN_MATCH at (0, 0).
    """
    if location in CITY_COORDINATES:
        lat, lng, country = CITY_COORDINATES[location]
        return CityMatch(location, lat, lng, country)
    if not location:
        return UNKNOWN_MATCH
    for city, (lat, lng, country) in CITY_COORDINATES.items():
        if city in location or location in city:
            return CityMatch(city, lat, lng, country)
    return UNKNOWN_MATCH


def location_points(df: pd.DataFrame) -> list[dict]:
    """One map point per resolvable location, largest head-count first.

    intensity = min(count / 1000, 1).
    """
    if df.empty:
        return []
    points = []
    for location, total in sum_by(df, "location").items():
        match = resolve_location(str(location))
        if match.city == UNKNOWN:
            continue
        count = int(total)
        points.append({
            "location": str(location),
            **asdict(match),
            "count": count,
            "intensity": min(count / INTENSITY_SCALE, 1),
        })
    points.sort(key=lambda p: p["count"], reverse=True)
    return points


def top_countries(points: list[dict], limit: int = TOP_COUNTRIES) -> list[dict]:
    """Sum resolved location counts per country, descending, top `limit`."""
    totals: dict[str, int] = {}
    for p in points:
        totals[p["country"]] = totals.get(p["country"], 0) + p["count"]
    ranked = [{"country": c, "count": n} for c, n in totals.items()]
    ranked.sort(key=lambda r: r["count"], reverse=True)
    return ranked[:limit]


def geographic_summary(df: pd.DataFrame) -> dict:
    """Map payload: {locations, topCountries, totalLocations}."""
    points = location_points(df)
    return {
        "locations": points,
        "topCountries": top_countries(points),
        "totalLocations": len(points),
    }
