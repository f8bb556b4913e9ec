from __future__ import annotations

import pytest

from layofflens.analytics.labels import (
    country_flag,
    decorate,
    format_company_name,
    format_number,
    industry_icon,
    location_display_name,
)
from layofflens.config import DEFAULT_FLAG, DEFAULT_SECTOR_ICON, INTERNATIONAL_FLAG


@pytest.mark.parametrize("raw, expected", [
    ("SF Bay Area", "SF Bay Area, US"),
    ("new york city", "New York, US"),
    ("London", "London, UK"),
    ("", "Unknown Location"),
    ("null", "Unknown Location"),
])
def test_location_display_name(raw, expected):
    assert location_display_name(raw) == expected


def test_international_locations():
    assert location_display_name("Non-US") == "International"
    assert country_flag("Non-US") == INTERNATIONAL_FLAG


def test_country_flag():
    assert country_flag("sf bay area") == "🇺🇸"
    assert country_flag("Bangalore") == "🇮🇳"
    assert country_flag("") == DEFAULT_FLAG


def test_industry_icon():
    assert industry_icon("Tech") == "💻"
    assert industry_icon("Healthcare") == "🏥"
    assert industry_icon("zzz") == DEFAULT_SECTOR_ICON


def test_format_company_name_drops_legal_suffix():
    assert format_company_name("Acme Inc.") == "Acme"
    assert format_company_name("Globex Corporation") == "Globex"
    assert format_company_name("Initech") == "Initech"


@pytest.mark.parametrize("num, expected", [
    (999, "999"),
    (1500, "1.5K"),
    (2_300_000, "2.3M"),
])
def test_format_number(num, expected):
    assert format_number(num) == expected


def test_decorate_adds_display_fields():
    out = decorate({"company": "Acme Inc.", "location": "London", "sector": "Tech"})
    assert out["company"] == "Acme Inc."
    assert out["displayCompany"] == "Acme"
    assert out["displayLocation"] == "London, UK"
    assert out["flag"] == "🇬🇧"
    assert out["icon"] == "💻"
