"""
Display helpers for table rows and report labels: location names, flags, sector icons.
"""
from __future__ import annotations

import re
from typing import Callable, Mapping, Optional

from layofflens.config import (
    DEFAULT_FLAG,
    DEFAULT_SECTOR_ICON,
    INTERNATIONAL_FLAG,
    LOCATION_LABELS,
    SECTOR_ICONS,
)

_BLANK = {"", "null", "undefined"}

_EXTRACT_PATTERNS = [
    re.compile(r"(?:in|from|at)\s+([a-zA-Z\s]+)", re.IGNORECASE),
    re.compile(r"([a-zA-Z\s]+),\s*([a-zA-Z\s]+)", re.IGNORECASE),
    re.compile(r"([a-zA-Z\s]+)\s*-\s*([a-zA-Z\s]+)", re.IGNORECASE),
]

_COMPANY_SUFFIX_RE = re.compile(r"\s+(Inc\.?|LLC|Ltd\.?|Corp\.?|Corporation|Company)$", re.IGNORECASE)


def _lookup(text: str, table: Mapping[str, object], extract: bool) -> Optional[object]:
    """Exact key, then partial match either way, then pattern extraction."""
    if text in table:
        return table[text]
    for key, value in table.items():
        if key in text or text in key:
            return value
    if extract:
        for pattern in _EXTRACT_PATTERNS:
            m = pattern.search(text)
            if not m:
                continue
            for group in m.groups():
                candidate = group.strip()
                if candidate in table:
                    return table[candidate]
    return None


def _is_international(text: str) -> bool:
    return "non-us" in text or "non us" in text or "international" in text


def _resolve(location: str, pick: Callable[[tuple], str], blank: str, international: str, fallback: str) -> str:
    text = (location or "").lower().strip()
    if text in _BLANK:
        return blank
    hit = _lookup(text, LOCATION_LABELS, extract=True)
    if hit is not None:
        return pick(hit)
    if _is_international(text):
        return international
    return fallback


def location_display_name(location: str) -> str:
    """"sf bay area" → "SF Bay Area, US"; unknown text is capitalized as-is."""
    raw = location or ""
    return _resolve(
        raw,
        pick=lambda hit: hit[0],
        blank="Unknown Location",
        international="International",
        fallback=raw[:1].upper() + raw[1:].lower(),
    )


def country_flag(location: str) -> str:
    return _resolve(
        location,
        pick=lambda hit: hit[1],
        blank=DEFAULT_FLAG,
        international=INTERNATIONAL_FLAG,
        fallback=DEFAULT_FLAG,
    )


def industry_icon(sector: str) -> str:
    text = (sector or "").lower().strip()
    hit = _lookup(text, SECTOR_ICONS, extract=False)
    return hit if hit is not None else DEFAULT_SECTOR_ICON


def format_company_name(name: str) -> str:
    """Drop a trailing Inc/LLC/Ltd/Corp/Corporation/Company."""
    return _COMPANY_SUFFIX_RE.sub("", name or "").strip()


def format_number(num: float) -> str:
    """1_500 → "1.5K", 2_300_000 → "2.3M"."""
    if num >= 1_000_000:
        return f"{num / 1_000_000:.1f}M"
    if num >= 1_000:
        return f"{num / 1_000:.1f}K"
    return str(int(num)) if float(num).is_integer() else str(num)


def decorate(record: dict) -> dict:
    """Add displayCompany / displayLocation / flag / icon fields to a serialized record."""
    return {
        **record,
        "displayCompany": format_company_name(record.get("company", "")),
        "displayLocation": location_display_name(record.get("location", "")),
        "flag": country_flag(record.get("location", "")),
        "icon": industry_icon(record.get("sector", "")),
    }
