# src/bay_allocation/utils/dates.py
"""
Pick timestamp helpers.

Client exports write dates day-first with dashes ("9-12-25", "09-12-2025")
and optionally a time ("09-12-25 14:03"). Ordering only looks at the date.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

# Oldest possible ordering value for picks without a usable date
EPOCH = datetime(1970, 1, 1)


def _expand_year(year: str) -> Optional[int]:
    if not year.isdigit():
        return None
    if len(year) == 2:
        year = "20" + year
    return int(year)


def parse_day_first_date(value: str) -> Optional[datetime]:
    """Parse "D-M-YY[YY]" (time part ignored). Returns None when unusable."""
    if not value:
        return None

    parts = value.strip().split(" ")[0].split("-")
    if len(parts) != 3 or not parts[0].isdigit() or not parts[1].isdigit():
        return None

    year = _expand_year(parts[2])
    if year is None:
        return None

    try:
        return datetime(year, int(parts[1]), int(parts[0]))
    except ValueError:
        return None


def parse_pick_timestamp(picked_at: str, delivery_date: str = "") -> datetime:
    """
    Derive the ordering date of a pick.

    The pick field is used when it is non-empty, the delivery date only
    when it is empty. The time of day is dropped, so same-day picks tie
    and keep their input order. Unusable values give EPOCH. Never raises.
    """
    source = (picked_at or "").strip() or (delivery_date or "").strip()
    return parse_day_first_date(source) or EPOCH


def format_pick_date(value: str) -> str:
    """
    Normalise a day-first date to "D-M-YYYY" (no zero padding).

    Anything that does not look like D-M-Y is passed through unchanged.
    """
    parts = value.split("-")
    if len(parts) != 3 or not all(p.isdigit() for p in parts):
        return value

    year = parts[2]
    if len(year) == 2:
        year = "20" + year
    return f"{int(parts[0])}-{int(parts[1])}-{year}"
