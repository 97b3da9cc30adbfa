from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Optional

from ..core.constants import ADJACENT_DAY_NAIVE


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_clock(value: str) -> Optional[tuple[int, int, int]]:
    """Split an ``HH:MM[:SS]`` string into integers.

    Returns None instead of raising so callers can fall back to sentinels.
    """

    if not value:
        return None
    parts = value.strip().split(":")
    if len(parts) < 2:
        return None
    try:
        hours = int(parts[0])
        minutes = int(parts[1])
        seconds = int(parts[2]) if len(parts) >= 3 and parts[2] else 0
    except ValueError:
        return None
    if hours < 0 or not 0 <= minutes < 60 or not 0 <= seconds < 60:
        return None
    return hours, minutes, seconds


def clock_hour(value: str) -> Optional[int]:
    parsed = parse_clock(value)
    return parsed[0] if parsed else None


def clock_minutes(value: str) -> Optional[int]:
    """Minutes since midnight, seconds ignored."""
    parsed = parse_clock(value)
    if not parsed:
        return None
    return parsed[0] * 60 + parsed[1]


def clock_seconds(value: str) -> Optional[int]:
    parsed = parse_clock(value)
    if not parsed:
        return None
    return parsed[0] * 3600 + parsed[1] * 60 + parsed[2]


def format_minutes_as_clock(total_minutes: int) -> str:
    return f"{total_minutes // 60:02d}:{total_minutes % 60:02d}:00"


def adjacent_day(value: str, delta: int, *, mode: str) -> Optional[str]:
    """Return the ISO date ``delta`` days away from ``value``.

    In naive mode only the day component is incremented/decremented and
    re-padded, without month or year rollover (2024-03-01 minus one day gives
    2024-03-00). Calendar mode uses real date arithmetic and falls back to the
    naive form for strings that are not valid dates.

    Returns None when ``value`` has no ``YYYY-MM-DD`` shape to shift.
    """

    if mode != ADJACENT_DAY_NAIVE:
        try:
            return (parse_iso_date(value) + timedelta(days=delta)).isoformat()
        except ValueError:
            pass

    parts = value.split("-") if value else []
    if len(parts) != 3:
        return None
    year, month, day = parts
    try:
        shifted = int(day) + delta
    except ValueError:
        return None
    return f"{year}-{month}-{shifted:02d}"


def now_utc() -> datetime:
    """Current UTC time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc)
