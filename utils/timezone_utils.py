# utils/timezone_utils.py
from datetime import date, datetime, timedelta
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


def is_valid_timezone(name: str) -> bool:
    """Return True when ``name`` is a known IANA timezone"""
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return False
    return True


def local_today(timezone_name: Optional[str] = None, now: Optional[datetime] = None) -> date:
    """
    Current calendar day in the configured timezone.

    Args:
        timezone_name: IANA timezone from the app settings (e.g. "America/New_York").
                       Falls back to the server's local day when None.
        now: Aware datetime to convert instead of the current instant.

    Returns:
        Local calendar day (no time-of-day component)

    Example:
        2026-01-06 03:00 UTC in America/New_York -> 2026-01-05
    """
    if timezone_name is None:
        return (now or datetime.now()).date()

    tz = ZoneInfo(timezone_name)
    if now is None:
        return datetime.now(tz).date()
    if now.tzinfo is None:
        # Naive values are treated as already local
        return now.date()
    return now.astimezone(tz).date()


def days_between(start: date, end: date) -> int:
    """Whole calendar days from ``start`` to ``end`` (negative if end is earlier)"""
    return (end - start).days


def shift_date(day: date, delta_days: int) -> date:
    return day + timedelta(days=delta_days)


def round_end_date(start_date: date, length_weeks: int) -> date:
    """Exclusive end of a round window"""
    return start_date + timedelta(days=length_weeks * 7)


def is_within_round(day: date, start_date: date, length_weeks: int) -> bool:
    """True when ``day`` lies in [start_date, start_date + length_weeks * 7)"""
    return start_date <= day < round_end_date(start_date, length_weeks)


def week_index_for(day: date, start_date: date) -> int:
    """Zero-based week of the round that contains ``day``"""
    return days_between(start_date, day) // 7
