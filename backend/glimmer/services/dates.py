"""Calendar-day helpers.

Storage and comparison happen on UTC calendar days: every instant is truncated
to 00:00 UTC of its UTC date before two days are compared or subtracted.
Display formatting is the only place a local timezone is applied.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional

import pytz

ONE_DAY = timedelta(days=1)


def ensure_utc(instant: datetime) -> datetime:
    """Attach UTC to naive datetimes (as read back from SQLite) and convert aware ones."""
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc)


def normalize_to_utc_date(instant: datetime) -> datetime:
    """Truncate an instant to UTC midnight of its UTC calendar date."""
    utc = ensure_utc(instant)
    return datetime(utc.year, utc.month, utc.day, tzinfo=timezone.utc)


def days_between(start: datetime, end: datetime) -> int:
    """Whole calendar days from ``start`` to ``end``; negative when ``end`` is earlier."""
    delta = normalize_to_utc_date(end) - normalize_to_utc_date(start)
    return delta // ONE_DAY


def add_days(day: datetime, days: int) -> datetime:
    """Shift a calendar day by ``days`` (may be negative), staying on UTC midnight."""
    return normalize_to_utc_date(day) + timedelta(days=days)


def today_utc(now: Optional[datetime] = None) -> datetime:
    """UTC midnight of today (or of ``now`` when given)."""
    return normalize_to_utc_date(now or datetime.now(timezone.utc))


def format_date_for_display(instant: datetime, tz_name: str) -> str:
    """YYYY-MM-DD of ``instant`` as seen in the display timezone."""
    tz = pytz.timezone(tz_name)
    return ensure_utc(instant).astimezone(tz).strftime("%Y-%m-%d")
