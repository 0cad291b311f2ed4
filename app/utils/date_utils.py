# app/utils/date_utils.py
from __future__ import annotations

"""
Date and time utility functions used across the project.

Notes:
- All "UTC" helpers use timezone-aware datetimes with `timezone.utc`.
- `to_utc` assumes naive datetimes are already in UTC and only attaches tzinfo
  (it does not perform any timezone conversion for naive datetimes).
"""

import logging
from datetime import date, datetime, time, timezone
from typing import List, Tuple, Union

logger = logging.getLogger(__name__)

UTC = timezone.utc


class DateUtilsError(Exception):
    """Custom exception for date utilities errors."""
    pass


def now_utc() -> datetime:
    """Return current UTC datetime (timezone-aware)."""
    return datetime.now(UTC)


def today_utc() -> date:
    """Return today's date in UTC."""
    return now_utc().date()


def start_of_day(d: date, tz: timezone | None = UTC) -> datetime:
    """Return the start (00:00:00) of a given date in the given timezone."""
    if not isinstance(d, date):
        raise DateUtilsError("Input must be a date object")
    if isinstance(d, datetime):
        d = d.date()
    return datetime.combine(d, time.min).replace(tzinfo=tz)


def to_utc(dt: datetime) -> datetime:
    """
    Convert a datetime to UTC.

    - If naive, assumes it's already in UTC and only attaches tzinfo.
    - If aware, converts to UTC.
    """
    if not isinstance(dt, datetime):
        raise DateUtilsError("Input must be a datetime object")

    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def as_date(value: Union[date, datetime]) -> date:
    """Truncate a datetime to its calendar date; dates pass through."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raise DateUtilsError(f"Expected a date or datetime, got {type(value).__name__}")


def hours_between(start: datetime, end: datetime) -> float:
    """Signed number of hours from `start` to `end`."""
    return (to_utc(end) - to_utc(start)).total_seconds() / 3600


def month_key(d: Union[date, datetime]) -> str:
    """Return 'YYYY-MM' for the month containing `d`."""
    return f"{d.year:04d}-{d.month:02d}"


def last_n_months(n: int, today: date | None = None) -> List[Tuple[int, int]]:
    """
    Return (year, month) pairs for the last `n` months, oldest first,
    ending with the month of `today`.
    """
    if n < 1:
        raise DateUtilsError("n must be positive")

    today = today or today_utc()
    year, month = today.year, today.month
    months = []
    for _ in range(n):
        months.append((year, month))
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    return list(reversed(months))
