"""
Date/time helpers. All stored timestamps are naive UTC.
"""
from datetime import date, datetime, time, timedelta, timezone
from typing import Tuple


def utcnow() -> datetime:
    """Server-side 'now' in UTC (naive, canonical)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min)


def inclusive_date_range(start_date: date, end_date: date) -> Tuple[datetime, datetime]:
    """
    Turn an inclusive calendar range into a half-open datetime interval.

    [start_of_day(start_date), start_of_day(end_date + 1 day))
    """
    return start_of_day(start_date), start_of_day(end_date + timedelta(days=1))


def parse_iso_date(value: str) -> date:
    """
    Parse a YYYY-MM-DD string.

    Raises:
        ValueError: If the value is empty or not an ISO calendar date
    """
    if not value or not value.strip():
        raise ValueError("date is required")
    return date.fromisoformat(value.strip())
