"""Day Keys — truncation of timestamps to the UTC calendar date that indexes day records.

Invariants:
    - Naive datetimes are interpreted as UTC; aware datetimes are converted to UTC
    - A bare date is its own day key (no time-of-day, nothing to convert)
    - Output is always ISO YYYY-MM-DD
"""

from datetime import date, datetime, timezone

from habit_tracking.core.domain_types import DayKey


def as_utc(value: datetime) -> datetime:
    """Return an aware UTC datetime. Naive input is assumed to already be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_day_key(value: date | datetime) -> DayKey:
    """Truncate a timestamp to its UTC calendar date."""
    if isinstance(value, datetime):
        return DayKey(as_utc(value).date().isoformat())
    return DayKey(value.isoformat())


def parse_day_key(raw: str) -> DayKey:
    """Validate a YYYY-MM-DD string. Raises ValueError on malformed input."""
    return DayKey(date.fromisoformat(raw).isoformat())
