"""Canonical week-window helpers.

Week boundaries are Monday-Sunday (ISO week), anchored to UTC. Every week
bucket in the engine is keyed by the ISO date string of its Monday so that
time-of-day never leaks into a bucket key.
"""

from __future__ import annotations

import math
from datetime import UTC, date, datetime, time, timedelta

DateLike = date | datetime | str

SECONDS_PER_DAY = 24 * 60 * 60
SECONDS_PER_WEEK = 7 * SECONDS_PER_DAY


def to_utc_datetime(value: DateLike) -> datetime:
    """Convert a date, datetime or ISO-8601 string to an aware UTC datetime.

    Naive datetimes are assumed to already be in UTC. Plain dates map to
    midnight UTC of that day.

    Args:
        value: Date-like value

    Returns:
        Timezone-aware datetime in UTC

    Raises:
        ValueError: If a string value is not ISO-8601
    """
    if isinstance(value, str):
        value = datetime.fromisoformat(value)

    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    return datetime.combine(value, time.min, tzinfo=UTC)


def to_utc_date(value: DateLike) -> date:
    """Return the UTC calendar date of a date-like value."""
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    return to_utc_datetime(value).date()


def utc_now(now: datetime | None = None) -> datetime:
    """Return ``now`` normalized to UTC, or the current UTC time."""
    if now is None:
        return datetime.now(UTC)
    return to_utc_datetime(now)


def utc_today(now: datetime | None = None) -> date:
    """Return today's UTC calendar date."""
    return utc_now(now).date()


def week_start(value: DateLike) -> date:
    """Return Monday of the calendar week containing value."""
    d = to_utc_date(value)
    return d - timedelta(days=d.weekday())


def week_end(value: DateLike) -> date:
    """Return Sunday of the calendar week containing value."""
    return week_start(value) + timedelta(days=6)


def week_key(value: DateLike) -> str:
    """Return the ISO date string of the week's Monday, used as a bucket key."""
    return week_start(value).isoformat()


def weeks_until(target: DateLike, now: datetime | None = None) -> int:
    """Return the number of started weeks between now and target (ceil).

    Fractional days count, so a race 90 days out at midnight is 13 weeks away.
    Negative when target is in the past.
    """
    delta = to_utc_datetime(target) - utc_now(now)
    return math.ceil(delta.total_seconds() / SECONDS_PER_WEEK)


def date_range(start: date, end: date) -> list[date]:
    """Return every calendar day in [start, end], empty if start > end."""
    days: list[date] = []
    current = start
    while current <= end:
        days.append(current)
        current += timedelta(days=1)
    return days
