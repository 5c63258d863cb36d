"""Tests for the canonical week helpers.

Week boundaries must follow UTC regardless of the offset a timestamp was
recorded in; these cases guard the Sunday/Monday edges.
"""

import datetime as dt

import pytest

from training_engine.utils.calendar import (
    date_range,
    to_utc_datetime,
    utc_today,
    week_end,
    week_key,
    week_start,
    weeks_until,
)


def test_week_start_wednesday_returns_monday():
    # 2025-01-15 is a Wednesday
    result = week_start(dt.datetime(2025, 1, 15, 12, 0, tzinfo=dt.UTC))
    assert result == dt.date(2025, 1, 13)
    assert result.weekday() == 0


def test_week_start_monday_is_same_day():
    assert week_start(dt.date(2025, 1, 13)) == dt.date(2025, 1, 13)


def test_week_start_sunday_returns_previous_monday():
    assert week_start(dt.datetime(2025, 1, 19, 23, 59, tzinfo=dt.UTC)) == dt.date(2025, 1, 13)


def test_week_start_uses_utc_for_offset_timestamps():
    # Monday 01:00 at UTC+3 is still Sunday in UTC
    local = dt.datetime(2025, 1, 13, 1, 0, tzinfo=dt.timezone(dt.timedelta(hours=3)))
    assert week_start(local) == dt.date(2025, 1, 6)


def test_week_start_accepts_iso_strings():
    assert week_start("2025-01-19T23:30:00Z") == dt.date(2025, 1, 13)
    assert week_start("2025-01-20") == dt.date(2025, 1, 20)


def test_naive_datetimes_are_treated_as_utc():
    naive = dt.datetime(2025, 1, 13, 0, 30)
    assert to_utc_datetime(naive) == dt.datetime(2025, 1, 13, 0, 30, tzinfo=dt.UTC)


def test_week_end_and_key():
    assert week_end(dt.date(2025, 1, 15)) == dt.date(2025, 1, 19)
    assert week_key(dt.datetime(2025, 1, 15, 18, 45, tzinfo=dt.UTC)) == "2025-01-13"


def test_invalid_string_raises():
    with pytest.raises(ValueError):
        to_utc_datetime("not a date")


def test_utc_today_uses_reference_time(now):
    assert utc_today(now) == dt.date(2026, 3, 18)


def test_weeks_until_counts_partial_weeks(midnight):
    race = (midnight + dt.timedelta(days=90)).date()
    assert weeks_until(race, midnight) == 13


def test_weeks_until_is_negative_for_past_dates(midnight):
    race = (midnight - dt.timedelta(days=15)).date()
    assert weeks_until(race, midnight) < 0


def test_date_range_is_inclusive():
    days = date_range(dt.date(2025, 1, 30), dt.date(2025, 2, 2))
    assert days == [dt.date(2025, 1, 30), dt.date(2025, 1, 31), dt.date(2025, 2, 1), dt.date(2025, 2, 2)]
    assert date_range(dt.date(2025, 2, 2), dt.date(2025, 1, 30)) == []
