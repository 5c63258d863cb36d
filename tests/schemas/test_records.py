"""Tests for input record normalization.

Malformed numeric fields must degrade to zero; only a missing start time or
race date is a caller-side error.
"""

import datetime as dt

import pytest
from pydantic import ValidationError

from training_engine.errors import EngineError, InvalidPlanError, InvalidRecordError
from training_engine.schemas.records import Activity, Checkin, Plan, as_activities, as_checkins, as_plans


def test_activity_from_record_maps_columns():
    activity = Activity.from_record(
        {
            "id": 42,
            "started_at": "2025-01-14T08:00:00Z",
            "distance": 16000,
            "moving_time": "5400",
            "elevation_gain": 500,
            "type": "Run",
            "name": "Long",
            "hr_zone_2_seconds": 3000,
            "hr_zone_3_seconds": 600,
        }
    )

    assert activity.id == "42"
    assert activity.started_at == dt.datetime(2025, 1, 14, 8, 0, tzinfo=dt.UTC)
    assert activity.distance_km == 16.0
    assert activity.moving_time_s == 5400
    assert activity.hr_zone_seconds == (0.0, 3000.0, 600.0, 0.0, 0.0)
    assert activity.is_run


def test_activity_malformed_numbers_become_zero(log_messages):
    activity = Activity.from_record(
        {
            "started_at": "2025-01-14T08:00:00Z",
            "distance": "n/a",
            "moving_time": float("nan"),
            "elevation_gain": None,
        }
    )

    assert activity.distance_m == 0.0
    assert activity.moving_time_s == 0.0
    assert activity.elevation_gain_m == 0.0
    assert activity.type == ""
    assert any("Dropping malformed" in m for m in log_messages)


def test_activity_without_start_time_is_rejected():
    with pytest.raises(InvalidRecordError):
        Activity.from_record({"distance": 5000})


def test_activity_is_immutable():
    activity = Activity(started_at="2025-01-14T08:00:00Z")
    with pytest.raises(ValidationError):
        activity.distance_m = 10.0


def test_plan_from_record_defaults_volume():
    plan = Plan.from_record({"race_date": "2026-06-14"})
    assert plan.race_date == dt.date(2026, 6, 14)
    assert plan.current_weekly_volume == 50.0
    assert plan.pair_long_run_weekends is False

    zero = Plan.from_record({"race_date": "2026-06-14", "current_mileage": 0})
    assert zero.current_weekly_volume == 50.0


def test_plan_from_record_reads_fields():
    plan = Plan.from_record({"race_date": "2026-06-14T00:00:00Z", "current_mileage": "42", "b2b_long_runs": True})
    assert plan.current_weekly_volume == 42.0
    assert plan.pair_long_run_weekends is True


def test_plan_negative_volume_is_clamped():
    plan = Plan(race_date=dt.date(2026, 6, 14), current_weekly_volume=-20)
    assert plan.current_weekly_volume == 0.0


def test_plan_without_race_date_is_rejected():
    with pytest.raises(InvalidPlanError):
        Plan.from_record({"current_mileage": 40})


def test_plan_with_unparseable_race_date_is_rejected():
    with pytest.raises(InvalidPlanError) as exc_info:
        Plan.from_record({"race_date": "someday"})
    assert isinstance(exc_info.value, EngineError)


def test_checkin_normalization():
    checkin = Checkin.from_record(
        {"week_of": "2026-03-16", "fatigue": "4", "sleep_quality": "bad", "motivation": 5, "niggles": "   "}
    )
    assert checkin.week_of == dt.date(2026, 3, 16)
    assert checkin.fatigue == 4
    assert checkin.sleep_quality is None
    assert checkin.motivation == 5
    assert checkin.niggles is None


def test_as_helpers_accept_models_and_rows():
    activity = Activity(started_at="2025-01-14T08:00:00Z")
    activities = as_activities([activity, {"started_at": "2025-01-15T08:00:00Z"}])
    assert activities[0] is activity
    assert len(activities) == 2

    assert as_checkins(None) == []
    assert len(as_checkins([{"fatigue": 3}])) == 1


def test_as_plans_skips_plans_without_race_date(log_messages):
    plans = as_plans([{"race_date": "2026-06-14"}, {"current_mileage": 40}])
    assert [p.race_date for p in plans] == [dt.date(2026, 6, 14)]
    assert any("Skipping plan" in m for m in log_messages)


def test_as_activities_skips_rows_without_start_time(log_messages):
    activities = as_activities([{"started_at": "2025-01-15T08:00:00Z"}, {"started_at": None, "distance": 5000}])

    assert len(activities) == 1
    assert any("Skipping activity" in m for m in log_messages)


def test_as_checkins_drops_unusable_week_of():
    (checkin,) = as_checkins([{"week_of": "last week", "fatigue": 4, "motivation": 2}])

    assert checkin.week_of is None
    assert checkin.fatigue == 4
    assert checkin.motivation == 2
