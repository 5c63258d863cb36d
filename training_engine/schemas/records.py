"""Input records consumed by the engine.

These models are the contract with the persistence/sync collaborator. They
normalize raw rows (Supabase-style column names, metres and seconds, ISO
strings) into immutable values. Malformed numeric fields degrade to zero
instead of failing, so a single corrupt activity never blanks a dashboard.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from datetime import date, datetime
from typing import Any

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from training_engine.config.settings import settings
from training_engine.errors import InvalidPlanError, InvalidRecordError
from training_engine.utils.calendar import to_utc_date, to_utc_datetime
from training_engine.utils.units import meters_to_km


def coerce_number(value: Any, field_name: str = "value") -> float:
    """Coerce a raw numeric field to a finite float, 0.0 when unusable."""
    if value is None or value == "":
        return 0.0
    if isinstance(value, bool):
        return float(value)
    try:
        number = float(value)
    except (TypeError, ValueError):
        logger.warning(f"Dropping malformed {field_name}={value!r}, using 0")
        return 0.0
    if not math.isfinite(number):
        logger.warning(f"Dropping non-finite {field_name}={value!r}, using 0")
        return 0.0
    return number


def _coerce_score(value: Any) -> int | None:
    """Coerce a 1-5 check-in score; missing or malformed scores become None."""
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        return int(float(value))
    except (TypeError, ValueError):
        logger.warning(f"Dropping malformed check-in score={value!r}")
        return None


# -----------------------------
# Activity
# -----------------------------
class Activity(BaseModel):
    """Completed activity, as synced from a fitness service or entered manually.

    Attributes:
        started_at: Start time (UTC)
        distance_m: Distance in metres
        moving_time_s: Moving time in seconds
        elevation_gain_m: Elevation gain in metres
        type: Sport type as reported by the source (e.g. "Run", "Ride")
        name: Activity title
        hr_zone_seconds: Seconds spent in heart-rate zones 1..5
    """

    model_config = ConfigDict(frozen=True)

    id: str | None = None
    started_at: datetime
    distance_m: float = 0.0
    moving_time_s: float = 0.0
    elevation_gain_m: float = 0.0
    type: str = ""
    name: str = ""
    hr_zone_seconds: tuple[float, float, float, float, float] = (0.0, 0.0, 0.0, 0.0, 0.0)

    @field_validator("started_at", mode="before")
    @classmethod
    def normalize_started_at(cls, value: Any) -> datetime:
        return to_utc_datetime(value)

    @field_validator("distance_m", "moving_time_s", "elevation_gain_m", mode="before")
    @classmethod
    def coerce_numeric(cls, value: Any) -> float:
        return coerce_number(value)

    @field_validator("hr_zone_seconds", mode="before")
    @classmethod
    def coerce_zones(cls, value: Any) -> tuple[float, ...]:
        zones = [coerce_number(v, "hr_zone_seconds") for v in (value or [])][:5]
        return tuple(zones + [0.0] * (5 - len(zones)))

    @field_validator("type", "name", mode="before")
    @classmethod
    def coerce_text(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @property
    def distance_km(self) -> float:
        return meters_to_km(self.distance_m)

    @property
    def hr_zone_total_seconds(self) -> float:
        return sum(self.hr_zone_seconds)

    @property
    def is_run(self) -> bool:
        return self.type == "Run"

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> Activity:
        """Build an Activity from a raw persistence row.

        Args:
            record: Row with keys started_at, distance, moving_time,
                elevation_gain, type, name, hr_zone_1_seconds..hr_zone_5_seconds

        Returns:
            Normalized Activity

        Raises:
            InvalidRecordError: If the row has no usable start time
        """
        try:
            return cls(
                id=None if record.get("id") is None else str(record["id"]),
                started_at=record.get("started_at"),
                distance_m=record.get("distance"),
                moving_time_s=record.get("moving_time"),
                elevation_gain_m=record.get("elevation_gain"),
                type=record.get("type"),
                name=record.get("name"),
                hr_zone_seconds=[record.get(f"hr_zone_{i}_seconds") for i in range(1, 6)],
            )
        except (ValidationError, TypeError, ValueError) as e:
            raise InvalidRecordError(f"Activity record has no usable started_at: {record.get('started_at')!r}") from e


# -----------------------------
# Plan
# -----------------------------
class Plan(BaseModel):
    """Goal race declared by the athlete.

    Attributes:
        race_date: Race day (calendar date)
        current_weekly_volume: Current weekly volume in km
        pair_long_run_weekends: Pair the long run with a Saturday medium-long
    """

    model_config = ConfigDict(frozen=True)

    race_date: date
    current_weekly_volume: float = Field(default_factory=lambda: settings.default_weekly_volume_km)
    pair_long_run_weekends: bool = False

    @field_validator("race_date", mode="before")
    @classmethod
    def normalize_race_date(cls, value: Any) -> date:
        return to_utc_date(value)

    @field_validator("current_weekly_volume", mode="before")
    @classmethod
    def default_volume(cls, value: Any) -> float:
        volume = coerce_number(value, "current_weekly_volume")
        if volume == 0:
            return settings.default_weekly_volume_km
        return max(0.0, volume)

    @field_validator("pair_long_run_weekends", mode="before")
    @classmethod
    def coerce_flag(cls, value: Any) -> bool:
        return bool(value)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> Plan:
        """Build a Plan from a raw persistence row.

        Args:
            record: Row with keys race_date, current_mileage, b2b_long_runs

        Returns:
            Normalized Plan

        Raises:
            InvalidPlanError: If race_date is missing or unparseable
        """
        race_date = record.get("race_date")
        if not race_date:
            raise InvalidPlanError("Plan record is missing race_date")
        try:
            return cls(
                race_date=race_date,
                current_weekly_volume=record.get("current_mileage"),
                pair_long_run_weekends=record.get("b2b_long_runs"),
            )
        except (ValidationError, TypeError, ValueError) as e:
            raise InvalidPlanError(f"Plan record has unusable race_date: {race_date!r}") from e


# -----------------------------
# Check-in
# -----------------------------
class Checkin(BaseModel):
    """Weekly subjective check-in (scores on a 1-5 scale)."""

    model_config = ConfigDict(frozen=True)

    week_of: date | None = None
    fatigue: int | None = None
    sleep_quality: int | None = None
    motivation: int | None = None
    niggles: str | None = None

    @field_validator("week_of", mode="before")
    @classmethod
    def normalize_week_of(cls, value: Any) -> date | None:
        if value is None or value == "":
            return None
        return to_utc_date(value)

    @field_validator("fatigue", "sleep_quality", "motivation", mode="before")
    @classmethod
    def coerce_scores(cls, value: Any) -> int | None:
        return _coerce_score(value)

    @field_validator("niggles", mode="before")
    @classmethod
    def strip_niggles(cls, value: Any) -> str | None:
        if value is None:
            return None
        text = str(value).strip()
        return text or None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> Checkin:
        """Build a Checkin from a raw athlete_feedback row."""
        try:
            return cls(
                week_of=record.get("week_of"),
                fatigue=record.get("fatigue"),
                sleep_quality=record.get("sleep_quality"),
                motivation=record.get("motivation"),
                niggles=record.get("niggles"),
            )
        except (ValidationError, TypeError, ValueError) as e:
            raise InvalidRecordError(f"Check-in record has unusable week_of: {record.get('week_of')!r}") from e


# -----------------------------
# Normalization helpers
# -----------------------------
def as_activities(items: Iterable[Activity | Mapping[str, Any]] | None) -> list[Activity]:
    """Normalize a mix of Activity models and raw rows, skipping rows without a start time."""
    activities: list[Activity] = []
    for item in items or []:
        if isinstance(item, Activity):
            activities.append(item)
            continue
        try:
            activities.append(Activity.from_record(item))
        except InvalidRecordError as e:
            logger.warning(f"Skipping activity: {e}")
    return activities


def as_plan(item: Plan | Mapping[str, Any]) -> Plan:
    """Normalize a Plan model or raw row into a Plan."""
    return item if isinstance(item, Plan) else Plan.from_record(item)


def as_plans(items: Iterable[Plan | Mapping[str, Any]] | None) -> list[Plan]:
    """Normalize plans, skipping rows without a usable race date."""
    plans: list[Plan] = []
    for item in items or []:
        try:
            plans.append(as_plan(item))
        except InvalidPlanError as e:
            logger.warning(f"Skipping plan: {e}")
    return plans


def as_checkins(items: Iterable[Checkin | Mapping[str, Any]] | None) -> list[Checkin]:
    """Normalize check-ins, keeping the scores of rows whose week_of is unusable."""
    checkins: list[Checkin] = []
    for item in items or []:
        if isinstance(item, Checkin):
            checkins.append(item)
            continue
        try:
            checkins.append(Checkin.from_record(item))
        except InvalidRecordError as e:
            logger.warning(f"Dropping check-in date: {e}")
            checkins.append(Checkin.from_record({**item, "week_of": None}))
    return checkins
