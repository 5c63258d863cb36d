"""Weekly activity summaries.

Aggregations over the activity history keyed by ISO week (Monday, UTC):
weekly totals, the longest run of each week, heart-rate zone time, plus the
small trend/RPE classifiers the dashboard tiles use. Distances are reported
in kilometres.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Literal

from training_engine.schemas.records import Activity, as_activities
from training_engine.utils.calendar import week_key
from training_engine.utils.units import round_half_up

TREND_BAND_PCT = 2


@dataclass(frozen=True)
class WeeklySummary:
    distance_km: float
    elevation_m: float
    moving_time_s: float
    count: int


@dataclass(frozen=True)
class LongRun:
    distance_km: float
    moving_time_s: float
    elevation_m: float
    name: str


@dataclass(frozen=True)
class ZoneTotals:
    """Seconds per heart-rate zone for a week or a single activity."""

    key: str  # week key or activity id
    z1: float
    z2: float
    z3: float
    z4: float
    z5: float
    name: str | None = None
    started_at: datetime | None = None

    @property
    def total(self) -> float:
        return self.z1 + self.z2 + self.z3 + self.z4 + self.z5


@dataclass(frozen=True)
class TrendArrow:
    text: str
    direction: Literal["up", "down", "flat"]


def compute_weekly_summary(
    activities: Iterable[Activity | Mapping[str, Any]],
) -> dict[str, WeeklySummary]:
    """Total distance, elevation, moving time and count per week.

    Returns:
        Mapping of week key (ISO Monday) to summary, in ascending week order
    """
    totals: dict[str, list[float]] = {}
    for activity in as_activities(activities):
        bucket = totals.setdefault(week_key(activity.started_at), [0.0, 0.0, 0.0, 0])
        bucket[0] += activity.distance_km
        bucket[1] += activity.elevation_gain_m
        bucket[2] += activity.moving_time_s
        bucket[3] += 1

    return {
        key: WeeklySummary(distance_km=d, elevation_m=e, moving_time_s=t, count=int(n))
        for key, (d, e, t, n) in sorted(totals.items())
    }


def compute_long_runs(
    activities: Iterable[Activity | Mapping[str, Any]],
) -> list[tuple[str, LongRun]]:
    """Longest run of each week, ordered by week.

    Only activities typed "Run" count; the first of equally long runs wins.
    """
    weeks: dict[str, LongRun] = {}
    for activity in as_activities(activities):
        if not activity.is_run:
            continue
        key = week_key(activity.started_at)
        best = weeks.get(key)
        if best is None or activity.distance_km > best.distance_km:
            weeks[key] = LongRun(
                distance_km=activity.distance_km,
                moving_time_s=activity.moving_time_s,
                elevation_m=activity.elevation_gain_m,
                name=activity.name,
            )
    return sorted(weeks.items())


def compute_weekly_hr_zones(
    activities: Iterable[Activity | Mapping[str, Any]],
    weeks: int = 8,
) -> list[ZoneTotals]:
    """Heart-rate zone seconds per week for the most recent weeks.

    Activities without zone data are ignored.
    """
    totals: dict[str, list[float]] = {}
    for activity in as_activities(activities):
        if activity.hr_zone_total_seconds <= 0:
            continue
        bucket = totals.setdefault(week_key(activity.started_at), [0.0] * 5)
        for i, seconds in enumerate(activity.hr_zone_seconds):
            bucket[i] += seconds

    recent = sorted(totals.items())[-weeks:] if weeks > 0 else []
    return [ZoneTotals(key, *zones) for key, zones in recent]


def compute_recent_activity_zones(
    activities: Iterable[Activity | Mapping[str, Any]],
    limit: int = 10,
) -> list[ZoneTotals]:
    """Heart-rate zone split of the most recent activities with zone data, newest first."""
    with_zones = [a for a in as_activities(activities) if a.hr_zone_total_seconds > 0]
    with_zones.sort(key=lambda a: a.started_at, reverse=True)
    return [
        ZoneTotals(
            a.id or a.started_at.isoformat(),
            *a.hr_zone_seconds,
            name=a.name,
            started_at=a.started_at,
        )
        for a in with_zones[:limit]
    ]


def trend_arrow(current: float, previous: float | None) -> TrendArrow:
    """Classify the change from previous to current with a +-2% flat band."""
    if not previous:
        return TrendArrow(text="", direction="flat")
    pct = round_half_up(((current - previous) / previous) * 100)
    if pct > TREND_BAND_PCT:
        return TrendArrow(text=f"+{pct}%", direction="up")
    if pct < -TREND_BAND_PCT:
        return TrendArrow(text=f"{pct}%", direction="down")
    return TrendArrow(text="~", direction="flat")


def rpe_class(value: float) -> Literal["easy", "moderate", "hard"]:
    """Bucket a 1-10 RPE score."""
    if value <= 4:
        return "easy"
    if value <= 7:
        return "moderate"
    return "hard"
