"""Weekly calendar distribution.

Expands one plan week into seven day slots (Monday..Sunday):
1. Sunday long run
2. Wednesday key workout (skipped on recovery weeks)
3. Saturday medium-long on back-to-back weekends
4. Rest days seeded from weekly availability
5. Remaining volume split evenly over the empty days, with a minimum
   session distance per filler day
6. Empty days become rest days once the budget is used up
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from loguru import logger

from training_engine.config.settings import settings
from training_engine.planner.constants import (
    B2B_PHASES,
    CAL_EASY_RUN_LABEL,
    CAL_LONG_RUN_LABEL,
    CAL_MEDIUM_LONG_LABEL,
    CAL_RACE_DAY_LABEL,
    CAL_RECOVERY_RUN_LABEL,
    CAL_REST_LABEL,
    CAL_SHAKEOUT_LABEL,
    KEY_WORKOUT_DAY,
    KEY_WORKOUT_MIN_KM,
    KEY_WORKOUT_SHARE,
    LONG_RUN_DAY,
    MEDIUM_LONG_DAY,
    MEDIUM_LONG_SHARE,
    RACE_WEEK_SHAKEOUTS,
    REST_DAYS_LOW_AVAILABILITY,
    REST_DAYS_SIX_DAYS,
)
from training_engine.planner.enums import DayType, IntensityZone, PhaseKey
from training_engine.planner.models import DaySlot, WeekPlan
from training_engine.utils.calendar import week_start
from training_engine.utils.units import round_half_up

DAYS_PER_WEEK = 7


@dataclass(frozen=True)
class CalendarPolicy:
    """Tunable distribution policy.

    Attributes:
        filler_floor: Minimum distance of any easy/recovery filler day (km)
        rest_when_budget_exhausted: Turn empty days into rest days when no
            positive volume is left, instead of filling them
    """

    filler_floor: int = 3
    rest_when_budget_exhausted: bool = True

    @classmethod
    def from_settings(cls) -> CalendarPolicy:
        return cls(
            filler_floor=settings.filler_floor_km,
            rest_when_budget_exhausted=settings.rest_when_budget_exhausted,
        )


def rest_days_for_availability(availability_days_per_week: int) -> tuple[int, ...]:
    """Day indices seeded as rest for the given number of available days."""
    availability = min(DAYS_PER_WEEK, max(1, availability_days_per_week))
    if availability <= 5:
        return REST_DAYS_LOW_AVAILABILITY
    if availability == 6:
        return REST_DAYS_SIX_DAYS
    return ()


def _race_week(week: WeekPlan) -> list[DaySlot]:
    """Rest-and-shakeout scaffold with the race on its actual weekday.

    Shakeouts falling on or after race day stay rest days.
    """
    monday = week_start(week.date)
    race_index = week.date.weekday()
    days = [
        DaySlot(monday + timedelta(days=i), DayType.REST, CAL_REST_LABEL, 0, IntensityZone.Z1)
        for i in range(DAYS_PER_WEEK)
    ]
    for index, distance in RACE_WEEK_SHAKEOUTS:
        if index < race_index:
            days[index] = DaySlot(days[index].date, DayType.EASY, CAL_SHAKEOUT_LABEL, distance, IntensityZone.Z1)
    days[race_index] = DaySlot(week.date, DayType.RACE, CAL_RACE_DAY_LABEL, 0, IntensityZone.RACE)
    return days


def compute_weekly_calendar(
    week: WeekPlan,
    availability_days_per_week: int,
    pair_long_run_weekends: bool,
    policy: CalendarPolicy | None = None,
) -> list[DaySlot]:
    """Distribute one plan week over seven days.

    Args:
        week: Plan week to expand
        availability_days_per_week: Days per week the athlete can run (1-7)
        pair_long_run_weekends: Add a Saturday medium-long on eligible weeks
        policy: Distribution policy (defaults from settings)

    Returns:
        Seven day slots, Monday first
    """
    if week.phase == PhaseKey.RACE:
        return _race_week(week)

    policy = policy or CalendarPolicy.from_settings()
    monday = week_start(week.date)
    dates = [monday + timedelta(days=i) for i in range(DAYS_PER_WEEK)]
    slots: list[DaySlot | None] = [None] * DAYS_PER_WEEK
    remaining = week.volume

    slots[LONG_RUN_DAY] = DaySlot(
        dates[LONG_RUN_DAY], DayType.LONG, CAL_LONG_RUN_LABEL, week.long_run_distance, IntensityZone.Z2
    )
    remaining -= week.long_run_distance

    if not week.is_recovery_week:
        key_distance = max(KEY_WORKOUT_MIN_KM, round_half_up(week.volume * KEY_WORKOUT_SHARE))
        zone = IntensityZone.Z4 if week.phase == PhaseKey.SPECIFIC_PREP else IntensityZone.Z3
        slots[KEY_WORKOUT_DAY] = DaySlot(
            dates[KEY_WORKOUT_DAY], DayType.INTENSITY, week.key_workout_label, key_distance, zone
        )
        remaining -= key_distance

    if pair_long_run_weekends and not week.is_recovery_week and week.phase in B2B_PHASES:
        medium_long = round_half_up(week.long_run_distance * MEDIUM_LONG_SHARE)
        slots[MEDIUM_LONG_DAY] = DaySlot(
            dates[MEDIUM_LONG_DAY], DayType.MEDIUM_LONG, CAL_MEDIUM_LONG_LABEL, medium_long, IntensityZone.Z2
        )
        remaining -= medium_long

    for index in rest_days_for_availability(availability_days_per_week):
        if slots[index] is None:
            slots[index] = DaySlot(dates[index], DayType.REST, CAL_REST_LABEL, 0, IntensityZone.Z1)

    empty = [i for i, slot in enumerate(slots) if slot is None]
    if empty and (remaining > 0 or not policy.rest_when_budget_exhausted):
        per_day = round_half_up(remaining / len(empty))
        if week.is_recovery_week:
            day_type, label, zone = DayType.RECOVERY, CAL_RECOVERY_RUN_LABEL, IntensityZone.Z1
        else:
            day_type, label, zone = DayType.EASY, CAL_EASY_RUN_LABEL, IntensityZone.Z2
        for position, index in enumerate(empty):
            if position == len(empty) - 1:
                distance = max(policy.filler_floor, remaining - per_day * (len(empty) - 1))
            else:
                distance = max(policy.filler_floor, per_day)
            slots[index] = DaySlot(dates[index], day_type, label, distance, zone)
    else:
        for index in empty:
            slots[index] = DaySlot(dates[index], DayType.REST, CAL_REST_LABEL, 0, IntensityZone.Z1)

    if remaining <= 0:
        logger.debug(
            f"Week {week.week_number} budget exhausted before fillers: volume={week.volume} remaining={remaining}"
        )

    return [slot for slot in slots if slot is not None]
