"""Periodized plan generation.

Turns a goal race into four fixed-order phases (preparation, endurance,
specific preparation, taper) and one target per week, followed by a
synthetic race-day entry. Deterministic given the plan and "now".

Rules:
- total weeks = max(4, ceil(weeks until race))
- phases take 15% / 35% / 35% of the weeks (floored, at least 1 each),
  taper takes the remainder
- weekly volume ramps linearly inside each phase, recovery weeks at 65%
- long run = 30% of weekly volume
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from datetime import date, datetime, timedelta
from typing import Any

from loguru import logger

from training_engine.planner.constants import (
    B2B_LONG_LABEL,
    B2B_PHASES,
    ENDURANCE_RAMP,
    LONG_CYCLE_PHASE_WEEKS,
    LONG_RECOVERY_CYCLE,
    LONG_RUN_SHARE,
    MIN_PLAN_WEEKS,
    PEAK_MULTIPLIER,
    PHASE_PROPORTIONS,
    PHASE_WORKOUTS,
    PREPARATION_RAMP,
    RACE_DAY_LABEL,
    RACE_WEEK_LABEL,
    RECOVERY_VOLUME_FACTOR,
    RECOVERY_WEEK_LABEL,
    SHORT_RECOVERY_CYCLE,
    SPECIFIC_PREP_RAMP,
    TAPER_END_OF_CURRENT,
    TAPER_START_OF_PEAK,
)
from training_engine.planner.enums import PhaseKey
from training_engine.planner.models import KoopPlan, Phase, WeekPlan
from training_engine.schemas.records import Plan, as_plan
from training_engine.utils.calendar import utc_today, week_start, weeks_until
from training_engine.utils.units import round_half_up


def plan_total_weeks(race_date: date, now: datetime | None = None) -> int:
    """Number of training weeks before the race, never fewer than 4."""
    return max(MIN_PLAN_WEEKS, weeks_until(race_date, now))


def split_phase_weeks(total_weeks: int) -> dict[PhaseKey, int]:
    """Split total weeks into the four phases.

    Each proportional phase is floored and forced to at least one week; the
    taper absorbs the remainder. For total_weeks >= 4 the counts always sum
    to total_weeks.
    """
    counts = {key: max(1, math.floor(total_weeks * share)) for key, share in PHASE_PROPORTIONS.items()}
    counts[PhaseKey.TAPER] = max(1, total_weeks - sum(counts.values()))
    return counts


def build_phases(total_weeks: int, current_volume: float) -> list[Phase]:
    """Build the four phases with their volume ramps.

    Args:
        total_weeks: Total number of training weeks
        current_volume: Athlete's current weekly volume (km)

    Returns:
        Phases in fixed order: preparation, endurance, specificPrep, taper
    """
    counts = split_phase_weeks(total_weeks)
    peak = round_half_up(current_volume * PEAK_MULTIPLIER)

    ramps = {
        PhaseKey.PREPARATION: (current_volume * PREPARATION_RAMP[0], current_volume * PREPARATION_RAMP[1]),
        PhaseKey.ENDURANCE: (current_volume * ENDURANCE_RAMP[0], current_volume * ENDURANCE_RAMP[1]),
        PhaseKey.SPECIFIC_PREP: (current_volume * SPECIFIC_PREP_RAMP[0], peak),
        PhaseKey.TAPER: (peak * TAPER_START_OF_PEAK, current_volume * TAPER_END_OF_CURRENT),
    }

    return [
        Phase(
            key=key,
            week_count=counts[key],
            start_volume=round_half_up(start),
            end_volume=round_half_up(end),
        )
        for key, (start, end) in ramps.items()
    ]


def is_recovery_week(phase: Phase, index: int) -> bool:
    """Whether week ``index`` (0-based) of ``phase`` is a recovery week."""
    cycle = LONG_RECOVERY_CYCLE if phase.week_count > LONG_CYCLE_PHASE_WEEKS else SHORT_RECOVERY_CYCLE
    return phase.week_count > 2 and index > 0 and (index + 1) % cycle == 0


def week_volume(phase: Phase, index: int, recovery: bool) -> int:
    """Linearly interpolated weekly volume, reduced on recovery weeks."""
    progress = index / (phase.week_count - 1) if phase.week_count > 1 else 0.0
    volume = round_half_up(phase.start_volume + (phase.end_volume - phase.start_volume) * progress)
    if recovery:
        volume = round_half_up(volume * RECOVERY_VOLUME_FACTOR)
    return volume


def _notes_label(phase: Phase, index: int, recovery: bool, pair_long_runs: bool) -> str:
    if pair_long_runs and phase.key in B2B_PHASES and not recovery and index > 0:
        return B2B_LONG_LABEL
    if recovery:
        return RECOVERY_WEEK_LABEL
    return ""


def compute_koop_plan(plan: Plan | Mapping[str, Any], now: datetime | None = None) -> KoopPlan:
    """Generate the periodized plan for a goal race.

    The plan starts on the Monday of the current week. The last entry is
    the race itself, dated on the literal race date.

    Args:
        plan: Goal race (model or raw row)
        now: Reference time for "today" (defaults to current UTC time)

    Returns:
        KoopPlan with total_weeks training weeks plus the race entry
    """
    plan = as_plan(plan)
    today = utc_today(now)
    total_weeks = plan_total_weeks(plan.race_date, now)
    phases = build_phases(total_weeks, plan.current_weekly_volume)
    plan_start = week_start(today)

    weeks: list[WeekPlan] = []
    week_number = 1
    for phase in phases:
        workouts = PHASE_WORKOUTS[phase.key]
        for i in range(phase.week_count):
            week_date = plan_start + timedelta(weeks=week_number - 1)
            recovery = is_recovery_week(phase, i)
            volume = week_volume(phase, i, recovery)

            weeks.append(
                WeekPlan(
                    week_number=week_number,
                    date=week_date,
                    phase=phase.key,
                    volume=volume,
                    long_run_distance=round_half_up(volume * LONG_RUN_SHARE),
                    key_workout_label=RECOVERY_WEEK_LABEL if recovery else workouts[i % len(workouts)],
                    is_recovery_week=recovery,
                    notes_label=_notes_label(phase, i, recovery, plan.pair_long_run_weekends),
                    is_current_week=week_date <= today < week_date + timedelta(days=7),
                )
            )
            week_number += 1

    weeks.append(
        WeekPlan(
            week_number=week_number,
            date=plan.race_date,
            phase=PhaseKey.RACE,
            volume=0,
            long_run_distance=0,
            key_workout_label=RACE_DAY_LABEL,
            notes_label=RACE_WEEK_LABEL,
        )
    )

    peak_volume = round_half_up(plan.current_weekly_volume * PEAK_MULTIPLIER)
    logger.debug(
        f"Generated plan: race_date={plan.race_date.isoformat()} total_weeks={total_weeks} "
        f"phases={[p.week_count for p in phases]} peak_volume={peak_volume}"
    )

    return KoopPlan(
        weeks=tuple(weeks),
        phases=tuple(phases),
        total_weeks=total_weeks,
        peak_volume=peak_volume,
    )
