"""Rule-based coaching insights.

Each rule reads one signal (training load, weekly volume, long runs, the
latest check-in, race proximity) and may emit one insight. Rules are
independent; several may fire at once. The result is stably sorted by
priority, most urgent first.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any

from loguru import logger

from training_engine.coach.models import Insight, InsightKind
from training_engine.metrics.summaries import compute_long_runs, compute_weekly_summary
from training_engine.metrics.training_load import LoadPoint, compute_training_load
from training_engine.schemas.records import Activity, Checkin, Plan, as_activities, as_checkins, as_plans
from training_engine.utils.calendar import to_utc_datetime, utc_now, weeks_until

MIN_LOAD_POINTS = 7
FITNESS_TREND_POINTS = 28

OVERTRAINING_RATIO = 1.5
HIGH_LOAD_RATIO = 1.2
WELL_RESTED_TSB = 10
DEEP_FATIGUE_TSB = -15
BALANCED_TSB = 5
FITNESS_GROWING_FACTOR = 1.10
FITNESS_DECLINING_FACTOR = 0.85
VOLUME_SPIKE_FACTOR = 1.15
HIGH_SCORE = 4
POOR_SLEEP = 2
RACE_WEEK_WEEKS_OUT = 2
TAPER_WEEKS_OUT = 4


def _insight(kind: InsightKind, icon: str, key: str, priority: int, meta: str | None = None) -> Insight:
    return Insight(
        kind=kind,
        icon=icon,
        title_key=f"coach.{key}",
        desc_key=f"coach.{key}Desc",
        priority=priority,
        meta=meta,
    )


# -----------------------------
# Rules
# -----------------------------
def load_insights(series: list[LoadPoint]) -> list[Insight]:
    """Load ratio, form and fitness trend rules."""
    if len(series) < MIN_LOAD_POINTS:
        return []

    insights: list[Insight] = []
    last = series[-1]

    ratio = last.load_ratio
    if ratio > OVERTRAINING_RATIO:
        insights.append(_insight(InsightKind.DANGER, "warning", "overtrainingRisk", 1))
    elif ratio > HIGH_LOAD_RATIO:
        insights.append(_insight(InsightKind.WARNING, "alert", "highLoadRatio", 2))

    if last.tsb > WELL_RESTED_TSB:
        insights.append(_insight(InsightKind.POSITIVE, "battery", "wellRested", 3))
    elif last.tsb < DEEP_FATIGUE_TSB:
        insights.append(_insight(InsightKind.WARNING, "fatigue", "deepFatigue", 2))
    elif -BALANCED_TSB <= last.tsb <= BALANCED_TSB:
        insights.append(_insight(InsightKind.INFO, "balance", "balancedLoad", 4))

    if last.ctl > 0 and len(series) >= FITNESS_TREND_POINTS:
        reference = series[-FITNESS_TREND_POINTS]
        if last.ctl > reference.ctl * FITNESS_GROWING_FACTOR:
            insights.append(_insight(InsightKind.POSITIVE, "trending", "fitnessGrowing", 3))
        elif last.ctl < reference.ctl * FITNESS_DECLINING_FACTOR:
            insights.append(_insight(InsightKind.WARNING, "decline", "fitnessDeclining", 2))

    return insights


def volume_insights(activities: list[Activity]) -> list[Insight]:
    """Week-over-week distance spike rule."""
    weekly = compute_weekly_summary(activities)
    if len(weekly) < 2:
        return []

    previous, latest = list(weekly.values())[-2:]
    if previous.distance_km > 0 and latest.distance_km > previous.distance_km * VOLUME_SPIKE_FACTOR:
        return [_insight(InsightKind.WARNING, "spike", "volumeSpike", 2)]
    return []


def long_run_insights(activities: list[Activity]) -> list[Insight]:
    """Three most recent weekly long runs non-decreasing."""
    long_runs = compute_long_runs(activities)
    if len(long_runs) < 3:
        return []

    distances = [run.distance_km for _, run in long_runs[-3:]]
    if all(a <= b for a, b in zip(distances, distances[1:])):
        return [_insight(InsightKind.POSITIVE, "longrun", "longRunProgressing", 4)]
    return []


def latest_checkin(checkins: list[Checkin]) -> Checkin | None:
    """Most recent check-in by week_of; undated check-ins keep caller order."""
    if not checkins:
        return None
    if all(c.week_of is not None for c in checkins):
        return max(checkins, key=lambda c: c.week_of)
    return checkins[0]


def checkin_insights(checkin: Checkin | None) -> list[Insight]:
    """Fatigue, sleep, motivation and niggle rules on the latest check-in."""
    if checkin is None:
        return []

    insights: list[Insight] = []
    fatigued = checkin.fatigue is not None and checkin.fatigue >= HIGH_SCORE
    poor_sleep = checkin.sleep_quality is not None and checkin.sleep_quality <= POOR_SLEEP

    if fatigued and poor_sleep:
        insights.append(_insight(InsightKind.DANGER, "rest", "needsRest", 1))
    elif fatigued:
        insights.append(_insight(InsightKind.WARNING, "fatigue", "elevatedFatigue", 2))

    if checkin.motivation is not None and checkin.motivation >= HIGH_SCORE:
        insights.append(_insight(InsightKind.POSITIVE, "motivation", "highMotivation", 4))

    if checkin.niggles:
        insights.append(_insight(InsightKind.WARNING, "injury", "niggleAlert", 1, meta=checkin.niggles))

    return insights


def race_insights(plans: list[Plan], now: datetime | None = None) -> list[Insight]:
    """Race-week and taper reminders for the nearest future race."""
    current = utc_now(now)
    upcoming = [p for p in plans if to_utc_datetime(p.race_date) > current]
    if not upcoming:
        return []

    next_race = min(upcoming, key=lambda p: p.race_date)
    weeks_out = weeks_until(next_race.race_date, current)
    if weeks_out <= RACE_WEEK_WEEKS_OUT:
        return [_insight(InsightKind.INFO, "race", "raceWeekApproaching", 1)]
    if weeks_out <= TAPER_WEEKS_OUT:
        return [_insight(InsightKind.INFO, "taper", "taperPhase", 3)]
    return []


# -----------------------------
# Engine
# -----------------------------
def generate_coaching_insights(
    activities: Iterable[Activity | Mapping[str, Any]] | None = None,
    checkins: Iterable[Checkin | Mapping[str, Any]] | None = None,
    plans: Iterable[Plan | Mapping[str, Any]] | None = None,
    now: datetime | None = None,
) -> list[Insight]:
    """Evaluate every coaching rule and return insights by priority.

    Args:
        activities: Activity history (models or raw rows)
        checkins: Check-ins, newest first when undated
        plans: Goal race plans; rows without a race date are skipped
        now: Reference time (defaults to current UTC time)

    Returns:
        Insights sorted ascending by priority; ties keep rule order
    """
    activity_list = as_activities(activities)
    checkin_list = as_checkins(checkins)
    plan_list = as_plans(plans)

    insights: list[Insight] = []
    insights.extend(load_insights(compute_training_load(activity_list, now)))
    insights.extend(volume_insights(activity_list))
    insights.extend(long_run_insights(activity_list))
    insights.extend(checkin_insights(latest_checkin(checkin_list)))
    insights.extend(race_insights(plan_list, now))

    if not activity_list:
        insights.append(_insight(InsightKind.INFO, "start", "getStarted", 5))

    logger.debug(f"Generated {len(insights)} coaching insights from {len(activity_list)} activities")

    return sorted(insights, key=lambda insight: insight.priority)
