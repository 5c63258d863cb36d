"""Training load metrics computation (ATL, CTL, TSB).

This module provides deterministic, idempotent computation of training load
from an athlete's activity history. Daily load is training minutes; the
series is rebuilt from scratch on every call, there is no persisted state.

Metrics:
- ATL (Acute Training Load): 7-day exponentially weighted moving average
- CTL (Chronic Training Load): 42-day exponentially weighted moving average
- TSB (Training Stress Balance): CTL - ATL

Properties:
- Deterministic: Same input always produces same output
- Order-independent: Activities are sorted internally
- UTC-based: Days are UTC calendar days
- Missing data handling: Days without activities contribute zero load
"""

from __future__ import annotations

import math
from collections import defaultdict
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

from loguru import logger

from training_engine.schemas.records import Activity, as_activities
from training_engine.utils.calendar import date_range, utc_today
from training_engine.utils.units import seconds_to_minutes

ATL_SPAN_DAYS = 7
CTL_SPAN_DAYS = 42


@dataclass(frozen=True)
class LoadPoint:
    """Training load for one calendar day."""

    date: date
    atl: float
    ctl: float
    tsb: float

    @property
    def load_ratio(self) -> float:
        """Acute:chronic ratio, 0 when there is no chronic load yet."""
        return self.atl / self.ctl if self.ctl > 0 else 0.0


def smoothing_factor(span_days: int) -> float:
    """Return the EWMA smoothing factor 2 / (span + 1)."""
    return 2 / (span_days + 1)


def calculate_ewma(values: list[float], span_days: int) -> list[float]:
    """Calculate exponentially weighted moving average seeded at zero.

    Args:
        values: Daily values, ordered chronologically, zeros for rest days
        span_days: Time constant in days (7 for ATL, 42 for CTL)

    Returns:
        List of EWMA values, one per input value

    Formula:
        alpha = 2 / (span + 1)
        ewma[t] = alpha * value[t] + (1 - alpha) * ewma[t-1]
        ewma[-1] = 0
    """
    alpha = smoothing_factor(span_days)
    result: list[float] = []
    prev = 0.0
    for value in values:
        prev = alpha * value + (1 - alpha) * prev
        result.append(prev)
    return result


def daily_training_minutes(activities: Iterable[Activity]) -> dict[date, float]:
    """Sum moving time in minutes per UTC calendar day.

    Each day is summed with ``math.fsum`` so the total does not depend on
    the order activities arrive in.
    """
    minutes: dict[date, list[float]] = defaultdict(list)
    for activity in activities:
        minutes[activity.started_at.date()].append(seconds_to_minutes(activity.moving_time_s))
    return {day: math.fsum(values) for day, values in minutes.items()}


def compute_training_load(
    activities: Iterable[Activity | Mapping[str, Any]],
    now: datetime | None = None,
) -> list[LoadPoint]:
    """Compute the daily ATL/CTL/TSB series from an activity history.

    Args:
        activities: Activities in any order (models or raw rows)
        now: Reference time for "today" (defaults to current UTC time)

    Returns:
        One LoadPoint per UTC calendar day from the earliest activity through
        today inclusive, or [] when there are no activities. Activities dated
        after today fall outside the series.
    """
    items = sorted(as_activities(activities), key=lambda a: a.started_at)
    if not items:
        return []

    daily = daily_training_minutes(items)
    days = date_range(items[0].started_at.date(), utc_today(now))
    loads = [daily.get(d, 0.0) for d in days]

    atl = calculate_ewma(loads, ATL_SPAN_DAYS)
    ctl = calculate_ewma(loads, CTL_SPAN_DAYS)

    logger.debug(f"Computed training load: activities={len(items)} days={len(days)}")

    return [LoadPoint(date=d, atl=a, ctl=c, tsb=c - a) for d, a, c in zip(days, atl, ctl, strict=True)]


def get_current_metrics(series: list[LoadPoint]) -> dict[str, float]:
    """Get current (most recent) ATL, CTL and TSB values.

    Returns zeros if no data available.
    """
    if not series:
        return {"atl": 0.0, "ctl": 0.0, "tsb": 0.0}

    last = series[-1]
    return {"atl": last.atl, "ctl": last.ctl, "tsb": last.tsb}
