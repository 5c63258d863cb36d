"""Immutable output models for planning.

This module defines the structures the periodization generator and the
weekly calendar distributor hand to the presentation layer:
- Phases and plan weeks
- The full plan
- Day slots of one calendar week
- Legacy training blocks

All distances are kilometres. All models are frozen.
"""

from dataclasses import dataclass
from datetime import date

from training_engine.planner.constants import PHASE_LABELS
from training_engine.planner.enums import DayType, IntensityZone, PhaseKey


# -----------------------------
# Periodization
# -----------------------------
@dataclass(frozen=True)
class Phase:
    """One periodization phase.

    Attributes:
        key: Phase identifier
        week_count: Number of weeks in the phase (>= 1)
        start_volume: Weekly volume at the first week (km)
        end_volume: Weekly volume at the last week (km)
    """

    key: PhaseKey
    week_count: int
    start_volume: int
    end_volume: int

    @property
    def label(self) -> str:
        return PHASE_LABELS[self.key]


@dataclass(frozen=True)
class WeekPlan:
    """One week of a periodized plan.

    Attributes:
        week_number: 1-based week number
        date: Monday of the week (the race date for the trailing race entry)
        phase: Phase key, PhaseKey.RACE for the race entry
        volume: Weekly volume target (km)
        long_run_distance: Long run target (km)
        key_workout_label: Label key of the week's key workout
        is_recovery_week: Reduced-volume week
        notes_label: Label key of the week's note, empty when none
        is_current_week: Today falls within this week
    """

    week_number: int
    date: date
    phase: PhaseKey
    volume: int
    long_run_distance: int
    key_workout_label: str
    is_recovery_week: bool = False
    notes_label: str = ""
    is_current_week: bool = False

    @property
    def is_race_week(self) -> bool:
        return self.phase == PhaseKey.RACE


@dataclass(frozen=True)
class KoopPlan:
    """Full periodized plan: training weeks followed by the race entry."""

    weeks: tuple[WeekPlan, ...]
    phases: tuple[Phase, ...]
    total_weeks: int
    peak_volume: int

    @property
    def training_weeks(self) -> tuple[WeekPlan, ...]:
        return self.weeks[:-1]

    @property
    def current_week(self) -> WeekPlan | None:
        return next((w for w in self.weeks if w.is_current_week), None)


# -----------------------------
# Weekly calendar
# -----------------------------
@dataclass(frozen=True)
class DaySlot:
    """One day of a calendar week.

    Attributes:
        date: Calendar date
        type: Day type
        label: Label key
        distance: Distance (km), 0 for rest days and race day
        intensity_zone: Effort band
    """

    date: date
    type: DayType
    label: str
    distance: int = 0
    intensity_zone: IntensityZone = IntensityZone.Z2


# -----------------------------
# Legacy block overview
# -----------------------------
@dataclass(frozen=True)
class TrainingBlock:
    """Coarse Base/Build/Peak/Taper block used by the season overview."""

    title_key: str
    weeks: int
    start_volume: int
    end_volume: int
    description_key: str
    b2b_long_weekends: bool = False
