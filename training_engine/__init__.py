"""Training analytics and periodization engine.

Pure functions over immutable records:
- Training load series (ATL / CTL / TSB)
- Periodized plan generation
- Weekly calendar distribution
- Rule-based coaching insights

All distances in outputs are kilometres; all dates are UTC calendar dates.
"""

from training_engine.coach.insights import generate_coaching_insights
from training_engine.coach.models import Insight, InsightKind
from training_engine.errors import EngineError, InvalidPlanError, InvalidRecordError
from training_engine.metrics.summaries import (
    compute_long_runs,
    compute_recent_activity_zones,
    compute_weekly_hr_zones,
    compute_weekly_summary,
    rpe_class,
    trend_arrow,
)
from training_engine.metrics.training_load import LoadPoint, compute_training_load
from training_engine.planner.enums import DayType, IntensityZone, PhaseKey
from training_engine.planner.models import DaySlot, KoopPlan, Phase, TrainingBlock, WeekPlan
from training_engine.planner.periodization import compute_koop_plan
from training_engine.planner.training_blocks import compute_current_block, compute_training_blocks
from training_engine.planner.weekly_calendar import CalendarPolicy, compute_weekly_calendar
from training_engine.schemas.records import Activity, Checkin, Plan
from training_engine.utils.calendar import week_start

__all__ = [
    "Activity",
    "CalendarPolicy",
    "Checkin",
    "DaySlot",
    "DayType",
    "EngineError",
    "Insight",
    "InsightKind",
    "IntensityZone",
    "InvalidPlanError",
    "InvalidRecordError",
    "KoopPlan",
    "LoadPoint",
    "Phase",
    "PhaseKey",
    "Plan",
    "TrainingBlock",
    "WeekPlan",
    "compute_current_block",
    "compute_koop_plan",
    "compute_long_runs",
    "compute_recent_activity_zones",
    "compute_training_blocks",
    "compute_training_load",
    "compute_weekly_calendar",
    "compute_weekly_hr_zones",
    "compute_weekly_summary",
    "generate_coaching_insights",
    "rpe_class",
    "trend_arrow",
    "week_start",
]
