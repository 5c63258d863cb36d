"""Coarse Base/Build/Peak/Taper block overview.

The season view shows four blocks instead of the full periodized plan.
Blocks use a 30/30/25 split with the taper taking the remainder.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from training_engine.planner.models import TrainingBlock
from training_engine.planner.periodization import plan_total_weeks
from training_engine.schemas.records import Plan, as_plan
from training_engine.utils.units import round_half_up

BLOCK_SHARES = (("blocks.base", 0.30), ("blocks.build", 0.30), ("blocks.peak", 0.25))


def compute_training_blocks(plan: Plan | Mapping[str, Any], now: datetime | None = None) -> list[TrainingBlock]:
    """Split the weeks before the race into Base, Build, Peak and Taper blocks.

    Build and Peak are flagged for back-to-back long weekends when the plan
    pairs long runs.
    """
    plan = as_plan(plan)
    total_weeks = plan_total_weeks(plan.race_date, now)
    base, build, peak = (max(1, round_half_up(total_weeks * share)) for _, share in BLOCK_SHARES)
    taper = max(1, total_weeks - base - build - peak)

    volume = plan.current_weekly_volume
    pair = plan.pair_long_run_weekends

    return [
        TrainingBlock("blocks.base", base, round_half_up(volume), round_half_up(volume * 1.15), "blocks.baseDesc"),
        TrainingBlock(
            "blocks.build",
            build,
            round_half_up(volume * 1.15),
            round_half_up(volume * 1.35),
            "blocks.buildDesc",
            b2b_long_weekends=pair,
        ),
        TrainingBlock(
            "blocks.peak",
            peak,
            round_half_up(volume * 1.35),
            round_half_up(volume * 1.45),
            "blocks.peakDesc",
            b2b_long_weekends=pair,
        ),
        TrainingBlock(
            "blocks.taper", taper, round_half_up(volume * 0.7), round_half_up(volume * 0.5), "blocks.taperDesc"
        ),
    ]


def compute_current_block(
    plan: Plan | Mapping[str, Any],
    now: datetime | None = None,
    week_number: int = 1,
) -> TrainingBlock:
    """Return the block containing ``week_number`` (1-based) of the overview.

    Overviews always start in the current week, so the default is the block
    the athlete is in today. Week numbers past the end map to the taper.
    """
    blocks = compute_training_blocks(plan, now)
    elapsed = 0
    for block in blocks:
        elapsed += block.weeks
        if week_number <= elapsed:
            return block
    return blocks[-1]
