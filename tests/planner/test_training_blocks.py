import datetime as dt

from training_engine.planner.training_blocks import compute_current_block, compute_training_blocks
from training_engine.schemas.records import Plan


def make_plan(midnight: dt.datetime, pair: bool = False) -> Plan:
    return Plan(
        race_date=(midnight + dt.timedelta(days=90)).date(),
        current_weekly_volume=40,
        pair_long_run_weekends=pair,
    )


def test_four_blocks_cover_the_plan(midnight):
    blocks = compute_training_blocks(make_plan(midnight), now=midnight)

    assert [b.title_key for b in blocks] == ["blocks.base", "blocks.build", "blocks.peak", "blocks.taper"]
    assert [b.weeks for b in blocks] == [4, 4, 3, 2]
    assert [b.description_key for b in blocks] == [
        "blocks.baseDesc",
        "blocks.buildDesc",
        "blocks.peakDesc",
        "blocks.taperDesc",
    ]
    assert (blocks[0].start_volume, blocks[0].end_volume) == (40, 46)
    assert (blocks[3].start_volume, blocks[3].end_volume) == (28, 20)


def test_b2b_flag_on_build_and_peak_only(midnight):
    paired = compute_training_blocks(make_plan(midnight, pair=True), now=midnight)
    unpaired = compute_training_blocks(make_plan(midnight, pair=False), now=midnight)

    assert [b.b2b_long_weekends for b in paired] == [False, True, True, False]
    assert not any(b.b2b_long_weekends for b in unpaired)


def test_current_block(midnight):
    plan = make_plan(midnight)

    assert compute_current_block(plan, now=midnight).title_key == "blocks.base"
    assert compute_current_block(plan, now=midnight, week_number=5).title_key == "blocks.build"
    assert compute_current_block(plan, now=midnight, week_number=40).title_key == "blocks.taper"
