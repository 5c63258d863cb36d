"""Root conftest for all tests.

Every engine call takes an explicit ``now`` so results never depend on the
wall clock. The shared clock is a Wednesday morning in UTC.
"""

import datetime as dt

import pytest
from loguru import logger

from training_engine.schemas.records import Activity

FIXED_NOW = dt.datetime(2026, 3, 18, 9, 30, tzinfo=dt.UTC)


@pytest.fixture
def now() -> dt.datetime:
    """Fixed reference time (Wednesday 2026-03-18 09:30 UTC)."""
    return FIXED_NOW


@pytest.fixture
def midnight(now: dt.datetime) -> dt.datetime:
    """Start of the fixed reference day."""
    return now.replace(hour=0, minute=0)


@pytest.fixture
def make_activity():
    """Factory for activities dated relative to the fixed clock."""

    def _make(
        *,
        days_ago: int,
        minutes: float = 60,
        distance_km: float = 10.0,
        type: str = "Run",
        name: str = "Run",
        zones: tuple[float, ...] = (0, 0, 0, 0, 0),
    ) -> Activity:
        return Activity(
            id=f"a-{days_ago}-{name}",
            started_at=FIXED_NOW.replace(hour=7, minute=0) - dt.timedelta(days=days_ago),
            distance_m=distance_km * 1000,
            moving_time_s=minutes * 60,
            elevation_gain_m=50,
            type=type,
            name=name,
            hr_zone_seconds=zones,
        )

    return _make


@pytest.fixture
def log_messages():
    """Capture loguru messages emitted during a test."""
    messages: list[str] = []
    handler_id = logger.add(lambda message: messages.append(str(message)), level="DEBUG", format="{level} {message}")
    yield messages
    logger.remove(handler_id)
