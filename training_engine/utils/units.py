"""Unit conversion at the engine boundary.

Activity records arrive in metres and seconds. Everything the engine
publishes (plan volume, day slots, weekly summaries, long runs) is in
kilometres, so conversion happens here and nowhere inside the algorithms.
"""

from __future__ import annotations

import math

METERS_PER_KM = 1000.0


def meters_to_km(meters: float) -> float:
    """Convert metres to kilometres."""
    return meters / METERS_PER_KM


def km_to_meters(km: float) -> float:
    """Convert kilometres to metres."""
    return km * METERS_PER_KM


def seconds_to_minutes(seconds: float) -> float:
    """Convert seconds to minutes."""
    return seconds / 60.0


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded towards +infinity.

    Python's built-in round() uses banker's rounding, which would shift plan
    volumes by one unit on exact halves.
    """
    return math.floor(value + 0.5)
