"""Canonical enums for periodization and the weekly calendar.

All enums are string-based so they serialize as the same semantic keys the
presentation layer translates.
"""

from enum import StrEnum


# -----------------------------
# Plan phases
# -----------------------------
class PhaseKey(StrEnum):
    """Periodization phase of a plan week."""

    PREPARATION = "preparation"
    ENDURANCE = "endurance"
    SPECIFIC_PREP = "specificPrep"
    TAPER = "taper"
    RACE = "race"


# -----------------------------
# Day slots
# -----------------------------
class DayType(StrEnum):
    """Type of a single calendar day."""

    LONG = "long"
    INTENSITY = "intensity"
    MEDIUM_LONG = "medium-long"
    EASY = "easy"
    RECOVERY = "recovery"
    REST = "rest"
    RACE = "race"


class IntensityZone(StrEnum):
    """Coarse effort band, 1 easiest to 5 hardest."""

    Z1 = "z1"
    Z2 = "z2"
    Z3 = "z3"
    Z4 = "z4"
    Z5 = "z5"
    RACE = "race"
