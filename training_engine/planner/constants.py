"""Periodization constants and label keys.

Label values are translation keys owned by the presentation layer.
"""

from training_engine.planner.enums import PhaseKey

MIN_PLAN_WEEKS = 4

# Share of total weeks per phase; taper takes the remainder
PHASE_PROPORTIONS: dict[PhaseKey, float] = {
    PhaseKey.PREPARATION: 0.15,
    PhaseKey.ENDURANCE: 0.35,
    PhaseKey.SPECIFIC_PREP: 0.35,
}

# Volume ramps as multiples of the current weekly volume (start, end)
PREPARATION_RAMP = (1.0, 1.1)
ENDURANCE_RAMP = (1.1, 1.3)
SPECIFIC_PREP_RAMP = (1.3, 1.45)
PEAK_MULTIPLIER = 1.45
TAPER_START_OF_PEAK = 0.8
TAPER_END_OF_CURRENT = 0.5

RECOVERY_VOLUME_FACTOR = 0.65
LONG_RUN_SHARE = 0.3
LONG_CYCLE_PHASE_WEEKS = 8  # phases longer than this recover every 4th week
SHORT_RECOVERY_CYCLE = 3
LONG_RECOVERY_CYCLE = 4

B2B_PHASES = frozenset({PhaseKey.ENDURANCE, PhaseKey.SPECIFIC_PREP})

# Key workouts cycled through per phase
PHASE_WORKOUTS: dict[PhaseKey, tuple[str, ...]] = {
    PhaseKey.PREPARATION: ("gantt.easyVolume", "gantt.steadyState", "gantt.tempo"),
    PhaseKey.ENDURANCE: ("gantt.steadyState", "gantt.tempo", "gantt.enduranceRun", "gantt.muscleTension"),
    PhaseKey.SPECIFIC_PREP: ("gantt.muscleTension", "gantt.overUnder", "gantt.raceSimulation", "gantt.tempo"),
    PhaseKey.TAPER: ("gantt.steadyState", "gantt.tempo"),
}

PHASE_LABELS: dict[PhaseKey, str] = {
    PhaseKey.PREPARATION: "gantt.preparation",
    PhaseKey.ENDURANCE: "gantt.endurance",
    PhaseKey.SPECIFIC_PREP: "gantt.specificPrep",
    PhaseKey.TAPER: "gantt.taper",
}

RECOVERY_WEEK_LABEL = "gantt.recoveryWeek"
B2B_LONG_LABEL = "gantt.b2bLong"
RACE_DAY_LABEL = "gantt.raceDay"
RACE_WEEK_LABEL = "gantt.raceWeek"

# -----------------------------
# Weekly calendar
# -----------------------------
LONG_RUN_DAY = 6  # Sunday
KEY_WORKOUT_DAY = 2  # Wednesday
MEDIUM_LONG_DAY = 5  # Saturday

KEY_WORKOUT_SHARE = 0.15
KEY_WORKOUT_MIN_KM = 5
MEDIUM_LONG_SHARE = 0.65

# Rest days seeded per availability (days per week -> day indices)
REST_DAYS_LOW_AVAILABILITY = (0, 4)  # availability <= 5
REST_DAYS_SIX_DAYS = (0,)

# Race week: (day index, distance) of shakeout runs
RACE_WEEK_SHAKEOUTS = ((1, 5), (3, 3))

CAL_REST_LABEL = "cal.rest"
CAL_RACE_DAY_LABEL = "cal.raceDay"
CAL_SHAKEOUT_LABEL = "cal.shakeout"
CAL_LONG_RUN_LABEL = "cal.longRun"
CAL_MEDIUM_LONG_LABEL = "cal.mediumLong"
CAL_EASY_RUN_LABEL = "cal.easyRun"
CAL_RECOVERY_RUN_LABEL = "cal.recoveryRun"
