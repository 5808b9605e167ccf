"""
Weight-unit conversion and display helpers.

Conversions round to one decimal, half-up, so they are lossy and not
exact inverses of each other.  A kg → lbs → kg round trip stays within
0.5 kg over realistic weights.
"""

import math
from datetime import datetime

from .config import LBS_PER_KG, WEIGHT_UNITS
from .models import ExerciseHistory, WorkoutSession

_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def _round_tenth(value: float) -> float:
    """Round to one decimal place, halves rounding up."""
    return math.floor(value * 10 + 0.5) / 10


def kg_to_lbs(kg: float) -> float:
    """Convert kilograms to pounds, rounded to 0.1."""
    return _round_tenth(kg * LBS_PER_KG)


def lbs_to_kg(lbs: float) -> float:
    """Convert pounds to kilograms, rounded to 0.1."""
    return _round_tenth(lbs / LBS_PER_KG)


def convert_weight(value: float, from_unit: str, to_unit: str) -> float:
    """
    Convert a weight between "kg" and "lbs".

    Args:
        value: Weight in from_unit
        from_unit: "kg" or "lbs"
        to_unit: "kg" or "lbs"

    Returns:
        Weight in to_unit (unchanged when the units match)

    Raises:
        ValueError: If either unit is not supported
    """
    for unit in (from_unit, to_unit):
        if unit not in WEIGHT_UNITS:
            raise ValueError(f"Invalid unit: {unit!r}. Must be one of {WEIGHT_UNITS}")

    if from_unit == to_unit:
        return value
    if from_unit == "kg":
        return kg_to_lbs(value)
    return lbs_to_kg(value)


def format_weight(weight_kg: float, unit: str = "kg") -> str:
    """Format a stored kg weight for display in the given unit."""
    shown = convert_weight(weight_kg, "kg", unit)
    return f"{shown:g} {unit}"


def format_date(dt: datetime) -> str:
    """Format a date as "ddd dd/mm", e.g. "Mon 15/01"."""
    return f"{_WEEKDAYS[dt.weekday()]} {dt.day:02d}/{dt.month:02d}"


def last_sessions(history: ExerciseHistory, n: int = 3) -> list[WorkoutSession]:
    """Return up to n most recent sessions, newest first."""
    if n < 1:
        return []
    return sorted(history.history, key=lambda s: s.date, reverse=True)[:n]
