"""
Configuration constants for the scheduling model.

The scheduling policy is fixed; these values are centralized here so the
status calculator, ranking engine and views agree on them.
"""

from typing import Final

# =============================================================================
# RECOVERY RULE
# =============================================================================

MIN_REST_DAYS: Final[int] = 2  # Calendar days between sessions of one exercise

# =============================================================================
# LOAD BALANCING
# =============================================================================

FREQUENCY_WINDOW_DAYS: Final[int] = 14  # Trailing window, inclusive of today

# =============================================================================
# DISPLAY
# =============================================================================

RECENT_SESSIONS_SHOWN: Final[int] = 3  # Sessions listed per exercise

# =============================================================================
# UNITS
# =============================================================================

LBS_PER_KG: Final[float] = 2.20462
WEIGHT_UNITS: Final[tuple[str, ...]] = ("kg", "lbs")
DEFAULT_UNIT: Final[str] = "kg"
