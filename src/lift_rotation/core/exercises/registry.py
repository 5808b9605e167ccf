"""
Exercise catalog.

All exercises the app can schedule are listed here in display order.
The catalog is a constant tuple built at import time; user data that
predates an addition is migrated lazily by the history store.
"""

from typing import Final

from .base import Category, Exercise

EXERCISE_CATALOG: Final[tuple[Exercise, ...]] = (
    # Push (Bröst, Axlar och Triceps)
    Exercise("dips", "Dips", "push"),
    Exercise("brost-press", "Bröst Press", "push"),
    Exercise("axel-press", "Axel Press", "push"),
    Exercise("sidolyft", "Sidolyft", "push"),
    Exercise("plankan", "Plankan", "push"),
    # Pull (Rygg och Biceps)
    Exercise("back-extensions", "Back extensions", "pull"),
    Exercise("reverse-flye", "Reverse Flye", "pull"),
    Exercise("latsdrag", "Latsdrag", "pull"),
    Exercise("rodd", "Rodd", "pull"),
    Exercise("bicep-curls", "Bicep curls", "pull"),
    # Legs (Ben)
    Exercise("ben-press", "Ben Press", "legs"),
    Exercise("leg-curls", "Leg Curls", "legs"),
    Exercise("leg-extensions", "Leg extensions", "legs"),
    Exercise("calf-raises", "Calf raises", "legs"),
    Exercise("dead-bugs", "Dead Bugs", "legs"),
)

CATEGORY_ORDER: Final[tuple[Category, ...]] = ("push", "pull", "legs")

CATEGORY_DISPLAY_NAMES: Final[dict[str, str]] = {
    "push": "Bröst, Axlar och Triceps",
    "pull": "Rygg och Biceps",
    "legs": "Ben",
}

_BY_ID: Final[dict[str, Exercise]] = {e.id: e for e in EXERCISE_CATALOG}


def is_known_exercise(exercise_id: str) -> bool:
    """Return True if exercise_id is in the catalog."""
    return exercise_id in _BY_ID


def get_exercise(exercise_id: str) -> Exercise:
    """
    Return the catalog entry for the given exercise_id.

    Args:
        exercise_id: Catalog id, e.g. "dips" or "ben-press"

    Returns:
        Exercise for the requested id

    Raises:
        ValueError: If exercise_id is not in the catalog
    """
    if exercise_id not in _BY_ID:
        valid = ", ".join(_BY_ID)
        raise ValueError(f"Unknown exercise '{exercise_id}'. Valid IDs: {valid}")
    return _BY_ID[exercise_id]


def category_rank(category: str) -> int:
    """Return the sort priority of a category (push=0, pull=1, legs=2)."""
    try:
        return CATEGORY_ORDER.index(category)  # type: ignore[arg-type]
    except ValueError:
        raise ValueError(
            f"Unknown category '{category}'. Must be one of {CATEGORY_ORDER}"
        ) from None


def category_display_name(category: str) -> str:
    """Return the human-readable heading for a category."""
    return CATEGORY_DISPLAY_NAMES.get(category, category)
