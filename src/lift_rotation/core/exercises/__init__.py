"""
Exercise catalog for lift-rotation.

The catalog is a fixed, ordered table of Exercise entries, each tagged
push, pull or legs.
"""

from .base import Category, Exercise
from .registry import (
    CATEGORY_ORDER,
    EXERCISE_CATALOG,
    category_display_name,
    category_rank,
    get_exercise,
    is_known_exercise,
)

__all__ = [
    "Category",
    "Exercise",
    "CATEGORY_ORDER",
    "EXERCISE_CATALOG",
    "category_display_name",
    "category_rank",
    "get_exercise",
    "is_known_exercise",
]
