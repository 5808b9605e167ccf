"""
Presentation order for exercises.

Exercises are ordered by:
1. Category: push → pull → legs
2. 14-day frequency: less frequent first
3. Recency: never performed first, then longest rested first

Python's sort is stable, so exercises equal on all three keys keep their
input order.
"""

from collections.abc import Iterable
from datetime import timezone

from .exercises.registry import category_rank
from .models import ExerciseWithStatus


def ranking_key(exercise: ExerciseWithStatus) -> tuple[int, int, int, float]:
    """Composite sort key for one annotated exercise."""
    if exercise.last_performed is None:
        recency = (0, 0.0)
    else:
        last = exercise.last_performed
        if last.tzinfo is None:
            last = last.replace(tzinfo=timezone.utc)
        recency = (1, last.timestamp())
    return (category_rank(exercise.category), exercise.frequency_14d, *recency)


def rank_exercises(exercises: Iterable[ExerciseWithStatus]) -> list[ExerciseWithStatus]:
    """
    Return exercises in recommended order.

    Args:
        exercises: Annotated exercises, in any order

    Returns:
        New sorted list; the input is left untouched
    """
    return sorted(exercises, key=ranking_key)
