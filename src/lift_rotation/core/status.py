"""
Per-exercise status derived from workout history.

Computes last-performed instant, trailing-window frequency and
eligibility under the one-rest-day rule.

Day arithmetic is done on calendar dates: both instants are converted to
the timezone of the reference "today" and truncated to their date before
differencing.  A session late yesterday evening is therefore one day ago
even if fewer than 24 hours have elapsed.
"""

from datetime import date, datetime, timezone

from .config import FREQUENCY_WINDOW_DAYS, MIN_REST_DAYS, RECENT_SESSIONS_SHOWN
from .exercises.registry import EXERCISE_CATALOG
from .models import ExerciseHistory, ExerciseStatus, ExerciseWithStatus, UserData
from .ranking import rank_exercises
from .units import last_sessions


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _reference_tz(today: datetime) -> timezone:
    return today.tzinfo if today.tzinfo is not None else timezone.utc  # type: ignore[return-value]


def calendar_date(instant: datetime, today: datetime) -> date:
    """Return the calendar date of instant as seen in today's timezone."""
    tz = _reference_tz(today)
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(tz).date()


def days_before(instant: datetime, today: datetime) -> int:
    """
    Signed number of calendar days from instant to today.

    0 means the same day, 1 yesterday; negative values are in the future.
    """
    today_date = calendar_date(today, today)
    return (today_date - calendar_date(instant, today)).days


def last_performed(history: ExerciseHistory) -> datetime | None:
    """Return the latest session instant, or None for an empty history."""
    if not history.history:
        return None
    return max(s.date for s in history.history)


def frequency_in_window(
    history: ExerciseHistory,
    today: datetime,
    window_days: int = FREQUENCY_WINDOW_DAYS,
) -> int:
    """
    Count sessions dated between today - window_days and today, inclusive.

    Args:
        history: Exercise history to scan
        today: Reference instant
        window_days: Window length in calendar days

    Returns:
        Number of sessions in the window
    """
    return sum(
        1 for s in history.history if 0 <= days_before(s.date, today) <= window_days
    )


def is_eligible(last: datetime | None, today: datetime) -> bool:
    """
    True if the exercise may be trained today.

    Never-performed exercises are always eligible.  Otherwise at least
    MIN_REST_DAYS calendar days must separate the last session and today,
    so performing an exercise today or yesterday makes it ineligible.
    """
    if last is None:
        return True
    return abs(days_before(last, today)) >= MIN_REST_DAYS


def compute_status(
    history: ExerciseHistory, today: datetime | None = None
) -> ExerciseStatus:
    """
    Derive eligibility, last-performed instant and 14-day frequency.

    Args:
        history: Exercise history (may be empty)
        today: Reference instant (default: now, UTC)

    Returns:
        ExerciseStatus for the given day
    """
    if today is None:
        today = _now()

    last = last_performed(history)
    return ExerciseStatus(
        eligible=is_eligible(last, today),
        last_performed=last,
        frequency_14d=frequency_in_window(history, today),
    )


def exercises_with_status(
    user_data: UserData, today: datetime | None = None
) -> list[ExerciseWithStatus]:
    """
    Annotate every catalog exercise with its status and rank the result.

    Catalog exercises absent from user_data are treated as never performed.
    Stored exercises no longer in the catalog are ignored.
    """
    if today is None:
        today = _now()

    annotated: list[ExerciseWithStatus] = []
    for exercise in EXERCISE_CATALOG:
        history = user_data.find(exercise.id) or ExerciseHistory.empty(exercise)
        annotated.append(
            ExerciseWithStatus.build(
                exercise,
                compute_status(history, today),
                tuple(last_sessions(history, RECENT_SESSIONS_SHOWN)),
            )
        )

    return rank_exercises(annotated)
