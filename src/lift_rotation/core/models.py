"""
Data models for lift-rotation.

Core dataclasses for logged sessions, per-exercise histories, per-user
documents and the derived status used for scheduling.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Literal

from .exercises.base import Category, Exercise

WeightUnit = Literal["kg", "lbs"]


@dataclass(frozen=True)
class WorkoutSession:
    """
    One completed set of an exercise.

    ``date`` is an absolute instant; naive datetimes are taken as UTC.
    Weight is always stored in kilograms.
    """

    date: datetime
    weight_kg: float
    reps: int

    def __post_init__(self) -> None:
        """Validate session data."""
        if not isinstance(self.date, datetime):
            raise ValueError(f"date must be a datetime, got {type(self.date).__name__}")
        if self.date.tzinfo is None:
            object.__setattr__(self, "date", self.date.replace(tzinfo=timezone.utc))

        if self.weight_kg < 0:
            raise ValueError("weight_kg must be non-negative")

        if isinstance(self.reps, bool) or not isinstance(self.reps, int):
            raise ValueError(f"reps must be an integer, got {self.reps!r}")
        if self.reps <= 0:
            raise ValueError("reps must be positive")


@dataclass
class ExerciseHistory:
    """
    All logged sessions of one exercise for one user.

    Sessions are kept in insertion order, which is not necessarily
    chronological (back-dated sessions are appended at the end).
    """

    id: str
    name: str
    category: Category
    history: list[WorkoutSession] = field(default_factory=list)

    @classmethod
    def empty(cls, exercise: Exercise) -> "ExerciseHistory":
        """Create an empty history for a catalog exercise."""
        return cls(id=exercise.id, name=exercise.name, category=exercise.category)


@dataclass
class UserData:
    """
    The stored document for one identity.

    Holds one ExerciseHistory per exercise; exercises unknown to the
    current catalog are kept as-is so that no stored data is lost.
    """

    identity: str
    exercises: list[ExerciseHistory] = field(default_factory=list)

    def find(self, exercise_id: str) -> ExerciseHistory | None:
        """Return the history for exercise_id, or None if absent."""
        for history in self.exercises:
            if history.id == exercise_id:
                return history
        return None


@dataclass(frozen=True)
class ExerciseStatus:
    """Derived scheduling fields for one exercise, relative to a given day."""

    eligible: bool
    last_performed: datetime | None
    frequency_14d: int


@dataclass(frozen=True)
class ExerciseWithStatus:
    """
    A catalog exercise annotated with its status.

    Recomputed on every read and never persisted.
    """

    id: str
    name: str
    category: Category
    eligible: bool
    last_performed: datetime | None
    frequency_14d: int
    recent_sessions: tuple[WorkoutSession, ...] = ()

    @classmethod
    def build(
        cls,
        exercise: Exercise,
        status: ExerciseStatus,
        recent_sessions: tuple[WorkoutSession, ...] = (),
    ) -> "ExerciseWithStatus":
        return cls(
            id=exercise.id,
            name=exercise.name,
            category=exercise.category,
            eligible=status.eligible,
            last_performed=status.last_performed,
            frequency_14d=status.frequency_14d,
            recent_sessions=recent_sessions,
        )
