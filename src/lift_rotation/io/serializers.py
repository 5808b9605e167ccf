"""
JSON serialization for workout data models.

Handles conversion between dataclasses and JSON-compatible dicts, and
validation of raw user input (weights, reps, dates, units).
"""

import json
import math
from datetime import datetime, timezone, tzinfo
from typing import Any

from ..core.config import WEIGHT_UNITS
from ..core.exercises.registry import CATEGORY_ORDER, is_known_exercise
from ..core.models import (
    ExerciseHistory,
    ExerciseWithStatus,
    UserData,
    WeightUnit,
    WorkoutSession,
)
from ..core.units import convert_weight


class ValidationError(Exception):
    """Raised when data validation fails."""

    pass


class UnknownExerciseError(ValidationError):
    """Raised when an exercise id is not in the catalog."""

    def __init__(self, exercise_id: str):
        super().__init__(f"Exercise not found: {exercise_id!r}")
        self.exercise_id = exercise_id


def validate_date(date_str: str, default_tz: tzinfo = timezone.utc) -> datetime:
    """
    Parse an ISO-8601 date or datetime string to an aware datetime.

    Accepts a trailing "Z" for UTC.  Values without an offset (including
    plain YYYY-MM-DD dates) are taken to be in default_tz.

    Args:
        date_str: Date string to validate
        default_tz: Timezone for values without an offset (default: UTC)

    Returns:
        Timezone-aware datetime

    Raises:
        ValidationError: If the string is not ISO-8601
    """
    if not isinstance(date_str, str) or not date_str.strip():
        raise ValidationError(f"Invalid date: {date_str!r}. Expected ISO-8601")

    text = date_str.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"

    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as e:
        raise ValidationError(f"Invalid date: {date_str!r}. Expected ISO-8601") from e

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=default_tz)
    return parsed


def validate_non_negative(value: int | float, name: str) -> int | float:
    """
    Validate that a value is a finite, non-negative number.

    Args:
        value: Value to validate
        name: Name for error message

    Returns:
        The value if valid

    Raises:
        ValidationError: If value is negative or not a number
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{name} must be a number, got {value!r}")
    if not math.isfinite(value):
        raise ValidationError(f"{name} must be finite, got {value}")
    if value < 0:
        raise ValidationError(f"{name} must be non-negative, got {value}")
    return value


def validate_reps(value: Any) -> int:
    """
    Validate a repetition count.

    Floats with an integral value (e.g. 10.0 from JSON) are accepted.

    Raises:
        ValidationError: If value is not a positive integer
    """
    if isinstance(value, bool):
        raise ValidationError(f"reps must be a positive integer, got {value!r}")
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if not isinstance(value, int) or value <= 0:
        raise ValidationError(f"reps must be a positive integer, got {value!r}")
    return value


def validate_unit(unit: str) -> WeightUnit:
    """
    Validate a weight unit.

    Raises:
        ValidationError: If unit is not "kg" or "lbs"
    """
    if unit not in WEIGHT_UNITS:
        raise ValidationError(f"Invalid unit: {unit!r}. Must be one of {WEIGHT_UNITS}")
    return unit  # type: ignore


def validate_exercise_id(exercise_id: str) -> str:
    """
    Validate that an exercise id is in the catalog.

    Raises:
        UnknownExerciseError: If the id is unknown
    """
    if not is_known_exercise(exercise_id):
        raise UnknownExerciseError(exercise_id)
    return exercise_id


def parse_weight(raw: str) -> float:
    """Parse a weight typed by the user, accepting a decimal comma."""
    try:
        value = float(raw.strip().replace(",", "."))
    except ValueError as e:
        raise ValidationError(f"Invalid weight: {raw!r}. Expected a number") from e
    validate_non_negative(value, "weight")
    return value


def parse_reps(raw: str) -> int:
    """Parse a rep count typed by the user."""
    try:
        value = int(raw.strip())
    except ValueError as e:
        raise ValidationError(f"Invalid reps: {raw!r}. Expected a whole number") from e
    return validate_reps(value)


def session_to_dict(session: WorkoutSession) -> dict[str, Any]:
    """
    Convert WorkoutSession to JSON-compatible dict.

    Args:
        session: WorkoutSession to convert

    Returns:
        Dict representation
    """
    return {
        "date": session.date.isoformat(),
        "weight_kg": session.weight_kg,
        "reps": session.reps,
    }


def dict_to_session(data: dict[str, Any]) -> WorkoutSession:
    """
    Convert dict to WorkoutSession.

    Also reads the camelCase ``weightKg`` key written by earlier versions
    of the app.

    Args:
        data: Dict representation

    Returns:
        WorkoutSession instance

    Raises:
        ValidationError: If data is invalid
    """
    if not isinstance(data, dict):
        raise ValidationError(f"Session must be an object, got {type(data).__name__}")

    if "date" not in data:
        raise ValidationError("Session is missing 'date'")
    date = validate_date(data["date"])

    weight = data.get("weight_kg", data.get("weightKg"))
    if weight is None:
        raise ValidationError("Session is missing 'weight_kg'")
    validate_non_negative(weight, "weight_kg")

    reps = validate_reps(data.get("reps"))

    return WorkoutSession(date=date, weight_kg=float(weight), reps=reps)


def exercise_history_to_dict(history: ExerciseHistory) -> dict[str, Any]:
    """Convert ExerciseHistory to JSON-compatible dict."""
    return {
        "id": history.id,
        "name": history.name,
        "category": history.category,
        "history": [session_to_dict(s) for s in history.history],
    }


def dict_to_exercise_history(data: dict[str, Any]) -> ExerciseHistory:
    """
    Convert dict to ExerciseHistory.

    Raises:
        ValidationError: If data is invalid
    """
    if not isinstance(data, dict):
        raise ValidationError(f"Exercise must be an object, got {type(data).__name__}")

    for key in ("id", "name", "category"):
        if not isinstance(data.get(key), str):
            raise ValidationError(f"Exercise is missing '{key}'")

    if data["category"] not in CATEGORY_ORDER:
        raise ValidationError(
            f"Invalid category: {data['category']!r}. Must be one of {CATEGORY_ORDER}"
        )

    raw_history = data.get("history", [])
    if not isinstance(raw_history, list):
        raise ValidationError(f"History of '{data['id']}' must be a list")

    return ExerciseHistory(
        id=data["id"],
        name=data["name"],
        category=data["category"],
        history=[dict_to_session(s) for s in raw_history],
    )


def user_data_to_dict(user_data: UserData) -> dict[str, Any]:
    """Convert UserData to JSON-compatible dict."""
    return {
        "identity": user_data.identity,
        "exercises": [exercise_history_to_dict(e) for e in user_data.exercises],
    }


def dict_to_user_data(data: dict[str, Any]) -> UserData:
    """
    Convert dict to UserData.

    Accepts the legacy ``googleId`` key in place of ``identity``.

    Raises:
        ValidationError: If data is invalid
    """
    if not isinstance(data, dict):
        raise ValidationError(f"User record must be an object, got {type(data).__name__}")

    identity = data.get("identity", data.get("googleId"))
    if not isinstance(identity, str) or not identity:
        raise ValidationError("User record is missing 'identity'")

    raw_exercises = data.get("exercises", [])
    if not isinstance(raw_exercises, list):
        raise ValidationError("'exercises' must be a list")

    return UserData(
        identity=identity,
        exercises=[dict_to_exercise_history(e) for e in raw_exercises],
    )


def user_data_to_json(user_data: UserData) -> str:
    """Serialize UserData to an indented JSON document."""
    return json.dumps(user_data_to_dict(user_data), indent=2, ensure_ascii=False)


def json_to_user_data(text: str) -> UserData:
    """
    Deserialize a JSON document to UserData.

    Raises:
        ValidationError: If JSON is invalid or data validation fails
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid JSON: {e}") from e

    return dict_to_user_data(data)


def exercise_with_status_to_dict(exercise: ExerciseWithStatus, unit: str = "kg") -> dict[str, Any]:
    """
    Convert ExerciseWithStatus to a JSON-compatible dict for output.

    Recent session weights are reported in the requested unit.
    """
    return {
        "id": exercise.id,
        "name": exercise.name,
        "category": exercise.category,
        "eligible": exercise.eligible,
        "last_performed": (
            exercise.last_performed.isoformat() if exercise.last_performed else None
        ),
        "frequency_14d": exercise.frequency_14d,
        "recent_sessions": [
            {
                "date": s.date.isoformat(),
                "weight": convert_weight(s.weight_kg, "kg", unit),
                "unit": unit,
                "reps": s.reps,
            }
            for s in exercise.recent_sessions
        ],
    }
