"""Session commands: log and history."""

import json
import logging
from datetime import datetime
from typing import Annotated, Optional

import typer

from ...core.config import RECENT_SESSIONS_SHOWN
from ...core.exercises.registry import get_exercise
from ...core.models import ExerciseWithStatus, WorkoutSession
from ...core.status import compute_status
from ...core.units import convert_weight, format_date, format_weight, last_sessions
from ...io.history_store import StorageError
from ...io.serializers import (
    UnknownExerciseError,
    ValidationError,
    exercise_history_to_dict,
    exercise_with_status_to_dict,
    parse_reps,
    parse_weight,
    validate_date,
    validate_exercise_id,
    validate_non_negative,
    validate_reps,
)
from .. import views
from ..app import DataDirOption, JsonOption, UnitOption, UserOption, app, get_settings, get_store

logger = logging.getLogger(__name__)


def _prompt_weight(unit: str) -> float:
    """Ask for a weight until a non-negative number is entered."""
    while True:
        raw = views.console.input(f"Weight ({unit}): ").strip()
        try:
            return parse_weight(raw)
        except ValidationError as e:
            views.print_error(str(e))


def _prompt_reps() -> int:
    """Ask for reps until a positive whole number is entered."""
    while True:
        raw = views.console.input("Reps: ").strip()
        try:
            return parse_reps(raw)
        except ValidationError as e:
            views.print_error(str(e))


@app.command("log")
def log_session(
    exercise_id: Annotated[
        str,
        typer.Argument(help="Exercise ID (see 'catalog'), e.g. dips"),
    ],
    weight: Annotated[
        Optional[float],
        typer.Option("--weight", "-w", help="Weight lifted, in --unit"),
    ] = None,
    reps: Annotated[
        Optional[int],
        typer.Option("--reps", "-r", help="Repetitions completed"),
    ] = None,
    date: Annotated[
        Optional[str],
        typer.Option("--date", "-d", help="When it was done (ISO-8601, default: now)"),
    ] = None,
    user: UserOption = None,
    data_dir: DataDirOption = None,
    unit: UnitOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Log a completed set.

    Run without --weight/--reps to be prompted.  One-liner:

      lift-rotation log dips --weight 20 --reps 10
    """
    settings = get_settings(data_dir, user, unit)
    store = get_store(settings)
    local_now = datetime.now().astimezone()

    try:
        validate_exercise_id(exercise_id)
    except UnknownExerciseError as e:
        views.print_error(str(e))
        views.print_info("Run 'catalog' to see valid exercise IDs.")
        raise typer.Exit(1)

    # ── Interactive prompts for missing values ──────────────────────────────

    if weight is None:
        weight = _prompt_weight(settings.unit)
    if reps is None:
        reps = _prompt_reps()

    # ── Validate all inputs ─────────────────────────────────────────────────

    try:
        validate_non_negative(weight, "weight")
        validate_reps(reps)
        performed_at = (
            validate_date(date, default_tz=local_now.tzinfo) if date is not None else local_now
        )
    except ValidationError as e:
        logger.warning("Rejected session for %s: %s", exercise_id, e)
        views.print_error(str(e))
        raise typer.Exit(1)

    weight_kg = convert_weight(weight, settings.unit, "kg")
    session = WorkoutSession(date=performed_at, weight_kg=weight_kg, reps=reps)

    # ── Save and report ─────────────────────────────────────────────────────

    try:
        history = store.append_session(settings.default_user, exercise_id, session)
    except (UnknownExerciseError, StorageError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    updated = ExerciseWithStatus.build(
        get_exercise(exercise_id),
        compute_status(history, local_now),
        tuple(last_sessions(history, RECENT_SESSIONS_SHOWN)),
    )

    if json_out:
        output = exercise_with_status_to_dict(updated, settings.unit)
        print(json.dumps(output, indent=2, ensure_ascii=False))
        return

    views.print_success(
        f"Logged {updated.name}: {format_weight(weight_kg, settings.unit)} x {reps} "
        f"on {format_date(performed_at.astimezone())}"
    )
    views.print_exercise_status(updated, settings.unit)


@app.command("history")
def show_history(
    exercise_id: Annotated[
        Optional[str],
        typer.Option("--exercise", "-e", help="Only show this exercise ID"),
    ] = None,
    limit: Annotated[
        Optional[int],
        typer.Option("--limit", "-l", help="Limit number of sessions per exercise"),
    ] = None,
    user: UserOption = None,
    data_dir: DataDirOption = None,
    unit: UnitOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Display logged sessions, newest first, for exercises that have any.
    """
    settings = get_settings(data_dir, user, unit)
    store = get_store(settings)

    if limit is not None and limit < 1:
        views.print_error(f"--limit must be at least 1, got {limit}")
        raise typer.Exit(1)

    if exercise_id is not None:
        try:
            validate_exercise_id(exercise_id)
        except UnknownExerciseError as e:
            views.print_error(str(e))
            raise typer.Exit(1)

    try:
        user_data = store.get_user_history(settings.default_user)
    except StorageError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    histories = [
        h for h in user_data.exercises
        if h.history and (exercise_id is None or h.id == exercise_id)
    ]

    if json_out:
        output = [exercise_history_to_dict(h) for h in histories]
        print(json.dumps(output, indent=2, ensure_ascii=False))
        return

    views.print_history(histories, settings.unit, limit)
