"""Exercise commands: list (ranked status) and catalog."""

import json
import logging
from datetime import datetime

import typer

from ...core.status import exercises_with_status
from ...io.history_store import StorageError
from ...io.serializers import exercise_with_status_to_dict
from .. import views
from ..app import DataDirOption, JsonOption, UnitOption, UserOption, app, get_settings, get_store

logger = logging.getLogger(__name__)


@app.command("list")
def list_exercises(
    user: UserOption = None,
    data_dir: DataDirOption = None,
    unit: UnitOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Show all exercises in recommended order.

    Grouped push → pull → legs; within a group, exercises done less often
    in the last 14 days come first, then those rested longest.
    """
    settings = get_settings(data_dir, user, unit)
    store = get_store(settings)

    try:
        user_data = store.get_user_history(settings.default_user)
    except StorageError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    ranked = exercises_with_status(user_data, datetime.now().astimezone())
    logger.debug("Ranked %d exercises for %r", len(ranked), settings.default_user)

    if json_out:
        output = [exercise_with_status_to_dict(e, settings.unit) for e in ranked]
        print(json.dumps(output, indent=2, ensure_ascii=False))
        return

    views.print_exercise_list(ranked, settings.unit)


@app.command("catalog")
def catalog() -> None:
    """
    List every exercise id with its category.
    """
    views.print_catalog()
