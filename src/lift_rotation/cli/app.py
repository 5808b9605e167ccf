"""Shared Typer app object, shared option types, and store utility."""

from pathlib import Path
from typing import Annotated, Optional

import typer

from ..io.history_store import HistoryStore
from ..io.serializers import ValidationError
from ..settings import Settings, load_settings
from . import views

UserOption = Annotated[
    Optional[str],
    typer.Option("--user", "-u", help="Identity whose history to use (default: from config)"),
]

DataDirOption = Annotated[
    Optional[Path],
    typer.Option("--data-dir", "-p", help="Directory holding per-user history files"),
]

UnitOption = Annotated[
    Optional[str],
    typer.Option("--unit", help="Weight unit: kg | lbs (default: from config)"),
]

JsonOption = Annotated[
    bool,
    typer.Option("--json", "-j", help="Output as JSON for machine processing"),
]

app = typer.Typer(
    name="lift-rotation",
    help="Strength-training log that recommends which exercises to do next.",
    no_args_is_help=True,
)


def get_settings(
    data_dir: Path | None = None, user: str | None = None, unit: str | None = None
) -> Settings:
    """Resolve settings, exiting with an error message on invalid values."""
    try:
        return load_settings(data_dir=data_dir, user=user, unit=unit)
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)


def get_store(settings: Settings) -> HistoryStore:
    """Get history store for the configured data directory."""
    return HistoryStore(settings.data_dir)
