"""
CLI entry point using Typer.

Provides commands for the workout log:
- list: Ranked exercises with eligibility and 14-day frequency
- log: Log a completed set
- history: Display logged sessions
- catalog: Show exercise ids and categories
- health: Check that the data directory is usable
"""

from typing import Annotated

import typer

from ..io.history_store import StorageError
from ..logging_setup import configure_logging
from . import views
from .app import DataDirOption, app, get_settings, get_store
from .commands import exercises, sessions  # noqa: F401  (registers commands)


@app.callback()
def main_callback(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """
    Strength-training log. Recommends push, pull and leg exercises that
    you have done least often and rested longest.
    """
    configure_logging(verbose)


@app.command("health")
def health(data_dir: DataDirOption = None) -> None:
    """
    Check that the data directory exists and is writable.
    """
    settings = get_settings(data_dir)
    store = get_store(settings)

    try:
        store.ensure_data_dir()
    except StorageError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    probe = settings.data_dir / ".health"
    try:
        probe.write_text("ok", encoding="utf-8")
        probe.unlink()
    except OSError as e:
        views.print_error(f"Data directory {settings.data_dir} is not writable: {e}")
        raise typer.Exit(1)

    views.console.print("ok")
    views.print_info(f"Data directory: {settings.data_dir}")


if __name__ == "__main__":
    app()
