"""
CLI view formatters using Rich for pretty console output.

Handles table formatting and display of exercise status and history.
"""

from itertools import groupby

from rich.console import Console
from rich.table import Table

from ..core.exercises.registry import CATEGORY_ORDER, EXERCISE_CATALOG, category_display_name
from ..core.models import ExerciseHistory, ExerciseWithStatus, WorkoutSession
from ..core.units import convert_weight, format_date, format_weight, last_sessions

console = Console()


def _fmt_session(session: WorkoutSession, unit: str) -> str:
    """Compact one-line session, e.g. "Mon 15/01 60 kg x 10"."""
    local = session.date.astimezone()
    return f"{format_date(local)} {format_weight(session.weight_kg, unit)} x {session.reps}"


def _fmt_eligible(eligible: bool) -> str:
    return "[green]✓[/green]" if eligible else "[red]✗ rest[/red]"


def format_status_table(
    title: str, exercises: list[ExerciseWithStatus], unit: str = "kg"
) -> Table:
    """
    Create a Rich table for one category of ranked exercises.

    Args:
        title: Table title (category heading)
        exercises: Exercises of that category, already ranked
        unit: Display unit for weights

    Returns:
        Rich Table object
    """
    table = Table(title=title, title_justify="left")

    table.add_column("#", justify="right", style="dim", width=3)
    table.add_column("Exercise", style="bold")
    table.add_column("ID", style="dim")
    table.add_column("Ready", justify="center")
    table.add_column("Last", style="cyan")
    table.add_column("14d", justify="right")
    table.add_column("Recent")

    for i, ex in enumerate(exercises, 1):
        last = format_date(ex.last_performed.astimezone()) if ex.last_performed else "never"
        recent = "\n".join(_fmt_session(s, unit) for s in ex.recent_sessions) or "-"
        table.add_row(
            str(i),
            ex.name,
            ex.id,
            _fmt_eligible(ex.eligible),
            last,
            str(ex.frequency_14d),
            recent,
        )

    return table


def print_exercise_list(exercises: list[ExerciseWithStatus], unit: str = "kg") -> None:
    """
    Print ranked exercises grouped by category.

    Args:
        exercises: Output of exercises_with_status (ranked)
        unit: Display unit for weights
    """
    for category, group in groupby(exercises, key=lambda e: e.category):
        console.print(format_status_table(category_display_name(category), list(group), unit))
        console.print()

    ready = [e for e in exercises if e.eligible]
    if ready:
        console.print(f"[bold]Next up:[/bold] {', '.join(e.name for e in _first_per_category(ready))}")
    else:
        console.print("[yellow]Everything needs rest today.[/yellow]")


def _first_per_category(exercises: list[ExerciseWithStatus]) -> list[ExerciseWithStatus]:
    """Return the top-ranked exercise of each category, in category order."""
    firsts: dict[str, ExerciseWithStatus] = {}
    for ex in exercises:
        firsts.setdefault(ex.category, ex)
    return [firsts[c] for c in CATEGORY_ORDER if c in firsts]


def print_exercise_status(exercise: ExerciseWithStatus, unit: str = "kg") -> None:
    """Print the status of a single exercise, e.g. after logging it."""
    last = format_date(exercise.last_performed.astimezone()) if exercise.last_performed else "never"
    if exercise.recent_sessions:
        latest = exercise.recent_sessions[0]
        last += f" ({format_weight(latest.weight_kg, unit)} x {latest.reps})"
    console.print(
        f"{exercise.name}: last {last}, "
        f"{exercise.frequency_14d}× in 14 days, "
        f"{'ready' if exercise.eligible else 'needs rest'}"
    )


def format_history_table(history: ExerciseHistory, unit: str = "kg", limit: int | None = None) -> Table:
    """
    Create a Rich table of one exercise's sessions, newest first.

    Args:
        history: Exercise history
        unit: Display unit for weights
        limit: Maximum number of sessions to show

    Returns:
        Rich Table object
    """
    sessions = last_sessions(history, limit if limit is not None else len(history.history))

    table = Table(title=f"{history.name} ({category_display_name(history.category)})", title_justify="left")
    table.add_column("Date", style="cyan")
    table.add_column("Time", style="dim")
    table.add_column(f"Weight ({unit})", justify="right")
    table.add_column("Reps", justify="right")

    for s in sessions:
        local = s.date.astimezone()
        table.add_row(
            format_date(local),
            local.strftime("%H:%M"),
            f"{convert_weight(s.weight_kg, 'kg', unit):g}",
            str(s.reps),
        )

    return table


def print_history(histories: list[ExerciseHistory], unit: str = "kg", limit: int | None = None) -> None:
    """
    Print history tables for exercises that have at least one session.

    Args:
        histories: Exercise histories (empty ones are skipped)
        unit: Display unit for weights
        limit: Maximum sessions per exercise
    """
    non_empty = [h for h in histories if h.history]
    if not non_empty:
        console.print("[yellow]No sessions recorded yet.[/yellow]")
        return

    for history in non_empty:
        console.print(format_history_table(history, unit, limit))
        console.print()


def print_catalog() -> None:
    """Print the exercise catalog."""
    table = Table(title="Exercises")
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="bold")
    table.add_column("Category", style="magenta")

    for ex in EXERCISE_CATALOG:
        table.add_row(ex.id, ex.name, f"{ex.category} ({category_display_name(ex.category)})")

    console.print(table)


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]{message}[/green]")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]Error: {message}[/red]")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]{message}[/blue]")
