"""Summary command - aggregated session statistics."""

import json
from pathlib import Path

import typer
from rich.table import Table

from pom_cli.models.focus.history import StorageError
from pom_cli.models.focus.phases import Phase
from pom_cli.utils.durations import format_duration
from pom_cli.utils.exit_codes import ERROR_STORAGE
from pom_cli.utils.ui.console import get_console

from .decorators import AppError, command_wrapper
from .helpers import build_filter, load_config, open_store
from .history_command import NO_SESSIONS

app = typer.Typer(help="Show aggregated session statistics")
console = get_console()


@app.command()
@command_wrapper
def summary(
    name: str | None = typer.Option(None, "--name", help="Filter by session name"),
    from_date: str | None = typer.Option(
        None, "--from", help="Start date (YYYY-MM-DD)"
    ),
    to_date: str | None = typer.Option(None, "--to", help="End date (YYYY-MM-DD)"),
    session_type: str | None = typer.Option(
        None, "--type", help="Filter by type: focus, short-break, long-break"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    db: Path | None = typer.Option(None, "--db", help="History database path"),
) -> None:
    """Show aggregated session statistics."""
    config = load_config()
    query = build_filter(name, from_date, to_date, session_type)
    store = open_store(db, config)

    try:
        stats = store.get_statistics(query)
    except StorageError as e:
        raise AppError(str(e), ERROR_STORAGE) from e

    if json_output or config.output.format == "json":
        print(json.dumps(stats.to_dict(), indent=2))
        return

    if stats.total_sessions == 0:
        console.print(NO_SESSIONS)
        return

    table = Table(title="📊 Session Summary", header_style="bold magenta")
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_row("Total Sessions", str(stats.total_sessions))
    table.add_row("Total Time", format_duration(stats.total_seconds))
    table.add_row("Average Duration", format_duration(stats.average_seconds))
    for phase_value, count in stats.by_type.items():
        table.add_row(Phase(phase_value).label, str(count))

    console.print(table)
