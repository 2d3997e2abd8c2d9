"""History command - list completed intervals."""

import json
from pathlib import Path

import typer
from rich.table import Table

from pom_cli.models.focus.history import StorageError
from pom_cli.utils.durations import format_duration
from pom_cli.utils.exit_codes import ERROR_STORAGE
from pom_cli.utils.ui.console import get_console

from .decorators import AppError, command_wrapper
from .helpers import build_filter, load_config, open_store

app = typer.Typer(help="List completed sessions")
console = get_console()

NO_SESSIONS = "No sessions found matching the given filters."


@app.command()
@command_wrapper
def history(
    name: str | None = typer.Option(None, "--name", help="Filter by session name"),
    from_date: str | None = typer.Option(
        None, "--from", help="Start date (YYYY-MM-DD)"
    ),
    to_date: str | None = typer.Option(None, "--to", help="End date (YYYY-MM-DD)"),
    session_type: str | None = typer.Option(
        None, "--type", help="Filter by type: focus, short-break, long-break"
    ),
    limit: int = typer.Option(0, "--limit", help="Max number of sessions to show"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    db: Path | None = typer.Option(None, "--db", help="History database path"),
) -> None:
    """List completed sessions, newest first."""
    config = load_config()
    query = build_filter(name, from_date, to_date, session_type, limit)
    store = open_store(db, config)

    try:
        sessions = store.list_sessions(query)
    except StorageError as e:
        raise AppError(str(e), ERROR_STORAGE) from e

    if json_output or config.output.format == "json":
        print(json.dumps([s.to_dict() for s in sessions], indent=2))
        return

    if not sessions:
        console.print(NO_SESSIONS)
        return

    table = Table(title="📋 Session History", header_style="bold magenta")
    table.add_column("Date")
    table.add_column("Name")
    table.add_column("Type")
    table.add_column("Duration", justify="right")

    for s in sessions:
        table.add_row(
            s.started_at.astimezone().strftime("%Y-%m-%d %H:%M"),
            s.name,
            s.phase.label,
            format_duration(s.completed_at - s.started_at),
        )

    console.print(table)
