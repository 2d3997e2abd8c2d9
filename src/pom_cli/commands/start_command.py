"""Start command - run the interactive Pomodoro timer."""

import json
from datetime import datetime
from pathlib import Path

import typer

from pom_cli.models.focus.controller import TimerController
from pom_cli.models.focus.phases import PomodoroConfig
from pom_cli.models.focus.ui import TimerDisplay, show_summary
from pom_cli.services.dispatcher import IntentDispatcher
from pom_cli.services.notification_service import Notifier
from pom_cli.utils.durations import parse_positive_duration
from pom_cli.utils.exit_codes import ERROR_INVALID_ARGS
from pom_cli.utils.ui.console import get_console

from .decorators import AppError, command_wrapper
from .helpers import load_config, open_store

app = typer.Typer(help="Start a Pomodoro timer")
console = get_console()


def build_pomodoro_config(
    name: str,
    session: str,
    sbreak: str,
    lbreak: str,
    nbreak: int,
) -> PomodoroConfig:
    """Validate the timer flags before any timer state exists."""
    try:
        return PomodoroConfig(
            focus_duration=parse_positive_duration(session, "session duration"),
            short_break=parse_positive_duration(sbreak, "short break duration"),
            long_break=parse_positive_duration(lbreak, "long break duration"),
            sessions_before_long_break=nbreak,
            session_name=name,
        )
    except ValueError as e:
        raise AppError(str(e), ERROR_INVALID_ARGS) from e


@app.command()
@command_wrapper
def start(
    name: str = typer.Option("", "--name", "-n", help="Optional session label"),
    session: str | None = typer.Option(
        None, "--session", "-s", help="Focus duration, e.g. 25m or 1h30m"
    ),
    sbreak: str | None = typer.Option(None, "--sbreak", help="Short break duration"),
    lbreak: str | None = typer.Option(None, "--lbreak", help="Long break duration"),
    nbreak: int | None = typer.Option(
        None, "--nbreak", help="Focus sessions before a long break"
    ),
    json_output: bool = typer.Option(False, "--json", help="Print the summary as JSON"),
    no_notify: bool = typer.Option(
        False, "--no-notify", help="Disable desktop notifications"
    ),
    db: Path | None = typer.Option(None, "--db", help="History database path"),
) -> None:
    """Start a Pomodoro timer.

    Keys: space/p pause, r rename, ? help, q quit.
    """
    config = load_config()
    timer = config.timer
    pomodoro_config = build_pomodoro_config(
        name=name,
        session=session or timer.session,
        sbreak=sbreak or timer.short_break,
        lbreak=lbreak or timer.long_break,
        nbreak=nbreak if nbreak is not None else timer.sessions_before_long_break,
    )

    store = open_store(db, config)
    controller = TimerController(
        pomodoro_config,
        now=datetime.now().astimezone(),
        notification_title=config.notifications.title,
    )
    display = TimerDisplay(console)

    with IntentDispatcher(
        store,
        Notifier(),
        notify_enabled=config.notifications.enabled and not no_notify,
    ) as dispatcher:
        summary = display.run(controller, dispatcher)

    if json_output or config.output.format == "json":
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        show_summary(summary, console)
