"""Main entry point for the pom CLI."""

import typer

from pom_cli import __version__
from pom_cli.commands import config, history_command, start_command, summary_command
from pom_cli.utils.typer_helpers import SuggestingGroup
from pom_cli.utils.ui.console import get_console

app = typer.Typer(
    name="pom",
    cls=SuggestingGroup,
    help="A terminal Pomodoro timer that keeps a history of completed sessions",
    no_args_is_help=True,
)

console = get_console(highlight=False)

app.command("start")(start_command.start)
app.command("history")(history_command.history)
app.command("summary")(summary_command.summary)
app.add_typer(config.app, name="config", help="Configuration management")


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]pom[/bold] version [cyan]{__version__}[/cyan]")


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
