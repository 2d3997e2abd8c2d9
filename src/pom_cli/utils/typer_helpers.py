"""Typer helper utilities."""

from difflib import get_close_matches

import typer
from typer.core import TyperGroup

from pom_cli.utils.ui.console import get_console

MAX_SUGGESTIONS = 3
SIMILARITY_CUTOFF = 0.6


class SuggestingGroup(TyperGroup):
    """Command group that forgives short prefixes and typos.

    ``pom sum`` runs ``summary`` when the prefix is unambiguous, and
    ``pom histroy`` answers with "Did you mean this? history".
    """

    def get_command(self, ctx, cmd_name):
        command = super().get_command(ctx, cmd_name)
        if command is not None:
            return command
        matches = [name for name in self.list_commands(ctx) if name.startswith(cmd_name)]
        if len(matches) == 1:
            return super().get_command(ctx, matches[0])
        return None

    def resolve_command(self, ctx, args):
        try:
            return super().resolve_command(ctx, args)
        except Exception as e:
            # typer may raise the UsageError of its own bundled click copy
            if not args:
                raise
            attempted = args[0]
            suggestions = get_close_matches(
                attempted,
                self.list_commands(ctx),
                n=MAX_SUGGESTIONS,
                cutoff=SIMILARITY_CUTOFF,
            )
            if not suggestions:
                raise

            console = get_console()
            console.print(
                f'[red]Error:[/red] unknown command "{attempted}" for "{ctx.info_name}"\n'
            )
            heading = (
                "Did you mean this?" if len(suggestions) == 1 else "Did you mean one of these?"
            )
            console.print(f"[yellow]{heading}[/yellow]")
            for suggestion in suggestions:
                console.print(f"        {suggestion}")
            raise typer.Exit(1) from e
