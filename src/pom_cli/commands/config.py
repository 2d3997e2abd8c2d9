"""Configuration management commands."""

import typer
from pydantic import ValidationError

from pom_cli.services.config_service import get_config_service
from pom_cli.utils.exit_codes import ERROR_INVALID_ARGS
from pom_cli.utils.ui.console import get_console
from pom_cli.utils.ui.formatters import format_output, format_success

from .decorators import AppError, command_wrapper
from .helpers import load_config

app = typer.Typer(help="Configuration management commands")
console = get_console(highlight=False)


def _service():
    load_config()
    return get_config_service()


def _validation_message(e: ValidationError) -> str:
    return "; ".join(err["msg"] for err in e.errors())


@app.command("view")
@command_wrapper
def view_config(
    output: str = typer.Option("table", "--output", "-o", help="table, json or yaml"),
) -> None:
    """View current configuration."""
    format_output(load_config().model_dump(), output)


@app.command("get")
@command_wrapper
def get_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., timer.session)"),
) -> None:
    """Get a configuration value."""
    try:
        value = _service().get(key)
    except KeyError as e:
        raise AppError(f"Configuration key '{key}' not found", ERROR_INVALID_ARGS) from e
    if hasattr(value, "model_dump"):
        format_output(value.model_dump(), "table")
    else:
        console.print(value)


@app.command("set")
@command_wrapper
def set_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., timer.session)"),
    value: str = typer.Argument(..., help="Configuration value"),
) -> None:
    """Set a configuration value."""
    service = _service()
    try:
        current = service.get(key)
    except KeyError as e:
        raise AppError(f"Configuration key '{key}' not found", ERROR_INVALID_ARGS) from e

    # String settings keep the raw text, e.g. a numeric notification title.
    parsed_value: str | int | bool = value
    if not isinstance(current, str):
        if value.lower() in ("true", "false"):
            parsed_value = value.lower() == "true"
        elif value.isdigit():
            parsed_value = int(value)

    try:
        service.set(key, parsed_value)
    except ValidationError as e:
        raise AppError(
            f"Invalid value for '{key}': {_validation_message(e)}", ERROR_INVALID_ARGS
        ) from e
    format_success(f"Configuration '{key}' set to '{parsed_value}'")


@app.command("reset")
@command_wrapper
def reset_config(
    key: str | None = typer.Argument(None, help="Configuration key to reset"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Reset configuration to defaults."""
    if not yes:
        msg = "entire configuration" if not key else f"'{key}'"
        if not typer.confirm(f"Are you sure you want to reset {msg}?"):
            console.print("Cancelled")
            raise typer.Exit(0)

    try:
        _service().reset_config(key)
    except KeyError as e:
        raise AppError(f"Configuration key '{key}' not found", ERROR_INVALID_ARGS) from e

    if key:
        format_success(f"Configuration '{key}' reset to default")
    else:
        format_success("Configuration reset to defaults")
