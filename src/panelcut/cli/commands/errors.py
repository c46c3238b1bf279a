"""Shared error display for CLI commands."""

from typing import NoReturn

import typer

from panelcut.application.config import ConfigError
from panelcut.domain.exceptions import PanelcutError


def describe_load_error(error: ConfigError) -> list[str]:
    """Readable lines for a part, settings or seed file that failed to load."""
    if error.error_type == "file_not_found":
        return [f"File not found: {error.path}"]
    if error.error_type == "json_parse":
        return ["Invalid JSON syntax"] + [
            f"  Line {d.get('line', '?')}, Column {d.get('column', '?')}: "
            f"{d.get('message', 'unknown error')}"
            for d in error.details
        ]
    if error.error_type == "validation" and error.details:
        return [
            f"{d.get('path') or '(root)'}: {d.get('message', 'invalid value')}"
            for d in error.details
        ]
    return [error.message]


def display_load_error(error: ConfigError) -> None:
    typer.echo("Errors:", err=True)
    for line in describe_load_error(error):
        typer.echo(f"  {line}", err=True)


def fail(error: ConfigError | PanelcutError) -> NoReturn:
    """Print ``error`` to stderr and exit with code 1."""
    if isinstance(error, ConfigError):
        display_load_error(error)
    else:
        typer.echo(f"Error: {error}", err=True)
    raise typer.Exit(code=1)
