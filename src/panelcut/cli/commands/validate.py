"""Validate command for checking part configuration files.

This module provides the `validate` command that checks a JSON part
configuration for blocking errors and non-blocking warnings, either for
the whole part or for a single configurator step.
"""

from pathlib import Path
from typing import Annotated

import typer

from panelcut.application.config import ConfigError, load_part
from panelcut.application.factory import get_factory
from panelcut.cli.commands.errors import display_load_error, fail
from panelcut.domain.exceptions import PanelcutError
from panelcut.domain.services import WizardStep
from panelcut.infrastructure import ValidationFormatter


def validate_command(
    part_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON part configuration to validate"),
    ],
    step: Annotated[
        int | None,
        typer.Option("--step", "-s", min=1, max=8, help="Validate one configurator step (1-8)"),
    ] = None,
) -> None:
    """Validate a part configuration file.

    Exit codes:
        0 - Part is valid with no warnings
        1 - Part has errors (cannot be ordered)
        2 - Part is valid but has warnings

    Example:
        panelcut validate side-panel.json --step 3
    """
    typer.echo(f"Validating {part_file}...")
    typer.echo()

    try:
        part = load_part(part_file).to_domain()
    except ConfigError as e:
        display_load_error(e)
        typer.echo()
        typer.echo("Validation failed.", err=True)
        raise typer.Exit(code=1)

    factory = get_factory()
    try:
        with factory.session() as session:
            result = factory.quote_service(session).validate(
                part, WizardStep(step) if step is not None else None
            )
    except PanelcutError as e:
        fail(e)

    typer.echo(ValidationFormatter().format(result))
    raise typer.Exit(code=result.exit_code)
