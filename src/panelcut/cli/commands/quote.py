"""Quote command: price a part configuration file."""

from pathlib import Path
from typing import Annotated

import typer

from panelcut.application.config import ConfigError, load_part
from panelcut.application.factory import get_factory
from panelcut.cli.commands.errors import fail
from panelcut.domain.exceptions import PanelcutError
from panelcut.infrastructure import QuoteFormatter


def quote_command(
    part_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON part configuration to price"),
    ],
) -> None:
    """Price a part with the current price list.

    The part is priced against the catalog and rates in the configured
    database. Prices exclude VAT.

    Example:
        panelcut quote side-panel.json
    """
    factory = get_factory()
    try:
        part = load_part(part_file).to_domain()
        with factory.session() as session:
            breakdown = factory.quote_service(session).quote(part)
    except (ConfigError, PanelcutError) as e:
        fail(e)

    typer.echo(QuoteFormatter().format(part, breakdown))
