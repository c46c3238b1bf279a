"""Typer CLI for panelcut."""

from pathlib import Path
from typing import Annotated

import typer

from panelcut.application.config import (
    ConfigError,
    configure_logging,
    load_seed_data,
    load_settings,
    load_settings_from_dict,
)
from panelcut.application.factory import ServiceFactory, get_factory, set_factory
from panelcut.cli.commands import orders_app, quote_command, rates_app, validate_command
from panelcut.cli.commands.errors import fail
from panelcut.infrastructure.db import seed_database

app = typer.Typer(
    name="panelcut",
    help="Quote, validate and order cut-to-size panels.",
)

app.command(name="quote")(quote_command)
app.command(name="validate")(validate_command)
app.add_typer(rates_app, name="rates")
app.add_typer(orders_app, name="orders")


@app.callback()
def main(
    config_file: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to a JSON settings file"),
    ] = None,
    database_url: Annotated[
        str | None,
        typer.Option("--database-url", help="SQLAlchemy database URL (overrides settings)"),
    ] = None,
    log_level: Annotated[
        str | None,
        typer.Option("--log-level", help="DEBUG, INFO, WARNING or ERROR"),
    ] = None,
) -> None:
    """Configure settings shared by every command.

    Settings come from the built-in defaults, then the --config file, then
    PANELCUT_* environment variables, then the options given here.
    """
    overrides = {}
    if database_url:
        overrides["database_url"] = database_url
    if log_level:
        overrides["log_level"] = log_level
    try:
        settings = load_settings(config_file)
        if overrides:
            settings = load_settings_from_dict({**settings.model_dump(), **overrides})
    except ConfigError as e:
        fail(e)

    configure_logging(settings.log_level)
    set_factory(ServiceFactory(settings))


@app.command()
def seed(
    seed_file: Annotated[
        Path | None,
        typer.Option("--file", "-f", help="Seed file (default: packaged price list and catalog)"),
    ] = None,
) -> None:
    """Load the default price list and sample catalog.

    Existing entries are kept, so seeding twice is harmless.
    """
    try:
        data = load_seed_data(seed_file)
    except ConfigError as e:
        fail(e)

    with get_factory().session() as session:
        report = seed_database(session, data)

    typer.echo(
        f"Seeded {report.rates_added} rates, {report.panels_added} panels, "
        f"{report.edges_added} edges, {report.links_added} panel/edge links."
    )


@app.command()
def serve(
    host: Annotated[str, typer.Option("--host", help="Interface to bind")] = "127.0.0.1",
    port: Annotated[int, typer.Option("--port", "-p", help="Port to listen on")] = 8000,
) -> None:
    """Run the REST API with uvicorn.

    The API uses the settings given by the global options.
    """
    import uvicorn

    from panelcut.web import app as api

    factory = get_factory()
    uvicorn.run(
        api,
        host=host,
        port=port,
        log_level=factory.settings.log_level.lower(),
    )


if __name__ == "__main__":
    app()
