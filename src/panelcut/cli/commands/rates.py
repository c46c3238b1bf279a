"""Price list commands: list, change and audit rates."""

from decimal import Decimal, InvalidOperation
from typing import Annotated

import typer

from panelcut.application.factory import get_factory
from panelcut.cli.commands.errors import fail
from panelcut.domain.exceptions import PanelcutError
from panelcut.domain.value_objects import RateCategory
from panelcut.infrastructure import RateFormatter

rates_app = typer.Typer(
    name="rates",
    help="Inspect and change the price list.",
)


@rates_app.command(name="list")
def list_rates(
    category: Annotated[
        RateCategory | None,
        typer.Option("--category", "-c", help="Only show one category"),
    ] = None,
) -> None:
    """List the current price list grouped by category.

    Example:
        panelcut rates list --category CHANT
    """
    factory = get_factory()
    with factory.session() as session:
        price_list = factory.price_list_service(session)
        if category is None:
            grouped = price_list.get_all()
        else:
            entries = price_list.by_category(category)
            grouped = {category: entries} if entries else {}
    typer.echo(RateFormatter().format_rates(grouped))


@rates_app.command(name="set")
def set_rate(
    key: Annotated[str, typer.Argument(help="Rate key, e.g. COUPE_PANNEAU")],
    value: Annotated[str, typer.Argument(help="New value")],
    changed_by: Annotated[
        str,
        typer.Option("--by", help="Operator recorded in the rate history"),
    ] = "cli",
    reason: Annotated[
        str | None,
        typer.Option("--reason", "-r", help="Reason recorded in the rate history"),
    ] = None,
) -> None:
    """Change one rate; the change is recorded in the history.

    Example:
        panelcut rates set COUPE_PANNEAU 1.75 --by alice --reason "2025 prices"
    """
    try:
        amount = Decimal(value)
    except InvalidOperation:
        typer.echo(f"Error: '{value}' is not a number", err=True)
        raise typer.Exit(code=1)

    factory = get_factory()
    try:
        with factory.session() as session:
            entry = factory.price_list_service(session).update_rate(
                key, amount, changed_by=changed_by, reason=reason
            )
    except PanelcutError as e:
        fail(e)

    typer.echo(f"{entry.key} = {entry.value} {entry.unit}".rstrip())


@rates_app.command(name="history")
def rate_history(
    key: Annotated[
        str | None,
        typer.Option("--key", "-k", help="Only show changes of one rate"),
    ] = None,
    limit: Annotated[
        int,
        typer.Option("--limit", "-n", min=1, help="Maximum number of changes"),
    ] = 20,
) -> None:
    """Show the most recent rate changes.

    Example:
        panelcut rates history --key COUPE_PANNEAU
    """
    factory = get_factory()
    with factory.session() as session:
        changes = factory.price_list_service(session).history(key, limit)
    typer.echo(RateFormatter().format_history(changes))
