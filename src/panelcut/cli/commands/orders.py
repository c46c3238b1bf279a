"""Order commands for the shop back office."""

from typing import Annotated

import typer

from panelcut.application.factory import get_factory
from panelcut.cli.commands.errors import fail
from panelcut.domain.exceptions import PanelcutError
from panelcut.domain.value_objects import OrderStatus
from panelcut.infrastructure import OrderFormatter

orders_app = typer.Typer(
    name="orders",
    help="Show placed orders.",
)


@orders_app.command(name="list")
def list_orders(
    status: Annotated[
        OrderStatus | None,
        typer.Option("--status", help="Only show orders in this status"),
    ] = None,
    limit: Annotated[int, typer.Option("--limit", "-n", min=1, max=100)] = 20,
) -> None:
    """List the most recent orders."""
    factory = get_factory()
    with factory.session() as session:
        page = factory.order_service(session).list_orders(status=status, limit=limit)
        rows = [
            (o.order_number, o.status.value, o.customer_id, o.total_price)
            for o in page.orders
        ]

    if not rows:
        typer.echo("No orders.")
        return
    for number, order_status, customer, total in rows:
        typer.echo(f"{number:<18} {order_status:<14} {customer:<20} {total:>10} EUR")
    typer.echo(f"{len(rows)} of {page.total} orders")


@orders_app.command(name="show")
def show_order(
    identifier: Annotated[str, typer.Argument(help="Order id or number (CMD-...)")],
) -> None:
    """Show one order with its parts and totals.

    Example:
        panelcut orders show CMD-250114-0042
    """
    factory = get_factory()
    try:
        with factory.session() as session:
            orders = factory.order_service(session)
            order = orders.get(identifier)
            report = OrderFormatter().format(order, orders.totals_of(order))
    except PanelcutError as e:
        fail(e)

    typer.echo(report)
