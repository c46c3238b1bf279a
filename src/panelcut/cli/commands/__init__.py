"""CLI command implementations for the panelcut application.

This package contains subcommands for the panelcut CLI, including:
- quote: Price a part configuration file
- validate: Validate a part configuration file
- rates: Inspect and change the price list
- orders: Show placed orders
"""

from panelcut.cli.commands.orders import orders_app
from panelcut.cli.commands.quote import quote_command
from panelcut.cli.commands.rates import rates_app
from panelcut.cli.commands.validate import validate_command

__all__ = ["orders_app", "quote_command", "rates_app", "validate_command"]
