"""Plain-text report formatters for the CLI."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from panelcut.domain.entities import PartConfiguration
from panelcut.domain.services import ValidationResult
from panelcut.domain.value_objects import OrderTotals, PriceBreakdown

if TYPE_CHECKING:
    from panelcut.application.services import RateChange, RateEntry
    from panelcut.infrastructure.db.models import OrderRecord

BREAKDOWN_LABELS = {
    "panel": "Panel",
    "cutting": "Cutting",
    "edges": "Edge banding",
    "drilling": "Drilling",
    "hardware": "Hardware",
    "machining": "Machining",
    "finish": "Finish",
}


def _money(amount: object) -> str:
    return f"{amount} EUR"


class QuoteFormatter:
    """Formats a part quote as an itemized table."""

    def format(self, part: PartConfiguration, breakdown: PriceBreakdown) -> str:
        title = part.reference or "(unnamed part)"
        lines = [
            f"QUOTE: {title}",
            "=" * 50,
            f"Panel:      {part.panel_id or '-'}",
            f"Size:       {part.length_mm:g} x {part.width_mm:g} mm",
            f"Quantity:   {part.quantity}",
            "-" * 50,
        ]
        if not part.has_panel:
            lines.append("No panel selected: nothing to price yet.")
        elif not part.has_dimensions:
            lines.append("Size incomplete: nothing to price yet.")
        for name, amount in breakdown.components().items():
            if amount:
                lines.append(f"{BREAKDOWN_LABELS[name]:<20} {_money(amount):>28}")
        lines.append("-" * 50)
        lines.append(f"{'TOTAL (excl. VAT)':<20} {_money(breakdown.total):>28}")
        return "\n".join(lines)


class ValidationFormatter:
    """Formats validation results with errors before warnings."""

    def format(self, result: ValidationResult) -> str:
        if result.is_valid and not result.has_warnings:
            return "Part configuration is valid."

        lines: list[str] = []
        for error in result.errors:
            lines.append(f"ERROR: {error.path}: {error.message}")
        for warning in result.warnings:
            lines.append(f"WARNING: {warning.path}: {warning.message}")
            if warning.suggestion:
                lines.append(f"  Suggestion: {warning.suggestion}")
        return "\n".join(lines)


class RateFormatter:
    """Formats the price list and its history."""

    def format_rates(self, grouped: dict[object, list["RateEntry"]]) -> str:
        if not grouped:
            return "Price list is empty."
        lines = ["PRICE LIST", "=" * 70]
        for category, entries in grouped.items():
            lines.append(f"[{getattr(category, 'value', category)}]")
            for entry in entries:
                lines.append(
                    f"  {entry.key:<22} {str(entry.value):>10} {entry.unit:<10} "
                    f"{entry.description}"
                )
        return "\n".join(lines)

    def format_history(self, changes: Iterable["RateChange"]) -> str:
        changes = list(changes)
        if not changes:
            return "No rate changes recorded."
        lines = [
            "RATE HISTORY",
            "=" * 80,
            f"{'When':<20} {'Key':<22} {'Old':>10} {'New':>10}  {'By'}",
            "-" * 80,
        ]
        for change in changes:
            old = "-" if change.old_value is None else str(change.old_value)
            when = f"{change.changed_at:%Y-%m-%d %H:%M}" if change.changed_at else ""
            line = (
                f"{when:<20} {change.config_key:<22} {old:>10} "
                f"{str(change.new_value):>10}  {change.changed_by}"
            )
            if change.reason:
                line += f" ({change.reason})"
            lines.append(line)
        return "\n".join(lines)


class OrderFormatter:
    """Formats an order with its part lines and totals."""

    def format(self, order: "OrderRecord", totals: OrderTotals) -> str:
        lines = [
            f"ORDER {order.order_number} [{order.status.value}]",
            "=" * 70,
            f"Customer:  {order.customer_id}",
        ]
        if order.project_name:
            lines.append(f"Project:   {order.project_name}")
        lines.append(f"Delivery:  {order.delivery_option.value}")
        lines.extend(
            [
                "-" * 70,
                f"{'Reference':<20} {'Size (mm)':<16} {'Qty':<6} {'Price':>20}",
                "-" * 70,
            ]
        )
        for part in order.parts:
            size = f"{part.length_mm:g} x {part.width_mm:g}"
            lines.append(
                f"{part.reference:<20} {size:<16} {part.quantity:<6} "
                f"{_money(part.calculated_price):>20}"
            )
        lines.extend(
            [
                "-" * 70,
                f"{'Parts':<44} {_money(totals.parts_subtotal):>24}",
                f"{'Delivery':<44} {_money(totals.delivery_surcharge):>24}",
                f"{'Subtotal':<44} {_money(totals.subtotal):>24}",
                f"{f'VAT {totals.tax_rate_percent:g}%':<44} {_money(totals.tax):>24}",
                f"{'TOTAL':<44} {_money(totals.total):>24}",
            ]
        )
        return "\n".join(lines)
