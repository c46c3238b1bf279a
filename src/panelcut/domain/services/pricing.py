"""Price breakdown computation for a single part line.

The engine is a pure function of its inputs: a part configuration, the
panel it is cut from, the edge bandings it references and a rate table
snapshot. It performs no lookups of its own and keeps no state, so it can
be called concurrently and re-run at any time with identical results.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Mapping

from ..entities import PartConfiguration
from ..exceptions import UnknownEdgeError
from ..rate_table import RateKey, RateTable
from ..value_objects import (
    ZERO,
    EdgeInfo,
    MachiningType,
    PanelInfo,
    PriceBreakdown,
    round_money,
    to_decimal,
)
from .geometry import edge_run_mm, linear_metres, rebate_run_m, surface_m2

__all__ = ["CUTS_PER_PIECE", "PricingEngine", "compute_breakdown"]

logger = logging.getLogger(__name__)

# One cut per dimension, whatever the actual geometry.
CUTS_PER_PIECE = 2


class PricingEngine:
    """Computes itemized prices for configured parts."""

    def compute_breakdown(
        self,
        part: PartConfiguration,
        panel_info: PanelInfo | None,
        edge_infos: Mapping[str, EdgeInfo],
        rates: RateTable,
    ) -> PriceBreakdown:
        """Price one part line (all ``quantity`` pieces).

        A part without a panel or without both dimensions, or whose panel
        data is unavailable, is not yet priceable and yields an all-zero
        breakdown.

        Args:
            part: The part configuration to price.
            panel_info: Price and characteristics of the selected panel.
            edge_infos: Edge banding data keyed by edge id.
            rates: Rate table snapshot taken when the computation started.

        Returns:
            Breakdown with every component rounded to the cent and a total
            equal to the sum of the rounded components.

        Raises:
            MissingRateError: If a rate needed by the part is not defined.
            UnknownEdgeError: If a selected edge is absent from ``edge_infos``.
        """
        if not part.is_priceable or panel_info is None:
            return PriceBreakdown.zero()

        quantity = part.quantity or 1
        panel = self.panel_cost(part, panel_info, quantity)
        breakdown = PriceBreakdown.from_components(
            panel=panel,
            cutting=self.cutting_cost(quantity, rates),
            edges=self.edge_cost(part, edge_infos, rates, quantity),
            drilling=self.drilling_cost(part, rates, quantity),
            hardware=self.hardware_cost(part, rates, quantity),
            machining=self.machining_cost(part, rates, quantity),
            finish=self.finish_surcharge(part, round_money(panel), rates),
        )
        logger.debug(f"Priced part '{part.reference}' x{quantity}: {breakdown.total}")
        return breakdown

    def panel_cost(
        self, part: PartConfiguration, panel_info: PanelInfo, quantity: int
    ) -> Decimal:
        surface = surface_m2(part.length_mm, part.width_mm)
        return surface * to_decimal(panel_info.price_per_m2) * quantity

    def cutting_cost(self, quantity: int, rates: RateTable) -> Decimal:
        """Cutting labour with the minimum charge applied to the whole line."""
        line_cost = rates.get(RateKey.COUPE_PANNEAU) * CUTS_PER_PIECE * quantity
        return max(line_cost, rates.get(RateKey.COUPE_MINIMUM))

    def edge_cost(
        self,
        part: PartConfiguration,
        edge_infos: Mapping[str, EdgeInfo],
        rates: RateTable,
        quantity: int,
    ) -> Decimal:
        """Banding labour plus banding material for every banded side."""
        total = ZERO
        for selection in part.edges:
            if not selection.is_selected:
                continue
            info = edge_infos.get(selection.edge_id)
            if info is None:
                raise UnknownEdgeError(selection.edge_id)
            run = edge_run_mm(selection.side, part.length_mm, part.width_mm)
            ml = linear_metres(run, quantity)
            labour_key = (
                RateKey.POSE_CHANT_LASER_ML if info.is_laser else RateKey.POSE_CHANT_ML
            )
            total += ml * rates.get(labour_key)
            total += ml * to_decimal(info.price_per_meter)
        return total

    def drilling_cost(
        self, part: PartConfiguration, rates: RateTable, quantity: int
    ) -> Decimal:
        """Per-line setup plus per-hole charge, and per-hole for single points."""
        total = ZERO
        for line in part.drilling_lines:
            total += rates.get(RateKey.PERCAGE_LIGNE_32) * quantity
            total += line.count * rates.get(RateKey.PERCAGE_UNITAIRE) * quantity
        if part.drilling_points:
            total += (
                len(part.drilling_points)
                * rates.get(RateKey.PERCAGE_UNITAIRE)
                * quantity
            )
        return total

    def hardware_cost(
        self, part: PartConfiguration, rates: RateTable, quantity: int
    ) -> Decimal:
        if not part.hardware_drillings:
            return ZERO
        return (
            len(part.hardware_drillings) * rates.get(RateKey.HARDWARE_UNITAIRE) * quantity
        )

    def machining_cost(
        self, part: PartConfiguration, rates: RateTable, quantity: int
    ) -> Decimal:
        total = ZERO
        for op in part.machining_operations:
            if op.type is MachiningType.GROOVE:
                # Grooves are charged over the full part length.
                run = linear_metres(part.length_mm)
                total += run * rates.get(RateKey.RAINURE_ML) * quantity
            elif op.type is MachiningType.REBATE:
                run = rebate_run_m(part.length_mm, part.width_mm, op.rebate_sides)
                total += run * rates.get(RateKey.FEUILLURE_ML) * quantity
            elif op.type is MachiningType.NOTCH:
                total += rates.get(RateKey.ENCOCHE_UNITAIRE) * quantity
            elif op.type is MachiningType.CUTOUT:
                total += rates.get(RateKey.DECOUPE_UNITAIRE) * quantity
        return total

    def finish_surcharge(
        self, part: PartConfiguration, panel_cost: Decimal, rates: RateTable
    ) -> Decimal:
        """Uplift on the rounded panel cost only (not on the whole line)."""
        if part.finish is None or not part.finish.is_paid:
            return ZERO
        multiplier = rates.multiplier_for(part.finish.type)
        return panel_cost * (multiplier - 1)


_default_engine = PricingEngine()


def compute_breakdown(
    part: PartConfiguration,
    panel_info: PanelInfo | None,
    edge_infos: Mapping[str, EdgeInfo],
    rates: RateTable,
) -> PriceBreakdown:
    """Module-level shortcut for ``PricingEngine().compute_breakdown``."""
    return _default_engine.compute_breakdown(part, panel_info, edge_infos, rates)
