"""Pricing of a part against the catalog and the current price list."""

from __future__ import annotations

import logging

from panelcut.contracts.protocols import CatalogLookupProtocol, RateSourceProtocol
from panelcut.domain.entities import PartConfiguration
from panelcut.domain.exceptions import EdgeNotFoundError, PanelNotFoundError
from panelcut.domain.rate_table import RateTable
from panelcut.domain.services import PartValidator, PricingEngine, ValidationResult, WizardStep
from panelcut.domain.value_objects import EdgeInfo, PanelInfo, PriceBreakdown

logger = logging.getLogger(__name__)


class QuoteService:
    """Resolves catalog data for a part and runs the pricing engine.

    The engine itself never looks anything up; this service is where a
    dangling panel or edge reference turns into a not-found error instead
    of a price.
    """

    def __init__(
        self,
        catalog: CatalogLookupProtocol,
        rates: RateSourceProtocol,
        engine: PricingEngine | None = None,
        validator: PartValidator | None = None,
    ) -> None:
        self.catalog = catalog
        self.rates = rates
        self.engine = engine or PricingEngine()
        self.validator = validator or PartValidator()

    def resolve_panel(self, part: PartConfiguration) -> PanelInfo | None:
        """Panel data for the part, None while no panel is selected.

        Raises:
            PanelNotFoundError: If the selected panel is unknown or inactive.
        """
        if not part.panel_id:
            return None
        panel = self.catalog.get_panel(part.panel_id)
        if panel is None:
            raise PanelNotFoundError(part.panel_id)
        return panel

    def resolve_edges(self, part: PartConfiguration) -> dict[str, EdgeInfo]:
        """Edge data for every selected edge.

        Raises:
            EdgeNotFoundError: If a selected edge is unknown or inactive.
        """
        edge_ids = part.selected_edge_ids()
        if not edge_ids:
            return {}
        edges = self.catalog.get_edges(edge_ids)
        for edge_id in edge_ids:
            if edge_id not in edges:
                raise EdgeNotFoundError(edge_id)
        return edges

    def quote(
        self, part: PartConfiguration, rates: RateTable | None = None
    ) -> PriceBreakdown:
        """Price one part line.

        Args:
            part: Part configuration, possibly incomplete.
            rates: Rate snapshot to use. A fresh snapshot is taken when
                omitted; callers pricing several parts together pass one
                snapshot so they all see the same prices.

        Returns:
            The breakdown, all zeros until a panel and a size are set.
        """
        panel = self.resolve_panel(part)
        if panel is None:
            return PriceBreakdown.zero()
        edges = self.resolve_edges(part)
        snapshot = rates if rates is not None else self.rates.get_rates()
        return self.engine.compute_breakdown(part, panel, edges, snapshot)

    def validate(
        self, part: PartConfiguration, step: WizardStep | int | None = None
    ) -> ValidationResult:
        """Validate one wizard step, or the whole part for submission.

        An unknown panel is reported as an error rather than raised.
        """
        panel = None
        unknown_panel = False
        if part.panel_id:
            panel = self.catalog.get_panel(part.panel_id)
            unknown_panel = panel is None

        if step is None:
            result = self.validator.validate_for_submission(part, panel)
        else:
            result = self.validator.validate_step(part, step, panel)

        if unknown_panel and (step is None or WizardStep(step) is WizardStep.PANEL):
            result.add_error("panel_id", "Selected panel is not available", part.panel_id)
        return result
