"""Tests for QuoteService against in-memory collaborators."""

from dataclasses import dataclass, field
from decimal import Decimal

import pytest

from panelcut.application.services import QuoteService
from panelcut.contracts.protocols import CatalogLookupProtocol, RateSourceProtocol
from panelcut.domain import PartConfiguration
from panelcut.domain.exceptions import EdgeNotFoundError, PanelNotFoundError
from panelcut.domain.rate_table import RateTable
from panelcut.domain.services import WizardStep
from panelcut.domain.value_objects import EdgeInfo, EdgeSide, PanelInfo


@dataclass
class InMemoryCatalog:
    panels: dict[str, PanelInfo] = field(default_factory=dict)
    edges: dict[str, EdgeInfo] = field(default_factory=dict)

    def get_panel(self, panel_id: str) -> PanelInfo | None:
        return self.panels.get(panel_id)

    def get_edges(self, edge_ids: list[str]) -> dict[str, EdgeInfo]:
        return {i: self.edges[i] for i in edge_ids if i in self.edges}


@dataclass
class CountingRates:
    table: RateTable
    calls: int = 0

    def get_rates(self) -> RateTable:
        self.calls += 1
        return self.table


@pytest.fixture
def catalog(panel_info, edge_infos) -> InMemoryCatalog:
    return InMemoryCatalog(panels={"P1": panel_info}, edges=dict(edge_infos))


@pytest.fixture
def rate_source(rates) -> CountingRates:
    return CountingRates(rates)


@pytest.fixture
def service(catalog, rate_source) -> QuoteService:
    return QuoteService(catalog=catalog, rates=rate_source)


class TestQuote:
    def test_fakes_satisfy_protocols(self, catalog, rate_source) -> None:
        assert isinstance(catalog, CatalogLookupProtocol)
        assert isinstance(rate_source, RateSourceProtocol)

    def test_quote(self, service, base_part) -> None:
        assert service.quote(base_part).total == Decimal("13.00")

    def test_no_panel_prices_zero(self, service, rate_source) -> None:
        assert service.quote(PartConfiguration(reference="A")).is_zero
        assert rate_source.calls == 0

    def test_unknown_panel(self, service, base_part) -> None:
        with pytest.raises(PanelNotFoundError):
            service.quote(base_part.with_updates(panel_id="NOPE"))

    def test_unknown_edge(self, service, base_part) -> None:
        with pytest.raises(EdgeNotFoundError) as exc_info:
            service.quote(base_part.with_edge(EdgeSide.BOTTOM, "NOPE"))
        assert exc_info.value.identifier == "NOPE"

    def test_given_snapshot_is_used(self, service, base_part, rate_source) -> None:
        cheap = RateTable.from_mapping({"COUPE_PANNEAU": "1", "COUPE_MINIMUM": "1"})
        assert service.quote(base_part, cheap).cutting == Decimal("2.00")
        assert rate_source.calls == 0


class TestValidate:
    def test_valid_part(self, service, base_part) -> None:
        assert service.validate(base_part).is_valid

    def test_unknown_panel_is_an_error(self, service, base_part) -> None:
        result = service.validate(base_part.with_updates(panel_id="NOPE"))
        assert [e.path for e in result.errors] == ["panel_id"]

    def test_unknown_panel_ignored_by_other_steps(self, service, base_part) -> None:
        part = base_part.with_updates(panel_id="NOPE")
        assert service.validate(part, WizardStep.DIMENSIONS).is_valid
        assert not service.validate(part, WizardStep.PANEL).is_valid
