"""Catalog administration: panels, edge bandings and their compatibility."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from panelcut.application.config.schema import EdgeDefinition, PanelDefinition
from panelcut.domain.exceptions import (
    DuplicateReferenceError,
    EdgeNotFoundError,
    PanelNotFoundError,
)
from panelcut.domain.value_objects import EdgeInfo, PanelInfo, fits_places, to_decimal

if TYPE_CHECKING:
    from panelcut.infrastructure.db.models import EdgeRecord, PanelRecord
    from panelcut.infrastructure.db.repositories import SqlCatalogRepository

logger = logging.getLogger(__name__)

PANEL_UPDATABLE_FIELDS = frozenset(
    {
        "name",
        "supplier",
        "material",
        "thickness_mm",
        "length_mm",
        "width_mm",
        "price_per_m2",
        "grain_direction",
        "color_code",
        "is_active",
    }
)
EDGE_UPDATABLE_FIELDS = frozenset(
    {
        "name",
        "material",
        "thickness_mm",
        "width_mm",
        "price_per_meter",
        "color_code",
        "is_active",
    }
)
PRICE_FIELDS = ("price_per_m2", "price_per_meter")


@dataclass(frozen=True)
class CompatibleEdge:
    edge: "EdgeRecord"
    is_default: bool


def _check_fields(changes: dict[str, Any], allowed: frozenset[str]) -> None:
    unknown = sorted(set(changes) - allowed)
    if unknown:
        raise ValueError(f"Fields cannot be updated: {', '.join(unknown)}")


def _check_prices(values: dict[str, Any]) -> None:
    """Catalog prices are stored to the cent; finer values are refused, not rounded."""
    for name in PRICE_FIELDS:
        value = values.get(name)
        if value is not None and not fits_places(to_decimal(value), 2):
            raise ValueError(f"{name} must have at most 2 decimals, got {value}")


class CatalogService:
    """Panels and edges are only ever deactivated, never deleted.

    Historical orders keep pointing at the records they were priced with.
    """

    def __init__(self, repository: "SqlCatalogRepository") -> None:
        self.repository = repository

    # Lookups used for pricing

    def get_panel_info(self, panel_id: str) -> PanelInfo | None:
        return self.repository.get_panel(panel_id)

    def get_edge_infos(self, edge_ids: list[str]) -> dict[str, EdgeInfo]:
        return self.repository.get_edges(edge_ids)

    # Panels

    def get_panel(self, identifier: str) -> "PanelRecord":
        record = self.repository.find_panel(identifier)
        if record is None:
            raise PanelNotFoundError(identifier)
        return record

    def list_panels(
        self,
        material: str | None = None,
        thickness_mm: float | None = None,
        search: str | None = None,
        include_inactive: bool = False,
    ) -> list["PanelRecord"]:
        return self.repository.list_panels(
            material=material,
            thickness_mm=thickness_mm,
            search=search,
            include_inactive=include_inactive,
        )

    def create_panel(self, definition: PanelDefinition) -> "PanelRecord":
        """Add a panel, linking its default edge when one is named.

        Raises:
            DuplicateReferenceError: If the reference is already used.
            EdgeNotFoundError: If the default edge does not exist.
        """
        from panelcut.infrastructure.db.models import PanelRecord

        if self.repository.find_panel(definition.reference) is not None:
            raise DuplicateReferenceError(definition.reference, scope="catalog")
        _check_prices(definition.model_dump())
        record = self.repository.add_panel(
            PanelRecord(**definition.model_dump(exclude={"default_edge"}))
        )
        if definition.default_edge:
            self.link_edge(record.id, definition.default_edge, is_default=True)
        logger.info(f"Panel {record.reference} created")
        return record

    def update_panel(self, identifier: str, **changes: Any) -> "PanelRecord":
        _check_fields(changes, PANEL_UPDATABLE_FIELDS)
        _check_prices(changes)
        record = self.get_panel(identifier)
        for name, value in changes.items():
            setattr(record, name, value)
        self.repository.session.flush()
        logger.info(f"Panel {record.reference} updated: {', '.join(sorted(changes))}")
        return record

    def deactivate_panel(self, identifier: str) -> "PanelRecord":
        record = self.get_panel(identifier)
        record.is_active = False
        self.repository.session.flush()
        logger.info(f"Panel {record.reference} deactivated")
        return record

    # Edges

    def get_edge(self, identifier: str) -> "EdgeRecord":
        record = self.repository.find_edge(identifier)
        if record is None:
            raise EdgeNotFoundError(identifier)
        return record

    def list_edges(
        self,
        material: str | None = None,
        search: str | None = None,
        include_inactive: bool = False,
    ) -> list["EdgeRecord"]:
        return self.repository.list_edges(
            material=material, search=search, include_inactive=include_inactive
        )

    def create_edge(self, definition: EdgeDefinition) -> "EdgeRecord":
        from panelcut.infrastructure.db.models import EdgeRecord

        if self.repository.find_edge(definition.reference) is not None:
            raise DuplicateReferenceError(definition.reference, scope="catalog")
        _check_prices(definition.model_dump())
        record = self.repository.add_edge(EdgeRecord(**definition.model_dump()))
        logger.info(f"Edge {record.reference} created")
        return record

    def update_edge(self, identifier: str, **changes: Any) -> "EdgeRecord":
        _check_fields(changes, EDGE_UPDATABLE_FIELDS)
        _check_prices(changes)
        record = self.get_edge(identifier)
        for name, value in changes.items():
            setattr(record, name, value)
        self.repository.session.flush()
        logger.info(f"Edge {record.reference} updated: {', '.join(sorted(changes))}")
        return record

    def deactivate_edge(self, identifier: str) -> "EdgeRecord":
        record = self.get_edge(identifier)
        record.is_active = False
        self.repository.session.flush()
        logger.info(f"Edge {record.reference} deactivated")
        return record

    # Compatibility

    def link_edge(
        self, panel_identifier: str, edge_identifier: str, is_default: bool = False
    ) -> CompatibleEdge:
        """Mark an edge as compatible with a panel.

        A panel has at most one default edge: making an edge the default
        clears the flag on the previous default.
        """
        from panelcut.infrastructure.db.models import PanelEdgeLink

        panel = self.get_panel(panel_identifier)
        edge = self.get_edge(edge_identifier)

        if is_default:
            for link in self.repository.links_for_panel(panel.id):
                if link.is_default and link.edge_id != edge.id:
                    logger.warning(
                        f"Default edge of panel {panel.reference} changes from "
                        f"{link.edge.reference} to {edge.reference}"
                    )
                    link.is_default = False

        link = self.repository.find_link(panel.id, edge.id)
        if link is None:
            link = self.repository.add_link(
                PanelEdgeLink(panel_id=panel.id, edge_id=edge.id, is_default=is_default)
            )
        elif is_default:
            link.is_default = True
        self.repository.session.flush()
        return CompatibleEdge(edge=edge, is_default=link.is_default)

    def compatible_edges(self, panel_identifier: str) -> list[CompatibleEdge]:
        """Active edges linked to a panel, the default one first."""
        panel = self.get_panel(panel_identifier)
        edges = [
            CompatibleEdge(edge=link.edge, is_default=link.is_default)
            for link in self.repository.links_for_panel(panel.id)
            if link.edge.is_active
        ]
        return sorted(edges, key=lambda c: (not c.is_default, c.edge.name))

    def default_edge(self, panel_identifier: str) -> "EdgeRecord | None":
        for candidate in self.compatible_edges(panel_identifier):
            if candidate.is_default:
                return candidate.edge
        return None
