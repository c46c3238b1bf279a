"""Collaborator protocols consumed by the application services.

Persistence implementations depend on these protocols so that services can
be exercised against in-memory fakes as easily as against the database.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from panelcut.domain.rate_table import RateTable
    from panelcut.domain.value_objects import EdgeInfo, PanelInfo


@runtime_checkable
class CatalogLookupProtocol(Protocol):
    """Read-only access to panel and edge banding reference data.

    Example:
        ```python
        class InMemoryCatalog:
            def get_panel(self, panel_id: str) -> PanelInfo | None:
                return self.panels.get(panel_id)

            def get_edges(self, edge_ids: list[str]) -> dict[str, EdgeInfo]:
                return {i: self.edges[i] for i in edge_ids if i in self.edges}
        ```
    """

    def get_panel(self, panel_id: str) -> "PanelInfo | None":
        """Pricing data for an active panel, or None when unknown."""
        ...

    def get_edges(self, edge_ids: list[str]) -> "dict[str, EdgeInfo]":
        """Pricing data for the known edges among ``edge_ids``.

        Unknown ids are simply absent from the returned mapping.
        """
        ...


@runtime_checkable
class RateSourceProtocol(Protocol):
    """Source of the current rate table."""

    def get_rates(self) -> "RateTable":
        """Snapshot of the current rates.

        The snapshot is not affected by later price list updates.
        """
        ...
