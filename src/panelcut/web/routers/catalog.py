"""Panel and edge banding catalog endpoints."""

from fastapi import APIRouter, status

from panelcut.application.config.schema import EdgeDefinition, PanelDefinition
from panelcut.web.dependencies import CatalogServiceDep
from panelcut.web.schemas.requests import (
    EdgeUpdateRequest,
    LinkEdgeRequest,
    PanelUpdateRequest,
)
from panelcut.web.schemas.responses import CompatibleEdgeSchema, EdgeSchema, PanelSchema

router = APIRouter(prefix="/catalog", tags=["catalog"])


# Panels


@router.get("/panels", response_model=list[PanelSchema])
def list_panels(
    catalog: CatalogServiceDep,
    material: str | None = None,
    thickness_mm: float | None = None,
    search: str | None = None,
    include_inactive: bool = False,
) -> list[PanelSchema]:
    panels = catalog.list_panels(
        material=material,
        thickness_mm=thickness_mm,
        search=search,
        include_inactive=include_inactive,
    )
    return [PanelSchema.model_validate(p) for p in panels]


@router.get("/panels/{panel_id}", response_model=PanelSchema)
def get_panel(panel_id: str, catalog: CatalogServiceDep) -> PanelSchema:
    return PanelSchema.model_validate(catalog.get_panel(panel_id))


@router.post("/panels", response_model=PanelSchema, status_code=status.HTTP_201_CREATED)
def create_panel(definition: PanelDefinition, catalog: CatalogServiceDep) -> PanelSchema:
    return PanelSchema.model_validate(catalog.create_panel(definition))


@router.patch("/panels/{panel_id}", response_model=PanelSchema)
def update_panel(
    panel_id: str, request: PanelUpdateRequest, catalog: CatalogServiceDep
) -> PanelSchema:
    changes = request.model_dump(exclude_unset=True)
    return PanelSchema.model_validate(catalog.update_panel(panel_id, **changes))


@router.delete("/panels/{panel_id}", response_model=PanelSchema)
def deactivate_panel(panel_id: str, catalog: CatalogServiceDep) -> PanelSchema:
    """Soft-delete: the panel stays referenced by past orders."""
    return PanelSchema.model_validate(catalog.deactivate_panel(panel_id))


@router.get("/panels/{panel_id}/edges", response_model=list[CompatibleEdgeSchema])
def compatible_edges(panel_id: str, catalog: CatalogServiceDep) -> list[CompatibleEdgeSchema]:
    return [CompatibleEdgeSchema.model_validate(c) for c in catalog.compatible_edges(panel_id)]


@router.post("/panels/{panel_id}/edges", response_model=CompatibleEdgeSchema)
def link_edge(
    panel_id: str, request: LinkEdgeRequest, catalog: CatalogServiceDep
) -> CompatibleEdgeSchema:
    link = catalog.link_edge(panel_id, request.edge_id, is_default=request.is_default)
    return CompatibleEdgeSchema.model_validate(link)


# Edges


@router.get("/edges", response_model=list[EdgeSchema])
def list_edges(
    catalog: CatalogServiceDep,
    material: str | None = None,
    search: str | None = None,
    include_inactive: bool = False,
) -> list[EdgeSchema]:
    edges = catalog.list_edges(
        material=material, search=search, include_inactive=include_inactive
    )
    return [EdgeSchema.model_validate(e) for e in edges]


@router.get("/edges/{edge_id}", response_model=EdgeSchema)
def get_edge(edge_id: str, catalog: CatalogServiceDep) -> EdgeSchema:
    return EdgeSchema.model_validate(catalog.get_edge(edge_id))


@router.post("/edges", response_model=EdgeSchema, status_code=status.HTTP_201_CREATED)
def create_edge(definition: EdgeDefinition, catalog: CatalogServiceDep) -> EdgeSchema:
    return EdgeSchema.model_validate(catalog.create_edge(definition))


@router.patch("/edges/{edge_id}", response_model=EdgeSchema)
def update_edge(
    edge_id: str, request: EdgeUpdateRequest, catalog: CatalogServiceDep
) -> EdgeSchema:
    changes = request.model_dump(exclude_unset=True)
    return EdgeSchema.model_validate(catalog.update_edge(edge_id, **changes))


@router.delete("/edges/{edge_id}", response_model=EdgeSchema)
def deactivate_edge(edge_id: str, catalog: CatalogServiceDep) -> EdgeSchema:
    return EdgeSchema.model_validate(catalog.deactivate_edge(edge_id))
