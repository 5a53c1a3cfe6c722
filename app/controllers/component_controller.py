# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Controller: components."""
from typing import List

from fastapi import APIRouter, Depends, Query

from app.core.dependencies import get_component_service
from app.schemas.component import ComponentCreateRequest, ComponentResponse, ComponentView
from app.services.component_service import ComponentService

router = APIRouter(prefix="/api/v1", tags=["Components"])


@router.post("/components", status_code=201, response_model=ComponentResponse)
def create_component(payload: ComponentCreateRequest,
                     service: ComponentService = Depends(get_component_service)):
    return service.create_component(payload)


@router.get("/components", response_model=List[ComponentView])
def list_components(
    team_id: str = Query(..., alias="team-id"),
    service: ComponentService = Depends(get_component_service),
):
    """Minimal views of the components owned by a team."""
    return service.list_by_team(team_id)


@router.get("/components/{component_id}", response_model=ComponentResponse)
def get_component(component_id: str,
                  service: ComponentService = Depends(get_component_service)):
    return service.get_component(component_id)
