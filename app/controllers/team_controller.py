# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Controller: team CRUD, search, metadata and team-scoped listings."""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response

from app.core.dependencies import (
    get_component_service,
    get_member_service,
    get_team_service,
)
from app.schemas.common import MetadataPatchRequest
from app.schemas.component import ComponentView
from app.schemas.member import MemberResponse, PaginatedMembers
from app.schemas.team import (
    PaginatedTeams,
    TeamCreateRequest,
    TeamDetail,
    TeamListItem,
    TeamResponse,
)
from app.services.component_service import ComponentService
from app.services.member_service import MemberService
from app.services.team_service import TeamService

router = APIRouter(prefix="/api/v1", tags=["Teams"])


@router.post("/teams", status_code=201, response_model=TeamResponse)
def create_team(payload: TeamCreateRequest,
                service: TeamService = Depends(get_team_service)):
    return service.create_team(payload)


@router.get("/teams", response_model=PaginatedTeams)
def list_teams(
    group_id: Optional[str] = None,
    page: Optional[str] = None,
    page_size: Optional[str] = None,
    service: TeamService = Depends(get_team_service),
):
    total, pg, teams = service.list_teams(group_id, page, page_size)
    return PaginatedTeams(
        teams=[TeamListItem(**t) for t in teams],
        total=total, page=pg.page, page_size=pg.page_size,
    )


@router.get("/teams/search", response_model=PaginatedTeams)
def search_teams(
    q: str = Query(default="", description="Substring of the team name or title"),
    page: Optional[str] = None,
    page_size: Optional[str] = None,
    service: TeamService = Depends(get_team_service),
):
    total, pg, teams = service.search_teams(q, page, page_size)
    return PaginatedTeams(
        teams=[TeamListItem(**t) for t in teams],
        total=total, page=pg.page, page_size=pg.page_size,
    )


@router.get("/teams/{team_id}", response_model=TeamDetail)
def get_team(team_id: str, service: TeamService = Depends(get_team_service)):
    """Team with ``jira_team`` lifted out of metadata and its members."""
    return service.get_team_detail(team_id)


@router.delete("/teams/{team_id}", status_code=204)
def delete_team(team_id: str, service: TeamService = Depends(get_team_service)):
    service.delete_team(team_id)
    return Response(status_code=204)


@router.patch("/teams/{team_id}/metadata", response_model=TeamResponse)
def merge_team_metadata(team_id: str, payload: MetadataPatchRequest,
                        service: TeamService = Depends(get_team_service)):
    """Overwrite the given top-level metadata keys; other keys are kept."""
    return service.merge_metadata(team_id, payload.metadata)


@router.get("/teams/{team_id}/members", response_model=PaginatedMembers)
def list_team_members(
    team_id: str,
    page: Optional[str] = None,
    page_size: Optional[str] = None,
    service: MemberService = Depends(get_member_service),
):
    total, pg, members = service.list_by_team(team_id, page, page_size)
    return PaginatedMembers(
        members=[MemberResponse(**m) for m in members],
        total=total, page=pg.page, page_size=pg.page_size,
    )


@router.get("/teams/{team_id}/components", response_model=List[ComponentView])
def list_team_components(team_id: str,
                         service: ComponentService = Depends(get_component_service)):
    return service.list_by_team(team_id)
