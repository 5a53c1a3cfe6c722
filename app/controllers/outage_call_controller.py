# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Controller: outage call CRUD, listings and stats."""
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from app.core.dependencies import get_outage_call_service
from app.schemas.outage_call import (
    OutageCallCreateRequest,
    OutageCallDetail,
    OutageCallResponse,
    PaginatedOutageCalls,
)
from app.services.outage_call_service import OutageCallService

router = APIRouter(prefix="/api/v1", tags=["Outage Calls"])


@router.post("/outage-calls", status_code=201, response_model=OutageCallResponse)
def create_outage_call(payload: OutageCallCreateRequest,
                       service: OutageCallService = Depends(get_outage_call_service)):
    return service.create_outage_call(payload)


@router.get("/outage-calls", response_model=PaginatedOutageCalls)
def list_outage_calls(
    team_id: Optional[str] = Query(default=None, alias="team-id"),
    status: Optional[str] = None,
    severity: Optional[str] = None,
    page: Optional[str] = None,
    page_size: Optional[str] = None,
    service: OutageCallService = Depends(get_outage_call_service),
):
    total, pg, calls = service.list_outage_calls(team_id, status, severity, page, page_size)
    return PaginatedOutageCalls(
        outage_calls=[OutageCallResponse(**c) for c in calls],
        total=total, page=pg.page, page_size=pg.page_size,
    )


@router.get("/outage-calls/stats")
def get_outage_call_stats(service: OutageCallService = Depends(get_outage_call_service)):
    """Outage call counts per status."""
    return service.get_stats()


@router.get("/outage-calls/{outage_call_id}", response_model=OutageCallDetail)
def get_outage_call(outage_call_id: str,
                    service: OutageCallService = Depends(get_outage_call_service)):
    return service.get_outage_call_detail(outage_call_id)


@router.delete("/outage-calls/{outage_call_id}", status_code=204)
def delete_outage_call(outage_call_id: str,
                       service: OutageCallService = Depends(get_outage_call_service)):
    service.delete_outage_call(outage_call_id)
    return Response(status_code=204)
