# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: outage call assignees.
Thin HTTP layer; delegates ALL logic to AssigneeService.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Response

from app.core.dependencies import get_assignee_service
from app.schemas.assignee import (
    ActiveUpdateRequest,
    AssigneeResponse,
    AssignMemberRequest,
    AssignmentStatusResponse,
    BulkAssignRequest,
    BulkAssignResponse,
    BulkFailure,
    BulkUnassignRequest,
    BulkUnassignResponse,
    CountResponse,
    RoleUpdateRequest,
)
from app.services.assignee_service import AssigneeService, BulkResult

router = APIRouter(prefix="/api/v1", tags=["Assignees"])


def _failures(result: BulkResult) -> List[BulkFailure]:
    return [
        BulkFailure(
            index=f.index,
            member_id=f.member_id,
            error=f.error.detail,
            error_type=type(f.error).__name__,
        )
        for f in result.failed
    ]


@router.post("/outage-calls/{outage_call_id}/assignees", status_code=201,
             response_model=AssigneeResponse)
def assign_member(
    outage_call_id: str,
    payload: AssignMemberRequest,
    service: AssigneeService = Depends(get_assignee_service),
):
    """Assign a member to an outage call with a role."""
    return service.assign_member(outage_call_id, payload.member_id, payload.role)


@router.get("/outage-calls/{outage_call_id}/assignees",
            response_model=List[AssigneeResponse])
def list_assignees(
    outage_call_id: str,
    role: Optional[str] = None,
    service: AssigneeService = Depends(get_assignee_service),
):
    """All assignees of an outage call, optionally filtered by role."""
    if role:
        return service.list_by_role(outage_call_id, role)
    return service.list_by_outage_call(outage_call_id)


@router.get("/outage-calls/{outage_call_id}/assignees/primary",
            response_model=List[AssigneeResponse])
def list_primary(outage_call_id: str,
                 service: AssigneeService = Depends(get_assignee_service)):
    return service.list_primary(outage_call_id)


@router.get("/outage-calls/{outage_call_id}/assignees/secondary",
            response_model=List[AssigneeResponse])
def list_secondary(outage_call_id: str,
                   service: AssigneeService = Depends(get_assignee_service)):
    return service.list_secondary(outage_call_id)


@router.get("/outage-calls/{outage_call_id}/assignees/observers",
            response_model=List[AssigneeResponse])
def list_observers(outage_call_id: str,
                   service: AssigneeService = Depends(get_assignee_service)):
    return service.list_observers(outage_call_id)


@router.get("/outage-calls/{outage_call_id}/assignees/count",
            response_model=CountResponse)
def count_assignees(
    outage_call_id: str,
    role: Optional[str] = None,
    service: AssigneeService = Depends(get_assignee_service),
):
    if role:
        return CountResponse(count=service.assignment_count_by_role(outage_call_id, role))
    return CountResponse(count=service.assignment_count(outage_call_id))


@router.post("/outage-calls/{outage_call_id}/assignees/bulk",
             response_model=BulkAssignResponse)
def bulk_assign(
    outage_call_id: str,
    payload: BulkAssignRequest,
    service: AssigneeService = Depends(get_assignee_service),
):
    """Assign several members; each item succeeds or fails on its own."""
    result = service.bulk_assign(outage_call_id, payload.members)
    return BulkAssignResponse(assigned=result.succeeded, errors=_failures(result))


@router.delete("/outage-calls/{outage_call_id}/assignees/bulk",
               response_model=BulkUnassignResponse)
def bulk_unassign(
    outage_call_id: str,
    payload: BulkUnassignRequest,
    service: AssigneeService = Depends(get_assignee_service),
):
    result = service.bulk_unassign(outage_call_id, payload.member_ids)
    return BulkUnassignResponse(unassigned=result.succeeded, errors=_failures(result))


@router.get("/outage-calls/{outage_call_id}/assignees/{member_id}",
            response_model=AssignmentStatusResponse)
def get_assignment_status(
    outage_call_id: str,
    member_id: str,
    service: AssigneeService = Depends(get_assignee_service),
):
    """Whether the member is assigned to the outage call."""
    return AssignmentStatusResponse(
        outage_call_id=outage_call_id,
        member_id=member_id,
        assigned=service.is_assigned(outage_call_id, member_id),
    )


@router.delete("/outage-calls/{outage_call_id}/assignees/{member_id}",
               status_code=204)
def unassign_member(
    outage_call_id: str,
    member_id: str,
    service: AssigneeService = Depends(get_assignee_service),
):
    service.unassign(outage_call_id, member_id)
    return Response(status_code=204)


@router.patch("/outage-calls/{outage_call_id}/assignees/{member_id}/role",
              response_model=AssigneeResponse)
def update_role(
    outage_call_id: str,
    member_id: str,
    payload: RoleUpdateRequest,
    service: AssigneeService = Depends(get_assignee_service),
):
    """Change an assignee's role in place."""
    return service.update_role(outage_call_id, member_id, payload.role)


@router.patch("/outage-calls/{outage_call_id}/assignees/{member_id}/active",
              response_model=AssigneeResponse)
def set_active(
    outage_call_id: str,
    member_id: str,
    payload: ActiveUpdateRequest,
    service: AssigneeService = Depends(get_assignee_service),
):
    return service.set_active(outage_call_id, member_id, payload.is_active)


@router.get("/members/{member_id}/assignments",
            response_model=List[AssigneeResponse])
def list_member_assignments(
    member_id: str,
    active_only: bool = False,
    service: AssigneeService = Depends(get_assignee_service),
):
    """Every outage call assignment held by a member."""
    if active_only:
        return service.list_active_by_member(member_id)
    return service.list_by_member(member_id)


@router.get("/members/{member_id}/workload")
def member_workload(
    member_id: str,
    service: AssigneeService = Depends(get_assignee_service),
):
    """Number of active outage call assignments for a member."""
    return {"member_id": member_id, "active_assignments": service.member_workload(member_id)}
