# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: members, their metadata and quick links.
Thin HTTP layer; delegates ALL logic to MemberService.
"""

from fastapi import APIRouter, Depends, Query

from app.core.dependencies import get_member_service
from app.schemas.common import MetadataPatchRequest
from app.schemas.member import (
    MemberCreateRequest,
    MemberResponse,
    QuickLinkRequest,
    QuickLinksResponse,
)
from app.services.member_service import MemberService

router = APIRouter(prefix="/api/v1", tags=["Members"])


@router.post("/members", status_code=201, response_model=MemberResponse)
def create_member(payload: MemberCreateRequest,
                  service: MemberService = Depends(get_member_service)):
    """Register a member; email and iuser must be unused."""
    return service.create_member(payload)


@router.get("/members/{member_id}", response_model=MemberResponse)
def get_member(member_id: str, service: MemberService = Depends(get_member_service)):
    return service.get_member(member_id)


@router.patch("/members/{member_id}/metadata", response_model=MemberResponse)
def merge_member_metadata(member_id: str, payload: MetadataPatchRequest,
                          service: MemberService = Depends(get_member_service)):
    return service.merge_metadata(member_id, payload.metadata)


@router.get("/members/{member_id}/quick-links", response_model=QuickLinksResponse)
def get_quick_links(member_id: str,
                    service: MemberService = Depends(get_member_service)):
    return QuickLinksResponse(quick_links=service.get_quick_links(member_id))


@router.post("/members/{member_id}/quick-links", status_code=201,
             response_model=QuickLinksResponse)
def add_quick_link(member_id: str, payload: QuickLinkRequest,
                   service: MemberService = Depends(get_member_service)):
    return QuickLinksResponse(quick_links=service.add_quick_link(member_id, payload))


@router.delete("/members/{member_id}/quick-links", response_model=QuickLinksResponse)
def remove_quick_link(
    member_id: str,
    url: str = Query(..., min_length=1),
    service: MemberService = Depends(get_member_service),
):
    return QuickLinksResponse(quick_links=service.remove_quick_link(member_id, url))
