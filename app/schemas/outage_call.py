# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Request / Response schemas for outage calls."""
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from app.models.domain import OutageCallSeverity, OutageCallStatus
from app.schemas.assignee import AssigneeResponse


class OutageCallCreateRequest(BaseModel):
    team_id: uuid.UUID
    title: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    severity: OutageCallSeverity = OutageCallSeverity.MEDIUM
    status: OutageCallStatus = OutageCallStatus.OPEN
    call_timestamp: Optional[datetime] = None
    external_ticket_id: str = Field("", max_length=100)
    metadata: Optional[Dict[str, Any]] = None


class OutageCallResponse(BaseModel):
    id: str
    team_id: str
    title: str
    description: str
    severity: str
    status: str
    call_timestamp: str
    external_ticket_id: str
    metadata: Optional[Dict[str, Any]] = None
    created_at: str
    updated_at: str


class OutageCallDetail(OutageCallResponse):
    assignees: List[AssigneeResponse] = []


class PaginatedOutageCalls(BaseModel):
    outage_calls: List[OutageCallResponse]
    total: int
    page: int
    page_size: int
