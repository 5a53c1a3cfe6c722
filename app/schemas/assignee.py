# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Request / Response schemas for outage call assignees.
"""

import uuid
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field

from app.models.domain import AssigneeRole


class AssigneeCreateRequest(BaseModel):
    outage_call_id: uuid.UUID
    member_id: uuid.UUID
    role: AssigneeRole
    assigned_at: Optional[datetime] = None
    is_active: Optional[bool] = None


class AssignMemberRequest(BaseModel):
    member_id: uuid.UUID
    role: AssigneeRole


class BulkAssignRequest(BaseModel):
    # Raw items; the service validates each one and reports failures by index.
    members: list[dict[str, Any]] = Field(..., min_length=1)


class BulkUnassignRequest(BaseModel):
    member_ids: list[str] = Field(..., min_length=1)


class RoleUpdateRequest(BaseModel):
    role: AssigneeRole


class ActiveUpdateRequest(BaseModel):
    is_active: bool


class AssigneeResponse(BaseModel):
    id: str
    outage_call_id: str
    member_id: str
    role: str
    assigned_at: str
    is_active: bool
    created_at: str
    updated_at: str


class BulkFailure(BaseModel):
    index: int
    member_id: Optional[str] = None
    error: str
    error_type: str


class BulkAssignResponse(BaseModel):
    assigned: list[AssigneeResponse]
    errors: list[BulkFailure]


class BulkUnassignResponse(BaseModel):
    unassigned: list[str]
    errors: list[BulkFailure]


class AssignmentStatusResponse(BaseModel):
    outage_call_id: str
    member_id: str
    assigned: bool


class CountResponse(BaseModel):
    count: int
