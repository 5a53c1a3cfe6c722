# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Request / Response schemas for teams."""
import uuid
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from app.models.domain import TeamStatus


class TeamCreateRequest(BaseModel):
    group_id: uuid.UUID
    name: str = Field(..., min_length=1, max_length=100)
    title: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    status: TeamStatus = TeamStatus.ACTIVE
    metadata: Optional[Dict[str, Any]] = None

    @field_validator("name")
    @classmethod
    def normalise_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v


class TeamResponse(BaseModel):
    id: str
    group_id: str
    name: str
    title: str
    description: str
    status: str
    metadata: Optional[Dict[str, Any]] = None
    created_at: str
    updated_at: str


class TeamListItem(BaseModel):
    id: str
    group_id: str
    name: str
    title: str
    description: str
    metadata: Optional[Dict[str, Any]] = None


class PaginatedTeams(BaseModel):
    teams: List[TeamListItem]
    total: int
    page: int
    page_size: int


class TeamDetail(TeamResponse):
    jira_team: str = ""
    members: List[Dict[str, Any]] = []
    member_count: int = 0
