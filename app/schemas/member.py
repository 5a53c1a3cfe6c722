# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Request / Response schemas for members and their quick links."""
import uuid
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from app.models.domain import MemberRole, TeamRole


class MemberCreateRequest(BaseModel):
    organization_id: uuid.UUID
    team_id: Optional[uuid.UUID] = None
    full_name: str = Field(..., min_length=1, max_length=200)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=255)
    iuser: str = Field(..., min_length=1, max_length=50)
    role: MemberRole = MemberRole.DEVELOPER
    team_role: TeamRole = TeamRole.MEMBER
    is_active: bool = True
    metadata: Optional[Dict[str, Any]] = None

    @field_validator("email")
    @classmethod
    def normalise_email(cls, v: str) -> str:
        v = v.strip().lower()
        if "@" not in v:
            raise ValueError("email must contain '@'")
        return v


class MemberResponse(BaseModel):
    id: str
    organization_id: str
    team_id: Optional[str] = None
    full_name: str
    first_name: str
    last_name: str
    email: str
    iuser: str
    role: str
    team_role: str
    is_active: bool
    metadata: Optional[Dict[str, Any]] = None
    created_at: str
    updated_at: str


class PaginatedMembers(BaseModel):
    members: List[MemberResponse]
    total: int
    page: int
    page_size: int


class QuickLinkRequest(BaseModel):
    url: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    icon: str = ""
    category: str = ""

    @field_validator("url")
    @classmethod
    def check_url(cls, v: str) -> str:
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError("url must be an http(s) URL")
        return v


class QuickLink(BaseModel):
    url: str
    title: str
    icon: str = ""
    category: str = ""


class QuickLinksResponse(BaseModel):
    quick_links: List[QuickLink]
