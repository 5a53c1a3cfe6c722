# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Request / Response schemas for components."""
import uuid
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class ComponentCreateRequest(BaseModel):
    owner_id: uuid.UUID
    project_id: Optional[uuid.UUID] = None
    name: str = Field(..., min_length=1, max_length=100)
    title: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    metadata: Optional[Dict[str, Any]] = None


class ComponentResponse(BaseModel):
    id: str
    owner_id: str
    project_id: Optional[str] = None
    name: str
    title: str
    description: str
    metadata: Optional[Dict[str, Any]] = None
    created_at: str
    updated_at: str


class ComponentView(BaseModel):
    """Minimal list view with fields lifted out of metadata."""
    id: str
    owner_id: str
    project_id: Optional[str] = None
    name: str
    title: str
    description: str
    qos: str
    sonar: str
    github: str
