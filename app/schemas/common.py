# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Schemas shared by every controller."""
from typing import Any, Dict

from pydantic import BaseModel, Field


class MetadataPatchRequest(BaseModel):
    """Top-level keys to overwrite; keys not listed are preserved."""
    metadata: Dict[str, Any] = Field(...)
