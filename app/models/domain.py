# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Domain enumerations. Pure data, NO FastAPI dependency.
"""

from enum import Enum


class AssigneeRole(str, Enum):
    """Responsibility level of a member on an outage call."""
    PRIMARY = "primary"
    SECONDARY = "secondary"
    OBSERVER = "observer"


class OutageCallSeverity(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class OutageCallStatus(str, Enum):
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"
    CANCELLED = "cancelled"


class TeamStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    ARCHIVED = "archived"


class MemberRole(str, Enum):
    ADMIN = "admin"
    DEVELOPER = "developer"
    MANAGER = "manager"
    VIEWER = "viewer"


class TeamRole(str, Enum):
    MEMBER = "member"
    TEAM_LEAD = "team_lead"


OUTAGE_CALL_STATUSES = tuple(s.value for s in OutageCallStatus)
