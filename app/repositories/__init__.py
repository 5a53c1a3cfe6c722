# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Repository package; re-exports every repository class."""
from app.repositories.assignee_repository import AssigneeRepository
from app.repositories.component_repository import ComponentRepository
from app.repositories.member_repository import MemberRepository
from app.repositories.outage_call_repository import OutageCallRepository
from app.repositories.team_repository import TeamRepository

__all__ = [
    "AssigneeRepository",
    "ComponentRepository",
    "MemberRepository",
    "OutageCallRepository",
    "TeamRepository",
]
