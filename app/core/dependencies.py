# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
FastAPI dependency injection: wire repositories and services.
"""

from app.core.database import engine
from app.repositories import (
    AssigneeRepository,
    ComponentRepository,
    MemberRepository,
    OutageCallRepository,
    TeamRepository,
)
from app.services.assignee_service import AssigneeService
from app.services.component_service import ComponentService
from app.services.existence import ExistenceOracle
from app.services.member_service import MemberService
from app.services.outage_call_service import OutageCallService
from app.services.team_service import TeamService
from app.services.validation import RequestValidator

# ── Singleton repository instances (one shared engine) ──
_team_repo = TeamRepository(engine)
_member_repo = MemberRepository(engine)
_component_repo = ComponentRepository(engine)
_outage_call_repo = OutageCallRepository(engine)
_assignee_repo = AssigneeRepository(engine)

_validator = RequestValidator()
_oracle = ExistenceOracle(
    outage_call=_outage_call_repo,
    member=_member_repo,
    team=_team_repo,
    component=_component_repo,
)

# ── Service instances (with injected dependencies) ──
_assignee_service = AssigneeService(
    store=_assignee_repo,
    oracle=_oracle,
    validator=_validator,
)
_team_service = TeamService(
    repo=_team_repo,
    members=_member_repo,
    validator=_validator,
)
_member_service = MemberService(
    repo=_member_repo,
    oracle=_oracle,
    validator=_validator,
)
_outage_call_service = OutageCallService(
    repo=_outage_call_repo,
    assignees=_assignee_repo,
    oracle=_oracle,
    validator=_validator,
)
_component_service = ComponentService(
    repo=_component_repo,
    oracle=_oracle,
    validator=_validator,
)


# ── FastAPI dependency functions ──
def get_assignee_service() -> AssigneeService:
    return _assignee_service


def get_team_service() -> TeamService:
    return _team_service


def get_member_service() -> MemberService:
    return _member_service


def get_outage_call_service() -> OutageCallService:
    return _outage_call_service


def get_component_service() -> ComponentService:
    return _component_service


def get_outage_call_repo() -> OutageCallRepository:
    return _outage_call_repo
