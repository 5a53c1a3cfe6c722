# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Shared fixtures: an in-memory SQLite database rebuilt for every test and
small factories for the entities assignments refer to.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["API_KEYS"] = ""
os.environ.setdefault("LOG_LEVEL", "WARNING")

import uuid

import pytest
from fastapi.testclient import TestClient

from app.core.database import engine
from app.models.tables import create_schema, drop_schema
from app.repositories import (
    AssigneeRepository,
    ComponentRepository,
    MemberRepository,
    OutageCallRepository,
    TeamRepository,
)
from app.services.assignee_service import AssigneeService
from app.services.existence import ExistenceOracle
from app.services.validation import RequestValidator
from main import app

GROUP_ID = "6f1c2a3e-8d4b-4c1a-9e7f-0a1b2c3d4e5f"
ORG_ID = "0b7e9c2d-1f3a-4e5b-8c6d-7a8b9c0d1e2f"


# ============================================
# Database
# ============================================
@pytest.fixture(autouse=True)
def reset_db():
    """Fresh schema for every test."""
    drop_schema(engine)
    create_schema(engine)
    yield
    drop_schema(engine)


@pytest.fixture
def client():
    return TestClient(app)


# ============================================
# Repositories & services on the shared engine
# ============================================
@pytest.fixture
def team_repo():
    return TeamRepository(engine)


@pytest.fixture
def member_repo():
    return MemberRepository(engine)


@pytest.fixture
def component_repo():
    return ComponentRepository(engine)


@pytest.fixture
def call_repo():
    return OutageCallRepository(engine)


@pytest.fixture
def assignee_repo():
    return AssigneeRepository(engine)


@pytest.fixture
def oracle(team_repo, member_repo, component_repo, call_repo):
    return ExistenceOracle(
        outage_call=call_repo, member=member_repo,
        team=team_repo, component=component_repo,
    )


@pytest.fixture
def assignee_service(assignee_repo, oracle):
    return AssigneeService(assignee_repo, oracle, RequestValidator())


# ============================================
# Factories
# ============================================
@pytest.fixture
def make_team(team_repo):
    def _make(name=None, metadata=None):
        name = name or f"team-{uuid.uuid4().hex[:8]}"
        return team_repo.create(
            group_id=GROUP_ID, name=name, title=name.title(),
            description="", status="active", metadata=metadata,
        )
    return _make


@pytest.fixture
def make_member(member_repo):
    def _make(team_id=None, metadata=None):
        suffix = uuid.uuid4().hex[:8]
        return member_repo.create(
            organization_id=ORG_ID, team_id=team_id,
            full_name=f"Member {suffix}", first_name="Member", last_name=suffix,
            email=f"{suffix}@example.com", iuser=f"I{suffix}",
            role="developer", team_role="member", is_active=True,
            metadata=metadata,
        )
    return _make


@pytest.fixture
def make_call(call_repo, make_team):
    def _make(team_id=None, status="open", severity="high"):
        team_id = team_id or make_team()["id"]
        return call_repo.create(
            team_id=team_id, title="Checkout latency", description="",
            severity=severity, status=status, call_timestamp=None,
        )
    return _make
