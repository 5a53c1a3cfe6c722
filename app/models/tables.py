# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Relational schema: SQLAlchemy Core tables on a single MetaData.
Repositories query these; ``create_schema`` is used at startup and in tests.
"""

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.engine import Engine

metadata = MetaData()

teams = Table(
    "teams",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column("group_id", Uuid, nullable=False, index=True),
    Column("name", String(100), nullable=False, unique=True),
    Column("title", String(200), nullable=False),
    Column("description", Text, nullable=False, default=""),
    Column("status", String(50), nullable=False, default="active"),
    Column("metadata", JSON, nullable=True),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
)

members = Table(
    "members",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column("organization_id", Uuid, nullable=False, index=True),
    Column("team_id", Uuid, ForeignKey("teams.id", ondelete="SET NULL"), nullable=True, index=True),
    Column("full_name", String(200), nullable=False),
    Column("first_name", String(100), nullable=False),
    Column("last_name", String(100), nullable=False),
    Column("email", String(255), nullable=False, unique=True),
    Column("iuser", String(50), nullable=False, unique=True),
    Column("role", String(50), nullable=False, default="developer"),
    Column("team_role", String(50), nullable=False, default="member"),
    Column("is_active", Boolean, nullable=False, default=True),
    Column("metadata", JSON, nullable=True),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
)

components = Table(
    "components",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column("owner_id", Uuid, ForeignKey("teams.id", ondelete="CASCADE"), nullable=False, index=True),
    Column("project_id", Uuid, nullable=True),
    Column("name", String(100), nullable=False),
    Column("title", String(200), nullable=False),
    Column("description", Text, nullable=False, default=""),
    Column("metadata", JSON, nullable=True),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
)

outage_calls = Table(
    "outage_calls",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column("team_id", Uuid, ForeignKey("teams.id", ondelete="CASCADE"), nullable=False, index=True),
    Column("title", String(200), nullable=False),
    Column("description", Text, nullable=False, default=""),
    Column("severity", String(50), nullable=False, default="medium"),
    Column("status", String(50), nullable=False, default="open"),
    Column("call_timestamp", DateTime(timezone=True), nullable=False),
    Column("external_ticket_id", String(100), nullable=False, default=""),
    Column("metadata", JSON, nullable=True),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
)

outage_call_assignees = Table(
    "outage_call_assignees",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column(
        "outage_call_id",
        Uuid,
        ForeignKey("outage_calls.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
    Column(
        "member_id",
        Uuid,
        ForeignKey("members.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
    Column("role", String(50), nullable=False, default="primary"),
    Column("assigned_at", DateTime(timezone=True), nullable=False),
    Column("is_active", Boolean, nullable=False, default=True),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
    UniqueConstraint("outage_call_id", "member_id", name="uq_outage_call_member"),
)


def create_schema(engine: Engine) -> None:
    metadata.create_all(engine)


def drop_schema(engine: Engine) -> None:
    metadata.drop_all(engine)
