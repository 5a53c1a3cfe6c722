# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Data-access layer for members."""
import uuid
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import func, insert, or_, select, update
from sqlalchemy.engine import Engine

from app.core.errors import MemberExists
from app.models.tables import members as t
from app.repositories.base import as_uuid, iso, store_errors, str_id, utcnow

MEMBER_FIELDS = (
    "organization_id", "team_id", "full_name", "first_name", "last_name",
    "email", "iuser", "role", "team_role", "is_active", "metadata",
)


def _row_to_dict(row) -> Dict[str, Any]:
    m = row._mapping
    return {
        "id": str(m["id"]),
        "organization_id": str(m["organization_id"]),
        "team_id": str_id(m["team_id"]),
        "full_name": m["full_name"],
        "first_name": m["first_name"],
        "last_name": m["last_name"],
        "email": m["email"],
        "iuser": m["iuser"],
        "role": m["role"],
        "team_role": m["team_role"],
        "is_active": bool(m["is_active"]),
        "metadata": m["metadata"],
        "created_at": iso(m["created_at"]),
        "updated_at": iso(m["updated_at"]),
    }


class MemberRepository:
    def __init__(self, engine: Engine):
        self._engine = engine

    # ── Write ──────────────────────────────────────────────────────────

    def create(self, **fields) -> Dict[str, Any]:
        values = {k: fields[k] for k in MEMBER_FIELDS if k in fields}
        values["organization_id"] = as_uuid(values["organization_id"])
        if values.get("team_id") is not None:
            values["team_id"] = as_uuid(values["team_id"])
        now = utcnow()
        member_id = uuid.uuid4()
        with store_errors("create member", conflict=MemberExists):
            with self._engine.begin() as conn:
                conn.execute(insert(t).values(
                    id=member_id, created_at=now, updated_at=now, **values,
                ))
                row = conn.execute(select(t).where(t.c.id == member_id)).fetchone()
        return _row_to_dict(row)

    def update_metadata(self, member_id, metadata: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        with store_errors("update member metadata"):
            with self._engine.begin() as conn:
                result = conn.execute(
                    update(t).where(t.c.id == as_uuid(member_id))
                    .values(metadata=metadata, updated_at=utcnow())
                )
                if not result.rowcount:
                    return None
                row = conn.execute(select(t).where(t.c.id == as_uuid(member_id))).fetchone()
        return _row_to_dict(row)

    # ── Read ───────────────────────────────────────────────────────────

    def get_by_id(self, member_id) -> Optional[Dict[str, Any]]:
        with store_errors("get member"):
            with self._engine.connect() as conn:
                row = conn.execute(select(t).where(t.c.id == as_uuid(member_id))).fetchone()
        return _row_to_dict(row) if row else None

    def find_conflict(self, email: str, iuser: str) -> Optional[Dict[str, Any]]:
        """Return a member already holding ``email`` or ``iuser``, if any."""
        with store_errors("check member uniqueness"):
            with self._engine.connect() as conn:
                row = conn.execute(
                    select(t).where(or_(t.c.email == email, t.c.iuser == iuser))
                ).fetchone()
        return _row_to_dict(row) if row else None

    def list_by_team(self, team_id, limit: int = 20,
                     offset: int = 0) -> Tuple[int, List[Dict[str, Any]]]:
        condition = t.c.team_id == as_uuid(team_id)
        with store_errors("list team members"):
            with self._engine.connect() as conn:
                total = conn.execute(
                    select(func.count()).select_from(t).where(condition)
                ).scalar()
                rows = conn.execute(
                    select(t).where(condition).order_by(t.c.full_name)
                    .limit(limit).offset(offset)
                ).fetchall()
        return total or 0, [_row_to_dict(r) for r in rows]
