# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: outage call assignee data access.
Pure CRUD keyed by the (outage_call_id, member_id) pair. NO business rules.
The unique constraint on the pair is the authoritative duplicate guard.
"""

import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy import and_, delete, func, insert, select, update
from sqlalchemy.engine import Engine

from app.core.errors import MemberAlreadyAssigned
from app.models.tables import outage_call_assignees as t
from app.repositories.base import as_uuid, iso, store_errors, utcnow


def _row_to_dict(row) -> Dict[str, Any]:
    m = row._mapping
    return {
        "id": str(m["id"]),
        "outage_call_id": str(m["outage_call_id"]),
        "member_id": str(m["member_id"]),
        "role": m["role"],
        "assigned_at": iso(m["assigned_at"]),
        "is_active": bool(m["is_active"]),
        "created_at": iso(m["created_at"]),
        "updated_at": iso(m["updated_at"]),
    }


def _pair(outage_call_id, member_id):
    return and_(
        t.c.outage_call_id == as_uuid(outage_call_id),
        t.c.member_id == as_uuid(member_id),
    )


class AssigneeRepository:
    def __init__(self, engine: Engine):
        self._engine = engine

    # ── Write ──────────────────────────────────────────────────────────

    def create(self, outage_call_id, member_id, role: str,
               assigned_at, is_active: bool) -> Dict[str, Any]:
        now = utcnow()
        values = {
            "id": uuid.uuid4(),
            "outage_call_id": as_uuid(outage_call_id),
            "member_id": as_uuid(member_id),
            "role": role,
            "assigned_at": assigned_at,
            "is_active": is_active,
            "created_at": now,
            "updated_at": now,
        }
        with store_errors("create outage call assignee", conflict=MemberAlreadyAssigned):
            with self._engine.begin() as conn:
                conn.execute(insert(t).values(**values))
                row = conn.execute(select(t).where(t.c.id == values["id"])).fetchone()
        return _row_to_dict(row)

    def delete(self, outage_call_id, member_id) -> int:
        with store_errors("delete outage call assignee"):
            with self._engine.begin() as conn:
                result = conn.execute(delete(t).where(_pair(outage_call_id, member_id)))
        return result.rowcount or 0

    def update_fields(self, outage_call_id, member_id,
                      fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Single-statement partial update. Returns None when the pair is absent."""
        values = dict(fields)
        values["updated_at"] = utcnow()
        with store_errors("update outage call assignee"):
            with self._engine.begin() as conn:
                result = conn.execute(
                    update(t).where(_pair(outage_call_id, member_id)).values(**values)
                )
                if not result.rowcount:
                    return None
                row = conn.execute(
                    select(t).where(_pair(outage_call_id, member_id))
                ).fetchone()
        return _row_to_dict(row)

    # ── Read ───────────────────────────────────────────────────────────

    def exists(self, outage_call_id, member_id) -> bool:
        with store_errors("check assignment existence"):
            with self._engine.connect() as conn:
                count = conn.execute(
                    select(func.count()).select_from(t).where(_pair(outage_call_id, member_id))
                ).scalar()
        return bool(count)

    def list_by_outage_call_id(self, outage_call_id) -> List[Dict[str, Any]]:
        with store_errors("list outage call assignees"):
            with self._engine.connect() as conn:
                rows = conn.execute(
                    select(t)
                    .where(t.c.outage_call_id == as_uuid(outage_call_id))
                    .order_by(t.c.assigned_at, t.c.created_at)
                ).fetchall()
        return [_row_to_dict(r) for r in rows]

    def list_by_member_id(self, member_id) -> List[Dict[str, Any]]:
        with store_errors("list member assignments"):
            with self._engine.connect() as conn:
                rows = conn.execute(
                    select(t)
                    .where(t.c.member_id == as_uuid(member_id))
                    .order_by(t.c.assigned_at, t.c.created_at)
                ).fetchall()
        return [_row_to_dict(r) for r in rows]
