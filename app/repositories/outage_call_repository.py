# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Data-access layer for outage calls."""
import uuid
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import delete, func, insert, select, text
from sqlalchemy.engine import Engine

from app.models.tables import outage_calls as t
from app.repositories.base import as_uuid, iso, store_errors, utcnow


def _row_to_dict(row) -> Dict[str, Any]:
    m = row._mapping
    return {
        "id": str(m["id"]),
        "team_id": str(m["team_id"]),
        "title": m["title"],
        "description": m["description"] or "",
        "severity": m["severity"],
        "status": m["status"],
        "call_timestamp": iso(m["call_timestamp"]),
        "external_ticket_id": m["external_ticket_id"] or "",
        "metadata": m["metadata"],
        "created_at": iso(m["created_at"]),
        "updated_at": iso(m["updated_at"]),
    }


class OutageCallRepository:
    def __init__(self, engine: Engine):
        self._engine = engine

    # ── Write ──────────────────────────────────────────────────────────

    def create(self, team_id, title: str, description: str, severity: str,
               status: str, call_timestamp, external_ticket_id: str = "",
               metadata: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        now = utcnow()
        call_id = uuid.uuid4()
        with store_errors("create outage call"):
            with self._engine.begin() as conn:
                conn.execute(insert(t).values(
                    id=call_id, team_id=as_uuid(team_id), title=title,
                    description=description, severity=severity, status=status,
                    call_timestamp=call_timestamp or now,
                    external_ticket_id=external_ticket_id, metadata=metadata,
                    created_at=now, updated_at=now,
                ))
                row = conn.execute(select(t).where(t.c.id == call_id)).fetchone()
        return _row_to_dict(row)

    def delete(self, call_id) -> bool:
        with store_errors("delete outage call"):
            with self._engine.begin() as conn:
                result = conn.execute(delete(t).where(t.c.id == as_uuid(call_id)))
        return bool(result.rowcount)

    # ── Read ───────────────────────────────────────────────────────────

    def get_by_id(self, call_id) -> Optional[Dict[str, Any]]:
        with store_errors("get outage call"):
            with self._engine.connect() as conn:
                row = conn.execute(select(t).where(t.c.id == as_uuid(call_id))).fetchone()
        return _row_to_dict(row) if row else None

    def list_calls(self, team_id=None, status: Optional[str] = None,
                   severity: Optional[str] = None, limit: int = 20,
                   offset: int = 0) -> Tuple[int, List[Dict[str, Any]]]:
        conditions = []
        if team_id is not None:
            conditions.append(t.c.team_id == as_uuid(team_id))
        if status:
            conditions.append(t.c.status == status.lower())
        if severity:
            conditions.append(t.c.severity == severity.lower())

        with store_errors("list outage calls"):
            with self._engine.connect() as conn:
                total = conn.execute(
                    select(func.count()).select_from(t).where(*conditions)
                ).scalar()
                rows = conn.execute(
                    select(t).where(*conditions)
                    .order_by(t.c.call_timestamp.desc())
                    .limit(limit).offset(offset)
                ).fetchall()
        return total or 0, [_row_to_dict(r) for r in rows]

    def count_by_status(self) -> Dict[str, int]:
        with store_errors("count outage calls"):
            with self._engine.connect() as conn:
                rows = conn.execute(
                    select(t.c.status, func.count()).group_by(t.c.status)
                ).fetchall()
        return {r[0]: r[1] for r in rows}

    def verify_connection(self):
        with self._engine.connect() as conn:
            conn.execute(text("SELECT 1"))
