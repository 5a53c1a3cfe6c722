# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Data-access layer for teams."""
import uuid
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import delete, func, insert, or_, select, update
from sqlalchemy.engine import Engine

from app.core.errors import TeamExists
from app.models.tables import teams as t
from app.repositories.base import as_uuid, iso, store_errors, utcnow


def _row_to_dict(row) -> Dict[str, Any]:
    m = row._mapping
    return {
        "id": str(m["id"]),
        "group_id": str(m["group_id"]),
        "name": m["name"],
        "title": m["title"],
        "description": m["description"] or "",
        "status": m["status"],
        "metadata": m["metadata"],
        "created_at": iso(m["created_at"]),
        "updated_at": iso(m["updated_at"]),
    }


class TeamRepository:
    def __init__(self, engine: Engine):
        self._engine = engine

    # ── Write ──────────────────────────────────────────────────────────

    def create(self, group_id, name: str, title: str, description: str,
               status: str, metadata: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        now = utcnow()
        team_id = uuid.uuid4()
        with store_errors("create team", conflict=TeamExists):
            with self._engine.begin() as conn:
                conn.execute(insert(t).values(
                    id=team_id, group_id=as_uuid(group_id), name=name, title=title,
                    description=description, status=status, metadata=metadata,
                    created_at=now, updated_at=now,
                ))
                row = conn.execute(select(t).where(t.c.id == team_id)).fetchone()
        return _row_to_dict(row)

    def update_metadata(self, team_id, metadata: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        with store_errors("update team metadata"):
            with self._engine.begin() as conn:
                result = conn.execute(
                    update(t).where(t.c.id == as_uuid(team_id))
                    .values(metadata=metadata, updated_at=utcnow())
                )
                if not result.rowcount:
                    return None
                row = conn.execute(select(t).where(t.c.id == as_uuid(team_id))).fetchone()
        return _row_to_dict(row)

    def delete(self, team_id) -> bool:
        with store_errors("delete team"):
            with self._engine.begin() as conn:
                result = conn.execute(delete(t).where(t.c.id == as_uuid(team_id)))
        return bool(result.rowcount)

    # ── Read ───────────────────────────────────────────────────────────

    def get_by_id(self, team_id) -> Optional[Dict[str, Any]]:
        with store_errors("get team"):
            with self._engine.connect() as conn:
                row = conn.execute(select(t).where(t.c.id == as_uuid(team_id))).fetchone()
        return _row_to_dict(row) if row else None

    def get_by_name(self, name: str) -> Optional[Dict[str, Any]]:
        with store_errors("get team by name"):
            with self._engine.connect() as conn:
                row = conn.execute(select(t).where(t.c.name == name)).fetchone()
        return _row_to_dict(row) if row else None

    def list_teams(self, group_id=None, limit: int = 20,
                   offset: int = 0) -> Tuple[int, List[Dict[str, Any]]]:
        conditions = []
        if group_id is not None:
            conditions.append(t.c.group_id == as_uuid(group_id))
        return self._page(conditions, limit, offset)

    def search(self, query: str, limit: int = 20,
               offset: int = 0) -> Tuple[int, List[Dict[str, Any]]]:
        pattern = f"%{query.lower()}%"
        conditions = [or_(func.lower(t.c.name).like(pattern),
                          func.lower(t.c.title).like(pattern))]
        return self._page(conditions, limit, offset)

    # ── Private ────────────────────────────────────────────────────────

    def _page(self, conditions, limit: int, offset: int) -> Tuple[int, List[Dict[str, Any]]]:
        with store_errors("list teams"):
            with self._engine.connect() as conn:
                total = conn.execute(
                    select(func.count()).select_from(t).where(*conditions)
                ).scalar()
                rows = conn.execute(
                    select(t).where(*conditions).order_by(t.c.name)
                    .limit(limit).offset(offset)
                ).fetchall()
        return total or 0, [_row_to_dict(r) for r in rows]
