# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Data-access layer for components."""
import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy import insert, select
from sqlalchemy.engine import Engine

from app.models.tables import components as t
from app.repositories.base import as_uuid, iso, store_errors, str_id, utcnow


def _row_to_dict(row) -> Dict[str, Any]:
    m = row._mapping
    return {
        "id": str(m["id"]),
        "owner_id": str(m["owner_id"]),
        "project_id": str_id(m["project_id"]),
        "name": m["name"],
        "title": m["title"],
        "description": m["description"] or "",
        "metadata": m["metadata"],
        "created_at": iso(m["created_at"]),
        "updated_at": iso(m["updated_at"]),
    }


class ComponentRepository:
    def __init__(self, engine: Engine):
        self._engine = engine

    def create(self, owner_id, name: str, title: str, description: str = "",
               project_id=None, metadata: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        now = utcnow()
        component_id = uuid.uuid4()
        with store_errors("create component"):
            with self._engine.begin() as conn:
                conn.execute(insert(t).values(
                    id=component_id, owner_id=as_uuid(owner_id),
                    project_id=as_uuid(project_id) if project_id is not None else None,
                    name=name, title=title, description=description,
                    metadata=metadata, created_at=now, updated_at=now,
                ))
                row = conn.execute(select(t).where(t.c.id == component_id)).fetchone()
        return _row_to_dict(row)

    def get_by_id(self, component_id) -> Optional[Dict[str, Any]]:
        with store_errors("get component"):
            with self._engine.connect() as conn:
                row = conn.execute(select(t).where(t.c.id == as_uuid(component_id))).fetchone()
        return _row_to_dict(row) if row else None

    def list_by_owner(self, owner_id) -> List[Dict[str, Any]]:
        with store_errors("list team components"):
            with self._engine.connect() as conn:
                rows = conn.execute(
                    select(t).where(t.c.owner_id == as_uuid(owner_id)).order_by(t.c.name)
                ).fetchall()
        return [_row_to_dict(r) for r in rows]
