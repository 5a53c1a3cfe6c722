# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: outage call assignees. Which members work an outage call, in
which role, and whether the assignment is still active.

Every mutation confirms the outage call and the member exist first. The
store holds a unique constraint on (outage_call_id, member_id); a conflict
there surfaces as MemberAlreadyAssigned, same as the pre-insert check.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional

from pydantic import BaseModel

from app.core.errors import (
    MemberAlreadyAssigned,
    MemberNotAssigned,
    PortalError,
    ValidationFailed,
)
from app.core.logging import get_logger
from app.metrics.prometheus import (
    ASSIGNMENTS_CREATED,
    ASSIGNMENTS_REMOVED,
    ASSIGNMENT_UPDATES,
    BULK_ITEM_FAILURES,
)
from app.models.domain import AssigneeRole
from app.schemas.assignee import AssigneeCreateRequest
from app.services.existence import ExistenceOracle
from app.services.interfaces import AssignmentStore
from app.services.validation import RequestValidator

logger = get_logger(__name__)


@dataclass
class BulkFailure:
    index: int
    member_id: Optional[str]
    error: PortalError


@dataclass
class BulkResult:
    """Outcome of a bulk operation; one bad item never blocks the others."""
    succeeded: List[Any] = field(default_factory=list)
    failed: List[BulkFailure] = field(default_factory=list)

    @property
    def errors(self) -> List[PortalError]:
        return [f.error for f in self.failed]


class AssigneeService:
    """Business logic for assigning members to outage calls."""

    def __init__(
        self,
        store: AssignmentStore,
        oracle: ExistenceOracle,
        validator: RequestValidator,
    ) -> None:
        self._store = store
        self._oracle = oracle
        self._validator = validator

    # ── Commands ──

    def create(
        self,
        outage_call_id,
        member_id,
        role,
        assigned_at: Optional[datetime] = None,
        is_active: Optional[bool] = None,
    ) -> Dict[str, Any]:
        """Create an assignment. Raises ValidationFailed / *NotFound / MemberAlreadyAssigned."""
        req = self._validator.validate(AssigneeCreateRequest, {
            "outage_call_id": outage_call_id,
            "member_id": member_id,
            "role": role,
            "assigned_at": assigned_at,
            "is_active": is_active,
        })
        self._oracle.require_outage_call(req.outage_call_id)
        self._oracle.require_member(req.member_id)

        if self._store.exists(req.outage_call_id, req.member_id):
            raise MemberAlreadyAssigned()

        record = self._store.create(
            req.outage_call_id,
            req.member_id,
            role=req.role.value,
            assigned_at=req.assigned_at or datetime.now(timezone.utc),
            is_active=True if req.is_active is None else req.is_active,
        )
        ASSIGNMENTS_CREATED.labels(role=req.role.value).inc()
        logger.info("Member assigned outage_call=%s member=%s role=%s active=%s",
                    req.outage_call_id, req.member_id, record["role"], record["is_active"])
        return record

    def assign_member(self, outage_call_id, member_id, role) -> Dict[str, Any]:
        return self.create(outage_call_id, member_id, role)

    def unassign(self, outage_call_id, member_id) -> None:
        """Remove an assignment. Raises *NotFound / MemberNotAssigned."""
        call_id = self._validator.parse_uuid(outage_call_id, "outage_call_id")
        mem_id = self._validator.parse_uuid(member_id, "member_id")
        self._oracle.require_outage_call(call_id)
        self._oracle.require_member(mem_id)

        if not self._store.exists(call_id, mem_id):
            raise MemberNotAssigned()
        if not self._store.delete(call_id, mem_id):
            # Removed concurrently after the existence check.
            raise MemberNotAssigned()

        ASSIGNMENTS_REMOVED.inc()
        logger.info("Member unassigned outage_call=%s member=%s", call_id, mem_id)

    def bulk_assign(self, outage_call_id, members: Iterable[Any]) -> BulkResult:
        """Assign each member in order, collecting per-item failures. Never raises."""
        result = BulkResult()
        items = list(members or [])
        call_id = self._check_batch(result, "bulk_assign", outage_call_id, items, "members")
        if call_id is None:
            return result

        for index, item in enumerate(items):
            data = _as_mapping(item)
            member_id = data.get("member_id")
            try:
                result.succeeded.append(
                    self.create(call_id, member_id, data.get("role"))
                )
            except PortalError as exc:
                self._record_failure(result, "bulk_assign", index, member_id, exc)
        logger.info("Bulk assign outage_call=%s assigned=%d failed=%d",
                    call_id, len(result.succeeded), len(result.failed))
        return result

    def bulk_unassign(self, outage_call_id, member_ids: Iterable[Any]) -> BulkResult:
        """Unassign each member in order; ``succeeded`` holds the removed member ids."""
        result = BulkResult()
        items = list(member_ids or [])
        call_id = self._check_batch(result, "bulk_unassign", outage_call_id, items, "member_ids")
        if call_id is None:
            return result

        for index, member_id in enumerate(items):
            try:
                self.unassign(call_id, member_id)
                result.succeeded.append(str(member_id))
            except PortalError as exc:
                self._record_failure(result, "bulk_unassign", index, member_id, exc)
        logger.info("Bulk unassign outage_call=%s removed=%d failed=%d",
                    call_id, len(result.succeeded), len(result.failed))
        return result

    def update_role(self, outage_call_id, member_id, role) -> Dict[str, Any]:
        """Change the role in place; assigned_at and the record id are kept."""
        new_role = self._parse_role(role)
        return self._update(outage_call_id, member_id, {"role": new_role.value}, "role")

    def set_active(self, outage_call_id, member_id, is_active: bool) -> Dict[str, Any]:
        if not isinstance(is_active, bool):
            raise ValidationFailed(
                "validation failed: is_active: must be a boolean",
                errors=[{"field": "is_active", "message": "must be a boolean"}],
            )
        return self._update(outage_call_id, member_id, {"is_active": is_active}, "is_active")

    # ── Queries ──

    def is_assigned(self, outage_call_id, member_id) -> bool:
        """Existence check only; the referenced entities are not validated."""
        return self._store.exists(
            self._validator.parse_uuid(outage_call_id, "outage_call_id"),
            self._validator.parse_uuid(member_id, "member_id"),
        )

    def list_by_outage_call(self, outage_call_id) -> List[Dict[str, Any]]:
        call_id = self._validator.parse_uuid(outage_call_id, "outage_call_id")
        self._oracle.require_outage_call(call_id)
        return self._store.list_by_outage_call_id(call_id)

    def list_by_member(self, member_id) -> List[Dict[str, Any]]:
        mem_id = self._validator.parse_uuid(member_id, "member_id")
        self._oracle.require_member(mem_id)
        return self._store.list_by_member_id(mem_id)

    def list_active_by_member(self, member_id) -> List[Dict[str, Any]]:
        return [a for a in self.list_by_member(member_id) if a["is_active"]]

    def list_by_role(self, outage_call_id, role) -> List[Dict[str, Any]]:
        wanted = self._parse_role(role).value
        return [a for a in self.list_by_outage_call(outage_call_id) if a["role"] == wanted]

    def list_primary(self, outage_call_id) -> List[Dict[str, Any]]:
        return self.list_by_role(outage_call_id, AssigneeRole.PRIMARY)

    def list_secondary(self, outage_call_id) -> List[Dict[str, Any]]:
        return self.list_by_role(outage_call_id, AssigneeRole.SECONDARY)

    def list_observers(self, outage_call_id) -> List[Dict[str, Any]]:
        return self.list_by_role(outage_call_id, AssigneeRole.OBSERVER)

    def assignment_count(self, outage_call_id) -> int:
        call_id = self._validator.parse_uuid(outage_call_id, "outage_call_id")
        return len(self._store.list_by_outage_call_id(call_id))

    def assignment_count_by_role(self, outage_call_id, role) -> int:
        return len(self.list_by_role(outage_call_id, role))

    def member_workload(self, member_id) -> int:
        """Number of active assignments the member currently holds."""
        return len(self.list_active_by_member(member_id))

    # ── Private ──

    def _update(self, outage_call_id, member_id, fields: Dict[str, Any],
                label: str) -> Dict[str, Any]:
        call_id = self._validator.parse_uuid(outage_call_id, "outage_call_id")
        mem_id = self._validator.parse_uuid(member_id, "member_id")
        self._oracle.require_outage_call(call_id)
        self._oracle.require_member(mem_id)

        record = self._store.update_fields(call_id, mem_id, fields)
        if record is None:
            raise MemberNotAssigned()
        ASSIGNMENT_UPDATES.labels(field=label).inc()
        logger.info("Assignment updated outage_call=%s member=%s %s",
                    call_id, mem_id, fields)
        return record

    def _parse_role(self, role) -> AssigneeRole:
        try:
            return AssigneeRole(role)
        except ValueError as exc:
            allowed = ", ".join(r.value for r in AssigneeRole)
            raise ValidationFailed(
                f"validation failed: role: must be one of {allowed}",
                errors=[{"field": "role", "message": f"must be one of {allowed}"}],
            ) from exc

    def _check_batch(self, result: BulkResult, operation: str, outage_call_id,
                     items: List[Any], field_name: str) -> Optional[uuid.UUID]:
        """Batch-level validation; a failure becomes the single entry at index -1."""
        try:
            call_id = self._validator.parse_uuid(outage_call_id, "outage_call_id")
            if not items:
                raise ValidationFailed(
                    f"validation failed: {field_name}: at least one item is required",
                    errors=[{"field": field_name, "message": "at least one item is required"}],
                )
        except ValidationFailed as exc:
            self._record_failure(result, operation, -1, None, exc)
            return None
        return call_id

    def _record_failure(self, result: BulkResult, operation: str, index: int,
                        member_id, exc: PortalError) -> None:
        result.failed.append(BulkFailure(
            index=index,
            member_id=str(member_id) if member_id is not None else None,
            error=exc,
        ))
        BULK_ITEM_FAILURES.labels(operation=operation, error=type(exc).__name__).inc()
        logger.warning("%s item %d failed member=%s: %s",
                       operation, index, member_id, exc)


def _as_mapping(item: Any) -> Mapping[str, Any]:
    if isinstance(item, BaseModel):
        return item.model_dump()
    if isinstance(item, Mapping):
        return item
    return {"member_id": item, "role": None}
