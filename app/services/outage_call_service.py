# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Business logic for outage calls."""
from typing import Any, Dict, List, Optional, Tuple

from app.core.errors import OutageCallNotFound, ValidationFailed
from app.core.logging import get_logger
from app.metrics.prometheus import OUTAGE_CALLS_CREATED
from app.models.domain import OUTAGE_CALL_STATUSES
from app.repositories.outage_call_repository import OutageCallRepository
from app.schemas.outage_call import OutageCallCreateRequest
from app.services import pagination, projection
from app.services.existence import ExistenceOracle
from app.services.interfaces import AssignmentStore
from app.services.validation import RequestValidator

logger = get_logger(__name__)


class OutageCallService:
    def __init__(self, repo: OutageCallRepository, assignees: AssignmentStore,
                 oracle: ExistenceOracle, validator: RequestValidator):
        self._repo = repo
        self._assignees = assignees
        self._oracle = oracle
        self._validator = validator

    def create_outage_call(self, data: Dict[str, Any]) -> Dict[str, Any]:
        req = self._validator.validate(OutageCallCreateRequest, data)
        self._oracle.require_team(req.team_id)
        call = self._repo.create(
            team_id=req.team_id, title=req.title, description=req.description,
            severity=req.severity.value, status=req.status.value,
            call_timestamp=req.call_timestamp,
            external_ticket_id=req.external_ticket_id, metadata=req.metadata,
        )
        OUTAGE_CALLS_CREATED.labels(severity=call["severity"]).inc()
        logger.info("Outage call created id=%s team=%s severity=%s",
                    call["id"], call["team_id"], call["severity"])
        return projection.project_entity(call)

    def delete_outage_call(self, outage_call_id) -> None:
        call_uuid = self._validator.parse_uuid(outage_call_id, "outage_call_id")
        if not self._repo.delete(call_uuid):
            raise OutageCallNotFound()
        logger.info("Outage call deleted id=%s", call_uuid)

    def get_outage_call(self, outage_call_id) -> Dict[str, Any]:
        call_uuid = self._validator.parse_uuid(outage_call_id, "outage_call_id")
        return projection.project_entity(self._oracle.require_outage_call(call_uuid))

    def get_outage_call_detail(self, outage_call_id) -> Dict[str, Any]:
        """Outage call with its assignees in assignment order."""
        detail = self.get_outage_call(outage_call_id)
        detail["assignees"] = self._assignees.list_by_outage_call_id(
            self._validator.parse_uuid(detail["id"])
        )
        return detail

    def list_outage_calls(self, team_id=None, status: Optional[str] = None,
                          severity: Optional[str] = None, page: Any = 1,
                          page_size: Any = None) -> Tuple[int, pagination.Page, List[Dict[str, Any]]]:
        pg = pagination.normalize(page, page_size)
        team_uuid = None
        if team_id is not None:
            team_uuid = self._validator.parse_uuid(team_id, "team_id")
            self._oracle.require_team(team_uuid)
        if status and status.lower() not in OUTAGE_CALL_STATUSES:
            allowed = ", ".join(OUTAGE_CALL_STATUSES)
            raise ValidationFailed(
                f"validation failed: status: must be one of {allowed}",
                errors=[{"field": "status", "message": f"must be one of {allowed}"}],
            )
        total, calls = self._repo.list_calls(
            team_uuid, status, severity, limit=pg.page_size, offset=pg.offset,
        )
        return total, pg, [projection.project_entity(c) for c in calls]

    def get_stats(self) -> Dict[str, Any]:
        counts = self._repo.count_by_status()
        by_status = {status: counts.get(status, 0) for status in OUTAGE_CALL_STATUSES}
        return {"total": sum(counts.values()), "by_status": by_status}
