# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Business logic for components owned by teams."""
from typing import Any, Dict, List

from app.core.logging import get_logger
from app.repositories.component_repository import ComponentRepository
from app.schemas.component import ComponentCreateRequest
from app.services import projection
from app.services.existence import ExistenceOracle
from app.services.validation import RequestValidator

logger = get_logger(__name__)


class ComponentService:
    def __init__(self, repo: ComponentRepository, oracle: ExistenceOracle,
                 validator: RequestValidator):
        self._repo = repo
        self._oracle = oracle
        self._validator = validator

    def create_component(self, data: Dict[str, Any]) -> Dict[str, Any]:
        req = self._validator.validate(ComponentCreateRequest, data)
        self._oracle.require_team(req.owner_id)
        component = self._repo.create(
            owner_id=req.owner_id, name=req.name, title=req.title,
            description=req.description, project_id=req.project_id,
            metadata=req.metadata,
        )
        logger.info("Component created id=%s owner=%s", component["id"], component["owner_id"])
        return projection.project_entity(component)

    def get_component(self, component_id) -> Dict[str, Any]:
        component_uuid = self._validator.parse_uuid(component_id, "component_id")
        return projection.project_entity(self._oracle.require_component(component_uuid))

    def list_by_team(self, team_id) -> List[Dict[str, Any]]:
        """Minimal views (qos / sonar / github) of every component the team owns."""
        team_uuid = self._validator.parse_uuid(team_id, "team_id")
        self._oracle.require_team(team_uuid)
        return [projection.project_component(c) for c in self._repo.list_by_owner(team_uuid)]
