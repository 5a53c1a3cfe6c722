# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Business logic for teams."""
from typing import Any, Dict, List, Optional, Tuple

from app.core.config import settings
from app.core.errors import TeamExists, TeamNotFound
from app.core.logging import get_logger
from app.repositories.member_repository import MemberRepository
from app.repositories.team_repository import TeamRepository
from app.schemas.team import TeamCreateRequest
from app.services import pagination, projection
from app.services.metadata_service import MetadataMergeEngine
from app.services.validation import RequestValidator

logger = get_logger(__name__)


class TeamService:
    def __init__(self, repo: TeamRepository, members: MemberRepository,
                 validator: RequestValidator):
        self._repo = repo
        self._members = members
        self._validator = validator
        self._metadata = MetadataMergeEngine(repo, "team", TeamNotFound)

    # ── Commands ──

    def create_team(self, data: Dict[str, Any]) -> Dict[str, Any]:
        req = self._validator.validate(TeamCreateRequest, data)
        if self._repo.get_by_name(req.name) is not None:
            raise TeamExists()
        team = self._repo.create(
            group_id=req.group_id, name=req.name, title=req.title,
            description=req.description, status=req.status.value,
            metadata=req.metadata,
        )
        logger.info("Team created id=%s name=%s", team["id"], team["name"])
        return projection.project_team(team)

    def delete_team(self, team_id) -> None:
        team_uuid = self._validator.parse_uuid(team_id, "team_id")
        if not self._repo.delete(team_uuid):
            raise TeamNotFound()
        logger.info("Team deleted id=%s", team_uuid)

    def merge_metadata(self, team_id, partial) -> Dict[str, Any]:
        team_uuid = self._validator.parse_uuid(team_id, "team_id")
        return projection.project_team(self._metadata.merge(team_uuid, partial))

    # ── Queries ──

    def get_team(self, team_id) -> Dict[str, Any]:
        team_uuid = self._validator.parse_uuid(team_id, "team_id")
        team = self._repo.get_by_id(team_uuid)
        if team is None:
            raise TeamNotFound()
        return projection.project_team(team)

    def get_team_detail(self, team_id) -> Dict[str, Any]:
        """Team view with ``jira_team``, every member and ``member_count``."""
        detail = self.get_team(team_id)
        members: List[Dict[str, Any]] = []
        total = 0
        while True:
            total, batch = self._members.list_by_team(
                detail["id"], limit=settings.MAX_PAGE_SIZE, offset=len(members),
            )
            members.extend(batch)
            if not batch or len(members) >= total:
                break
        detail["members"] = [projection.project_entity(m) for m in members]
        detail["member_count"] = total
        return detail

    def list_teams(self, group_id=None, page: Any = 1,
                   page_size: Any = None) -> Tuple[int, pagination.Page, List[Dict[str, Any]]]:
        pg = pagination.normalize(page, page_size)
        group_uuid = None
        if group_id is not None:
            group_uuid = self._validator.parse_uuid(group_id, "group_id")
        total, teams = self._repo.list_teams(group_uuid, limit=pg.page_size, offset=pg.offset)
        return total, pg, [projection.project_team_list_item(t) for t in teams]

    def search_teams(self, query: Optional[str], page: Any = 1,
                     page_size: Any = None) -> Tuple[int, pagination.Page, List[Dict[str, Any]]]:
        pg = pagination.normalize(page, page_size)
        total, teams = self._repo.search((query or "").strip(),
                                         limit=pg.page_size, offset=pg.offset)
        return total, pg, [projection.project_team_list_item(t) for t in teams]
