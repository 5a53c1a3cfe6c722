# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Business logic for members: registration, team listings, metadata and
the quick links kept under ``metadata.quick_links``.
"""
from typing import Any, Dict, List, Tuple

from app.core.errors import LinkExists, LinkNotFound, MemberExists, MemberNotFound
from app.core.logging import get_logger
from app.repositories.member_repository import MemberRepository
from app.schemas.member import MemberCreateRequest, QuickLinkRequest
from app.services import pagination, projection
from app.services.existence import ExistenceOracle
from app.services.metadata_service import MetadataMergeEngine
from app.services.validation import RequestValidator

logger = get_logger(__name__)

QUICK_LINKS_KEY = "quick_links"


class MemberService:
    def __init__(self, repo: MemberRepository, oracle: ExistenceOracle,
                 validator: RequestValidator):
        self._repo = repo
        self._oracle = oracle
        self._validator = validator
        self._metadata = MetadataMergeEngine(repo, "member", MemberNotFound)

    # ── Commands ──

    def create_member(self, data: Dict[str, Any]) -> Dict[str, Any]:
        req = self._validator.validate(MemberCreateRequest, data)
        if req.team_id is not None:
            self._oracle.require_team(req.team_id)
        if self._repo.find_conflict(req.email, req.iuser) is not None:
            raise MemberExists()

        member = self._repo.create(
            organization_id=req.organization_id, team_id=req.team_id,
            full_name=req.full_name, first_name=req.first_name,
            last_name=req.last_name, email=req.email, iuser=req.iuser,
            role=req.role.value, team_role=req.team_role.value,
            is_active=req.is_active, metadata=req.metadata,
        )
        logger.info("Member created id=%s iuser=%s team=%s",
                    member["id"], member["iuser"], member["team_id"])
        return projection.project_entity(member)

    def merge_metadata(self, member_id, partial) -> Dict[str, Any]:
        member_uuid = self._validator.parse_uuid(member_id, "member_id")
        return projection.project_entity(self._metadata.merge(member_uuid, partial))

    def add_quick_link(self, member_id, data: Dict[str, Any]) -> List[Dict[str, str]]:
        link = self._validator.validate(QuickLinkRequest, data)
        member = self._load(member_id)
        links = _stored_links(member)
        if any(existing.get("url") == link.url for existing in links):
            raise LinkExists()

        links.append(link.model_dump())
        updated = self._metadata.replace_key(member["id"], QUICK_LINKS_KEY, links)
        logger.info("Quick link added member=%s url=%s", member["id"], link.url)
        return projection.quick_links(updated.get("metadata"))

    def remove_quick_link(self, member_id, url: str) -> List[Dict[str, str]]:
        member = self._load(member_id)
        links = _stored_links(member)
        remaining = [existing for existing in links if existing.get("url") != url]
        if len(remaining) == len(links):
            raise LinkNotFound()

        updated = self._metadata.replace_key(member["id"], QUICK_LINKS_KEY, remaining)
        logger.info("Quick link removed member=%s url=%s", member["id"], url)
        return projection.quick_links(updated.get("metadata"))

    # ── Queries ──

    def get_member(self, member_id) -> Dict[str, Any]:
        return projection.project_entity(self._load(member_id))

    def get_quick_links(self, member_id) -> List[Dict[str, str]]:
        return projection.quick_links(self._load(member_id).get("metadata"))

    def list_by_team(self, team_id, page: Any = 1,
                     page_size: Any = None) -> Tuple[int, pagination.Page, List[Dict[str, Any]]]:
        team_uuid = self._validator.parse_uuid(team_id, "team_id")
        self._oracle.require_team(team_uuid)
        pg = pagination.normalize(page, page_size)
        total, members = self._repo.list_by_team(team_uuid, limit=pg.page_size, offset=pg.offset)
        return total, pg, [projection.project_entity(m) for m in members]

    # ── Private ──

    def _load(self, member_id) -> Dict[str, Any]:
        member_uuid = self._validator.parse_uuid(member_id, "member_id")
        return self._oracle.require_member(member_uuid)


def _stored_links(member: Dict[str, Any]) -> List[Dict[str, Any]]:
    document = projection.parse_metadata(member.get("metadata")) or {}
    links = document.get(QUICK_LINKS_KEY)
    if not isinstance(links, list):
        return []
    return [dict(link) for link in links if isinstance(link, dict)]
