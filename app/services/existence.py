# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: existence checks for referenced entities.
Every mutating or relational operation confirms its references here first
so callers get the kind-specific not-found error instead of a store error.
"""

from typing import Any, Dict, Type

from app.core.errors import (
    ComponentNotFound,
    MemberNotFound,
    NotFoundError,
    OutageCallNotFound,
    TeamNotFound,
)
from app.services.interfaces import EntityLookup

NOT_FOUND_ERRORS: Dict[str, Type[NotFoundError]] = {
    "outage_call": OutageCallNotFound,
    "member": MemberNotFound,
    "team": TeamNotFound,
    "component": ComponentNotFound,
}


class ExistenceOracle:
    """Confirms that an entity of a given kind exists. Pure read."""

    def __init__(self, **lookups: EntityLookup) -> None:
        unknown = set(lookups) - set(NOT_FOUND_ERRORS)
        if unknown:
            raise ValueError(f"Unknown entity kinds: {sorted(unknown)}")
        self._lookups = lookups

    def require(self, kind: str, entity_id) -> Dict[str, Any]:
        """Return the entity or raise the not-found error for ``kind``."""
        lookup = self._lookups.get(kind)
        if lookup is None:
            raise ValueError(f"No lookup registered for entity kind '{kind}'")
        entity = lookup.get_by_id(entity_id)
        if entity is None:
            raise NOT_FOUND_ERRORS[kind]()
        return entity

    def exists(self, kind: str, entity_id) -> bool:
        self.require(kind, entity_id)
        return True

    def require_outage_call(self, outage_call_id) -> Dict[str, Any]:
        return self.require("outage_call", outage_call_id)

    def require_member(self, member_id) -> Dict[str, Any]:
        return self.require("member", member_id)

    def require_team(self, team_id) -> Dict[str, Any]:
        return self.require("team", team_id)

    def require_component(self, component_id) -> Dict[str, Any]:
        return self.require("component", component_id)
