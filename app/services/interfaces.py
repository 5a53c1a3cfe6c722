# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Capability interfaces consumed by the service layer.
The SQL repositories satisfy them structurally; tests may pass any
object with the same methods.
"""

from typing import Any, Dict, List, Optional, Protocol


class EntityLookup(Protocol):
    def get_by_id(self, entity_id) -> Optional[Dict[str, Any]]: ...


class MetadataStore(EntityLookup, Protocol):
    def update_metadata(self, entity_id, metadata: Dict[str, Any]) -> Optional[Dict[str, Any]]: ...


class AssignmentStore(Protocol):
    def exists(self, outage_call_id, member_id) -> bool: ...

    def create(self, outage_call_id, member_id, role: str,
               assigned_at, is_active: bool) -> Dict[str, Any]: ...

    def delete(self, outage_call_id, member_id) -> int: ...

    def update_fields(self, outage_call_id, member_id,
                      fields: Dict[str, Any]) -> Optional[Dict[str, Any]]: ...

    def list_by_outage_call_id(self, outage_call_id) -> List[Dict[str, Any]]: ...

    def list_by_member_id(self, member_id) -> List[Dict[str, Any]]: ...
