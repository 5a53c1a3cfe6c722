# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: metadata partial merge for teams and members.

The merge is shallow. Each top-level key of the update replaces the stored
value wholesale (nested objects under it are NOT deep-merged); every
top-level key absent from the update is kept as stored.
"""

import copy
from typing import Any, Dict, Mapping, Optional, Type

from app.core.errors import NotFoundError, ValidationFailed
from app.core.logging import get_logger
from app.metrics.prometheus import METADATA_MERGES
from app.services.interfaces import MetadataStore
from app.services.projection import parse_metadata

logger = get_logger(__name__)


def merge_metadata(current: Any, partial: Mapping[str, Any]) -> Dict[str, Any]:
    """Return a new document: ``current`` with ``partial``'s top-level keys replaced.

    A missing, non-object or unparsable ``current`` counts as ``{}``.
    Neither argument is mutated.
    """
    merged = copy.deepcopy(parse_metadata(current) or {})
    for key, value in partial.items():
        merged[key] = copy.deepcopy(value)
    return merged


class MetadataMergeEngine:
    """Load → shallow-merge → persist for one metadata-bearing entity kind."""

    def __init__(self, store: MetadataStore, entity: str,
                 not_found: Type[NotFoundError]) -> None:
        self._store = store
        self._entity = entity
        self._not_found = not_found

    def merge(self, entity_id, partial: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        if not isinstance(partial, Mapping):
            raise ValidationFailed(
                "validation failed: metadata: must be a JSON object",
                errors=[{"field": "metadata", "message": "must be a JSON object"}],
            )
        entity = self._store.get_by_id(entity_id)
        if entity is None:
            raise self._not_found()

        merged = merge_metadata(entity.get("metadata"), partial)
        updated = self._store.update_metadata(entity_id, merged)
        if updated is None:
            # Deleted between the read and the write.
            raise self._not_found()

        METADATA_MERGES.labels(entity=self._entity).inc()
        logger.info("Metadata merged %s=%s keys=%s",
                    self._entity, entity_id, sorted(partial.keys()))
        return updated

    def replace_key(self, entity_id, key: str, value: Any) -> Dict[str, Any]:
        """Overwrite a single top-level key; shorthand for ``merge({key: value})``."""
        return self.merge(entity_id, {key: value})
