# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Shared helpers for the data-access layer: id coercion, timestamp
rendering and translation of driver errors into domain errors.
"""

import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Iterator, Optional, Type

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from app.core.errors import PortalError, StoreFailure
from app.core.logging import get_logger

logger = get_logger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_uuid(value: Any) -> uuid.UUID:
    if isinstance(value, uuid.UUID):
        return value
    return uuid.UUID(str(value))


def iso(value: Optional[datetime]) -> Optional[str]:
    """ISO-8601 in UTC. Drivers without tz support hand back naive values."""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


def str_id(value: Any) -> Optional[str]:
    return str(value) if value is not None else None


@contextmanager
def store_errors(
    operation: str, conflict: Optional[Type[PortalError]] = None
) -> Iterator[None]:
    """Re-raise driver errors as StoreFailure, or ``conflict`` on a constraint hit."""
    try:
        yield
    except IntegrityError as exc:
        if conflict is not None:
            logger.info("Constraint conflict during %s: %s", operation, exc.orig)
            raise conflict() from exc
        logger.error("Integrity error during %s: %s", operation, exc.orig)
        raise StoreFailure(f"failed to {operation}") from exc
    except SQLAlchemyError as exc:
        logger.error("Store error during %s: %s", operation, exc)
        raise StoreFailure(f"failed to {operation}") from exc
