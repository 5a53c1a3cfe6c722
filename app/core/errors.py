# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Domain error taxonomy.
Services raise these; controllers translate them to HTTP status codes.
"""

from typing import Any, Optional


class PortalError(Exception):
    """Base class for every error the service layer raises on purpose."""

    message = "developer portal error"

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.message)

    @property
    def detail(self) -> str:
        return str(self)


# ── Not found ──

class NotFoundError(PortalError):
    entity = "entity"

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or f"{self.entity} not found")


class OutageCallNotFound(NotFoundError):
    entity = "outage call"


class MemberNotFound(NotFoundError):
    entity = "member"


class TeamNotFound(NotFoundError):
    entity = "team"


class ComponentNotFound(NotFoundError):
    entity = "component"


class LinkNotFound(NotFoundError):
    entity = "link"


# ── Conflicts ──

class AlreadyExistsError(PortalError):
    entity = "entity"
    context = ""

    def __init__(self, message: Optional[str] = None) -> None:
        default = f"{self.entity} already exists"
        if self.context:
            default = f"{default} {self.context}"
        super().__init__(message or default)


class TeamExists(AlreadyExistsError):
    entity = "team"
    context = "with this name"


class MemberExists(AlreadyExistsError):
    entity = "member"
    context = "with this email or iuser"


class LinkExists(AlreadyExistsError):
    entity = "link"
    context = "with this URL"


class MemberAlreadyAssigned(AlreadyExistsError):
    message = "member is already assigned to this outage call"

    def __init__(self, message: Optional[str] = None) -> None:
        PortalError.__init__(self, message)


class MemberNotAssigned(PortalError):
    message = "member is not assigned to this outage call"


# ── Input / storage ──

class ValidationFailed(PortalError):
    """Malformed or missing input. ``errors`` holds one entry per bad field."""

    message = "validation failed"

    def __init__(
        self,
        message: Optional[str] = None,
        errors: Optional[list[dict[str, Any]]] = None,
    ) -> None:
        super().__init__(message)
        self.errors = errors or []


class StoreFailure(PortalError):
    """Wraps an underlying persistence error; the cause is chained."""

    message = "storage operation failed"
