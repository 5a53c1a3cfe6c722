# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Translation of domain errors into HTTP responses.
Registered on the app in main.py; controllers stay free of try/except.
"""

from fastapi import Request
from fastapi.responses import JSONResponse

from app.core.errors import (
    AlreadyExistsError,
    MemberNotAssigned,
    NotFoundError,
    PortalError,
    StoreFailure,
    ValidationFailed,
)
from app.core.logging import get_logger

logger = get_logger(__name__)

STATUS_CODES = (
    (NotFoundError, 404),
    (MemberNotAssigned, 404),
    (AlreadyExistsError, 409),
    (ValidationFailed, 400),
    (StoreFailure, 500),
)


def status_for(exc: PortalError) -> int:
    for error_type, status_code in STATUS_CODES:
        if isinstance(exc, error_type):
            return status_code
    return 500


def error_body(exc: PortalError) -> dict:
    body = {"error": type(exc).__name__, "detail": exc.detail}
    if isinstance(exc, ValidationFailed) and exc.errors:
        body["errors"] = exc.errors
    return body


async def portal_error_handler(request: Request, exc: PortalError) -> JSONResponse:
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error("Request failed %s %s: %s", request.method, request.url.path, exc,
                     exc_info=exc)
    return JSONResponse(status_code=status_code, content=error_body(exc))
