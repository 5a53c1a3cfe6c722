# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
HTTP middleware for request ID propagation, API key auth and Prometheus metrics.
"""

import re
import time
import uuid

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.config import settings
from app.metrics.prometheus import REQUEST_COUNT, REQUEST_LATENCY, HTTP_ERRORS

KNOWN_SEGMENTS: set[str] = {
    "api", "v1", "teams", "members", "components", "outage-calls",
    "assignees", "bulk", "role", "active", "workload", "count", "metadata",
    "quick-links", "assignments", "search", "stats", "primary", "secondary",
    "observers", "health", "ready", "metrics",
}

SKIP_PATHS: tuple[str, ...] = (
    "/health", "/health/ready", "/metrics", "/openapi.json", "/docs", "/redoc",
)

_UUID_RE = re.compile(r"^[0-9a-fA-F-]{32,36}$")


def normalize_path(path: str) -> str:
    """Collapse identifiers so metric labels stay low-cardinality."""
    parts = path.strip("/").split("/")
    if parts == [""]:
        return path
    return "/" + "/".join(
        p if p in KNOWN_SEGMENTS and not _UUID_RE.match(p) else "{param}"
        for p in parts
    )


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Propagate or generate X-Request-ID for distributed tracing."""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
        request.state.request_id = request_id
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response


class APIKeyAuthMiddleware(BaseHTTPMiddleware):
    """Reject requests without a configured X-API-Key. Disabled when no keys are set."""

    async def dispatch(self, request: Request, call_next):
        if (
            not settings.AUTH_ENABLED
            or request.method == "OPTIONS"
            or request.url.path in settings.AUTH_BYPASS_PATHS
        ):
            return await call_next(request)
        api_key = request.headers.get("X-API-Key")
        if not api_key:
            return Response(
                content='{"detail":"Missing API key. Provide X-API-Key header."}',
                status_code=401, media_type="application/json",
            )
        if api_key not in settings.API_KEYS:
            return Response(
                content='{"detail":"Invalid API key."}',
                status_code=403, media_type="application/json",
            )
        return await call_next(request)


class MetricsMiddleware(BaseHTTPMiddleware):
    """Track request count, latency, and error rate via Prometheus."""

    async def dispatch(self, request: Request, call_next):
        start = time.time()
        response = await call_next(request)
        duration = time.time() - start

        path = request.url.path
        if path not in SKIP_PATHS:
            normalized = normalize_path(path)
            REQUEST_COUNT.labels(
                method=request.method,
                endpoint=normalized,
                status=str(response.status_code),
            ).inc()
            REQUEST_LATENCY.labels(
                method=request.method,
                endpoint=normalized,
            ).observe(duration)
            if response.status_code >= 400:
                HTTP_ERRORS.labels(
                    method=request.method,
                    endpoint=normalized,
                    status=str(response.status_code),
                ).inc()

        return response
