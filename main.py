# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Developer Portal Backend
========================
Multi-tenant portal core: teams, members, components, outage calls and the
members assigned to work each outage call.

Assignee roles:
    primary  ─ owns the outage call
    secondary ─ supports the primary
    observer ─ follows along, no responsibility

Port: 8080
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.controllers import (
    assignee_controller,
    component_controller,
    member_controller,
    outage_call_controller,
    system_controller,
    team_controller,
)
from app.controllers.errors import portal_error_handler
from app.core.config import settings
from app.core.database import engine
from app.core.errors import PortalError
from app.core.logging import get_logger
from app.middleware import APIKeyAuthMiddleware, MetricsMiddleware, RequestIDMiddleware
from app.models.tables import create_schema

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(application: FastAPI):
    if settings.AUTO_CREATE_SCHEMA:
        create_schema(engine)
        logger.info("Database schema ensured")
    logger.info("%s v%s starting", settings.SERVICE_NAME, settings.SERVICE_VERSION)
    yield
    engine.dispose()
    logger.info("Shutting down, connection pool disposed")


# ── FastAPI App ───────────────────────────────────────────────────────────
app = FastAPI(
    title="Developer Portal Backend",
    version=settings.SERVICE_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(MetricsMiddleware)
app.add_middleware(APIKeyAuthMiddleware)
app.add_middleware(RequestIDMiddleware)

app.add_exception_handler(PortalError, portal_error_handler)

app.include_router(system_controller.router)
app.include_router(team_controller.router)
app.include_router(member_controller.router)
app.include_router(component_controller.router)
app.include_router(outage_call_controller.router)
app.include_router(assignee_controller.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=settings.SERVICE_PORT)
