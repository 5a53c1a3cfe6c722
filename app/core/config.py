# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Core configuration, all env-driven.
Single source of truth for every tunable parameter.
"""

import os


class Settings:
    """Application settings loaded from environment variables."""

    SERVICE_NAME: str = os.getenv("SERVICE_NAME", "developer-portal")
    SERVICE_VERSION: str = os.getenv("SERVICE_VERSION", "1.0.0")
    SERVICE_PORT: int = int(os.getenv("SERVICE_PORT", "8080"))

    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite://")
    POOL_SIZE: int = int(os.getenv("DB_POOL_SIZE", "10"))
    MAX_OVERFLOW: int = int(os.getenv("DB_MAX_OVERFLOW", "5"))
    POOL_RECYCLE: int = int(os.getenv("DB_POOL_RECYCLE", "300"))
    AUTO_CREATE_SCHEMA: bool = (
        os.getenv("AUTO_CREATE_SCHEMA", "true").lower() == "true"
    )

    DEFAULT_PAGE_SIZE: int = int(os.getenv("DEFAULT_PAGE_SIZE", "20"))
    MAX_PAGE_SIZE: int = int(os.getenv("MAX_PAGE_SIZE", "100"))

    SONAR_DASHBOARD_URL: str = os.getenv(
        "SONAR_DASHBOARD_URL", "https://sonar.tools.sap/dashboard?id="
    )

    # Auth
    _raw_keys: str = os.getenv("API_KEYS", "")
    API_KEYS: set = {k.strip() for k in _raw_keys.split(",") if k.strip()}
    AUTH_ENABLED: bool = len(API_KEYS) > 0
    AUTH_BYPASS_PATHS: set = {
        "/health", "/health/ready", "/metrics", "/openapi.json", "/docs", "/redoc",
    }

    CORS_ORIGINS: list[str] = os.getenv("CORS_ORIGINS", "*").split(",")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()


settings = Settings()
