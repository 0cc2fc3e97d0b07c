"""Liveness endpoints."""

from datetime import datetime

import structlog
from fastapi import APIRouter
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from core.config import settings
from infrastructure.database.session import check_connection

logger = structlog.get_logger()

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    timestamp: str
    environment: str
    database: str | None = None


@router.get("/", response_class=PlainTextResponse, include_in_schema=False)
async def root() -> str:
    return "API running"


@router.get("/health", response_model=HealthResponse, summary="Basic health check")
async def health_check() -> HealthResponse:
    """Process is up. Dependencies are not checked."""
    return HealthResponse(
        status="healthy",
        version=settings.app_version,
        timestamp=datetime.utcnow().isoformat(),
        environment=settings.app_env,
    )


@router.get(
    "/health/detailed",
    response_model=HealthResponse,
    summary="Health check including the database",
)
async def detailed_health_check() -> HealthResponse:
    """Report ``degraded`` instead of failing when the database is down."""
    try:
        await check_connection()
        database = "healthy"
    except Exception as exc:
        logger.warning("database_unreachable", error=str(exc))
        database = "unhealthy"

    return HealthResponse(
        status="healthy" if database == "healthy" else "degraded",
        version=settings.app_version,
        timestamp=datetime.utcnow().isoformat(),
        environment=settings.app_env,
        database=database,
    )
