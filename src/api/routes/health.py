"""Service banner and health check endpoints."""

import time
from datetime import datetime

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import settings
from infrastructure.database.session import get_async_session

router = APIRouter(tags=["health"])

API_VERSION = "1.0.0"

_STARTED_AT = time.monotonic()


class RootResponse(BaseModel):
    """Service banner."""

    message: str
    timestamp: str
    environment: str
    ssl_enabled: bool


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    timestamp: str
    environment: str
    uptime_seconds: float
    database: str | None = None
    email_verification: str | None = None


def _now() -> str:
    return datetime.utcnow().isoformat()


def _uptime() -> float:
    return round(time.monotonic() - _STARTED_AT, 1)


@router.get("/", response_model=RootResponse, summary="Service banner")
async def root() -> RootResponse:
    """Confirm the API is up."""
    return RootResponse(
        message="Profile API is running successfully!",
        timestamp=_now(),
        environment=settings.app_env,
        ssl_enabled=settings.db_ssl,
    )


@router.get("/health", response_model=HealthResponse, summary="Liveness probe")
async def health_check() -> HealthResponse:
    """
    Liveness probe for the hosting platform.

    Touches no dependencies, so it stays green while the database is down.
    """
    return HealthResponse(
        status="healthy",
        version=API_VERSION,
        timestamp=_now(),
        environment=settings.app_env,
        uptime_seconds=_uptime(),
    )


@router.get(
    "/health/detailed",
    response_model=HealthResponse,
    summary="Readiness check",
)
async def detailed_health_check(
    db: AsyncSession = Depends(get_async_session),
) -> HealthResponse:
    """
    Readiness check: database round trip plus email verification setup.

    A missing verification key degrades the service, since every create
    and update needs a positive deliverability verdict.
    """
    try:
        await db.execute(text("SELECT 1"))
        db_status = "healthy"
    except (SQLAlchemyError, OSError) as e:
        db_status = f"unhealthy: {type(e).__name__}"

    email_status = "configured" if settings.mailboxlayer_api_key else "not configured"
    ready = db_status == "healthy" and email_status == "configured"

    return HealthResponse(
        status="healthy" if ready else "degraded",
        version=API_VERSION,
        timestamp=_now(),
        environment=settings.app_env,
        uptime_seconds=_uptime(),
        database=db_status,
        email_verification=email_status,
    )
