"""Liveness and database readiness endpoints."""

from fastapi import APIRouter
from pydantic import BaseModel

from app.config import settings
from app.dependencies import DatabaseDep

router = APIRouter(tags=["Health"])


class HealthStatus(BaseModel):
    status: str
    version: str
    environment: str
    database: str | None = None


@router.get("/health", response_model=HealthStatus, response_model_exclude_none=True)
async def health_check() -> HealthStatus:
    """Answer without touching the database."""
    return HealthStatus(
        status="healthy",
        version=settings.app_version,
        environment=settings.environment,
    )


@router.get("/health/detailed", response_model=HealthStatus)
async def detailed_health_check(database: DatabaseDep) -> HealthStatus:
    """Report the database as unhealthy, and the service as degraded, when SELECT 1 fails."""
    reachable = await database.check_connection()

    return HealthStatus(
        status="healthy" if reachable else "degraded",
        version=settings.app_version,
        environment=settings.environment,
        database="healthy" if reachable else "unhealthy",
    )
