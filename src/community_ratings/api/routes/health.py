"""
Health Check Endpoints
======================

Liveness and readiness probes for container orchestration.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Literal

from fastapi import APIRouter, Response, status
from pydantic import BaseModel, Field

from community_ratings.infrastructure import dependencies
from community_ratings.infrastructure.config import get_settings

router = APIRouter()


class HealthStatus(BaseModel):
    """Health check response model."""

    status: Literal["healthy", "degraded", "unhealthy"]
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    version: str
    environment: str


class ReadinessStatus(BaseModel):
    """Readiness check response with service details."""

    ready: bool
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    services: dict[str, dict[str, bool | str]] = Field(default_factory=dict)


@router.get(
    "/live",
    response_model=HealthStatus,
    status_code=status.HTTP_200_OK,
    summary="Liveness probe",
    description="Check if the API is alive and responding.",
)
async def liveness() -> HealthStatus:
    """Always healthy while the process is serving requests."""
    settings = get_settings()
    return HealthStatus(
        status="healthy",
        version=settings.api.version,
        environment=settings.environment,
    )


@router.get(
    "/ready",
    response_model=ReadinessStatus,
    summary="Readiness probe",
    description="Check if the ratings service client and store are ready.",
    responses={503: {"model": ReadinessStatus}},
)
async def readiness(response: Response) -> ReadinessStatus:
    """
    Readiness probe for the DI container and the ratings service client.

    Returns 503 until the container is wired and the client is connected.
    """
    if not dependencies.is_initialized():
        services = {"ratings_service": {"connected": False, "status": "not_initialized"}}
    else:
        api = await dependencies.get_ratings_api()
        connected = await api.health_check()
        services = {
            "ratings_service": {
                "connected": connected,
                "status": "ok" if connected else "unavailable",
            }
        }

    ready = all(svc.get("connected", False) for svc in services.values())
    if not ready:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return ReadinessStatus(ready=ready, services=services)


@router.get(
    "",
    response_model=HealthStatus,
    status_code=status.HTTP_200_OK,
    summary="Basic health check",
    description="Simple health check endpoint.",
)
async def health() -> HealthStatus:
    """Basic health check - alias for liveness."""
    return await liveness()
