"""
FastAPI Application Factory
===========================

Builds the ratings service: health probes are open, everything under
``/api/v1`` sits behind the optional API key.
"""

from __future__ import annotations

import logging
import secrets

import yaml
from fastapi import Depends, FastAPI, HTTPException, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse, Response
from fastapi.security import APIKeyHeader

from community_ratings.api.routes import health, ratings
from community_ratings.infrastructure.config import Settings, get_settings
from community_ratings.infrastructure.dependencies import (
    ContainerNotReadyError,
    lifespan_manager,
)

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"

DESCRIPTION = """
Community ratings for in-game items.

`POST /api/v1/ratings/fetch` asks the ratings service for vote tallies in
batches of at most ten items, one batch at a time, and folds them into
0-5 scores. Batches that fail are skipped and listed in the response.
"""

_api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)


async def require_api_key(api_key: str | None = Depends(_api_key_header)) -> None:
    """
    Reject requests without the configured ``X-API-Key``.

    Disabled when ``API_API_KEY`` is empty. Keys are compared as UTF-8
    bytes so non-ASCII header values fail with 401.
    """
    expected = get_settings().api.api_key
    if not expected:
        return

    if not api_key or not secrets.compare_digest(api_key.encode(), expected.encode()):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or missing API key",
            headers={"WWW-Authenticate": "X-API-Key"},
        )


async def _container_not_ready(request: Request, exc: Exception) -> ORJSONResponse:
    logger.warning(f"{request.method} {request.url.path} before startup finished: {exc}")
    return ORJSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "Ratings service is starting up"},
    )


def _mount_openapi_yaml(app: FastAPI) -> None:
    """Serve the schema as YAML, rendered once on first request."""
    rendered: list[str] = []

    @app.get("/openapi.yaml", include_in_schema=False)
    def openapi_yaml() -> Response:
        if not rendered:
            rendered.append(yaml.safe_dump(app.openapi(), sort_keys=False, allow_unicode=True))
        return Response(content=rendered[0], media_type="application/yaml")


def create_app(*, enable_lifespan: bool = True, settings: Settings | None = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        enable_lifespan: Wire adapters on startup. Tests disable it and
            override the dependency providers instead.
        settings: Settings to build with (defaults to ``get_settings()``).
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.api.title,
        version=settings.api.version,
        description=DESCRIPTION,
        debug=settings.api.debug,
        lifespan=lifespan_manager if enable_lifespan else None,
        redoc_url=None,
        default_response_class=ORJSONResponse,
    )

    # Browsers only need to read ratings and trigger fetches; credentials are never cookies.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_methods=["GET", "POST", "DELETE"],
        allow_headers=["Content-Type", "X-API-Key"],
    )
    app.add_exception_handler(ContainerNotReadyError, _container_not_ready)

    app.include_router(health.router, prefix="/health", tags=["Health"])
    app.include_router(
        ratings.router,
        prefix=API_PREFIX,
        tags=["Ratings"],
        dependencies=[Depends(require_api_key)],
    )
    _mount_openapi_yaml(app)

    if settings.api.api_key:
        logger.info(f"API key required for {API_PREFIX} routes")
    return app
