"""
Dependency Injection Container
==============================

Provides FastAPI dependency functions for injecting ports and use cases.
Wires adapters to ports based on configuration.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from fastapi import FastAPI

from community_ratings.adapters.outbound.dtr_http import DestinyTrackerAdapter
from community_ratings.adapters.outbound.loading_tracker import LoadingTracker
from community_ratings.adapters.outbound.store_memory import InMemoryRatingsStore
from community_ratings.application.bulk_fetch import BulkFetcher
from community_ratings.application.fetch_ratings import BulkFetchRatingsUseCase
from community_ratings.application.ratings_merger import RatingsMerger
from community_ratings.domain.services.scorer import VoteScorer
from community_ratings.infrastructure.config import get_settings
from community_ratings.ports.ratings_api import RatingsAPI
from community_ratings.ports.ratings_store import RatingsStore

logger = logging.getLogger(__name__)


class ContainerNotReadyError(RuntimeError):
    """A dependency was requested before the container was wired."""


# -----------------------------------------------------------------------------
# Singleton holders (initialized on app startup)
# -----------------------------------------------------------------------------

_ratings_api: DestinyTrackerAdapter | None = None
_ratings_store: RatingsStore | None = None
_loading_tracker: LoadingTracker | None = None
_fetch_use_case: BulkFetchRatingsUseCase | None = None


# -----------------------------------------------------------------------------
# Lifecycle management
# -----------------------------------------------------------------------------


@asynccontextmanager
async def lifespan_manager(app: FastAPI) -> AsyncIterator[dict[str, Any]]:
    """
    Manage application lifecycle: initialize and cleanup adapters.

    Usage in FastAPI:
        app = FastAPI(lifespan=lifespan_manager)
    """
    await _initialize_adapters()
    try:
        yield {}
    finally:
        await _cleanup_adapters()


async def _initialize_adapters() -> None:
    """
    Initialize all adapters based on configuration.

    This is where concrete adapter implementations are wired to ports.
    """
    global _ratings_api, _ratings_store, _loading_tracker, _fetch_use_case

    settings = get_settings()
    logger.info(f"Initializing DI container - Environment: {settings.environment}")

    _ratings_api = DestinyTrackerAdapter(settings.dtr)
    await _ratings_api.connect()

    _ratings_store = InMemoryRatingsStore()
    _loading_tracker = LoadingTracker()

    fetcher = BulkFetcher(
        api=_ratings_api,
        tracker=_loading_tracker,
        batch_size=settings.dtr.batch_size,
    )
    merger = RatingsMerger(
        store=_ratings_store,
        scorer=VoteScorer(text_review_multiplier=settings.dtr.text_review_multiplier),
    )
    _fetch_use_case = BulkFetchRatingsUseCase(
        fetcher=fetcher,
        merger=merger,
        store=_ratings_store,
    )
    logger.info(
        "BulkFetchRatingsUseCase initialized: batch_size=%d, text_review_multiplier=%s",
        settings.dtr.batch_size,
        settings.dtr.text_review_multiplier,
    )


async def _cleanup_adapters() -> None:
    """Close the ratings service client and drop all singletons."""
    global _ratings_api, _ratings_store, _loading_tracker, _fetch_use_case

    logger.info("Starting adapter cleanup...")

    if _ratings_api is not None:
        try:
            await asyncio.shield(asyncio.wait_for(_ratings_api.disconnect(), timeout=5.0))
        except TimeoutError:
            logger.warning("Ratings service disconnect timed out")
        except asyncio.CancelledError:
            logger.warning("Ratings service disconnect cancelled")
        except Exception as e:
            logger.warning(f"Ratings service disconnect failed: {e}")
        _ratings_api = None

    _ratings_store = None
    _loading_tracker = None
    _fetch_use_case = None

    logger.info("Adapter cleanup complete")


# -----------------------------------------------------------------------------
# FastAPI Dependency providers
# -----------------------------------------------------------------------------


async def get_ratings_api() -> RatingsAPI:
    """Dependency: Get the ratings service adapter."""
    if _ratings_api is None:
        raise ContainerNotReadyError("Ratings API not initialized.")
    return _ratings_api


async def get_ratings_store() -> RatingsStore:
    """Dependency: Get the ratings store."""
    if _ratings_store is None:
        raise ContainerNotReadyError("Ratings store not initialized.")
    return _ratings_store


async def get_loading_tracker() -> LoadingTracker:
    """Dependency: Get the loading tracker."""
    if _loading_tracker is None:
        raise ContainerNotReadyError("Loading tracker not initialized.")
    return _loading_tracker


async def get_fetch_use_case() -> BulkFetchRatingsUseCase:
    """Dependency: Get the bulk fetch use-case instance."""
    if _fetch_use_case is None:
        raise ContainerNotReadyError("BulkFetchRatingsUseCase not initialized.")
    return _fetch_use_case


def is_initialized() -> bool:
    """Whether the container has been wired (used by readiness checks)."""
    return _fetch_use_case is not None
