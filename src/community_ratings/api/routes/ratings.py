"""
Ratings API Endpoints
=====================

Trigger bulk fetches from the ratings service and read the ratings store.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field

from community_ratings.application.fetch_ratings import BulkFetchRatingsUseCase
from community_ratings.domain.entities import ActivityMode, FetchRequest, Platform, Rating
from community_ratings.infrastructure.config import get_settings
from community_ratings.adapters.outbound.loading_tracker import LoadingTracker
from community_ratings.infrastructure.dependencies import (
    get_fetch_use_case,
    get_loading_tracker,
    get_ratings_store,
)
from community_ratings.ports.ratings_store import RatingsStore

router = APIRouter()
logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Request/Response Schemas (API layer DTOs)
# -----------------------------------------------------------------------------


class FetchRatingsRequest(BaseModel):
    """Request body for a bulk ratings fetch."""

    platform: Platform = Field(
        default=Platform.PSN,
        description="Membership type the votes are scoped to.",
    )
    mode: ActivityMode = Field(
        default=ActivityMode.NOT_SPECIFIED,
        description="Activity mode the votes were cast for.",
    )
    items: list[FetchRequest] = Field(
        default_factory=list,
        description="Items to rate, in fetch order.",
        examples=[[{"referenceId": 3628991658, "availablePerks": [1467527085, 2420895100]}]],
    )


class BatchFailureSummary(BaseModel):
    """A skipped batch, as reported to API clients."""

    batch_index: int
    batch_size: int
    error: str
    status_code: int | None = None


class FetchRatingsResponse(BaseModel):
    """Response from a bulk ratings fetch."""

    requested: int
    received: int
    batches_total: int
    batches_failed: int
    failures: list[BatchFailureSummary]
    max_total_votes: int
    ratings: list[Rating]
    processing_time_ms: float


class RatingsListResponse(BaseModel):
    """Listing of the ratings store."""

    count: int
    max_total_votes: int
    ratings: list[Rating]


class ResetResponse(BaseModel):
    """Response from clearing the ratings store."""

    cleared: int


class FetchStatusResponse(BaseModel):
    """Progress of ratings-service batches."""

    is_loading: bool
    active_batches: int
    batches_tracked: int
    known_ratings: int


# -----------------------------------------------------------------------------
# Endpoints
# -----------------------------------------------------------------------------


@router.post(
    "/ratings/fetch",
    response_model=FetchRatingsResponse,
    status_code=status.HTTP_200_OK,
    summary="Fetch community ratings",
    description=(
        "Fetch vote tallies for the given items in sequential batches and "
        "install the computed scores. Failed batches are skipped and reported."
    ),
)
async def fetch_ratings(
    request: FetchRatingsRequest,
    use_case: Annotated[BulkFetchRatingsUseCase, Depends(get_fetch_use_case)],
) -> FetchRatingsResponse:
    """Run one bulk fetch cycle."""
    max_items = get_settings().api.max_items_per_request
    if len(request.items) > max_items:
        raise HTTPException(
            status_code=422,
            detail=f"At most {max_items} items may be fetched per request",
        )

    outcome = await use_case.execute(request.items, request.platform, request.mode)
    report = outcome.report

    return FetchRatingsResponse(
        requested=len(request.items),
        received=len(report.responses),
        batches_total=report.batches_total,
        batches_failed=report.batches_failed,
        failures=[
            BatchFailureSummary(
                batch_index=f.batch_index,
                batch_size=f.batch_size,
                error=f.error,
                status_code=f.status_code,
            )
            for f in report.failures
        ],
        max_total_votes=outcome.snapshot.max_total_votes,
        ratings=outcome.ratings,
        processing_time_ms=round(outcome.processing_time_ms, 2),
    )


@router.get(
    "/ratings",
    response_model=RatingsListResponse,
    summary="List known ratings",
)
async def list_ratings(
    store: Annotated[RatingsStore, Depends(get_ratings_store)],
    reference_id: Annotated[int | None, Query(description="Only this item definition")] = None,
) -> RatingsListResponse:
    """List every rating in the store, optionally for one item definition."""
    snapshot = store.snapshot()
    ratings = snapshot.for_item(reference_id) if reference_id is not None else list(snapshot)
    return RatingsListResponse(
        count=len(ratings),
        max_total_votes=snapshot.max_total_votes,
        ratings=ratings,
    )


@router.get(
    "/ratings/{reference_id}/{roll}",
    response_model=Rating,
    summary="Get one rating",
    responses={404: {"description": "No rating for this roll"}},
)
async def get_rating(
    reference_id: int,
    roll: str,
    store: Annotated[RatingsStore, Depends(get_ratings_store)],
) -> Rating:
    """Return the rating for one (reference_id, roll) pair."""
    rating = store.snapshot().get(reference_id, roll)
    if rating is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No rating for {reference_id} roll {roll}",
        )
    return rating


@router.delete(
    "/ratings",
    response_model=ResetResponse,
    summary="Clear the ratings store",
)
async def reset_ratings(
    store: Annotated[RatingsStore, Depends(get_ratings_store)],
) -> ResetResponse:
    """Drop every rating and the running vote maximum."""
    cleared = store.reset()
    logger.info(f"Ratings store cleared via API ({cleared} ratings)")
    return ResetResponse(cleared=cleared)


@router.get(
    "/ratings/status",
    response_model=FetchStatusResponse,
    summary="Fetch progress",
    description="Whether a batch is in flight, plus counters since startup.",
)
async def fetch_status(
    tracker: Annotated[LoadingTracker, Depends(get_loading_tracker)],
    store: Annotated[RatingsStore, Depends(get_ratings_store)],
) -> FetchStatusResponse:
    """Report in-flight batches for loading indicators."""
    return FetchStatusResponse(
        is_loading=tracker.is_loading,
        active_batches=tracker.active_count,
        batches_tracked=tracker.total_tracked,
        known_ratings=len(store.snapshot()),
    )
