"""
Pytest Fixtures
===============

Shared fixtures for all test modules.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from datetime import UTC, datetime

import pytest

from community_ratings.adapters.outbound.store_memory import InMemoryRatingsStore
from community_ratings.application.ratings_merger import RatingsMerger
from community_ratings.domain.entities import (
    ActivityMode,
    FetchRequest,
    FetchResponse,
    Platform,
    RawVoteTally,
)
from community_ratings.domain.services.scorer import VoteScorer
from community_ratings.ports.ratings_api import RatingsAPI, RatingsAPIError

FIXED_NOW = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)


def make_response(
    reference_id: int,
    total: int = 0,
    downvotes: int = 0,
    review_total: int = 0,
    review_downvotes: int = 0,
    perks: list[int] | None = None,
) -> FetchResponse:
    """Helper to build a fetch response with specific vote counts."""
    return FetchResponse(
        reference_id=reference_id,
        available_perks=perks,
        votes=RawVoteTally(total=total, downvotes=downvotes, upvotes=total - downvotes),
        review_votes=RawVoteTally(
            total=review_total,
            downvotes=review_downvotes,
            upvotes=review_total - review_downvotes,
        ),
    )


class FakeRatingsAPI(RatingsAPI):
    """
    In-memory ratings service.

    Answers every request with a zero-vote response, records call
    start/end events, and fails the batch indices listed in ``fail_on``.
    """

    def __init__(self, fail_on: set[int] | None = None, delay: float = 0.0) -> None:
        self.fail_on = fail_on or set()
        self.delay = delay
        self.calls: list[list[FetchRequest]] = []
        self.events: list[tuple[str, int]] = []
        self.params: list[tuple[int, int]] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def fetch_batch(self, batch, platform, mode) -> list[FetchResponse]:
        index = len(self.calls)
        self.calls.append(list(batch))
        self.params.append((int(platform), int(mode)))
        self.events.append(("start", index))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delay)
            if index in self.fail_on:
                raise RatingsAPIError(f"batch {index} failed", status_code=500)
            return [
                make_response(item.reference_id, perks=item.available_perks) for item in batch
            ]
        finally:
            self.in_flight -= 1
            self.events.append(("end", index))


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    return lambda: FIXED_NOW


@pytest.fixture
def sample_requests() -> list[FetchRequest]:
    """25 requests: three batches of 10, 10 and 5."""
    return [
        FetchRequest(reference_id=1000 + i, available_perks=[i, i + 1] if i % 2 else None)
        for i in range(25)
    ]


@pytest.fixture
def fake_api() -> FakeRatingsAPI:
    return FakeRatingsAPI()


@pytest.fixture
def store() -> InMemoryRatingsStore:
    return InMemoryRatingsStore()


@pytest.fixture
def scorer() -> VoteScorer:
    return VoteScorer(text_review_multiplier=10)


@pytest.fixture
def merger(store: InMemoryRatingsStore, scorer: VoteScorer, fixed_clock) -> RatingsMerger:
    return RatingsMerger(store=store, scorer=scorer, clock=fixed_clock)


@pytest.fixture
def platform() -> Platform:
    return Platform.PSN


@pytest.fixture
def mode() -> ActivityMode:
    return ActivityMode.PLAYER_VERSUS_ENEMY
