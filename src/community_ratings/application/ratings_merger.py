"""
Ratings Merger
==============

Scores fetched vote data and publishes it into the ratings store.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from community_ratings.domain.entities import Rating
from community_ratings.domain.services.roll import get_roll

if TYPE_CHECKING:
    from community_ratings.domain.entities import FetchResponse
    from community_ratings.domain.services.scorer import VoteScorer
    from community_ratings.ports.ratings_store import RatingsStore

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class RatingsMerger:
    """
    Turns fetch responses into ratings and installs them in one update.

    The vote maximum used for the downvote tiers spans both the new
    responses and everything already in the store, so tiers stay stable
    across repeated fetches.
    """

    def __init__(
        self,
        store: RatingsStore,
        scorer: VoteScorer,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._store = store
        self._scorer = scorer
        self._clock = clock

    def add_scores(self, responses: Sequence[FetchResponse]) -> list[Rating]:
        """
        Score *responses* and install the resulting ratings.

        Returns:
            The ratings that were installed (empty for empty input).
        """
        if not responses:
            return []

        snapshot = self._store.snapshot()
        max_total_votes = max(
            max(response.votes.total for response in responses),
            snapshot.max_total_votes,
        )

        now = self._clock()
        ratings = [self._make_rating(response, max_total_votes, now) for response in responses]

        self._store.update_ratings(ratings, max_total_votes)
        logger.info(f"Added {len(ratings)} community ratings (max_total_votes={max_total_votes})")
        return ratings

    def _make_rating(
        self,
        response: FetchResponse,
        max_total_votes: int,
        now: datetime,
    ) -> Rating:
        return Rating(
            reference_id=response.reference_id,
            roll=get_roll(response.available_perks),
            overall_score=self._scorer.score(response, max_total_votes),
            last_updated=now,
            rating_count=max(0, response.votes.total),
            # TODO: populate once the fetch endpoint returns highlighted review counts
            highlighted_rating_count=0,
        )
