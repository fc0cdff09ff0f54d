"""
In-Memory Ratings Store
=======================

Process-lifetime ratings snapshot with copy-on-write updates.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable

from community_ratings.domain.entities import Rating, RatingsSnapshot
from community_ratings.ports.ratings_store import RatingsStore

logger = logging.getLogger(__name__)


class InMemoryRatingsStore(RatingsStore):
    """
    Ratings store backed by an immutable snapshot that is swapped on update.

    Each update builds a complete new snapshot under a lock and replaces
    the reference in one assignment, so readers never see a partial merge.
    """

    def __init__(self, initial: Iterable[Rating] | None = None) -> None:
        self._lock = threading.Lock()
        ratings = {rating.key: rating for rating in initial or ()}
        self._snapshot = RatingsSnapshot(
            ratings, max((r.rating_count for r in ratings.values()), default=0)
        )

    def snapshot(self) -> RatingsSnapshot:
        return self._snapshot

    def update_ratings(
        self,
        ratings: Iterable[Rating],
        max_total_votes: int = 0,
    ) -> RatingsSnapshot:
        incoming = {rating.key: rating for rating in ratings}

        with self._lock:
            current = self._snapshot
            merged = dict(current.ratings)
            merged.update(incoming)
            new_max = max(
                current.max_total_votes,
                max_total_votes,
                max((r.rating_count for r in incoming.values()), default=0),
            )
            snapshot = RatingsSnapshot(merged, new_max)
            self._snapshot = snapshot

        logger.debug(
            f"Installed {len(incoming)} ratings "
            f"(known: {len(merged)}, max_total_votes: {new_max})"
        )
        return snapshot

    def reset(self) -> int:
        with self._lock:
            cleared = len(self._snapshot)
            self._snapshot = RatingsSnapshot()

        logger.info(f"Ratings store reset ({cleared} ratings cleared)")
        return cleared
