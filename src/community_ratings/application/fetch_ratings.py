"""
BulkFetchRatingsUseCase
=======================

Primary application use-case: fetch community votes for a list of items
and fold them into the ratings store.

Flow:
1. Fetch vote data batch by batch (failed batches are skipped)
2. Score the responses against the running vote maximum
3. Install the new ratings in one store update
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from community_ratings.application.bulk_fetch import BulkFetcher, BulkFetchReport
    from community_ratings.application.ratings_merger import RatingsMerger
    from community_ratings.domain.entities import (
        ActivityMode,
        FetchRequest,
        Platform,
        Rating,
        RatingsSnapshot,
    )
    from community_ratings.ports.ratings_store import RatingsStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BulkFetchOutcome:
    """Result of one bulk fetch cycle."""

    report: BulkFetchReport
    ratings: list[Rating]
    snapshot: RatingsSnapshot
    processing_time_ms: float


class BulkFetchRatingsUseCase:
    """
    Orchestrates a fetch cycle through the ports.

    Only abstract ports and application services are injected; the use
    case never touches HTTP or storage details.
    """

    def __init__(
        self,
        fetcher: BulkFetcher,
        merger: RatingsMerger,
        store: RatingsStore,
    ) -> None:
        self._fetcher = fetcher
        self._merger = merger
        self._store = store

    async def execute(
        self,
        requests: Sequence[FetchRequest],
        platform: Platform | int,
        mode: ActivityMode | int,
    ) -> BulkFetchOutcome:
        """
        Run one fetch cycle.

        Args:
            requests: Items to rate, in the order they should be fetched.
            platform: Membership type discriminator.
            mode: Activity mode discriminator.

        Returns:
            The fetch report, the ratings installed and the resulting snapshot.
        """
        start_time = time.perf_counter()

        report = await self._fetcher.fetch_all_with_report(requests, platform, mode)
        ratings = self._merger.add_scores(report.responses)

        if report.all_failed:
            logger.error(
                f"All {report.batches_total} ratings batches failed "
                f"for {len(requests)} requested items"
            )
        else:
            logger.info(
                f"Bulk fetch: {len(requests)} requested, {len(report.responses)} received, "
                f"{report.batches_failed}/{report.batches_total} batches failed"
            )

        return BulkFetchOutcome(
            report=report,
            ratings=ratings,
            snapshot=self._store.snapshot(),
            processing_time_ms=(time.perf_counter() - start_time) * 1000,
        )
