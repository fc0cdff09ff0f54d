"""
Sequential Batch Fetcher
========================

Fetches vote data for an arbitrary number of items in small batches,
one batch at a time.

The ratings service administrators asked for batches of at most 10 items
and no parallel requests, so batch i+1 is never started before batch i
has settled. A failed batch is logged, recorded and skipped.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from community_ratings.domain.services.batching import DEFAULT_BATCH_SIZE, partition
from community_ratings.ports.ratings_api import RatingsAPIError

if TYPE_CHECKING:
    from community_ratings.domain.entities import (
        ActivityMode,
        FetchRequest,
        FetchResponse,
        Platform,
    )
    from community_ratings.ports.progress import ProgressTracker
    from community_ratings.ports.ratings_api import RatingsAPI

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BatchFailure:
    """A batch that contributed no items."""

    batch_index: int
    batch_size: int
    error: str
    status_code: int | None = None


@dataclass
class BulkFetchReport:
    """Accumulated responses plus the record of skipped batches."""

    responses: list[FetchResponse] = field(default_factory=list)
    batches_total: int = 0
    failures: list[BatchFailure] = field(default_factory=list)

    @property
    def batches_failed(self) -> int:
        return len(self.failures)

    @property
    def batches_succeeded(self) -> int:
        return self.batches_total - self.batches_failed

    @property
    def all_failed(self) -> bool:
        """True when at least one batch was sent and none succeeded."""
        return self.batches_total > 0 and self.batches_succeeded == 0


class BulkFetcher:
    """
    Issues one ratings-service call per batch, strictly in order.

    Never raises for batch failures; the result is whatever the
    successful batches returned.
    """

    def __init__(
        self,
        api: RatingsAPI,
        tracker: ProgressTracker | None = None,
        batch_size: int = DEFAULT_BATCH_SIZE,
    ) -> None:
        """
        Initialize the fetcher.

        Args:
            api: Ratings service port.
            tracker: Optional observer for in-flight batches.
            batch_size: Maximum items per request.
        """
        if batch_size < 1:
            raise ValueError(f"Batch size must be at least 1, got {batch_size}")
        self._api = api
        self._tracker = tracker
        self._batch_size = batch_size

    @property
    def batch_size(self) -> int:
        return self._batch_size

    async def fetch_all(
        self,
        requests: Sequence[FetchRequest],
        platform: Platform | int,
        mode: ActivityMode | int,
    ) -> list[FetchResponse]:
        """
        Fetch vote data for every request.

        Returns:
            Responses of all successful batches in batch order. Empty if
            nothing was requested or every batch failed.
        """
        report = await self.fetch_all_with_report(requests, platform, mode)
        return report.responses

    async def fetch_all_with_report(
        self,
        requests: Sequence[FetchRequest],
        platform: Platform | int,
        mode: ActivityMode | int,
    ) -> BulkFetchReport:
        """Fetch vote data for every request and report skipped batches."""
        if not requests:
            return BulkFetchReport()

        batches = partition(requests, self._batch_size)
        report = BulkFetchReport(batches_total=len(batches))

        for index, batch in enumerate(batches):
            operation = asyncio.ensure_future(self._api.fetch_batch(batch, platform, mode))
            self._track(operation)

            try:
                report.responses.extend(await operation)
            except RatingsAPIError as e:
                logger.warning(
                    "Ratings batch %d/%d failed (%d items): %s",
                    index + 1,
                    len(batches),
                    len(batch),
                    e,
                    extra={
                        "batch_index": index,
                        "batch_size": len(batch),
                        "platform": int(platform),
                        "mode": int(mode),
                        "status_code": e.status_code,
                    },
                )
                report.failures.append(
                    BatchFailure(index, len(batch), str(e), status_code=e.status_code)
                )
            except Exception as e:
                logger.exception(
                    "Ratings batch %d/%d raised unexpectedly (%d items)",
                    index + 1,
                    len(batches),
                    len(batch),
                    extra={"batch_index": index, "batch_size": len(batch)},
                )
                report.failures.append(BatchFailure(index, len(batch), repr(e)))

        logger.debug(
            f"Bulk fetch finished: {len(report.responses)} items from "
            f"{report.batches_succeeded}/{report.batches_total} batches"
        )
        return report

    def _track(self, operation: asyncio.Future) -> None:
        """Hand the in-flight batch to the tracker; tracker errors are ignored."""
        if self._tracker is None:
            return
        try:
            self._tracker.add(operation)
        except Exception as e:
            logger.debug(f"Progress tracker rejected batch operation: {e}")
