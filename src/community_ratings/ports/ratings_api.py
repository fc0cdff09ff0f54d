"""
RatingsAPI Port
===============

Abstract interface for the remote community ratings service.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from community_ratings.domain.entities import (
        ActivityMode,
        FetchRequest,
        FetchResponse,
        Platform,
    )


class RatingsAPIError(Exception):
    """Raised when a batch fetch from the ratings service fails."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class RatingsServiceUnavailableError(RatingsAPIError):
    """The ratings service reported itself unavailable (HTTP 503)."""


class RatingsAPI(ABC):
    """
    Port for fetching vote tallies from the ratings service.

    Responsibilities:
    - One network call per batch
    - Map transport, status and decoding failures to RatingsAPIError

    The service is rate limited; callers are expected to send small
    batches one at a time.
    """

    @abstractmethod
    async def fetch_batch(
        self,
        batch: list[FetchRequest],
        platform: Platform | int,
        mode: ActivityMode | int,
    ) -> list[FetchResponse]:
        """
        Fetch vote data for one batch of items.

        Args:
            batch: Items to query (at most the service's batch limit).
            platform: Membership type discriminator.
            mode: Activity mode discriminator.

        Returns:
            One response per item the service knows about. Items without
            data may be missing; order need not match the request.

        Raises:
            RatingsAPIError: On network error, non-success status or
                malformed payload.
        """
        ...

    @property
    def is_available(self) -> bool:
        """Whether the service is believed reachable."""
        return True

    async def health_check(self) -> bool:
        """Check if the service is operational."""
        return True
