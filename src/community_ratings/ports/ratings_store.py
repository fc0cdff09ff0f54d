"""
RatingsStore Port
=================

Abstract interface for the process-wide ratings snapshot.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from community_ratings.domain.entities import Rating, RatingsSnapshot


class RatingsStore(ABC):
    """
    Port for reading and atomically updating known ratings.

    Implementations must never expose a partially applied update and must
    keep ``max_total_votes`` from decreasing, except on ``reset``.
    """

    @abstractmethod
    def snapshot(self) -> RatingsSnapshot:
        """Return the current immutable snapshot."""
        ...

    @abstractmethod
    def update_ratings(
        self,
        ratings: Iterable[Rating],
        max_total_votes: int = 0,
    ) -> RatingsSnapshot:
        """
        Install new or updated ratings in one step (replace by key).

        Args:
            ratings: Ratings to install.
            max_total_votes: Vote maximum observed by the caller.

        Returns:
            The snapshot now visible to readers.
        """
        ...

    @abstractmethod
    def reset(self) -> int:
        """
        Drop every rating and the running vote maximum.

        Returns:
            Number of ratings removed.
        """
        ...
