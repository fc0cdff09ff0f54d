"""
Outbound Adapters
=================

Concrete implementations of the ports for the ratings service,
the ratings store and progress tracking.
"""

from community_ratings.adapters.outbound.dtr_http import DestinyTrackerAdapter
from community_ratings.adapters.outbound.loading_tracker import (
    LoadingTracker,
    NullProgressTracker,
)
from community_ratings.adapters.outbound.store_memory import InMemoryRatingsStore

__all__ = [
    "DestinyTrackerAdapter",
    "InMemoryRatingsStore",
    "LoadingTracker",
    "NullProgressTracker",
]
