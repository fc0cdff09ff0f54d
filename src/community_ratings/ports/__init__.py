"""
Ports
=====

Abstract interfaces between the application core and its collaborators.
"""

from community_ratings.ports.progress import ProgressTracker
from community_ratings.ports.ratings_api import (
    RatingsAPI,
    RatingsAPIError,
    RatingsServiceUnavailableError,
)
from community_ratings.ports.ratings_store import RatingsStore

__all__ = [
    "ProgressTracker",
    "RatingsAPI",
    "RatingsAPIError",
    "RatingsServiceUnavailableError",
    "RatingsStore",
]
