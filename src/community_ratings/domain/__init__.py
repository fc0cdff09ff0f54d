"""
Domain Layer
============

Core business entities and value objects.
These are persistence-agnostic and contain no infrastructure dependencies.
"""

from community_ratings.domain.entities import (
    ActivityMode,
    FetchRequest,
    FetchResponse,
    Platform,
    Rating,
    RatingsSnapshot,
    RawVoteTally,
    rating_key,
)

__all__ = [
    "ActivityMode",
    "FetchRequest",
    "FetchResponse",
    "Platform",
    "Rating",
    "RatingsSnapshot",
    "RawVoteTally",
    "rating_key",
]
