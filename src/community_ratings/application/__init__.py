"""
Application Layer
=================

Use cases and application services orchestrating the ports.
"""

from community_ratings.application.bulk_fetch import BatchFailure, BulkFetcher, BulkFetchReport
from community_ratings.application.fetch_ratings import BulkFetchOutcome, BulkFetchRatingsUseCase
from community_ratings.application.ratings_merger import RatingsMerger

__all__ = [
    "BatchFailure",
    "BulkFetchOutcome",
    "BulkFetchRatingsUseCase",
    "BulkFetchReport",
    "BulkFetcher",
    "RatingsMerger",
]
