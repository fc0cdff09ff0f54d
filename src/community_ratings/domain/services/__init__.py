"""
Domain Services
===============

Pure functions and services for batching requests and scoring votes.
"""

from community_ratings.domain.services.batching import DEFAULT_BATCH_SIZE, partition
from community_ratings.domain.services.roll import FIXED_ROLL, get_roll
from community_ratings.domain.services.scorer import (
    VoteScorer,
    downvote_multiplier,
    round_to_at_most_one_decimal,
)

__all__ = [
    "DEFAULT_BATCH_SIZE",
    "FIXED_ROLL",
    "VoteScorer",
    "downvote_multiplier",
    "get_roll",
    "partition",
    "round_to_at_most_one_decimal",
]
