"""
Vote Scorer
===========

Converts raw vote tallies into a bounded 0-5 community score.

Downvotes are penalized harder on items whose vote volume is small
relative to the most-voted item seen so far, so a single negative vote
on a low-sample item pulls its score down further.
"""

from __future__ import annotations

import math

from community_ratings.domain.entities import FetchResponse

MAX_SCORE = 5.0
MIN_SCORE = 0.0

# Score floor for items with at least one plain vote.
FLOOR_SCORE = 1.0

# (share of max_total_votes that must be exceeded, downvote multiplier),
# checked top-down. Anything at or below the last share gets the fallback.
DOWNVOTE_TIERS: tuple[tuple[float, float], ...] = (
    (0.75, 1.0),
    (0.50, 1.5),
    (0.25, 2.0),
)
FALLBACK_DOWNVOTE_MULTIPLIER = 2.5

# Written reviews count this many times a plain vote unless configured otherwise.
DEFAULT_TEXT_REVIEW_MULTIPLIER = 10


def round_to_at_most_one_decimal(rating: float) -> float:
    """
    Round to the nearest tenth, halves rounded up.

    Zero, falsy and NaN inputs give 0.
    """
    if not rating or math.isnan(rating):
        return 0.0

    return math.floor(rating * 10 + 0.5) / 10


def downvote_multiplier(votes_total: int, max_total_votes: int) -> float:
    """
    Return the downvote penalty for an item's plain-vote volume.

    Comparisons are strict: a volume exactly on a tier boundary falls
    into the lower (harsher) tier.
    """
    for share, multiplier in DOWNVOTE_TIERS:
        if votes_total > max_total_votes * share:
            return multiplier
    return FALLBACK_DOWNVOTE_MULTIPLIER


class VoteScorer:
    """
    Scores fetch responses against the current maximum vote volume.

    Review votes are weighted by ``text_review_multiplier`` relative to
    plain up/down votes.
    """

    def __init__(self, text_review_multiplier: float = DEFAULT_TEXT_REVIEW_MULTIPLIER) -> None:
        self._text_review_multiplier = text_review_multiplier

    @property
    def text_review_multiplier(self) -> float:
        return self._text_review_multiplier

    def score(self, response: FetchResponse, max_total_votes: int) -> float:
        """
        Compute the community score for one item.

        Args:
            response: Vote data from the ratings service.
            max_total_votes: Largest plain-vote volume known so far.

        Returns:
            Score in [0, 5], rounded to at most one decimal.
        """
        votes = response.votes
        review_votes = response.review_votes

        total_votes = votes.total + review_votes.total * self._text_review_multiplier
        total_down_votes = votes.downvotes + review_votes.downvotes * self._text_review_multiplier

        if total_votes == 0:
            return 0.0

        multiplier = downvote_multiplier(votes.total, max_total_votes)
        rating = ((total_votes - total_down_votes * multiplier) / total_votes) * MAX_SCORE

        if rating < FLOOR_SCORE and votes.total > 0:
            return FLOOR_SCORE

        return min(MAX_SCORE, max(MIN_SCORE, round_to_at_most_one_decimal(rating)))
