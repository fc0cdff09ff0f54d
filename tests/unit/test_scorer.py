"""
Tests for the Vote Scorer
=========================
"""

import math

import pytest

from community_ratings.domain.services.roll import FIXED_ROLL, get_roll
from community_ratings.domain.services.scorer import (
    VoteScorer,
    downvote_multiplier,
    round_to_at_most_one_decimal,
)
from tests.conftest import make_response


class TestRounding:
    """Tests for round_to_at_most_one_decimal."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (0, 0),
            (3.47, 3.5),
            (3.44, 3.4),
            (4.5, 4.5),
            (0.25, 0.3),  # halves round up
            (5, 5),
        ],
    )
    def test_rounding(self, value: float, expected: float) -> None:
        assert round_to_at_most_one_decimal(value) == expected

    def test_nan_is_zero(self) -> None:
        assert round_to_at_most_one_decimal(math.nan) == 0


class TestDownvoteMultiplier:
    """Tiers use strict comparisons against the vote maximum."""

    @pytest.mark.parametrize(
        ("votes_total", "expected"),
        [
            (100, 1.0),
            (76, 1.0),
            (75, 1.5),  # exactly 75%: lower tier
            (51, 1.5),
            (50, 2.0),  # exactly 50%
            (26, 2.0),
            (25, 2.5),  # exactly 25%
            (0, 2.5),
        ],
    )
    def test_tiers(self, votes_total: int, expected: float) -> None:
        assert downvote_multiplier(votes_total, 100) == expected

    def test_zero_maximum(self) -> None:
        assert downvote_multiplier(1, 0) == 1.0
        assert downvote_multiplier(0, 0) == 2.5


class TestVoteScorer:
    """Tests for VoteScorer.score."""

    @pytest.fixture
    def scorer(self) -> VoteScorer:
        return VoteScorer(text_review_multiplier=10)

    def test_established_item(self, scorer: VoteScorer) -> None:
        response = make_response(1, total=100, downvotes=10)

        assert scorer.score(response, 100) == 4.5

    def test_low_volume_item_is_floored(self, scorer: VoteScorer) -> None:
        # D = 2.5, raw = ((10 - 25) / 10) * 5 = -7.5
        response = make_response(2, total=10, downvotes=10)

        assert scorer.score(response, 100) == 1.0

    def test_all_downvotes_floor(self, scorer: VoteScorer) -> None:
        response = make_response(3, total=5, downvotes=5)

        assert scorer.score(response, 5) == 1.0

    def test_no_votes(self, scorer: VoteScorer) -> None:
        assert scorer.score(make_response(4), 100) == 0.0

    def test_perfect_score(self, scorer: VoteScorer) -> None:
        assert scorer.score(make_response(5, total=1), 1) == 5.0

    def test_review_votes_are_weighted(self, scorer: VoteScorer) -> None:
        # total = 10 + 1*10 = 20, down = 0 + 1*10 = 10, D = 1
        response = make_response(6, total=10, review_total=1, review_downvotes=1)

        assert scorer.score(response, 10) == 2.5

    def test_multiplier_is_injected(self) -> None:
        response = make_response(6, total=10, review_total=1, review_downvotes=1)

        # total = 12, down = 2, D = 1 -> (10 / 12) * 5 = 4.17
        assert VoteScorer(text_review_multiplier=2).score(response, 10) == 4.2

    def test_review_only_negative_is_clamped_to_zero(self, scorer: VoteScorer) -> None:
        # No plain votes, so the floor does not apply; raw score is negative.
        response = make_response(7, review_total=1, review_downvotes=1)

        assert scorer.score(response, 100) == 0.0

    def test_tier_boundary_uses_lower_tier(self, scorer: VoteScorer) -> None:
        # 75 votes of max 100 -> D = 1.5: ((75 - 15) / 75) * 5 = 4.0
        response = make_response(8, total=75, downvotes=10)

        assert scorer.score(response, 100) == 4.0

    @pytest.mark.parametrize("downvotes", range(0, 21, 4))
    @pytest.mark.parametrize("max_total_votes", [0, 20, 50, 1000])
    def test_score_is_bounded(
        self, scorer: VoteScorer, downvotes: int, max_total_votes: int
    ) -> None:
        response = make_response(9, total=20, downvotes=downvotes, review_total=2)

        assert 0.0 <= scorer.score(response, max_total_votes) <= 5.0


class TestRoll:
    """Tests for roll signatures."""

    def test_perk_list(self) -> None:
        assert get_roll([3, 1, 2]) == "3,1,2"

    @pytest.mark.parametrize("perks", [None, []])
    def test_fixed(self, perks) -> None:
        assert get_roll(perks) == FIXED_ROLL
