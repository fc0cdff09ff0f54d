"""
Domain Entities
===============

Core business objects for community item ratings.
Wire-facing models accept the ratings service's camelCase field names
as well as snake_case, and have no infrastructure dependencies.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from datetime import UTC, datetime
from enum import IntEnum
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class ActivityMode(IntEnum):
    """Activity the votes were cast for (ratings service discriminator)."""

    NOT_SPECIFIED = 0
    RAID = 4
    PLAYER_VERSUS_PLAYER = 5
    PLAYER_VERSUS_ENEMY = 7
    IRON_BANNER = 19
    TRIALS = 39


class Platform(IntEnum):
    """Membership type the ratings are scoped to."""

    ALL = -1
    XBOX = 1
    PSN = 2
    STEAM = 3
    BLIZZARD = 4
    STADIA = 5
    EPIC = 6


class _WireModel(BaseModel):
    """Base for models exchanged with the remote ratings service."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class FetchRequest(_WireModel):
    """
    Identifies one item instance to query.

    The perk list disambiguates rolls of the same item definition.
    """

    reference_id: int = Field(..., description="Item definition hash")
    available_perks: list[int] | None = Field(
        default=None, description="Perk hashes identifying the roll"
    )

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )


class RawVoteTally(_WireModel):
    """
    Vote counts as reported by the ratings service. Missing counts are zero.

    Scoring reads only ``total`` and ``downvotes``; ``upvotes`` and the
    service's own ``score`` are kept as received so callers can inspect the
    raw payload.
    """

    total: int = 0
    upvotes: int = 0
    downvotes: int = 0
    score: int = 0

    @field_validator("total", "upvotes", "downvotes", "score", mode="before")
    @classmethod
    def _none_as_zero(cls, value: object) -> object:
        return 0 if value is None else value


class FetchResponse(_WireModel):
    """Vote data for one requested item."""

    reference_id: int
    available_perks: list[int] | None = None
    votes: RawVoteTally = Field(default_factory=RawVoteTally)
    review_votes: RawVoteTally = Field(default_factory=RawVoteTally)

    @field_validator("votes", "review_votes", mode="before")
    @classmethod
    def _missing_tally(cls, value: object) -> object:
        return {} if value is None else value


class Rating(BaseModel):
    """
    Community score for one (reference_id, roll) pair.

    A newer fetch for the same key replaces the previous rating.
    """

    reference_id: int
    roll: str
    overall_score: float = Field(..., ge=0.0, le=5.0)
    last_updated: datetime = Field(default_factory=lambda: datetime.now(UTC))
    rating_count: int = Field(default=0, ge=0)
    # The fetch endpoint never reports highlighted reviews.
    highlighted_rating_count: int = Field(default=0, ge=0)

    model_config = {"frozen": True}

    @property
    def key(self) -> str:
        """Store key for this rating."""
        return rating_key(self.reference_id, self.roll)


def rating_key(reference_id: int, roll: str) -> str:
    """Build the store key for a (reference_id, roll) pair."""
    return f"{reference_id}-{roll}"


class RatingsSnapshot:
    """
    Immutable view of every known rating plus the running vote maximum.

    ``max_total_votes`` is at least the largest ``rating_count`` held.
    """

    __slots__ = ("_ratings", "_max_total_votes")

    def __init__(
        self,
        ratings: Mapping[str, Rating] | None = None,
        max_total_votes: int = 0,
    ) -> None:
        self._ratings = MappingProxyType(dict(ratings or {}))
        self._max_total_votes = max_total_votes

    @property
    def ratings(self) -> Mapping[str, Rating]:
        return self._ratings

    @property
    def max_total_votes(self) -> int:
        return self._max_total_votes

    def get(self, reference_id: int, roll: str) -> Rating | None:
        """Return the rating for a specific roll, if known."""
        return self._ratings.get(rating_key(reference_id, roll))

    def for_item(self, reference_id: int) -> list[Rating]:
        """Return all known rolls of an item definition."""
        return [r for r in self._ratings.values() if r.reference_id == reference_id]

    def __len__(self) -> int:
        return len(self._ratings)

    def __iter__(self) -> Iterator[Rating]:
        return iter(self._ratings.values())

    def __repr__(self) -> str:
        return (
            f"RatingsSnapshot(ratings={len(self._ratings)}, "
            f"max_total_votes={self._max_total_votes})"
        )
