"""
Tests for the In-Memory Ratings Store
=====================================
"""

from concurrent.futures import ThreadPoolExecutor

from community_ratings.adapters.outbound.store_memory import InMemoryRatingsStore
from community_ratings.domain.entities import Rating


def _rating(reference_id: int, roll: str = "fixed", score: float = 3.0, count: int = 1) -> Rating:
    return Rating(reference_id=reference_id, roll=roll, overall_score=score, rating_count=count)


class TestInMemoryRatingsStore:
    """Tests for InMemoryRatingsStore."""

    def test_starts_empty(self, store) -> None:
        snapshot = store.snapshot()

        assert len(snapshot) == 0
        assert snapshot.max_total_votes == 0

    def test_update_replaces_snapshot(self, store) -> None:
        before = store.snapshot()

        after = store.update_ratings([_rating(1), _rating(2, "4,5")])

        assert after is store.snapshot()
        assert after is not before
        assert len(before) == 0
        assert len(after) == 2

    def test_same_key_overwrites(self, store) -> None:
        store.update_ratings([_rating(1, score=2.0)])
        store.update_ratings([_rating(1, score=4.0)])

        snapshot = store.snapshot()
        assert len(snapshot) == 1
        assert snapshot.get(1, "fixed").overall_score == 4.0

    def test_max_total_votes(self, store) -> None:
        store.update_ratings([_rating(1, count=10)], max_total_votes=50)
        store.update_ratings([_rating(2, count=80)])
        store.update_ratings([_rating(2, count=1)], max_total_votes=3)

        assert store.snapshot().max_total_votes == 80

    def test_initial_ratings(self) -> None:
        store = InMemoryRatingsStore([_rating(1, count=7), _rating(2, count=3)])

        assert len(store.snapshot()) == 2
        assert store.snapshot().max_total_votes == 7

    def test_reset(self, store) -> None:
        store.update_ratings([_rating(1, count=9), _rating(2)])

        assert store.reset() == 2
        assert len(store.snapshot()) == 0
        assert store.snapshot().max_total_votes == 0

    def test_concurrent_updates_keep_all_ratings(self, store) -> None:
        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(lambda i: store.update_ratings([_rating(i, count=i)]), range(200)))

        snapshot = store.snapshot()
        assert len(snapshot) == 200
        assert snapshot.max_total_votes == 199
