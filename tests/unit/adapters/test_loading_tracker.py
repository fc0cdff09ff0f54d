"""
Tests for the Loading Tracker
=============================
"""

import asyncio
import logging

import pytest

from community_ratings.adapters.outbound.loading_tracker import (
    LoadingTracker,
    NullProgressTracker,
)


class TestLoadingTracker:
    """Tests for LoadingTracker."""

    @pytest.mark.asyncio
    async def test_counts_pending_operations(self) -> None:
        tracker = LoadingTracker()
        gate = asyncio.Event()
        operation = asyncio.ensure_future(gate.wait())

        tracker.add(operation)
        assert tracker.is_loading
        assert tracker.active_count == 1

        gate.set()
        await operation
        await asyncio.sleep(0)

        assert not tracker.is_loading
        assert tracker.total_tracked == 1

    @pytest.mark.asyncio
    async def test_failed_operation_settles(self) -> None:
        tracker = LoadingTracker()

        async def fail() -> None:
            raise RuntimeError("nope")

        operation = asyncio.ensure_future(fail())
        tracker.add(operation)
        with pytest.raises(RuntimeError):
            await operation
        await asyncio.sleep(0)

        assert tracker.active_count == 0

    @pytest.mark.asyncio
    async def test_null_tracker(self) -> None:
        operation = asyncio.ensure_future(asyncio.sleep(0))

        assert NullProgressTracker().add(operation) is None
        await operation


class TestLoadingTrackerLogging:
    """The settle message reports the count left after that settle."""

    @pytest.mark.asyncio
    async def test_remaining_count_is_logged(self, caplog) -> None:
        tracker = LoadingTracker()
        first, second = asyncio.Event(), asyncio.Event()
        operations = [asyncio.ensure_future(first.wait()), asyncio.ensure_future(second.wait())]
        for operation in operations:
            tracker.add(operation)

        with caplog.at_level(logging.DEBUG, logger="community_ratings.adapters.outbound"):
            first.set()
            await operations[0]
            await asyncio.sleep(0)
            second.set()
            await operations[1]
            await asyncio.sleep(0)

        assert "(1 still loading)" in caplog.text
        assert "(0 still loading)" in caplog.text
