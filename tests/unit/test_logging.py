"""
Tests for Logging Utilities
===========================
"""

import logging

from community_ratings.infrastructure.logging import ThrottledPathAccessFilter


def _record(message: str) -> logging.LogRecord:
    return logging.LogRecord("uvicorn.access", logging.INFO, __file__, 1, message, None, None)


class TestThrottledPathAccessFilter:
    """Tests for probe access-log throttling."""

    def test_other_paths_pass(self) -> None:
        log_filter = ThrottledPathAccessFilter()

        assert log_filter.filter(_record('"POST /api/v1/ratings/fetch HTTP/1.1" 200'))
        assert log_filter.filter(_record('"POST /api/v1/ratings/fetch HTTP/1.1" 200'))

    def test_probe_is_throttled(self) -> None:
        log_filter = ThrottledPathAccessFilter(min_interval_seconds=3600)

        assert log_filter.filter(_record('"GET /health/live HTTP/1.1" 200'))
        assert not log_filter.filter(_record('"GET /health/live HTTP/1.1" 200'))
        assert log_filter.filter(_record('"GET /health/ready HTTP/1.1" 200'))

    def test_zero_interval_disables_throttling(self) -> None:
        log_filter = ThrottledPathAccessFilter(min_interval_seconds=0)

        assert log_filter.filter(_record('"GET /health/live HTTP/1.1" 200'))
        assert log_filter.filter(_record('"GET /health/live HTTP/1.1" 200'))
