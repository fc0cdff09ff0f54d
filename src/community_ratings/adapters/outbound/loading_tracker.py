"""
Loading Tracker
===============

Counts in-flight fetch operations so a caller can show progress.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from typing import Any

from community_ratings.ports.progress import ProgressTracker

logger = logging.getLogger(__name__)


class LoadingTracker(ProgressTracker):
    """Tracks how many registered operations are still pending."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._active = 0
        self._total = 0

    @property
    def active_count(self) -> int:
        return self._active

    @property
    def total_tracked(self) -> int:
        return self._total

    @property
    def is_loading(self) -> bool:
        return self._active > 0

    def add(self, operation: asyncio.Future[Any]) -> None:
        with self._lock:
            self._active += 1
            self._total += 1
        operation.add_done_callback(self._on_done)

    def _on_done(self, operation: asyncio.Future[Any]) -> None:
        with self._lock:
            self._active -= 1
            remaining = self._active
        logger.debug(f"Tracked operation settled ({remaining} still loading)")


class NullProgressTracker(ProgressTracker):
    """Tracker that ignores everything."""

    def add(self, operation: asyncio.Future[Any]) -> None:
        return None
