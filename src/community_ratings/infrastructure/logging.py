"""
Logging utilities for the API runtime.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str = "INFO") -> None:
    """Install the root handler format used by the service."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
    )


class ThrottledPathAccessFilter(logging.Filter):
    """Throttle access log entries for noisy paths (health probes)."""

    def __init__(
        self,
        paths: Iterable[str] = ("/health/live", "/health/ready"),
        min_interval_seconds: float = 120.0,
    ) -> None:
        super().__init__()
        self._paths = tuple(paths)
        self._min_interval_seconds = min_interval_seconds
        self._last_logged: dict[str, float] = {}

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        path = next((p for p in self._paths if p in message), None)
        if path is None:
            return True

        now = time.monotonic()
        last = self._last_logged.get(path)
        if last is None or (now - last) >= self._min_interval_seconds:
            self._last_logged[path] = now
            return True

        return False
