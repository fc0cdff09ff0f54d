"""
ProgressTracker Port
====================

Observes in-flight fetch operations (e.g. to drive a loading indicator).
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from typing import Any


class ProgressTracker(ABC):
    """
    Port for observing in-flight operations.

    Purely observational: implementations must not cancel, await or
    otherwise alter the futures they are given.
    """

    @abstractmethod
    def add(self, operation: asyncio.Future[Any]) -> None:
        """Register an in-flight operation."""
        ...
