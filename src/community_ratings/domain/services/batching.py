"""
Batch Partitioner
=================

Splits an ordered request list into fixed-size batches.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")

# The ratings service asks for at most 10 items per request.
DEFAULT_BATCH_SIZE = 10


def partition(items: Sequence[T], size: int = DEFAULT_BATCH_SIZE) -> list[list[T]]:
    """
    Split *items* into consecutive batches of at most *size*.

    Order is preserved within and across batches; only the last batch
    may be shorter. An empty input yields no batches.

    Raises:
        ValueError: If *size* is less than 1.
    """
    if size < 1:
        raise ValueError(f"Batch size must be at least 1, got {size}")

    return [list(items[start : start + size]) for start in range(0, len(items), size)]
