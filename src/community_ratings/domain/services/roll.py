"""Roll signatures for rated items."""

from __future__ import annotations

from collections.abc import Sequence

# Signature used for items without a perk list (fixed rolls).
FIXED_ROLL = "fixed"


def get_roll(available_perks: Sequence[int] | None) -> str:
    """Return the roll signature for a perk list: comma-joined hashes, or ``"fixed"``."""
    if not available_perks:
        return FIXED_ROLL
    return ",".join(str(perk) for perk in available_perks)
