from __future__ import annotations

import math


def round_won(value: float) -> int:
    """Round to the nearest whole won, halves upward (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))
