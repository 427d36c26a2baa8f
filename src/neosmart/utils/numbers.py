from __future__ import annotations

import math


def round_half_up(value: float, digits: int = 0) -> float:
    """Round with halves going towards positive infinity (21.25 -> 21.3)."""
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))
