"""Numeric helpers."""
from __future__ import annotations

import math


def round_half_up(value: float, ndigits: int = 0) -> float | int:
    """Round with halves going up (12.5 -> 13), unlike the built-in banker's rounding."""
    if ndigits == 0:
        return math.floor(value + 0.5)
    factor = 10 ** ndigits
    return math.floor(value * factor + 0.5) / factor
