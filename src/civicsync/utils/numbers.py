"""Rounding helpers shared by the aggregator."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float) -> int:
    """Round to the nearest int with .5 going up (not banker's rounding)."""
    return int(math.floor(value + 0.5))


def percentage(part: int, total: int) -> int:
    """Integer percentage of part in total; 0 when total is 0."""
    if total <= 0:
        return 0
    return round_half_up(part / total * 100)


def fixed(value: float, places: int = 2) -> str:
    """Format with ``places`` decimals, exact ties rounding away from zero.

    Works on the exact binary value, so 12.125 gives "12.13" while 1.005
    (stored as 1.00499...) gives "1.00".
    """
    quantum = Decimal(1).scaleb(-places)
    return str(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))
