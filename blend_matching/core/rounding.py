"""Rounding helpers shared by the scoring modules."""

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with .5 always rounding up (62.5 -> 63)."""
    return math.floor(value + 0.5)


def round_to_hundredths(value: float) -> float:
    """Round to two decimals using half-up rounding."""
    return round_half_up(value * 100) / 100
