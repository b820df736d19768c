"""Rounding helpers.

Python's built-in round() uses banker's rounding (round(2.5) == 2). Loads,
exertion steps and set counts here always round half up instead.
"""

import math


def round_half_up(value: float, step: float = 1.0) -> float:
    """Round value to the nearest multiple of step, ties going up.

    Args:
        value: Number to round
        step: Rounding increment (must be > 0)

    Returns:
        Rounded value as a float
    """
    return math.floor(value / step + 0.5) * step


def round_half_up_int(value: float) -> int:
    """Round value to the nearest integer, ties going up."""
    return int(math.floor(value + 0.5))
