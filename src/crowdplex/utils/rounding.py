"""Rounding helpers."""

import math


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, with .5 rounding up.

    Unlike the built-in round(), which rounds 2.5 down to 2.

    Example:
        >>> round_half_up(2.5)
        3
        >>> round_half_up(66.666)
        67
    """
    return math.floor(value + 0.5)
