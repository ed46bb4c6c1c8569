"""Number formatting helpers for path data and metrics."""

import math
from collections.abc import Callable


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves upwards (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))


def number_formatter(decimals: int | None) -> Callable[[float], str]:
    """Create a number-to-string function for path output.

    Args:
        decimals: Decimal places to round to (None keeps up to 6)

    Returns:
        Formatter producing the shortest representation ("5", "2.5", "-0.1")
    """
    places = 6 if decimals is None else decimals

    def ntos(value: float) -> str:
        rounded = round(value, places)
        if rounded == int(rounded):
            return str(int(rounded))
        return f"{rounded:.{places}f}".rstrip("0").rstrip(".")

    return ntos
