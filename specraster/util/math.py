"""Numeric helper functions used across the layout and DSP logic."""


def nearest_power_of_two_below(x: int) -> int:
    """Return the largest power of two strictly below ``x`` (1 when x <= 2)."""
    n = 1
    while n * 2 < x:
        n *= 2
    return n


def nearest_power_of_two_above(x: int) -> int:
    """Return the smallest power of two >= ``x`` (1 when x <= 1)."""
    n = 1
    while n < x:
        n *= 2
    return n
