import math


def round_half_up(value):
    """
    Rounds to the nearest integer, halves away from zero for positive values.

    The built-in round() uses banker's rounding (round(2.5) == 2); reports
    expect 2.5 to become 3.
    """
    return int(math.floor(value + 0.5))


def safe_percentage(numerator, denominator):
    """numerator / denominator as a rounded percentage, 0 when denominator is not positive."""
    if denominator <= 0:
        return 0
    return round_half_up(numerator / denominator * 100)
