"""
Rate Helpers

Percent-like form fields arrive either as fractions (0.05) or as whole
percents (5). These helpers turn them into fractions and apply them as
compound growth.
"""

import math
from typing import Optional


def normalize_fraction(value: float) -> float:
    """
    Interpret a rate that may be a fraction or a whole percent.

    Values above 1 are treated as percents (5 -> 0.05). Anything not
    finite or not positive becomes 0.

    Note: 1 is ambiguous (100% or 1%) and is kept as a fraction, i.e. 100%.

    Args:
        value: Raw rate as entered

    Returns:
        Rate as a decimal fraction
    """
    if not math.isfinite(value) or value <= 0:
        return 0.0
    if value > 1:
        return value / 100
    return value


def to_fraction(value: float, as_percent: Optional[bool] = None) -> float:
    """
    Convert a rate to a fraction in [0, 1] using an explicit unit when known.

    Args:
        value: Raw rate
        as_percent: True if the value is a whole percent (1 = 1%), False if
            it is already a fraction (1 = 100%), None to fall back to
            normalize_fraction()

    Returns:
        Rate as a decimal fraction clamped to [0, 1]
    """
    if as_percent is None:
        return min(normalize_fraction(value), 1.0)

    if not math.isfinite(value) or value <= 0:
        return 0.0

    fraction = value / 100 if as_percent else value
    return min(fraction, 1.0)


def compound(amount: float, rate: float, periods: float) -> float:
    """
    Grow an amount at a per-period rate.

    Negative periods count as 0 and a rate at or below -100% wipes the
    amount out. A growth factor too large for a float becomes infinity
    instead of raising. A zero amount stays 0.

    Args:
        amount: Starting amount
        rate: Growth per period as decimal
        periods: Number of periods, may be fractional

    Returns:
        amount * (1 + rate) ** periods
    """
    if amount == 0:
        return 0.0
    try:
        factor = max(0.0, 1 + rate) ** max(0.0, periods)
    except OverflowError:
        factor = math.inf
    return amount * factor
