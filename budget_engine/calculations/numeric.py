"""
Numeric Primitives

Small helpers shared by every calculation module: exact integer powers,
zero-safe division, rounding and clamping.
"""

from typing import Optional


def int_power(base: float, exponent: int) -> float:
    """
    Raise base to an integer exponent by repeated multiplication.

    Exponents are period counts here, so the discount factor for period n is
    built the same way the period-by-period schedules build balances.
    Negative exponents return the reciprocal.
    """
    result = 1.0
    for _ in range(abs(exponent)):
        result *= base
    if exponent < 0:
        return 1.0 / result
    return result


def safe_divide(numerator: float, denominator: float) -> Optional[float]:
    """Divide, returning None instead of raising on a zero denominator."""
    if denominator == 0:
        return None
    return numerator / denominator


def percent_of(numerator: float, denominator: float) -> Optional[float]:
    """Ratio expressed in percent, or None on a zero denominator."""
    ratio = safe_divide(numerator, denominator)
    if ratio is None:
        return None
    return ratio * 100


def round_money(value: float) -> float:
    """Round to whole cents."""
    return round(value, 2)


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(value, upper))


def periodic_rate(annual_rate_percent: float, periods_per_year: int) -> float:
    """
    Convert a whole-number annual percent into a per-period decimal rate.

    Args:
        annual_rate_percent: Annual rate as a percent (e.g., 4.5 for 4.5%)
        periods_per_year: Number of payment periods in a year

    Returns:
        Periodic rate as decimal (e.g., 0.00375 for 4.5% monthly)
    """
    return annual_rate_percent / periods_per_year / 100
