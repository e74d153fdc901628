"""
Return Metrics

ROI-style ratios, NPV, IRR (Newton-Raphson), payback period and
profitability index.

Discount rates here are decimals (0.10 for 10%) so that IRR feeds straight
back into NPV. Ratio results (ROI, ROA, ROE) are percentages.
"""

import logging
from typing import Optional, Sequence

from budget_engine.calculations.cashflow import cumulative_cash_flow
from budget_engine.calculations.numeric import int_power, percent_of, safe_divide

logger = logging.getLogger(__name__)

MAX_ITERATIONS = 100
TOLERANCE = 1e-6
DEFAULT_GUESS = 0.1


def roi(gain: float, cost: float) -> Optional[float]:
    """Return on investment in percent: (gain - cost) / cost."""
    return percent_of(gain - cost, cost)


def roa(net_income: float, total_assets: float) -> Optional[float]:
    """Return on assets in percent."""
    return percent_of(net_income, total_assets)


def roe(net_income: float, shareholder_equity: float) -> Optional[float]:
    """Return on equity in percent."""
    return percent_of(net_income, shareholder_equity)


def npv(rate: float, cash_flows: Sequence[float]) -> float:
    """
    Calculate NPV (Net Present Value) of cash flows.

    The first flow is undiscounted (period 0).

    Args:
        rate: Discount rate per period as decimal (e.g., 0.10 for 10%)
        cash_flows: Array of cash flows (negative = outflow, positive = inflow)

    Returns:
        NPV value
    """
    total = 0.0
    for period, cf in enumerate(cash_flows):
        total += cf / int_power(1 + rate, period)
    return total


def _npv_derivative(rate: float, cash_flows: Sequence[float]) -> float:
    """Derivative of NPV with respect to rate (for Newton-Raphson)."""
    dnpv = 0.0
    for period, cf in enumerate(cash_flows):
        dnpv -= (period * cf) / int_power(1 + rate, period + 1)
    return dnpv


def irr(
    cash_flows: Sequence[float],
    max_iterations: int = MAX_ITERATIONS,
    tolerance: float = TOLERANCE,
) -> Optional[float]:
    """
    Calculate IRR (Internal Rate of Return) using Newton-Raphson method.

    Starts at 10% and stops as soon as |NPV| at the current rate is below
    tolerance, so the returned rate always satisfies that bound.

    Args:
        cash_flows: Array of periodic cash flows
        max_iterations: Upper bound on Newton steps
        tolerance: Absolute NPV accepted as zero

    Returns:
        IRR per period as decimal (e.g., 0.15 for 15%), or None when the
        derivative vanishes, the rate leaves the domain (<= -100%) or the
        iteration budget runs out
    """
    rate = DEFAULT_GUESS

    for _ in range(max_iterations):
        if rate <= -1:
            logger.debug("IRR diverged below -100%% for %d cash flows", len(cash_flows))
            return None

        value = npv(rate, cash_flows)
        if abs(value) < tolerance:
            return rate

        dnpv = _npv_derivative(rate, cash_flows)
        if dnpv == 0:
            logger.debug("IRR calculation failed: zero derivative at rate %s", rate)
            return None

        rate = rate - value / dnpv

    logger.debug("IRR did not converge within %d iterations", max_iterations)
    return None


def payback_period(initial_investment: float, cash_flows: Sequence[float]) -> Optional[int]:
    """
    Number of periods until cumulative cash flow recovers the investment.

    Args:
        initial_investment: Amount invested up front (positive)
        cash_flows: Net inflow per period after the investment

    Returns:
        1-based period count, or None if the investment is never recovered
    """
    for index, position in enumerate(cumulative_cash_flow(cash_flows)):
        if position >= initial_investment:
            return index + 1
    return None


def profitability_index(
    present_value_of_future_cash_flows: float, initial_investment: float
) -> Optional[float]:
    return safe_divide(present_value_of_future_cash_flows, initial_investment)


def future_value(present_value: float, rate: float, periods: int) -> float:
    """Grow a present amount at a per-period decimal rate."""
    return present_value * (1 + rate) ** periods


def present_value(future_value: float, rate: float, periods: int) -> float:
    """Discount a future amount at a per-period decimal rate."""
    return future_value / (1 + rate) ** periods


def simple_interest(principal: float, rate: float, time: float) -> float:
    return principal * rate * time
