"""
Cash Flow Calculations

Net, cumulative and free cash flow, liquidity ratios and cash position
projections over period-indexed series.
"""

from itertools import accumulate
from typing import List, Optional, Sequence

from budget_engine.calculations.numeric import safe_divide


def net_cash_flow(inflows: Sequence[float], outflows: Sequence[float]) -> float:
    """Total inflows minus total outflows."""
    return sum(inflows) - sum(outflows)


def cumulative_cash_flow(net_flows: Sequence[float]) -> List[float]:
    """
    Running total of net cash flows.

    Args:
        net_flows: Net cash flow per period

    Returns:
        Cumulative position at the end of each period (same length as input)
    """
    return list(accumulate(net_flows))


def cash_flow_coverage_ratio(
    operating_cash_flow: float, total_debt_service: float
) -> Optional[float]:
    """Operating cash flow over debt service, or None without debt service."""
    return safe_divide(operating_cash_flow, total_debt_service)


def operating_cash_flow_ratio(
    operating_cash_flow: float, current_liabilities: float
) -> Optional[float]:
    return safe_divide(operating_cash_flow, current_liabilities)


def free_cash_flow(operating_cash_flow: float, capital_expenditures: float) -> float:
    return operating_cash_flow - capital_expenditures


def project_cash_position(
    starting_cash: float,
    projected_inflows: Sequence[float],
    projected_outflows: Sequence[float],
) -> List[float]:
    """
    Project the cash balance at the end of each future period.

    Args:
        starting_cash: Cash on hand before the first period
        projected_inflows: Expected inflow per period
        projected_outflows: Expected outflow per period

    Returns:
        Closing cash balance per period

    Raises:
        ValueError: If the inflow and outflow series differ in length
    """
    if len(projected_inflows) != len(projected_outflows):
        raise ValueError("Inflow and outflow arrays must have same length")

    net_flows = [i - o for i, o in zip(projected_inflows, projected_outflows)]
    return list(accumulate(net_flows, initial=starting_cash))[1:]


def days_of_cash_on_hand(
    cash_and_equivalents: float, daily_cash_expenses: float
) -> Optional[float]:
    """Days the current cash would last, or None when nothing is being spent."""
    return safe_divide(cash_and_equivalents, daily_cash_expenses)
