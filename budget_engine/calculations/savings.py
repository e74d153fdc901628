"""
Savings and Investment Calculations

Goal timelines, contribution projections, compound growth and the monthly
savings needed to hit a target.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from budget_engine.calculations.numeric import periodic_rate

logger = logging.getLogger(__name__)

# 100 years
MAX_GOAL_MONTHS = 1200


@dataclass(frozen=True)
class SavingsGoal:
    target_amount: float
    current_savings: float
    monthly_contribution: float
    annual_rate_percent: float
    months_to_goal: int
    total_contributions: float
    total_interest_earned: float


@dataclass(frozen=True)
class InvestmentProjection:
    initial_investment: float
    monthly_contribution: float
    annual_rate_percent: float
    years: int
    future_value: float
    total_contributions: float
    total_gains: float


def savings_goal(
    target_amount: float,
    current_savings: float,
    monthly_contribution: float,
    annual_rate_percent: float,
) -> Optional[SavingsGoal]:
    """
    Find how many months of saving it takes to reach a target.

    Each month earns interest on the opening balance and then receives the
    contribution.

    Args:
        target_amount: Amount to save
        current_savings: Amount already saved
        monthly_contribution: Deposit made every month
        annual_rate_percent: Annual return in percent

    Returns:
        SavingsGoal, or None without a positive contribution or when the goal
        is still unmet after the 100-year cap
    """
    if monthly_contribution <= 0:
        return None

    monthly_rate = periodic_rate(annual_rate_percent, 12)
    balance = current_savings
    months = 0
    total_contributions = 0.0
    total_interest = 0.0

    # The balance is checked before the cap, so a goal met in the month just
    # past the cap still counts
    while balance < target_amount:
        if months > MAX_GOAL_MONTHS:
            logger.debug(
                "Savings goal of %.2f unreachable within %d months",
                target_amount,
                MAX_GOAL_MONTHS,
            )
            return None

        interest = balance * monthly_rate
        balance += monthly_contribution + interest
        months += 1
        total_contributions += monthly_contribution
        total_interest += interest

    return SavingsGoal(
        target_amount=target_amount,
        current_savings=current_savings,
        monthly_contribution=monthly_contribution,
        annual_rate_percent=annual_rate_percent,
        months_to_goal=months,
        total_contributions=total_contributions,
        total_interest_earned=total_interest,
    )


def investment_projection(
    initial_investment: float,
    monthly_contribution: float,
    annual_rate_percent: float,
    years: int,
) -> InvestmentProjection:
    """Project the value of an investment with regular monthly contributions."""
    monthly_rate = periodic_rate(annual_rate_percent, 12)
    balance = initial_investment
    total_contributions = 0.0

    for _ in range(years * 12):
        interest = balance * monthly_rate
        balance += monthly_contribution + interest
        total_contributions += monthly_contribution

    return InvestmentProjection(
        initial_investment=initial_investment,
        monthly_contribution=monthly_contribution,
        annual_rate_percent=annual_rate_percent,
        years=years,
        future_value=balance,
        total_contributions=total_contributions,
        total_gains=balance - initial_investment - total_contributions,
    )


def compound_interest(
    principal: float,
    annual_rate_percent: float,
    years: float,
    compoundings_per_year: int,
) -> float:
    """
    Future value of a lump sum compounded n times per year.

    Args:
        principal: Starting amount
        annual_rate_percent: Nominal annual rate in percent
        years: Investment horizon in years
        compoundings_per_year: 1 annual, 12 monthly, 365 daily, ...

    Returns:
        Future value
    """
    rate = annual_rate_percent / 100
    n = compoundings_per_year
    return principal * (1 + rate / n) ** (n * years)


def required_monthly_savings(
    target_amount: float,
    current_savings: float,
    annual_rate_percent: float,
    years: int,
) -> Optional[float]:
    """
    Solve for the monthly deposit that reaches a target in a fixed horizon.

    Uses the future value of an annuity, PMT = FV * r / ((1 + r)^n - 1),
    after growing current savings over the same horizon.

    Returns:
        Required monthly deposit, 0 if current savings already get there,
        or None for a non-positive horizon
    """
    num_months = years * 12
    if num_months <= 0:
        return None

    monthly_rate = periodic_rate(annual_rate_percent, 12)
    try:
        growth = (1 + monthly_rate) ** num_months
    except OverflowError:
        # The required deposit is vanishingly small over such a horizon
        return 0.0
    grown_savings = current_savings * growth
    remaining = target_amount - grown_savings

    if remaining <= 0:
        return 0.0
    if monthly_rate == 0:
        return remaining / num_months
    return remaining * monthly_rate / (growth - 1)
