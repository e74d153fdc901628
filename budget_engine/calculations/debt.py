"""
Debt Analysis

Debt-to-income, weighted average rates and avalanche/snowball payoff
simulations.

Each debt is simulated on its own with its minimum payment plus the full
extra payment. Payments freed up when one debt is paid off are not rolled
into the next.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from budget_engine.calculations.numeric import percent_of, periodic_rate

logger = logging.getLogger(__name__)

# 100 years
MAX_PAYOFF_MONTHS = 1200


@dataclass(frozen=True)
class DebtItem:
    name: str
    balance: float
    annual_rate_percent: float
    minimum_payment: float


@dataclass(frozen=True)
class DebtPayoff:
    name: str
    months_to_payoff: Optional[int]  # None if never repaid within the cap
    interest_paid: float


@dataclass(frozen=True)
class DebtSummary:
    total_debt: float
    weighted_average_rate: float
    total_minimum_payment: float
    debt_to_income_ratio: Optional[float]
    months_to_payoff: Optional[int]
    total_interest: float


def debt_to_income_ratio(
    monthly_debt_payments: float, monthly_gross_income: float
) -> Optional[float]:
    """DTI in percent, or None without positive income."""
    if monthly_gross_income <= 0:
        return None
    return percent_of(monthly_debt_payments, monthly_gross_income)


def weighted_average_rate(debts: Sequence[DebtItem]) -> float:
    """Balance-weighted average annual rate in percent."""
    total_debt = sum(d.balance for d in debts)
    if total_debt == 0:
        return 0.0
    return sum(d.balance * d.annual_rate_percent for d in debts) / total_debt


def simulate_payoff(debt: DebtItem, extra_payment: float = 0.0) -> DebtPayoff:
    """
    Pay a single debt down month by month.

    Args:
        debt: Debt to simulate
        extra_payment: Amount paid on top of the minimum every month

    Returns:
        DebtPayoff with the months needed and interest charged
    """
    monthly_rate = periodic_rate(debt.annual_rate_percent, 12)
    payment = debt.minimum_payment + extra_payment

    balance = debt.balance
    months = 0
    interest_paid = 0.0

    while balance > 0:
        if months >= MAX_PAYOFF_MONTHS:
            logger.debug(
                "Debt %r not repaid within %d months", debt.name, MAX_PAYOFF_MONTHS
            )
            return DebtPayoff(name=debt.name, months_to_payoff=None, interest_paid=interest_paid)

        interest = balance * monthly_rate
        principal = min(payment - interest, balance)
        balance -= principal
        months += 1
        interest_paid += interest

    return DebtPayoff(name=debt.name, months_to_payoff=months, interest_paid=interest_paid)


def _simulate_in_order(debts: Sequence[DebtItem], extra_payment: float) -> List[DebtPayoff]:
    return [simulate_payoff(debt, extra_payment) for debt in debts]


def debt_avalanche(debts: Sequence[DebtItem], extra_payment: float = 0.0) -> List[DebtPayoff]:
    """Simulate payoff in order of highest interest rate first."""
    ordered = sorted(debts, key=lambda d: d.annual_rate_percent, reverse=True)
    return _simulate_in_order(ordered, extra_payment)


def debt_snowball(debts: Sequence[DebtItem], extra_payment: float = 0.0) -> List[DebtPayoff]:
    """Simulate payoff in order of smallest balance first."""
    ordered = sorted(debts, key=lambda d: d.balance)
    return _simulate_in_order(ordered, extra_payment)


def summarize_debts(
    debts: Sequence[DebtItem],
    monthly_gross_income: float,
    extra_payment: float = 0.0,
) -> DebtSummary:
    """
    Summarize a debt portfolio.

    Payoff months is the longest payoff across the avalanche simulation, or
    None if any debt is never repaid.
    """
    payoffs = debt_avalanche(debts, extra_payment)
    total_minimum = sum(d.minimum_payment for d in debts)

    months = [p.months_to_payoff for p in payoffs]
    if any(m is None for m in months):
        months_to_payoff = None
    else:
        months_to_payoff = max(months, default=0)

    return DebtSummary(
        total_debt=sum(d.balance for d in debts),
        weighted_average_rate=weighted_average_rate(debts),
        total_minimum_payment=total_minimum,
        debt_to_income_ratio=debt_to_income_ratio(total_minimum, monthly_gross_income),
        months_to_payoff=months_to_payoff,
        total_interest=sum(p.interest_paid for p in payoffs),
    )
