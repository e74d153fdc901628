"""
Refinance Calculations

Compares an existing loan with a refinance offer and approximates the
effective rate of a loan carrying up-front fees.
"""

import math
from dataclasses import dataclass
from typing import Optional

from budget_engine.calculations.amortization import PaymentFrequency
from budget_engine.calculations.mortgage import MortgageSummary, summarize_loan


@dataclass(frozen=True)
class RefinanceComparison:
    current_loan: MortgageSummary
    new_loan: MortgageSummary
    closing_costs: float
    monthly_payment_savings: float
    total_interest_savings: float
    net_savings: float
    break_even_months: Optional[int]  # None when the new payment is not lower
    is_worthwhile: bool


def compare_refinance(
    current_balance: float,
    current_rate_percent: float,
    current_remaining_months: int,
    new_rate_percent: float,
    new_term_years: int,
    closing_costs: float,
) -> RefinanceComparison:
    """
    Compare keeping the current loan with refinancing the same balance.

    The current loan is amortized over its remaining months and the new loan
    over its full term, both monthly with no extra payments.

    Args:
        current_balance: Outstanding balance to refinance
        current_rate_percent: Current annual rate in percent
        current_remaining_months: Payments left on the current loan
        new_rate_percent: Offered annual rate in percent
        new_term_years: Term of the new loan in years
        closing_costs: Up-front cost of refinancing

    Returns:
        RefinanceComparison. Refinancing is worthwhile only when net savings
        are positive and break-even arrives before the new term ends.
    """
    new_term_months = new_term_years * 12
    current = summarize_loan(
        current_balance,
        current_rate_percent,
        current_remaining_months,
        PaymentFrequency.MONTHLY,
    )
    new = summarize_loan(
        current_balance,
        new_rate_percent,
        new_term_months,
        PaymentFrequency.MONTHLY,
    )

    monthly_savings = current.regular_payment - new.regular_payment
    interest_savings = current.total_interest - new.total_interest
    net_savings = interest_savings - closing_costs

    break_even_months = None
    if monthly_savings > 0:
        break_even_months = math.ceil(closing_costs / monthly_savings)

    is_worthwhile = (
        net_savings > 0
        and break_even_months is not None
        and break_even_months < new_term_months
    )

    return RefinanceComparison(
        current_loan=current,
        new_loan=new,
        closing_costs=closing_costs,
        monthly_payment_savings=monthly_savings,
        total_interest_savings=interest_savings,
        net_savings=net_savings,
        break_even_months=break_even_months,
        is_worthwhile=is_worthwhile,
    )


def effective_rate(
    loan_amount: float,
    nominal_rate_percent: float,
    fees: float,
    term_years: int,
) -> float:
    """
    Approximate the effective annual rate once fees are spread over the term.

    Returns the nominal rate unchanged when fees consume the whole loan.
    """
    if loan_amount - fees <= 0:
        return nominal_rate_percent

    fee_percent = fees / loan_amount * 100
    return nominal_rate_percent + fee_percent / term_years
