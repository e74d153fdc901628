"""
Mortgage Calculations

Mortgage payments, schedules and summaries for monthly, bi-weekly and weekly
payment plans, plus the payoff acceleration from extra payments.
"""

from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from dateutil.relativedelta import relativedelta

from budget_engine.calculations import amortization
from budget_engine.calculations.amortization import AmortizationEntry, PaymentFrequency

# Approximate payments per calendar month, used only to date the payoff
PAYMENTS_PER_MONTH = {
    PaymentFrequency.MONTHLY: 1,
    PaymentFrequency.BIWEEKLY: 2,
    PaymentFrequency.WEEKLY: 4,
}


@dataclass(frozen=True)
class MortgageSummary:
    """Headline figures for a mortgage schedule."""

    loan_amount: float
    annual_rate_percent: float
    term_periods: int
    payment_frequency: PaymentFrequency
    regular_payment: float
    total_payments: int
    total_interest: float
    total_paid: float
    payoff_date: Optional[date] = None


@dataclass(frozen=True)
class PayoffAcceleration:
    """Effect of an extra payment compared with the regular schedule."""

    payments_saved: int
    interest_saved: float
    regular_interest: float


def mortgage_payment(
    principal: float,
    annual_rate_percent: float,
    years: int,
    frequency: PaymentFrequency = PaymentFrequency.MONTHLY,
) -> float:
    """
    Calculate the regular mortgage payment.

    Args:
        principal: Loan amount
        annual_rate_percent: Annual interest rate in percent (e.g., 4.5)
        years: Loan term in years
        frequency: Payment frequency

    Returns:
        Payment per period, or 0 for a non-positive loan amount or term
    """
    if principal <= 0 or annual_rate_percent < 0 or years <= 0:
        return 0.0

    periods_per_year = frequency.periods_per_year
    return amortization.payment_for(
        principal, annual_rate_percent, years * periods_per_year, periods_per_year
    )


def mortgage_schedule(
    principal: float,
    annual_rate_percent: float,
    years: int,
    frequency: PaymentFrequency = PaymentFrequency.MONTHLY,
    extra_payment: float = 0.0,
) -> List[AmortizationEntry]:
    """Generate the mortgage amortization schedule, with optional extra payment."""
    if principal <= 0 or annual_rate_percent < 0 or years <= 0:
        return []

    periods_per_year = frequency.periods_per_year
    return amortization.schedule(
        principal,
        annual_rate_percent,
        years * periods_per_year,
        periods_per_year,
        extra_payment,
    )


def summarize_loan(
    principal: float,
    annual_rate_percent: float,
    periods: int,
    frequency: PaymentFrequency = PaymentFrequency.MONTHLY,
    extra_payment: float = 0.0,
    start_date: Optional[date] = None,
) -> MortgageSummary:
    """
    Build a MortgageSummary for a loan term given in payment periods.

    Args:
        principal: Loan amount
        annual_rate_percent: Annual interest rate in percent
        periods: Number of scheduled payments
        frequency: Payment frequency
        extra_payment: Additional principal per period
        start_date: Date of first payment, used to estimate the payoff date

    Returns:
        MortgageSummary
    """
    periods_per_year = frequency.periods_per_year
    entries = amortization.schedule(
        principal, annual_rate_percent, periods, periods_per_year, extra_payment
    )
    regular_payment = amortization.payment_for(
        principal, annual_rate_percent, periods, periods_per_year
    )
    interest, paid = amortization.summarize(entries)

    payoff_date = None
    if start_date is not None:
        months = len(entries) // PAYMENTS_PER_MONTH[frequency]
        payoff_date = start_date + relativedelta(months=months)

    return MortgageSummary(
        loan_amount=principal,
        annual_rate_percent=annual_rate_percent,
        term_periods=periods,
        payment_frequency=frequency,
        regular_payment=regular_payment,
        total_payments=len(entries),
        total_interest=interest,
        total_paid=paid,
        payoff_date=payoff_date,
    )


def mortgage_summary(
    principal: float,
    annual_rate_percent: float,
    years: int,
    frequency: PaymentFrequency = PaymentFrequency.MONTHLY,
    extra_payment: float = 0.0,
    start_date: Optional[date] = None,
) -> MortgageSummary:
    """Summarize a mortgage with a term in years."""
    return summarize_loan(
        principal,
        annual_rate_percent,
        years * frequency.periods_per_year,
        frequency,
        extra_payment,
        start_date,
    )


def payoff_acceleration(
    principal: float,
    annual_rate_percent: float,
    years: int,
    frequency: PaymentFrequency = PaymentFrequency.MONTHLY,
    extra_payment: float = 0.0,
) -> PayoffAcceleration:
    """
    Compare the regular schedule with one carrying an extra payment.

    Returns:
        PayoffAcceleration with the number of payments and interest saved
    """
    regular = mortgage_schedule(principal, annual_rate_percent, years, frequency)
    accelerated = mortgage_schedule(
        principal, annual_rate_percent, years, frequency, extra_payment
    )

    regular_interest, _ = amortization.summarize(regular)
    accelerated_interest, _ = amortization.summarize(accelerated)

    return PayoffAcceleration(
        payments_saved=len(regular) - len(accelerated),
        interest_saved=regular_interest - accelerated_interest,
        regular_interest=regular_interest,
    )
