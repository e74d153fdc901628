"""
Loan Amortization Calculations

Generic payment and schedule computation shared by the mortgage, car loan,
student loan and refinance calculators. Matches Excel's PMT() for the payment
and builds the schedule period by period.
"""

import enum
import logging
from dataclasses import dataclass
from typing import List, Tuple

from budget_engine.calculations.numeric import clamp, periodic_rate

logger = logging.getLogger(__name__)

# Schedules stop after this many times the nominal period count
SAFETY_CAP_MULTIPLIER = 2

# Residual balances smaller than half a cent are folded into the final payment
BALANCE_EPSILON = 0.005


class PaymentFrequency(str, enum.Enum):
    """How often a loan payment is made."""

    MONTHLY = "monthly"
    BIWEEKLY = "biweekly"
    WEEKLY = "weekly"

    @property
    def periods_per_year(self) -> int:
        return {
            PaymentFrequency.MONTHLY: 12,
            PaymentFrequency.BIWEEKLY: 26,
            PaymentFrequency.WEEKLY: 52,
        }[self]


@dataclass(frozen=True)
class AmortizationEntry:
    """A single row of an amortization schedule."""

    period_index: int
    payment_amount: float
    principal_portion: float
    interest_portion: float
    remaining_balance: float
    cumulative_interest: float
    cumulative_principal: float


@dataclass(frozen=True)
class LoanTerms:
    """Inputs for one amortization request."""

    principal: float
    annual_rate_percent: float
    term_periods: int
    payment_frequency: PaymentFrequency = PaymentFrequency.MONTHLY
    extra_payment: float = 0.0

    @property
    def periods_per_year(self) -> int:
        return self.payment_frequency.periods_per_year

    @property
    def periodic_rate(self) -> float:
        return periodic_rate(self.annual_rate_percent, self.periods_per_year)

    def payment(self) -> float:
        return payment_for(
            self.principal,
            self.annual_rate_percent,
            self.term_periods,
            self.periods_per_year,
        )

    def schedule(self) -> List[AmortizationEntry]:
        return schedule(
            self.principal,
            self.annual_rate_percent,
            self.term_periods,
            self.periods_per_year,
            self.extra_payment,
        )


def payment_for(
    principal: float,
    annual_rate_percent: float,
    periods: int,
    periods_per_year: int = 12,
) -> float:
    """
    Calculate the regular loan payment.

    Matches Excel's PMT() function (sign flipped to a positive amount).

    Args:
        principal: Loan principal amount
        annual_rate_percent: Annual interest rate in percent (e.g., 4.5 for 4.5%)
        periods: Total number of payments
        periods_per_year: Payments per year (12 monthly, 26 bi-weekly, 52 weekly)

    Returns:
        Payment per period; the interest-only payment when the term is too
        long for the growth factor to be represented
    """
    rate = periodic_rate(annual_rate_percent, periods_per_year)

    if rate == 0:
        return principal / periods

    try:
        growth = (1 + rate) ** periods
    except OverflowError:
        # PMT tends to interest-only as the term grows without bound
        return principal * rate
    return principal * (rate * growth) / (growth - 1)


def schedule(
    principal: float,
    annual_rate_percent: float,
    periods: int,
    periods_per_year: int = 12,
    extra_payment: float = 0.0,
) -> List[AmortizationEntry]:
    """
    Generate a full amortization schedule.

    Each period charges interest on the opening balance and applies the rest
    of the payment (plus any extra payment) to principal, never more than the
    outstanding balance. The schedule ends when the balance is repaid or
    after twice the nominal period count, whichever comes first.

    Args:
        principal: Loan principal amount
        annual_rate_percent: Annual interest rate in percent
        periods: Nominal number of payments
        periods_per_year: Payments per year
        extra_payment: Additional principal paid every period

    Returns:
        List of AmortizationEntry rows, first payment at period_index 1
    """
    rate = periodic_rate(annual_rate_percent, periods_per_year)
    total_payment = payment_for(principal, annual_rate_percent, periods, periods_per_year)
    total_payment += extra_payment

    entries: List[AmortizationEntry] = []
    balance = principal
    cumulative_interest = 0.0
    cumulative_principal = 0.0
    max_periods = periods * SAFETY_CAP_MULTIPLIER

    for period in range(1, max_periods + 1):
        if balance <= 0:
            break

        interest = balance * rate
        principal_pmt = clamp(total_payment - interest, 0.0, balance)
        ending_balance = balance - principal_pmt

        # Fold sub-cent rounding residue into this payment
        if ending_balance < BALANCE_EPSILON:
            principal_pmt += ending_balance
            ending_balance = 0.0

        cumulative_interest += interest
        cumulative_principal += principal_pmt

        entries.append(
            AmortizationEntry(
                period_index=period,
                payment_amount=principal_pmt + interest,
                principal_portion=principal_pmt,
                interest_portion=interest,
                remaining_balance=ending_balance,
                cumulative_interest=cumulative_interest,
                cumulative_principal=cumulative_principal,
            )
        )

        balance = ending_balance
    else:
        if balance > 0:
            logger.debug(
                "Amortization stopped at safety cap of %d periods with %.2f outstanding",
                max_periods,
                balance,
            )

    return entries


def remaining_balance(
    principal: float,
    annual_rate_percent: float,
    total_periods: int,
    periods_paid: int,
    periods_per_year: int = 12,
) -> float:
    """Calculate remaining loan balance after N regular payments."""
    payment = payment_for(principal, annual_rate_percent, total_periods, periods_per_year)
    rate = periodic_rate(annual_rate_percent, periods_per_year)

    if rate == 0:
        return max(0.0, principal - payment * periods_paid)

    # Present value of the payments still to come
    remaining = total_periods - periods_paid
    if remaining <= 0:
        return 0.0
    try:
        growth = (1 + rate) ** remaining
    except OverflowError:
        return payment / rate
    return payment * (growth - 1) / (rate * growth)


def total_interest(
    principal: float,
    annual_rate_percent: float,
    periods: int,
    periods_per_year: int = 12,
) -> float:
    """Calculate total interest paid over the full loan term."""
    payment = payment_for(principal, annual_rate_percent, periods, periods_per_year)
    return payment * periods - principal


def summarize(entries: List[AmortizationEntry]) -> Tuple[float, float]:
    """Return (total interest, total paid) for a schedule."""
    interest = sum(entry.interest_portion for entry in entries)
    paid = sum(entry.payment_amount for entry in entries)
    return interest, paid
