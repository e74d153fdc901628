"""
Student Loan Calculations

Standard repayment, income-driven payments, interest capitalized during
grace and deferment periods, and forgiveness projections.
"""

import enum
from dataclasses import dataclass

from budget_engine.calculations.amortization import payment_for
from budget_engine.calculations.numeric import periodic_rate

# Federal poverty guidelines by family size (48 contiguous states)
POVERTY_GUIDELINES = {
    1: 15060.0,
    2: 20440.0,
    3: 25820.0,
    4: 31200.0,
}
ADDITIONAL_PERSON_GUIDELINE = 5380.0

# Income above 150% of the guideline is discretionary
DISCRETIONARY_INCOME_MULTIPLIER = 1.5


class RepaymentPlan(str, enum.Enum):
    STANDARD = "standard"
    GRADUATED = "graduated"
    EXTENDED = "extended"
    INCOME_BASED = "income_based"


@dataclass(frozen=True)
class StudentLoanSummary:
    loan_balance: float  # Balance entering repayment, after capitalization
    annual_rate_percent: float
    plan: RepaymentPlan
    monthly_payment: float
    total_payments: int
    total_interest: float
    total_paid: float
    interest_capitalized: float


@dataclass(frozen=True)
class ForgivenessProjection:
    remaining_balance: float  # Amount forgiven at the end of the period
    total_paid: float
    total_interest: float


def student_loan_payment(principal: float, annual_rate_percent: float, term_years: int) -> float:
    """Monthly payment under the standard plan."""
    return payment_for(principal, annual_rate_percent, term_years * 12, 12)


def poverty_guideline(family_size: int) -> float:
    """Annual poverty guideline for a household of the given size."""
    if family_size in POVERTY_GUIDELINES:
        return POVERTY_GUIDELINES[family_size]
    if family_size < 1:
        return POVERTY_GUIDELINES[1]
    return POVERTY_GUIDELINES[4] + (family_size - 4) * ADDITIONAL_PERSON_GUIDELINE


def income_based_payment(
    annual_income: float,
    family_size: int,
    discretionary_income_percent: float,
) -> float:
    """
    Calculate an income-driven monthly payment.

    Args:
        annual_income: Adjusted gross income
        family_size: Number of people in the household
        discretionary_income_percent: Share of discretionary income owed (e.g., 10)

    Returns:
        Monthly payment; zero when income is below 150% of the guideline
    """
    threshold = poverty_guideline(family_size) * DISCRETIONARY_INCOME_MULTIPLIER
    discretionary_income = max(0.0, annual_income - threshold)
    return discretionary_income * discretionary_income_percent / 100 / 12


def student_loan_with_deferment(
    principal: float,
    annual_rate_percent: float,
    grace_period_months: int,
    deferment_months: int,
    term_years: int,
) -> StudentLoanSummary:
    """
    Amortize a student loan after capitalizing pre-repayment interest.

    Simple interest accrues on the original principal through the grace
    period, then on principal plus grace interest through deferment. Both are
    added to the balance before the standard payment is computed.

    Args:
        principal: Amount originally borrowed
        annual_rate_percent: Annual interest rate in percent
        grace_period_months: Months between leaving school and repayment
        deferment_months: Additional months of deferment
        term_years: Repayment term in years

    Returns:
        StudentLoanSummary
    """
    monthly_rate = periodic_rate(annual_rate_percent, 12)

    grace_interest = principal * monthly_rate * grace_period_months
    deferment_interest = (principal + grace_interest) * monthly_rate * deferment_months
    capitalized = grace_interest + deferment_interest
    balance = principal + capitalized

    monthly_payment = student_loan_payment(balance, annual_rate_percent, term_years)
    num_payments = term_years * 12
    total_paid = monthly_payment * num_payments

    return StudentLoanSummary(
        loan_balance=balance,
        annual_rate_percent=annual_rate_percent,
        plan=RepaymentPlan.STANDARD,
        monthly_payment=monthly_payment,
        total_payments=num_payments,
        total_interest=total_paid - balance + capitalized,
        total_paid=total_paid,
        interest_capitalized=capitalized,
    )


def loan_forgiveness(
    principal: float,
    annual_rate_percent: float,
    monthly_payment: float,
    forgiveness_months: int,
) -> ForgivenessProjection:
    """
    Project payments made until forgiveness (e.g., 120 months for PSLF).

    Payments stop early if the loan is repaid first, and the final payment
    covers only what is owed. A payment smaller than the monthly interest
    lets the balance grow.

    Returns:
        ForgivenessProjection with the balance left to be forgiven
    """
    monthly_rate = periodic_rate(annual_rate_percent, 12)

    balance = principal
    total_paid = 0.0
    total_interest = 0.0

    for _ in range(forgiveness_months):
        if balance <= 0:
            break
        interest = balance * monthly_rate
        payment = min(monthly_payment, balance + interest)
        balance = max(0.0, balance - (payment - interest))
        total_paid += payment
        total_interest += interest

    return ForgivenessProjection(
        remaining_balance=balance,
        total_paid=total_paid,
        total_interest=total_interest,
    )
