"""
Car Loan Calculations

Auto loans with sales tax and dealer fees rolled into the financed amount,
and a simple lease versus buy comparison.
"""

from dataclasses import dataclass

from budget_engine.calculations.amortization import payment_for


@dataclass(frozen=True)
class CarLoanDetails:
    vehicle_price: float
    down_payment: float
    trade_in_value: float
    sales_tax: float
    fees: float
    loan_amount: float
    annual_rate_percent: float
    term_months: int
    monthly_payment: float
    total_interest: float
    total_cost: float


@dataclass(frozen=True)
class LeaseBuyComparison:
    total_lease_cost: float
    total_buy_cost: float
    equity_gained: float


def car_loan(
    vehicle_price: float,
    down_payment: float,
    trade_in_value: float,
    sales_tax_percent: float,
    fees: float,
    annual_rate_percent: float,
    term_months: int,
) -> CarLoanDetails:
    """
    Calculate a car loan with taxes and fees.

    Sales tax is charged on the full vehicle price. Tax and fees are added to
    the price before the down payment and trade-in are subtracted.

    Args:
        vehicle_price: Sticker price of the vehicle
        down_payment: Cash paid up front
        trade_in_value: Credit for the trade-in vehicle
        sales_tax_percent: Sales tax rate in percent (e.g., 8.0)
        fees: Dealer, title and registration fees
        annual_rate_percent: Loan APR in percent
        term_months: Loan term in months

    Returns:
        CarLoanDetails
    """
    sales_tax = vehicle_price * (sales_tax_percent / 100)
    total_price = vehicle_price + sales_tax + fees
    loan_amount = total_price - down_payment - trade_in_value

    monthly_payment = payment_for(loan_amount, annual_rate_percent, term_months, 12)
    total_paid = monthly_payment * term_months

    return CarLoanDetails(
        vehicle_price=vehicle_price,
        down_payment=down_payment,
        trade_in_value=trade_in_value,
        sales_tax=sales_tax,
        fees=fees,
        loan_amount=loan_amount,
        annual_rate_percent=annual_rate_percent,
        term_months=term_months,
        monthly_payment=monthly_payment,
        total_interest=total_paid - loan_amount,
        total_cost=down_payment + trade_in_value + total_paid,
    )


def compare_lease_to_buy(
    vehicle_price: float,
    lease_monthly_payment: float,
    lease_term_months: int,
    buy_monthly_payment: float,
    buy_term_months: int,
    residual_value: float,
) -> LeaseBuyComparison:
    """Total cost of leasing versus buying, and the equity a purchase leaves."""
    total_lease_cost = lease_monthly_payment * lease_term_months
    total_buy_cost = buy_monthly_payment * buy_term_months
    return LeaseBuyComparison(
        total_lease_cost=total_lease_cost,
        total_buy_cost=total_buy_cost,
        equity_gained=vehicle_price - total_buy_cost + residual_value,
    )
