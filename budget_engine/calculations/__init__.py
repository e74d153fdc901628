"""
Financial & Project Calculation Engine

Pure, stateless calculation modules for loans, returns, cash flow,
forecasting, savings, debt payoff and project analytics.
No module reads configuration, touches storage or keeps state between calls.
"""

from budget_engine.calculations import (
    allocation,
    amortization,
    car_loan,
    cashflow,
    debt,
    estimation,
    forecasting,
    mortgage,
    numeric,
    projects,
    refinance,
    returns,
    savings,
    student_loan,
    variance,
)

__all__ = [
    "allocation",
    "amortization",
    "car_loan",
    "cashflow",
    "debt",
    "estimation",
    "forecasting",
    "mortgage",
    "numeric",
    "projects",
    "refinance",
    "returns",
    "savings",
    "student_loan",
    "variance",
]
