"""
Calculator API endpoints.

Each endpoint maps a request body onto one engine call and returns the
result as JSON. Inputs are validated here so the engine can assume sane
values: negative amounts, non-positive terms and terms or rates beyond the
limits below are rejected with a 422.
"""

from dataclasses import asdict
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from budget_engine.calculations import (
    amortization,
    car_loan,
    debt,
    mortgage,
    refinance,
    returns,
    savings,
    student_loan,
    variance,
)
from budget_engine.calculations.amortization import PaymentFrequency
from budget_engine.calculations.numeric import round_money
from budget_engine.config import get_settings

router = APIRouter()
settings = get_settings()

# Longest loan term accepted, in years, months and weekly payments
MAX_TERM_YEARS = 50
MAX_TERM_MONTHS = MAX_TERM_YEARS * 12
MAX_TERM_PERIODS = MAX_TERM_YEARS * 52

# Longest savings horizon, matching the 100-year simulation caps
MAX_HORIZON_YEARS = 100

# Annual rates are whole percents
MAX_ANNUAL_RATE = 100.0


def _schedule_rows(entries: List[amortization.AmortizationEntry]) -> List[dict]:
    """Serialize schedule entries rounded to cents."""
    return [
        {
            key: round_money(value) if isinstance(value, float) else value
            for key, value in asdict(entry).items()
        }
        for entry in entries
    ]


# ==================== BUDGET & RETURNS ====================


class VarianceInput(BaseModel):
    """Input for budget variance."""

    budgeted: float
    actual: float
    periods_elapsed: int = Field(0, ge=0)


class VarianceResponse(BaseModel):
    variance: float
    variance_percent: Optional[float] = None
    utilization_rate: Optional[float] = None
    remaining_budget: float
    burn_rate: float


@router.post("/variance", response_model=VarianceResponse)
async def calculate_variance(inputs: VarianceInput):
    """Compare actual spending with the budget."""
    return VarianceResponse(
        variance=variance.variance(inputs.actual, inputs.budgeted),
        variance_percent=variance.variance_percent(inputs.actual, inputs.budgeted),
        utilization_rate=variance.utilization_rate(inputs.actual, inputs.budgeted),
        remaining_budget=variance.remaining_budget(inputs.budgeted, inputs.actual),
        burn_rate=variance.burn_rate(inputs.actual, inputs.periods_elapsed),
    )


class ROIInput(BaseModel):
    investment: float
    returns: float


class ROIResponse(BaseModel):
    roi: Optional[float] = None
    profit: float


@router.post("/roi", response_model=ROIResponse)
async def calculate_roi(inputs: ROIInput):
    """Return on investment in percent; null for a zero investment."""
    return ROIResponse(
        roi=returns.roi(inputs.returns, inputs.investment),
        profit=inputs.returns - inputs.investment,
    )


class IRRInput(BaseModel):
    """Input for IRR calculation."""

    initial_investment: float = Field(..., ge=0)
    cash_flows: List[float] = Field(..., min_length=1)


class IRRResponse(BaseModel):
    """Response with IRR calculation."""

    irr: Optional[float] = None
    irr_percent: Optional[float] = None
    converged: bool
    npv_at_report_rate: float
    payback_period: Optional[int] = None


@router.post("/irr", response_model=IRRResponse)
async def calculate_irr_endpoint(inputs: IRRInput):
    """Calculate IRR for an up-front investment followed by periodic inflows."""
    flows = [-inputs.initial_investment] + inputs.cash_flows
    irr_val = returns.irr(
        flows,
        max_iterations=settings.irr_max_iterations,
        tolerance=settings.irr_tolerance,
    )

    return IRRResponse(
        irr=irr_val,
        irr_percent=irr_val * 100 if irr_val is not None else None,
        converged=irr_val is not None,
        npv_at_report_rate=returns.npv(settings.npv_report_rate, flows),
        payback_period=returns.payback_period(inputs.initial_investment, inputs.cash_flows),
    )


class NPVInput(BaseModel):
    rate: float = Field(..., gt=-1)
    cash_flows: List[float]


@router.post("/npv")
async def calculate_npv_endpoint(inputs: NPVInput):
    """Net present value at a decimal discount rate."""
    return {"npv": returns.npv(inputs.rate, inputs.cash_flows)}


# ==================== LOANS ====================


class LoanPaymentInput(BaseModel):
    """Input for a generic loan payment."""

    principal: float = Field(..., ge=0)
    rate: float = Field(..., ge=0, le=MAX_ANNUAL_RATE)
    periods: int = Field(..., gt=0, le=MAX_TERM_PERIODS)
    frequency: PaymentFrequency = PaymentFrequency.MONTHLY


@router.post("/loan-payment")
async def calculate_loan_payment(inputs: LoanPaymentInput):
    """Regular payment for a fully amortizing loan."""
    payment = amortization.payment_for(
        inputs.principal, inputs.rate, inputs.periods, inputs.frequency.periods_per_year
    )
    return {
        "payment": round_money(payment),
        "total_paid": round_money(payment * inputs.periods),
        "total_interest": round_money(payment * inputs.periods - inputs.principal),
    }


class AmortizationInput(BaseModel):
    """Input for amortization calculation."""

    principal: float = Field(..., ge=0)
    annual_rate: float = Field(..., ge=0, le=MAX_ANNUAL_RATE)
    periods: int = Field(..., gt=0, le=MAX_TERM_PERIODS)
    frequency: PaymentFrequency = PaymentFrequency.MONTHLY
    extra_payment: float = Field(0.0, ge=0)


@router.post("/amortization")
async def calculate_amortization(inputs: AmortizationInput):
    """Generate loan amortization schedule."""
    terms = amortization.LoanTerms(
        principal=inputs.principal,
        annual_rate_percent=inputs.annual_rate,
        term_periods=inputs.periods,
        payment_frequency=inputs.frequency,
        extra_payment=inputs.extra_payment,
    )
    schedule = terms.schedule()
    total_interest, total_paid = amortization.summarize(schedule)

    return {
        "payment": round_money(terms.payment()),
        "schedule": _schedule_rows(schedule),
        "total_interest": round_money(total_interest),
        "total_paid": round_money(total_paid),
    }


class MortgageInput(BaseModel):
    principal: float = Field(..., ge=0)
    annual_rate: float = Field(..., ge=0, le=MAX_ANNUAL_RATE)
    years: int = Field(..., gt=0, le=MAX_TERM_YEARS)
    frequency: PaymentFrequency = PaymentFrequency.MONTHLY
    extra_payment: float = Field(0.0, ge=0)
    start_date: Optional[date] = None
    include_schedule: bool = False


@router.post("/mortgage")
async def calculate_mortgage(inputs: MortgageInput):
    """Mortgage summary, optionally with the full schedule."""
    summary = mortgage.mortgage_summary(
        inputs.principal,
        inputs.annual_rate,
        inputs.years,
        inputs.frequency,
        inputs.extra_payment,
        inputs.start_date,
    )
    result = {"summary": asdict(summary)}
    if inputs.include_schedule:
        result["schedule"] = _schedule_rows(
            mortgage.mortgage_schedule(
                inputs.principal,
                inputs.annual_rate,
                inputs.years,
                inputs.frequency,
                inputs.extra_payment,
            )
        )
    return result


@router.post("/mortgage/acceleration")
async def calculate_mortgage_acceleration(inputs: MortgageInput):
    """Payments and interest saved by paying extra every period."""
    result = mortgage.payoff_acceleration(
        inputs.principal,
        inputs.annual_rate,
        inputs.years,
        inputs.frequency,
        inputs.extra_payment,
    )
    return asdict(result)


class CarLoanInput(BaseModel):
    vehicle_price: float = Field(..., ge=0)
    down_payment: float = Field(0.0, ge=0)
    trade_in_value: float = Field(0.0, ge=0)
    sales_tax_rate: float = Field(0.0, ge=0)
    fees: float = Field(0.0, ge=0)
    annual_rate: float = Field(..., ge=0, le=MAX_ANNUAL_RATE)
    term_months: int = Field(..., gt=0, le=MAX_TERM_MONTHS)


@router.post("/car-loan")
async def calculate_car_loan(inputs: CarLoanInput):
    """Car loan with sales tax and fees rolled into the financed amount."""
    details = car_loan.car_loan(
        inputs.vehicle_price,
        inputs.down_payment,
        inputs.trade_in_value,
        inputs.sales_tax_rate,
        inputs.fees,
        inputs.annual_rate,
        inputs.term_months,
    )
    if details.loan_amount < 0:
        raise HTTPException(
            status_code=400,
            detail="Down payment and trade-in exceed the total vehicle cost",
        )
    return asdict(details)


class LeaseBuyInput(BaseModel):
    vehicle_price: float = Field(..., ge=0)
    lease_monthly_payment: float = Field(..., ge=0)
    lease_term_months: int = Field(..., gt=0)
    buy_monthly_payment: float = Field(..., ge=0)
    buy_term_months: int = Field(..., gt=0)
    residual_value: float = Field(0.0, ge=0)


@router.post("/lease-vs-buy")
async def calculate_lease_vs_buy(inputs: LeaseBuyInput):
    return asdict(
        car_loan.compare_lease_to_buy(
            inputs.vehicle_price,
            inputs.lease_monthly_payment,
            inputs.lease_term_months,
            inputs.buy_monthly_payment,
            inputs.buy_term_months,
            inputs.residual_value,
        )
    )


class StudentLoanInput(BaseModel):
    principal: float = Field(..., ge=0)
    annual_rate: float = Field(..., ge=0, le=MAX_ANNUAL_RATE)
    term_years: int = Field(10, gt=0, le=MAX_TERM_YEARS)
    grace_period_months: int = Field(6, ge=0)
    deferment_months: int = Field(0, ge=0)


@router.post("/student-loan")
async def calculate_student_loan(inputs: StudentLoanInput):
    """Standard repayment after grace and deferment interest is capitalized."""
    summary = student_loan.student_loan_with_deferment(
        inputs.principal,
        inputs.annual_rate,
        inputs.grace_period_months,
        inputs.deferment_months,
        inputs.term_years,
    )
    return asdict(summary)


class IncomeBasedInput(BaseModel):
    annual_income: float = Field(..., ge=0)
    family_size: int = Field(1, ge=1)
    discretionary_income_percent: float = Field(10.0, ge=0, le=100)


@router.post("/student-loan/income-based")
async def calculate_income_based_payment(inputs: IncomeBasedInput):
    payment = student_loan.income_based_payment(
        inputs.annual_income, inputs.family_size, inputs.discretionary_income_percent
    )
    return {
        "monthly_payment": round_money(payment),
        "poverty_guideline": student_loan.poverty_guideline(inputs.family_size),
    }


class RefinanceInput(BaseModel):
    current_balance: float = Field(..., ge=0)
    current_rate: float = Field(..., ge=0, le=MAX_ANNUAL_RATE)
    current_remaining_months: int = Field(..., gt=0, le=MAX_TERM_MONTHS)
    new_rate: float = Field(..., ge=0, le=MAX_ANNUAL_RATE)
    new_term_years: int = Field(..., gt=0, le=MAX_TERM_YEARS)
    closing_costs: float = Field(0.0, ge=0)


@router.post("/refinance")
async def calculate_refinance(inputs: RefinanceInput):
    """Compare the current loan with a refinance offer."""
    comparison = refinance.compare_refinance(
        inputs.current_balance,
        inputs.current_rate,
        inputs.current_remaining_months,
        inputs.new_rate,
        inputs.new_term_years,
        inputs.closing_costs,
    )
    return asdict(comparison)


# ==================== DEBT ====================


class DebtToIncomeInput(BaseModel):
    monthly_debt_payments: float = Field(..., ge=0)
    monthly_gross_income: float = Field(..., ge=0)


@router.post("/debt-to-income")
async def calculate_debt_to_income(inputs: DebtToIncomeInput):
    """DTI in percent; null when there is no income."""
    return {
        "debt_to_income_ratio": debt.debt_to_income_ratio(
            inputs.monthly_debt_payments, inputs.monthly_gross_income
        )
    }


class DebtItemInput(BaseModel):
    name: str
    balance: float = Field(..., ge=0)
    annual_rate: float = Field(..., ge=0)
    minimum_payment: float = Field(..., ge=0)


class DebtStrategyInput(BaseModel):
    debts: List[DebtItemInput]
    extra_payment: float = Field(0.0, ge=0)
    monthly_gross_income: float = Field(0.0, ge=0)


@router.post("/debt-strategy")
async def calculate_debt_strategy(inputs: DebtStrategyInput):
    """Avalanche and snowball payoff orders side by side."""
    items = [
        debt.DebtItem(
            name=d.name,
            balance=d.balance,
            annual_rate_percent=d.annual_rate,
            minimum_payment=d.minimum_payment,
        )
        for d in inputs.debts
    ]
    return {
        "avalanche": [asdict(p) for p in debt.debt_avalanche(items, inputs.extra_payment)],
        "snowball": [asdict(p) for p in debt.debt_snowball(items, inputs.extra_payment)],
        "summary": asdict(
            debt.summarize_debts(items, inputs.monthly_gross_income, inputs.extra_payment)
        ),
    }


# ==================== SAVINGS ====================


class SavingsGoalInput(BaseModel):
    target_amount: float = Field(..., ge=0)
    current_savings: float = Field(0.0, ge=0)
    monthly_contribution: float = Field(..., ge=0)
    annual_rate: float = Field(0.0, ge=0)


@router.post("/savings-goal")
async def calculate_savings_goal(inputs: SavingsGoalInput):
    """Months needed to reach a savings target; reachable is false past 100 years."""
    goal = savings.savings_goal(
        inputs.target_amount,
        inputs.current_savings,
        inputs.monthly_contribution,
        inputs.annual_rate,
    )
    return {"reachable": goal is not None, "goal": asdict(goal) if goal else None}


class InvestmentInput(BaseModel):
    initial_investment: float = Field(..., ge=0)
    monthly_contribution: float = Field(0.0, ge=0)
    annual_rate: float = Field(..., ge=0, le=MAX_ANNUAL_RATE)
    years: int = Field(..., gt=0, le=MAX_HORIZON_YEARS)


@router.post("/investment-projection")
async def calculate_investment_projection(inputs: InvestmentInput):
    return asdict(
        savings.investment_projection(
            inputs.initial_investment,
            inputs.monthly_contribution,
            inputs.annual_rate,
            inputs.years,
        )
    )


class RequiredSavingsInput(BaseModel):
    target_amount: float = Field(..., ge=0)
    current_savings: float = Field(0.0, ge=0)
    annual_rate: float = Field(0.0, ge=0, le=MAX_ANNUAL_RATE)
    years: int = Field(..., gt=0, le=MAX_HORIZON_YEARS)


@router.post("/required-savings")
async def calculate_required_savings(inputs: RequiredSavingsInput):
    return {
        "monthly_savings": savings.required_monthly_savings(
            inputs.target_amount,
            inputs.current_savings,
            inputs.annual_rate,
            inputs.years,
        )
    }


class CompoundInterestInput(BaseModel):
    principal: float = Field(..., ge=0)
    annual_rate: float = Field(..., ge=0, le=MAX_ANNUAL_RATE)
    years: float = Field(..., gt=0, le=MAX_HORIZON_YEARS)
    compoundings_per_year: int = Field(12, gt=0, le=365)


@router.post("/compound-interest")
async def calculate_compound_interest(inputs: CompoundInterestInput):
    future_value = savings.compound_interest(
        inputs.principal,
        inputs.annual_rate,
        inputs.years,
        inputs.compoundings_per_year,
    )
    return {
        "future_value": round_money(future_value),
        "interest_earned": round_money(future_value - inputs.principal),
    }
