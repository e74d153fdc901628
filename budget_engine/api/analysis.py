"""
Analysis API endpoints.

Budget category analysis, cash position projection, forecasting, project
estimation and project validation.
"""

from dataclasses import asdict
from datetime import date
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from budget_engine.calculations import cashflow, estimation, forecasting, projects, variance
from budget_engine.config import get_settings

router = APIRouter()
settings = get_settings()


class CategoryInput(BaseModel):
    name: str
    budgeted: float = Field(..., ge=0)
    actual: float = Field(..., ge=0)


class BudgetAnalysisInput(BaseModel):
    categories: List[CategoryInput]


def _category_row(category: variance.CategorySpending) -> dict:
    return {
        "name": category.name,
        "budgeted": category.budgeted,
        "actual": category.actual,
        "variance": category.variance,
        "variance_percent": category.variance_percent,
        "percent_of_total": category.percent_of_total,
        "status": category.status,
    }


@router.post("/budget-analysis")
async def analyze_budget(inputs: BudgetAnalysisInput):
    """Split categories into over, under and on track with recommendations."""
    analysis = variance.analyze_category_spending(
        [(c.name, c.budgeted, c.actual) for c in inputs.categories]
    )
    return {
        "total_budgeted": analysis.total_budgeted,
        "total_spent": analysis.total_spent,
        "total_variance": analysis.total_variance,
        "overspent": [_category_row(c) for c in analysis.overspent],
        "underspent": [_category_row(c) for c in analysis.underspent],
        "on_track": [_category_row(c) for c in analysis.on_track],
        "recommendations": analysis.recommendations,
    }


class CashPositionInput(BaseModel):
    starting_cash: float
    projected_inflows: List[float]
    projected_outflows: List[float]


@router.post("/cash-position")
async def project_cash_position(inputs: CashPositionInput):
    """Closing cash balance per future period."""
    try:
        positions = cashflow.project_cash_position(
            inputs.starting_cash, inputs.projected_inflows, inputs.projected_outflows
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {
        "positions": positions,
        "net_cash_flow": cashflow.net_cash_flow(
            inputs.projected_inflows, inputs.projected_outflows
        ),
    }


class ForecastInput(BaseModel):
    history: List[float]
    periods_ahead: int = Field(3, ge=0)
    window_size: int = Field(3, gt=0)
    alpha: float = Field(0.3, ge=0, le=1)


@router.post("/forecast")
async def forecast(inputs: ForecastInput):
    """Run every forecasting method over the same history."""
    return {
        "linear": forecasting.linear_forecast(inputs.history, inputs.periods_ahead),
        "moving_average": forecasting.moving_average_forecast(
            inputs.history, inputs.window_size
        ),
        "exponential_smoothing": forecasting.exponential_smoothing(
            inputs.history, inputs.alpha, inputs.periods_ahead
        ),
        "trend": forecasting.identify_trend(inputs.history),
    }


class ThreePointInput(BaseModel):
    optimistic: float = Field(..., ge=0)
    most_likely: float = Field(..., ge=0)
    pessimistic: float = Field(..., ge=0)
    confidence_level: Optional[float] = None


@router.post("/three-point-estimate")
async def calculate_three_point_estimate(inputs: ThreePointInput):
    """PERT estimate with its standard deviation and confidence interval."""
    estimate = estimation.three_point_estimate(
        inputs.optimistic, inputs.most_likely, inputs.pessimistic
    )
    std_dev = estimation.three_point_standard_deviation(inputs.optimistic, inputs.pessimistic)
    level = inputs.confidence_level or settings.default_confidence_level
    lower, upper = estimation.confidence_interval(estimate, std_dev, level)

    return {
        "estimate": estimate,
        "standard_deviation": std_dev,
        "confidence_level": level,
        "lower_bound": lower,
        "upper_bound": upper,
    }


class EVMInput(BaseModel):
    planned_value: float = Field(..., ge=0)
    earned_value: float = Field(..., ge=0)
    actual_cost: float = Field(..., ge=0)
    budget_at_completion: float = Field(..., ge=0)


@router.post("/evm")
async def calculate_evm(inputs: EVMInput):
    """Earned value metrics; indices are null when undefined."""
    snapshot = estimation.EVMSnapshot(
        planned_value=inputs.planned_value,
        earned_value=inputs.earned_value,
        actual_cost=inputs.actual_cost,
        budget_at_completion=inputs.budget_at_completion,
    )
    return asdict(estimation.evm_metrics(snapshot))


class PhaseInput(BaseModel):
    id: UUID
    name: str
    planned_duration_days: int = Field(0, ge=0)
    budget: float = Field(0.0, ge=0)


class TaskInput(BaseModel):
    id: UUID
    phase_id: UUID
    name: str
    status: projects.TaskStatus = projects.TaskStatus.NOT_STARTED
    completion_percentage: int = Field(0, ge=0, le=100)
    depends_on: List[UUID] = []


class ProjectInput(BaseModel):
    id: UUID
    name: str
    project_type: projects.ProjectType = projects.ProjectType.CONSTRUCTION
    start_date: date
    planned_end_date: date
    budget: float
    phases: List[PhaseInput] = []
    tasks: List[TaskInput] = []


@router.post("/projects/validate")
async def validate_project(inputs: ProjectInput):
    """Validate a project snapshot and report task progress."""
    project = projects.Project(
        id=inputs.id,
        name=inputs.name,
        project_type=inputs.project_type,
        status=projects.ProjectStatus.PLANNING,
        start_date=inputs.start_date,
        planned_end_date=inputs.planned_end_date,
        budget=inputs.budget,
        phases=tuple(
            projects.ProjectPhase(
                id=p.id,
                name=p.name,
                planned_duration_days=p.planned_duration_days,
                budget=p.budget,
            )
            for p in inputs.phases
        ),
        tasks=tuple(
            projects.ProjectTask(
                id=t.id,
                phase_id=t.phase_id,
                name=t.name,
                status=t.status,
                completion_percentage=t.completion_percentage,
                depends_on=tuple(t.depends_on),
            )
            for t in inputs.tasks
        ),
    )

    errors = projects.validate_project(project)
    return {
        "valid": not errors,
        "errors": errors,
        "progress": projects.project_progress(project),
    }
