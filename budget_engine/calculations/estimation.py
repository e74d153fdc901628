"""
Project Estimation

PERT three-point estimates, confidence intervals, earned value management
(EVM) and contingency reserves.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from budget_engine.calculations.numeric import safe_divide

# Two-sided z-scores for the supported confidence levels
Z_SCORES = {
    0.68: 1.0,
    0.95: 1.96,
    0.99: 2.58,
}
DEFAULT_Z_SCORE = 1.96


@dataclass(frozen=True)
class EVMSnapshot:
    """Earned value inputs at a point in time."""

    planned_value: float
    earned_value: float
    actual_cost: float
    budget_at_completion: float


@dataclass(frozen=True)
class EVMMetrics:
    planned_value: float
    earned_value: float
    actual_cost: float
    schedule_variance: float
    cost_variance: float
    schedule_performance_index: Optional[float]
    cost_performance_index: Optional[float]
    estimate_at_completion: Optional[float]
    estimate_to_complete: Optional[float]


def three_point_estimate(optimistic: float, most_likely: float, pessimistic: float) -> float:
    """PERT weighted estimate (O + 4M + P) / 6."""
    return (optimistic + 4 * most_likely + pessimistic) / 6


def three_point_standard_deviation(optimistic: float, pessimistic: float) -> float:
    return (pessimistic - optimistic) / 6


def confidence_interval(
    estimate: float, standard_deviation: float, confidence_level: float = 0.95
) -> Tuple[float, float]:
    """
    Interval around an estimate for a confidence level.

    Only 0.68, 0.95 and 0.99 have their own z-score; anything else uses 1.96.

    Returns:
        (lower, upper) bounds
    """
    z_score = Z_SCORES.get(confidence_level, DEFAULT_Z_SCORE)
    margin = z_score * standard_deviation
    return estimate - margin, estimate + margin


def evm_metrics(snapshot: EVMSnapshot) -> EVMMetrics:
    """
    Calculate earned value metrics.

    SPI and CPI are undefined (None) when planned value or actual cost is
    zero, and EAC/ETC are undefined whenever CPI is.

    Args:
        snapshot: Planned value, earned value, actual cost and BAC

    Returns:
        EVMMetrics
    """
    spi = safe_divide(snapshot.earned_value, snapshot.planned_value)
    cpi = safe_divide(snapshot.earned_value, snapshot.actual_cost)

    eac = None
    if cpi is not None:
        eac = safe_divide(snapshot.budget_at_completion, cpi)
    etc = eac - snapshot.actual_cost if eac is not None else None

    return EVMMetrics(
        planned_value=snapshot.planned_value,
        earned_value=snapshot.earned_value,
        actual_cost=snapshot.actual_cost,
        schedule_variance=snapshot.earned_value - snapshot.planned_value,
        cost_variance=snapshot.earned_value - snapshot.actual_cost,
        schedule_performance_index=spi,
        cost_performance_index=cpi,
        estimate_at_completion=eac,
        estimate_to_complete=etc,
    )


def contingency_reserve(base_estimate: float, risk_percent: float) -> float:
    return base_estimate * (risk_percent / 100)


def bottom_up_estimate(task_costs: Sequence[float], contingency_percent: float) -> float:
    """Sum task costs and add a contingency reserve on top."""
    base_total = sum(task_costs)
    return base_total + contingency_reserve(base_total, contingency_percent)
