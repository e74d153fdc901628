"""
Budget Variance Calculations

Compares actual spending against budgeted amounts, both for a single line and
for a set of spending categories.
"""

import enum
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from budget_engine.calculations.numeric import percent_of, safe_divide

# Categories within +/-5% of their budget are on track
CATEGORY_TOLERANCE = 0.05

# Underspending by more than 10% of the total budget earns a savings nudge
UNDERSPEND_PRAISE_THRESHOLD = 0.10


class VarianceStatus(str, enum.Enum):
    OVER = "over"
    UNDER = "under"
    ON_TARGET = "on_target"


class CategoryStatus(str, enum.Enum):
    ON_TRACK = "on_track"
    OVER = "over"
    UNDER = "under"


def variance(actual: float, budgeted: float) -> float:
    """Absolute variance; positive means spending exceeded the budget."""
    return actual - budgeted


def variance_percent(actual: float, budgeted: float) -> Optional[float]:
    """Variance as a percent of the budget, or None for a zero budget."""
    return percent_of(variance(actual, budgeted), budgeted)


def variance_status(actual: float, budgeted: float, tolerance: float) -> VarianceStatus:
    """
    Classify spending against budget.

    Args:
        actual: Amount actually spent
        budgeted: Amount budgeted
        tolerance: Absolute amount either side of the budget counted as on target

    Returns:
        VarianceStatus
    """
    diff = variance(actual, budgeted)
    if abs(diff) <= tolerance:
        return VarianceStatus.ON_TARGET
    if diff > 0:
        return VarianceStatus.OVER
    return VarianceStatus.UNDER


def utilization_rate(spent: float, budgeted: float) -> Optional[float]:
    """Percent of the budget consumed, or None for a zero budget."""
    return percent_of(spent, budgeted)


def remaining_budget(budgeted: float, spent: float) -> float:
    return budgeted - spent


def burn_rate(total_spent: float, periods_elapsed: int) -> float:
    """Average spend per elapsed period; zero before any period has elapsed."""
    if periods_elapsed == 0:
        return 0.0
    return total_spent / periods_elapsed


@dataclass(frozen=True)
class CategorySpending:
    """Budgeted versus actual spending for one category."""

    name: str
    budgeted: float
    actual: float
    percent_of_total: float = 0.0

    @property
    def variance(self) -> float:
        return variance(self.actual, self.budgeted)

    @property
    def variance_percent(self) -> Optional[float]:
        return variance_percent(self.actual, self.budgeted)

    @property
    def status(self) -> CategoryStatus:
        band = self.budgeted * CATEGORY_TOLERANCE
        if self.variance > band:
            return CategoryStatus.OVER
        if self.variance < -band:
            return CategoryStatus.UNDER
        return CategoryStatus.ON_TRACK


@dataclass(frozen=True)
class BudgetAnalysis:
    """Roll-up of category spending with plain-language recommendations."""

    total_budgeted: float
    total_spent: float
    total_variance: float
    overspent: List[CategorySpending] = field(default_factory=list)
    underspent: List[CategorySpending] = field(default_factory=list)
    on_track: List[CategorySpending] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)


def analyze_category_spending(
    categories: Sequence[Tuple[str, float, float]],
) -> BudgetAnalysis:
    """
    Analyze spending patterns by category.

    Args:
        categories: (name, budgeted, actual) tuples

    Returns:
        BudgetAnalysis with categories split by CategoryStatus
    """
    total_budgeted = sum(budgeted for _, budgeted, _ in categories)
    total_spent = sum(actual for _, _, actual in categories)
    total_variance = variance(total_spent, total_budgeted)

    details = []
    for name, budgeted, actual in categories:
        share = percent_of(actual, total_spent)
        details.append(
            CategorySpending(
                name=name,
                budgeted=budgeted,
                actual=actual,
                percent_of_total=share if share is not None else 0.0,
            )
        )

    overspent = [c for c in details if c.status == CategoryStatus.OVER]
    underspent = [c for c in details if c.status == CategoryStatus.UNDER]
    on_track = [c for c in details if c.status == CategoryStatus.ON_TRACK]

    recommendations = []
    if total_variance > 0:
        recommendations.append(
            "Overall spending exceeds budget. Consider reducing discretionary expenses."
        )
    if overspent:
        names = ", ".join(c.name for c in overspent)
        recommendations.append(f"Focus on reducing spending in: {names}")
    if underspent:
        names = ", ".join(c.name for c in underspent)
        recommendations.append(f"Consider reallocating funds from: {names}")
    if total_variance < 0 and abs(total_variance) > total_budgeted * UNDERSPEND_PRAISE_THRESHOLD:
        recommendations.append(
            "Great job staying under budget! Consider increasing savings."
        )

    return BudgetAnalysis(
        total_budgeted=total_budgeted,
        total_spent=total_spent,
        total_variance=total_variance,
        overspent=overspent,
        underspent=underspent,
        on_track=on_track,
        recommendations=recommendations,
    )


def recommend_budget_adjustments(
    categories: Sequence[Tuple[str, float, float]],
    target_total_budget: float,
) -> List[Tuple[str, float, float]]:
    """
    Scale every category budget proportionally to hit a new total.

    Returns:
        (name, adjusted budget, change from current budget) tuples. An empty
        list when the current total is zero, since there is nothing to scale.
    """
    current_total = sum(budgeted for _, budgeted, _ in categories)
    ratio = safe_divide(target_total_budget, current_total)
    if ratio is None:
        return []

    adjustments = []
    for name, budgeted, _ in categories:
        adjusted = budgeted * ratio
        adjustments.append((name, adjusted, adjusted - budgeted))
    return adjustments
