"""
Budget Allocation

Splits a budget across line items and computes break-even figures.
"""

from typing import List, Optional, Sequence, Tuple

from budget_engine.calculations.numeric import percent_of


def proportional_allocation(total_budget: float, weights: Sequence[float]) -> List[float]:
    """Split a budget in proportion to weights; all zeros when weights sum to zero."""
    total_weight = sum(weights)
    if total_weight == 0:
        return [0.0] * len(weights)
    return [total_budget * (w / total_weight) for w in weights]


def priority_based_allocation(
    total_budget: float,
    requests: Sequence[Tuple[str, float, int]],
) -> List[Tuple[str, float]]:
    """
    Fund requests in priority order until the budget runs out.

    Args:
        total_budget: Amount available
        requests: (name, minimum required, priority) tuples, where a lower
            priority number is funded first

    Returns:
        (name, allocated) tuples in funding order
    """
    remaining = total_budget
    allocations = []
    for name, minimum_required, _ in sorted(requests, key=lambda r: r[2]):
        allocated = min(minimum_required, remaining)
        remaining -= allocated
        allocations.append((name, allocated))
    return allocations


def break_even_point(
    fixed_costs: float, price_per_unit: float, variable_cost_per_unit: float
) -> Optional[float]:
    """Units needed to cover fixed costs, or None if each unit loses money."""
    contribution_margin = price_per_unit - variable_cost_per_unit
    if contribution_margin <= 0:
        return None
    return fixed_costs / contribution_margin


def contribution_margin_ratio(revenue: float, variable_costs: float) -> Optional[float]:
    """Contribution margin as a percent of revenue."""
    return percent_of(revenue - variable_costs, revenue)
