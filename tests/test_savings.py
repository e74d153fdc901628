"""
Tests for savings, investment and budget allocation calculations.
"""

import pytest

from budget_engine.calculations.allocation import (
    break_even_point,
    contribution_margin_ratio,
    priority_based_allocation,
    proportional_allocation,
)
from budget_engine.calculations.savings import (
    compound_interest,
    investment_projection,
    required_monthly_savings,
    savings_goal,
)


class TestSavingsGoal:
    """Test savings goal timelines."""

    def test_months_to_goal(self):
        goal = savings_goal(10000, 0, 500, 5.0)
        assert 0 < goal.months_to_goal < 24
        assert goal.total_contributions == 500 * goal.months_to_goal
        assert goal.total_interest_earned > 0

    def test_zero_rate_goal(self):
        goal = savings_goal(1200, 0, 100, 0.0)
        assert goal.months_to_goal == 12
        assert goal.total_interest_earned == 0

    def test_goal_already_reached(self):
        goal = savings_goal(1000, 2000, 100, 5.0)
        assert goal.months_to_goal == 0
        assert goal.total_contributions == 0

    def test_no_contribution(self):
        assert savings_goal(10000, 0, 0, 5.0) is None

    def test_unreachable_within_cap(self):
        assert savings_goal(1_000_000_000, 0, 1, 0.0) is None

    def test_goal_met_in_month_after_cap(self):
        """The balance is checked before the 1200-month cap applies."""
        goal = savings_goal(1201, 0, 1, 0.0)
        assert goal.months_to_goal == 1201
        assert savings_goal(1202, 0, 1, 0.0) is None


class TestInvestmentGrowth:
    """Test investment projection and compound interest."""

    def test_investment_projection(self):
        projection = investment_projection(10000, 500, 7.0, 10)
        assert projection.total_contributions == pytest.approx(60000)
        assert projection.future_value > 70000
        assert projection.total_gains == pytest.approx(
            projection.future_value - 70000
        )

    def test_zero_rate_projection(self):
        projection = investment_projection(1000, 100, 0.0, 1)
        assert projection.future_value == pytest.approx(2200)
        assert projection.total_gains == pytest.approx(0)

    def test_compound_interest(self):
        assert compound_interest(1000, 5.0, 10, 1) == pytest.approx(1628.89, abs=0.01)

    def test_more_frequent_compounding_grows_more(self):
        annual = compound_interest(1000, 6.0, 5, 1)
        monthly = compound_interest(1000, 6.0, 5, 12)
        daily = compound_interest(1000, 6.0, 5, 365)
        assert annual < monthly < daily

    def test_five_percent_over_ten_years(self):
        annual = compound_interest(1000, 5.0, 10, 1)
        monthly = compound_interest(1000, 5.0, 10, 12)
        daily = compound_interest(1000, 5.0, 10, 365)
        assert annual < monthly < daily
        assert abs(annual - 1628.89) < 0.01
        assert abs(monthly - 1647.01) < 0.01
        assert abs(daily - 1648.66) < 0.01


class TestRequiredSavings:
    """Test required monthly savings."""

    def test_required_monthly_savings(self):
        amount = required_monthly_savings(10000, 0, 5.0, 2)
        assert 0 < amount < 500

    def test_meets_target_with_investment_projection(self):
        amount = required_monthly_savings(50000, 5000, 6.0, 5)
        projection = investment_projection(5000, amount, 6.0, 5)
        assert projection.future_value == pytest.approx(50000, abs=0.01)

    def test_already_funded(self):
        assert required_monthly_savings(1000, 5000, 3.0, 5) == 0

    def test_zero_horizon(self):
        assert required_monthly_savings(1000, 0, 3.0, 0) is None

    def test_zero_rate(self):
        assert required_monthly_savings(1200, 0, 0.0, 1) == pytest.approx(100)

    def test_horizon_too_long_to_compound(self):
        assert required_monthly_savings(1000, 0, 12.0, 10000) == 0


class TestAllocation:
    """Test budget allocation and break-even."""

    def test_proportional_allocation(self):
        assert proportional_allocation(1000, [1, 3]) == pytest.approx([250, 750])

    def test_proportional_allocation_zero_weights(self):
        assert proportional_allocation(1000, [0, 0]) == [0.0, 0.0]

    def test_priority_based_allocation(self):
        allocations = priority_based_allocation(
            1000, [("Marketing", 600, 2), ("Payroll", 500, 1), ("Travel", 200, 3)]
        )
        assert allocations == [("Payroll", 500), ("Marketing", 500), ("Travel", 0)]

    def test_break_even_point(self):
        assert break_even_point(10000, 300, 100) == 50
        assert break_even_point(10000, 100, 100) is None

    def test_contribution_margin_ratio(self):
        assert contribution_margin_ratio(1000, 400) == pytest.approx(60.0)
        assert contribution_margin_ratio(0, 400) is None
