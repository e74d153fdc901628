"""
Tests for budget variance and cash flow calculations.
"""

import pytest

from budget_engine.calculations.cashflow import (
    cash_flow_coverage_ratio,
    cumulative_cash_flow,
    days_of_cash_on_hand,
    free_cash_flow,
    net_cash_flow,
    project_cash_position,
)
from budget_engine.calculations.variance import (
    CategorySpending,
    CategoryStatus,
    VarianceStatus,
    analyze_category_spending,
    burn_rate,
    recommend_budget_adjustments,
    remaining_budget,
    utilization_rate,
    variance,
    variance_percent,
    variance_status,
)


class TestLineVariance:
    """Test single-line variance helpers."""

    def test_variance_sign(self):
        assert variance(1200, 1000) == 200
        assert variance(800, 1000) == -200

    def test_variance_percent(self):
        assert variance_percent(1200, 1000) == pytest.approx(20.0)
        assert variance_percent(100, 0) is None

    def test_variance_status(self):
        assert variance_status(1100, 1000, 50) == VarianceStatus.OVER
        assert variance_status(900, 1000, 50) == VarianceStatus.UNDER
        assert variance_status(1030, 1000, 50) == VarianceStatus.ON_TARGET

    def test_tolerance_boundary_is_on_target(self):
        assert variance_status(1050, 1000, 50) == VarianceStatus.ON_TARGET

    def test_utilization_and_remaining(self):
        assert utilization_rate(750, 1000) == pytest.approx(75.0)
        assert utilization_rate(750, 0) is None
        assert remaining_budget(1000, 1250) == -250

    def test_burn_rate(self):
        assert burn_rate(9000, 3) == 3000
        assert burn_rate(9000, 0) == 0


class TestCategoryAnalysis:
    """Test category spending analysis."""

    @pytest.fixture
    def categories(self):
        return [
            ("Food", 500.0, 600.0),
            ("Rent", 1000.0, 1000.0),
            ("Fun", 200.0, 100.0),
        ]

    def test_category_status_band(self):
        assert CategorySpending("A", 1000, 1050).status == CategoryStatus.ON_TRACK
        assert CategorySpending("A", 1000, 1051).status == CategoryStatus.OVER
        assert CategorySpending("A", 1000, 949).status == CategoryStatus.UNDER

    def test_zero_budget_category(self):
        category = CategorySpending("New", 0, 25)
        assert category.variance == 25
        assert category.variance_percent is None
        assert category.status == CategoryStatus.OVER

    def test_split_by_status(self, categories):
        analysis = analyze_category_spending(categories)
        assert [c.name for c in analysis.overspent] == ["Food"]
        assert [c.name for c in analysis.on_track] == ["Rent"]
        assert [c.name for c in analysis.underspent] == ["Fun"]
        assert analysis.total_budgeted == 1700
        assert analysis.total_spent == 1700
        assert analysis.total_variance == 0

    def test_recommendations(self, categories):
        analysis = analyze_category_spending(categories)
        assert analysis.recommendations == [
            "Focus on reducing spending in: Food",
            "Consider reallocating funds from: Fun",
        ]

    def test_percent_of_total(self, categories):
        analysis = analyze_category_spending(categories)
        rent = analysis.on_track[0]
        assert rent.percent_of_total == pytest.approx(1000 / 1700 * 100)

    def test_overall_overspend_warning(self):
        analysis = analyze_category_spending([("Travel", 1000, 1500)])
        assert analysis.recommendations[0].startswith("Overall spending exceeds budget")

    def test_underspend_praise(self):
        analysis = analyze_category_spending([("Food", 500, 400), ("Rent", 500, 400)])
        assert "Great job staying under budget! Consider increasing savings." in (
            analysis.recommendations
        )

    def test_empty_categories(self):
        analysis = analyze_category_spending([])
        assert analysis.total_budgeted == 0
        assert analysis.recommendations == []

    def test_recommend_budget_adjustments(self):
        adjustments = recommend_budget_adjustments(
            [("A", 100, 90), ("B", 300, 310)], 800
        )
        assert adjustments == [("A", 200, 100), ("B", 600, 300)]

    def test_adjustments_with_no_current_budget(self):
        assert recommend_budget_adjustments([("A", 0, 10)], 500) == []


class TestCashFlow:
    """Test cash flow calculations."""

    def test_net_cash_flow(self):
        assert net_cash_flow([1000, 500], [700, 200]) == 600

    def test_cumulative_cash_flow(self):
        assert cumulative_cash_flow([100, -50, 25]) == [100, 50, 75]
        assert cumulative_cash_flow([]) == []

    def test_project_cash_position(self):
        positions = project_cash_position(1000, [500, 200], [300, 500])
        assert positions == [1200, 900]

    def test_project_cash_position_length_mismatch(self):
        with pytest.raises(ValueError, match="same length"):
            project_cash_position(1000, [500, 200], [300])

    def test_ratios(self):
        assert cash_flow_coverage_ratio(120000, 100000) == pytest.approx(1.2)
        assert cash_flow_coverage_ratio(120000, 0) is None
        assert free_cash_flow(50000, 20000) == 30000

    def test_days_of_cash_on_hand(self):
        assert days_of_cash_on_hand(30000, 1000) == 30
        assert days_of_cash_on_hand(30000, 0) is None
