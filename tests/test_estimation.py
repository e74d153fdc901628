"""
Tests for project estimation: PERT, confidence intervals and EVM.
"""

import pytest

from budget_engine.calculations.estimation import (
    EVMSnapshot,
    bottom_up_estimate,
    confidence_interval,
    contingency_reserve,
    evm_metrics,
    three_point_estimate,
    three_point_standard_deviation,
)


class TestThreePoint:
    """Test PERT estimates."""

    def test_three_point_estimate(self):
        assert three_point_estimate(8, 10, 18) == pytest.approx(11)

    def test_standard_deviation(self):
        assert three_point_standard_deviation(8, 20) == pytest.approx(2)

    def test_confidence_interval_95(self):
        lower, upper = confidence_interval(100, 10)
        assert lower == pytest.approx(80.4)
        assert upper == pytest.approx(119.6)

    @pytest.mark.parametrize("level,z_score", [(0.68, 1.0), (0.99, 2.58)])
    def test_supported_levels(self, level, z_score):
        lower, upper = confidence_interval(50, 5, level)
        assert upper - 50 == pytest.approx(5 * z_score)
        assert 50 - lower == pytest.approx(5 * z_score)

    def test_unknown_level_uses_default_z(self):
        assert confidence_interval(100, 10, 0.9) == confidence_interval(100, 10, 0.95)


class TestEVM:
    """Test earned value management metrics."""

    def test_evm_metrics(self):
        metrics = evm_metrics(
            EVMSnapshot(
                planned_value=100000,
                earned_value=120000,
                actual_cost=80000,
                budget_at_completion=200000,
            )
        )
        assert metrics.schedule_variance == 20000
        assert metrics.cost_variance == 40000
        assert metrics.schedule_performance_index == pytest.approx(1.2)
        assert metrics.cost_performance_index == pytest.approx(1.5)
        assert metrics.estimate_at_completion == pytest.approx(133333.33, abs=0.01)
        assert metrics.estimate_to_complete == pytest.approx(53333.33, abs=0.01)

    def test_zero_planned_value(self):
        metrics = evm_metrics(EVMSnapshot(0, 100, 50, 1000))
        assert metrics.schedule_performance_index is None
        assert metrics.cost_performance_index == pytest.approx(2.0)

    def test_zero_actual_cost(self):
        metrics = evm_metrics(EVMSnapshot(100, 100, 0, 1000))
        assert metrics.cost_performance_index is None
        assert metrics.estimate_at_completion is None
        assert metrics.estimate_to_complete is None

    def test_no_earned_value(self):
        """CPI of zero leaves the estimate at completion undefined."""
        metrics = evm_metrics(EVMSnapshot(100, 0, 50, 1000))
        assert metrics.cost_performance_index == 0
        assert metrics.estimate_at_completion is None


class TestBottomUp:
    """Test contingency and bottom-up estimates."""

    def test_contingency_reserve(self):
        assert contingency_reserve(1000, 15) == pytest.approx(150)

    def test_bottom_up_estimate(self):
        assert bottom_up_estimate([100, 200, 300], 10) == pytest.approx(660)

    def test_bottom_up_without_tasks(self):
        assert bottom_up_estimate([], 10) == 0
