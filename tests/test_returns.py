"""
Tests for return metrics.
"""

import pytest

from budget_engine.calculations.returns import (
    future_value,
    irr,
    npv,
    payback_period,
    present_value,
    profitability_index,
    roa,
    roe,
    roi,
    simple_interest,
)


class TestRatios:
    """Test ROI, ROA and ROE."""

    def test_roi(self):
        assert roi(1500, 1000) == pytest.approx(50.0)
        assert roi(800, 1000) == pytest.approx(-20.0)

    def test_zero_denominators_have_no_value(self):
        assert roi(100, 0) is None
        assert roa(100, 0) is None
        assert roe(100, 0) is None

    def test_roa_and_roe(self):
        assert roa(50000, 1000000) == pytest.approx(5.0)
        assert roe(50000, 250000) == pytest.approx(20.0)

    def test_profitability_index(self):
        assert profitability_index(120000, 100000) == pytest.approx(1.2)
        assert profitability_index(120000, 0) is None


class TestNPV:
    """Test NPV calculation."""

    def test_calculate_npv(self):
        cash_flows = [-100, 50, 50, 50]
        value = npv(0.10, cash_flows)
        # NPV should be positive since returns exceed cost
        assert value == pytest.approx(24.34, abs=0.01)

    def test_zero_rate_is_plain_sum(self):
        assert npv(0.0, [-100, 40, 40, 40]) == pytest.approx(20.0)

    def test_first_flow_is_undiscounted(self):
        assert npv(0.5, [-100]) == -100


class TestIRRCalculations:
    """Test IRR calculation functions."""

    def test_calculate_irr_simple(self):
        """Investment of 100, returns of 110 after 1 period = 10% return."""
        rate = irr([-100, 110])
        assert abs(rate - 0.10) < 0.001

    def test_calculate_irr_multi_period(self):
        """Investment of 100, annual returns of 20, 100 back at the end."""
        rate = irr([-100, 20, 20, 20, 20, 120])
        assert abs(rate - 0.20) < 0.01

    def test_irr_negative_returns(self):
        rate = irr([-100, 40, 40, 10])
        assert rate < 0

    @pytest.mark.parametrize(
        "flows",
        [
            [-1000, 300, 400, 500],
            [-5000, 1000, 1500, 2000, 2500],
            [-250, 100, 100, 100],
            [-100, 0, 0, 150],
        ],
    )
    def test_irr_zeroes_npv(self, flows):
        rate = irr(flows)
        assert rate is not None
        assert abs(npv(rate, flows)) < 1e-6

    def test_all_positive_flows_do_not_converge(self):
        """No sign change means no root; the search gives up quietly."""
        assert irr([100, 100, 100]) is None

    def test_zero_derivative(self):
        assert irr([-100]) is None

    def test_iteration_cap(self):
        assert irr([-1000, 300, 400, 500], max_iterations=0) is None
        assert irr([-1000, 300, 400, 500], max_iterations=1) is None

    def test_custom_tolerance(self):
        flows = [-1000, 300, 400, 500]
        rate = irr(flows, tolerance=1e-3)
        assert abs(npv(rate, flows)) < 1e-3


class TestPayback:
    """Test payback period."""

    def test_payback_period(self):
        assert payback_period(1000, [300, 300, 300, 300]) == 4

    def test_exact_recovery(self):
        assert payback_period(600, [300, 300, 300]) == 2

    def test_never_recovered(self):
        assert payback_period(1000, [100, 100]) is None


class TestTimeValue:
    """Test lump-sum time value helpers."""

    def test_future_and_present_value(self):
        fv = future_value(1000, 0.05, 10)
        assert fv == pytest.approx(1628.89, abs=0.01)
        assert present_value(fv, 0.05, 10) == pytest.approx(1000)

    def test_simple_interest(self):
        assert simple_interest(1000, 0.05, 3) == pytest.approx(150)
