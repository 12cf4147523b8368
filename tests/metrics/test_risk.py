"""Tests for risk and performance metrics"""

import math

import pytest

from series_engine.data.models import Cadence
from series_engine.errors import InsufficientDataError
from series_engine.metrics.risk import (
    annualized_volatility,
    correlation,
    drawdown_series,
    drawdown_stats,
    max_drawdown,
    period_returns,
    periods_per_year_for,
    trailing_return,
)


class TestReturns:
    """Test simple and trailing returns"""

    def test_period_returns(self):
        """Test consecutive simple returns"""
        assert period_returns([100.0, 110.0, 99.0]) == pytest.approx([0.1, -0.1])

    def test_zero_price_step(self):
        """Test a zero previous price yields 0 for that step"""
        assert period_returns([0.0, 5.0, 10.0]) == pytest.approx([0.0, 1.0])

    def test_short_input(self):
        """Test fewer than two prices"""
        assert period_returns([1.0]) == []

    def test_trailing_return(self, drawdown_closes):
        """Test return over the last N steps"""
        assert trailing_return(drawdown_closes, 1) == pytest.approx((10 - 9) / 9)
        assert trailing_return(drawdown_closes, 6) == pytest.approx(0.0)

    def test_trailing_return_out_of_range(self, drawdown_closes):
        """Test a window longer than the history"""
        assert trailing_return(drawdown_closes, 7) is None

    def test_trailing_return_zero_base(self):
        """Test a zero base price"""
        assert trailing_return([0.0, 1.0], 1) is None


class TestVolatility:
    """Test annualized volatility"""

    def test_matches_formula(self):
        """Test sample standard deviation scaled by sqrt(periods)"""
        closes = [100.0, 102.0, 101.0, 103.0, 104.0]
        rets = period_returns(closes)
        mean = sum(rets) / len(rets)
        std = math.sqrt(sum((r - mean) ** 2 for r in rets) / (len(rets) - 1))
        assert annualized_volatility(closes, 252) == pytest.approx(std * math.sqrt(252))

    def test_needs_two_returns(self):
        """Test None with fewer than two returns"""
        assert annualized_volatility([1.0, 2.0]) is None

    def test_flat_series(self):
        """Test constant prices have zero volatility"""
        assert annualized_volatility([5.0] * 10) == pytest.approx(0.0)

    def test_periods_per_year_for_cadence(self):
        """Test annualization factors per cadence"""
        assert periods_per_year_for(Cadence.MONTHLY) == 12
        assert periods_per_year_for(Cadence.QUARTERLY) == 4
        assert periods_per_year_for(Cadence.ANNUAL) == 1


class TestDrawdown:
    """Test drawdown calculations"""

    def test_max_drawdown_scenario(self, drawdown_closes):
        """Test peak 12 to trough 9 gives -25%"""
        assert max_drawdown(drawdown_closes) == pytest.approx(-0.25)

    def test_drawdown_never_positive(self, drawdown_closes):
        """Test every drawdown value is <= 0"""
        series = drawdown_series(drawdown_closes)
        assert len(series) == len(drawdown_closes)
        assert all(v <= 0 for v in series)

    def test_rising_series(self):
        """Test a never-declining series has no drawdown"""
        assert max_drawdown([1.0, 2.0, 3.0]) == 0.0
        assert max_drawdown([]) == 0.0

    def test_drawdown_stats(self, drawdown_closes):
        """Test peak, trough and recovery positions"""
        stats = drawdown_stats(drawdown_closes)
        assert stats.max_drawdown == pytest.approx(-0.25)
        assert stats.peak_index == 2
        assert stats.trough_index == 5
        assert stats.recovery_index is None
        assert not stats.recovered

    def test_drawdown_recovery(self):
        """Test recovery index when price regains the peak"""
        stats = drawdown_stats([10.0, 8.0, 9.0, 10.0, 11.0])
        assert stats.recovery_index == 3
        assert stats.recovered

    def test_drawdown_stats_insufficient(self):
        """Test a single price raises InsufficientDataError"""
        with pytest.raises(InsufficientDataError) as exc_info:
            drawdown_stats([1.0])
        assert exc_info.value.required_count == 2
        assert exc_info.value.available_count == 1


class TestCorrelation:
    """Test benchmark correlation"""

    def test_perfect_positive(self):
        """Test proportional series correlate at 1"""
        a = [1.0, 2.0, 3.0, 4.0, 5.0, 6.0]
        b = [2.0, 4.0, 6.0, 8.0, 10.0, 12.0]
        assert correlation(a, b) == pytest.approx(1.0)

    def test_perfect_negative(self):
        """Test mirrored series correlate at -1"""
        a = [1.0, 2.0, 3.0, 4.0, 5.0, 6.0]
        assert correlation(a, list(reversed(a))) == pytest.approx(-1.0)

    def test_trailing_alignment(self):
        """Test arrays of different length align on their most recent values"""
        a = [100.0, 1.0, 2.0, 3.0, 4.0, 5.0, 6.0]
        b = [1.0, 2.0, 3.0, 4.0, 5.0, 6.0]
        assert correlation(a, b) == pytest.approx(1.0)

    def test_too_few_points(self):
        """Test fewer than the minimum aligned points"""
        assert correlation([1.0, 2.0, 3.0], [1.0, 2.0, 3.0]) is None

    def test_flat_series_is_zero(self):
        """Test a flat series uses the epsilon denominator"""
        assert correlation([1.0] * 6, [1.0, 2.0, 3.0, 4.0, 5.0, 6.0]) == pytest.approx(0.0)

    def test_non_finite_input(self):
        """Test NaN input yields None"""
        a = [1.0, 2.0, float("nan"), 4.0, 5.0, 6.0]
        assert correlation(a, a) is None
