"""Tests for MetricsCalculator integration"""

from unittest.mock import patch

import pytest

from series_engine.config.defaults import DefaultConfig, RiskParams, get_default_config
from series_engine.data.models import Cadence
from series_engine.errors import MetricsCalculationError
from series_engine.metrics.calculator import MetricsCalculator


class TestMetricsCalculator:
    """Test MetricsCalculator integration"""

    def test_calculator_initialization(self):
        """Test MetricsCalculator initialization"""
        calc = MetricsCalculator()
        assert calc.config is not None

    def test_calculate_indicators(self, trending_closes):
        """Test every indicator is aligned with the closes"""
        calc = MetricsCalculator()
        snapshot = calc.calculate_indicators(trending_closes)

        assert snapshot.closes == trending_closes
        assert set(snapshot.sma) == {20, 50}
        assert all(len(line) == len(trending_closes) for line in snapshot.sma.values())
        assert len(snapshot.ema) == len(trending_closes)
        assert len(snapshot.rsi) == len(trending_closes)
        assert 0.0 <= snapshot.latest_rsi <= 100.0

    def test_indicators_clean_input(self):
        """Test unusable prices are dropped before calculating"""
        snapshot = MetricsCalculator().calculate_indicators([1.0, None, "2", ".", float("nan"), 3])
        assert snapshot.closes == [1.0, 2.0, 3.0]
        assert snapshot.latest_rsi is None

    def test_indicator_failure_is_wrapped(self, trending_closes):
        """Test unexpected errors surface as MetricsCalculationError"""
        calc = MetricsCalculator()
        with patch("series_engine.metrics.calculator.rsi", side_effect=RuntimeError("boom")):
            with pytest.raises(MetricsCalculationError) as exc_info:
                calc.calculate_indicators(trending_closes)
        assert exc_info.value.metric_name == "indicators"
        assert exc_info.value.recoverable is False

    def test_calculate_risk(self, drawdown_closes):
        """Test risk snapshot for the drawdown scenario"""
        snapshot = MetricsCalculator().calculate_risk(drawdown_closes)

        assert set(snapshot.trailing_returns) == {1, 7, 30}
        assert snapshot.trailing_returns[1] == pytest.approx(1 / 9)
        assert snapshot.trailing_returns[7] is None
        assert snapshot.max_drawdown == pytest.approx(-0.25)
        assert snapshot.drawdown.trough_index == 5
        assert snapshot.benchmark_correlation is None
        assert snapshot.periods_per_year == 365
        assert snapshot.has_sufficient_data()

    def test_risk_with_benchmark(self):
        """Test correlation against a benchmark"""
        closes = [1.0, 2.0, 3.0, 4.0, 5.0, 6.0, 7.0]
        snapshot = MetricsCalculator().calculate_risk(closes, benchmark=[2 * c for c in closes])
        assert snapshot.benchmark_correlation == pytest.approx(1.0)

    def test_risk_short_history(self):
        """Test a single price degrades to sentinels"""
        snapshot = MetricsCalculator().calculate_risk([5.0])
        assert snapshot.annualized_volatility is None
        assert snapshot.drawdown is None
        assert snapshot.max_drawdown == 0.0
        assert not snapshot.has_sufficient_data()

    def test_risk_periods_override(self, drawdown_closes):
        """Test annualization from config and per call"""
        config = get_default_config()
        config = DefaultConfig(
            normalization=config.normalization,
            cadence=config.cadence,
            chart=config.chart,
            indicators=config.indicators,
            risk=RiskParams(periods_per_year=252),
        )
        calc = MetricsCalculator(config)
        assert calc.calculate_risk(drawdown_closes).periods_per_year == 252
        assert calc.calculate_risk(drawdown_closes, periods_per_year=12).periods_per_year == 12

    def test_calculate_macro(self, quarterly_series):
        """Test macro snapshot for quarterly data"""
        snapshot = MetricsCalculator().calculate_macro(quarterly_series)
        assert snapshot.cadence is Cadence.QUARTERLY
        assert snapshot.latest.value == 235.0
        assert snapshot.latest_label == "2023-Q4"
        assert snapshot.deltas.short_period_label == "QoQ"
        assert snapshot.point_count == 8

    def test_calculate_macro_empty(self):
        """Test macro snapshot for an empty series"""
        from series_engine.data.models import Series

        snapshot = MetricsCalculator().calculate_macro(Series.empty())
        assert snapshot.latest is None
        assert snapshot.latest_label == ""
        assert snapshot.deltas.short_period_pct is None

    def test_warmup_period(self):
        """Test warm-up covers the slowest indicator"""
        assert MetricsCalculator().get_warmup_period() == 50

    def test_repeated_calls_are_independent(self, trending_closes):
        """Test the same input gives equal results and is left untouched"""
        calc = MetricsCalculator()
        closes = list(trending_closes)
        first = calc.calculate_indicators(closes)
        second = calc.calculate_indicators(closes)
        assert closes == trending_closes
        assert first.closes is not closes
        assert first.sma[20][-1] == second.sma[20][-1]
        assert first.latest_rsi == second.latest_rsi
        assert not hasattr(calc, "last_indicators")
