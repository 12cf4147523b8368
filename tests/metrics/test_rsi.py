"""Tests for RSI calculation"""

import math

import pytest

from series_engine.metrics.rsi import rsi


class TestRSI:
    """Test Wilder-smoothed RSI"""

    def test_range(self, trending_closes):
        """Test defined values stay within [0, 100]"""
        values = [v for v in rsi(trending_closes, 14) if not math.isnan(v)]
        assert values
        assert all(0.0 <= v <= 100.0 for v in values)

    def test_output_length(self, trending_closes):
        """Test one value per price change, first period undefined"""
        out = rsi(trending_closes, 14)
        assert len(out) == len(trending_closes) - 1
        assert all(math.isnan(v) for v in out[:14])

    def test_aligned_output(self, trending_closes):
        """Test aligned output lines up with the prices"""
        out = rsi(trending_closes, 14, aligned=True)
        assert len(out) == len(trending_closes)
        assert math.isnan(out[0])

    def test_only_gains_is_100(self):
        """Test zero average loss gives 100"""
        out = rsi([float(v) for v in range(1, 20)], 5)
        assert out[-1] == pytest.approx(100.0)

    def test_only_losses_is_0(self):
        """Test zero average gain gives 0"""
        out = rsi([float(v) for v in range(20, 1, -1)], 5)
        assert out[-1] == pytest.approx(0.0)

    def test_insufficient_data(self):
        """Test fewer than period + 1 prices is all NaN"""
        out = rsi([1.0, 2.0, 3.0], 14)
        assert len(out) == 2
        assert all(math.isnan(v) for v in out)
        assert rsi([], 14) == []
