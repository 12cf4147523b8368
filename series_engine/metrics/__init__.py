"""Analytics over normalized series and close-price arrays"""

from .cadence import average_gap_months, infer_cadence, months_between
from .calculator import MetricsCalculator
from .deltas import calculate_deltas, percent_change
from .macd import macd
from .moving_average import ema, sma
from .risk import (
    annualized_volatility,
    correlation,
    drawdown_series,
    drawdown_stats,
    max_drawdown,
    period_returns,
    periods_per_year_for,
    trailing_return,
)
from .rsi import rsi

__all__ = [
    "MetricsCalculator",
    "infer_cadence",
    "average_gap_months",
    "months_between",
    "calculate_deltas",
    "percent_change",
    "sma",
    "ema",
    "rsi",
    "macd",
    "period_returns",
    "trailing_return",
    "annualized_volatility",
    "drawdown_series",
    "drawdown_stats",
    "max_drawdown",
    "correlation",
    "periods_per_year_for",
]
