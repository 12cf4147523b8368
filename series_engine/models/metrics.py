"""Data models for metrics calculations"""

import math
from dataclasses import dataclass, field
from typing import Optional

from ..data.models import Cadence, Observation


@dataclass(frozen=True)
class DeltaResult:
    """
    Short-period and year-over-year percent changes of a series.

    None means insufficient history or a zero denominator; the fields are
    never NaN or infinite.
    """
    short_period_label: str            # 'MoM', 'QoQ' or 'YoY'
    short_period_pct: Optional[float] = None
    yoy_pct: Optional[float] = None


@dataclass(frozen=True)
class MACDResult:
    """MACD line, signal line and histogram, index-aligned with the prices"""
    macd: list[float]
    signal: list[float]
    histogram: list[float]

    @property
    def latest_histogram(self) -> Optional[float]:
        """Most recent defined histogram value"""
        for value in reversed(self.histogram):
            if math.isfinite(value):
                return value
        return None


@dataclass(frozen=True)
class DrawdownStats:
    """Largest peak-to-trough decline of a price series"""
    max_drawdown: float                # <= 0, as a fraction (-0.25 = -25%)
    peak_index: Optional[int] = None
    trough_index: Optional[int] = None
    recovery_index: Optional[int] = None   # First index back above the peak

    @property
    def recovered(self) -> bool:
        return self.recovery_index is not None


@dataclass(frozen=True)
class IndicatorSnapshot:
    """Technical indicators for one close-price array"""
    closes: list[float]
    sma: dict[int, list[float]] = field(default_factory=dict)
    ema: list[float] = field(default_factory=list)
    rsi: list[float] = field(default_factory=list)     # Aligned with closes
    macd: Optional[MACDResult] = None

    @property
    def latest_rsi(self) -> Optional[float]:
        """Most recent defined RSI value"""
        for value in reversed(self.rsi):
            if math.isfinite(value):
                return value
        return None

    def is_overbought(self, threshold: float = 70.0) -> bool:
        latest = self.latest_rsi
        return latest is not None and latest >= threshold

    def is_oversold(self, threshold: float = 30.0) -> bool:
        latest = self.latest_rsi
        return latest is not None and latest <= threshold


@dataclass(frozen=True)
class RiskSnapshot:
    """Performance and risk summary for one close-price array"""
    trailing_returns: dict[int, Optional[float]] = field(default_factory=dict)
    annualized_volatility: Optional[float] = None
    max_drawdown: float = 0.0
    drawdown: Optional[DrawdownStats] = None
    benchmark_correlation: Optional[float] = None
    periods_per_year: int = 365

    def has_sufficient_data(self) -> bool:
        """Check if snapshot has the minimum data for a risk panel"""
        return self.annualized_volatility is not None


@dataclass(frozen=True)
class MacroSnapshot:
    """Headline figures for one macro indicator series"""
    cadence: Cadence
    latest: Optional[Observation]
    latest_label: str
    deltas: DeltaResult
    point_count: int
