"""Combined results returned by the analytics engine"""

from dataclasses import dataclass, field
from typing import Optional

from ..data.models import NormalizationResult
from .chart import ChartProjection, LineProjection
from .metrics import IndicatorSnapshot, MacroSnapshot, RiskSnapshot


@dataclass(frozen=True)
class MacroView:
    """Normalized macro series with its headline figures and chart"""
    series_id: Optional[str]
    normalization: NormalizationResult
    snapshot: MacroSnapshot
    projection: ChartProjection

    @property
    def series(self):
        return self.normalization.series


@dataclass(frozen=True)
class MarketView:
    """Close-price indicators, risk summary and overlay lines for one instrument"""
    series_id: Optional[str]
    indicators: IndicatorSnapshot
    risk: RiskSnapshot
    lines: dict[str, LineProjection] = field(default_factory=dict)
