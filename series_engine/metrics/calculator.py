"""Main metrics calculator for coordinating indicator, risk and macro calculations"""

from typing import Any, Iterable, Optional

from ..config.defaults import DefaultConfig, get_default_config
from ..data.models import Cadence, Series
from ..data.validators import clean_price_series
from ..errors import InsufficientDataError, MetricsCalculationError
from ..logging.config import get_metrics_logger, log_insufficient_history
from ..models.metrics import IndicatorSnapshot, MacroSnapshot, RiskSnapshot
from ..utils.time import format_period_label
from .cadence import infer_cadence
from .deltas import calculate_deltas
from .macd import macd
from .moving_average import ema, sma
from .risk import (
    annualized_volatility,
    correlation,
    drawdown_stats,
    max_drawdown,
    trailing_return,
)
from .rsi import rsi

logger = get_metrics_logger(__name__)


class MetricsCalculator:
    """
    Coordinates indicator, risk and macro-summary calculations using one config

    Holds no state besides its config; every call works on fresh copies
    of its input.
    """

    def __init__(self, config: Optional[DefaultConfig] = None):
        self.config = config or get_default_config()

    def calculate_indicators(self, closes: Iterable[Any]) -> IndicatorSnapshot:
        """
        Calculate SMA, EMA, RSI and MACD over a close-price array

        Unusable prices (None, placeholders, non-finite) are dropped first.
        Every output array is aligned index-for-index with the cleaned closes.

        Args:
            closes: Close prices in chronological order

        Returns:
            IndicatorSnapshot
        """
        params = self.config.indicators
        prices = clean_price_series(closes)

        try:
            sma_lines = {period: sma(prices, period) for period in params.sma_periods}
            ema_line = ema(prices, params.ema_period)
            rsi_line = rsi(prices, params.rsi_period, aligned=True)
            macd_result = macd(
                prices,
                fast=params.macd_fast,
                slow=params.macd_slow,
                signal=params.macd_signal,
                zero_fill_warmup=params.macd_zero_fill_warmup,
            )
        except Exception as e:
            raise MetricsCalculationError(
                f"Indicator calculation failed: {str(e)}",
                metric_name="indicators",
                calculation_input={"close_count": len(prices)}
            )

        if len(prices) < params.rsi_period + 1:
            log_insufficient_history(logger, "rsi", params.rsi_period + 1, len(prices))
        if len(prices) < params.macd_slow + params.macd_signal - 1:
            log_insufficient_history(logger, "macd_signal",
                                     params.macd_slow + params.macd_signal - 1, len(prices))

        return IndicatorSnapshot(
            closes=prices,
            sma=sma_lines,
            ema=ema_line,
            rsi=rsi_line,
            macd=macd_result,
        )

    def calculate_risk(self, closes: Iterable[Any], benchmark: Optional[Iterable[Any]] = None,
                       periods_per_year: Optional[int] = None) -> RiskSnapshot:
        """
        Calculate trailing returns, volatility, drawdown and benchmark correlation

        Args:
            closes: Close prices in chronological order
            benchmark: Optional benchmark closes, aligned on the most recent values
            periods_per_year: Annualization factor, defaults to the configured one

        Returns:
            RiskSnapshot; metrics without enough history are None
        """
        params = self.config.risk
        ppy = periods_per_year or params.periods_per_year
        prices = clean_price_series(closes)

        try:
            trailing = {window: trailing_return(prices, window)
                        for window in params.trailing_windows}
            volatility = annualized_volatility(prices, ppy)
            worst = max_drawdown(prices)
            try:
                stats = drawdown_stats(prices)
            except InsufficientDataError as e:
                log_insufficient_history(logger, "drawdown", e.required_count, e.available_count)
                stats = None

            corr = None
            if benchmark is not None:
                corr = correlation(
                    prices,
                    clean_price_series(benchmark),
                    min_points=params.min_correlation_points,
                    epsilon=params.correlation_epsilon,
                )
        except Exception as e:
            raise MetricsCalculationError(
                f"Risk calculation failed: {str(e)}",
                metric_name="risk",
                calculation_input={"close_count": len(prices), "periods_per_year": ppy}
            )

        if volatility is None:
            log_insufficient_history(logger, "annualized_volatility", 3, len(prices))

        return RiskSnapshot(
            trailing_returns=trailing,
            annualized_volatility=volatility,
            max_drawdown=worst,
            drawdown=stats,
            benchmark_correlation=corr,
            periods_per_year=ppy,
        )

    def calculate_macro(self, series: Series, cadence: Optional[Cadence] = None) -> MacroSnapshot:
        """
        Summarize a normalized macro series: cadence, latest value and deltas

        Args:
            series: Normalized series
            cadence: Known cadence, inferred when omitted

        Returns:
            MacroSnapshot
        """
        if cadence is None:
            cadence = infer_cadence(series, self.config.cadence)

        latest = series.latest
        latest_label = format_period_label(series.instants[-1], cadence) if latest else ""

        snapshot = MacroSnapshot(
            cadence=cadence,
            latest=latest,
            latest_label=latest_label,
            deltas=calculate_deltas(series, cadence),
            point_count=len(series),
        )
        logger.debug(
            "Macro snapshot calculated",
            cadence=cadence.name,
            point_count=snapshot.point_count,
            short_period_pct=snapshot.deltas.short_period_pct,
            yoy_pct=snapshot.deltas.yoy_pct,
        )
        return snapshot

    def get_warmup_period(self) -> int:
        """Number of closes needed before every configured indicator is defined"""
        params = self.config.indicators
        return max(
            max(params.sma_periods, default=1),
            params.rsi_period + 1,
            params.macd_slow + params.macd_signal - 1,
        )
