"""
Main analytics engine coordinator.

Wires configuration, normalization, metrics and chart projection together:
raw observations or closes in, display-ready views out.
"""

from collections.abc import Mapping
from pathlib import Path
from typing import Any, Iterable, Optional, Union

import structlog

from .chart.projector import ChartProjector, value_domain
from .config.defaults import DefaultConfig
from .config.loader import ConfigLoader
from .config.validation import ConfigValidator
from .data.normalizer import SeriesNormalizer
from .data.validators import clean_price_series
from .errors import ConfigurationError
from .metrics.calculator import MetricsCalculator
from .models.views import MacroView, MarketView

logger = structlog.get_logger(__name__)


class SeriesAnalyticsEngine:
    """
    Main coordinator for series normalization, analytics and charting.

    Pipeline:
    Raw observations -> Normalization -> Metrics -> Chart projection

    Configuration is resolved per call with the loader's precedence
    (call overrides, then the series.yaml entry, then defaults) and
    validated before use.
    """

    def __init__(self, config_dir: Optional[Union[str, Path]] = None) -> None:
        self.logger = logger
        self.config_loader = ConfigLoader.create(Path(config_dir) if config_dir else None)
        self.logger.info("Series analytics engine initialized",
                         config_dir=str(self.config_loader.config_dir))

    def resolve_config(self, series_id: Optional[str] = None,
                       overrides: Optional[dict[str, Any]] = None) -> DefaultConfig:
        """
        Merge and validate configuration for one call.

        Raises:
            ConfigurationError: If the merged configuration is invalid
        """
        merged = self.config_loader.merge_config(series_id, overrides)
        errors = ConfigValidator.validate_config(merged)
        if errors:
            self.logger.error(
                "Invalid configuration",
                series_id=series_id,
                errors=[f"{e.field}: {e.message}" for e in errors],
            )
            raise ConfigurationError(
                f"Invalid configuration for {series_id or 'defaults'}: "
                + "; ".join(f"{e.field}: {e.message}" for e in errors),
                errors=errors,
            )
        return self.config_loader.build_config(series_id, overrides)

    def build_macro_view(self, raw: Union[str, bytes, Iterable[Any]],
                         series_id: Optional[str] = None,
                         overrides: Optional[dict[str, Any]] = None) -> MacroView:
        """
        Normalize a macro observation array and derive its summary and chart.

        Args:
            raw: Observation entries, or a JSON observations document
            series_id: Key into series.yaml for per-series overrides
            overrides: Per-call configuration overrides

        Returns:
            MacroView
        """
        config = self.resolve_config(series_id, overrides)
        normalizer = SeriesNormalizer(config.normalization)

        if isinstance(raw, (str, bytes)):
            result = normalizer.normalize_payload(raw)
        else:
            result = normalizer.normalize(raw)

        calculator = MetricsCalculator(config)
        snapshot = calculator.calculate_macro(result.series)
        projection = ChartProjector(config.chart, config.cadence).project(
            result.series, cadence=snapshot.cadence
        )

        self.logger.info(
            "Macro view built",
            series_id=series_id,
            point_count=len(result.series),
            rejected_count=result.rejected_count,
            cadence=snapshot.cadence.name,
        )
        return MacroView(
            series_id=series_id,
            normalization=result,
            snapshot=snapshot,
            projection=projection,
        )

    def build_market_view(self, closes_or_bars: Iterable[Any],
                          benchmark: Optional[Iterable[Any]] = None,
                          series_id: Optional[str] = None,
                          overrides: Optional[dict[str, Any]] = None) -> MarketView:
        """
        Calculate indicators, risk metrics and overlay lines for one instrument.

        Args:
            closes_or_bars: Close prices in chronological order, or dated bar
                mappings with "date" and "close" (sorted and deduplicated)
            benchmark: Optional benchmark closes for correlation
            series_id: Key into series.yaml for per-series overrides
            overrides: Per-call configuration overrides

        Returns:
            MarketView whose lines share one y-domain
        """
        config = self.resolve_config(series_id, overrides)
        entries = list(closes_or_bars)

        if entries and all(isinstance(entry, Mapping) for entry in entries):
            closes = SeriesNormalizer(config.normalization).extract_price_series(entries)
        else:
            closes = clean_price_series(entries)

        calculator = MetricsCalculator(config)
        indicators = calculator.calculate_indicators(closes)
        risk = calculator.calculate_risk(indicators.closes, benchmark)

        overlays = {"close": indicators.closes, f"ema_{config.indicators.ema_period}": indicators.ema}
        for period, line in indicators.sma.items():
            overlays[f"sma_{period}"] = line

        projector = ChartProjector(config.chart, config.cadence)
        domain = value_domain(*overlays.values())
        lines = {name: projector.project_line(values, domain) for name, values in overlays.items()}

        self.logger.info(
            "Market view built",
            series_id=series_id,
            close_count=len(indicators.closes),
            annualized_volatility=risk.annualized_volatility,
            max_drawdown=risk.max_drawdown,
        )
        return MarketView(series_id=series_id, indicators=indicators, risk=risk, lines=lines)
