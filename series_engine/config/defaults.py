"""Default configuration parameters for the analytics engine."""

from dataclasses import dataclass

INVALID_DATE_POLICIES = ("exclude", "sentinel", "raise")


@dataclass(frozen=True)
class NormalizationParams:
    """Series normalization parameters."""
    invalid_date_policy: str = "exclude"             # exclude | sentinel | raise
    keep_last: int | None = None                     # Trim to most recent N points


@dataclass(frozen=True)
class CadenceParams:
    """Cadence inference thresholds (average gap in months)."""
    max_gap_samples: int = 12                        # Consecutive pairs inspected
    annual_threshold: float = 8.0                    # avg gap > this -> annual
    quarterly_threshold: float = 2.0                 # avg gap > this -> quarterly
    min_points: int = 3                              # Shorter series default to monthly


@dataclass(frozen=True)
class ChartParams:
    """Chart projection parameters."""
    width: float = 600.0
    height: float = 170.0
    padding: float = 12.0
    tick_count_target: int = 8
    y_margin_pct: float = 0.08                       # Visual margin above/below extrema
    gridline_count: int = 5
    include_area: bool = True


@dataclass(frozen=True)
class IndicatorParams:
    """Technical indicator parameters."""
    sma_periods: tuple[int, ...] = (20, 50)
    ema_period: int = 20
    rsi_period: int = 14
    macd_fast: int = 12
    macd_slow: int = 26
    macd_signal: int = 9
    macd_zero_fill_warmup: bool = False              # Legacy signal-line warm-up


@dataclass(frozen=True)
class RiskParams:
    """Risk metric parameters."""
    periods_per_year: int = 365                      # Daily sampling, 24/7 markets
    trailing_windows: tuple[int, ...] = (1, 7, 30)
    min_correlation_points: int = 6
    correlation_epsilon: float = 1e-9


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    normalization: NormalizationParams
    cadence: CadenceParams
    chart: ChartParams
    indicators: IndicatorParams
    risk: RiskParams


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        normalization=NormalizationParams(),
        cadence=CadenceParams(),
        chart=ChartParams(),
        indicators=IndicatorParams(),
        risk=RiskParams(),
    )
