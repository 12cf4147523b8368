"""
Risk and performance calculations over close-price arrays.

Pure functions: returns, trailing returns, annualized volatility, drawdown
and correlation. Degenerate input (zero prices, short arrays, flat series)
resolves to 0, None or an epsilon-guarded denominator instead of NaN.
"""

import math
from typing import Optional, Sequence

import numpy as np

from ..data.models import Cadence
from ..data.validators import validate_period
from ..errors import InsufficientDataError
from ..models.metrics import DrawdownStats

DEFAULT_PERIODS_PER_YEAR = 365
MIN_CORRELATION_POINTS = 6
CORRELATION_EPSILON = 1e-9


def periods_per_year_for(cadence: Cadence) -> int:
    """Annualization factor for a series sampled at the given cadence."""
    return cadence.periods_per_year


def period_returns(closes: Sequence[float]) -> list[float]:
    """
    Simple returns between consecutive closes.

    Formula: r_i = (P_i - P_(i-1)) / P_(i-1)

    A zero or non-finite previous price (or a non-finite result) yields 0
    for that step rather than propagating NaN.

    Returns:
        List of len(closes) - 1 returns (empty for fewer than 2 closes)
    """
    prices = np.asarray(closes, dtype=float)
    if prices.size < 2:
        return []

    prev = prices[:-1]
    cur = prices[1:]
    with np.errstate(divide="ignore", invalid="ignore"):
        rets = (cur - prev) / prev

    valid = np.isfinite(prev) & (prev != 0) & np.isfinite(rets)
    return np.where(valid, rets, 0.0).tolist()


def trailing_return(closes: Sequence[float], periods: int) -> Optional[float]:
    """
    Return over the last `periods` steps.

    Formula: (P_last - P_(n-1-periods)) / P_(n-1-periods)

    Returns:
        Return as decimal (0.05 = 5%), or None if the base index is out of
        range or the base price is zero or not finite
    """
    validate_period(periods, "periods")
    n = len(closes)
    base_index = n - 1 - periods
    if base_index < 0:
        return None

    base = closes[base_index]
    if not base or not math.isfinite(base):
        return None

    result = (closes[-1] - base) / base
    return float(result) if math.isfinite(result) else None


def annualized_volatility(closes: Sequence[float],
                          periods_per_year: int = DEFAULT_PERIODS_PER_YEAR) -> Optional[float]:
    """
    Annualized volatility of per-period simple returns.

    Formula: sigma = std(returns, ddof=1) * sqrt(periods_per_year)

    The default of 365 assumes daily closes from a market that trades every
    day; pass 252 for exchange sessions or periods_per_year_for(cadence)
    for monthly/quarterly/annual data.

    Returns:
        Annualized volatility as decimal (0.25 = 25%), or None with fewer
        than two returns
    """
    validate_period(periods_per_year, "periods_per_year")
    rets = period_returns(closes)
    if len(rets) < 2:
        return None

    std_dev = np.std(np.asarray(rets), ddof=1)
    return float(std_dev * math.sqrt(periods_per_year))


def drawdown_series(closes: Sequence[float]) -> list[float]:
    """
    Decline from the running peak at each point.

    Formula: dd_i = (P_i - peak_i) / peak_i, peak_i = max(P_0..P_i)

    Non-finite prices are ignored when tracking the peak and get 0.
    Positions where the running peak is not positive also get 0.

    Returns:
        List aligned with closes, every value <= 0
    """
    prices = np.asarray(closes, dtype=float)
    if prices.size == 0:
        return []

    running_max = np.fmax.accumulate(prices)
    with np.errstate(divide="ignore", invalid="ignore"):
        drawdowns = (prices - running_max) / running_max

    valid = np.isfinite(drawdowns) & (running_max > 0)
    return np.minimum(np.where(valid, drawdowns, 0.0), 0.0).tolist()


def max_drawdown(closes: Sequence[float]) -> float:
    """
    Most negative decline from a running peak.

    Returns:
        Maximum drawdown as decimal (-0.25 = -25%); 0.0 for empty or
        never-declining input
    """
    drawdowns = drawdown_series(closes)
    return min(drawdowns, default=0.0)


def drawdown_stats(closes: Sequence[float]) -> DrawdownStats:
    """
    Maximum drawdown with its peak, trough and recovery positions.

    Raises:
        InsufficientDataError: With fewer than 2 prices
    """
    if len(closes) < 2:
        raise InsufficientDataError(
            "Insufficient data: need at least 2 prices",
            required_count=2,
            available_count=len(closes)
        )

    drawdowns = np.asarray(drawdown_series(closes))
    trough_index = int(np.argmin(drawdowns))
    worst = float(drawdowns[trough_index])

    if worst == 0.0:
        return DrawdownStats(max_drawdown=0.0, peak_index=trough_index,
                             trough_index=trough_index, recovery_index=trough_index)

    prices = np.asarray(closes, dtype=float)
    head = np.where(np.isfinite(prices[:trough_index + 1]), prices[:trough_index + 1], -np.inf)
    peak_index = int(np.argmax(head))
    peak_value = prices[peak_index]

    recovery_index = None
    for i in range(trough_index + 1, len(prices)):
        if prices[i] >= peak_value:
            recovery_index = i
            break

    return DrawdownStats(max_drawdown=worst, peak_index=peak_index,
                         trough_index=trough_index, recovery_index=recovery_index)


def correlation(a: Sequence[float], b: Sequence[float],
                min_points: int = MIN_CORRELATION_POINTS,
                epsilon: float = CORRELATION_EPSILON) -> Optional[float]:
    """
    Pearson correlation over the trailing window both arrays share.

    Both arrays are cut to their last min(len(a), len(b)) values, so the
    most recent points line up.

    Returns:
        Correlation in [-1, 1], or None with fewer than min_points aligned
        values or non-finite input
    """
    n = min(len(a), len(b))
    if n < min_points:
        return None

    xs = np.asarray(a[len(a) - n:], dtype=float)
    ys = np.asarray(b[len(b) - n:], dtype=float)
    if not (np.all(np.isfinite(xs)) and np.all(np.isfinite(ys))):
        return None

    dx = xs - xs.mean()
    dy = ys - ys.mean()
    numerator = float(np.sum(dx * dy))
    denominator = math.sqrt(float(np.sum(dx * dx)) * float(np.sum(dy * dy))) or epsilon

    result = numerator / denominator
    return float(result) if math.isfinite(result) else None
