"""RSI (Relative Strength Index) calculation with Wilder's smoothing"""

from typing import Sequence

from ..data.validators import validate_period
from .moving_average import NAN


def _rsi_value(avg_gain: float, avg_loss: float) -> float:
    if avg_loss == 0:
        return 100.0
    rs = avg_gain / avg_loss
    return 100.0 - 100.0 / (1.0 + rs)


def rsi(values: Sequence[float], period: int = 14, aligned: bool = False) -> list[float]:
    """
    Calculate the Relative Strength Index

    Average gain/loss are seeded with the simple mean of the first `period`
    price changes, then smoothed with Wilder's method:
        avg = (avg * (period - 1) + current) / period
    RSI = 100 - 100 / (1 + avg_gain / avg_loss), and 100 when avg_loss is 0.

    Args:
        values: Prices in chronological order
        period: Lookback period (default 14)
        aligned: Prepend one NaN so the output lines up with values

    Returns:
        One value per price change (len(values) - 1), the first `period`
        of them NaN; one longer when aligned. Defined values lie in [0, 100].
    """
    validate_period(period)
    data = list(values)

    if len(data) < period + 1:
        out = [NAN] * max(len(data) - 1, 0)
    else:
        gains = []
        losses = []
        for i in range(1, len(data)):
            diff = data[i] - data[i - 1]
            gains.append(max(0.0, diff))
            losses.append(max(0.0, -diff))

        avg_gain = sum(gains[:period]) / period
        avg_loss = sum(losses[:period]) / period

        out = [NAN] * period
        for i in range(period, len(gains)):
            avg_gain = (avg_gain * (period - 1) + gains[i]) / period
            avg_loss = (avg_loss * (period - 1) + losses[i]) / period
            out.append(_rsi_value(avg_gain, avg_loss))

    if aligned and data:
        return [NAN] + out
    return out
