"""MACD (Moving Average Convergence Divergence) calculation"""

import math
from typing import Sequence

from ..data.validators import validate_period
from ..models.metrics import MACDResult
from .moving_average import NAN, ema


def macd(values: Sequence[float], fast: int = 12, slow: int = 26, signal: int = 9,
         zero_fill_warmup: bool = False) -> MACDResult:
    """
    Calculate MACD line, signal line and histogram

    macd = EMA(fast) - EMA(slow)
    signal = EMA(signal) of the macd line
    histogram = macd - signal

    The signal line starts once `signal` real MACD values exist: it is
    seeded from their mean and holds NaN before that. With
    zero_fill_warmup=True, undefined MACD positions are replaced by 0 and
    smoothed from the first value instead, which understates the signal
    line during warm-up.

    Args:
        values: Prices in chronological order
        fast: Fast EMA period (default 12)
        slow: Slow EMA period (default 26)
        signal: Signal EMA period (default 9)
        zero_fill_warmup: Use the zero-substitution warm-up

    Returns:
        MACDResult with three lists aligned index-for-index with values
    """
    for name, period in (("fast", fast), ("slow", slow), ("signal", signal)):
        validate_period(period, name)

    data = list(values)
    fast_line = ema(data, fast)
    slow_line = ema(data, slow)

    macd_line = []
    for f, s in zip(fast_line, slow_line):
        diff = f - s
        macd_line.append(diff if math.isfinite(diff) else NAN)

    if zero_fill_warmup:
        signal_line = ema([v if math.isfinite(v) else 0.0 for v in macd_line], signal)
    else:
        signal_line = ema(macd_line, signal, seed="sma")

    histogram = []
    for m, s in zip(macd_line, signal_line):
        diff = m - s
        histogram.append(diff if math.isfinite(diff) else NAN)

    return MACDResult(macd=macd_line, signal=signal_line, histogram=histogram)
