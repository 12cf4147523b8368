"""SMA (Simple Moving Average) and EMA (Exponential Moving Average) calculations"""

import math
from typing import Sequence

from ..data.validators import validate_period

# Sentinel for positions without enough trailing history
NAN = float("nan")

EMA_SEEDS = ("first", "sma")


def sma(values: Sequence[float], period: int) -> list[float]:
    """
    Calculate a rolling Simple Moving Average

    SMA_i = mean(values[i - period + 1 .. i]), using a running sum so the
    whole array is processed in linear time.

    A window containing a non-finite value yields NaN; later windows that
    no longer contain it are defined again.

    Args:
        values: Prices in chronological order
        period: Window length (>= 1)

    Returns:
        List aligned index-for-index with values; the first period - 1
        positions hold NaN
    """
    validate_period(period)
    data = list(values)

    out = []
    window_sum = 0.0
    bad_in_window = 0
    for i, value in enumerate(data):
        if math.isfinite(value):
            window_sum += value
        else:
            bad_in_window += 1

        if i >= period:
            leaving = data[i - period]
            if math.isfinite(leaving):
                window_sum -= leaving
            else:
                bad_in_window -= 1

        if i < period - 1 or bad_in_window:
            out.append(NAN)
        else:
            out.append(window_sum / period)
    return out


def ema(values: Sequence[float], period: int, seed: str = "first") -> list[float]:
    """
    Calculate an Exponential Moving Average

    EMA_i = value_i * k + EMA_(i-1) * (1 - k), with k = 2 / (period + 1).

    Seeding:
        "first": seed with the first finite value. This is an approximation
            of the textbook EMA, which seeds from an SMA; early values lean
            towards the first price.
        "sma": seed with the mean of the first `period` finite values; the
            positions before the seed hold NaN.

    Leading NaN inputs are skipped before seeding. A NaN after the seed
    yields NaN at that position and leaves the running average unchanged.

    Args:
        values: Values in chronological order
        period: Smoothing period (>= 1)
        seed: "first" or "sma"

    Returns:
        List aligned index-for-index with values
    """
    validate_period(period)
    if seed not in EMA_SEEDS:
        raise ValueError(f"seed must be one of {EMA_SEEDS}, got {seed!r}")

    data = list(values)
    out = [NAN] * len(data)
    k = 2.0 / (period + 1)

    finite_indices = [i for i, value in enumerate(data) if math.isfinite(value)]
    if not finite_indices:
        return out

    if seed == "first":
        seed_index = finite_indices[0]
        prev = data[seed_index]
    else:
        if len(finite_indices) < period:
            return out
        seed_index = finite_indices[period - 1]
        prev = sum(data[i] for i in finite_indices[:period]) / period

    out[seed_index] = prev
    for i in range(seed_index + 1, len(data)):
        value = data[i]
        if not math.isfinite(value):
            continue
        prev = value * k + prev * (1 - k)
        out[i] = prev
    return out
