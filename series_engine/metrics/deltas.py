"""Period-over-period and year-over-year percent changes"""

import math
from typing import Optional

from ..data.models import Cadence, Series
from ..models.metrics import DeltaResult
from .cadence import infer_cadence


def percent_change(current: float, base: float) -> Optional[float]:
    """
    Percent change from base to current

    Returns:
        (current - base) / base * 100, or None when base is zero or the
        result is not finite
    """
    if not base:
        return None
    change = (current - base) / base * 100.0
    return change if math.isfinite(change) else None


def calculate_deltas(series: Series, cadence: Optional[Cadence] = None) -> DeltaResult:
    """
    Short-period and year-over-year changes of the latest observation

    The short period follows the cadence (MoM, QoQ, or YoY for annual data);
    year-over-year looks back round(12 / months) observations.

    Args:
        series: Normalized series
        cadence: Cadence of the series, inferred when omitted

    Returns:
        DeltaResult with None for any change lacking history
    """
    if cadence is None:
        cadence = infer_cadence(series)

    label = cadence.short_period_label
    n = len(series)
    if n < 2:
        return DeltaResult(short_period_label=label)

    last = series[n - 1].value
    short_pct = percent_change(last, series[n - 2].value)

    yoy_index = n - 1 - cadence.periods_per_year
    yoy_pct = percent_change(last, series[yoy_index].value) if yoy_index >= 0 else None

    return DeltaResult(short_period_label=label, short_period_pct=short_pct, yoy_pct=yoy_pct)
