"""Sampling cadence inference for unlabeled series"""

from typing import Optional

from ..config.defaults import CadenceParams
from ..data.models import Cadence, CanonicalInstant, Series


def months_between(start: CanonicalInstant, end: CanonicalInstant) -> int:
    """
    Whole calendar months from start to end (day of month ignored)

    Args:
        start: Earlier instant
        end: Later instant

    Returns:
        Signed month difference
    """
    return end.month_ordinal - start.month_ordinal


def average_gap_months(series: Series, max_samples: int = 12) -> Optional[float]:
    """
    Average gap in months over the first consecutive pairs of a series

    Each gap is clamped to at least one month, so sub-monthly data
    (daily, weekly) averages to 1.

    Args:
        series: Normalized series
        max_samples: Maximum number of consecutive pairs to inspect

    Returns:
        Average gap, or None with fewer than two points
    """
    if len(series) < 2:
        return None

    pair_count = min(len(series) - 1, max_samples)
    instants = series.instants
    gaps = [max(1, months_between(instants[i], instants[i + 1])) for i in range(pair_count)]
    return sum(gaps) / len(gaps)


def infer_cadence(series: Series, params: Optional[CadenceParams] = None) -> Cadence:
    """
    Estimate whether a series is monthly, quarterly or annual

    Best-effort heuristic, not a guarantee: the average gap over the first
    pairs decides. average > 8 months -> annual, > 2 -> quarterly, else
    monthly. Series shorter than three points default to monthly.

    Args:
        series: Normalized (ascending) series
        params: Thresholds, defaults to CadenceParams()

    Returns:
        Inferred Cadence
    """
    params = params or CadenceParams()

    if len(series) < params.min_points:
        return Cadence.MONTHLY

    average = average_gap_months(series, params.max_gap_samples)
    if average is None:
        return Cadence.MONTHLY

    if average > params.annual_threshold:
        return Cadence.ANNUAL
    if average > params.quarterly_threshold:
        return Cadence.QUARTERLY
    return Cadence.MONTHLY
