"""
Input validation helpers for price arrays and calculation parameters.

Data problems (non-numeric or non-finite prices) are cleaned rather than
raised; parameter problems (a period of zero, a chart narrower than its
padding) are programming errors and raise ValueError.
"""

import math
from typing import Any, Iterable

from .parsers import parse_observation_value


def is_finite_number(value: Any) -> bool:
    """True for int/float values that are neither NaN nor infinite."""
    return (isinstance(value, (int, float)) and not isinstance(value, bool)
            and math.isfinite(value))


def clean_price_series(values: Iterable[Any]) -> list[float]:
    """
    Drop entries that are not usable prices, keeping order.

    Numeric strings are coerced; None, placeholders and non-finite values
    are removed. Always returns a fresh list.
    """
    cleaned = []
    for raw in values:
        value = parse_observation_value(raw)
        if value is not None:
            cleaned.append(value)
    return cleaned


def validate_period(period: int, name: str = "period") -> None:
    """Raise ValueError unless period is a positive integer."""
    if not isinstance(period, int) or isinstance(period, bool) or period < 1:
        raise ValueError(f"{name} must be a positive integer, got {period!r}")


def validate_chart_dimensions(width: float, height: float, padding: float) -> None:
    """Raise ValueError unless the drawing surface leaves room inside its padding."""
    if padding < 0:
        raise ValueError(f"padding must be non-negative, got {padding}")
    if width <= 2 * padding:
        raise ValueError(f"width {width} must exceed twice the padding {padding}")
    if height <= 2 * padding:
        raise ValueError(f"height {height} must exceed twice the padding {padding}")
