"""
Numeric display formatting shared by dashboard renderers.

Absent values are always rendered as an explicit marker, never as 0 or
an empty string.
"""

import math
from typing import Optional

NO_DATA = "—"


def _is_present(value: Optional[float]) -> bool:
    return (isinstance(value, (int, float)) and not isinstance(value, bool)
            and math.isfinite(value))


def format_pct(pct: Optional[float], decimals: int = 2) -> str:
    """
    Format a percentage that is already scaled by 100.

    Examples:
        1.234 -> "+1.23%", -0.5 -> "-0.50%", 0 -> "0.00%", None -> "—"
    """
    if not _is_present(pct):
        return NO_DATA
    sign = "+" if pct > 0 else ""
    return f"{sign}{pct:.{decimals}f}%"


def format_fraction_pct(fraction: Optional[float], decimals: int = 2) -> str:
    """Format a decimal fraction (0.05) as a signed percentage ("+5.00%")."""
    if not _is_present(fraction):
        return NO_DATA
    return format_pct(fraction * 100.0, decimals)


def format_number(value: Optional[float]) -> str:
    """Thousands separators at or above 1000, two decimals below."""
    if not _is_present(value):
        return NO_DATA
    if abs(value) >= 1000:
        return f"{value:,.2f}".rstrip("0").rstrip(".")
    return f"{value:.2f}"


def format_delta(delta: Optional[float], unit: Optional[str] = None) -> str:
    """
    Format the magnitude of a change; direction is shown by the caller.

    A "%" unit means the delta is already a percentage.
    """
    if not _is_present(delta):
        return NO_DATA
    if unit == "%":
        return f"{abs(delta):.2f}%"
    return f"{abs(delta):.2f}"
