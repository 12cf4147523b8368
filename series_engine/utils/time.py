"""
Calendar label utilities for chart axes and headline figures.

Labels are derived from the parsed instant of a date key and the inferred
cadence of its series, so axes stay legible regardless of how the upstream
provider spelled its dates.
"""

from typing import Union

from ..data.models import Cadence, CanonicalInstant
from ..data.parsers import parse_date_key

_MONTH_ABBR = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
               "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def format_period_label(when: Union[str, CanonicalInstant], cadence: Cadence) -> str:
    """
    Format an axis or headline label for one observation.

    Args:
        when: Raw date key or an already-parsed instant
        cadence: Cadence of the series the observation belongs to

    Returns:
        "2024" for annual, "2024-Q1" for quarterly, "Jan 2024" for monthly.
        An unparseable date key is returned unchanged.
    """
    if isinstance(when, CanonicalInstant):
        instant = when
    else:
        parsed = parse_date_key(when)
        if not parsed.ok:
            return str(when)
        instant = parsed.instant

    if cadence is Cadence.ANNUAL:
        return f"{instant.year}"
    if cadence is Cadence.QUARTERLY:
        return f"{instant.year}-Q{instant.quarter}"
    return f"{_MONTH_ABBR[instant.month - 1]} {instant.year}"


def format_iso_date(instant: CanonicalInstant) -> str:
    """Format an instant as YYYY-MM-DD."""
    return f"{instant.year:04d}-{instant.month:02d}-{instant.day:02d}"
