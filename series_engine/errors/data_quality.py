"""
Data quality error classifications for observation processing.

These exceptions categorize problems found in the raw arrays handed over by
fetch collaborators: malformed date keys, missing payload fields and series
too short for a strict calculation.
"""

from typing import Optional, Dict, Any


class DataQualityError(Exception):
    """Base class for data quality issues that can be handled gracefully."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = True


class MalformedDataError(DataQualityError):
    """Data exists but is in incorrect format."""

    def __init__(self, message: str, raw_data: Optional[str] = None,
                 expected_format: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.raw_data = raw_data
        self.expected_format = expected_format


class MalformedDateKeyError(MalformedDataError):
    """A date key matched none of the accepted shapes."""

    def __init__(self, message: str, date_key: Optional[str] = None, **kwargs):
        kwargs.setdefault("expected_format", "YYYY | YYYY-MM | YYYY-MM-DD | YYYY-Qn | YYYY-Mnn")
        super().__init__(message, raw_data=date_key, **kwargs)
        self.date_key = date_key


class MissingDataError(DataQualityError):
    """Required data is completely missing."""

    def __init__(self, message: str, data_type: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.data_type = data_type


class InsufficientDataError(DataQualityError):
    """Not enough historical data for calculations."""

    def __init__(self, message: str, required_count: Optional[int] = None,
                 available_count: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.required_count = required_count
        self.available_count = available_count
