"""
Error classification system for the analytics engine.

Data quality errors describe problems with upstream observation arrays and are
normally resolved to sentinels before they reach a caller. System failures
describe problems with the engine itself or its configuration.
"""

from .data_quality import (
    DataQualityError,
    MalformedDataError,
    MalformedDateKeyError,
    MissingDataError,
    InsufficientDataError,
)
from .system_failures import (
    SystemFailureError,
    MetricsCalculationError,
    ConfigurationError,
)

__all__ = [
    # Data Quality Errors
    "DataQualityError",
    "MalformedDataError",
    "MalformedDateKeyError",
    "MissingDataError",
    "InsufficientDataError",
    # System Failures
    "SystemFailureError",
    "MetricsCalculationError",
    "ConfigurationError",
]
