"""
Centralized logging configuration for the analytics engine.

This module provides standardized logging configuration using structlog
for all components. The engine itself never calls configure_logging; the
host application does so once at startup.
"""
import logging
import sys
from typing import Optional

import structlog
from structlog.types import FilteringBoundLogger


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    include_caller: bool = False,
    extra_processors: Optional[list] = None
) -> None:
    """
    Configure structlog for the entire application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output JSON format; otherwise human-readable
        include_timestamp: Include timestamp in log output
        include_caller: Include caller information (filename, line number)
        extra_processors: Additional structlog processors to include
    """
    log_level = getattr(logging, level.upper())

    logging.basicConfig(
        level=log_level,
        stream=sys.stdout,
        format="%(message)s"  # structlog will handle formatting
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder(
            parameters=[structlog.processors.CallsiteParameter.FILENAME,
                       structlog.processors.CallsiteParameter.LINENO]
        ))

    if extra_processors:
        processors.extend(extra_processors)

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)


def get_normalization_logger(name: str) -> FilteringBoundLogger:
    """Logger bound to the normalization subsystem (parsing, dedup, sorting)."""
    return get_logger(name).bind(subsystem="normalization")


def get_metrics_logger(name: str) -> FilteringBoundLogger:
    """Logger bound to the metrics subsystem (indicators, deltas, risk)."""
    return get_logger(name).bind(subsystem="metrics")


def log_rejected_observation(
    logger: FilteringBoundLogger,
    date_key: object,
    reason: str,
    policy: str
) -> None:
    """
    Log an observation excluded from a normalized series.

    Args:
        logger: Structlog logger instance
        date_key: The raw date key of the rejected observation
        reason: Why the observation was rejected
        policy: Invalid-date policy in effect
    """
    logger.warning(
        "Observation rejected",
        event_type="observation_rejected",
        date_key=date_key,
        reason=reason,
        policy=policy,
    )


def log_insufficient_history(
    logger: FilteringBoundLogger,
    metric: str,
    required: int,
    available: int
) -> None:
    """
    Log a metric that fell back to a sentinel for lack of history.

    Args:
        logger: Structlog logger instance
        metric: Metric name
        required: Number of points the metric needs
        available: Number of points supplied
    """
    logger.debug(
        "Insufficient history",
        event_type="insufficient_history",
        metric=metric,
        required=required,
        available=available,
    )
