"""Configuration validation utilities."""

from dataclasses import dataclass
from typing import Any

from .defaults import INVALID_DATE_POLICIES


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_normalization_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate normalization parameters."""
        errors = []

        if "invalid_date_policy" in params:
            value = params["invalid_date_policy"]
            if value not in INVALID_DATE_POLICIES:
                errors.append(ValidationError(
                    field="invalid_date_policy",
                    message=f"Must be one of {', '.join(INVALID_DATE_POLICIES)}",
                    value=value
                ))

        if "keep_last" in params:
            value = params["keep_last"]
            if value is not None and not _is_positive_int(value):
                errors.append(ValidationError(
                    field="keep_last",
                    message="Must be null or a positive integer",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_cadence_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate cadence inference parameters."""
        errors = []

        for name in ("max_gap_samples", "min_points"):
            if name in params and not _is_positive_int(params[name]):
                errors.append(ValidationError(
                    field=name,
                    message="Must be a positive integer",
                    value=params[name]
                ))

        for name in ("annual_threshold", "quarterly_threshold"):
            if name in params:
                value = params[name]
                if not _is_number(value) or value < 1:
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a number of months >= 1",
                        value=value
                    ))

        annual = params.get("annual_threshold")
        quarterly = params.get("quarterly_threshold")
        if _is_number(annual) and _is_number(quarterly) and quarterly >= annual:
            errors.append(ValidationError(
                field="quarterly_threshold",
                message="Must be lower than annual_threshold",
                value=quarterly
            ))

        return errors

    @staticmethod
    def validate_chart_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate chart projection parameters."""
        errors = []

        for name in ("width", "height"):
            if name in params:
                value = params[name]
                if not _is_number(value) or value <= 0:
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a positive number",
                        value=value
                    ))

        if "padding" in params:
            value = params["padding"]
            if not _is_number(value) or value < 0:
                errors.append(ValidationError(
                    field="padding",
                    message="Must be a non-negative number",
                    value=value
                ))
            else:
                for name in ("width", "height"):
                    size = params.get(name)
                    if _is_number(size) and size <= 2 * value:
                        errors.append(ValidationError(
                            field=name,
                            message="Must exceed twice the padding",
                            value=size
                        ))

        for name in ("tick_count_target", "gridline_count"):
            if name in params and not _is_positive_int(params[name]):
                errors.append(ValidationError(
                    field=name,
                    message="Must be a positive integer",
                    value=params[name]
                ))

        if "y_margin_pct" in params:
            value = params["y_margin_pct"]
            if not _is_number(value) or value < 0 or value >= 0.5:
                errors.append(ValidationError(
                    field="y_margin_pct",
                    message="Must be a number in [0, 0.5)",
                    value=value
                ))

        if "include_area" in params and not isinstance(params["include_area"], bool):
            errors.append(ValidationError(
                field="include_area",
                message="Must be a boolean",
                value=params["include_area"]
            ))

        return errors

    @staticmethod
    def validate_indicator_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate technical indicator parameters."""
        errors = []

        if "sma_periods" in params:
            value = params["sma_periods"]
            if not isinstance(value, (list, tuple)) or not all(_is_positive_int(p) for p in value):
                errors.append(ValidationError(
                    field="sma_periods",
                    message="Must be a list of positive integers",
                    value=value
                ))

        for name in ("ema_period", "rsi_period", "macd_fast", "macd_slow", "macd_signal"):
            if name in params and not _is_positive_int(params[name]):
                errors.append(ValidationError(
                    field=name,
                    message="Must be a positive integer",
                    value=params[name]
                ))

        fast = params.get("macd_fast")
        slow = params.get("macd_slow")
        if _is_positive_int(fast) and _is_positive_int(slow) and fast >= slow:
            errors.append(ValidationError(
                field="macd_fast",
                message="Must be lower than macd_slow",
                value=fast
            ))

        if "macd_zero_fill_warmup" in params and not isinstance(params["macd_zero_fill_warmup"], bool):
            errors.append(ValidationError(
                field="macd_zero_fill_warmup",
                message="Must be a boolean",
                value=params["macd_zero_fill_warmup"]
            ))

        return errors

    @staticmethod
    def validate_risk_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate risk metric parameters."""
        errors = []

        if "periods_per_year" in params and not _is_positive_int(params["periods_per_year"]):
            errors.append(ValidationError(
                field="periods_per_year",
                message="Must be a positive integer",
                value=params["periods_per_year"]
            ))

        if "trailing_windows" in params:
            value = params["trailing_windows"]
            if not isinstance(value, (list, tuple)) or not all(_is_positive_int(w) for w in value):
                errors.append(ValidationError(
                    field="trailing_windows",
                    message="Must be a list of positive integers",
                    value=value
                ))

        if "min_correlation_points" in params:
            value = params["min_correlation_points"]
            if not isinstance(value, int) or isinstance(value, bool) or value < 2:
                errors.append(ValidationError(
                    field="min_correlation_points",
                    message="Must be an integer >= 2",
                    value=value
                ))

        if "correlation_epsilon" in params:
            value = params["correlation_epsilon"]
            if not _is_number(value) or value <= 0:
                errors.append(ValidationError(
                    field="correlation_epsilon",
                    message="Must be a positive number",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        if "normalization" in config:
            errors.extend(ConfigValidator.validate_normalization_params(config["normalization"]))

        if "cadence" in config:
            errors.extend(ConfigValidator.validate_cadence_params(config["cadence"]))

        if "chart" in config:
            errors.extend(ConfigValidator.validate_chart_params(config["chart"]))

        if "indicators" in config:
            errors.extend(ConfigValidator.validate_indicator_params(config["indicators"]))

        if "risk" in config:
            errors.extend(ConfigValidator.validate_risk_params(config["risk"]))

        return errors
