"""Configuration validation utilities."""

import math
from dataclasses import dataclass
from typing import Any

from ..errors import InvalidConfigurationError

COMPARISONS = ("lt", "le", "ge", "gt", "<", "<=", ">=", ">")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

KNOWN_FIELDS = {
    "kdj": {"window_length", "epsilon"},
    "filter": {"comparison", "threshold", "signed_threshold"},
    "screen": {"max_workers", "min_bars", "log_decisions"},
    "logging": {"level", "format_json"},
}


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_kdj_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate oscillator parameters."""
        errors = []

        if "window_length" in params:
            value = params["window_length"]
            if not _is_int(value) or value < 1:
                errors.append(ValidationError(
                    field="window_length",
                    message="Must be a positive integer",
                    value=value
                ))

        if "epsilon" in params:
            value = params["epsilon"]
            if not _is_number(value) or not math.isfinite(value) or value < 0:
                errors.append(ValidationError(
                    field="epsilon",
                    message="Must be a finite non-negative number",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_filter_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate J threshold parameters."""
        # filters.threshold imports config.defaults, so import at call time
        from ..filters.threshold import Comparison

        errors = []

        if "comparison" in params:
            value = params["comparison"]
            try:
                Comparison.parse(value)
            except InvalidConfigurationError:
                errors.append(ValidationError(
                    field="comparison",
                    message=f"Must be one of {', '.join(COMPARISONS)}",
                    value=value
                ))

        if "threshold" in params:
            value = params["threshold"]
            if not _is_number(value) or not math.isfinite(value):
                errors.append(ValidationError(
                    field="threshold",
                    message="Must be a finite number",
                    value=value
                ))

        if "signed_threshold" in params:
            value = params["signed_threshold"]
            if value is not None and not _is_int(value):
                errors.append(ValidationError(
                    field="signed_threshold",
                    message="Must be an integer or null",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_screen_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate universe screening parameters."""
        errors = []

        for name in ("max_workers", "min_bars"):
            if name in params:
                value = params[name]
                if not _is_int(value) or value < 1:
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a positive integer",
                        value=value
                    ))

        if "log_decisions" in params:
            value = params["log_decisions"]
            if not isinstance(value, bool):
                errors.append(ValidationError(
                    field="log_decisions",
                    message="Must be a boolean",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_logging_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate logging parameters."""
        errors = []

        if "level" in params:
            value = params["level"]
            if not isinstance(value, str) or value.upper() not in LOG_LEVELS:
                errors.append(ValidationError(
                    field="level",
                    message=f"Must be one of {', '.join(LOG_LEVELS)}",
                    value=value
                ))

        if "format_json" in params:
            value = params["format_json"]
            if not isinstance(value, bool):
                errors.append(ValidationError(
                    field="format_json",
                    message="Must be a boolean",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        for section, params in config.items():
            if section not in KNOWN_FIELDS:
                errors.append(ValidationError(
                    field=section,
                    message="Unknown configuration section",
                    value=params
                ))
                continue
            if not isinstance(params, dict):
                errors.append(ValidationError(
                    field=section,
                    message="Must be a mapping",
                    value=params
                ))
                continue
            for name in params:
                if name not in KNOWN_FIELDS[section]:
                    errors.append(ValidationError(
                        field=f"{section}.{name}",
                        message="Unknown configuration field",
                        value=params[name]
                    ))

        validators = {
            "kdj": ConfigValidator.validate_kdj_params,
            "filter": ConfigValidator.validate_filter_params,
            "screen": ConfigValidator.validate_screen_params,
            "logging": ConfigValidator.validate_logging_params,
        }
        for section, validate in validators.items():
            if isinstance(config.get(section), dict):
                errors.extend(validate(config[section]))

        return errors

    @staticmethod
    def raise_for_errors(errors: list[ValidationError]) -> None:
        """Raise the first validation error as InvalidConfigurationError."""
        if not errors:
            return

        first = errors[0]
        raise InvalidConfigurationError(
            f"{first.field}: {first.message} (got: {first.value!r})",
            field=first.field,
            value=first.value,
            context={"error_count": len(errors)}
        )
