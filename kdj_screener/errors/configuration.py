"""
Configuration error classifications.

Raised before any computation starts, so a failing call never produces
partial output.
"""

from typing import Any, Optional, Dict


class ConfigurationError(Exception):
    """Base class for invalid screening or indicator configuration."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class InvalidConfigurationError(ConfigurationError):
    """A configuration value is outside its allowed domain."""

    def __init__(self, message: str, field: Optional[str] = None,
                 value: Any = None, **kwargs):
        super().__init__(message, **kwargs)
        self.field = field
        self.value = value
