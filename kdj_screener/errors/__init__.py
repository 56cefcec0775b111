"""
Error classification for the screening pipeline.

Configuration errors are the only failures the indicator core raises; data
quality errors belong to record loading at the edge of the system.
"""

from .configuration import (
    ConfigurationError,
    InvalidConfigurationError,
)
from .data_quality import (
    DataQualityError,
    MissingDataError,
    MalformedDataError,
)

__all__ = [
    # Configuration Errors
    "ConfigurationError",
    "InvalidConfigurationError",
    # Data Quality Errors
    "DataQualityError",
    "MissingDataError",
    "MalformedDataError",
]
