"""Default configuration parameters for the KDJ screener."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class KDJParams:
    """Oscillator calculation parameters."""
    window_length: int = 9                # Lookback bars for the high/low range
    epsilon: float = 1e-9                 # Minimum range treated as non-flat


@dataclass(frozen=True)
class FilterParams:
    """J threshold predicate parameters."""
    comparison: str = "lt"                # One of lt, le, ge, gt
    threshold: float = 0.0
    # Legacy single-integer form: >0 means J >= value, <0 means J <= |value|.
    # Takes precedence over comparison/threshold when set.
    signed_threshold: Optional[int] = None


@dataclass(frozen=True)
class ScreenParams:
    """Universe screening parameters."""
    max_workers: int = 1                  # >1 fans instruments out to a thread pool
    min_bars: int = 1                     # Instruments with fewer bars are skipped
    log_decisions: bool = False           # Log every filter decision


@dataclass(frozen=True)
class LoggingParams:
    """Logging output parameters."""
    level: str = "INFO"
    format_json: bool = False


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    kdj: KDJParams
    filter: FilterParams
    screen: ScreenParams
    logging: LoggingParams


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        kdj=KDJParams(),
        filter=FilterParams(),
        screen=ScreenParams(),
        logging=LoggingParams(),
    )
