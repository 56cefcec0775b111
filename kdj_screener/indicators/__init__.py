"""Indicator engine for the K/D/J stochastic oscillator"""

from .extrema import rolling_extrema, window_extrema_naive
from .kdj import (
    DEFAULT_WINDOW_LENGTH,
    EPSILON,
    KDJCalculator,
    annotate,
    compute_kdj,
    compute_rsv,
)

__all__ = [
    "DEFAULT_WINDOW_LENGTH",
    "EPSILON",
    "KDJCalculator",
    "annotate",
    "compute_kdj",
    "compute_rsv",
    "rolling_extrema",
    "window_extrema_naive",
]
