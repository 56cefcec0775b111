"""K/D/J stochastic oscillator calculations"""

from typing import Any, Optional

from ..data.models import AnnotatedBar, OscillatorPoint, Series
from ..errors import InvalidConfigurationError
from .extrema import rolling_extrema

DEFAULT_WINDOW_LENGTH = 9

# Ranges at or below this are treated as flat
EPSILON = 1e-9

INITIAL_K = 50.0
INITIAL_D = 50.0


def validate_window_length(window_length: Any) -> int:
    """
    Check that window_length is a positive integer

    Raises:
        InvalidConfigurationError: For non-integers and values below 1
    """
    if isinstance(window_length, bool) or not isinstance(window_length, int):
        raise InvalidConfigurationError(
            f"Window length must be an integer, got {type(window_length).__name__}",
            field="window_length",
            value=window_length,
        )
    if window_length < 1:
        raise InvalidConfigurationError(
            f"Window length must be at least 1, got {window_length}",
            field="window_length",
            value=window_length,
        )
    return window_length


def calculate_rsv(close: float, lowest_low: float, highest_high: float,
                  epsilon: float = EPSILON) -> float:
    """
    Calculate the raw stochastic value of one close

    RSV = (close - lowest_low) / (highest_high - lowest_low) * 100

    A flat or inverted range (width <= epsilon) yields 0.0. The close is not
    required to lie inside the range, so RSV may fall outside [0, 100].
    """
    price_range = highest_high - lowest_low
    if price_range > epsilon:
        return (close - lowest_low) / price_range * 100.0
    return 0.0


def compute_rsv(series: Series, window_length: int = DEFAULT_WINDOW_LENGTH,
                epsilon: float = EPSILON) -> list[float]:
    """
    Calculate RSV at every position of a series

    Args:
        series: Chronological bars of one instrument
        window_length: Trailing bars per window, clipped at the series start
        epsilon: Flat-range tolerance

    Returns:
        RSV values aligned with series
    """
    validate_window_length(window_length)

    return [
        calculate_rsv(bar.close, lowest_low, highest_high, epsilon)
        for bar, (lowest_low, highest_high) in zip(series, rolling_extrema(series, window_length))
    ]


def compute_kdj(series: Series, window_length: int = DEFAULT_WINDOW_LENGTH,
                epsilon: float = EPSILON) -> list[OscillatorPoint]:
    """
    Calculate the K/D/J oscillator for a series

    K and D start at 50 on the first bar, then:
        K = 2/3 * K_prev + 1/3 * RSV
        D = 2/3 * D_prev + 1/3 * K
        J = 3 * K - 2 * D

    Nothing is clamped or rounded. Degenerate bars never raise; they only
    move the numbers.

    Args:
        series: Chronological bars of one instrument
        window_length: Trailing bars per window (default 9)
        epsilon: Flat-range tolerance

    Returns:
        One OscillatorPoint per bar, same order as series

    Raises:
        InvalidConfigurationError: If window_length is not a positive integer
    """
    rsv_values = compute_rsv(series, window_length, epsilon)

    points = []
    k = INITIAL_K
    d = INITIAL_D
    for i, rsv in enumerate(rsv_values):
        if i == 0:
            k = INITIAL_K
            d = INITIAL_D
        else:
            k = 2.0 / 3.0 * k + 1.0 / 3.0 * rsv
            d = 2.0 / 3.0 * d + 1.0 / 3.0 * k
        points.append(OscillatorPoint(k=k, d=d, j=3.0 * k - 2.0 * d))

    return points


def annotate(series: Series, window_length: int = DEFAULT_WINDOW_LENGTH,
             epsilon: float = EPSILON) -> list[AnnotatedBar]:
    """Pair every bar with its oscillator point"""
    points = compute_kdj(series, window_length, epsilon)
    return [AnnotatedBar(bar=bar, point=point) for bar, point in zip(series, points)]


class KDJCalculator:
    """Oscillator calculator bound to a validated window length"""

    def __init__(self, window_length: int = DEFAULT_WINDOW_LENGTH, epsilon: float = EPSILON):
        self.window_length = validate_window_length(window_length)
        self.epsilon = epsilon

    def compute(self, series: Series) -> list[OscillatorPoint]:
        return compute_kdj(series, self.window_length, self.epsilon)

    def annotate(self, series: Series) -> list[AnnotatedBar]:
        return annotate(series, self.window_length, self.epsilon)

    def latest(self, series: Series) -> Optional[AnnotatedBar]:
        """
        Annotate a series and keep only its most recent bar

        Returns:
            Last annotated bar, or None for an empty series
        """
        annotated = self.annotate(series)
        return annotated[-1] if annotated else None
