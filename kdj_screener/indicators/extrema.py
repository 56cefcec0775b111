"""Trailing-window lowest low / highest high calculations"""

import math
from collections import deque
from collections.abc import Sequence

from ..data.models import Series


def window_start(i: int, window_length: int) -> int:
    """First index of the window ending at i, clipped at the series start."""
    return max(0, i - window_length + 1)


def window_extrema_naive(series: Series, i: int, window_length: int) -> tuple[float, float]:
    """
    Scan the window ending at position i

    Args:
        series: Chronological bars
        i: Window end position (inclusive)
        window_length: Maximum number of bars in the window

    Returns:
        (lowest_low, highest_high) over the window
    """
    start = window_start(i, window_length)
    lowest_low = series[start].low
    highest_high = series[start].high

    for bar in series[start + 1:i + 1]:
        if bar.low < lowest_low:
            lowest_low = bar.low
        if bar.high > highest_high:
            highest_high = bar.high

    return lowest_low, highest_high


def rolling_extrema(series: Series, window_length: int) -> list[tuple[float, float]]:
    """
    Calculate (lowest_low, highest_high) for every position in one pass

    Keeps one monotonic deque of indices per side: lows increasing from the
    front, highs decreasing. Each index enters and leaves once, so the whole
    series costs O(n) regardless of window length. A NaN price breaks the
    deque ordering, so series containing one are scanned with
    window_extrema_naive instead; the output always equals that scan.

    Args:
        series: Chronological bars
        window_length: Maximum number of bars per window (>= 1)

    Returns:
        List aligned with series
    """
    lows: Sequence[float] = [bar.low for bar in series]
    highs: Sequence[float] = [bar.high for bar in series]

    if any(math.isnan(price) for price in (*lows, *highs)):
        return [window_extrema_naive(series, i, window_length) for i in range(len(series))]

    low_idx: deque[int] = deque()
    high_idx: deque[int] = deque()
    result = []

    for i in range(len(series)):
        while low_idx and lows[low_idx[-1]] >= lows[i]:
            low_idx.pop()
        low_idx.append(i)

        while high_idx and highs[high_idx[-1]] <= highs[i]:
            high_idx.pop()
        high_idx.append(i)

        start = window_start(i, window_length)
        while low_idx[0] < start:
            low_idx.popleft()
        while high_idx[0] < start:
            high_idx.popleft()

        result.append((lows[low_idx[0]], highs[high_idx[0]]))

    return result
