"""
Advisory inspection of price series.

The indicator engine accepts any bars and turns anomalies into numeric
results. This module reports those anomalies so callers can log or surface
them; it never raises and never alters the series.
"""

import math
from dataclasses import dataclass
from typing import Optional

from .models import Series


@dataclass(frozen=True)
class SeriesIssue:
    """A single anomaly found in a series."""
    index: Optional[int]     # Bar position, None for series-level issues
    code: str
    message: str


def _is_finite(value) -> bool:
    return isinstance(value, (int, float)) and math.isfinite(value)


def inspect_series(series: Series) -> list[SeriesIssue]:
    """
    Check a series for data quality anomalies.

    Args:
        series: Chronological bars of one instrument

    Returns:
        Issues in bar order; empty list for a clean or empty series
    """
    issues: list[SeriesIssue] = []
    if not series:
        return issues

    first_symbol = series[0].symbol
    previous_ts = None

    for i, bar in enumerate(series):
        if not bar.symbol:
            issues.append(SeriesIssue(i, "empty_symbol", "Bar has no instrument identifier"))
        elif bar.symbol != first_symbol:
            issues.append(SeriesIssue(
                i, "mixed_symbols",
                f"Bar symbol {bar.symbol!r} differs from series symbol {first_symbol!r}"
            ))

        if previous_ts is not None:
            try:
                if bar.ts <= previous_ts:
                    issues.append(SeriesIssue(
                        i, "non_increasing_ts",
                        f"Timestamp {bar.ts!r} does not follow {previous_ts!r}"
                    ))
            except TypeError:
                issues.append(SeriesIssue(
                    i, "incomparable_ts",
                    f"Timestamp {bar.ts!r} cannot be ordered against {previous_ts!r}"
                ))
        previous_ts = bar.ts

        prices = (bar.high, bar.low, bar.close)
        if not all(_is_finite(p) for p in prices):
            issues.append(SeriesIssue(i, "non_finite_price", f"Non-finite price in {prices}"))
            continue

        if bar.high < bar.low:
            issues.append(SeriesIssue(
                i, "inverted_range", f"High {bar.high} below low {bar.low}"
            ))
        elif not bar.low <= bar.close <= bar.high:
            issues.append(SeriesIssue(
                i, "close_outside_range",
                f"Close {bar.close} outside [{bar.low}, {bar.high}]"
            ))

        if _is_finite(bar.volume) and bar.volume < 0:
            issues.append(SeriesIssue(i, "negative_volume", f"Negative volume {bar.volume}"))

    return issues
