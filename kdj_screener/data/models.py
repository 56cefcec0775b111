"""
Canonical data models for price series and oscillator output.

All structures are immutable and transient: they are built per screening
call and discarded once the filter stage has consumed them.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Union

Timestamp = Union[datetime, int]


@dataclass(frozen=True)
class PriceBar:
    """One price/volume observation of one instrument."""
    symbol: str        # Instrument identifier
    ts: Timestamp      # Market timestamp or sequence index
    high: float        # High price
    low: float         # Low price
    close: float       # Closing price
    volume: float      # Base volume, informational only
    name: str = ""     # Display name of the instrument


@dataclass(frozen=True)
class OscillatorPoint:
    """K/D/J values for one bar. Not clamped to [0, 100]."""
    k: float
    d: float
    j: float


@dataclass(frozen=True)
class AnnotatedBar:
    """A price bar paired with the oscillator point computed at its position."""
    bar: PriceBar
    point: OscillatorPoint

    @property
    def symbol(self) -> str:
        return self.bar.symbol

    @property
    def j(self) -> float:
        return self.point.j


# Chronological bars of a single instrument
Series = Sequence[PriceBar]
