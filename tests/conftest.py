"""Pytest configuration and shared fixtures."""

import pytest
from datetime import datetime, timedelta, timezone
from typing import Callable, List

from kdj_screener.data.models import PriceBar


START = datetime(2024, 1, 2, tzinfo=timezone.utc)


def build_series(symbol: str, highs: List[float], lows: List[float],
                 closes: List[float], name: str = "") -> List[PriceBar]:
    """Build a daily series from parallel price lists."""
    return [
        PriceBar(
            symbol=symbol,
            ts=START + timedelta(days=i),
            high=high,
            low=low,
            close=close,
            volume=1000.0,
            name=name,
        )
        for i, (high, low, close) in enumerate(zip(highs, lows, closes))
    ]


@pytest.fixture
def make_series() -> Callable[..., List[PriceBar]]:
    """Factory for daily series from parallel price lists."""
    return build_series


@pytest.fixture
def sample_series() -> List[PriceBar]:
    """Four bars with a known window layout for window_length=3."""
    return build_series(
        "600000",
        highs=[15.0, 15.0, 20.0, 11.0],
        lows=[10.0, 8.0, 12.0, 9.0],
        closes=[12.0, 14.0, 18.0, 10.0],
    )


@pytest.fixture
def falling_series() -> List[PriceBar]:
    """Ten bars closing at the low of a steady decline."""
    highs = [100.0 - i for i in range(10)]
    lows = [95.0 - i for i in range(10)]
    return build_series("000001", highs, lows, closes=lows, name="Falling Bank")


@pytest.fixture
def rising_series() -> List[PriceBar]:
    """Ten bars closing at the high of a steady advance."""
    highs = [105.0 + i for i in range(10)]
    lows = [100.0 + i for i in range(10)]
    return build_series("300750", highs, lows, closes=highs, name="Rising Battery")


@pytest.fixture
def flat_series() -> List[PriceBar]:
    """Eight bars with identical high, low and close."""
    return build_series("688981", [10.0] * 8, [10.0] * 8, [10.0] * 8, name="Flat Chip")


@pytest.fixture
def sample_records() -> List[dict]:
    """Bar records in the loader's layout."""
    return [
        {"symbol": "600519", "name": "Moutai", "date": "2024-01-02",
         "high": "1700.5", "low": "1680.0", "close": "1690.2", "volume": "25000"},
        {"symbol": "600519", "name": "Moutai", "date": "2024-01-03",
         "high": 1705.0, "low": 1682.0, "close": 1701.0, "volume": 31000},
        {"symbol": "000858", "name": "Wuliangye", "date": "2024-01-02",
         "high": 150.0, "low": 146.0, "close": 147.5, "volume": 82000},
    ]
