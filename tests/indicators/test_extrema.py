"""Tests for trailing-window extrema"""

import random

import pytest

from kdj_screener.indicators.extrema import rolling_extrema, window_extrema_naive, window_start


class TestWindowStart:
    """Test window clipping"""

    def test_clipped_at_series_start(self):
        assert window_start(0, 9) == 0
        assert window_start(5, 9) == 0

    def test_full_window(self):
        assert window_start(8, 9) == 0
        assert window_start(9, 9) == 1
        assert window_start(20, 3) == 18


class TestRollingExtrema:
    """Test the monotonic deque extrema"""

    def test_empty_series(self):
        assert rolling_extrema([], 3) == []

    def test_window_drawn_from_trailing_bars(self, sample_series):
        """Window at index 3 covers bars 1..3 only"""
        extrema = rolling_extrema(sample_series, 3)
        assert extrema[3] == (8.0, 20.0)

    def test_clipped_windows(self, sample_series):
        extrema = rolling_extrema(sample_series, 3)
        assert extrema[0] == (10.0, 15.0)
        assert extrema[1] == (8.0, 15.0)
        assert extrema[2] == (8.0, 20.0)

    def test_old_extremes_leave_the_window(self, make_series):
        series = make_series("X", [30.0, 15.0, 20.0, 11.0], [5.0, 8.0, 12.0, 9.0], [10.0] * 4)
        extrema = rolling_extrema(series, 3)
        assert extrema[2] == (5.0, 30.0)
        assert extrema[3] == (8.0, 20.0)

    def test_ties_keep_value(self, make_series):
        series = make_series("X", [10.0, 10.0, 10.0], [5.0, 5.0, 5.0], [7.0] * 3)
        assert rolling_extrema(series, 2) == [(5.0, 10.0)] * 3

    @pytest.mark.parametrize("window_length", [1, 2, 3, 9, 40])
    def test_matches_naive_scan(self, make_series, window_length):
        rng = random.Random(window_length)
        lows = [rng.uniform(50, 100) for _ in range(60)]
        highs = [low + rng.uniform(0, 10) for low in lows]
        series = make_series("RND", highs, lows, lows)

        expected = [window_extrema_naive(series, i, window_length) for i in range(len(series))]
        assert rolling_extrema(series, window_length) == expected

    def test_nan_low_matches_naive_scan(self, make_series):
        """A NaN low is skipped by the scan unless it opens the window"""
        series = make_series("NAN", [10.0, 10.0, 10.0], [3.0, float("nan"), 2.0], [5.0] * 3)

        extrema = rolling_extrema(series, 3)

        assert extrema[2] == (2.0, 10.0)
        assert extrema == [window_extrema_naive(series, i, 3) for i in range(3)]

    @pytest.mark.parametrize("window_length", [1, 2, 3, 5])
    def test_nan_prices_match_naive_scan(self, make_series, window_length):
        nan = float("nan")
        highs = [12.0, nan, 15.0, 11.0, 14.0, 13.0, nan]
        lows = [nan, 8.0, 9.0, 7.0, nan, 10.0, 6.0]
        series = make_series("NAN", highs, lows, [10.0] * len(lows))

        expected = [window_extrema_naive(series, i, window_length) for i in range(len(series))]
        actual = rolling_extrema(series, window_length)

        assert [repr(pair) for pair in actual] == [repr(pair) for pair in expected]

    def test_infinite_prices_use_deque(self, make_series):
        inf = float("inf")
        series = make_series("INF", [10.0, inf, 12.0], [-inf, 5.0, 6.0], [8.0] * 3)
        assert rolling_extrema(series, 2) == [(-inf, 10.0), (-inf, inf), (5.0, inf)]
