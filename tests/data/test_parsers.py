"""Tests for bar record parsing"""

from datetime import datetime, timezone

import orjson
import pytest

from kdj_screener.data.models import PriceBar
from kdj_screener.data.parsers import (
    group_by_symbol,
    load_bars_json,
    parse_bar,
    parse_bars,
    parse_float,
    parse_timestamp,
)
from kdj_screener.errors import DataQualityError, MalformedDataError, MissingDataError


class TestFieldParsing:
    """Test scalar conversions"""

    def test_parse_float_accepts_numbers_and_strings(self):
        assert parse_float(1, "high") == 1.0
        assert parse_float(" 12.5 ", "high") == 12.5

    @pytest.mark.parametrize("value", ["abc", "", None, True, [1]])
    def test_parse_float_rejects(self, value):
        with pytest.raises(MalformedDataError):
            parse_float(value, "high")

    def test_parse_timestamp_keeps_sequence_index(self):
        assert parse_timestamp(7) == 7

    def test_parse_timestamp_date_string_is_utc(self):
        assert parse_timestamp("2024-01-02") == datetime(2024, 1, 2, tzinfo=timezone.utc)

    def test_parse_timestamp_aware_datetime_converted(self):
        ts = parse_timestamp("2024-01-02T09:30:00+08:00")
        assert ts == datetime(2024, 1, 2, 1, 30, tzinfo=timezone.utc)
        assert ts.tzinfo == timezone.utc

    def test_parse_timestamp_rejects_garbage(self):
        with pytest.raises(MalformedDataError):
            parse_timestamp("yesterday")


class TestParseBar:
    """Test record to PriceBar conversion"""

    def test_parse_record(self, sample_records):
        bar = parse_bar(sample_records[0])
        assert bar == PriceBar(
            symbol="600519",
            ts=datetime(2024, 1, 2, tzinfo=timezone.utc),
            high=1700.5,
            low=1680.0,
            close=1690.2,
            volume=25000.0,
            name="Moutai",
        )

    def test_volume_and_name_optional(self):
        bar = parse_bar({"symbol": "X", "ts": 1, "high": 2, "low": 1, "close": 1.5})
        assert bar.volume == 0.0
        assert bar.name == ""

    def test_numeric_symbol_becomes_string(self):
        bar = parse_bar({"symbol": 600519, "ts": 1, "high": 2, "low": 1, "close": 1.5})
        assert bar.symbol == "600519"

    def test_missing_symbol(self):
        with pytest.raises(MissingDataError) as exc_info:
            parse_bar({"ts": 1, "high": 2, "low": 1, "close": 1.5})
        assert exc_info.value.data_type == "symbol"

    def test_missing_timestamp(self):
        with pytest.raises(MissingDataError) as exc_info:
            parse_bar({"symbol": "X", "high": 2, "low": 1, "close": 1.5})
        assert exc_info.value.data_type == "ts"

    def test_missing_price(self):
        with pytest.raises(MissingDataError) as exc_info:
            parse_bar({"symbol": "X", "ts": 1, "high": 2, "close": 1.5})
        assert exc_info.value.data_type == "low"
        assert exc_info.value.recoverable is True

    def test_not_a_mapping(self):
        with pytest.raises(MalformedDataError):
            parse_bar(["X", 1, 2, 1, 1.5])

    def test_inverted_prices_are_accepted(self):
        bar = parse_bar({"symbol": "X", "ts": 1, "high": 1, "low": 2, "close": 1.5})
        assert bar.high < bar.low

    def test_parse_bars_keeps_order(self, sample_records):
        bars = parse_bars(sample_records)
        assert [b.symbol for b in bars] == ["600519", "600519", "000858"]


class TestLoadBarsJson:
    """Test JSON document loading"""

    def test_top_level_array(self, sample_records):
        bars = load_bars_json(orjson.dumps(sample_records))
        assert len(bars) == 3

    def test_wrapped_array(self, sample_records):
        bars = load_bars_json(orjson.dumps({"bars": sample_records}).decode())
        assert bars == parse_bars(sample_records)

    def test_invalid_json(self):
        with pytest.raises(MalformedDataError):
            load_bars_json(b"{not json")

    def test_wrong_shape(self):
        with pytest.raises(DataQualityError):
            load_bars_json(b'{"data": []}')


class TestGroupBySymbol:
    """Test splitting a flat list into series"""

    def test_first_seen_order(self, sample_records):
        bars = parse_bars([sample_records[2]] + sample_records[:2])
        universe = group_by_symbol(bars)
        assert list(universe) == ["000858", "600519"]
        assert [b.close for b in universe["600519"]] == [1690.2, 1701.0]

    def test_empty(self):
        assert group_by_symbol([]) == {}
