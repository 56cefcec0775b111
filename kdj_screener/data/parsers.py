"""
Record parsers for converting plain bar records into price bars.

Records are mappings with the keys ``symbol``, ``ts`` (or ``date``),
``high``, ``low``, ``close`` and optionally ``volume`` and ``name``.
Numeric fields may be numbers or numeric strings. This is the project's own
layout; adapting a quote provider's wire format to it is the caller's job.
"""

from collections.abc import Iterable, Mapping
from datetime import UTC, datetime
from typing import Any, Union

import orjson

from ..errors import MalformedDataError, MissingDataError
from .models import PriceBar, Timestamp

PRICE_FIELDS = ("high", "low", "close")


def parse_float(value: Any, field: str) -> float:
    """Convert a number or numeric string to float."""
    if isinstance(value, bool):
        raise MalformedDataError(
            f"Invalid {field} value: {value!r}",
            raw_data=repr(value),
            expected_format="number",
        )
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            pass
    raise MalformedDataError(
        f"Invalid {field} value: {value!r}",
        raw_data=repr(value),
        expected_format="number",
    )


def parse_timestamp(value: Any) -> Timestamp:
    """
    Convert a record timestamp.

    Integers are kept as sequence indexes, datetimes and ISO 8601 strings
    become UTC datetimes (naive values are taken to be UTC).
    """
    if isinstance(value, bool):
        raise MalformedDataError(f"Invalid timestamp: {value!r}", raw_data=repr(value))
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.strip())
        except ValueError:
            raise MalformedDataError(
                f"Invalid timestamp: {value!r}",
                raw_data=value,
                expected_format="ISO 8601 date or datetime",
            )
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)
    raise MalformedDataError(f"Invalid timestamp: {value!r}", raw_data=repr(value))


def parse_bar(record: Mapping[str, Any]) -> PriceBar:
    """
    Parse a single bar record.

    Raises:
        MissingDataError: If a required field is absent
        MalformedDataError: If a field cannot be converted
    """
    if not isinstance(record, Mapping):
        raise MalformedDataError(
            f"Bar record must be a mapping, got {type(record).__name__}",
            raw_data=repr(record)[:100],
        )

    symbol = record.get("symbol")
    if symbol is None or symbol == "":
        raise MissingDataError("Bar record missing symbol", data_type="symbol")
    if not isinstance(symbol, str):
        symbol = str(symbol)

    ts = record.get("ts", record.get("date"))
    if ts is None:
        raise MissingDataError(
            "Bar record missing timestamp",
            data_type="ts",
            context={"symbol": symbol},
        )

    prices = {}
    for field in PRICE_FIELDS:
        if record.get(field) is None:
            raise MissingDataError(
                f"Bar record missing {field}",
                data_type=field,
                context={"symbol": symbol},
            )
        prices[field] = parse_float(record[field], field)

    volume = record.get("volume")
    name = record.get("name") or ""

    return PriceBar(
        symbol=symbol,
        ts=parse_timestamp(ts),
        high=prices["high"],
        low=prices["low"],
        close=prices["close"],
        volume=0.0 if volume is None else parse_float(volume, "volume"),
        name=str(name),
    )


def parse_bars(records: Iterable[Mapping[str, Any]]) -> list[PriceBar]:
    """Parse bar records in order."""
    return [parse_bar(record) for record in records]


def load_bars_json(payload: Union[bytes, str]) -> list[PriceBar]:
    """
    Parse a JSON document of bar records.

    Accepts either a top-level array of records or an object holding the
    array under ``bars``.
    """
    try:
        document = orjson.loads(payload)
    except orjson.JSONDecodeError as e:
        raise MalformedDataError(
            f"Invalid JSON payload: {e}",
            raw_data=str(payload)[:100],
            expected_format="JSON array of bar records",
        )

    if isinstance(document, dict):
        document = document.get("bars")
    if not isinstance(document, list):
        raise MalformedDataError(
            "JSON payload must be an array of bar records",
            expected_format="JSON array of bar records",
        )

    return parse_bars(document)


def group_by_symbol(bars: Iterable[PriceBar]) -> dict[str, list[PriceBar]]:
    """Split a flat list of bars into per-instrument series, first-seen order."""
    universe: dict[str, list[PriceBar]] = {}
    for bar in bars:
        universe.setdefault(bar.symbol, []).append(bar)
    return universe
