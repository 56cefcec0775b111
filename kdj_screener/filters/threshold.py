"""
Threshold predicates on the J value and the order-preserving selection.

Two predicate shapes are supported. JThreshold is a plain comparison
(``J < 0`` by default). DirectionalThreshold pairs an explicit direction
with an unsigned magnitude and replaces the legacy single signed integer,
where a positive value meant ``J >= value`` and a negative value meant
``J <= |value|``.
"""

import math
import operator
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any, TypeVar, Union

from ..config.defaults import FilterParams
from ..data.models import AnnotatedBar, OscillatorPoint
from ..errors import InvalidConfigurationError

T = TypeVar("T")


class Comparison(Enum):
    """Comparison applied as ``J <op> threshold``."""
    LT = "lt"
    LE = "le"
    GE = "ge"
    GT = "gt"

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]

    def apply(self, value: float, threshold: float) -> bool:
        return _OPERATORS[self](value, threshold)

    @classmethod
    def parse(cls, value: Union[str, "Comparison"]) -> "Comparison":
        """Accept an enum member, its value (``lt``) or its symbol (``<``)."""
        if isinstance(value, Comparison):
            return value
        for member in cls:
            if value in (member.value, member.symbol):
                return member
        raise InvalidConfigurationError(
            f"Unknown comparison: {value!r}",
            field="comparison",
            value=value,
        )


_SYMBOLS = {
    Comparison.LT: "<",
    Comparison.LE: "<=",
    Comparison.GE: ">=",
    Comparison.GT: ">",
}

_OPERATORS = {
    Comparison.LT: operator.lt,
    Comparison.LE: operator.le,
    Comparison.GE: operator.ge,
    Comparison.GT: operator.gt,
}


class Direction(Enum):
    """Direction of a magnitude threshold."""
    AT_LEAST = "at_least"
    AT_MOST = "at_most"


def j_value(item: Union[AnnotatedBar, OscillatorPoint, float]) -> float:
    """Extract J from an annotated bar, an oscillator point or a bare number."""
    if isinstance(item, AnnotatedBar):
        return item.point.j
    if isinstance(item, OscillatorPoint):
        return item.j
    return float(item)


@dataclass(frozen=True)
class JThreshold:
    """Predicate ``J <comparison> threshold``."""
    comparison: Comparison = Comparison.LT
    threshold: float = 0.0

    def __post_init__(self):
        if not isinstance(self.comparison, Comparison):
            object.__setattr__(self, "comparison", Comparison.parse(self.comparison))
        if isinstance(self.threshold, bool) or not isinstance(self.threshold, (int, float)) \
                or not math.isfinite(self.threshold):
            raise InvalidConfigurationError(
                f"Threshold must be a finite number, got {self.threshold!r}",
                field="threshold",
                value=self.threshold,
            )

    def __call__(self, item: Any) -> bool:
        return self.comparison.apply(j_value(item), self.threshold)

    def __str__(self) -> str:
        return f"J {self.comparison.symbol} {self.threshold:g}"


@dataclass(frozen=True)
class DirectionalThreshold:
    """Predicate ``J >= magnitude`` or ``J <= magnitude``."""
    direction: Direction
    magnitude: float

    def __post_init__(self):
        if isinstance(self.magnitude, bool) or not isinstance(self.magnitude, (int, float)) \
                or not math.isfinite(self.magnitude) or self.magnitude < 0:
            raise InvalidConfigurationError(
                f"Magnitude must be a finite non-negative number, got {self.magnitude!r}",
                field="magnitude",
                value=self.magnitude,
            )

    @classmethod
    def from_signed(cls, value: float) -> "DirectionalThreshold":
        """
        Decode the legacy signed threshold.

        Positive values select ``J >= value``, negative values select
        ``J <= |value|``. Zero selects ``J >= 0``.
        """
        if value < 0:
            return cls(Direction.AT_MOST, -value)
        return cls(Direction.AT_LEAST, value)

    def as_comparison(self) -> JThreshold:
        if self.direction is Direction.AT_LEAST:
            return JThreshold(Comparison.GE, self.magnitude)
        return JThreshold(Comparison.LE, self.magnitude)

    def __call__(self, item: Any) -> bool:
        return self.as_comparison()(item)

    def __str__(self) -> str:
        return str(self.as_comparison())


def predicate_from_params(params: FilterParams) -> JThreshold:
    """Build the configured J predicate; a signed threshold takes precedence."""
    if params.signed_threshold is not None:
        return DirectionalThreshold.from_signed(params.signed_threshold).as_comparison()
    return JThreshold(Comparison.parse(params.comparison), params.threshold)


def select(items: Iterable[T], predicate: Callable[[T], bool]) -> list[T]:
    """
    Keep the items matching predicate

    Returns a new list in input order; the input is not modified.
    """
    return [item for item in items if predicate(item)]
