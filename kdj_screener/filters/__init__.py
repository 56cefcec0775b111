"""Filter stage: threshold predicates on J and instrument narrowing"""

from .instrument import InstrumentFilter
from .threshold import (
    Comparison,
    Direction,
    DirectionalThreshold,
    JThreshold,
    predicate_from_params,
    select,
)

__all__ = [
    "Comparison",
    "Direction",
    "DirectionalThreshold",
    "InstrumentFilter",
    "JThreshold",
    "predicate_from_params",
    "select",
]
