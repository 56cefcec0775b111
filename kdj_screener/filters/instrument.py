"""Narrowing the universe by instrument code and name"""

from dataclasses import dataclass
from typing import Optional, Union

from ..data.models import AnnotatedBar, PriceBar


@dataclass(frozen=True)
class InstrumentFilter:
    """
    Match instruments by code prefix and name substring, case-insensitive.

    Unset criteria match everything; both set means both must match.
    """
    code: Optional[str] = None
    name: Optional[str] = None

    def __call__(self, item: Union[AnnotatedBar, PriceBar]) -> bool:
        bar = item.bar if isinstance(item, AnnotatedBar) else item

        if self.code and not bar.symbol.lower().startswith(self.code.lower()):
            return False
        if self.name and self.name.lower() not in bar.name.lower():
            return False
        return True

    @property
    def is_empty(self) -> bool:
        return not self.code and not self.name
