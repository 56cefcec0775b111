"""
Main screening engine coordinator.

Runs the screening pipeline over a universe of instruments:
Price bars → Oscillator annotation → Latest point per instrument → J filter
"""

from collections.abc import Callable, Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import orjson
import structlog

from .config.defaults import DefaultConfig, get_default_config
from .config.loader import ConfigLoader
from .data.models import AnnotatedBar, PriceBar
from .data.validators import inspect_series
from .filters.instrument import InstrumentFilter
from .filters.threshold import predicate_from_params, select
from .indicators.kdj import KDJCalculator
from .logging.config import configure_logging, get_screen_logger, log_filter_decision

logger = structlog.get_logger(__name__)
screen_logger = get_screen_logger(__name__)

Universe = Mapping[str, Sequence[PriceBar]]


@dataclass(frozen=True)
class ScreenResult:
    """Outcome of one screening run."""
    selected: list[AnnotatedBar]
    total: int                                   # Instruments supplied
    scanned: int                                 # Instruments annotated
    skipped: list[str] = field(default_factory=list)
    predicate: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Render the selection as plain data for a presentation layer."""
        return {
            "data": [
                {
                    "symbol": item.bar.symbol,
                    "name": item.bar.name,
                    "ts": item.bar.ts,
                    "high": item.bar.high,
                    "low": item.bar.low,
                    "close": item.bar.close,
                    "volume": item.bar.volume,
                    "kdj": {"k": item.point.k, "d": item.point.d, "j": item.point.j},
                }
                for item in self.selected
            ],
            "total": self.total,
            "scanned": self.scanned,
            "skipped": list(self.skipped),
            "predicate": self.predicate,
        }

    def to_json(self) -> bytes:
        return orjson.dumps(self.to_dict())


class Screener:
    """
    Coordinator for K/D/J screening over many instruments.

    Instruments are independent: each series is annotated in isolation and
    no state is kept between calls.
    """

    def __init__(self, config: Optional[DefaultConfig] = None) -> None:
        self.config = config or get_default_config()
        self.calculator = KDJCalculator(
            window_length=self.config.kdj.window_length,
            epsilon=self.config.kdj.epsilon,
        )
        self.default_predicate = predicate_from_params(self.config.filter)
        self.logger = logger
        self.screen_logger = screen_logger

    @classmethod
    def from_config(
        cls,
        screen_name: Optional[str] = None,
        overrides: Optional[dict[str, Any]] = None,
        config_dir: Optional[Path] = None,
    ) -> "Screener":
        """
        Build a screener from layered configuration and apply its logging section.

        Args:
            screen_name: Named screen in screens.yaml
            overrides: Call-time overrides, highest precedence
            config_dir: Directory holding screens.yaml

        Raises:
            InvalidConfigurationError: If the merged configuration is invalid
        """
        config = ConfigLoader.create(config_dir).build_config(screen_name, overrides)
        configure_logging(
            level=config.logging.level,
            format_json=config.logging.format_json,
        )
        return cls(config)

    def annotate_universe(self, universe: Universe) -> dict[str, list[AnnotatedBar]]:
        """
        Annotate every series in the universe.

        Returns:
            Annotated series keyed by symbol, in the universe's order
        """
        symbols = list(universe)
        series_list = [universe[symbol] for symbol in symbols]

        for symbol, series in zip(symbols, series_list):
            self._report_issues(symbol, series)

        max_workers = self.config.screen.max_workers
        if max_workers > 1 and len(series_list) > 1:
            with ThreadPoolExecutor(max_workers=max_workers) as executor:
                annotated = list(executor.map(self.calculator.annotate, series_list))
        else:
            annotated = [self.calculator.annotate(series) for series in series_list]

        return dict(zip(symbols, annotated))

    def latest_points(self, universe: Universe) -> list[AnnotatedBar]:
        """Most recent annotated bar of every instrument with enough history."""
        latest, _ = self._latest_with_skipped(universe)
        return latest

    def screen(
        self,
        universe: Universe,
        predicate: Optional[Callable[[AnnotatedBar], bool]] = None,
        instrument_filter: Optional[InstrumentFilter] = None,
    ) -> ScreenResult:
        """
        Select instruments whose latest J satisfies the predicate.

        Args:
            universe: Chronological bars keyed by symbol
            predicate: J predicate; defaults to the configured one
            instrument_filter: Optional code/name narrowing applied first

        Returns:
            ScreenResult with selections in universe order
        """
        predicate = predicate or self.default_predicate

        latest, skipped = self._latest_with_skipped(universe)
        if instrument_filter is not None and not instrument_filter.is_empty:
            latest = select(latest, instrument_filter)

        if self.config.screen.log_decisions:
            selected = []
            for item in latest:
                passed = predicate(item)
                log_filter_decision(self.screen_logger, item.symbol, item.j, passed, str(predicate))
                if passed:
                    selected.append(item)
        else:
            selected = select(latest, predicate)

        result = ScreenResult(
            selected=selected,
            total=len(universe),
            scanned=len(universe) - len(skipped),
            skipped=skipped,
            predicate=str(predicate),
        )

        self.screen_logger.info(
            "Screen completed",
            total=result.total,
            scanned=result.scanned,
            skipped=len(result.skipped),
            selected=len(result.selected),
            predicate=result.predicate,
            window_length=self.calculator.window_length,
        )

        return result

    def _latest_with_skipped(self, universe: Universe) -> tuple[list[AnnotatedBar], list[str]]:
        min_bars = self.config.screen.min_bars
        eligible = {}
        skipped = []

        for symbol, series in universe.items():
            if len(series) < min_bars:
                skipped.append(symbol)
                self.logger.debug(
                    "Skipping instrument with insufficient history",
                    symbol=symbol,
                    bars=len(series),
                    min_bars=min_bars
                )
            else:
                eligible[symbol] = series

        annotated = self.annotate_universe(eligible)
        latest = [series[-1] for series in annotated.values() if series]
        return latest, skipped

    def _report_issues(self, symbol: str, series: Sequence[PriceBar]) -> None:
        issues = inspect_series(series)
        if issues:
            self.logger.warning(
                "Series has data quality issues",
                symbol=symbol,
                issue_count=len(issues),
                issues=[f"{issue.index}:{issue.code}" for issue in issues[:10]]
            )
