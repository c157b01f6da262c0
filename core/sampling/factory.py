"""
Timeframe code lookup and multi-timeframe fan-out.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Iterable, Optional

from ..models.ohlcv import Bar
from ..models.sample import SampleResult
from ..models.tick import Tick
from ..models.timeframe import Timeframe
from .errors import OutOfOrderTickError, UnknownTimeframeError
from .sampler import BarSampler

logger = logging.getLogger(__name__)


def sampler_from_short(code: str) -> Optional[BarSampler]:
    """
    Build a fresh sampler from a short timeframe code.

    Args:
        code: Timeframe code such as "M15", "H4", "D1", "W1", "MN1"

    Returns:
        New BarSampler, or None if the code is not in the catalog
    """
    timeframe = Timeframe.from_short(code)
    if timeframe is None:
        return None
    return BarSampler(timeframe)


class MultiTimeframeSampler:
    """
    Fans one tick stream out to independent per-timeframe samplers.

    Each sampler owns its own state; nothing (not even the last price) is
    shared between timeframes.
    """

    def __init__(self, codes: Iterable[str]):
        """
        Initialize fan-out.

        Args:
            codes: Timeframe codes to sample

        Raises:
            UnknownTimeframeError: If any code is not in the catalog
        """
        self.samplers: Dict[str, BarSampler] = {}
        self._last_timestamp: Optional[datetime] = None
        for code in codes:
            sampler = sampler_from_short(code)
            if sampler is None:
                raise UnknownTimeframeError(code)
            self.samplers[sampler.timeframe.code] = sampler

        logger.info("Multi-timeframe sampler initialized", extra={
            "timeframes": list(self.samplers)
        })

    @property
    def codes(self):
        return list(self.samplers)

    def observe(self, timestamp: datetime, price: Any) -> Dict[str, SampleResult]:
        """
        Feed one tick to every timeframe.

        Ordering is checked once up front, so an out-of-order tick leaves
        every timeframe untouched. A CalendarOverflowError from one sampler
        can leave timeframes earlier in the loop advanced and later ones not;
        the fan-out's own last timestamp is only committed once all succeed.

        Returns:
            Results keyed by timeframe code, only for timeframes that closed a period

        Raises:
            OutOfOrderTickError: If ``timestamp`` precedes the last tick
            CalendarOverflowError: If a period boundary passes ``datetime.max``
        """
        if self._last_timestamp is not None and timestamp < self._last_timestamp:
            raise OutOfOrderTickError(timestamp, self._last_timestamp)

        results = {}
        for code, sampler in self.samplers.items():
            result = sampler.observe(timestamp, price)
            if result is not None:
                results[code] = result

        self._last_timestamp = timestamp
        return results

    def observe_tick(self, tick: Tick) -> Dict[str, SampleResult]:
        return self.observe(tick.timestamp, tick.price)

    def current_incomplete(self) -> Dict[str, Optional[Bar]]:
        """Snapshot of every open period keyed by timeframe code."""
        return {code: s.current_incomplete() for code, s in self.samplers.items()}
