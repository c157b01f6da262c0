"""
Incremental tick-to-bar sampler.

One BarSampler is owned by one tick stream and one timeframe. Ticks are fed
in non-decreasing timestamp order; each call returns either None (the current
period is still accumulating) or a SampleResult holding the bar that just
closed plus one flat empty bar for every silent period in between.

The sampler keeps O(1) state and has no timer: a period only closes when a
tick at or past its end arrives.
"""

import logging
from datetime import datetime
from dataclasses import dataclass
from typing import Any, List, Optional

from ..models.ohlcv import Bar
from ..models.sample import SampleResult, Single, WithGapFill
from ..models.tick import Tick
from ..models.timeframe import Timeframe
from . import calendar
from .errors import OutOfOrderTickError

logger = logging.getLogger(__name__)


@dataclass
class _Accumulator:
    """Mutable OHLC state of the open period."""
    period_start: datetime
    period_end: datetime
    open: Any
    high: Any
    low: Any
    close: Any
    tick_count: int = 1

    @classmethod
    def seed(cls, period_start: datetime, period_end: datetime, price: Any) -> "_Accumulator":
        return cls(period_start, period_end, price, price, price, price)

    def update(self, price: Any) -> None:
        self.high = max(self.high, price)
        self.low = min(self.low, price)
        self.close = price
        self.tick_count += 1

    def to_bar(self) -> Bar:
        return Bar(
            open=self.open,
            high=self.high,
            low=self.low,
            close=self.close,
            period_start=self.period_start,
            period_end=self.period_end,
            tick_count=self.tick_count,
        )


class BarSampler:
    """
    Stateful OHLC accumulator for a single timeframe.

    States:
    - Uninitialized: no tick observed yet
    - Accumulating: one open period holding (start, end, open, high, low, close)

    Prices are opaque: only max(), min() and comparison are used, so Decimal
    and float both work.
    """

    def __init__(self, timeframe: Timeframe):
        """
        Initialize sampler.

        Args:
            timeframe: Timeframe whose calendar drives period boundaries
        """
        self._timeframe = timeframe
        self._state: Optional[_Accumulator] = None
        self._last_timestamp: Optional[datetime] = None

    def __repr__(self) -> str:
        return f"BarSampler({self._timeframe.code})"

    @property
    def timeframe(self) -> Timeframe:
        return self._timeframe

    @property
    def is_initialized(self) -> bool:
        return self._state is not None

    @property
    def last_timestamp(self) -> Optional[datetime]:
        return self._last_timestamp

    def period_start(self, timestamp: datetime) -> datetime:
        """Start of the period containing ``timestamp``."""
        return calendar.period_start(self._timeframe, timestamp)

    def period_end(self, boundary: datetime) -> datetime:
        """Start of the period after the one containing ``boundary``."""
        return calendar.period_end(self._timeframe, boundary)

    def observe(self, timestamp: datetime, price: Any) -> Optional[SampleResult]:
        """
        Feed one tick.

        Args:
            timestamp: Tick time, not earlier than the previous tick
            price: Tick price

        Returns:
            None while the current period is still open, otherwise Single or
            WithGapFill describing the closed period and any empty periods

        Raises:
            OutOfOrderTickError: If ``timestamp`` precedes the last tick
        """
        if self._last_timestamp is not None and timestamp < self._last_timestamp:
            logger.warning("Out-of-order tick rejected", extra={
                "timeframe": self._timeframe.code,
                "tick_timestamp": str(timestamp),
                "last_timestamp": str(self._last_timestamp),
            })
            raise OutOfOrderTickError(timestamp, self._last_timestamp, self._timeframe.code)

        state = self._state
        if state is None:
            start = self.period_start(timestamp)
            self._state = _Accumulator.seed(start, self.period_end(start), price)
            self._last_timestamp = timestamp
            return None

        if timestamp < state.period_end:
            state.update(price)
            self._last_timestamp = timestamp
            return None

        closed = state.to_bar()
        empty_bars: List[Bar] = []
        next_start = state.period_end
        next_end = self.period_end(next_start)
        while timestamp >= next_end:
            empty_bars.append(Bar.empty(closed.close, next_start, next_end))
            next_start = next_end
            next_end = self.period_end(next_end)

        self._state = _Accumulator.seed(next_start, next_end, price)
        self._last_timestamp = timestamp

        logger.debug("Period closed", extra={
            "timeframe": self._timeframe.code,
            "period_start": str(closed.period_start),
            "period_end": str(closed.period_end),
            "ticks": closed.tick_count,
        })

        if not empty_bars:
            return Single(closed)

        logger.info("Gap filled with empty bars", extra={
            "timeframe": self._timeframe.code,
            "empty_bars": len(empty_bars),
            "gap_start": str(empty_bars[0].period_start),
            "gap_end": str(empty_bars[-1].period_end),
        })
        return WithGapFill(closed, tuple(empty_bars))

    def observe_tick(self, tick: Tick) -> Optional[SampleResult]:
        """Feed a Tick object."""
        return self.observe(tick.timestamp, tick.price)

    def current_incomplete(self) -> Optional[Bar]:
        """Snapshot of the open period without closing it; None before the first tick."""
        if self._state is None:
            return None
        return self._state.to_bar()
