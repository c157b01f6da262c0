"""
OHLC bar models for sampled price series.
"""

from datetime import datetime, timedelta
from dataclasses import dataclass
from typing import Any, Optional, Tuple


@dataclass(frozen=True)
class Bar:
    """Completed (or snapshot) OHLC bar covering [period_start, period_end)."""
    open: Any
    high: Any
    low: Any
    close: Any
    period_start: datetime
    period_end: datetime
    tick_count: int = 0

    def __post_init__(self):
        if self.high < self.low:
            raise ValueError("High must be >= Low")
        if self.high < self.open or self.high < self.close:
            raise ValueError("High must be >= Open and Close")
        if self.low > self.open or self.low > self.close:
            raise ValueError("Low must be <= Open and Close")
        if self.period_end <= self.period_start:
            raise ValueError("Period end must be after period start")
        if self.tick_count < 0:
            raise ValueError("Tick count must be >= 0")

    @classmethod
    def empty(cls, price: Any, period_start: datetime, period_end: datetime) -> "Bar":
        """Flat bar for a period with no ticks, carrying ``price`` forward."""
        return cls(
            open=price,
            high=price,
            low=price,
            close=price,
            period_start=period_start,
            period_end=period_end,
            tick_count=0,
        )

    @property
    def is_empty(self) -> bool:
        """True for synthetic gap-fill bars."""
        return self.tick_count == 0

    @property
    def duration(self) -> timedelta:
        return self.period_end - self.period_start

    def contains(self, timestamp: datetime) -> bool:
        """Whether ``timestamp`` falls inside this bar's half-open interval."""
        return self.period_start <= timestamp < self.period_end


@dataclass(frozen=True)
class BarSeries:
    """Ordered series of bars for one timeframe."""
    timeframe: str
    bars: Tuple[Bar, ...]

    @property
    def latest_bar(self) -> Optional[Bar]:
        """Get the most recent bar."""
        return self.bars[-1] if self.bars else None

    @property
    def length(self) -> int:
        """Number of bars."""
        return len(self.bars)

    @property
    def is_contiguous(self) -> bool:
        """True when every bar ends exactly where the next one starts."""
        return all(
            prev.period_end == nxt.period_start
            for prev, nxt in zip(self.bars, self.bars[1:])
        )
