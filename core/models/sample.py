"""
Tagged results emitted by a bar sampler when a period closes.
"""

from dataclasses import dataclass
from typing import Tuple

from .ohlcv import Bar


@dataclass(frozen=True)
class SampleResult:
    """Base for sampler output: one closed bar plus any gap-fill bars."""
    closed_bar: Bar

    @property
    def empty_bars(self) -> Tuple[Bar, ...]:
        return ()

    @property
    def has_gap(self) -> bool:
        return bool(self.empty_bars)

    @property
    def bars(self) -> Tuple[Bar, ...]:
        """Closed bar followed by empty bars, in chronological order."""
        return (self.closed_bar,) + tuple(self.empty_bars)


@dataclass(frozen=True)
class Single(SampleResult):
    """One period closed and the triggering tick falls in the next period."""


@dataclass(frozen=True)
class WithGapFill(SampleResult):
    """One period closed, followed by one or more periods with no ticks."""
    gap_bars: Tuple[Bar, ...] = ()

    def __post_init__(self):
        if not self.gap_bars:
            raise ValueError("WithGapFill requires at least one empty bar")
        object.__setattr__(self, 'gap_bars', tuple(self.gap_bars))

    @property
    def empty_bars(self) -> Tuple[Bar, ...]:
        return self.gap_bars

    @property
    def empty_count(self) -> int:
        return len(self.gap_bars)
