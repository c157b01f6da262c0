"""
Sampling error taxonomy.
"""

from datetime import datetime
from typing import Any, Optional


class SamplingError(Exception):
    """Base class for bar sampling errors."""


class OutOfOrderTickError(SamplingError, ValueError):
    """Tick timestamp is earlier than the last observed timestamp."""

    def __init__(self, timestamp: datetime, last_timestamp: datetime, timeframe: Optional[str] = None):
        self.timestamp = timestamp
        self.last_timestamp = last_timestamp
        self.timeframe = timeframe
        where = f" ({timeframe})" if timeframe else ""
        super().__init__(
            f"Tick at {timestamp} is earlier than previous tick at {last_timestamp}{where}"
        )


class CalendarOverflowError(SamplingError, OverflowError):
    """Period boundary falls outside the representable calendar."""

    def __init__(self, timeframe: Any, instant: datetime):
        self.timeframe = timeframe
        self.instant = instant
        super().__init__(f"Cannot advance {timeframe} period past {instant}")


class UnknownTimeframeError(SamplingError, KeyError):
    """Timeframe code is not part of the catalog (configuration paths only)."""

    def __init__(self, code: str):
        self.code = code
        super().__init__(code)

    def __str__(self) -> str:
        return f"Unknown timeframe code: {self.code!r}"
