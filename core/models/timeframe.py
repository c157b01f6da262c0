"""
Timeframe catalog for bar sampling.
"""

from datetime import timedelta
from enum import Enum
from typing import List, Optional


class TimeUnit(Enum):
    """Calendar unit a timeframe is aligned to."""
    MINUTE = "minute"
    HOUR = "hour"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"


class Timeframe(Enum):
    """Supported timeframes - value is (short code, unit, multiple)."""
    M1 = ("M1", TimeUnit.MINUTE, 1)
    M2 = ("M2", TimeUnit.MINUTE, 2)
    M3 = ("M3", TimeUnit.MINUTE, 3)
    M4 = ("M4", TimeUnit.MINUTE, 4)
    M5 = ("M5", TimeUnit.MINUTE, 5)
    M6 = ("M6", TimeUnit.MINUTE, 6)
    M10 = ("M10", TimeUnit.MINUTE, 10)
    M12 = ("M12", TimeUnit.MINUTE, 12)
    M15 = ("M15", TimeUnit.MINUTE, 15)
    M20 = ("M20", TimeUnit.MINUTE, 20)
    M30 = ("M30", TimeUnit.MINUTE, 30)
    H1 = ("H1", TimeUnit.HOUR, 1)
    H2 = ("H2", TimeUnit.HOUR, 2)
    H3 = ("H3", TimeUnit.HOUR, 3)
    H4 = ("H4", TimeUnit.HOUR, 4)
    H6 = ("H6", TimeUnit.HOUR, 6)
    H8 = ("H8", TimeUnit.HOUR, 8)
    H12 = ("H12", TimeUnit.HOUR, 12)
    D1 = ("D1", TimeUnit.DAY, 1)
    W1 = ("W1", TimeUnit.WEEK, 1)
    MN1 = ("MN1", TimeUnit.MONTH, 1)

    def __init__(self, code: str, unit: TimeUnit, multiple: int):
        self.code = code
        self.unit = unit
        self.multiple = multiple

    def __str__(self) -> str:
        return self.code

    @property
    def nominal_duration(self) -> Optional[timedelta]:
        """Fixed period length, or None for calendar months."""
        if self.unit == TimeUnit.MINUTE:
            return timedelta(minutes=self.multiple)
        if self.unit == TimeUnit.HOUR:
            return timedelta(hours=self.multiple)
        if self.unit == TimeUnit.DAY:
            return timedelta(days=self.multiple)
        if self.unit == TimeUnit.WEEK:
            return timedelta(weeks=self.multiple)
        return None

    @classmethod
    def from_short(cls, code: str) -> Optional["Timeframe"]:
        """
        Look up a timeframe by its short code (e.g. "M15", "H4", "MN1").

        Args:
            code: Short timeframe code (case-insensitive)

        Returns:
            Matching Timeframe, or None for unknown codes
        """
        if not isinstance(code, str):
            return None
        return _BY_CODE.get(code.strip().upper())

    @classmethod
    def codes(cls) -> List[str]:
        """All catalog codes, shortest timeframe first."""
        return [tf.code for tf in cls]


_BY_CODE = {tf.code: tf for tf in Timeframe}
