"""
Period boundary arithmetic per timeframe.

All functions operate on a single fixed calendar: datetimes are aligned as
given (naive, or aware with their tzinfo carried through untouched) and no
timezone conversion is performed.
"""

from datetime import datetime, timedelta
from typing import Callable, Dict, Iterator, Tuple

from ..models.timeframe import Timeframe, TimeUnit
from .errors import CalendarOverflowError


def _minute_start(dt: datetime, n: int) -> datetime:
    return dt.replace(minute=dt.minute - dt.minute % n, second=0, microsecond=0)


def _hour_start(dt: datetime, n: int) -> datetime:
    return dt.replace(hour=dt.hour - dt.hour % n, minute=0, second=0, microsecond=0)


def _day_start(dt: datetime, n: int) -> datetime:
    return dt.replace(hour=0, minute=0, second=0, microsecond=0)


def _week_start(dt: datetime, n: int) -> datetime:
    # Weeks are Monday-aligned
    return _day_start(dt, 1) - timedelta(days=dt.weekday())


def _month_start(dt: datetime, n: int) -> datetime:
    return _day_start(dt, 1).replace(day=1)


def _advance_month(start: datetime, n: int) -> datetime:
    month_index = start.month - 1 + n
    return start.replace(year=start.year + month_index // 12, month=month_index % 12 + 1)


_ALIGN: Dict[TimeUnit, Callable[[datetime, int], datetime]] = {
    TimeUnit.MINUTE: _minute_start,
    TimeUnit.HOUR: _hour_start,
    TimeUnit.DAY: _day_start,
    TimeUnit.WEEK: _week_start,
    TimeUnit.MONTH: _month_start,
}

_ADVANCE: Dict[TimeUnit, Callable[[datetime, int], datetime]] = {
    TimeUnit.MINUTE: lambda start, n: start + timedelta(minutes=n),
    TimeUnit.HOUR: lambda start, n: start + timedelta(hours=n),
    TimeUnit.DAY: lambda start, n: start + timedelta(days=n),
    TimeUnit.WEEK: lambda start, n: start + timedelta(weeks=n),
    TimeUnit.MONTH: _advance_month,
}


def period_start(timeframe: Timeframe, dt: datetime) -> datetime:
    """
    Start of the period containing ``dt``.

    Args:
        timeframe: Timeframe to align to
        dt: Any instant

    Returns:
        Latest period boundary at or before ``dt``
    """
    return _ALIGN[timeframe.unit](dt, timeframe.multiple)


def period_end(timeframe: Timeframe, dt: datetime) -> datetime:
    """
    Start of the period following the one containing ``dt``.

    Given a boundary this advances exactly one period forward.

    Raises:
        CalendarOverflowError: If the next boundary is past ``datetime.max``
    """
    start = period_start(timeframe, dt)
    try:
        return _ADVANCE[timeframe.unit](start, timeframe.multiple)
    except (OverflowError, ValueError) as e:
        raise CalendarOverflowError(timeframe, start) from e


def period_bounds(timeframe: Timeframe, dt: datetime) -> Tuple[datetime, datetime]:
    """Half-open ``[start, end)`` interval containing ``dt``."""
    start = period_start(timeframe, dt)
    return start, period_end(timeframe, start)


def iter_periods(timeframe: Timeframe, start: datetime, stop: datetime) -> Iterator[Tuple[datetime, datetime]]:
    """
    Yield contiguous periods covering ``[period_start(start), stop)``.

    Args:
        timeframe: Timeframe to step by
        start: First instant to cover
        stop: Exclusive upper bound; periods starting at or after it are not yielded
    """
    current = period_start(timeframe, start)
    while current < stop:
        nxt = period_end(timeframe, current)
        yield current, nxt
        current = nxt
