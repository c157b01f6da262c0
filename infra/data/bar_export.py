"""
Bar export helpers (pandas).
"""

import logging
from pathlib import Path
from typing import Iterable

import pandas as pd

from core.models.ohlcv import Bar

logger = logging.getLogger(__name__)

BAR_COLUMNS = ["period_start", "period_end", "open", "high", "low", "close", "tick_count"]


def bars_to_frame(bars: Iterable[Bar]) -> pd.DataFrame:
    """
    Convert bars to a DataFrame, one row per bar in the given order.

    Prices are kept as-is (Decimal values stay in an object column).
    """
    rows = [
        {
            "period_start": bar.period_start,
            "period_end": bar.period_end,
            "open": bar.open,
            "high": bar.high,
            "low": bar.low,
            "close": bar.close,
            "tick_count": bar.tick_count,
        }
        for bar in bars
    ]
    return pd.DataFrame(rows, columns=BAR_COLUMNS)


def write_bars_csv(bars: Iterable[Bar], path) -> Path:
    """
    Write bars to CSV.

    Args:
        bars: Bars in chronological order
        path: Output file path; parent directories are created

    Returns:
        Path written
    """
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    df = bars_to_frame(bars)
    df.to_csv(out, index=False)
    logger.info("Bars written", extra={"path": str(out), "bars": len(df)})
    return out
