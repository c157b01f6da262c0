"""
Tick Loader — Switchable Source (CSV | Synthetic)

Provides a unified interface for loading ordered ticks to feed the samplers.
"""

import logging
import os
from datetime import datetime, timedelta
from enum import Enum
from typing import Dict, List, Optional

import pandas as pd

from core.models.tick import Tick
from core.utils.numeric import D, to_price

logger = logging.getLogger(__name__)

TIMESTAMP_COLUMNS = ["timestamp_utc", "timestamp", "datetime", "time"]


class TickSource(Enum):
    """Tick source types."""
    CSV = "csv"
    SYNTHETIC = "synthetic"


class TickLoader:
    """
    Tick loader with switchable sources.

    Supports:
    - CSV files (replay of recorded ticks)
    - Deterministic synthetic ticks (demos and smoke runs)
    """

    def __init__(self, config: Dict, price_type: str = "decimal"):
        """
        Initialize tick loader.

        Args:
            config: Input config
                {
                  "source": "csv|synthetic",
                  "csv_path": "...",
                  "timestamp_column": "...",
                  "price_column": "price",
                  "synthetic": { ... }
                }
            price_type: "decimal" or "float"
        """
        self.config = config
        self.source = TickSource(config.get("source", "csv"))
        self.price_type = price_type
        self.synthetic_config = config.get("synthetic", {})

        logger.info("Tick loader initialized", extra={"source": self.source.value})

    def load_ticks(self, csv_path: Optional[str] = None) -> Optional[List[Tick]]:
        """
        Load ticks from the configured source.

        Args:
            csv_path: Override for the configured CSV path

        Returns:
            Ticks sorted by timestamp, or None if the source could not be read
        """
        if self.source == TickSource.CSV:
            return self._load_csv(csv_path or self.config.get("csv_path", "data/ticks.csv"))
        return self._generate_synthetic()

    def _load_csv(self, csv_path: str) -> Optional[List[Tick]]:
        """
        Read ticks from a CSV file.

        Column names are normalised to lower case. The timestamp column is the
        configured one or the first of TIMESTAMP_COLUMNS present.
        """
        if not os.path.exists(csv_path):
            logger.error("CSV file not found", extra={"path": csv_path})
            return None

        try:
            # Read as text so Decimal prices keep every digit
            df = pd.read_csv(csv_path, dtype=str)
        except (OSError, ValueError) as e:
            logger.error("CSV load error", extra={"path": csv_path, "error": str(e)})
            return None

        df.columns = [c.strip().lower() for c in df.columns]

        time_col = self.config.get("timestamp_column")
        if time_col is None:
            time_col = next((c for c in TIMESTAMP_COLUMNS if c in df.columns), None)
        else:
            time_col = time_col.strip().lower()
        price_col = self.config.get("price_column", "price").lower()

        if time_col is None or time_col not in df.columns:
            logger.error("No timestamp column found in CSV", extra={"path": csv_path})
            return None
        if price_col not in df.columns:
            logger.error("No price column found in CSV", extra={
                "path": csv_path,
                "column": price_col
            })
            return None

        df = df.dropna(subset=[time_col, price_col])
        try:
            df[time_col] = pd.to_datetime(df[time_col])
            # Stable sort keeps the original order of ticks sharing a timestamp
            df = df.sort_values(time_col, kind="mergesort")

            ticks = [
                Tick(timestamp=ts.to_pydatetime(), price=to_price(price, self.price_type))
                for ts, price in zip(df[time_col], df[price_col])
            ]
        except (ValueError, ArithmeticError, TypeError) as e:
            logger.error("CSV parse error", extra={
                "path": csv_path,
                "error": str(e)
            })
            return None

        logger.info("CSV ticks loaded", extra={
            "path": csv_path,
            "ticks": len(ticks)
        })
        return ticks

    def _generate_synthetic(self) -> List[Tick]:
        """
        Generate deterministic synthetic ticks.

        Prices follow a bounded saw-tooth around ``base_price``; every 500th
        step inserts a multi-hour silence so gap filling is exercised.
        """
        base_price = D(self.synthetic_config.get("base_price", "1.0950"))
        start = datetime.fromisoformat(self.synthetic_config.get("start", "2024-01-01T00:00:00"))
        step = timedelta(seconds=int(self.synthetic_config.get("step_seconds", 37)))
        count = int(self.synthetic_config.get("count", 5000))

        ticks = []
        timestamp = start
        for i in range(count):
            if i and i % 500 == 0:
                timestamp += timedelta(hours=3)
            price = base_price + D((i % 20 - 10) * 5) / D(100000)
            ticks.append(Tick(timestamp=timestamp, price=to_price(price, self.price_type)))
            timestamp += step

        logger.info("Synthetic ticks generated", extra={"ticks": count})
        return ticks

    def get_source(self) -> str:
        """Get current tick source."""
        return self.source.value
