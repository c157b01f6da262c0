"""Tests for tick loading and bar export."""

from datetime import datetime, timedelta
from decimal import Decimal
from pathlib import Path

import pandas as pd
import pytest

from core.models.ohlcv import Bar
from infra.data.bar_export import BAR_COLUMNS, bars_to_frame, write_bars_csv
from infra.data.tick_loader import TickLoader, TickSource


def _write_ticks(tmp_path: Path, text: str) -> str:
    path = tmp_path / "ticks.csv"
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_csv_ticks_sorted_with_decimal_prices(tmp_path: Path) -> None:
    csv_path = _write_ticks(tmp_path, (
        "Timestamp,Price\n"
        "2024-01-01 10:04:00,1.10015\n"
        "2024-01-01 10:03:00,1.10005\n"
        "2024-01-01 10:15:00,1.1\n"
    ))
    loader = TickLoader({"source": "csv", "csv_path": csv_path})
    ticks = loader.load_ticks()

    assert loader.get_source() == "csv"
    assert [t.timestamp for t in ticks] == [
        datetime(2024, 1, 1, 10, 3),
        datetime(2024, 1, 1, 10, 4),
        datetime(2024, 1, 1, 10, 15),
    ]
    assert ticks[0].price == Decimal("1.10005")
    assert isinstance(ticks[0].price, Decimal)


def test_csv_float_prices(tmp_path: Path) -> None:
    csv_path = _write_ticks(tmp_path, "time,price\n2024-01-01 10:03:00,1.5\n")
    ticks = TickLoader({"source": "csv"}, price_type="float").load_ticks(csv_path=csv_path)
    assert ticks[0].price == pytest.approx(1.5)
    assert isinstance(ticks[0].price, float)


def test_csv_configured_columns(tmp_path: Path) -> None:
    csv_path = _write_ticks(tmp_path, "ts,bid\n2024-01-01 10:03:00,1.25\n")
    loader = TickLoader({"source": "csv", "timestamp_column": "ts", "price_column": "bid"})
    ticks = loader.load_ticks(csv_path=csv_path)
    assert ticks[0].price == Decimal("1.25")


def test_csv_missing_file(tmp_path: Path) -> None:
    loader = TickLoader({"source": "csv"})
    assert loader.load_ticks(csv_path=str(tmp_path / "nope.csv")) is None


def test_csv_missing_price_column(tmp_path: Path) -> None:
    csv_path = _write_ticks(tmp_path, "timestamp,last\n2024-01-01 10:03:00,1.25\n")
    assert TickLoader({"source": "csv"}).load_ticks(csv_path=csv_path) is None


def test_csv_missing_timestamp_column(tmp_path: Path) -> None:
    csv_path = _write_ticks(tmp_path, "when,price\n2024-01-01 10:03:00,1.25\n")
    assert TickLoader({"source": "csv"}).load_ticks(csv_path=csv_path) is None


def test_synthetic_ticks_are_ordered_and_deterministic() -> None:
    config = {"source": "synthetic", "synthetic": {"count": 1200, "step_seconds": 10}}
    first = TickLoader(config).load_ticks()
    second = TickLoader(config).load_ticks()

    assert TickSource(config["source"]) == TickSource.SYNTHETIC
    assert len(first) == 1200
    assert first == second
    assert all(a.timestamp <= b.timestamp for a, b in zip(first, first[1:]))
    # a three hour silence every 500 ticks
    assert first[500].timestamp - first[499].timestamp > timedelta(hours=3)


def test_bars_to_frame() -> None:
    start = datetime(2024, 1, 1, 10, 0)
    bars = [
        Bar(open=Decimal("1"), high=Decimal("2"), low=Decimal("1"), close=Decimal("2"),
            period_start=start, period_end=datetime(2024, 1, 1, 10, 15), tick_count=3),
        Bar.empty(Decimal("2"), datetime(2024, 1, 1, 10, 15), datetime(2024, 1, 1, 10, 30)),
    ]
    df = bars_to_frame(bars)
    assert list(df.columns) == BAR_COLUMNS
    assert len(df) == 2
    assert df["tick_count"].tolist() == [3, 0]
    assert df["close"].tolist() == [Decimal("2"), Decimal("2")]


def test_bars_to_frame_empty() -> None:
    df = bars_to_frame([])
    assert list(df.columns) == BAR_COLUMNS
    assert df.empty


def test_write_bars_csv(tmp_path: Path) -> None:
    bars = [Bar.empty(Decimal("1.5"), datetime(2024, 1, 1), datetime(2024, 1, 2))]
    path = write_bars_csv(bars, tmp_path / "out" / "bars_D1.csv")
    assert path.exists()
    df = pd.read_csv(path)
    assert df.loc[0, "close"] == pytest.approx(1.5)
    assert pd.to_datetime(df.loc[0, "period_start"]) == pd.Timestamp("2024-01-01")


def test_csv_decimal_prices_keep_all_digits(tmp_path: Path) -> None:
    csv_path = _write_ticks(tmp_path, (
        "timestamp,price\n"
        "2024-01-01 10:00:00,12345.123456789012345\n"
    ))
    ticks = TickLoader({"source": "csv"}).load_ticks(csv_path=csv_path)
    assert ticks[0].price == Decimal("12345.123456789012345")


def test_csv_bad_price_returns_none(tmp_path: Path) -> None:
    csv_path = _write_ticks(tmp_path, (
        "timestamp,price\n"
        "2024-01-01 10:00:00,1.10\n"
        "2024-01-01 10:01:00,n/a?\n"
    ))
    assert TickLoader({"source": "csv"}).load_ticks(csv_path=csv_path) is None
    assert TickLoader({"source": "csv"}, price_type="float").load_ticks(csv_path=csv_path) is None


def test_csv_bad_timestamp_returns_none(tmp_path: Path) -> None:
    csv_path = _write_ticks(tmp_path, (
        "timestamp,price\n"
        "2024-01-01 10:00:00,1.10\n"
        "not-a-date,1.11\n"
    ))
    assert TickLoader({"source": "csv"}).load_ticks(csv_path=csv_path) is None
