#!/usr/bin/env python3
"""
Resample Ticks — Replay a tick stream into fixed-timeframe OHLC bars

Loads ticks (CSV or synthetic), fans every tick out to one sampler per
requested timeframe, and writes one bar CSV per timeframe.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

import jsonschema

from configs import config_loader, load_config_file
from core.models.config import SamplingConfig
from core.models.ohlcv import Bar, BarSeries
from core.sampling.errors import OutOfOrderTickError, SamplingError
from core.sampling.factory import MultiTimeframeSampler
from core.utils.log_setup import setup_logging
from core.utils.numeric import set_precision
from infra.data.bar_export import write_bars_csv
from infra.data.tick_loader import TickLoader

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Resample a tick stream into OHLC bars for fixed timeframes"
    )
    parser.add_argument(
        "--config",
        type=str,
        help="Path to a sampling config JSON (default: configs/sampling.json)"
    )
    parser.add_argument(
        "--ticks",
        type=str,
        help="Tick CSV to replay (overrides config input.csv_path)"
    )
    parser.add_argument(
        "--timeframes",
        type=str,
        help="Comma-separated timeframe codes, e.g. M15,H1,D1"
    )
    parser.add_argument(
        "--out-dir",
        type=str,
        help="Directory for bar CSV files"
    )
    parser.add_argument(
        "--synthetic",
        type=int,
        metavar="N",
        help="Generate N synthetic ticks instead of reading a CSV"
    )
    parser.add_argument(
        "--flush",
        action="store_true",
        help="Append the in-progress bar of every timeframe to the output"
    )
    parser.add_argument(
        "--no-log-file",
        action="store_true",
        help="Log to the console only"
    )
    return parser


def resample(ticks, codes: List[str], flush: bool = False) -> Dict[str, BarSeries]:
    """
    Run ticks through one sampler per timeframe.

    Args:
        ticks: Ticks in non-decreasing timestamp order
        codes: Timeframe codes
        flush: Include the still-open bar of each timeframe

    Returns:
        Bar series keyed by timeframe code

    Raises:
        OutOfOrderTickError: If the tick stream is not ordered
    """
    fan_out = MultiTimeframeSampler(codes)
    collected: Dict[str, List[Bar]] = {code: [] for code in fan_out.codes}

    for tick in ticks:
        for code, result in fan_out.observe_tick(tick).items():
            collected[code].extend(result.bars)

    if flush:
        for code, bar in fan_out.current_incomplete().items():
            if bar is not None:
                collected[code].append(bar)

    return {code: BarSeries(timeframe=code, bars=tuple(bars)) for code, bars in collected.items()}


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        raw = load_config_file(args.config) if args.config else config_loader.get_config("sampling")
        if args.timeframes:
            raw = dict(raw, timeframes=[c for c in args.timeframes.split(",") if c.strip()])
        config = SamplingConfig.from_dict(raw)
    except (OSError, ValueError, jsonschema.ValidationError, SamplingError) as e:
        print(f"FAIL: invalid configuration: {e}")
        return 1

    log_cfg = config.logging_configs
    log_dir = None if args.no_log_file or not log_cfg.get("json", True) else log_cfg.get("log_dir", "logs")
    setup_logging(log_dir=log_dir, level=log_cfg.get("level", "INFO"))
    set_precision(config.decimal_precision)

    input_cfg = dict(config.input_configs)
    if args.ticks:
        input_cfg["source"] = "csv"
    if args.synthetic is not None:
        input_cfg["source"] = "synthetic"
        input_cfg["synthetic"] = dict(input_cfg.get("synthetic", {}), count=args.synthetic)

    loader = TickLoader(input_cfg, price_type=config.price_type)
    ticks = loader.load_ticks(csv_path=args.ticks)
    if ticks is None:
        print("FAIL: no ticks loaded")
        return 1

    logger.info("Resampling started", extra={
        "ticks": len(ticks),
        "timeframes": config.timeframes,
        "config_hash": config.config_hash.hash_value,
    })

    try:
        series = resample(ticks, config.timeframes, flush=args.flush)
    except OutOfOrderTickError as e:
        logger.error("Tick stream is not ordered", extra={"error": str(e)})
        print(f"FAIL: {e}")
        return 1

    out_dir = Path(args.out_dir or config.output_configs.get("dir", "output/bars"))
    print(f"Ticks: {len(ticks)}")
    for code, bar_series in series.items():
        path = write_bars_csv(bar_series.bars, out_dir / f"bars_{code}.csv")
        empty = sum(1 for bar in bar_series.bars if bar.is_empty)
        print(f"  {code:>4}: {bar_series.length} bars ({empty} empty) -> {path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
