"""Tests for JSON logging setup."""

import json
import logging
from pathlib import Path

import pytest

from core.utils.log_setup import JSONFormatter, reset_logging, setup_logging


@pytest.fixture
def clean_root_logger():
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    yield root
    for handler in list(root.handlers):
        if handler not in saved_handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(saved_level)


def test_json_formatter_includes_extra_fields() -> None:
    record = logging.LogRecord("core.sampling.sampler", logging.INFO, __file__, 1,
                               "Gap filled with empty bars", None, None)
    record.timeframe = "M15"
    record.empty_bars = 3

    payload = json.loads(JSONFormatter().format(record))
    assert payload["level"] == "INFO"
    assert payload["logger"] == "core.sampling.sampler"
    assert payload["message"] == "Gap filled with empty bars"
    assert payload["timeframe"] == "M15"
    assert payload["empty_bars"] == 3


def test_setup_logging_writes_json_file(tmp_path: Path, clean_root_logger) -> None:
    log_file = setup_logging(log_dir=str(tmp_path), level="WARNING", prefix="unit")
    assert log_file.parent == tmp_path
    assert log_file.name.startswith("unit_")

    logging.getLogger("tests.log_setup").info("Resampling started", extra={"ticks": 4})
    for handler in clean_root_logger.handlers:
        handler.flush()

    lines = log_file.read_text(encoding="utf-8").strip().splitlines()
    payload = json.loads(lines[-1])
    assert payload["message"] == "Resampling started"
    assert payload["ticks"] == 4


def test_setup_logging_console_only(clean_root_logger) -> None:
    assert setup_logging(log_dir=None) is None


def test_repeated_setup_replaces_handlers(tmp_path: Path, clean_root_logger) -> None:
    before = len(clean_root_logger.handlers)
    setup_logging(log_dir=str(tmp_path / "first"))
    setup_logging(log_dir=str(tmp_path / "second"))
    setup_logging(log_dir=None)
    assert len(clean_root_logger.handlers) == before + 1

    reset_logging()
    assert len(clean_root_logger.handlers) == before
