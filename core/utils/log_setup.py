"""
Logging setup: JSON lines to a file, plain text to the console.
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

_RESERVED = {
    'name', 'msg', 'args', 'created', 'filename', 'funcName',
    'levelname', 'levelno', 'lineno', 'module', 'msecs', 'message',
    'pathname', 'process', 'processName', 'relativeCreated', 'thread',
    'threadName', 'exc_info', 'exc_text', 'stack_info', 'getMessage',
    'taskName',
}

_installed_handlers: List[logging.Handler] = []


class JSONFormatter(logging.Formatter):
    """Render a record and its ``extra`` fields as one JSON object."""

    def format(self, record):
        log_obj = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key not in _RESERVED and not key.startswith('_'):
                log_obj[key] = value
        if record.exc_info:
            log_obj['exception'] = self.formatException(record.exc_info)
        return json.dumps(log_obj, default=str)


def reset_logging() -> None:
    """Remove and close handlers installed by an earlier setup_logging call."""
    root_logger = logging.getLogger()
    while _installed_handlers:
        handler = _installed_handlers.pop()
        root_logger.removeHandler(handler)
        handler.close()


def setup_logging(log_dir: Optional[str] = 'logs', level: str = 'INFO', prefix: str = 'resample') -> Optional[Path]:
    """
    Configure root logger.

    Handlers from a previous call are replaced, so calling this repeatedly
    does not duplicate output.

    Args:
        log_dir: Directory for the JSON log file; None disables file logging
        level: Console log level name
        prefix: Log file name prefix

    Returns:
        Path of the JSON log file, or None
    """
    reset_logging()
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(getattr(logging, level.upper(), logging.INFO))
    console_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
    root_logger.addHandler(console_handler)
    _installed_handlers.append(console_handler)

    if log_dir is None:
        return None

    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)
    log_file = log_path / f'{prefix}_{datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")}.json'

    file_handler = logging.FileHandler(log_file)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(JSONFormatter())
    root_logger.addHandler(file_handler)
    _installed_handlers.append(file_handler)

    return log_file
