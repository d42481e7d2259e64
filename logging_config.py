"""Logging for Regex WYSIWYG.

curses owns the terminal while a session runs, so nothing is ever written to
stdout or stderr. Records go to a rotating file, one JSON object per line.
"""

import json
import logging
import os
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional


LOGGER_NAME = "regex_wysiwyg"

DEFAULT_MAX_BYTES = 1024 * 1024
DEFAULT_BACKUP_COUNT = 3

# JSON key -> LogRecord attribute
RECORD_FIELDS = (
    ("level", "levelname"),
    ("logger", "name"),
    ("message", "message"),
    ("module", "module"),
    ("function", "funcName"),
    ("line", "lineno"),
)


class JsonFormatter(logging.Formatter):
    """Render each log record as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        record.message = record.getMessage()
        created = datetime.fromtimestamp(record.created, timezone.utc)
        entry = {"timestamp": created.isoformat(timespec="milliseconds")}
        for key, attribute in RECORD_FIELDS:
            entry[key] = getattr(record, attribute)
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


def setup_logging(
    log_path: str,
    debug: bool = False,
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
) -> logging.Logger:
    """Send the package logger to a rotating JSON log file.

    Calling this again with the same path only updates the level. A
    different path closes the old file and switches to the new one.

    Args:
        log_path: Path to the log file, created along with its folder.
        debug: Log DEBUG records too (provider commands and raw answers).
        max_bytes: Maximum log file size before rotation.
        backup_count: Number of rotated files to keep.

    Returns:
        The package logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if debug else logging.INFO)
    logger.propagate = False

    target = os.path.abspath(os.path.expanduser(log_path))
    for handler in list(logger.handlers):
        if getattr(handler, "baseFilename", None) == target:
            return logger
        logger.removeHandler(handler)
        handler.close()

    Path(target).parent.mkdir(parents=True, exist_ok=True)
    file_handler = RotatingFileHandler(
        target,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    file_handler.setFormatter(JsonFormatter())
    logger.addHandler(file_handler)

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get the package logger or one of its children, e.g. "editor"."""
    base_logger = logging.getLogger(LOGGER_NAME)
    if name:
        return base_logger.getChild(name)
    return base_logger
