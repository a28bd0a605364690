"""Logging setup for the dining table: rich console output plus JSON lines."""

from __future__ import annotations

import json
import logging
import os
from datetime import datetime
from logging import Logger
from typing import Any, Dict, Optional

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "dining_table"
PROMOTED_KEYS = ("philosopher", "state")


def configure_logging(
    log_file: Optional[str] = None,
    *,
    level: int = logging.INFO,
    console: Console | None = None,
) -> Logger:
    """Configure the package logger.

    Args:
        log_file: Optional path to a JSON lines file receiving every record.
        level: Logging level applied to the package logger.
        console: Console used by the rich handler, stderr by default.

    Returns:
        The configured ``dining_table`` logger.
    """

    handler = RichHandler(console=console or Console(stderr=True), show_time=False, show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
        existing.close()
    logger.addHandler(handler)
    logger.propagate = False

    if log_file:
        directory = os.path.dirname(log_file)
        if directory:
            os.makedirs(directory, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(TableEventFormatter())
        logger.addHandler(file_handler)

    logger.debug("Logging initialised", extra={"event": "logging"})
    return logger


class TableEventFormatter(logging.Formatter):
    """Write each record as one JSON line keyed by its table event.

    Records logged with ``extra={"event": ..., "data": {...}}`` keep the
    event name, and the ``philosopher`` and ``state`` entries of ``data`` are
    lifted to the top level so a log can be filtered per seat. Remaining data
    stays under ``data``. Records without an event are tagged ``"log"``.
    """

    def format(self, record: logging.LogRecord) -> str:
        data = dict(getattr(record, "data", None) or {})
        entry: Dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created).strftime("%H:%M:%S"),
            "event": getattr(record, "event", "log"),
            "level": record.levelname,
            "message": record.getMessage(),
        }
        for key in PROMOTED_KEYS:
            if key in data:
                entry[key] = data.pop(key)
        if data:
            entry["data"] = data
        entry["thread"] = record.threadName
        if record.name.startswith(f"{LOGGER_NAME}."):
            entry["component"] = record.name[len(LOGGER_NAME) + 1 :]
        if record.exc_info:
            entry["error"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


__all__ = ["LOGGER_NAME", "PROMOTED_KEYS", "TableEventFormatter", "configure_logging"]
