"""Repository-wide pytest configuration.

Pins the repository root on ``sys.path`` so the ``dining_table`` package
resolves without an editable install, and keeps logging and environment
configuration from leaking between tests.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from dining_table.config import CONFIG_ENV, TIME_SCALE_ENV, TableConfig
from dining_table.logging_utils import LOGGER_NAME


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch):
    """Drop config environment variables and reset the package logger."""

    monkeypatch.delenv(CONFIG_ENV, raising=False)
    monkeypatch.delenv(TIME_SCALE_ENV, raising=False)

    yield

    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def fast_config() -> TableConfig:
    """A five seat table running thousands of times faster than real time."""

    return TableConfig(seats=5, time_scale=0.0005, seed=7)
