"""Configuration models and helpers for the dining table simulation."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

MIN_SEATS = 3
MAX_SEATS = 10

CONFIG_ENV = "DINING_TABLE_CONFIG"
TIME_SCALE_ENV = "DINING_TABLE_TIME_SCALE"


class ConfigError(RuntimeError):
    """Raised when a configuration file cannot be read."""


class InvalidSeatCount(ValueError):
    """Raised when the operator asks for an unsupported number of seats."""


class TableConfig(BaseModel):
    """Runtime configuration for :class:`~dining_table.table.DiningTable`.

    Durations are expressed in simulated seconds. ``time_scale`` converts
    them to wall-clock seconds, which lets tests run a full table in a few
    hundred milliseconds.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    seats: int = Field(5, ge=MIN_SEATS, le=MAX_SEATS)
    eat_target_seconds: int = Field(20, ge=1)
    think_seconds: Tuple[int, int] = (1, 10)
    hungry_seconds: Tuple[int, int] = (1, 3)
    time_scale: float = Field(1.0, ge=0)
    seed: Optional[int] = None
    log_file: Optional[str] = None
    ledger_max_events: Optional[int] = Field(None, ge=1)

    @field_validator("think_seconds", "hungry_seconds")
    @classmethod
    def ensure_range(cls, value: Tuple[int, int]) -> Tuple[int, int]:
        low, high = value
        if low < 0:
            raise ValueError("duration ranges cannot start below zero")
        if low > high:
            raise ValueError("duration range minimum must not exceed its maximum")
        return value

    @classmethod
    def load(cls, path: Path | str) -> "TableConfig":
        return cls.model_validate(read_config_file(path))


def read_config_file(path: Path | str) -> Dict[str, Any]:
    """Return the raw mapping stored in a YAML configuration file."""

    file_path = Path(path)
    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Unable to read configuration {file_path}: {exc}") from exc
    data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ConfigError("table configuration must be a mapping")
    return data


def configured_seats(path: Path | str | None = None) -> Optional[object]:
    """Return the unvalidated ``seats`` entry of the active config file, if any."""

    source = path or os.getenv(CONFIG_ENV)
    if not source:
        return None
    return read_config_file(source).get("seats")


def load_config(path: Path | str | None = None, **overrides: Any) -> TableConfig:
    """Build a config from YAML, environment, and explicit overrides.

    The file path falls back to ``DINING_TABLE_CONFIG``; without either the
    defaults are used. ``DINING_TABLE_TIME_SCALE`` replaces ``time_scale``.
    Keyword overrides set to ``None`` are ignored. The merged mapping is
    validated once, so an override can replace an invalid file value.
    """

    source = path or os.getenv(CONFIG_ENV)
    data: Dict[str, Any] = read_config_file(source) if source else {}

    raw_scale = os.getenv(TIME_SCALE_ENV)
    if raw_scale:
        try:
            data["time_scale"] = float(raw_scale)
        except ValueError as exc:
            raise ConfigError(f"{TIME_SCALE_ENV} must be a number, got {raw_scale!r}") from exc

    data.update({key: value for key, value in overrides.items() if value is not None})
    return TableConfig.model_validate(data)


def parse_seat_count(raw: object) -> int:
    """Validate operator input for the number of philosophers."""

    text = str(raw).strip()
    try:
        seats = int(text)
    except ValueError as exc:
        raise InvalidSeatCount("Invalid input") from exc
    if seats < MIN_SEATS or seats > MAX_SEATS:
        raise InvalidSeatCount(f"Please enter a positive integer between {MIN_SEATS} and {MAX_SEATS}.")
    return seats


__all__ = [
    "CONFIG_ENV",
    "ConfigError",
    "InvalidSeatCount",
    "MAX_SEATS",
    "MIN_SEATS",
    "TIME_SCALE_ENV",
    "TableConfig",
    "configured_seats",
    "load_config",
    "read_config_file",
    "parse_seat_count",
]
