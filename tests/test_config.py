from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from dining_table.config import (
    CONFIG_ENV,
    TIME_SCALE_ENV,
    ConfigError,
    InvalidSeatCount,
    TableConfig,
    configured_seats,
    load_config,
    parse_seat_count,
)


def test_defaults_match_the_classic_table() -> None:
    config = TableConfig()
    assert config.seats == 5
    assert config.eat_target_seconds == 20
    assert config.think_seconds == (1, 10)
    assert config.hungry_seconds == (1, 3)
    assert config.time_scale == 1.0
    assert config.seed is None


@pytest.mark.parametrize("raw, expected", [("3", 3), ("10", 10), (" 7 ", 7), (4, 4)])
def test_parse_seat_count_accepts_bounds(raw: object, expected: int) -> None:
    assert parse_seat_count(raw) == expected


@pytest.mark.parametrize("raw", ["2", "11", "0", "-4"])
def test_parse_seat_count_rejects_out_of_range(raw: str) -> None:
    with pytest.raises(InvalidSeatCount, match="between 3 and 10"):
        parse_seat_count(raw)


@pytest.mark.parametrize("raw", ["abc", "", "4.5"])
def test_parse_seat_count_rejects_non_numeric(raw: str) -> None:
    with pytest.raises(InvalidSeatCount, match="Invalid input"):
        parse_seat_count(raw)


@pytest.mark.parametrize("seats", [2, 11])
def test_model_rejects_out_of_range_seats(seats: int) -> None:
    with pytest.raises(ValidationError):
        TableConfig(seats=seats)


def test_model_rejects_inverted_range() -> None:
    with pytest.raises(ValidationError):
        TableConfig(think_seconds=(5, 2))
    with pytest.raises(ValidationError):
        TableConfig(hungry_seconds=(-1, 2))


def test_model_rejects_unknown_keys() -> None:
    with pytest.raises(ValidationError):
        TableConfig.model_validate({"seats": 4, "waiter": True})


def test_load_reads_yaml(tmp_path: Path) -> None:
    config_path = tmp_path / "table.yaml"
    config_path.write_text(
        """
seats: 7
eat_target_seconds: 12
think_seconds: [2, 4]
hungry_seconds: [1, 1]
time_scale: 0.01
seed: 99
""",
        encoding="utf-8",
    )
    config = TableConfig.load(config_path)
    assert config.seats == 7
    assert config.eat_target_seconds == 12
    assert config.think_seconds == (2, 4)
    assert config.hungry_seconds == (1, 1)
    assert config.seed == 99


def test_example_config_is_valid() -> None:
    example = Path(__file__).resolve().parents[1] / "config" / "table.example.yaml"
    config = TableConfig.load(example)
    assert config.seats == 5
    assert config.log_file == "logs/dining-table.jsonl"


def test_load_missing_file_raises_config_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        TableConfig.load(tmp_path / "missing.yaml")


def test_load_rejects_non_mapping(tmp_path: Path) -> None:
    config_path = tmp_path / "table.yaml"
    config_path.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        TableConfig.load(config_path)


def test_load_config_layers_env_and_overrides(tmp_path: Path, monkeypatch) -> None:
    config_path = tmp_path / "table.yaml"
    config_path.write_text("seats: 6\ntime_scale: 2.0\n", encoding="utf-8")
    monkeypatch.setenv(CONFIG_ENV, str(config_path))
    monkeypatch.setenv(TIME_SCALE_ENV, "0.25")

    config = load_config()
    assert config.seats == 6
    assert config.time_scale == 0.25

    overridden = load_config(seats=3, seed=None, time_scale=0.0)
    assert overridden.seats == 3
    assert overridden.time_scale == 0.0
    assert overridden.seed is None


def test_load_config_rejects_bad_time_scale_env(monkeypatch) -> None:
    monkeypatch.setenv(TIME_SCALE_ENV, "fast")
    with pytest.raises(ConfigError):
        load_config()


def test_load_config_without_sources_uses_defaults() -> None:
    assert load_config() == TableConfig()


def test_override_replaces_invalid_file_seats(tmp_path: Path) -> None:
    config_path = tmp_path / "table.yaml"
    config_path.write_text("seats: 2\n", encoding="utf-8")
    assert load_config(config_path, seats=4).seats == 4
    with pytest.raises(ValidationError):
        load_config(config_path)


def test_configured_seats_reads_file_or_env(tmp_path: Path, monkeypatch) -> None:
    config_path = tmp_path / "table.yaml"
    config_path.write_text("seats: 8\n", encoding="utf-8")
    assert configured_seats() is None
    assert configured_seats(config_path) == 8

    monkeypatch.setenv(CONFIG_ENV, str(config_path))
    assert configured_seats() == 8

    config_path.write_text("time_scale: 0.5\n", encoding="utf-8")
    assert configured_seats() is None


def test_ledger_cap_must_be_positive() -> None:
    assert TableConfig(ledger_max_events=50).ledger_max_events == 50
    with pytest.raises(ValidationError):
        TableConfig(ledger_max_events=0)
