from __future__ import annotations

import json

import pytest
from rich.console import Console

from dining_table.models import PhilosopherReport, TableReport


def _reports() -> list[PhilosopherReport]:
    return [
        PhilosopherReport(priority=1, seconds_eaten=20, eat_attempts=3, seconds_waiting=6, average_wait=2.0, finished=True),
        PhilosopherReport(priority=2, seconds_eaten=20, eat_attempts=0, seconds_waiting=0, average_wait=0.0, finished=True),
        PhilosopherReport(priority=3, seconds_eaten=21, eat_attempts=1, seconds_waiting=4, average_wait=4.0, finished=True),
    ]


def test_global_average_is_unweighted() -> None:
    report = TableReport.aggregate(_reports())
    # weighting by attempts would give 10 / 4 = 2.5
    assert report.global_average_wait == pytest.approx(2.0)
    assert report.seats == 3
    assert report.all_finished


def test_aggregate_of_nothing_is_zero() -> None:
    report = TableReport.aggregate([])
    assert report.global_average_wait == 0.0
    assert report.seats == 0


def test_render_prints_individual_and_global_lines() -> None:
    console = Console(record=True, width=120)
    TableReport.aggregate(_reports(), contentions={1: 3, 3: 1}).render(console)

    text = console.export_text()
    assert "--- Philosopher 1 Report ---" in text
    assert "Average time waiting to eat: 2.0s" in text
    assert "--- Global Report ---" in text
    assert "Dining Table Summary" in text


def test_report_serialises_to_json() -> None:
    report = TableReport.aggregate(_reports(), contentions={1: 3})
    payload = json.loads(report.model_dump_json())
    assert payload["seats"] == 3
    assert payload["philosophers"][0]["average_wait"] == 2.0
    assert payload["contentions"] == {"1": 3}
