"""Report models produced once every philosopher has left the table."""

from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, Field
from rich.console import Console
from rich.table import Table


class PhilosopherReport(BaseModel):
    """Final timing counters for one philosopher."""

    priority: int = Field(..., ge=1)
    seconds_eaten: int = Field(0, ge=0)
    eat_attempts: int = Field(0, ge=0)
    seconds_waiting: int = Field(0, ge=0)
    average_wait: float = Field(0.0, ge=0)
    finished: bool = False
    aborted: bool = False

    @property
    def name(self) -> str:
        return f"Philosopher {self.priority}"


class TableReport(BaseModel):
    """Table-wide aggregate of every philosopher report."""

    seats: int
    philosophers: List[PhilosopherReport] = Field(default_factory=list)
    global_average_wait: float = 0.0
    contentions: Dict[int, int] = Field(default_factory=dict)

    @classmethod
    def aggregate(
        cls,
        reports: List[PhilosopherReport],
        *,
        contentions: Dict[int, int] | None = None,
    ) -> "TableReport":
        """Average the individual waits without weighting by attempt count."""

        average = sum(report.average_wait for report in reports) / len(reports) if reports else 0.0
        return cls(
            seats=len(reports),
            philosophers=list(reports),
            global_average_wait=average,
            contentions=dict(contentions or {}),
        )

    @property
    def all_finished(self) -> bool:
        return all(report.finished for report in self.philosophers)

    def render(self, console: Console) -> None:
        for report in self.philosophers:
            console.print(f"--- {report.name} Report ---")
            console.print(f"Average time waiting to eat: {report.average_wait}s")

        table = Table(title="Dining Table Summary")
        table.add_column("Philosopher", justify="right")
        table.add_column("Eaten (s)", justify="right")
        table.add_column("Failed attempts", justify="right")
        table.add_column("Waiting (s)", justify="right")
        table.add_column("Average wait (s)", justify="right")
        table.add_column("Status")
        for report in self.philosophers:
            status = "aborted" if report.aborted else "finished" if report.finished else "running"
            table.add_row(
                str(report.priority),
                str(report.seconds_eaten),
                str(report.eat_attempts),
                str(report.seconds_waiting),
                f"{report.average_wait:.2f}",
                status,
            )
        console.print(table)

        console.print("--- Global Report ---")
        console.print(f"Average time waiting to eat: {self.global_average_wait}s")


__all__ = ["PhilosopherReport", "TableReport"]
