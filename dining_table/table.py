"""Coordinator that seats the philosophers and waits for them to finish."""

from __future__ import annotations

import logging
import random
import threading
from typing import Dict, List, Tuple

from .clock import SimulationClock
from .config import TableConfig
from .fork import Fork
from .latch import CountdownLatch
from .ledger import TableLedger
from .models import TableReport
from .philosopher import Philosopher

LOGGER = logging.getLogger(__name__)


class SimulationTimeout(RuntimeError):
    """Raised when the philosophers do not all finish within the timeout."""


def ring_pairs(n: int) -> List[Tuple[int, int]]:
    """Return ``(left, right)`` fork indices for each seat in a ring of ``n``."""

    if n < 2:
        raise ValueError("a ring needs at least two seats")
    return [((i - 1) % n, i) for i in range(n)]


class DiningTable:
    """Build the fork ring, run every philosopher thread and aggregate timings."""

    def __init__(
        self,
        config: TableConfig | None = None,
        *,
        clock: SimulationClock | None = None,
        ledger: TableLedger | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.config = config or TableConfig()
        self.clock = clock or SimulationClock(self.config.time_scale)
        self.ledger = ledger or TableLedger(self.config.ledger_max_events)
        self._logger = logger or LOGGER
        self._lock = threading.Lock()
        self._latch = CountdownLatch(0)
        self._threads: List[threading.Thread] = []
        self.forks: List[Fork] = []
        self.philosophers: List[Philosopher] = []

    def build_ring(self, n: int | None = None) -> List[Philosopher]:
        seats = n if n is not None else self.config.seats
        self._logger.info("Initializing %d forks", seats)
        self.forks = [Fork(index + 1) for index in range(seats)]
        self._latch = CountdownLatch(seats)

        self._logger.info("Initializing %d philosophers", seats)
        self.philosophers = []
        for index, (left, right) in enumerate(ring_pairs(seats)):
            priority = index + 1
            self.philosophers.append(
                Philosopher(
                    priority,
                    self.forks[left],
                    self.forks[right],
                    table_lock=self._lock,
                    latch=self._latch,
                    clock=self.clock,
                    config=self.config,
                    rng=self._rng_for(priority),
                    ledger=self.ledger,
                )
            )
        return self.philosophers

    def _rng_for(self, priority: int) -> random.Random:
        if self.config.seed is None:
            return random.Random()
        return random.Random(self.config.seed + priority)

    def fork_users(self) -> Dict[int, List[int]]:
        """Map each fork id to the priorities of the philosophers sharing it."""

        users: Dict[int, List[int]] = {fork.fork_id: [] for fork in self.forks}
        for philosopher in self.philosophers:
            users[philosopher.left_fork.fork_id].append(philosopher.priority)
            users[philosopher.right_fork.fork_id].append(philosopher.priority)
        return {fork_id: sorted(priorities) for fork_id, priorities in users.items()}

    def run_all(self, timeout: float | None = None) -> TableReport:
        """Start every philosopher and block until all of them are done."""

        if not self.philosophers:
            self.build_ring()
        if self._threads:
            raise RuntimeError("DiningTable has already been run")

        self._threads = [
            threading.Thread(target=philosopher.run, name=philosopher.name, daemon=True)
            for philosopher in self.philosophers
        ]
        for thread in self._threads:
            thread.start()

        if not self._latch.wait(timeout):
            self.interrupt()
            self._join(timeout=1.0)
            raise SimulationTimeout(
                f"{self._latch.count} philosophers still dining after {timeout} seconds"
            )
        self._join()
        return self.aggregate_report()

    def _join(self, timeout: float | None = None) -> None:
        for thread in self._threads:
            thread.join(timeout=timeout)

    def interrupt(self) -> None:
        """Interrupt every sleeping philosopher; each one releases its forks."""

        self._logger.warning("Interrupting the table")
        self.clock.interrupt()

    def aggregate_report(self) -> TableReport:
        reports = [philosopher.report() for philosopher in self.philosophers]
        report = TableReport.aggregate(reports, contentions=self.ledger.contention_totals())
        self._logger.info(
            "Average time waiting to eat across %d philosophers: %ss",
            report.seats,
            report.global_average_wait,
            extra={"event": "report", "data": {"global_average_wait": report.global_average_wait}},
        )
        return report


def run_simulation(config: TableConfig, *, timeout: float | None = None) -> TableReport:
    """Run a full table described by ``config`` and return its report."""

    table = DiningTable(config)
    table.build_ring()
    return table.run_all(timeout=timeout)


__all__ = ["DiningTable", "SimulationTimeout", "ring_pairs", "run_simulation"]
