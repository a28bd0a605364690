"""Philosopher actor cycling between thinking, hunger and eating."""

from __future__ import annotations

import logging
import random
import threading
from enum import Enum
from typing import Optional

from .clock import SimulationClock, SleepInterrupted
from .config import TableConfig
from .fork import Fork
from .latch import CountdownLatch
from .ledger import TableEvent, TableLedger
from .models import PhilosopherReport

LOGGER = logging.getLogger(__name__)


class PhilosopherState(str, Enum):
    """Lifecycle states of a philosopher."""

    THINKING = "THINKING"
    HUNGRY = "HUNGRY"
    EATING = "EATING"


class Philosopher:
    """A seat at the table, meant to be run by its own thread.

    Fork state is only read or written while holding ``table_lock``, the
    single lock shared by every philosopher at the table. The timing counters
    belong to this philosopher alone and are only read by the coordinator
    once the completion latch has been signalled.
    """

    def __init__(
        self,
        priority: int,
        left_fork: Fork,
        right_fork: Fork,
        *,
        table_lock: threading.Lock,
        latch: CountdownLatch,
        clock: SimulationClock,
        config: TableConfig,
        rng: random.Random | None = None,
        ledger: TableLedger | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        if priority < 1:
            raise ValueError("priority must be positive")
        self.priority = priority
        self.left_fork = left_fork
        self.right_fork = right_fork
        self._table_lock = table_lock
        self._latch = latch
        self._clock = clock
        self._config = config
        self._rng = rng or random.Random()
        self._ledger = ledger
        self._logger = logger or LOGGER
        self._signalled = False

        self.state = PhilosopherState.THINKING
        self.seconds_eaten = 0
        self.eat_attempts = 0
        self.seconds_waiting = 0
        self.finished = False
        self.aborted = False

    @property
    def name(self) -> str:
        return f"Philosopher {self.priority}"

    def __repr__(self) -> str:
        return f"Philosopher(priority={self.priority}, state={self.state.value})"

    def run(self) -> None:
        """Thread entry point; always signals the latch exactly once."""

        try:
            self._dine()
        except SleepInterrupted as exc:
            self.aborted = True
            self._logger.warning("%s stopped: %s", self.name, exc, extra={"event": "aborted"})
            self._record("aborted")
        finally:
            self._signal_completion()

    def _dine(self) -> None:
        while True:
            self._update_state(PhilosopherState.THINKING)
            if self.seconds_eaten >= self._config.eat_target_seconds:
                self.finished = True
                self._logger.info("%s has finished!", self.name, extra={"event": "finished"})
                self._record("finished")
                return

            self._clock.sleep(self._rng.randint(*self._config.think_seconds))

            retry = False
            while True:
                self._update_state(PhilosopherState.HUNGRY)
                pause = self._rng.randint(*self._config.hungry_seconds)
                self._clock.sleep(pause)
                if retry:
                    self.eat_attempts += 1
                    self.seconds_waiting += pause
                if self._try_take_forks():
                    break
                retry = True

            self._eat()

    def _try_take_forks(self) -> bool:
        with self._table_lock:
            blocked = self._blocking_fork()
            if blocked is not None:
                holder = blocked.held_by()
                holder_name = holder.name if holder is not None else "unknown"
                self._logger.info(
                    "%s failed to take %s because %s is eating.",
                    self.name,
                    blocked,
                    holder_name,
                    extra={
                        "event": "contention",
                        "data": {"philosopher": self.priority, "fork": blocked.fork_id},
                    },
                )
                self._record(
                    "contention",
                    forks=(blocked.fork_id,),
                    blocked_by=holder.priority if holder is not None else None,
                )
                return False

            self._update_state(PhilosopherState.EATING)
            self.left_fork.take(self)
            self.right_fork.take(self)
            self._record("take", forks=(self.left_fork.fork_id, self.right_fork.fork_id))
            return True

    def _blocking_fork(self) -> Optional[Fork]:
        if self.left_fork.is_held():
            return self.left_fork
        if self.right_fork.is_held():
            return self.right_fork
        return None

    def _eat(self) -> None:
        try:
            self._clock.sleep(self.priority)
            self.seconds_eaten += self.priority
        finally:
            with self._table_lock:
                self.left_fork.release()
                self.right_fork.release()
                self._record("release", forks=(self.left_fork.fork_id, self.right_fork.fork_id))

    def _update_state(self, state: PhilosopherState) -> None:
        self.state = state
        self._logger.info(
            "%s is %s at time %s",
            self.name,
            state.value,
            self._clock.timestamp(),
            extra={"event": "state", "data": {"philosopher": self.priority, "state": state.value}},
        )
        self._record("state", state=state.value)

    def _record(self, kind: str, **fields: object) -> None:
        if self._ledger is not None:
            self._ledger.record(TableEvent(kind=kind, philosopher=self.priority, **fields))

    def _signal_completion(self) -> None:
        if not self._signalled:
            self._signalled = True
            self._latch.count_down()

    def final_report(self) -> float:
        """Return the average simulated seconds waited per failed attempt."""

        if self.eat_attempts > 0:
            return self.seconds_waiting / self.eat_attempts
        return 0.0

    def report(self) -> PhilosopherReport:
        return PhilosopherReport(
            priority=self.priority,
            seconds_eaten=self.seconds_eaten,
            eat_attempts=self.eat_attempts,
            seconds_waiting=self.seconds_waiting,
            average_wait=self.final_report(),
            finished=self.finished,
            aborted=self.aborted,
        )


__all__ = ["Philosopher", "PhilosopherState"]
