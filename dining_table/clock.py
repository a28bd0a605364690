"""Interruptible sleeping in simulated seconds."""

from __future__ import annotations

import threading
from datetime import datetime


class SleepInterrupted(RuntimeError):
    """Raised inside a philosopher thread when its sleep is interrupted."""


class SimulationClock:
    """Convert simulated seconds to wall-clock waits.

    ``time_scale`` is the number of real seconds per simulated second, so a
    scale of ``0.01`` runs the table a hundred times faster. All sleeps wait on
    a shared stop event: once :meth:`interrupt` is called every pending and
    future sleep raises :class:`SleepInterrupted`.
    """

    def __init__(self, time_scale: float = 1.0) -> None:
        if time_scale < 0:
            raise ValueError("time_scale cannot be negative")
        self.time_scale = time_scale
        self._stop_event = threading.Event()

    @property
    def interrupted(self) -> bool:
        return self._stop_event.is_set()

    def sleep(self, seconds: float) -> None:
        if self._stop_event.wait(seconds * self.time_scale):
            raise SleepInterrupted(f"sleep of {seconds}s interrupted")

    def interrupt(self) -> None:
        self._stop_event.set()

    @staticmethod
    def timestamp() -> str:
        return datetime.now().strftime("%H:%M:%S")


__all__ = ["SimulationClock", "SleepInterrupted"]
