"""Countdown latch used to wait for every philosopher to finish."""

from __future__ import annotations

import threading


class CountdownLatch:
    """Block waiters until :meth:`count_down` has been called ``count`` times."""

    def __init__(self, count: int) -> None:
        if count < 0:
            raise ValueError("count cannot be negative")
        self._count = count
        self._condition = threading.Condition()

    @property
    def count(self) -> int:
        with self._condition:
            return self._count

    def count_down(self) -> None:
        with self._condition:
            if self._count == 0:
                return
            self._count -= 1
            if self._count == 0:
                self._condition.notify_all()

    def wait(self, timeout: float | None = None) -> bool:
        """Wait for the count to reach zero.

        Returns ``False`` when ``timeout`` expires first.
        """

        with self._condition:
            return self._condition.wait_for(lambda: self._count == 0, timeout=timeout)


__all__ = ["CountdownLatch"]
