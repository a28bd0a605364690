"""Thread-safe record of everything that happens at the table."""

from __future__ import annotations

import threading
import time
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Dict, List, Optional, Tuple

EVENT_KINDS = ("state", "take", "release", "contention", "finished", "aborted")


@dataclass(frozen=True, slots=True)
class TableEvent:
    """A single ledger entry written by a philosopher thread."""

    kind: str
    philosopher: int
    state: Optional[str] = None
    forks: Tuple[int, ...] = ()
    blocked_by: Optional[int] = None
    recorded_at: float = field(default_factory=time.monotonic)

    def to_json(self) -> Dict[str, object]:
        return {
            "kind": self.kind,
            "philosopher": self.philosopher,
            "state": self.state,
            "forks": list(self.forks),
            "blockedBy": self.blocked_by,
            "recordedAt": self.recorded_at,
        }


class TableLedger:
    """Ledger that replays fork ownership as events arrive.

    Take and release events are recorded by philosophers while they hold the
    table lock, so the ledger sees fork ownership changes in the order they
    really happened. Any take of an already held fork, or release of a fork
    owned by someone else, is kept in :attr:`violations`.

    Busy retries append a contention event on every failed attempt, so long
    runs can pass ``max_events`` to keep only the newest entries. Ownership
    replay, violations and contention counts are tracked separately and stay
    exact when older events are dropped.
    """

    def __init__(self, max_events: int | None = None) -> None:
        if max_events is not None and max_events < 1:
            raise ValueError("max_events must be positive")
        self._lock = threading.Lock()
        self._events: Deque[TableEvent] = deque(maxlen=max_events)
        self._owners: Dict[int, int] = {}
        self._holding: Dict[int, Tuple[int, ...]] = {}
        self._violations: List[str] = []
        self._contentions: Dict[int, int] = {}
        self._max_concurrent = 0
        self._adjacent_overlap = False

    def record(self, event: TableEvent) -> None:
        if event.kind not in EVENT_KINDS:
            raise ValueError(f"unknown event kind {event.kind!r}")
        with self._lock:
            self._events.append(event)
            if event.kind == "take":
                self._apply_take(event)
            elif event.kind == "release":
                self._apply_release(event)
            elif event.kind == "contention":
                self._contentions[event.philosopher] = self._contentions.get(event.philosopher, 0) + 1

    def _apply_take(self, event: TableEvent) -> None:
        # neighbours share one fork, so a shared fork means neighbours overlap
        taken = set(event.forks)
        for holder, forks in self._holding.items():
            if holder != event.philosopher and taken.intersection(forks):
                self._adjacent_overlap = True
        for fork_id in event.forks:
            owner = self._owners.get(fork_id)
            if owner is not None:
                self._violations.append(
                    f"Philosopher {event.philosopher} took Fork {fork_id} held by Philosopher {owner}"
                )
            self._owners[fork_id] = event.philosopher
        self._holding[event.philosopher] = event.forks
        self._max_concurrent = max(self._max_concurrent, len(self._holding))

    def _apply_release(self, event: TableEvent) -> None:
        for fork_id in event.forks:
            owner = self._owners.get(fork_id)
            if owner != event.philosopher:
                self._violations.append(
                    f"Philosopher {event.philosopher} released Fork {fork_id} owned by {owner}"
                )
            self._owners.pop(fork_id, None)
        self._holding.pop(event.philosopher, None)

    @property
    def events(self) -> List[TableEvent]:
        with self._lock:
            return list(self._events)

    @property
    def violations(self) -> List[str]:
        with self._lock:
            return list(self._violations)

    def adjacent_overlap(self) -> bool:
        """Return True if two neighbours were ever both holding forks."""

        with self._lock:
            return self._adjacent_overlap

    def max_concurrent_eaters(self) -> int:
        """Return the largest number of philosophers seen holding forks at once."""

        with self._lock:
            return self._max_concurrent

    def held_forks(self) -> Dict[int, int]:
        with self._lock:
            return dict(self._owners)

    def contentions_for(self, priority: int) -> int:
        with self._lock:
            return self._contentions.get(priority, 0)

    def contention_totals(self) -> Dict[int, int]:
        with self._lock:
            return dict(self._contentions)

    def fork_history(self, fork_id: int) -> List[Tuple[str, int]]:
        """Return ``(kind, philosopher)`` pairs touching ``fork_id`` in order."""

        with self._lock:
            return [
                (event.kind, event.philosopher)
                for event in self._events
                if event.kind in ("take", "release") and fork_id in event.forks
            ]

    def snapshot(self) -> List[Dict[str, object]]:
        with self._lock:
            return [event.to_json() for event in self._events]


__all__ = ["EVENT_KINDS", "TableEvent", "TableLedger"]
