"""Shared fork resource placed between two neighbouring philosophers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .philosopher import Philosopher


class Fork:
    """Passive ownership marker for a single fork.

    A fork never locks anything itself. Callers must hold the table-wide
    lock while checking and mutating the holder, and must only call
    :meth:`take` on a fork that is currently free.
    """

    def __init__(self, fork_id: int) -> None:
        self.fork_id = fork_id
        self._holder: Optional["Philosopher"] = None

    def take(self, holder: "Philosopher") -> None:
        self._holder = holder

    def release(self) -> None:
        self._holder = None

    def is_held(self) -> bool:
        return self._holder is not None

    def held_by(self) -> Optional["Philosopher"]:
        return self._holder

    def __repr__(self) -> str:
        return f"Fork(fork_id={self.fork_id}, holder={self._holder!r})"

    def __str__(self) -> str:
        return f"Fork {self.fork_id}"


__all__ = ["Fork"]
