"""Dining philosophers simulation.

This package exposes the :class:`~dining_table.table.DiningTable` coordinator
alongside the :class:`~dining_table.fork.Fork` and
:class:`~dining_table.philosopher.Philosopher` building blocks and the report
models produced when a run completes.
"""

from .clock import SimulationClock, SleepInterrupted
from .config import ConfigError, InvalidSeatCount, TableConfig, load_config, parse_seat_count
from .fork import Fork
from .latch import CountdownLatch
from .ledger import TableEvent, TableLedger
from .models import PhilosopherReport, TableReport
from .philosopher import Philosopher, PhilosopherState
from .table import DiningTable, SimulationTimeout, ring_pairs, run_simulation

__all__ = [
    "ConfigError",
    "CountdownLatch",
    "DiningTable",
    "Fork",
    "InvalidSeatCount",
    "Philosopher",
    "PhilosopherReport",
    "PhilosopherState",
    "SimulationClock",
    "SimulationTimeout",
    "SleepInterrupted",
    "TableConfig",
    "TableEvent",
    "TableLedger",
    "TableReport",
    "load_config",
    "parse_seat_count",
    "ring_pairs",
    "run_simulation",
]
