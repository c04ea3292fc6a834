"""Application-layer ports describing collaborator responsibilities.

Purpose
-------
Define the structural contracts the reporter depends on so the composition root
can swap implementations (threads vs. asyncio tasks, frozen clocks in tests)
without touching the reporting logic.

Contents
--------
* :class:`ExecutionContext` – supplies the currently running execution unit.
* :class:`Clock` – supplies the current, time-zone aware instant.

System Role
-----------
These protocols enforce Dependency Inversion. Each adapter under
:mod:`lib_fault_reporter.adapters` implements one protocol.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol, runtime_checkable

from ..domain.faults import ExecutionUnit


@runtime_checkable
class ExecutionContext(Protocol):
    """Identify the concurrent unit of work executing right now.

    Why
    ----
    Faults and log records are attributed to the thread or task that produced
    them; how that unit is discovered depends on the concurrency model.
    """

    def current(self) -> ExecutionUnit:
        """Return the execution unit active at call time."""


@runtime_checkable
class Clock(Protocol):
    """Provide the current instant for response timestamps."""

    def now(self) -> datetime:
        """Return an aware ``datetime`` in the zone timestamps should be rendered in."""
