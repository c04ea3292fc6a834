"""Clock adapters.

Purpose
-------
Supply the instant stamped on every error response. Implements
:class:`lib_fault_reporter.application.ports.Clock`.
"""

from __future__ import annotations

from datetime import datetime


class SystemClock:
    """Current wall-clock time in the system time zone.

    Examples
    --------
    >>> SystemClock().now().tzinfo is not None
    True
    """

    def now(self) -> datetime:
        return datetime.now().astimezone()


class FixedClock:
    """Always return the same instant; handy for deterministic tests and replays."""

    def __init__(self, moment: datetime) -> None:
        self._moment = moment if moment.tzinfo is not None else moment.astimezone()

    def now(self) -> datetime:
        return self._moment
