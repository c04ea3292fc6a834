"""Execution-context adapters.

Purpose
-------
Resolve the execution unit that is active when a fault is built or reported.
Implements :class:`lib_fault_reporter.application.ports.ExecutionContext`.

Key behaviours
--------------
* :class:`ThreadExecutionContext` reports the current ``threading`` thread.
* :class:`TaskExecutionContext` reports the running ``asyncio`` task and falls
  back to the current thread outside an event loop.
"""

from __future__ import annotations

import asyncio

from ...domain.faults import ExecutionUnit


class ThreadExecutionContext:
    """Attribute work to the thread executing the call.

    Examples
    --------
    >>> import threading
    >>> ThreadExecutionContext().current().ident == threading.get_ident()
    True
    """

    def current(self) -> ExecutionUnit:
        return ExecutionUnit.current_thread()


class TaskExecutionContext:
    """Attribute work to the running asyncio task.

    Why
    ----
    Inside an event loop every coroutine shares one thread, so the thread name
    alone cannot tell concurrent requests apart.

    What
    ----
    Returns the task name with ``id(task)`` as identifier. Outside a running
    loop the current thread is reported instead.
    """

    def current(self) -> ExecutionUnit:
        try:
            task = asyncio.current_task()
        except RuntimeError:
            task = None
        if task is None:
            return ExecutionUnit.current_thread()
        return ExecutionUnit(name=task.get_name(), ident=id(task))
