"""Composition root for ``lib_fault_reporter``.

Purpose
-------
Wire the reporter with environment settings, the system clock and the package
logger, and offer a one-call ``report`` for code that does not manage its own
:class:`FaultReporter` instance.

Contents
--------
* :func:`build_reporter` – assemble a reporter from settings and collaborators.
* :func:`get_default_reporter` – lazily built, process-wide reporter.
* :func:`reset_default_reporter` – drop the cached reporter (tests, reconfiguration).
* :func:`report` – shortcut for ``get_default_reporter().handle(...)``.

System Role
-----------
The only place that reads the environment; everything below it receives
settings explicitly.
"""

from __future__ import annotations

import logging
import threading
from typing import Mapping

from .adapters.clock.default import SystemClock
from .application.ports import Clock, ExecutionContext
from .application.reporter import FaultReporter
from .config import ReporterSettings, load_settings
from .domain.faults import ExecutionUnit
from .domain.response import ErrorResponse
from .observability import log_debug

_DEFAULT_REPORTER: FaultReporter | None = None
_DEFAULT_LOCK = threading.Lock()


def build_reporter(
    *,
    settings: ReporterSettings | None = None,
    environ: Mapping[str, str] | None = None,
    clock: Clock | None = None,
    logger: logging.Logger | None = None,
    context: ExecutionContext | None = None,
) -> FaultReporter:
    """Return a new :class:`FaultReporter`.

    Settings are read from *environ* (``os.environ`` by default) unless passed
    explicitly. *context* decides which execution unit faults built through
    :meth:`FaultReporter.fault` and the uncaught-exception hook record; it
    defaults to the current thread.

    Examples
    --------
    >>> reporter = build_reporter(environ={"LIB_FAULT_REPORTER_TYPE_PREFIX": "https://example.org/e/"})
    >>> reporter.handle(None).type
    'https://example.org/e/generic'
    """

    resolved = settings if settings is not None else load_settings(environ)
    log_debug("reporter_built", type_prefix=resolved.type_prefix, logger_name=resolved.logger_name)
    return FaultReporter(resolved, clock=clock or SystemClock(), logger=logger, context=context)


def get_default_reporter() -> FaultReporter:
    """Return the process-wide reporter, building it on first use."""

    global _DEFAULT_REPORTER
    with _DEFAULT_LOCK:
        if _DEFAULT_REPORTER is None:
            _DEFAULT_REPORTER = build_reporter()
        return _DEFAULT_REPORTER


def reset_default_reporter() -> None:
    """Forget the cached reporter so the next call re-reads the environment."""

    global _DEFAULT_REPORTER
    with _DEFAULT_LOCK:
        _DEFAULT_REPORTER = None


def report(fault: BaseException | None, unit: ExecutionUnit | None = None) -> ErrorResponse:
    """Report *fault* through the default reporter.

    Examples
    --------
    >>> from lib_fault_reporter.domain.faults import Fault
    >>> report(Fault.invalid_input("Quantity must be positive")).type.endswith("invalid-input")
    True
    """

    return get_default_reporter().handle(fault, unit)


__all__ = [
    "build_reporter",
    "get_default_reporter",
    "reset_default_reporter",
    "report",
]
