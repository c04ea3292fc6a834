"""Fault reporting: classification, severity-routed logging and response shaping.

Purpose
-------
Turn any captured exception (or ``None``) into an :class:`ErrorResponse` and a
single diagnostic log record whose level follows the fault's severity.

Contents
--------
* :data:`LOG_LEVELS` – severity to ``logging`` level table.
* :class:`FaultReporter` – the ``handle`` entry point plus interpreter hooks.

System Role
-----------
Sits at process, thread and request boundaries. It is stateless apart from its
injected collaborators, so one instance can serve every thread and task.
"""

from __future__ import annotations

import logging
import sys
import threading
import traceback
from types import MappingProxyType, TracebackType
from typing import Any, Final, Mapping

from ..adapters.clock.default import SystemClock
from ..adapters.execution.default import ThreadExecutionContext
from ..config import ReporterSettings
from ..domain.faults import ExecutionUnit, Fault, FaultKind, describe_error
from ..domain.response import ErrorResponse, derive_type, format_timestamp
from ..domain.severity import Severity
from ..observability import get_logger, log_at
from .ports import Clock, ExecutionContext

LOG_LEVELS: Final[Mapping[Severity, int]] = MappingProxyType(
    {
        Severity.WARNING: logging.WARNING,
        Severity.ERROR: logging.ERROR,
    }
)
_DEFAULT_LEVEL: Final[int] = logging.ERROR


class FaultReporter:
    """Generic fault handler usable on its own or behind a framework's error hook.

    Why
    ----
    Every boundary (web handler, worker loop, uncaught-exception hook) needs the
    same answer to "what do we log, and what do we tell the user?".

    What
    ----
    :meth:`handle` resolves the severity, logs once at the routed level, extracts
    a detail message with a single-level cause fallback, derives the type URI
    and assembles a fresh :class:`ErrorResponse`. It never raises.

    Examples
    --------
    >>> reporter = FaultReporter()
    >>> response = reporter.handle(Fault.not_found("Order 42 does not exist"))
    >>> response.type, response.title, response.detail
    ('urn:lib-fault-reporter:errors:not-found', 'Error', 'Order 42 does not exist')
    >>> reporter.handle(None).detail
    'An error has occurred but no additional details are currently available.'
    """

    def __init__(
        self,
        settings: ReporterSettings | None = None,
        *,
        clock: Clock | None = None,
        logger: logging.Logger | None = None,
        context: ExecutionContext | None = None,
    ) -> None:
        self.settings = settings or ReporterSettings()
        self.clock = clock or SystemClock()
        self.logger = logger or get_logger(self.settings.logger_name)
        self.context = context or ThreadExecutionContext()

    def fault(
        self,
        message: str | None = None,
        cause: BaseException | None = None,
        *,
        kind: FaultKind = FaultKind.GENERIC,
        severity: Severity = Severity.ERROR,
    ) -> Fault:
        """Return a new :class:`Fault` whose unit comes from the injected execution context.

        Examples
        --------
        >>> from lib_fault_reporter.adapters.execution.default import TaskExecutionContext
        >>> fault = FaultReporter(context=TaskExecutionContext()).fault("gone", kind=FaultKind.NOT_FOUND)
        >>> fault.kind, fault.unit_name == threading.current_thread().name
        (<FaultKind.NOT_FOUND: 'NotFound'>, True)
        """

        return Fault(message, cause, kind=kind, severity=severity, unit=self.context.current())

    def handle(self, fault: BaseException | None, unit: ExecutionUnit | None = None) -> ErrorResponse:
        """Classify *fault*, log it and return the matching error response.

        Parameters
        ----------
        fault:
            The captured exception. ``None`` is valid and yields a generic
            error-level response.
        unit:
            Execution unit that surfaced the fault, if known (for instance the
            thread passed to ``threading.excepthook``). Only used for logging.

        Notes
        -----
        Failures raised by the logging pipeline (filters, handlers, record
        factories, unprintable exceptions) are written to ``sys.stderr`` the
        way ``logging.Handler.handleError`` does and never reach the caller.
        """

        severity = resolve_severity(fault)
        response = ErrorResponse(
            type=derive_type(fault.kind if isinstance(fault, Fault) else None, prefix=self.settings.type_prefix),
            title=severity.display_label,
            detail=extract_detail(fault) or self.settings.fallback_detail,
            timestamp=format_timestamp(self.clock.now()),
            severity=severity,
        )
        try:
            self._log(fault, severity, unit)
        except Exception:  # noqa: BLE001 - the response must survive a broken logging setup
            _report_logging_failure()
        return response

    def excepthook(
        self,
        exc_type: type[BaseException],
        exc: BaseException,
        tb: TracebackType | None,
    ) -> None:
        """``sys.excepthook`` compatible entry point."""

        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc, tb)
            return
        self.handle(exc, self.context.current())

    def threading_excepthook(self, args: threading.ExceptHookArgs) -> None:
        """``threading.excepthook`` compatible entry point."""

        unit = ExecutionUnit.of_thread(args.thread) if args.thread is not None else None
        self.handle(args.exc_value, unit)

    def install(self) -> FaultReporter:
        """Route uncaught exceptions of the main thread and of worker threads to :meth:`handle`."""

        sys.excepthook = self.excepthook
        threading.excepthook = self.threading_excepthook
        return self

    def _log(self, fault: BaseException | None, severity: Severity, unit: ExecutionUnit | None) -> None:
        if fault is None:
            log_at(logging.ERROR, "fault_missing", logger=self.logger, **_unit_fields(unit))
            return
        level = LOG_LEVELS.get(severity, _DEFAULT_LEVEL)
        fields: dict[str, Any] = fault.to_dict() if isinstance(fault, Fault) else _foreign_fields(fault)
        fields.update(_unit_fields(unit))
        log_at(level, "fault_reported", logger=self.logger, exc_info=fault, **fields)


def resolve_severity(fault: BaseException | None) -> Severity:
    """Return the declared severity of a :class:`Fault`, ``ERROR`` for anything else.

    Examples
    --------
    >>> resolve_severity(Fault().set_severity(Severity.WARNING))
    <Severity.WARNING: 'WARNING'>
    >>> resolve_severity(ValueError("boom"))
    <Severity.ERROR: 'ERROR'>
    """

    if isinstance(fault, Fault) and isinstance(fault.severity, Severity):
        return fault.severity
    return Severity.ERROR


def extract_detail(fault: BaseException | None) -> str | None:
    """Return the first non-blank message of *fault* or of its immediate cause.

    Only one level of the cause chain is inspected.

    Examples
    --------
    >>> extract_detail(Fault(cause=OSError("disk full")))
    'disk full'
    >>> extract_detail(Fault("", Fault(cause=OSError("deep")))) is None
    True
    """

    if fault is None:
        return None
    detail = message_of(fault)
    if detail is None:
        detail = message_of(fault.__cause__)
    return detail


def message_of(error: BaseException | None) -> str | None:
    """Return the human message of *error*, or ``None`` when it is blank or absent."""

    if error is None:
        return None
    if isinstance(error, Fault):
        text = error.message
    elif not error.args:
        return None
    else:
        try:
            text = str(error)
        except Exception:  # noqa: BLE001 - an unprintable error has no usable message
            return None
    if not isinstance(text, str) or not text.strip():
        return None
    return text


def _foreign_fields(error: BaseException) -> dict[str, Any]:
    cause = error.__cause__
    return {
        "kind": None,
        "severity": Severity.ERROR.display_label,
        "message": message_of(error),
        "cause": describe_error(cause),
        "error_type": f"{type(error).__module__}.{type(error).__qualname__}",
    }


def _unit_fields(unit: ExecutionUnit | None) -> dict[str, Any]:
    if unit is None:
        return {}
    return {"reported_on": unit.name, "reported_on_id": unit.ident}


def _report_logging_failure() -> None:
    if logging.raiseExceptions and sys.stderr:
        sys.stderr.write("--- Fault reporter logging error ---\n")
        traceback.print_exc(file=sys.stderr)
