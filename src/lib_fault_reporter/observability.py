"""Structured logging helpers shared by the reporter and the CLI.

Purpose
    Keep every diagnostic record predictable and contextual without forcing
    applications to adopt a specific logging backend.

Contents
    - ``TRACE_ID``: context variable storing the active trace identifier.
    - ``get_logger`` / ``set_level``: access and tune the package logger.
    - ``bind_trace_id``: binds or clears the active trace identifier.
    - ``log_debug`` / ``log_info`` / ``log_warning`` / ``log_error`` /
      ``log_at``: emit structured entries via a single private emitter.

System Integration
    :class:`lib_fault_reporter.application.reporter.FaultReporter` routes every
    reported fault through :func:`log_at`; host applications attach handlers
    to the logger returned by :func:`get_logger`.
"""

from __future__ import annotations

import logging
from contextvars import ContextVar
from typing import Any, Final, Mapping

PACKAGE_LOGGER_NAME: Final[str] = "lib_fault_reporter"

TRACE_ID: ContextVar[str | None] = ContextVar("lib_fault_reporter_trace_id", default=None)
"""Current trace identifier propagated through logging helpers."""

_LOGGER: Final[logging.Logger] = logging.getLogger(PACKAGE_LOGGER_NAME)
_LOGGER.addHandler(logging.NullHandler())


def get_logger(name: str | None = None) -> logging.Logger:
    """Expose the package logger (or a named logger) so applications may attach handlers.

    Why
        Leaves the library silent by default while giving host applications full
        control over handler and formatter configuration.
    """

    if name is None or name == PACKAGE_LOGGER_NAME:
        return _LOGGER
    return logging.getLogger(name)


def set_level(level: int | str, name: str | None = None) -> None:
    """Set the level of the package logger, or of *name* when given.

    Level names are case-insensitive; unknown names fall back to ``INFO``.

    Examples
    --------
    >>> set_level("debug")
    >>> get_logger().level == logging.DEBUG
    True
    >>> set_level(logging.NOTSET)
    """

    if isinstance(level, str):
        resolved = logging.getLevelName(level.strip().upper())
        level = resolved if isinstance(resolved, int) else logging.INFO
    get_logger(name).setLevel(level)


def bind_trace_id(trace_id: str | None) -> None:
    """Bind or clear the active trace identifier.

    Why
        Correlates fault reports with external trace spans or request ids.
    Side Effects
        Mutates the context variable visible to subsequent logging helpers.

    Examples
    --------
    >>> bind_trace_id('abc123')
    >>> TRACE_ID.get()
    'abc123'
    >>> bind_trace_id(None)
    >>> TRACE_ID.get() is None
    True
    """

    TRACE_ID.set(trace_id)


def log_debug(message: str, **fields: Any) -> None:
    """Emit a structured debug log entry that includes the trace context."""

    _emit(_LOGGER, logging.DEBUG, message, fields)


def log_info(message: str, **fields: Any) -> None:
    """Emit a structured info log entry that includes the trace context."""

    _emit(_LOGGER, logging.INFO, message, fields)


def log_warning(message: str, **fields: Any) -> None:
    """Emit a structured warning log entry that includes the trace context."""

    _emit(_LOGGER, logging.WARNING, message, fields)


def log_error(message: str, **fields: Any) -> None:
    """Emit a structured error log entry that includes the trace context."""

    _emit(_LOGGER, logging.ERROR, message, fields)


def log_at(
    level: int,
    message: str,
    *,
    logger: logging.Logger | None = None,
    exc_info: BaseException | None = None,
    **fields: Any,
) -> None:
    """Emit a structured entry at *level*, optionally attaching an exception.

    Why
        Severity-routed reporting picks the level at runtime and needs the full
        traceback and cause chain of the fault on the record.
    """

    _emit(logger or _LOGGER, level, message, fields, exc_info=exc_info)


def _emit(
    logger: logging.Logger,
    level: int,
    message: str,
    fields: Mapping[str, Any],
    *,
    exc_info: BaseException | None = None,
) -> None:
    """Send a log entry through *logger* with contextual metadata."""

    logger.log(level, message, exc_info=exc_info, extra={"context": _with_trace(fields)})


def _with_trace(fields: Mapping[str, Any]) -> dict[str, Any]:
    """Attach the current trace identifier to the provided structured fields."""

    context = {"trace_id": TRACE_ID.get()}
    context.update(fields)
    return context
