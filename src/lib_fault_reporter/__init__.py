"""Public package surface of ``lib_fault_reporter``.

Exports the fault taxonomy, the error-response record, the reporter and the
logging helpers so both ``import lib_fault_reporter`` and
``python -m lib_fault_reporter`` flows reach the same objects.
"""

from __future__ import annotations

from .adapters.clock.default import FixedClock, SystemClock
from .adapters.execution.default import TaskExecutionContext, ThreadExecutionContext
from .application.reporter import LOG_LEVELS, FaultReporter, extract_detail, resolve_severity
from .config import ReporterSettings, default_env_prefix, load_settings
from .core import build_reporter, get_default_reporter, report, reset_default_reporter
from .domain.faults import ExecutionUnit, Fault, FaultKind
from .domain.response import (
    GENERIC_TYPE,
    NO_DETAILS_AVAILABLE,
    TYPE_PREFIX,
    ErrorResponse,
    derive_type,
    split_camel_case,
)
from .domain.severity import Severity
from .observability import bind_trace_id, get_logger, set_level
from .testing import i_should_fail

__all__ = [
    "ErrorResponse",
    "ExecutionUnit",
    "Fault",
    "FaultKind",
    "FaultReporter",
    "FixedClock",
    "GENERIC_TYPE",
    "LOG_LEVELS",
    "NO_DETAILS_AVAILABLE",
    "ReporterSettings",
    "Severity",
    "SystemClock",
    "TYPE_PREFIX",
    "TaskExecutionContext",
    "ThreadExecutionContext",
    "bind_trace_id",
    "build_reporter",
    "default_env_prefix",
    "derive_type",
    "extract_detail",
    "get_default_reporter",
    "get_logger",
    "i_should_fail",
    "load_settings",
    "report",
    "reset_default_reporter",
    "resolve_severity",
    "set_level",
    "split_camel_case",
]
