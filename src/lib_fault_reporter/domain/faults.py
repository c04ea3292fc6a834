"""Domain-level fault taxonomy.

Purpose
-------
Expose the one exception type application code raises to signal a failure that
should end up in front of a user, tagged with the kind of failure so the
reporter can classify it without walking a class hierarchy.

Contents
--------
* :class:`FaultKind` – closed set of variants (``Generic``, ``InvalidInput``,
  ``NotFound``, ``Forbidden``).
* :class:`ExecutionUnit` – identity of the thread or task a fault was raised on.
* :class:`Fault` – raisable fault value carrying kind, severity, message, cause
  and capture-time execution unit.

System Role
-----------
Domain and service code raise :class:`Fault` deep inside business logic; the
faults propagate unchanged to a boundary where
:class:`lib_fault_reporter.application.reporter.FaultReporter` consumes them
exactly once.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .severity import Severity


class FaultKind(Enum):
    """Variants of :class:`Fault`; the value is the short kind name used for type URIs.

    Pick ``INVALID_INPUT`` for malformed caller input, ``NOT_FOUND`` for missing
    referenced entities, ``FORBIDDEN`` for authorisation denials and ``GENERIC``
    for anything else.
    """

    GENERIC = "Generic"
    INVALID_INPUT = "InvalidInput"
    NOT_FOUND = "NotFound"
    FORBIDDEN = "Forbidden"


@dataclass(frozen=True, slots=True)
class ExecutionUnit:
    """Name and numeric identifier of a concurrent unit of work.

    Examples
    --------
    >>> unit = ExecutionUnit.of_thread(threading.main_thread())
    >>> unit.name
    'MainThread'
    """

    name: str
    ident: int

    @classmethod
    def of_thread(cls, thread: threading.Thread) -> ExecutionUnit:
        return cls(name=thread.name, ident=thread.ident or 0)

    @classmethod
    def current_thread(cls) -> ExecutionUnit:
        """Return the unit for the thread executing the call."""

        return cls.of_thread(threading.current_thread())


class Fault(Exception):
    """Convenient application fault to "raise and forget", at whatever level.

    Why
    ----
    Most failures need no dedicated exception class; the kind tag is enough for
    consumers to map the fault (for instance to an HTTP status) while the
    message stays concise and meaningful to the end user.

    What
    ----
    Supports four construction shapes, identical for every kind::

        Fault()
        Fault("Order 42 does not exist")
        Fault(cause=exc)
        Fault("Order 42 does not exist", exc)

    The cause is stored as ``__cause__``, so ``raise Fault(...) from exc`` is
    equivalent to passing it explicitly. The execution unit is captured once,
    from ``unit`` when given and from the current thread otherwise.

    Examples
    --------
    >>> fault = Fault.not_found("Order 42 does not exist")
    >>> fault.kind, fault.severity
    (<FaultKind.NOT_FOUND: 'NotFound'>, <Severity.ERROR: 'ERROR'>)
    >>> fault.set_severity(Severity.WARNING) is fault
    True
    """

    def __init__(
        self,
        message: str | None = None,
        cause: BaseException | None = None,
        *,
        kind: FaultKind = FaultKind.GENERIC,
        severity: Severity = Severity.ERROR,
        unit: ExecutionUnit | None = None,
    ) -> None:
        super().__init__(*((message,) if message is not None else ()))
        self.message = message
        self.kind = kind
        self.severity = severity
        if cause is not None:
            self.__cause__ = cause
        captured = unit if unit is not None else ExecutionUnit.current_thread()
        self.unit_name = captured.name
        self.unit_id = captured.ident

    @classmethod
    def generic(cls, message: str | None = None, cause: BaseException | None = None, **kwargs: Any) -> Fault:
        return cls(message, cause, kind=FaultKind.GENERIC, **kwargs)

    @classmethod
    def invalid_input(cls, message: str | None = None, cause: BaseException | None = None, **kwargs: Any) -> Fault:
        return cls(message, cause, kind=FaultKind.INVALID_INPUT, **kwargs)

    @classmethod
    def not_found(cls, message: str | None = None, cause: BaseException | None = None, **kwargs: Any) -> Fault:
        return cls(message, cause, kind=FaultKind.NOT_FOUND, **kwargs)

    @classmethod
    def forbidden(cls, message: str | None = None, cause: BaseException | None = None, **kwargs: Any) -> Fault:
        return cls(message, cause, kind=FaultKind.FORBIDDEN, **kwargs)

    @property
    def cause(self) -> BaseException | None:
        """The wrapped lower-level failure, if any."""

        return self.__cause__

    @property
    def unit(self) -> ExecutionUnit:
        return ExecutionUnit(name=self.unit_name, ident=self.unit_id)

    def set_severity(self, severity: Severity) -> Fault:
        self.severity = severity
        return self

    def set_unit_name(self, name: str) -> Fault:
        self.unit_name = name
        return self

    def set_unit_id(self, ident: int) -> Fault:
        self.unit_id = ident
        return self

    def to_dict(self) -> dict[str, Any]:
        """Return a structured view suitable for log context.

        Examples
        --------
        >>> view = Fault.forbidden("nope", unit=ExecutionUnit("worker-1", 7)).to_dict()
        >>> view["kind"], view["severity"], view["unit_name"], view["cause"]
        ('Forbidden', 'Error', 'worker-1', None)
        """

        cause = self.cause
        return {
            "kind": self.kind.value,
            "severity": self.severity.display_label if isinstance(self.severity, Severity) else None,
            "message": self.message,
            "cause": describe_error(cause),
            "unit_name": self.unit_name,
            "unit_id": self.unit_id,
        }

    def __str__(self) -> str:
        return self.message or ""

    def __repr__(self) -> str:
        return f"Fault(kind={self.kind.value}, severity={self.severity}, message={self.message!r})"


def describe_error(error: BaseException | None) -> str | None:
    """Return ``repr(error)``, or a type-only placeholder when ``__repr__`` raises.

    Examples
    --------
    >>> describe_error(OSError("disk full"))
    "OSError('disk full')"
    >>> describe_error(None) is None
    True
    """

    if error is None:
        return None
    try:
        return repr(error)
    except Exception:  # noqa: BLE001 - log context must not fail on a broken __repr__
        return f"<unrepresentable {type(error).__name__}>"
