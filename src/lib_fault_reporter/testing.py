"""Testing diagnostics that keep failure scenarios observable and predictable.

Purpose
    Provide an intentionally failing helper that exercises error-handling
    paths in the CLI and integration suites without brittle fixtures.

Contents
    - ``FAILURE_MESSAGE``: stable message used when forcing a failure.
    - ``i_should_fail``: raises a :class:`Fault` wrapping a ``RuntimeError``.
"""

from __future__ import annotations

from typing import Final

from .domain.faults import Fault

FAILURE_MESSAGE: Final[str] = "i should fail"
"""Stable message emitted when ``i_should_fail`` triggers a failure sequence."""


def i_should_fail() -> None:
    """Raise a deterministic generic :class:`Fault` caused by a ``RuntimeError``.

    Why
        Validates that higher-level orchestrators preserve the fault, its cause
        and its message when surfacing errors to end users.

    Examples
    --------
    >>> i_should_fail()
    Traceback (most recent call last):
    ...
    lib_fault_reporter.domain.faults.Fault: i should fail
    """

    raise Fault.generic(FAILURE_MESSAGE) from RuntimeError(FAILURE_MESSAGE)
