from __future__ import annotations

import pytest

from lib_fault_reporter.domain.faults import Fault, FaultKind
from lib_fault_reporter.testing import FAILURE_MESSAGE, i_should_fail


def test_i_should_fail_raises_generic_fault() -> None:
    with pytest.raises(Fault, match="^i should fail$") as info:
        i_should_fail()
    assert info.value.kind is FaultKind.GENERIC
    assert isinstance(info.value.cause, RuntimeError)
    assert str(info.value.cause) == FAILURE_MESSAGE


def test_i_should_fail_reexported() -> None:
    from lib_fault_reporter import i_should_fail as exported
    from lib_fault_reporter.testing import i_should_fail as original

    assert exported is original
