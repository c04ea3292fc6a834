from __future__ import annotations

import threading

from lib_fault_reporter.domain.faults import ExecutionUnit, Fault, FaultKind, describe_error
from lib_fault_reporter.domain.severity import Severity


def test_no_arg_fault_defaults() -> None:
    fault = Fault()
    assert fault.kind is FaultKind.GENERIC
    assert fault.severity is Severity.ERROR
    assert fault.message is None
    assert fault.cause is None
    assert str(fault) == ""


def test_message_only_fault() -> None:
    fault = Fault.invalid_input("Quantity must be positive")
    assert fault.kind is FaultKind.INVALID_INPUT
    assert fault.message == "Quantity must be positive"
    assert fault.args == ("Quantity must be positive",)
    assert fault.cause is None


def test_cause_only_fault() -> None:
    cause = OSError("disk full")
    fault = Fault.not_found(cause=cause)
    assert fault.message is None
    assert fault.cause is cause
    assert fault.__cause__ is cause


def test_message_and_cause_fault() -> None:
    cause = KeyError("user")
    fault = Fault.forbidden("Access denied", cause)
    assert fault.kind is FaultKind.FORBIDDEN
    assert fault.message == "Access denied"
    assert fault.cause is cause


def test_raise_from_sets_cause() -> None:
    original = ValueError("bad")
    try:
        try:
            raise original
        except ValueError as exc:
            raise Fault.generic("wrapped") from exc
    except Fault as fault:
        assert fault.cause is original


def test_unit_captured_from_current_thread() -> None:
    fault = Fault()
    current = threading.current_thread()
    assert fault.unit_name == current.name
    assert fault.unit_id == current.ident


def test_unit_captured_on_worker_thread() -> None:
    captured: list[Fault] = []
    worker = threading.Thread(target=lambda: captured.append(Fault()), name="worker-7")
    worker.start()
    worker.join()
    assert captured[0].unit_name == "worker-7"
    assert captured[0].unit_id == worker.ident


def test_explicit_unit_wins() -> None:
    fault = Fault("boom", unit=ExecutionUnit("task-1", 99))
    assert fault.unit == ExecutionUnit("task-1", 99)


def test_fluent_setters_return_fault() -> None:
    fault = Fault()
    assert fault.set_severity(Severity.WARNING).set_unit_name("rehydrated").set_unit_id(5) is fault
    assert fault.severity is Severity.WARNING
    assert fault.unit_name == "rehydrated"
    assert fault.unit_id == 5


def test_to_dict_describes_fault() -> None:
    fault = Fault.not_found("missing", OSError("gone"), unit=ExecutionUnit("w", 1))
    view = fault.to_dict()
    assert view["kind"] == "NotFound"
    assert view["severity"] == "Error"
    assert view["message"] == "missing"
    assert "gone" in view["cause"]
    assert (view["unit_name"], view["unit_id"]) == ("w", 1)


def test_kind_values_are_short_names() -> None:
    assert [kind.value for kind in FaultKind] == ["Generic", "InvalidInput", "NotFound", "Forbidden"]


def test_to_dict_survives_unrepresentable_cause() -> None:
    class Opaque(Exception):
        def __repr__(self) -> str:
            raise RuntimeError("no repr")

    assert Fault(cause=Opaque()).to_dict()["cause"] == "<unrepresentable Opaque>"
    assert describe_error(ValueError("v")) == "ValueError('v')"
