from __future__ import annotations

import json
from datetime import datetime

from hypothesis import given
from hypothesis import strategies as st

from lib_fault_reporter.domain.faults import FaultKind
from lib_fault_reporter.domain.response import (
    GENERIC_TYPE,
    NO_DETAILS_AVAILABLE,
    TYPE_PREFIX,
    ErrorResponse,
    derive_type,
    split_camel_case,
)
from lib_fault_reporter.domain.severity import Severity

KIND_NAME = st.text(alphabet=st.characters(min_codepoint=48, max_codepoint=122), min_size=1, max_size=20)


def test_derive_type_for_known_kinds() -> None:
    assert derive_type(FaultKind.INVALID_INPUT) == TYPE_PREFIX + "invalid-input"
    assert derive_type(FaultKind.NOT_FOUND) == TYPE_PREFIX + "not-found"
    assert derive_type(FaultKind.FORBIDDEN) == TYPE_PREFIX + "forbidden"
    assert derive_type(FaultKind.GENERIC) == TYPE_PREFIX + "generic"


def test_derive_type_falls_back_to_generic() -> None:
    assert derive_type(None) == GENERIC_TYPE
    assert derive_type("") == GENERIC_TYPE
    assert derive_type("   ") == GENERIC_TYPE


def test_derive_type_with_custom_prefix() -> None:
    assert derive_type("PaymentRequired", prefix="https://example.org/errors/") == (
        "https://example.org/errors/payment-required"
    )


def test_split_camel_case_keeps_acronyms_and_digits() -> None:
    assert split_camel_case("HTTPServer2Go") == ["HTTP", "Server", "2", "Go"]
    assert split_camel_case("ABC") == ["ABC"]
    assert split_camel_case("ab:CD") == ["ab", ":", "CD"]


@given(KIND_NAME)
def test_split_camel_case_preserves_characters(name: str) -> None:
    assert "".join(split_camel_case(name)) == name


@given(KIND_NAME)
def test_derive_type_is_deterministic_and_lower_case(name: str) -> None:
    first = derive_type(name)
    assert first == derive_type(name)
    assert first.startswith(TYPE_PREFIX)
    assert first == first.lower()


def test_defaults() -> None:
    response = ErrorResponse()
    assert response.type == GENERIC_TYPE
    assert response.title == "Error"
    assert response.detail == NO_DETAILS_AVAILABLE
    assert response.instance is None
    assert response.severity is Severity.ERROR
    assert datetime.fromisoformat(response.timestamp).utcoffset() is not None


def test_blank_fields_are_normalised() -> None:
    response = ErrorResponse(type=" ", title="", detail="\t", severity=Severity.WARNING)
    assert response.type == GENERIC_TYPE
    assert response.title == "Warning"
    assert response.detail == NO_DETAILS_AVAILABLE


def test_with_builders_return_new_records() -> None:
    original = ErrorResponse(timestamp="2021-10-03T12:00:00+02:00")
    changed = original.with_instance("req-7").with_detail("Order 42 does not exist").with_severity(Severity.WARNING)
    assert original.instance is None
    assert changed.instance == "req-7"
    assert changed.detail == "Order 42 does not exist"
    assert changed.severity is Severity.WARNING
    assert changed.timestamp == original.timestamp
    assert original.with_type("x:y").type == "x:y"
    assert original.with_title("Oops").title == "Oops"
    assert original.with_timestamp("2022-01-01T00:00:00+00:00").timestamp == "2022-01-01T00:00:00+00:00"


def test_to_json_contains_every_field() -> None:
    response = ErrorResponse(detail="d", timestamp="2021-10-03T12:00:00+02:00").with_instance("i")
    payload = json.loads(response.to_json(indent=2))
    assert payload == {
        "type": GENERIC_TYPE,
        "title": "Error",
        "detail": "d",
        "instance": "i",
        "timestamp": "2021-10-03T12:00:00+02:00",
        "severity": "Error",
    }
