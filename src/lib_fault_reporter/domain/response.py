"""Structured error response value object.

Purpose
-------
Model `RFC 7807 <https://datatracker.ietf.org/doc/html/rfc7807>`_ problem
details: the record handed back to callers for every reported fault, plus the
algorithm that derives a stable ``type`` URI from a fault kind.

Contents
--------
* :data:`TYPE_PREFIX` / :data:`GENERIC_TYPE` – type URI prefix and fallback.
* :data:`NO_DETAILS_AVAILABLE` – detail used when nothing better is known.
* :func:`split_camel_case` – character-type word splitting.
* :func:`derive_type` – kind name to type URI.
* :func:`now_timestamp` – ISO-8601 offset timestamp in the system time zone.
* :class:`ErrorResponse` – immutable record with ``with_*`` builders.

System Role
-----------
Built by :class:`lib_fault_reporter.application.reporter.FaultReporter`;
surrounding layers (HTTP, CLI) decide how to surface it.
"""

from __future__ import annotations

import json
import unicodedata
from dataclasses import asdict, dataclass, field, replace
from datetime import datetime
from typing import Any, Final

from .faults import FaultKind
from .severity import Severity

TYPE_PREFIX: Final[str] = "urn:lib-fault-reporter:errors:"
GENERIC_TYPE: Final[str] = TYPE_PREFIX + "generic"

NO_DETAILS_AVAILABLE: Final[str] = "An error has occurred but no additional details are currently available."


def _char_type(char: str) -> str:
    """Classify *char* for camel-case splitting (Unicode general category)."""

    return unicodedata.category(char)


def split_camel_case(text: str) -> list[str]:
    """Split *text* into runs of uniform character type, honouring camel case.

    Why
    ----
    Kind names such as ``InvalidInput`` must become the words ``Invalid`` and
    ``Input`` before they can be turned into a hyphenated slug.

    What
    ----
    Starts a new token whenever the Unicode category changes. An uppercase
    letter directly followed by lowercase letters stays with the lowercase
    run, so acronyms are kept intact.

    Examples
    --------
    >>> split_camel_case("InvalidInput")
    ['Invalid', 'Input']
    >>> split_camel_case("HTTPServer2Go")
    ['HTTP', 'Server', '2', 'Go']
    >>> split_camel_case("")
    []
    """

    if not text:
        return []
    tokens: list[str] = []
    start = 0
    current = _char_type(text[0])
    for pos in range(1, len(text)):
        kind = _char_type(text[pos])
        if kind == current:
            continue
        if kind == "Ll" and current == "Lu":
            new_start = pos - 1
            if new_start != start:
                tokens.append(text[start:new_start])
                start = new_start
        else:
            tokens.append(text[start:pos])
            start = pos
        current = kind
    tokens.append(text[start:])
    return tokens


def derive_type(kind: FaultKind | str | None, *, prefix: str = TYPE_PREFIX) -> str:
    """Return the stable type URI for *kind*.

    Why
    ----
    Machine consumers compare ``type`` values; they must be identical for every
    fault of the same kind and never depend on messages.

    What
    ----
    ``None`` or an empty name yields ``prefix + "generic"``. Otherwise the kind
    name (``FaultKind`` value or a plain string for extension kinds) is split
    with :func:`split_camel_case`, lower-cased and joined with ``-``.

    Examples
    --------
    >>> derive_type(FaultKind.INVALID_INPUT)
    'urn:lib-fault-reporter:errors:invalid-input'
    >>> derive_type(None) == GENERIC_TYPE
    True
    >>> derive_type("RateLimited", prefix="https://example.org/errors/")
    'https://example.org/errors/rate-limited'
    """

    name = kind.value if isinstance(kind, FaultKind) else kind
    if not isinstance(name, str) or not name.strip():
        return prefix + "generic"
    return prefix + "-".join(token.lower() for token in split_camel_case(name.strip()))


def now_timestamp() -> str:
    """Return the current instant as an ISO-8601 string with the local UTC offset."""

    return format_timestamp(datetime.now().astimezone())


def format_timestamp(moment: datetime) -> str:
    """Format *moment* as an offset date-time; naive values are taken as local time.

    Examples
    --------
    >>> from datetime import timezone, timedelta
    >>> format_timestamp(datetime(2021, 10, 3, 12, 0, tzinfo=timezone(timedelta(hours=2))))
    '2021-10-03T12:00:00+02:00'
    """

    if moment.tzinfo is None:
        moment = moment.astimezone()
    return moment.isoformat()


@dataclass(frozen=True, slots=True)
class ErrorResponse:
    """Problem-details record describing one reported fault.

    Why
    ----
    Callers need a single shape to render errors regardless of which layer
    raised them.

    What
    ----
    Every field has a default, so ``ErrorResponse()`` is already a valid generic
    error. Blank ``type``, ``title`` and ``detail`` are replaced by their
    defaults at construction. ``instance`` (for example a request id) is never
    filled by the library; use :meth:`with_instance`.

    Examples
    --------
    >>> response = ErrorResponse(detail="Order 42 does not exist").with_instance("req-1")
    >>> response.title, response.instance, response.type == GENERIC_TYPE
    ('Error', 'req-1', True)
    >>> ErrorResponse(detail="   ").detail == NO_DETAILS_AVAILABLE
    True
    """

    type: str = GENERIC_TYPE
    title: str = Severity.ERROR.display_label
    detail: str = NO_DETAILS_AVAILABLE
    instance: str | None = None
    timestamp: str = field(default_factory=now_timestamp)
    severity: Severity = Severity.ERROR

    def __post_init__(self) -> None:
        if _is_blank(self.type):
            object.__setattr__(self, "type", GENERIC_TYPE)
        if _is_blank(self.title):
            object.__setattr__(self, "title", self.severity.display_label)
        if _is_blank(self.detail):
            object.__setattr__(self, "detail", NO_DETAILS_AVAILABLE)
        if _is_blank(self.timestamp):
            object.__setattr__(self, "timestamp", now_timestamp())

    def with_type(self, value: str) -> ErrorResponse:
        return replace(self, type=value)

    def with_title(self, value: str) -> ErrorResponse:
        return replace(self, title=value)

    def with_detail(self, value: str) -> ErrorResponse:
        return replace(self, detail=value)

    def with_instance(self, value: str | None) -> ErrorResponse:
        return replace(self, instance=value)

    def with_timestamp(self, value: str) -> ErrorResponse:
        return replace(self, timestamp=value)

    def with_severity(self, value: Severity) -> ErrorResponse:
        return replace(self, severity=value)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly mapping; the severity is rendered by its display label."""

        payload = asdict(self)
        payload["severity"] = self.severity.display_label
        return payload

    def to_json(self, *, indent: int | None = None) -> str:
        """Serialise :meth:`to_dict` to JSON.

        Examples
        --------
        >>> record = ErrorResponse(timestamp="2021-10-03T12:00:00+02:00")
        >>> json.loads(record.to_json())["severity"]
        'Error'
        """

        return json.dumps(self.to_dict(), indent=indent, separators=(",", ":") if indent is None else None)


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()
