"""Domain-level severity classification.

Purpose
-------
Flag a fault as either a warning or an error. Severity drives the log level the
reporter emits at and the ``title`` of every error response.

Contents
--------
* :class:`Severity` – the two-valued classification with a cached display label.
"""

from __future__ import annotations

from enum import Enum


def _camel_case(name: str) -> str:
    """Return *name* (``UPPER_SNAKE``) as capitalised camel case.

    Examples
    --------
    >>> _camel_case("WARNING")
    'Warning'
    >>> _camel_case("SOME_LEVEL")
    'SomeLevel'
    """

    return "".join(part.capitalize() for part in name.split("_") if part)


class Severity(Enum):
    """Sometimes, errors should be flagged as warnings.

    Why
    ----
    Consumers need to tell recoverable conditions apart from genuine failures
    without inspecting messages.

    What
    ----
    Each member exposes :attr:`display_label`, computed once when the enum class
    is created and reused for every response title.

    Examples
    --------
    >>> Severity.WARNING.display_label
    'Warning'
    >>> Severity.parse("error") is Severity.ERROR
    True
    """

    WARNING = "WARNING"
    ERROR = "ERROR"

    def __init__(self, value: str) -> None:
        self.display_label = _camel_case(self.name)

    @classmethod
    def parse(cls, text: str) -> Severity:
        """Return the member whose name or display label matches *text* (case-insensitive).

        Raises
        ------
        ValueError
            When *text* names no severity.
        """

        wanted = text.strip().upper()
        for member in cls:
            if wanted in (member.name, member.display_label.upper()):
                return member
        raise ValueError(f"Unknown severity {text!r}; expected one of: {', '.join(m.name.lower() for m in cls)}")

    def __str__(self) -> str:
        return self.display_label
