"""Reporter settings sourced from the process environment.

Purpose
-------
Let deployments tune the type URI prefix, the fallback detail text and the
logger name without code changes.

Key behaviours
--------------
* Enforces a slug-derived prefix (``default_env_prefix``) so only relevant
  variables are read (``LIB_FAULT_REPORTER_TYPE_PREFIX`` etc.).
* Blank values fall back to the built-in defaults.
* Emits a debug event via :mod:`lib_fault_reporter.observability` listing the
  keys that were overridden.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Final, Mapping

from .domain.response import NO_DETAILS_AVAILABLE, TYPE_PREFIX
from .observability import PACKAGE_LOGGER_NAME, log_debug

DEFAULT_SLUG: Final[str] = "lib-fault-reporter"


def default_env_prefix(slug: str) -> str:
    """Return the canonical environment prefix for *slug*.

    Examples
    --------
    >>> default_env_prefix('lib-fault-reporter')
    'LIB_FAULT_REPORTER'
    """

    return slug.replace("-", "_").upper()


@dataclass(frozen=True, slots=True)
class ReporterSettings:
    """Tunables consumed by :class:`lib_fault_reporter.application.reporter.FaultReporter`.

    Attributes
    ----------
    type_prefix:
        Prepended to every derived type URI.
    fallback_detail:
        Detail used when neither a fault nor its cause carries a message.
    logger_name:
        Logger the reporter emits to.
    """

    type_prefix: str = TYPE_PREFIX
    fallback_detail: str = NO_DETAILS_AVAILABLE
    logger_name: str = PACKAGE_LOGGER_NAME


_FIELDS: Final[dict[str, str]] = {
    "TYPE_PREFIX": "type_prefix",
    "FALLBACK_DETAIL": "fallback_detail",
    "LOGGER_NAME": "logger_name",
}


def load_settings(
    environ: Mapping[str, str] | None = None,
    *,
    prefix: str | None = None,
) -> ReporterSettings:
    """Build :class:`ReporterSettings` from environment variables.

    Parameters
    ----------
    environ:
        Mapping to read from. Defaults to :data:`os.environ`.
    prefix:
        Variable prefix; defaults to ``default_env_prefix(DEFAULT_SLUG)``. A
        trailing ``_`` is appended if missing.

    Examples
    --------
    >>> settings = load_settings({'LIB_FAULT_REPORTER_TYPE_PREFIX': 'https://example.org/errors/'})
    >>> settings.type_prefix
    'https://example.org/errors/'
    >>> settings.logger_name
    'lib_fault_reporter'
    """

    source = os.environ if environ is None else environ
    prefix = prefix if prefix is not None else default_env_prefix(DEFAULT_SLUG)
    prefix = f"{prefix}_" if prefix and not prefix.endswith("_") else prefix

    overrides: dict[str, str] = {}
    for suffix, attribute in _FIELDS.items():
        value = source.get(f"{prefix}{suffix}")
        if value is not None and value.strip():
            overrides[attribute] = value
    log_debug("settings_loaded", prefix=prefix, keys=sorted(overrides))
    return ReporterSettings(**overrides)
