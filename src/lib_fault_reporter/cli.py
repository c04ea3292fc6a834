"""CLI adapter for ``lib_fault_reporter`` built on ``lib_cli_exit_tools``.

Purpose
-------
Let operators preview how faults are classified (type URI, title, detail) and
check their environment settings without writing Python code.

Contents
--------
* :data:`CLICK_CONTEXT_SETTINGS` – shared Click settings ensuring ``-h`` works.
* :func:`cli` – root command that wires global traceback handling into
  ``lib_cli_exit_tools``.
* :func:`cli_info` – prints distribution metadata for quick diagnostics.
* :func:`cli_derive_type` – prints the type URI for a kind name.
* :func:`cli_report` – builds a fault from options, reports it and prints the
  response as JSON.
* :func:`cli_fail` – raises the deterministic testing fault.
* :func:`main` – entry point used by ``console_scripts`` registration.

System Role
-----------
Outermost layer. It calls the composition root (:mod:`lib_fault_reporter.core`)
and the domain constructors, never reporter internals.
"""

from __future__ import annotations

import sys
from importlib import metadata
from typing import Final, Optional, Sequence

import lib_cli_exit_tools
import rich_click as click

from .core import build_reporter
from .config import load_settings
from .domain.faults import FaultKind
from .domain.response import derive_type
from .domain.severity import Severity
from .testing import i_should_fail

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
_TRACEBACK_SUMMARY_LIMIT: Final[int] = 500
_TRACEBACK_VERBOSE_LIMIT: Final[int] = 10_000

KIND_CHOICES: Final[dict[str, FaultKind]] = {
    "generic": FaultKind.GENERIC,
    "invalid-input": FaultKind.INVALID_INPUT,
    "not-found": FaultKind.NOT_FOUND,
    "forbidden": FaultKind.FORBIDDEN,
}
SEVERITY_CHOICES: Final[tuple[str, ...]] = tuple(member.name.lower() for member in Severity)


def _resolve_version() -> str:
    """Return the installed package version, ``"0.0.0"`` when metadata is missing."""

    try:
        return metadata.version("lib_fault_reporter")
    except metadata.PackageNotFoundError:
        return "0.0.0"


@click.group(
    help="Fault classification and error-response shaping",
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=False,
)
@click.version_option(
    version=_resolve_version(),
    prog_name="lib_fault_reporter",
    message="lib_fault_reporter version %(version)s",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool) -> None:
    """Root command configuring traceback handling for all subcommands.

    Side Effects
        Mutates ``lib_cli_exit_tools.config.traceback`` and
        ``lib_cli_exit_tools.config.traceback_force_color``.
    """

    ctx.ensure_object(dict)
    ctx.obj["traceback"] = traceback
    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print basic distribution metadata and the effective settings."""

    settings = load_settings()
    try:
        meta = metadata.metadata("lib_fault_reporter")
    except metadata.PackageNotFoundError:
        click.echo("lib_fault_reporter (metadata unavailable)")
    else:
        click.echo(f"Info for {meta.get('Name', 'lib_fault_reporter')}:")
        click.echo(f"  Version         : {meta.get('Version', _resolve_version())}")
        click.echo(f"  Requires-Python : {meta.get('Requires-Python', '>=3.10')}")
        summary = meta.get("Summary")
        if summary:
            click.echo(f"  Summary         : {summary}")
    click.echo(f"  Type prefix     : {settings.type_prefix}")
    click.echo(f"  Logger          : {settings.logger_name}")


@cli.command("derive-type", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("name")
@click.option("--prefix", default=None, help="Type URI prefix (defaults to the configured prefix)")
def cli_derive_type(name: str, prefix: Optional[str]) -> None:
    """Print the type URI derived from the kind NAME (e.g. ``InvalidInput``).

    Examples
    --------
    >>> from click.testing import CliRunner
    >>> result = CliRunner().invoke(cli, ["derive-type", "NotFound", "--prefix", "x:"])
    >>> result.output.strip()
    'x:not-found'
    """

    click.echo(derive_type(name, prefix=prefix if prefix is not None else load_settings().type_prefix))


@cli.command("report", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option(
    "--kind",
    type=click.Choice(tuple(KIND_CHOICES), case_sensitive=False),
    default="generic",
    show_default=True,
    help="Fault kind",
)
@click.option(
    "--severity",
    type=click.Choice(SEVERITY_CHOICES, case_sensitive=False),
    default="error",
    show_default=True,
    help="Declared fault severity",
)
@click.option("--message", default=None, help="Fault message shown to the user")
@click.option("--cause-message", default=None, help="Message of a wrapped lower-level error")
@click.option("--instance", default=None, help="Occurrence identifier (e.g. a request id)")
@click.option(
    "--indent",
    type=int,
    default=None,
    help="Pretty-print JSON output with the provided indent size",
)
def cli_report(
    kind: str,
    severity: str,
    message: Optional[str],
    cause_message: Optional[str],
    instance: Optional[str],
    indent: Optional[int],
) -> None:
    """Build a fault from the options, report it and print the error response as JSON."""

    cause = RuntimeError(cause_message) if cause_message is not None else None
    reporter = build_reporter()
    fault = reporter.fault(message, cause, kind=KIND_CHOICES[kind.lower()], severity=Severity.parse(severity))
    response = reporter.handle(fault)
    if instance is not None:
        response = response.with_instance(instance)
    click.echo(response.to_json(indent=indent))


@cli.command("fail", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_fail() -> None:
    """Trigger a deterministic fault for testing traceback handling."""

    i_should_fail()


def main(argv: Optional[Sequence[str]] = None, *, restore_traceback: bool = True) -> int:
    """Execute the CLI with shared exit handling and return the exit code."""

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        try:
            return lib_cli_exit_tools.run_cli(
                cli,
                argv=list(argv) if argv is not None else None,
                prog_name="lib_fault_reporter",
            )
        except BaseException as exc:  # noqa: BLE001 - funnel through shared printers
            lib_cli_exit_tools.print_exception_message(
                trace_back=lib_cli_exit_tools.config.traceback,
                length_limit=(
                    _TRACEBACK_VERBOSE_LIMIT if lib_cli_exit_tools.config.traceback else _TRACEBACK_SUMMARY_LIMIT
                ),
            )
            return lib_cli_exit_tools.get_system_exit_code(exc)
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


if __name__ == "__main__":  # pragma: no cover - exercised via console entry point
    raise SystemExit(main(sys.argv[1:]))
