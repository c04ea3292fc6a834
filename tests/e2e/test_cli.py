"""End-to-end CLI coverage for the public commands exposed by lib-fault-reporter.

These tests exercise the documented CLI workflows (report, derive-type, info,
fail) and the shared exit handling provided by ``lib_cli_exit_tools``.
"""

from __future__ import annotations

import json

from click.testing import CliRunner

import lib_cli_exit_tools

from lib_fault_reporter import NO_DETAILS_AVAILABLE, TYPE_PREFIX, Fault, cli


def _runner() -> CliRunner:
    """Return a fresh CLI runner so each test starts from a clean state."""

    return CliRunner()


def test_cli_report_outputs_response_json() -> None:
    """`cli report` should print the full error response for the described fault."""

    result = _runner().invoke(
        cli.cli,
        [
            "report",
            "--kind",
            "not-found",
            "--message",
            "Order 42 does not exist",
            "--instance",
            "req-1",
            "--indent",
            "2",
        ],
    )
    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert payload["type"] == TYPE_PREFIX + "not-found"
    assert payload["title"] == "Error"
    assert payload["detail"] == "Order 42 does not exist"
    assert payload["instance"] == "req-1"
    assert payload["severity"] == "Error"
    assert payload["timestamp"]


def test_cli_report_uses_cause_message_and_severity() -> None:
    """`cli report` should fall back to the cause message and honour --severity."""

    result = _runner().invoke(
        cli.cli,
        ["report", "--kind", "INVALID-INPUT", "--severity", "warning", "--cause-message", "disk full"],
    )
    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert payload["type"] == TYPE_PREFIX + "invalid-input"
    assert payload["title"] == "Warning"
    assert payload["detail"] == "disk full"


def test_cli_report_without_messages_uses_fallback() -> None:
    result = _runner().invoke(cli.cli, ["report"])
    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert payload["detail"] == NO_DETAILS_AVAILABLE
    assert payload["instance"] is None


def test_cli_report_rejects_unknown_kind() -> None:
    result = _runner().invoke(cli.cli, ["report", "--kind", "teapot"])
    assert result.exit_code != 0


def test_cli_report_honours_environment_prefix() -> None:
    result = _runner().invoke(
        cli.cli,
        ["report", "--kind", "forbidden"],
        env={"LIB_FAULT_REPORTER_TYPE_PREFIX": "https://example.org/errors/"},
    )
    assert result.exit_code == 0
    assert json.loads(result.output)["type"] == "https://example.org/errors/forbidden"


def test_cli_derive_type_command() -> None:
    """`cli derive-type` should echo the hyphenated type URI for a kind name."""

    result = _runner().invoke(cli.cli, ["derive-type", "InvalidInput"])
    assert result.exit_code == 0
    assert result.output.strip() == TYPE_PREFIX + "invalid-input"


def test_cli_derive_type_with_prefix() -> None:
    result = _runner().invoke(cli.cli, ["derive-type", "RateLimited", "--prefix", "https://example.org/e/"])
    assert result.exit_code == 0
    assert result.output.strip() == "https://example.org/e/rate-limited"


def test_cli_info_handles_missing_metadata(monkeypatch) -> None:
    """`cli info` must degrade gracefully when package metadata is unavailable."""

    def _raise_pkg_not_found(*_args, **_kwargs):
        raise cli.metadata.PackageNotFoundError()

    monkeypatch.setattr(cli.metadata, "metadata", _raise_pkg_not_found)
    result = _runner().invoke(cli.cli, ["info"])
    assert result.exit_code == 0
    assert "metadata unavailable" in result.output
    assert "Type prefix" in result.output


def test_cli_main_restores_traceback_flag() -> None:
    """`cli main` should restore lib_cli_exit_tools tracebacks after execution."""

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    exit_code = cli.main(["--traceback", "derive-type", "NotFound"], restore_traceback=True)
    assert exit_code == 0
    assert getattr(lib_cli_exit_tools.config, "traceback", False) == previous_traceback


def test_cli_fail_command() -> None:
    """`cli fail` should bubble the testing fault for debugging flows."""

    result = _runner().invoke(cli.cli, ["fail"])
    assert result.exit_code != 0
    assert isinstance(result.exception, Fault)
    assert str(result.exception) == "i should fail"
