"""Tests for the output formatting system.

Covers:
- OutputFormat resolution (auto -> rich/plain based on TTY)
- NO_COLOR / TERM=dumb color disabling
- stdout vs stderr discipline
- Quiet and verbose modes
- format_response and print_records in all three modes
- Global instance management
"""

from __future__ import annotations

import json

import pytest

from restnav import output as output_module
from restnav.output import (
    OutputFormat,
    OutputManager,
    _should_disable_color,
    get_output,
    reset_output,
    set_output,
)


# ------------------------------------------------------------------ #
# Fixtures
# ------------------------------------------------------------------ #


@pytest.fixture(autouse=True)
def _reset_global_output():
    """Ensure the global output instance is reset between tests."""
    reset_output()
    yield
    reset_output()


@pytest.fixture()
def non_tty(monkeypatch):
    """Patch stdout.isatty() to return False."""
    monkeypatch.setattr("restnav.output._is_tty", lambda: False)


@pytest.fixture()
def tty(monkeypatch):
    """Patch stdout.isatty() to return True."""
    monkeypatch.setattr("restnav.output._is_tty", lambda: True)


RECORDS = [
    {"sid": "CA1", "status": "completed", "duration": 42},
    {"sid": "CA2", "status": "busy", "duration": None},
]


# ------------------------------------------------------------------ #
# OutputFormat resolution
# ------------------------------------------------------------------ #


class TestOutputFormatResolution:
    """AUTO resolves from TTY state; explicit formats are kept."""

    def test_auto_resolves_to_plain_when_not_tty(self, non_tty):
        assert OutputManager().format == OutputFormat.PLAIN

    def test_auto_resolves_to_rich_when_tty(self, tty, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "xterm-256color")
        assert OutputManager().format == OutputFormat.RICH

    def test_auto_resolves_to_plain_when_tty_but_no_color(self, tty):
        assert OutputManager(no_color=True).format == OutputFormat.PLAIN

    def test_explicit_json_stays_json(self, tty):
        assert OutputManager(format=OutputFormat.JSON).format == OutputFormat.JSON


# ------------------------------------------------------------------ #
# Color disabling
# ------------------------------------------------------------------ #


class TestColorDisabling:
    def test_no_color_env_disables_color(self, monkeypatch):
        monkeypatch.setenv("NO_COLOR", "")
        assert _should_disable_color() is True

    def test_term_dumb_disables_color(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "dumb")
        assert _should_disable_color() is True

    def test_normal_term_keeps_color(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "xterm")
        assert _should_disable_color() is False


# ------------------------------------------------------------------ #
# stdout / stderr discipline
# ------------------------------------------------------------------ #


class TestStdoutStderrDiscipline:
    def test_print_data_goes_to_stdout(self, capfd, non_tty):
        OutputManager(no_color=True).print_data("payload")
        captured = capfd.readouterr()
        assert captured.out == "payload\n"
        assert captured.err == ""

    @pytest.mark.parametrize("method", ["info", "success", "warning", "error"])
    def test_diagnostics_go_to_stderr(self, capfd, non_tty, method):
        getattr(OutputManager(no_color=True), method)("message")
        captured = capfd.readouterr()
        assert captured.out == ""
        assert "message" in captured.err

    def test_error_prefix(self, capfd, non_tty):
        OutputManager(no_color=True).error("boom")
        assert capfd.readouterr().err == "Error: boom\n"

    def test_markup_in_messages_is_literal(self, capfd, tty, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "xterm-256color")
        OutputManager().error("bad key [bold]sid[/bold]")
        assert "bad key [bold]sid[/bold]" in capfd.readouterr().err


# ------------------------------------------------------------------ #
# Quiet / verbose
# ------------------------------------------------------------------ #


class TestQuietAndVerbose:
    def test_quiet_suppresses_info_and_success(self, capfd, non_tty):
        mgr = OutputManager(no_color=True, quiet=True)
        mgr.info("hidden")
        mgr.success("hidden")
        assert capfd.readouterr().err == ""

    def test_quiet_keeps_warning_error_and_data(self, capfd, non_tty):
        mgr = OutputManager(no_color=True, quiet=True)
        mgr.warning("careful")
        mgr.error("broken")
        mgr.print_data("data")
        captured = capfd.readouterr()
        assert "careful" in captured.err
        assert "broken" in captured.err
        assert captured.out == "data\n"

    def test_debug_hidden_by_default(self, capfd, non_tty):
        OutputManager(no_color=True).debug("trace")
        assert capfd.readouterr().err == ""

    def test_debug_shown_with_verbose(self, capfd, non_tty):
        mgr = OutputManager(no_color=True, verbose=True)
        mgr.debug("GET /2010-04-01/Accounts.json")
        assert "[debug] GET /2010-04-01/Accounts.json" in capfd.readouterr().err
        assert mgr.is_verbose


# ------------------------------------------------------------------ #
# format_response
# ------------------------------------------------------------------ #


class TestFormatResponse:
    def test_json_mode(self, capfd, non_tty):
        OutputManager(format=OutputFormat.JSON).format_response({"sid": "CA1", "n": [1]})
        assert json.loads(capfd.readouterr().out) == {"sid": "CA1", "n": [1]}

    def test_plain_mode_key_value_lines(self, capfd, non_tty):
        OutputManager(format=OutputFormat.PLAIN).format_response({"sid": "CA1", "price": None})
        assert capfd.readouterr().out == "sid\tCA1\nprice\t\n"

    def test_plain_mode_nested_values_are_json(self, capfd, non_tty):
        OutputManager(format=OutputFormat.PLAIN).format_response({"links": {"a": 1}})
        assert capfd.readouterr().out == 'links\t{"a": 1}\n'

    def test_plain_mode_list(self, capfd, non_tty):
        OutputManager(format=OutputFormat.PLAIN).format_response(["a", "b"])
        assert capfd.readouterr().out == "a\nb\n"


# ------------------------------------------------------------------ #
# print_records
# ------------------------------------------------------------------ #


class TestPrintRecords:
    def test_json_mode_prints_array(self, capfd, non_tty):
        OutputManager(format=OutputFormat.JSON).print_records(RECORDS, columns=["sid"])
        assert json.loads(capfd.readouterr().out) == RECORDS

    def test_plain_mode_tsv(self, capfd, non_tty):
        OutputManager(format=OutputFormat.PLAIN).print_records(RECORDS)
        lines = capfd.readouterr().out.splitlines()
        assert lines == [
            "sid\tstatus\tduration",
            "CA1\tcompleted\t42",
            "CA2\tbusy\t",
        ]

    def test_plain_mode_selected_columns(self, capfd, non_tty):
        OutputManager(format=OutputFormat.PLAIN).print_records(RECORDS, columns=["status", "missing"])
        lines = capfd.readouterr().out.splitlines()
        assert lines == ["status\tmissing", "completed\t", "busy\t"]

    def test_plain_mode_empty(self, capfd, non_tty):
        OutputManager(format=OutputFormat.PLAIN).print_records([])
        assert capfd.readouterr().out == ""

    def test_rich_mode_renders_table(self, capfd, tty, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "xterm-256color")
        OutputManager(format=OutputFormat.RICH).print_records(RECORDS, title="Calls")
        out = capfd.readouterr().out
        assert "CA1" in out
        assert "Calls" in out


# ------------------------------------------------------------------ #
# Global instance
# ------------------------------------------------------------------ #


class TestGlobalInstance:
    def test_get_output_creates_default(self):
        assert isinstance(get_output(), OutputManager)
        assert get_output() is get_output()

    def test_set_and_reset(self):
        mgr = OutputManager(quiet=True)
        set_output(mgr)
        assert get_output() is mgr
        reset_output()
        assert get_output() is not mgr

    def test_module_helpers_use_global(self, capfd, non_tty):
        set_output(OutputManager(format=OutputFormat.JSON, no_color=True, verbose=True))
        output_module.print_data("x")
        output_module.debug("dbg")
        output_module.format_response({"a": 1})
        captured = capfd.readouterr()
        assert captured.out.startswith("x\n")
        assert "dbg" in captured.err
