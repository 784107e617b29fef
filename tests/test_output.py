"""Tests for the output formatting system.

Covers:
- OutputFormat resolution (auto -> rich/plain based on TTY)
- NO_COLOR / TERM=dumb color disabling
- stdout vs stderr discipline
- Quiet and verbose modes
- format_response, print_table and print_tree in every format
- Output file redirection
- Global instance management
"""

from __future__ import annotations

import json

import pytest

from hierli import output as output_module
from hierli.output import (
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


@pytest.fixture()
def non_tty(monkeypatch):
    """Patch stdout.isatty() to return False."""
    monkeypatch.setattr("hierli.output._is_tty", lambda: False)


@pytest.fixture()
def tty(monkeypatch):
    """Patch stdout.isatty() to return True."""
    monkeypatch.setattr("hierli.output._is_tty", lambda: True)


OUTLINE = {
    "group": {
        "get (getGroup)": {},
        "member": {"add (addGroupMember)": {}},
    },
    "orgs": {"list (listOrgs)": {}},
}


# ------------------------------------------------------------------ #
# Format resolution and colour
# ------------------------------------------------------------------ #


class TestOutputFormatResolution:

    def test_auto_resolves_to_plain_when_not_tty(self, non_tty):
        assert OutputManager().format == OutputFormat.PLAIN

    def test_auto_resolves_to_rich_when_tty(self, tty, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("TERM", raising=False)
        assert OutputManager().format == OutputFormat.RICH

    def test_auto_resolves_to_plain_when_tty_but_no_color(self, tty, monkeypatch):
        monkeypatch.setenv("NO_COLOR", "1")
        assert OutputManager().format == OutputFormat.PLAIN

    def test_explicit_json_stays_json(self, tty):
        assert OutputManager(format=OutputFormat.JSON).format == OutputFormat.JSON


class TestColorDisabling:

    def test_no_color_env_any_value(self, monkeypatch):
        monkeypatch.setenv("NO_COLOR", "")
        assert _should_disable_color() is True

    def test_term_dumb_disables_color(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "dumb")
        assert _should_disable_color() is True

    def test_normal_term_keeps_color(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "xterm-256color")
        assert _should_disable_color() is False


# ------------------------------------------------------------------ #
# Stream discipline
# ------------------------------------------------------------------ #


class TestStdoutStderrDiscipline:

    def test_print_data_goes_to_stdout(self, capfd, non_tty):
        OutputManager(no_color=True).print_data("payload")
        out, err = capfd.readouterr()
        assert out == "payload\n"
        assert err == ""

    def test_diagnostics_go_to_stderr(self, capfd, non_tty):
        om = OutputManager(no_color=True, verbose=True)
        om.info("info")
        om.success("done")
        om.error("broken")
        om.debug("detail")
        out, err = capfd.readouterr()
        assert out == ""
        assert "info" in err
        assert "done" in err
        assert "Error: broken" in err
        assert "[debug] detail" in err


class TestQuietAndVerbose:

    def test_quiet_suppresses_info_and_success(self, capfd, non_tty):
        om = OutputManager(no_color=True, quiet=True)
        om.info("hidden")
        om.success("hidden too")
        assert capfd.readouterr().err == ""

    def test_quiet_keeps_errors(self, capfd, non_tty):
        OutputManager(no_color=True, quiet=True).error("shown")
        assert "shown" in capfd.readouterr().err

    def test_debug_hidden_by_default(self, capfd, non_tty):
        OutputManager(no_color=True).debug("hidden")
        assert capfd.readouterr().err == ""


# ------------------------------------------------------------------ #
# format_response / print_table
# ------------------------------------------------------------------ #


class TestFormatResponse:

    def test_json(self, capfd, non_tty):
        OutputManager(format=OutputFormat.JSON).format_response({"b": 1, "a": [1]})
        assert json.loads(capfd.readouterr().out) == {"b": 1, "a": [1]}

    def test_plain_dict_as_key_value(self, capfd, non_tty):
        data = {"prefix": "/api/v1/", "seed_verbs": ["get", "list"]}
        OutputManager(format=OutputFormat.PLAIN).format_response(data)
        lines = capfd.readouterr().out.splitlines()
        assert lines == ["prefix\t/api/v1/", 'seed_verbs\t["get", "list"]']

    def test_plain_list(self, capfd, non_tty):
        OutputManager(format=OutputFormat.PLAIN).format_response(["a", "b"])
        assert capfd.readouterr().out == "a\nb\n"

    def test_rich_produces_output(self, capfd, non_tty):
        OutputManager(format=OutputFormat.RICH, no_color=True).format_response({"k": "v"})
        assert '"k"' in capfd.readouterr().out


class TestPrintTable:

    def test_table_json_mode(self, capfd, non_tty):
        OutputManager(format=OutputFormat.JSON).print_table(
            ["Kind", "Name"], [["verb", "get"], ["entity", "Group"]]
        )
        assert json.loads(capfd.readouterr().out) == [
            {"Kind": "verb", "Name": "get"},
            {"Kind": "entity", "Name": "Group"},
        ]

    def test_table_plain_mode(self, capfd, non_tty):
        OutputManager(format=OutputFormat.PLAIN).print_table(
            ["Kind", "Name"], [["verb", "get"]], title="ignored"
        )
        assert capfd.readouterr().out == "Kind\tName\nverb\tget\n"

    def test_table_rich_mode(self, capfd, non_tty):
        OutputManager(format=OutputFormat.RICH, no_color=True).print_table(
            ["Kind", "Name"], [["verb", "get"]], title="Verbs"
        )
        out = capfd.readouterr().out
        assert "Verbs" in out
        assert "get" in out


# ------------------------------------------------------------------ #
# print_tree
# ------------------------------------------------------------------ #


class TestPrintTree:

    def test_plain_is_indented_outline(self, capfd, non_tty):
        OutputManager(format=OutputFormat.PLAIN).print_tree("api", OUTLINE)
        assert capfd.readouterr().out.splitlines() == [
            "api",
            "  group",
            "    get (getGroup)",
            "    member",
            "      add (addGroupMember)",
            "  orgs",
            "    list (listOrgs)",
        ]

    def test_json_nests_under_label(self, capfd, non_tty):
        OutputManager(format=OutputFormat.JSON).print_tree("api", OUTLINE)
        assert json.loads(capfd.readouterr().out) == {"api": OUTLINE}

    def test_rich_renders_every_label(self, capfd, non_tty):
        OutputManager(format=OutputFormat.RICH, no_color=True).print_tree("api", OUTLINE)
        out = capfd.readouterr().out
        for label in ("api", "group", "member", "add (addGroupMember)", "orgs"):
            assert label in out

    def test_empty_outline(self, capfd, non_tty):
        OutputManager(format=OutputFormat.PLAIN).print_tree("api", {})
        assert capfd.readouterr().out == "api\n"


# ------------------------------------------------------------------ #
# Output file
# ------------------------------------------------------------------ #


class TestOutputFile:

    def test_format_response_writes_json_to_file(self, tmp_path, capfd, non_tty):
        target = tmp_path / "out.json"
        OutputManager(format=OutputFormat.PLAIN, output_file=str(target)).format_response(
            {"a": 1}
        )
        assert capfd.readouterr().out == ""
        assert json.loads(target.read_text(encoding="utf-8")) == {"a": 1}

    def test_print_data_appends_with_newline(self, tmp_path, non_tty):
        target = tmp_path / "out.txt"
        om = OutputManager(output_file=str(target))
        om.print_data("one")
        om.print_data("two\n")
        assert target.read_text(encoding="utf-8") == "one\ntwo\n"


# ------------------------------------------------------------------ #
# Global instance
# ------------------------------------------------------------------ #


class TestGlobalInstance:

    def test_get_output_creates_default(self):
        reset_output()
        assert isinstance(get_output(), OutputManager)

    def test_set_output_overrides(self):
        om = OutputManager(format=OutputFormat.JSON)
        set_output(om)
        assert get_output() is om

    def test_reset_output_clears(self):
        set_output(OutputManager())
        reset_output()
        assert output_module._output is None

    def test_convenience_functions_use_global(self, capfd, non_tty):
        set_output(OutputManager(format=OutputFormat.PLAIN, no_color=True))
        output_module.print_tree("api", {"orgs": {}})
        output_module.error("bad")
        out, err = capfd.readouterr()
        assert out == "api\n  orgs\n"
        assert "Error: bad" in err
