"""Tests for pulsecheck.cli.output - Rich report rendering layer."""

from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from io import StringIO

from rich.console import Console

from pulsecheck.cli.output import (
    output_json,
    render_details,
    render_fixtures,
    render_headline,
)
from pulsecheck.models.fixture import Fixture
from pulsecheck.models.result import ProbeResult, RunStatus
from pulsecheck.reporting.aggregation import aggregate


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_report(*outcomes: bool, status: RunStatus = RunStatus.completed, abort_reason=None):
    results = [
        ProbeResult(
            name=f"Probe {i}",
            success=ok,
            duration_ms=100 + i,
            error=None if ok else f"Probe {i} error",
        )
        for i, ok in enumerate(outcomes)
    ]
    return aggregate(results, status=status, abort_reason=abort_reason)


def _capture_console() -> tuple[Console, StringIO]:
    """Create a Console that captures output to a StringIO buffer."""
    buf = StringIO()
    console = Console(file=buf, force_terminal=False, width=120)
    return console, buf


# ---------------------------------------------------------------------------
# Tests: render_headline
# ---------------------------------------------------------------------------


class TestRenderHeadline:
    """Test headline table rendering for each run outcome."""

    def test_healthy_run(self):
        console, buf = _capture_console()
        render_headline(_make_report(True, True, True), console)
        output = buf.getvalue()
        assert "\u2713 HEALTHY" in output
        assert "3/3 passed (100.00%)" in output
        assert "Failed" not in output

    def test_run_with_failures(self):
        console, buf = _capture_console()
        render_headline(_make_report(True, False), console)
        output = buf.getvalue()
        assert "\u2717 FAILURES" in output
        assert "1/2 passed (50.00%)" in output
        assert "Failed" in output

    def test_aborted_run(self):
        report = _make_report(status=RunStatus.aborted, abort_reason="store unreachable")
        console, buf = _capture_console()
        render_headline(report, console)
        output = buf.getvalue()
        assert "! ABORTED" in output
        assert "store unreachable" in output

    def test_duration_row(self):
        console, buf = _capture_console()
        render_headline(_make_report(True, True), console)
        assert "201ms" in buf.getvalue()


# ---------------------------------------------------------------------------
# Tests: render_details
# ---------------------------------------------------------------------------


class TestRenderDetails:
    """Test failure and full result tables."""

    def test_failures_only_by_default(self):
        console, buf = _capture_console()
        render_details(_make_report(True, False), console)
        output = buf.getvalue()
        assert "Failures" in output
        assert "Probe 1 error" in output
        assert "Probe 0" not in output

    def test_nothing_when_all_pass(self):
        console, buf = _capture_console()
        render_details(_make_report(True, True), console)
        assert buf.getvalue().strip() == ""

    def test_verbose_shows_every_result(self):
        console, buf = _capture_console()
        render_details(_make_report(True, False), console, verbose=True)
        output = buf.getvalue()
        assert "Results" in output
        assert "Probe 0" in output
        assert "Probe 1" in output
        assert "\u2713 pass" in output
        assert "\u2717 fail" in output


# ---------------------------------------------------------------------------
# Tests: render_fixtures
# ---------------------------------------------------------------------------


class TestRenderFixtures:
    def test_empty(self):
        console, buf = _capture_console()
        render_fixtures([], console)
        assert "No fixtures found" in buf.getvalue()

    def test_rows(self):
        fixture = Fixture(
            id="42",
            prompt="pizza deals today",
            area="tampa-bay",
            region="FL",
            result_data=[{}, {}, {}],
            expire_at=datetime.now(timezone.utc) + timedelta(hours=1),
        )
        console, buf = _capture_console()
        render_fixtures([fixture], console)
        output = buf.getvalue()
        assert "pizza deals today" in output
        assert "tampa-bay, FL" in output
        assert "42" in output


# ---------------------------------------------------------------------------
# Tests: output_json
# ---------------------------------------------------------------------------


class TestOutputJson:
    """Test JSON output mode."""

    def test_valid_json_output(self, capsys):
        output_json(_make_report(True, False))
        data = json.loads(capsys.readouterr().out)
        assert data["total"] == 2
        assert data["failed"] == 1
        assert data["status"] == "completed"
        assert data["failures"][0]["name"] == "Probe 1"

    def test_no_rich_markup_in_json(self, capsys):
        output_json(_make_report(False))
        out = capsys.readouterr().out
        assert "[bold" not in out
        assert "[/" not in out


# ---------------------------------------------------------------------------
# Tests: Non-TTY mode
# ---------------------------------------------------------------------------


class TestNonTTYMode:
    """Test that non-TTY/CI mode works without ANSI garbage."""

    def test_headline_no_ansi_in_non_terminal(self):
        buf = StringIO()
        console = Console(file=buf, force_terminal=False, no_color=True, width=120)
        render_headline(_make_report(True), console)
        output = buf.getvalue()
        assert "\u2713 HEALTHY" in output
        assert "\x1b[" not in output
