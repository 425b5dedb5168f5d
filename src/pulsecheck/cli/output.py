"""Rich terminal output for run reports.

Provides the headline status table, the failure and result tables, and the
pure JSON output used by CI.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from rich import box
from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from pulsecheck.models.fixture import Fixture
    from pulsecheck.models.result import ProbeResult, RunReport


# Status styling map: (aborted, has_failures) -> (label, Rich markup style)
_STATUS_STYLES: dict[tuple[bool, bool], tuple[str, str]] = {
    (False, False): ("\u2713 HEALTHY", "bold green"),
    (False, True): ("\u2717 FAILURES", "bold red"),
    (True, False): ("! ABORTED", "bold bright_red"),
    (True, True): ("! ABORTED", "bold bright_red"),
}


def render_headline(report: RunReport, console: Console) -> None:
    """Render a compact key-value summary of the run."""
    table = Table(box=box.SIMPLE, show_header=False, padding=(0, 2))
    table.add_column("Key", style="bold")
    table.add_column("Value")

    label, style = _STATUS_STYLES[(report.aborted, report.has_failures)]
    table.add_row("Status", f"[{style}]{label}[/{style}]")
    table.add_row(
        "Probes",
        f"{report.passed}/{report.total} passed ({report.success_rate_percent})",
    )
    if report.failed:
        table.add_row("Failed", str(report.failed))
    table.add_row("Duration", f"{report.total_duration_ms}ms")
    if report.abort_reason:
        table.add_row("Aborted", report.abort_reason)

    console.print()
    console.print(table)


def _results_table(title: str, results: list[ProbeResult]) -> Table:
    table = Table(title=title, box=box.SIMPLE_HEAD, title_justify="left")
    table.add_column("Probe", style="bold")
    table.add_column("Result")
    table.add_column("Duration", justify="right")
    table.add_column("Error", overflow="fold")
    for result in results:
        mark = "[green]\u2713 pass[/green]" if result.success else "[red]\u2717 fail[/red]"
        table.add_row(result.name, mark, f"{result.duration_ms}ms", result.error or "")
    return table


def render_details(report: RunReport, console: Console, verbose: bool = False) -> None:
    """Render failing probes, or every probe when verbose."""
    if verbose and report.results:
        console.print(_results_table("Results", report.results))
    elif report.failures:
        console.print(_results_table("Failures", report.failures))


def render_fixtures(fixtures: list[Fixture], console: Console) -> None:
    """Render a table of fixtures from the store."""
    if not fixtures:
        console.print("[yellow]No fixtures found[/yellow]")
        return

    table = Table(box=box.SIMPLE_HEAD)
    table.add_column("ID", overflow="fold")
    table.add_column("Prompt")
    table.add_column("Location")
    table.add_column("Timeline")
    table.add_column("Items", justify="right")
    table.add_column("Expires")
    for fixture in fixtures:
        location = ", ".join(p for p in (fixture.area, fixture.region, fixture.country) if p)
        table.add_row(
            fixture.id,
            fixture.prompt,
            location,
            fixture.timeline or "",
            str(len(fixture.result_data)),
            fixture.expire_at.isoformat(),
        )
    console.print(table)


def output_json(report: RunReport) -> None:
    """Write the report as pure JSON to stdout.

    No Rich markup, no color, no extra text.
    """
    sys.stdout.write(report.model_dump_json(indent=2))
    sys.stdout.write("\n")
