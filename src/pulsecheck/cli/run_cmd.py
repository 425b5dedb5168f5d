"""pulsecheck run -- execute one smoke-test pass and report on it.

Loads settings, wires the shared clients, runs the orchestrator once,
renders the report and exits with 0 for a completed run (probe failures
are reported, not fatal) or 1 for an aborted run.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from pulsecheck.cli.common import load_settings_or_exit
from pulsecheck.cli.output import output_json, render_details, render_headline
from pulsecheck.log import setup_logging
from pulsecheck.models.config import HarnessSettings
from pulsecheck.models.result import RunReport, RunStatus
from pulsecheck.runtime import build_runtime

console = Console(stderr=True)

# Exit code mapping: run status -> exit code
EXIT_CODES: dict[str, int] = {
    RunStatus.completed.value: 0,
    RunStatus.aborted.value: 1,
}


def run(
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to pulsecheck.yaml"),
    format_json: bool = typer.Option(False, "--json", help="Output pure JSON to stdout"),
    verbose: bool = typer.Option(False, "-V", "--verbose", help="Show every probe result"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Override LOG_LEVEL"),
) -> None:
    """Run all smoke-test probes against the search API."""
    settings = load_settings_or_exit(config, console)
    setup_logging(log_level or settings.log_level)

    report = asyncio.run(_run_async(settings))

    if format_json:
        output_json(report)
    else:
        output_console = Console()
        render_headline(report, output_console)
        render_details(report, output_console, verbose=verbose)

    exit_code = EXIT_CODES.get(report.status.value, 1)
    if exit_code != 0:
        raise typer.Exit(code=exit_code)


async def _run_async(settings: HarnessSettings) -> RunReport:
    """Async implementation of the run command."""
    runtime = build_runtime(settings)
    try:
        return await runtime.orchestrator().run_all()
    finally:
        await runtime.aclose()
