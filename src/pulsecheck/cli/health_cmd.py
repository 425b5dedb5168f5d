"""pulsecheck health -- single liveness check of the search API."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from pulsecheck.cli.common import load_settings_or_exit
from pulsecheck.clients.search_api import HttpSearchClient
from pulsecheck.log import setup_logging

console = Console(stderr=True)


def health(
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to pulsecheck.yaml"),
) -> None:
    """Check the search API health endpoint."""
    settings = load_settings_or_exit(config, console)
    setup_logging(settings.log_level)

    async def _check() -> bool:
        async with HttpSearchClient(settings.pulse_api_base_url, settings.api_timeout) as client:
            return await client.health_check(timeout_ms=settings.health_timeout)

    if asyncio.run(_check()):
        Console().print(f"[bold green]\u2713 healthy[/bold green] {settings.pulse_api_base_url}")
        return
    Console().print(f"[bold red]\u2717 unhealthy[/bold red] {settings.pulse_api_base_url}")
    raise typer.Exit(code=1)
