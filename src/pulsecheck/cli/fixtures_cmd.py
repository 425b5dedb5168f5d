"""pulsecheck fixtures -- list recorded queries available for replay."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from pulsecheck.cli.common import load_settings_or_exit
from pulsecheck.cli.output import render_fixtures
from pulsecheck.clients.fixtures import PostgrestFixtureProvider
from pulsecheck.errors import FixtureProviderError
from pulsecheck.log import setup_logging
from pulsecheck.models.fixture import Fixture, FixtureFilters

console = Console(stderr=True)


def fixtures(
    area: Optional[str] = typer.Option(None, "--area", help="Filter by area"),
    region: Optional[str] = typer.Option(None, "--region", help="Filter by region"),
    prompt: Optional[str] = typer.Option(None, "--prompt", help="Substring match on the prompt"),
    fixture_id: Optional[str] = typer.Option(None, "--id", help="Look up a single fixture"),
    limit: int = typer.Option(10, "-n", "--limit", help="Maximum fixtures to list"),
    usable_only: bool = typer.Option(False, "--usable", help="Only fixtures with result data"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to pulsecheck.yaml"),
) -> None:
    """List recent fixtures from the fixture store."""
    settings = load_settings_or_exit(config, console)
    setup_logging(settings.log_level)

    async def _fetch() -> list[Fixture]:
        provider = PostgrestFixtureProvider(
            settings.supabase_url,
            settings.supabase_service_role_key,
            table=settings.fixture_table,
            timeout_ms=settings.cache_lookup_timeout,
        )
        try:
            if fixture_id:
                found = await provider.get_fixture(fixture_id)
                return [found] if found else []
            if prompt:
                return await provider.fixtures_by_prompt(prompt, limit=limit)
            return await provider.recent_fixtures(
                FixtureFilters(area=area, region=region), limit=limit
            )
        finally:
            await provider.aclose()

    try:
        found = asyncio.run(_fetch())
    except FixtureProviderError as exc:
        console.print(f"[bold red]Fixture store error:[/bold red] {exc}")
        raise typer.Exit(code=1)

    if usable_only:
        found = [f for f in found if f.is_usable()]
    render_fixtures(found, Console())
