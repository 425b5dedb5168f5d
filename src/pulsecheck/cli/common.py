"""Helpers shared by the CLI commands."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from pulsecheck.errors import ConfigError
from pulsecheck.models.config import HarnessSettings, load_settings

# Exit code for settings that cannot be loaded at all
CONFIG_ERROR_EXIT = 2


def load_settings_or_exit(config_path: Path | None, console: Console) -> HarnessSettings:
    """Load settings, printing validation errors and exiting on failure."""
    try:
        return load_settings(config_path)
    except ConfigError as exc:
        console.print(f"[bold red]Configuration error:[/bold red] {exc}")
        for err in exc.errors:
            console.print(f"  {err}")
        raise typer.Exit(code=CONFIG_ERROR_EXIT)
