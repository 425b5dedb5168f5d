"""pulsecheck CLI entry point.

``pulsecheck run`` is what the scheduler invokes; ``health`` and
``fixtures`` are for poking at the API and the fixture store by hand.
"""

import typer

from pulsecheck import __version__
from pulsecheck.cli.fixtures_cmd import fixtures
from pulsecheck.cli.health_cmd import health
from pulsecheck.cli.run_cmd import run

app = typer.Typer(
    name="pulsecheck",
    help="Scheduled smoke tests for the Pulse search API.",
    no_args_is_help=True,
    # Settings hold the fixture store key and webhook URLs
    pretty_exceptions_show_locals=False,
)

app.command(help="Run every probe once, report, and alert on failures.")(run)
app.command(help="Check the search API health endpoint.")(health)
app.command(help="List recorded queries in the fixture store.")(fixtures)


def _print_version(value: bool) -> None:
    if value:
        typer.echo(f"pulsecheck {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=_print_version,
        is_eager=True,
    ),
) -> None:
    """Scheduled smoke tests for the Pulse search API."""
