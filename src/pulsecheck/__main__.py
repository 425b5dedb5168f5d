"""Allow ``python -m pulsecheck`` in scheduler images without the script shim."""

from pulsecheck.cli.main import app

app(prog_name="pulsecheck")
