"""pulsecheck - smoke-test harness for the Pulse search API."""

__version__ = "0.1.0"
