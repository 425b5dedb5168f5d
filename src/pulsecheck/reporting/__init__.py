"""pulsecheck reporting - run aggregation."""

from pulsecheck.reporting.aggregation import aggregate, summarize, summary_line

__all__ = ["aggregate", "summarize", "summary_line"]
