"""Reduce a run's ProbeResults into a RunReport.

Pure functions only: the same result list always produces an equal report,
so nothing here reads the clock.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import Any

from pulsecheck.models.result import ProbeResult, RunReport, RunStatus


def aggregate(
    results: Sequence[ProbeResult],
    *,
    status: RunStatus = RunStatus.completed,
    timestamp: datetime | None = None,
    abort_reason: str | None = None,
) -> RunReport:
    """Build the RunReport for a finished (or aborted) run.

    Args:
        results: Probe results in execution order.
        status: Terminal status of the run.
        timestamp: When the run started; supplied by the caller.
        abort_reason: Why the run stopped early, for aborted runs.

    Returns:
        RunReport with counts, success rate (0.0 for an empty run), total
        duration and the ordered failure subset.
    """
    total = len(results)
    passed = sum(1 for r in results if r.success)
    failures = [r for r in results if not r.success]

    return RunReport(
        status=status,
        timestamp=timestamp,
        total=total,
        passed=passed,
        failed=total - passed,
        success_rate=passed / total if total else 0.0,
        total_duration_ms=sum(r.duration_ms for r in results),
        results=list(results),
        failures=failures,
        abort_reason=abort_reason,
    )


def summarize(report: RunReport) -> dict[str, Any]:
    """Condensed detail payload for alerts: failing probes only."""
    return {
        "timestamp": report.timestamp.isoformat() if report.timestamp else None,
        "failures": [
            {
                "test": failure.name,
                "error": failure.error,
                "duration": f"{failure.duration_ms}ms",
            }
            for failure in report.failures
        ],
    }


def summary_line(report: RunReport) -> str:
    """One-line human summary used in logs."""
    return (
        f"{report.passed}/{report.total} passed ({report.success_rate_percent}) "
        f"in {report.total_duration_ms}ms"
    )
