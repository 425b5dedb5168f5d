"""Alert dispatcher: decides whether a run warrants notification and fans out.

Notification is best-effort. Each sink delivery is wrapped on its own, so
one sink failing is logged and never blocks the others or the caller.
"""

from __future__ import annotations

import asyncio
import logging
import traceback
from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Any

from pulsecheck.alerts.sinks import NotificationSink
from pulsecheck.models.result import RunReport
from pulsecheck.probes.base import describe_error
from pulsecheck.reporting.aggregation import summarize

logger = logging.getLogger(__name__)

# Trailing characters of a traceback carried in critical alerts
STACK_LIMIT = 1500


def format_failure_message(report: RunReport) -> str:
    """Short human-readable summary of a failing run."""
    return (
        "Pulse smoke tests failed\n"
        f"Failed: {report.failed}/{report.total} tests\n"
        f"Success Rate: {report.success_rate_percent}\n"
        f"Duration: {report.total_duration_ms}ms"
    )


class AlertDispatcher:
    """Sends run alerts to the configured sinks."""

    def __init__(self, sinks: Sequence[NotificationSink]) -> None:
        self._sinks = list(sinks)

    @property
    def sinks(self) -> list[NotificationSink]:
        return list(self._sinks)

    async def notify_if_needed(self, report: RunReport) -> int:
        """Alert enabled sinks when the report has failures.

        Returns:
            Number of sinks that accepted the alert (0 when none was due).
        """
        if not report.failures:
            logger.debug("No failures; skipping notifications")
            return 0

        targets = [s for s in self._sinks if s.active]
        if not targets:
            logger.info("Failures found but no notification sink is enabled")
            return 0

        return await self._fan_out(targets, format_failure_message(report), summarize(report))

    async def notify_critical(self, message: str, error: BaseException | None) -> int:
        """Alert every configured sink, regardless of its enable flag.

        Used when a run aborts before its probes could complete.
        """
        targets = [s for s in self._sinks if s.configured]
        if not targets:
            logger.warning("Critical alert not sent: no webhook configured")
            return 0

        details: dict[str, Any] = {
            "error": describe_error(error) if error is not None else "Unknown error",
            "error_type": type(error).__name__ if error is not None else None,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        if error is not None:
            details["stack"] = "".join(traceback.format_exception(error))[-STACK_LIMIT:]
        return await self._fan_out(targets, f"CRITICAL: {message}", details)

    async def _fan_out(
        self,
        sinks: Sequence[NotificationSink],
        message: str,
        details: dict[str, Any],
    ) -> int:
        delivered = await asyncio.gather(
            *(self._deliver(sink, message, details) for sink in sinks)
        )
        return sum(delivered)

    @staticmethod
    async def _deliver(sink: NotificationSink, message: str, details: dict[str, Any]) -> bool:
        try:
            await sink.send(message, details)
        except Exception as exc:
            logger.error("Failed to send %s notification: %s", sink.name, describe_error(exc))
            return False
        return True
