"""Orchestrator: runs the fixed probe sequence once and reports on it.

Probes run strictly one after another in the order the factory returns
them. Each runs inside a failure boundary, so one defective probe is
recorded as a failure and the run carries on. Conditions outside any probe
(a preflight check or the probe factory raising) abort the run: whatever
results exist are still reported and a critical alert is sent.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Awaitable, Callable, Sequence
from datetime import datetime, timezone
from enum import Enum

from pulsecheck.alerts.dispatcher import AlertDispatcher
from pulsecheck.models.result import ProbeResult, RunReport, RunStatus
from pulsecheck.probes.base import Clock, Probe, describe_error
from pulsecheck.reporting.aggregation import aggregate, summary_line

logger = logging.getLogger(__name__)

ProbeFactory = Callable[[], Sequence[Probe]]
Preflight = Callable[[], Awaitable[None]]

CRITICAL_MESSAGE = "Smoke tests failed to complete"


class RunState(str, Enum):
    """Lifecycle of a single orchestrator run."""

    not_started = "not_started"
    running = "running"
    completed = "completed"
    aborted = "aborted"


class Orchestrator:
    """Runs one smoke-test pass.

    An instance is good for exactly one run; schedule a fresh instance for
    each invocation. There are no retries within a run.
    """

    def __init__(
        self,
        probe_factory: ProbeFactory,
        *,
        preflight: Sequence[Preflight] = (),
        dispatcher: AlertDispatcher | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._probe_factory = probe_factory
        self._preflight = list(preflight)
        self._dispatcher = dispatcher
        self._clock = clock or time.perf_counter
        self._results: list[ProbeResult] = []
        self.state = RunState.not_started

    @property
    def results(self) -> list[ProbeResult]:
        """Snapshot of the results recorded so far."""
        return list(self._results)

    async def run_all(self) -> RunReport:
        """Execute preflight checks and every probe, then aggregate and alert.

        Returns:
            The RunReport; ``status`` is ``aborted`` when a fatal condition
            stopped the run early.

        Raises:
            RuntimeError: If this orchestrator has already run.
        """
        if self.state != RunState.not_started:
            raise RuntimeError(f"Orchestrator already used (state={self.state.value})")

        self.state = RunState.running
        started_at = datetime.now(timezone.utc)
        logger.info("Starting smoke tests...")

        fatal: Exception | None = None
        try:
            for check in self._preflight:
                await check()
            probes = list(self._probe_factory())
            for probe in probes:
                self._results.extend(await self._run_probe(probe))
        except Exception as exc:
            fatal = exc
            logger.exception("Fatal error during smoke tests")

        if fatal is None:
            self.state = RunState.completed
            report = aggregate(self._results, timestamp=started_at)
        else:
            self.state = RunState.aborted
            report = aggregate(
                self._results,
                status=RunStatus.aborted,
                timestamp=started_at,
                abort_reason=describe_error(fatal),
            )

        logger.info("Test report: %s status=%s", summary_line(report), report.status.value)
        for failure in report.failures:
            logger.warning("FAILED %s: %s", failure.name, failure.error)

        if self._dispatcher is not None:
            if fatal is not None:
                await self._dispatcher.notify_critical(CRITICAL_MESSAGE, fatal)
            await self._dispatcher.notify_if_needed(report)

        return report

    async def _run_probe(self, probe: Probe) -> list[ProbeResult]:
        """Run one probe, converting an escaped exception into one failure."""
        name = getattr(probe, "name", type(probe).__name__)
        logger.debug("Running probe %s", name)
        started = self._clock()
        try:
            results = await probe.run()
        except Exception as exc:
            logger.error("Probe %s raised: %s", name, describe_error(exc))
            return [
                ProbeResult(
                    name=name,
                    success=False,
                    duration_ms=max(0, round((self._clock() - started) * 1000)),
                    error=describe_error(exc),
                )
            ]
        return list(results)
