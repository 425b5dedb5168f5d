"""Latency probe: one timed call per strategy against its expected ceiling."""

from __future__ import annotations

from collections.abc import Sequence

from pulsecheck.clients.base import SearchClient
from pulsecheck.models.config import PerformanceTarget
from pulsecheck.models.result import ProbeResult
from pulsecheck.models.search import SearchRequest
from pulsecheck.probes.base import Clock, Probe


class PerformanceProbe(Probe):
    """Flags strategies whose wall-clock latency exceeds their target.

    The threshold is inclusive: a call taking exactly ``expected_ms``
    passes. Only the probe's own measurement decides; the server's
    ``timing.total_ms`` is reported alongside for comparison.

    The transport timeout is independent of the targets so a slow but
    successful call is still measured and reported as a breach rather than
    a transport failure.
    """

    name = "Performance"

    def __init__(
        self,
        client: SearchClient,
        targets: Sequence[PerformanceTarget],
        request: SearchRequest,
        timeout_ms: int | None = None,
        clock: Clock | None = None,
    ) -> None:
        super().__init__(clock)
        self._client = client
        self._targets = list(targets)
        self._request = request
        self._timeout_ms = timeout_ms

    @staticmethod
    def result_name(strategy: str) -> str:
        return f"{strategy} Performance"

    async def run(self) -> list[ProbeResult]:
        results: list[ProbeResult] = []
        for target in self._targets:
            name = self.result_name(target.strategy)
            started = self.start()
            try:
                response = await self._client.invoke(
                    target.strategy, self._request, timeout_ms=self._timeout_ms
                )
            except Exception as exc:
                results.append(self.failure(started, exc, name=name))
                continue

            duration = self.elapsed_ms(started)
            within_expected = duration <= target.expected_ms

            errors: list[str] = []
            if not response.success:
                errors.append(response.error or "Unknown error")
            if not within_expected:
                errors.append(f"Exceeded expected time: {duration}ms > {target.expected_ms}ms")

            results.append(
                ProbeResult(
                    name=name,
                    success=response.success and within_expected,
                    duration_ms=duration,
                    error="; ".join(errors) or None,
                    details={
                        "expected_ms": target.expected_ms,
                        "actual_ms": duration,
                        "within_expected": within_expected,
                        "server_total_ms": response.timing.total_ms if response.timing else None,
                    },
                )
            )
        return results
