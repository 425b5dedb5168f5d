"""Cross-strategy sweep: one shared request sent to every remaining strategy."""

from __future__ import annotations

from collections.abc import Sequence

from pulsecheck.clients.base import SearchClient
from pulsecheck.models.result import ProbeResult
from pulsecheck.models.search import SearchRequest
from pulsecheck.probes.base import Clock, Probe


class StrategySweepProbe(Probe):
    """Calls each strategy in turn and records one result per strategy.

    Calls are sequential so per-strategy latency is not skewed by
    contention. A strategy that raises fails alone.
    """

    name = "Strategy Sweep"

    def __init__(
        self,
        client: SearchClient,
        strategies: Sequence[str],
        request: SearchRequest,
        timeout_ms: int | None = None,
        clock: Clock | None = None,
    ) -> None:
        super().__init__(clock)
        self._client = client
        self._strategies = list(strategies)
        self._request = request
        self._timeout_ms = timeout_ms

    @staticmethod
    def result_name(strategy: str) -> str:
        return f"Sweep: {strategy}"

    async def run(self) -> list[ProbeResult]:
        results: list[ProbeResult] = []
        for strategy in self._strategies:
            name = self.result_name(strategy)
            started = self.start()
            try:
                response = await self._client.invoke(
                    strategy, self._request, timeout_ms=self._timeout_ms
                )
            except Exception as exc:
                results.append(self.failure(started, exc, name=name))
                continue

            results.append(
                ProbeResult(
                    name=name,
                    success=response.success,
                    duration_ms=self.elapsed_ms(started),
                    error=None if response.success else response.error,
                    details={
                        "item_count": response.item_count,
                        "timing": response.timing.model_dump() if response.timing else None,
                        "fallback_used": response.fallback_used,
                    },
                )
            )
        return results
