"""Foundational probes: API liveness and fixture store connectivity."""

from __future__ import annotations

from pulsecheck.clients.base import FixtureProvider, SearchClient
from pulsecheck.models.result import ProbeResult
from pulsecheck.probes.base import Clock, Probe


class ApiHealthProbe(Probe):
    """Checks the search API liveness endpoint."""

    name = "API Health Check"

    def __init__(self, client: SearchClient, timeout_ms: int = 5000, clock: Clock | None = None) -> None:
        super().__init__(clock)
        self._client = client
        self._timeout_ms = timeout_ms

    async def run(self) -> list[ProbeResult]:
        started = self.start()
        try:
            healthy = await self._client.health_check(timeout_ms=self._timeout_ms)
        except Exception as exc:
            return [self.failure(started, exc)]

        return [
            ProbeResult(
                name=self.name,
                success=healthy,
                duration_ms=self.elapsed_ms(started),
                error=None if healthy else "API is not healthy",
            )
        ]


class FixtureConnectivityProbe(Probe):
    """Asks the fixture store for one recent sample."""

    name = "Fixture Store Connection"

    def __init__(self, fixtures: FixtureProvider, clock: Clock | None = None) -> None:
        super().__init__(clock)
        self._fixtures = fixtures

    async def run(self) -> list[ProbeResult]:
        started = self.start()
        try:
            fixture = await self._fixtures.recent_fixture()
        except Exception as exc:
            return [self.failure(started, exc)]

        if fixture is None:
            return [
                ProbeResult(
                    name=self.name,
                    success=False,
                    duration_ms=self.elapsed_ms(started),
                    error="No fixtures returned by the store",
                )
            ]
        return [
            ProbeResult(
                name=self.name,
                success=True,
                duration_ms=self.elapsed_ms(started),
                details={"id": fixture.id, "prompt": fixture.prompt},
            )
        ]
