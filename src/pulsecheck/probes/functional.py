"""Functional probes replaying recorded fixtures against single strategies."""

from __future__ import annotations

from datetime import datetime, timezone

from pulsecheck.clients.base import FixtureProvider, SearchClient
from pulsecheck.models.fixture import Fixture
from pulsecheck.models.result import ProbeResult
from pulsecheck.models.search import SearchRequest
from pulsecheck.probes.base import Clock, Probe

NO_FIXTURE_ERROR = "No valid fixture available for testing"
NO_DATA_ERROR = "No data returned"


class PrimaryStrategyProbe(Probe):
    """Replays a usable fixture against the low-latency cache strategy.

    A run without a usable fixture is a failure, not a silent pass, and the
    search API is not called.
    """

    name = "Query Cache Strategy"

    def __init__(
        self,
        client: SearchClient,
        fixtures: FixtureProvider,
        strategy: str = "query_cache",
        timeout_ms: int | None = None,
        candidate_limit: int = 5,
        clock: Clock | None = None,
    ) -> None:
        super().__init__(clock)
        self._client = client
        self._fixtures = fixtures
        self._strategy = strategy
        self._timeout_ms = timeout_ms
        self._candidate_limit = candidate_limit

    async def run(self) -> list[ProbeResult]:
        started = self.start()
        try:
            candidates = await self._fixtures.recent_fixtures(limit=self._candidate_limit)
            now = datetime.now(timezone.utc)
            fixture = next((f for f in candidates if f.is_usable(now)), None)
            if fixture is None:
                return [
                    ProbeResult(
                        name=self.name,
                        success=False,
                        duration_ms=self.elapsed_ms(started),
                        error=NO_FIXTURE_ERROR,
                    )
                ]

            response = await self._client.invoke(
                self._strategy,
                fixture.to_request(enable_fallbacks=False),
                timeout_ms=self._timeout_ms,
            )
        except Exception as exc:
            return [self.failure(started, exc)]

        return [
            ProbeResult(
                name=self.name,
                success=response.success,
                duration_ms=self.elapsed_ms(started),
                error=None if response.success else response.error,
                details={
                    "item_count": response.item_count,
                    "timing": response.timing.model_dump() if response.timing else None,
                    "source": response.source,
                    "cache_hit": response.cache_hit,
                    "tested_query": fixture.prompt,
                },
            )
        ]


class SecondaryStrategyProbe(Probe):
    """Exercises the vector strategy, falling back to a default query.

    An empty result set counts as a failure even when the call succeeded.
    """

    name = "RAG Vector Strategy"

    def __init__(
        self,
        client: SearchClient,
        fixtures: FixtureProvider,
        default_request: SearchRequest,
        strategy: str = "rag_vector",
        timeout_ms: int | None = None,
        clock: Clock | None = None,
    ) -> None:
        super().__init__(clock)
        self._client = client
        self._fixtures = fixtures
        self._default = default_request
        self._strategy = strategy
        self._timeout_ms = timeout_ms

    def _build_request(self, fixture: Fixture | None) -> SearchRequest:
        if fixture is None:
            return self._default.model_copy(update={"enable_fallbacks": False})
        return SearchRequest(
            query=fixture.prompt,
            area=fixture.area or self._default.area,
            region=fixture.region or self._default.region,
            country=fixture.country or self._default.country,
            timeline=fixture.timeline or self._default.timeline,
            button_click_count=fixture.button_click_count,
            enable_fallbacks=False,
        )

    async def run(self) -> list[ProbeResult]:
        started = self.start()
        try:
            fixture = await self._fixtures.recent_fixture(
                area=self._default.area, region=self._default.region
            )
            request = self._build_request(fixture)
            response = await self._client.invoke(
                self._strategy, request, timeout_ms=self._timeout_ms
            )
        except Exception as exc:
            return [self.failure(started, exc)]

        if not response.success:
            success, error = False, response.error
        elif response.item_count == 0:
            success, error = False, NO_DATA_ERROR
        else:
            success, error = True, None

        return [
            ProbeResult(
                name=self.name,
                success=success,
                duration_ms=self.elapsed_ms(started),
                error=error,
                details={
                    "item_count": response.item_count,
                    "timing": response.timing.model_dump() if response.timing else None,
                    "source": response.source,
                    "used_fixture": fixture.id if fixture else None,
                    "tested_query": request.query,
                },
            )
        ]
