"""Collaborator interfaces used by the probes.

SearchClient wraps the external search API; FixtureProvider wraps the store
of previously recorded queries. Probes and the orchestrator only depend on
these ABCs so tests can substitute stubs per run.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from pulsecheck.models.fixture import Fixture, FixtureFilters
from pulsecheck.models.search import SearchRequest, SearchResponse


class SearchClient(ABC):
    """Abstract facade over the multi-strategy search API.

    Implementations must never raise for transport or protocol failures:
    those come back as ``SearchResponse(success=False, error=...)``.
    """

    @abstractmethod
    async def invoke(
        self,
        strategy: str,
        request: SearchRequest,
        timeout_ms: int | None = None,
    ) -> SearchResponse:
        """Send one search request to the given strategy.

        Args:
            strategy: Strategy name, used as the last path segment.
            request: The query to send.
            timeout_ms: Per-call timeout; the client default when None.

        Returns:
            The decoded response, or a normalized failed response.
        """

    @abstractmethod
    async def health_check(self, timeout_ms: int = 5000) -> bool:
        """Return True iff the liveness endpoint answered HTTP 200."""

    async def query_cache(self, request: SearchRequest) -> SearchResponse:
        return await self.invoke("query_cache", request)

    async def rag_vector(self, request: SearchRequest) -> SearchResponse:
        return await self.invoke("rag_vector", request)

    async def rag_cache(self, request: SearchRequest) -> SearchResponse:
        return await self.invoke("rag_cache", request)

    async def rag_hybrid(self, request: SearchRequest) -> SearchResponse:
        return await self.invoke("rag_hybrid", request)

    async def web_search_llm(self, request: SearchRequest) -> SearchResponse:
        return await self.invoke("web_search_llm", request)

    async def combined(self, request: SearchRequest) -> SearchResponse:
        return await self.invoke("combined", request)


class FixtureProvider(ABC):
    """Abstract source of recorded queries used as realistic probe input."""

    async def ensure_ready(self) -> None:
        """Check the provider can be used at all.

        Called once before any probe runs; raising here aborts the run.
        Default implementation accepts unconditionally.
        """

    @abstractmethod
    async def recent_fixtures(
        self,
        filters: FixtureFilters | None = None,
        limit: int = 1,
        include_expired: bool = False,
    ) -> list[Fixture]:
        """Return up to ``limit`` fixtures, most recent first.

        Expired fixtures are excluded unless ``include_expired`` is set.
        """

    @abstractmethod
    async def get_fixture(self, fixture_id: str) -> Fixture | None:
        """Return the fixture with this id, or None if it does not exist."""

    @abstractmethod
    async def fixtures_by_prompt(self, prompt: str, limit: int = 5) -> list[Fixture]:
        """Return unexpired fixtures whose prompt contains ``prompt``."""

    async def recent_fixture(self, **filters: str | None) -> Fixture | None:
        """Return the most recent unexpired fixture matching the filters."""
        fixtures = await self.recent_fixtures(FixtureFilters(**filters), limit=1)
        return fixtures[0] if fixtures else None
