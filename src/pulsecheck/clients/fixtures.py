"""PostgREST-backed FixtureProvider.

Reads the search API's own ``query_cache`` table through the PostgREST
interface the hosted database exposes, using the service-role key.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

import httpx
from pydantic import ValidationError

from pulsecheck.clients.base import FixtureProvider
from pulsecheck.errors import FixtureProviderError
from pulsecheck.models.fixture import Fixture, FixtureFilters

logger = logging.getLogger(__name__)


class PostgrestFixtureProvider(FixtureProvider):
    """Fixture lookups over PostgREST query-string operators."""

    def __init__(
        self,
        url: str | None,
        api_key: str | None,
        table: str = "query_cache",
        timeout_ms: int = 5000,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.url = (url or "").rstrip("/")
        self.table = table
        self._api_key = api_key
        self._timeout = timeout_ms / 1000
        self._client = client or httpx.AsyncClient(timeout=self._timeout)

    @property
    def endpoint(self) -> str:
        return f"{self.url}/rest/v1/{self.table}"

    async def ensure_ready(self) -> None:
        if not self.url:
            raise FixtureProviderError("Fixture store URL is not configured (SUPABASE_URL)")
        if not self._api_key:
            raise FixtureProviderError(
                "Fixture store key is not configured (SUPABASE_SERVICE_ROLE_KEY)"
            )

    async def recent_fixtures(
        self,
        filters: FixtureFilters | None = None,
        limit: int = 1,
        include_expired: bool = False,
    ) -> list[Fixture]:
        params: list[tuple[str, str]] = [("select", "*")]
        if not include_expired:
            params.append(("expire_at", f"gte.{_now_iso()}"))
        if filters is not None:
            for column, value in filters.model_dump(exclude_none=True).items():
                params.append((column, f"eq.{value}"))
        params += [("order", "created_at.desc"), ("limit", str(limit))]

        logger.info("Fetching recent fixtures filters=%s limit=%d", filters, limit)
        rows = await self._select(params)
        if not rows:
            logger.warning("No fixtures found")
        return self._decode(rows)

    async def get_fixture(self, fixture_id: str) -> Fixture | None:
        logger.info("Fetching fixture id=%s", fixture_id)
        rows = await self._select([("select", "*"), ("id", f"eq.{fixture_id}"), ("limit", "1")])
        fixtures = self._decode(rows)
        if not fixtures:
            logger.warning("Fixture not found id=%s", fixture_id)
            return None
        return fixtures[0]

    async def fixtures_by_prompt(self, prompt: str, limit: int = 5) -> list[Fixture]:
        logger.info("Fetching fixtures by prompt=%r limit=%d", prompt, limit)
        params = [
            ("select", "*"),
            ("prompt", f"ilike.*{prompt}*"),
            ("expire_at", f"gte.{_now_iso()}"),
            ("order", "created_at.desc"),
            ("limit", str(limit)),
        ]
        fixtures = self._decode(await self._select(params))
        logger.info("Found %d fixtures", len(fixtures))
        return fixtures

    async def _select(self, params: list[tuple[str, str]]) -> list[dict[str, Any]]:
        await self.ensure_ready()
        headers = {
            "apikey": self._api_key or "",
            "Authorization": f"Bearer {self._api_key}",
            "Accept": "application/json",
        }
        try:
            response = await self._client.get(
                self.endpoint, params=params, headers=headers, timeout=self._timeout
            )
            response.raise_for_status()
            rows = response.json()
        except httpx.HTTPStatusError as exc:
            logger.error("Fixture store returned status=%s", exc.response.status_code)
            raise FixtureProviderError(
                f"Fixture store returned status {exc.response.status_code}"
            ) from exc
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
            logger.error("Failed to query fixture store: %s", exc)
            raise FixtureProviderError(f"Failed to query fixture store: {exc}") from exc

        if not isinstance(rows, list):
            raise FixtureProviderError("Fixture store returned a non-list body")
        return rows

    @staticmethod
    def _decode(rows: list[dict[str, Any]]) -> list[Fixture]:
        fixtures: list[Fixture] = []
        for row in rows:
            try:
                fixtures.append(Fixture.from_row(row))
            except (ValidationError, AttributeError) as exc:
                logger.warning("Skipping malformed fixture row id=%s: %s", _row_id(row), exc)
        return fixtures

    async def aclose(self) -> None:
        await self._client.aclose()


def _row_id(row: Any) -> Any:
    return row.get("id") if isinstance(row, dict) else None


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()
