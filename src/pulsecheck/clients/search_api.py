"""httpx-backed SearchClient for the Pulse search API."""

from __future__ import annotations

import logging
import time

import httpx
from pydantic import ValidationError

from pulsecheck.clients.base import SearchClient
from pulsecheck.models.search import SearchRequest, SearchResponse

logger = logging.getLogger(__name__)

SEARCH_PATH = "/api/search/{strategy}"
HEALTH_PATH = "/health"


async def _log_request(request: httpx.Request) -> None:
    logger.debug(
        "Making API request method=%s url=%s body=%s",
        request.method,
        request.url,
        request.content.decode("utf-8", errors="replace"),
    )


async def _log_response(response: httpx.Response) -> None:
    logger.debug(
        "API response received status=%s url=%s",
        response.status_code,
        response.request.url,
    )


def _error_from_body(response: httpx.Response) -> str | None:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return None


class HttpSearchClient(SearchClient):
    """Asynchronous httpx client wrapper.

    One AsyncClient is created (or injected) per process and shared by all
    probes. Request logging hooks are attached only to a client built here;
    an injected client is used as is. Close it with ``aclose()`` or use the
    instance as an async context manager.
    """

    def __init__(
        self,
        base_url: str,
        timeout_ms: int = 30000,
        client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout_ms = timeout_ms
        self._client = client or httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout_ms / 1000,
            headers={"Content-Type": "application/json"},
            event_hooks={"request": [_log_request], "response": [_log_response]},
            transport=transport,
        )

    async def invoke(
        self,
        strategy: str,
        request: SearchRequest,
        timeout_ms: int | None = None,
    ) -> SearchResponse:
        timeout = (timeout_ms or self.timeout_ms) / 1000
        headers = {"X-Device-ID": request.device_id} if request.device_id else None
        url = f"{self.base_url}{SEARCH_PATH.format(strategy=strategy)}"

        logger.info("Calling %s API query=%r", strategy, request.query)
        start = time.perf_counter()
        try:
            response = await self._client.post(
                url,
                json=request.to_payload(),
                headers=headers,
                timeout=timeout,
            )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            message = str(exc) or type(exc).__name__
            logger.error("%s API failed: %s", strategy, message)
            return SearchResponse.failed(strategy, message)

        if not response.is_success:
            message = _error_from_body(response) or (
                f"Request failed with status code {response.status_code}"
            )
            logger.error("%s API failed status=%s: %s", strategy, response.status_code, message)
            return SearchResponse.failed(strategy, message)

        try:
            result = SearchResponse.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            logger.error("%s API returned a malformed body: %s", strategy, exc)
            return SearchResponse.failed(strategy, f"Malformed response body: {exc}")

        logger.info(
            "%s API completed duration=%dms success=%s items=%d source=%s",
            strategy,
            round((time.perf_counter() - start) * 1000),
            result.success,
            result.item_count,
            result.source,
        )
        return result

    async def health_check(self, timeout_ms: int = 5000) -> bool:
        try:
            response = await self._client.get(
                f"{self.base_url}{HEALTH_PATH}", timeout=timeout_ms / 1000
            )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.error("Health check failed: %s", str(exc) or type(exc).__name__)
            return False
        if response.status_code != 200:
            logger.error("Health check failed status=%s", response.status_code)
            return False
        return True

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> HttpSearchClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
