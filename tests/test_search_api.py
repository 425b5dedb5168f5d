"""Tests for pulsecheck.clients.search_api - HttpSearchClient normalization."""

from __future__ import annotations

import json
import logging

import httpx
import pytest

from pulsecheck.clients.search_api import HttpSearchClient
from pulsecheck.models.search import SearchRequest

BASE_URL = "https://pulse.test"


def _client(handler) -> HttpSearchClient:
    transport = httpx.MockTransport(handler)
    return HttpSearchClient(
        BASE_URL,
        timeout_ms=1000,
        client=httpx.AsyncClient(transport=transport, base_url=BASE_URL),
    )


def _ok_body(**overrides) -> dict:
    body = {
        "success": True,
        "data": [{"id": "r1"}],
        "source": "query_cache",
        "strategy": "query_cache",
        "timing": {"total_ms": 42},
        "meta": {"cache_hit": True},
        "timestamp": "2026-01-01T00:00:00Z",
    }
    body.update(overrides)
    return body


class TestInvoke:
    """Test invoke() request building and response normalization."""

    @pytest.mark.asyncio
    async def test_success_decodes_body(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=_ok_body())

        client = _client(handler)
        resp = await client.invoke(
            "query_cache", SearchRequest(query="pizza", area="tampa-bay", enable_fallbacks=False)
        )

        assert resp.success is True
        assert resp.item_count == 1
        assert resp.cache_hit is True
        assert seen[0].method == "POST"
        assert seen[0].url.path == "/api/search/query_cache"
        assert json.loads(seen[0].content) == {
            "query": "pizza",
            "area": "tampa-bay",
            "enableFallbacks": False,
        }
        assert "x-device-id" not in seen[0].headers

    @pytest.mark.asyncio
    async def test_device_id_header(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=_ok_body())

        await _client(handler).invoke("rag_vector", SearchRequest(query="q", device_id="dev-7"))
        assert seen[0].headers["x-device-id"] == "dev-7"
        assert json.loads(seen[0].content)["deviceId"] == "dev-7"

    @pytest.mark.asyncio
    async def test_timeout_normalized_not_raised(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        resp = await _client(handler).invoke("rag_hybrid", SearchRequest(query="q"))
        assert resp.success is False
        assert resp.data == []
        assert resp.error
        assert resp.strategy == "rag_hybrid"
        assert resp.source == "rag_hybrid"
        assert resp.timing is not None and resp.timing.total_ms == 0

    @pytest.mark.asyncio
    async def test_connect_error_normalized(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        resp = await _client(handler).invoke("rag_cache", SearchRequest(query="q"))
        assert resp.success is False
        assert "connection refused" in resp.error

    @pytest.mark.asyncio
    async def test_non_2xx_uses_server_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(503, json={"success": False, "error": "vector index offline"})

        resp = await _client(handler).invoke("rag_vector", SearchRequest(query="q"))
        assert resp.success is False
        assert resp.error == "vector index offline"

    @pytest.mark.asyncio
    async def test_non_2xx_without_body_mentions_status(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, text="<html>oops</html>")

        resp = await _client(handler).invoke("rag_vector", SearchRequest(query="q"))
        assert resp.success is False
        assert "500" in resp.error

    @pytest.mark.asyncio
    async def test_malformed_body_normalized(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="not json")

        resp = await _client(handler).invoke("combined", SearchRequest(query="q"))
        assert resp.success is False
        assert "Malformed" in resp.error

    @pytest.mark.asyncio
    async def test_body_failing_validation_normalized(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"data": "not-a-list"})

        resp = await _client(handler).invoke("combined", SearchRequest(query="q"))
        assert resp.success is False

    @pytest.mark.asyncio
    async def test_server_reported_failure_passed_through(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=_ok_body(success=False, data=[], error="no match"))

        resp = await _client(handler).invoke("query_cache", SearchRequest(query="q"))
        assert resp.success is False
        assert resp.error == "no match"

    @pytest.mark.asyncio
    async def test_strategy_wrappers_hit_named_paths(self):
        paths: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            paths.append(request.url.path)
            return httpx.Response(200, json=_ok_body())

        client = _client(handler)
        req = SearchRequest(query="q")
        await client.query_cache(req)
        await client.rag_vector(req)
        await client.rag_cache(req)
        await client.rag_hybrid(req)
        await client.web_search_llm(req)
        await client.combined(req)
        assert paths == [
            "/api/search/query_cache",
            "/api/search/rag_vector",
            "/api/search/rag_cache",
            "/api/search/rag_hybrid",
            "/api/search/web_search_llm",
            "/api/search/combined",
        ]

    @pytest.mark.asyncio
    async def test_request_and_response_logged_at_debug(self, caplog):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=_ok_body())

        client = HttpSearchClient(BASE_URL, transport=httpx.MockTransport(handler))
        with caplog.at_level(logging.DEBUG, logger="pulsecheck.clients.search_api"):
            await client.invoke("query_cache", SearchRequest(query="pizza"))
        await client.aclose()

        messages = [r.getMessage() for r in caplog.records]
        assert any("Making API request" in m and "POST" in m and "pizza" in m for m in messages)
        assert any("API response received" in m and "200" in m for m in messages)

    @pytest.mark.asyncio
    async def test_injected_client_hooks_untouched(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=_ok_body())

        shared = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        for _ in range(3):
            await HttpSearchClient(BASE_URL, client=shared).invoke(
                "query_cache", SearchRequest(query="pizza")
            )
        assert shared.event_hooks["request"] == []
        assert shared.event_hooks["response"] == []
        await shared.aclose()

    @pytest.mark.asyncio
    async def test_invalid_url_normalized(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("no request should be sent")

        client = HttpSearchClient(
            "http://pulse.test:notaport",
            client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        )
        resp = await client.invoke("query_cache", SearchRequest(query="pizza"))
        assert resp.success is False
        assert "port" in resp.error
        assert resp.source == "query_cache"


class TestHealthCheck:
    """Test health_check() never raises."""

    @pytest.mark.asyncio
    async def test_invalid_url_is_unhealthy(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("no request should be sent")

        client = HttpSearchClient(
            "http://pulse.test:notaport",
            client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        )
        assert await client.health_check() is False

    @pytest.mark.asyncio
    async def test_healthy(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/health"
            return httpx.Response(200, json={"status": "ok"})

        assert await _client(handler).health_check() is True

    @pytest.mark.asyncio
    async def test_non_200_is_unhealthy(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(204)

        assert await _client(handler).health_check() is False

    @pytest.mark.asyncio
    async def test_transport_error_is_unhealthy(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timeout", request=request)

        assert await _client(handler).health_check(timeout_ms=10) is False

    @pytest.mark.asyncio
    async def test_context_manager_closes_client(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200)

        async with _client(handler) as client:
            assert await client.health_check() is True
        assert client._client.is_closed
