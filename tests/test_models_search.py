"""Tests for pulsecheck.models.search - request/response wire models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from pulsecheck.models.search import SearchRequest, SearchResponse


class TestSearchRequest:
    """Test SearchRequest validation and payload building."""

    def test_payload_omits_unset_fields(self):
        req = SearchRequest(query="pizza", area="tampa-bay")
        assert req.to_payload() == {"query": "pizza", "area": "tampa-bay"}

    def test_payload_uses_camel_case_keys(self):
        req = SearchRequest(
            query="pizza",
            button_click_count="2",
            device_id="dev-1",
            enable_fallbacks=False,
            max_fallbacks=3,
        )
        payload = req.to_payload()
        assert payload["buttonClickCount"] == "2"
        assert payload["deviceId"] == "dev-1"
        assert payload["enableFallbacks"] is False
        assert payload["maxFallbacks"] == 3

    def test_false_toggle_is_kept(self):
        payload = SearchRequest(query="q", enable_fallbacks=False).to_payload()
        assert "enableFallbacks" in payload

    @pytest.mark.parametrize("query", ["", "   "])
    def test_blank_query_rejected(self, query):
        with pytest.raises(ValidationError):
            SearchRequest(query=query)

    def test_negative_max_fallbacks_rejected(self):
        with pytest.raises(ValidationError):
            SearchRequest(query="q", max_fallbacks=-1)


class TestSearchResponse:
    """Test SearchResponse decoding at the wire boundary."""

    def test_decodes_full_camel_case_body(self):
        body = {
            "success": True,
            "data": [{"id": "r1"}, {"id": "r2"}],
            "source": "rag_vector",
            "strategy": "query_cache",
            "originalStrategy": "query_cache",
            "fallbackUsed": "rag_vector",
            "fallbackChain": ["query_cache", "rag_vector"],
            "timing": {"primary_ms": 10, "fallback_ms": 30, "total_ms": 40},
            "meta": {"cache_hit": False, "total_items": 2, "session_filtered": True},
            "timestamp": "2026-01-01T00:00:00Z",
        }
        resp = SearchResponse.model_validate(body)
        assert resp.item_count == 2
        assert resp.original_strategy == "query_cache"
        assert resp.fallback_used == "rag_vector"
        assert resp.fallback_chain == ["query_cache", "rag_vector"]
        assert resp.timing is not None and resp.timing.total_ms == 40
        assert resp.cache_hit is False
        assert resp.meta is not None and resp.meta.session_filtered is True

    def test_unknown_fields_ignored(self):
        resp = SearchResponse.model_validate({"success": True, "data": [], "extra": 1})
        assert resp.success is True

    def test_null_data_becomes_empty_list(self):
        resp = SearchResponse.model_validate({"success": True, "data": None})
        assert resp.data == []

    def test_failed_without_error_gets_default(self):
        resp = SearchResponse.model_validate({"success": False})
        assert resp.error == "Unknown error"

    def test_cache_hit_none_without_meta(self):
        resp = SearchResponse(success=True)
        assert resp.cache_hit is None

    def test_failed_factory_shape(self):
        resp = SearchResponse.failed("rag_cache", "connect refused")
        assert resp.success is False
        assert resp.data == []
        assert resp.source == "rag_cache"
        assert resp.strategy == "rag_cache"
        assert resp.timing is not None and resp.timing.total_ms == 0
        assert resp.error == "connect refused"
        assert resp.timestamp

    def test_failed_factory_never_has_empty_error(self):
        assert SearchResponse.failed("x", "").error == "Unknown error"
