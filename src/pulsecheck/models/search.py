"""Wire models for the Pulse search API.

The API answers with loosely-shaped JSON whose optional nested fields vary
by strategy. Everything is decoded here, once, so probes only ever read
typed attributes.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class SearchRequest(BaseModel):
    """Query parameters sent to ``POST /api/search/{strategy}``."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    query: str
    area: str | None = None
    region: str | None = None
    country: str | None = None
    timeline: str | None = None
    category: str | None = None
    button_click_count: str | None = None
    device_id: str | None = None
    enable_fallbacks: bool | None = None
    max_fallbacks: int | None = Field(default=None, ge=0)

    @field_validator("query")
    @classmethod
    def _query_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("query must not be empty")
        return value

    def to_payload(self) -> dict[str, Any]:
        """Return the camelCase JSON body with unset fields omitted."""
        return {
            to_camel(key): value
            for key, value in self.model_dump(exclude_none=True).items()
        }


class SearchTiming(BaseModel):
    """Server-reported timing breakdown (informational only)."""

    model_config = ConfigDict(extra="ignore")

    primary_ms: float | None = None
    fallback_ms: float | None = None
    total_ms: float = 0


class SearchMeta(BaseModel):
    """Optional metadata flags attached to a search response."""

    model_config = ConfigDict(extra="ignore")

    cache_hit: bool | None = None
    original_count: int | None = None
    flyer_count: int | None = None
    total_items: int | None = None
    session_filtered: bool | None = None


class SearchResponse(BaseModel):
    """Typed result of one search call.

    A failed response always carries an ``error``; a successful one always
    carries a ``data`` list, possibly empty.
    """

    model_config = ConfigDict(
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    success: bool
    data: list[Any] = Field(default_factory=list)
    source: str = ""
    strategy: str = ""
    original_strategy: str | None = None
    fallback_used: str | None = None
    fallback_chain: list[str] | None = None
    timing: SearchTiming | None = None
    meta: SearchMeta | None = None
    timestamp: str | None = None
    error: str | None = None

    @field_validator("data", mode="before")
    @classmethod
    def _null_data_is_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @model_validator(mode="after")
    def _failed_response_has_error(self) -> SearchResponse:
        if not self.success and not self.error:
            self.error = "Unknown error"
        return self

    @property
    def item_count(self) -> int:
        return len(self.data)

    @property
    def cache_hit(self) -> bool | None:
        return self.meta.cache_hit if self.meta else None

    @classmethod
    def failed(cls, strategy: str, error: str) -> SearchResponse:
        """Build the normalized response for a call that did not succeed."""
        return cls(
            success=False,
            data=[],
            source=strategy,
            strategy=strategy,
            timing=SearchTiming(total_ms=0),
            timestamp=datetime.now(timezone.utc).isoformat(),
            error=error or "Unknown error",
        )
