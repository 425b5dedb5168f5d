"""Fixture model: a previously recorded query/location/result tuple."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from pulsecheck.models.search import SearchRequest


class FixtureFilters(BaseModel):
    """Optional equality filters applied to a fixture lookup."""

    model_config = ConfigDict(extra="forbid")

    area: str | None = None
    region: str | None = None
    country: str | None = None
    timeline: str | None = None
    button_click_count: str | None = None


class Fixture(BaseModel):
    """A recorded query with the result set the search API served for it."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str
    prompt: str
    area: str | None = None
    region: str | None = None
    country: str | None = None
    timeline: str | None = None
    button_click_count: str | None = None
    result_data: list[Any] = []
    expire_at: datetime
    created_at: datetime | None = None

    @field_validator("button_click_count", mode="before")
    @classmethod
    def _count_as_text(cls, value: Any) -> Any:
        return None if value is None else str(value)

    @field_validator("expire_at", "created_at")
    @classmethod
    def _assume_utc(cls, value: datetime | None) -> datetime | None:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> Fixture:
        """Build a Fixture from a raw ``query_cache`` row.

        Older rows keep their items under ``result.data`` instead of
        ``response.data``; either is accepted.
        """
        result_data: list[Any] = []
        for key in ("response", "result"):
            payload = row.get(key)
            if isinstance(payload, dict) and isinstance(payload.get("data"), list) and payload["data"]:
                result_data = payload["data"]
                break

        return cls.model_validate(
            {
                **row,
                "id": str(row.get("id", "")),
                "result_data": result_data,
            }
        )

    def is_expired(self, now: datetime | None = None) -> bool:
        now = now or datetime.now(timezone.utc)
        return self.expire_at <= now

    def is_usable(self, now: datetime | None = None) -> bool:
        """True when the fixture has results and has not expired."""
        return bool(self.result_data) and not self.is_expired(now)

    def to_request(self, enable_fallbacks: bool = False) -> SearchRequest:
        """Build the request that replays this fixture."""
        return SearchRequest(
            query=self.prompt,
            area=self.area or None,
            region=self.region or None,
            country=self.country or None,
            timeline=self.timeline or None,
            button_click_count=self.button_click_count or None,
            enable_fallbacks=enable_fallbacks,
        )
