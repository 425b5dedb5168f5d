"""Webhook notification sinks.

Both sinks carry the same summary and failure detail; only the payload
shape differs. Delivery errors propagate to the dispatcher, which isolates
them per sink.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx

logger = logging.getLogger(__name__)

DISCORD_FIELD_LIMIT = 1024


class NotificationSink(ABC):
    """Abstract webhook destination."""

    name: str = "sink"

    def __init__(
        self,
        webhook_url: str | None,
        enabled: bool = True,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.webhook_url = webhook_url
        self.enabled = enabled
        self._client = client

    @property
    def configured(self) -> bool:
        return bool(self.webhook_url)

    @property
    def active(self) -> bool:
        """Eligible for regular failure alerts."""
        return self.enabled and self.configured

    @abstractmethod
    def build_payload(self, message: str, details: dict[str, Any] | None = None) -> dict[str, Any]:
        """Return the JSON body for this sink."""

    async def send(self, message: str, details: dict[str, Any] | None = None) -> None:
        """POST the payload to the webhook.

        Raises:
            httpx.HTTPError: On transport failure or a non-2xx answer.
        """
        if not self.configured:
            raise ValueError(f"{self.name} webhook URL is not configured")

        payload = self.build_payload(message, details)
        if self._client is not None:
            response = await self._client.post(self.webhook_url, json=payload)
        else:
            async with httpx.AsyncClient(timeout=10.0) as client:
                response = await client.post(self.webhook_url, json=payload)
        response.raise_for_status()
        logger.info("%s notification sent", self.name)


class SlackWebhookSink(NotificationSink):
    """Slack incoming webhook: ``text`` plus one attachment of fields."""

    name = "Slack"

    def build_payload(self, message: str, details: dict[str, Any] | None = None) -> dict[str, Any]:
        payload: dict[str, Any] = {"text": message}
        if details:
            payload["attachments"] = [
                {
                    "color": "danger",
                    "fields": [
                        {"title": key, "value": json.dumps(value, default=str), "short": True}
                        for key, value in details.items()
                    ],
                }
            ]
        return payload


class DiscordWebhookSink(NotificationSink):
    """Discord webhook: ``content`` plus one embed of inline fields."""

    name = "Discord"

    def build_payload(self, message: str, details: dict[str, Any] | None = None) -> dict[str, Any]:
        payload: dict[str, Any] = {"content": message}
        if details:
            payload["embeds"] = [
                {
                    "color": 0xFF0000,
                    "fields": [
                        {
                            "name": key,
                            "value": json.dumps(value, default=str)[:DISCORD_FIELD_LIMIT],
                            "inline": True,
                        }
                        for key, value in details.items()
                    ],
                }
            ]
        return payload
