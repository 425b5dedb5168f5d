"""Process wiring: builds the shared clients, sinks and orchestrator.

Every HTTP client is created once here and injected; probes never build
their own.
"""

from __future__ import annotations

from dataclasses import dataclass

import httpx

from pulsecheck.alerts.dispatcher import AlertDispatcher
from pulsecheck.alerts.sinks import DiscordWebhookSink, SlackWebhookSink
from pulsecheck.clients.base import FixtureProvider, SearchClient
from pulsecheck.clients.fixtures import PostgrestFixtureProvider
from pulsecheck.clients.search_api import HttpSearchClient
from pulsecheck.execution.orchestrator import Orchestrator
from pulsecheck.models.config import HarnessSettings
from pulsecheck.probes import build_default_probes

WEBHOOK_TIMEOUT_SECONDS = 10.0


@dataclass
class Runtime:
    """Collaborators shared by every probe in one process."""

    settings: HarnessSettings
    client: SearchClient
    fixtures: FixtureProvider
    dispatcher: AlertDispatcher
    webhook_client: httpx.AsyncClient | None = None

    def orchestrator(self) -> Orchestrator:
        """Build a fresh single-use orchestrator over these collaborators."""
        return Orchestrator(
            lambda: build_default_probes(self.client, self.fixtures, self.settings),
            preflight=[self.fixtures.ensure_ready],
            dispatcher=self.dispatcher,
        )

    async def aclose(self) -> None:
        for resource in (self.client, self.fixtures, self.webhook_client):
            close = getattr(resource, "aclose", None)
            if close is not None:
                await close()


def build_runtime(settings: HarnessSettings) -> Runtime:
    """Create the process-wide collaborators from settings."""
    webhook_client = httpx.AsyncClient(timeout=WEBHOOK_TIMEOUT_SECONDS)
    sinks = [
        SlackWebhookSink(
            settings.slack_webhook_url,
            enabled=settings.enable_slack_notifications,
            client=webhook_client,
        ),
        DiscordWebhookSink(
            settings.discord_webhook_url,
            enabled=settings.enable_discord_notifications,
            client=webhook_client,
        ),
    ]
    return Runtime(
        settings=settings,
        client=HttpSearchClient(settings.pulse_api_base_url, timeout_ms=settings.api_timeout),
        fixtures=PostgrestFixtureProvider(
            settings.supabase_url,
            settings.supabase_service_role_key,
            table=settings.fixture_table,
            timeout_ms=settings.cache_lookup_timeout,
        ),
        dispatcher=AlertDispatcher(sinks),
        webhook_client=webhook_client,
    )
