"""pulsecheck probes - the checks a run executes, in order."""

from __future__ import annotations

from pulsecheck.clients.base import FixtureProvider, SearchClient
from pulsecheck.models.config import HarnessSettings
from pulsecheck.models.search import SearchRequest
from pulsecheck.probes.base import Clock, Probe
from pulsecheck.probes.functional import PrimaryStrategyProbe, SecondaryStrategyProbe
from pulsecheck.probes.health import ApiHealthProbe, FixtureConnectivityProbe
from pulsecheck.probes.performance import PerformanceProbe
from pulsecheck.probes.sweep import StrategySweepProbe

__all__ = [
    "ApiHealthProbe",
    "FixtureConnectivityProbe",
    "PerformanceProbe",
    "PrimaryStrategyProbe",
    "Probe",
    "SecondaryStrategyProbe",
    "StrategySweepProbe",
    "build_default_probes",
]


def build_default_probes(
    client: SearchClient,
    fixtures: FixtureProvider,
    settings: HarnessSettings,
    clock: Clock | None = None,
) -> list[Probe]:
    """Build the fixed probe sequence from settings.

    Cheap foundational checks come first so a systemic outage shows up in
    the health probe rather than as a string of timeouts.

    Raises:
        pydantic.ValidationError: If a configured default query is invalid.
    """
    default_request = SearchRequest(
        query=settings.default_query,
        area=settings.test_area,
        region=settings.test_region,
        country=settings.test_country,
        timeline=settings.test_timeline,
        enable_fallbacks=False,
    )
    sweep_request = SearchRequest(
        query=settings.sweep_query,
        area=settings.test_area,
        region=settings.test_region,
        enable_fallbacks=False,
    )
    performance_request = SearchRequest(
        query=settings.performance_query,
        area=settings.test_area,
        enable_fallbacks=False,
    )

    return [
        ApiHealthProbe(client, timeout_ms=settings.health_timeout, clock=clock),
        FixtureConnectivityProbe(fixtures, clock=clock),
        PrimaryStrategyProbe(client, fixtures, timeout_ms=settings.api_timeout, clock=clock),
        SecondaryStrategyProbe(
            client,
            fixtures,
            default_request,
            timeout_ms=settings.api_timeout,
            clock=clock,
        ),
        StrategySweepProbe(
            client,
            settings.sweep_strategies,
            sweep_request,
            timeout_ms=settings.api_timeout,
            clock=clock,
        ),
        PerformanceProbe(
            client,
            settings.performance_targets,
            performance_request,
            timeout_ms=settings.performance_timeout,
            clock=clock,
        ),
    ]
