"""pulsecheck data models - re-exports all public model classes."""

from pulsecheck.models.config import HarnessSettings, PerformanceTarget
from pulsecheck.models.fixture import Fixture, FixtureFilters
from pulsecheck.models.result import ProbeResult, RunReport, RunStatus
from pulsecheck.models.search import SearchMeta, SearchRequest, SearchResponse, SearchTiming

__all__ = [
    "Fixture",
    "FixtureFilters",
    "HarnessSettings",
    "PerformanceTarget",
    "ProbeResult",
    "RunReport",
    "RunStatus",
    "SearchMeta",
    "SearchRequest",
    "SearchResponse",
    "SearchTiming",
]
