"""pulsecheck clients - search API facade and fixture store access."""

from pulsecheck.clients.base import FixtureProvider, SearchClient
from pulsecheck.clients.fixtures import PostgrestFixtureProvider
from pulsecheck.clients.search_api import HttpSearchClient

__all__ = [
    "FixtureProvider",
    "HttpSearchClient",
    "PostgrestFixtureProvider",
    "SearchClient",
]
