"""Exception hierarchy for pulsecheck.

Transport and protocol failures of the search API never surface as
exceptions; they are normalized into failed SearchResponse objects by the
client. The errors here cover the conditions that do propagate.
"""

from __future__ import annotations


class PulsecheckError(Exception):
    """Base class for all pulsecheck errors."""


class ConfigError(PulsecheckError):
    """Raised when harness settings cannot be loaded or validated.

    Attributes:
        errors: Flattened ``field: message`` strings, one per problem.
    """

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        self.errors = errors or []
        super().__init__(message)


class FixtureProviderError(PulsecheckError):
    """Raised when the fixture store is unreachable or misconfigured."""
