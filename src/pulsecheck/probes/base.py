"""Probe ABC and shared timing helpers."""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from collections.abc import Callable

from pulsecheck.models.result import ProbeResult

Clock = Callable[[], float]


def describe_error(exc: BaseException) -> str:
    """Return a non-empty message for an exception."""
    return str(exc) or type(exc).__name__


class Probe(ABC):
    """Abstract base class for a single check in a run.

    Each probe returns one or more ProbeResults and converts every error
    raised by its collaborators into a failed result; nothing it calls may
    escape to the orchestrator.

    Durations are measured with ``clock`` (seconds, monotonic) around the
    collaborator calls. Server-reported timing is kept in details only.
    """

    name: str = "probe"

    def __init__(self, clock: Clock | None = None) -> None:
        self._clock = clock or time.perf_counter

    @abstractmethod
    async def run(self) -> list[ProbeResult]:
        """Execute the check and return its results."""

    def start(self) -> float:
        return self._clock()

    def elapsed_ms(self, started: float) -> int:
        return max(0, round((self._clock() - started) * 1000))

    def failure(self, started: float, exc: BaseException, name: str | None = None) -> ProbeResult:
        """Build the failed result for an exception caught mid-probe."""
        return ProbeResult(
            name=name or self.name,
            success=False,
            duration_ms=self.elapsed_ms(started),
            error=describe_error(exc),
        )
