"""Result data models for pulsecheck runs.

These models encode the outcome contract of a run: one ProbeResult per
executed check and one RunReport aggregating them.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, model_validator


class ProbeResult(BaseModel):
    """Outcome of a single executed check.

    ``details`` is informational (item counts, timing breakdowns, cache-hit
    flags) and is never used for pass/fail decisions outside the probe that
    produced it.
    """

    model_config = {"extra": "forbid", "frozen": True}

    name: str
    success: bool
    duration_ms: int = Field(ge=0)
    error: str | None = None
    details: dict[str, Any] | None = None

    @model_validator(mode="before")
    @classmethod
    def _failed_results_carry_error(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("success") and not data.get("error"):
            data = {**data, "error": "Unknown error"}
        return data


class RunStatus(str, Enum):
    """Terminal status of a run."""

    completed = "completed"
    aborted = "aborted"


class RunReport(BaseModel):
    """Aggregate over a finished run.

    Built once by ``pulsecheck.reporting.aggregation.aggregate`` and never
    mutated or merged afterwards.
    """

    model_config = {"extra": "forbid", "frozen": True}

    status: RunStatus = RunStatus.completed
    timestamp: datetime | None = None
    total: int
    passed: int
    failed: int
    success_rate: float = Field(ge=0.0, le=1.0)
    total_duration_ms: int = Field(ge=0)
    results: list[ProbeResult] = []
    failures: list[ProbeResult] = []
    abort_reason: str | None = None

    @property
    def has_failures(self) -> bool:
        return bool(self.failures)

    @property
    def aborted(self) -> bool:
        return self.status == RunStatus.aborted

    @property
    def success_rate_percent(self) -> str:
        return f"{self.success_rate * 100:.2f}%"
