"""pulsecheck execution - the run orchestrator."""

from pulsecheck.execution.orchestrator import Orchestrator, RunState

__all__ = ["Orchestrator", "RunState"]
