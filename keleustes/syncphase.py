"""Translation of sync operation phases into the SyncRun status alphabet."""

from __future__ import annotations

from enum import Enum


class OperationPhase(str, Enum):
    """Phase reported by the underlying sync operation."""

    RUNNING = "Running"
    TERMINATING = "Terminating"
    FAILED = "Failed"
    ERROR = "Error"
    SUCCEEDED = "Succeeded"


class SyncRunPhase(str, Enum):
    """Value of SyncRun.status.phase."""

    PENDING = "Pending"
    RUNNING = "Running"
    SUCCEEDED = "Succeeded"
    FAILED = "Failed"
    ERROR = "Error"


_PHASES = {
    OperationPhase.RUNNING: SyncRunPhase.RUNNING,
    # A terminating run is still in flight until it reports Failed or Error.
    OperationPhase.TERMINATING: SyncRunPhase.RUNNING,
    OperationPhase.SUCCEEDED: SyncRunPhase.SUCCEEDED,
    OperationPhase.FAILED: SyncRunPhase.FAILED,
    OperationPhase.ERROR: SyncRunPhase.ERROR,
}


def phase_from_operation(op: OperationPhase | str) -> SyncRunPhase:
    """Map an operation phase to a SyncRun phase; unknown values are Pending."""
    try:
        return _PHASES[OperationPhase(op)]
    except ValueError:
        return SyncRunPhase.PENDING