"""Scaffold reconcilers for the delivery-pipeline kinds.

These cover the kinds that move software from a source to a running target:
sources, releases, promotions and their policies, sync plans and sync runs.
Each marks its objects Accepted until the engine that owns the kind lands.
"""

from __future__ import annotations

from typing import Any

from keleustes.inventory_reconcilers import (
    ApprovalReconciler,
    DeploymentReconciler,
    DeploymentTargetReconciler,
    EnvironmentReconciler,
    FreezeWindowReconciler,
    HealthCheckReconciler,
    NotifierReconciler,
)
from keleustes.logfields import NamespacedName
from keleustes.reconcile import (
    ApplicationReconciler,
    CellReconciler,
    InMemoryClient,
    ReconcileResult,
    ScaffoldReconciler,
)

__all__ = [
    "PROMOTION_PHASE_PROPOSED",
    "PromotionReconciler",
    "PromotionPolicyReconciler",
    "ReleaseReconciler",
    "SourceReconciler",
    "SyncPlanReconciler",
    "SyncRunReconciler",
    "all_reconcilers",
]

PROMOTION_PHASE_PROPOSED = "Proposed"


class PromotionReconciler(ScaffoldReconciler):
    """Marks each Promotion accepted and keeps its phase at Proposed.

    Policy evaluation, Git mutation and sync orchestration are not yet
    applied, so a promotion without a phase is given Proposed and any phase
    already present is left alone.
    """

    kind = "Promotion"
    message = "Promotion accepted; Promotion Engine arrives with MVP 2."

    def _adjust_status(self, status: dict[str, Any]) -> None:
        if not status.get("phase"):
            status["phase"] = PROMOTION_PHASE_PROPOSED

    def reconcile(self, request: NamespacedName) -> ReconcileResult:
        """Accept the Promotion, defaulting its phase to Proposed."""
        return super().reconcile(request)


class PromotionPolicyReconciler(ScaffoldReconciler):
    """Marks each PromotionPolicy accepted; policies are not yet enforced."""

    kind = "PromotionPolicy"
    message = "PromotionPolicy accepted; Promotion Engine arrives with MVP 2."


class ReleaseReconciler(ScaffoldReconciler):
    """Marks each Release accepted; release cuts are not yet performed."""

    kind = "Release"
    message = "Release accepted; release-cut behavior arrives with MVP 2."


class SourceReconciler(ScaffoldReconciler):
    """Marks each Source accepted; sources are not yet polled."""

    kind = "Source"
    message = "Source accepted; Source Engine arrives with MVP 2."


class SyncPlanReconciler(ScaffoldReconciler):
    """Marks each SyncPlan accepted; nothing is rendered or applied yet."""

    kind = "SyncPlan"
    message = "SyncPlan accepted; Sync Engine arrives with MVP 1."


class SyncRunReconciler(ScaffoldReconciler):
    """Marks each SyncRun accepted without advancing status.phase."""

    kind = "SyncRun"
    message = "SyncRun accepted; Sync Engine arrives with MVP 1."


_ALL = (
    ApplicationReconciler,
    SourceReconciler,
    ReleaseReconciler,
    DeploymentReconciler,
    EnvironmentReconciler,
    CellReconciler,
    DeploymentTargetReconciler,
    PromotionReconciler,
    PromotionPolicyReconciler,
    ApprovalReconciler,
    FreezeWindowReconciler,
    SyncPlanReconciler,
    SyncRunReconciler,
    HealthCheckReconciler,
    NotifierReconciler,
)


def all_reconcilers(client: InMemoryClient) -> dict[str, ScaffoldReconciler]:
    """One reconciler per kind, bound to client, keyed by kind name."""
    return {cls.kind: cls(client) for cls in _ALL}