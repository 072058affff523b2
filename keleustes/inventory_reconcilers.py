"""Scaffold reconcilers for the inventory and governance kinds.

These cover the kinds that describe where and under what rules software runs:
approvals, deployments and their targets, environments, freeze windows,
health checks and notifiers. Each marks its objects Accepted until the engine
that owns the kind lands.
"""

from __future__ import annotations

from keleustes.reconcile import ScaffoldReconciler

__all__ = [
    "ApprovalReconciler",
    "DeploymentReconciler",
    "DeploymentTargetReconciler",
    "EnvironmentReconciler",
    "FreezeWindowReconciler",
    "HealthCheckReconciler",
    "NotifierReconciler",
]


class ApprovalReconciler(ScaffoldReconciler):
    """Marks each Approval accepted; approval semantics are not yet applied."""

    kind = "Approval"
    message = "Approval accepted; approval semantics arrive with MVP 2."


class DeploymentReconciler(ScaffoldReconciler):
    """Marks each Deployment accepted; live state is not yet reported."""

    kind = "Deployment"
    message = "Deployment accepted; live-state reporting arrives with the Sync Engine."


class DeploymentTargetReconciler(ScaffoldReconciler):
    """Marks each DeploymentTarget accepted without probing the cluster."""

    kind = "DeploymentTarget"
    message = (
        "DeploymentTarget specification accepted; "
        "cluster connectivity is not yet probed."
    )


class EnvironmentReconciler(ScaffoldReconciler):
    """Marks each Environment accepted."""

    kind = "Environment"
    message = "Environment specification accepted."


class FreezeWindowReconciler(ScaffoldReconciler):
    """Marks each FreezeWindow accepted without computing status.active."""

    kind = "FreezeWindow"
    message = "FreezeWindow accepted; active-window evaluation arrives with MVP 2."


class HealthCheckReconciler(ScaffoldReconciler):
    """Marks each HealthCheck accepted without computing status.state."""

    kind = "HealthCheck"
    message = "HealthCheck accepted; Health Engine arrives with MVP 1."


class NotifierReconciler(ScaffoldReconciler):
    """Marks each Notifier accepted; no notifications are dispatched yet."""

    kind = "Notifier"
    message = "Notifier accepted; plugin dispatcher arrives with MVP 1."