import pytest

from keleustes.delivery_reconcilers import (
    PROMOTION_PHASE_PROPOSED,
    PromotionPolicyReconciler,
    PromotionReconciler,
    ReleaseReconciler,
    SourceReconciler,
    SyncPlanReconciler,
    SyncRunReconciler,
    all_reconcilers,
)
from keleustes.logfields import NamespacedName
from keleustes.reconcile import (
    CONDITION_ACCEPTED,
    REASON_SCAFFOLD_RECONCILER,
    Condition,
    InMemoryClient,
    ReconcileResult,
    find_status_condition,
)

SPECS = {
    "Application": {
        "deployment": {"strategy": "gitops", "manifest": {"type": "kustomize"}}
    },
    "Source": {"type": "containerImage"},
    "Release": {
        "application": "app",
        "artifacts": [{"type": "image", "ref": "ghcr.io/example/app:1.0.0"}],
    },
    "Deployment": {"application": "app", "targetRef": {"name": "target"}},
    "Environment": {"order": 10},
    "Cell": {"environment": "prod"},
    "DeploymentTarget": {"environment": "prod", "cluster": {"name": "cluster-a"}},
    "Promotion": {
        "application": "app",
        "release": "app-1.0.0",
        "from": {"environment": "qa"},
        "to": {"environment": "prod"},
        "mode": "pullRequest",
    },
    "PromotionPolicy": {"required": ["imageSigned"]},
    "Approval": {
        "promotionRef": {"name": "promo"},
        "decision": "Approved",
        "reviewer": "alice",
    },
    "FreezeWindow": {
        "reason": "scheduled maintenance",
        "start": "2030-01-01T00:00:00Z",
        "end": "2030-01-01T01:00:00Z",
    },
    "SyncPlan": {"application": "app", "targetRefs": [{"name": "target"}]},
    "SyncRun": {"planRef": {"name": "plan"}, "targetRef": {"name": "target"}},
    "HealthCheck": {"application": "app"},
    "Notifier": {"endpoint": {"webhook": {"url": "https://hooks.example.com/keleustes"}}},
}

DELIVERY = [
    (PromotionReconciler, "Promotion"),
    (PromotionPolicyReconciler, "PromotionPolicy"),
    (ReleaseReconciler, "Release"),
    (SourceReconciler, "Source"),
    (SyncPlanReconciler, "SyncPlan"),
    (SyncRunReconciler, "SyncRun"),
]


def make_obj(kind, name, generation=None, status=None):
    meta = {"name": name, "namespace": "default"}
    if generation is not None:
        meta["generation"] = generation
    obj = {
        "apiVersion": "keleustes.skaphos.io/v1alpha1",
        "kind": kind,
        "metadata": meta,
        "spec": SPECS[kind],
    }
    if status is not None:
        obj["status"] = status
    return obj


def assert_accepted(fetched):
    generation = fetched["metadata"]["generation"]
    status = fetched["status"]
    assert status["observedGeneration"] == generation
    conditions = [Condition.from_dict(c) for c in status["conditions"]]
    cond = find_status_condition(conditions, CONDITION_ACCEPTED)
    assert cond is not None
    assert cond.status == "True"
    assert cond.reason == REASON_SCAFFOLD_RECONCILER
    assert cond.observed_generation == generation


@pytest.mark.parametrize("cls,kind", DELIVERY)
def test_marks_object_accepted(cls, kind):
    client = InMemoryClient()
    name = f"{kind.lower()}-scaffold"
    client.create(make_obj(kind, name))
    res = cls(client).reconcile(NamespacedName("default", name))
    assert res.requeue_after == 0
    assert res == ReconcileResult()
    assert_accepted(client.get(kind, "default", name))


@pytest.mark.parametrize("cls,kind", DELIVERY)
def test_condition_message_is_kind_specific(cls, kind):
    client = InMemoryClient()
    client.create(make_obj(kind, "x"))
    cls(client).reconcile(NamespacedName("default", "x"))
    conds = client.get(kind, "default", "x")["status"]["conditions"]
    assert conds[0]["message"] == cls.message
    assert kind in cls.message


@pytest.mark.parametrize("cls,kind", DELIVERY)
def test_missing_object_is_ignored(cls, kind):
    client = InMemoryClient()
    res = cls(client).reconcile(NamespacedName("default", "absent"))
    assert res == ReconcileResult()
    with pytest.raises(Exception):
        client.get(kind, "default", "absent")


@pytest.mark.parametrize("cls,kind", DELIVERY)
def test_second_reconcile_writes_nothing(cls, kind):
    client = InMemoryClient()
    client.create(make_obj(kind, "idem"))
    reconciler = cls(client)
    reconciler.reconcile(NamespacedName("default", "idem"))
    first = client.get(kind, "default", "idem")
    assert first["metadata"]["resourceVersion"] == "2"
    reconciler.reconcile(NamespacedName("default", "idem"))
    second = client.get(kind, "default", "idem")
    assert second["metadata"]["resourceVersion"] == "2"
    assert second["status"] == first["status"]


def test_promotion_phase_defaults_to_proposed():
    client = InMemoryClient()
    client.create(make_obj("Promotion", "promo"))
    PromotionReconciler(client).reconcile(NamespacedName("default", "promo"))
    status = client.get("Promotion", "default", "promo")["status"]
    assert status["phase"] == PROMOTION_PHASE_PROPOSED == "Proposed"


def test_promotion_existing_phase_is_kept():
    client = InMemoryClient()
    client.create(make_obj("Promotion", "promo", status={"phase": "Succeeded"}))
    PromotionReconciler(client).reconcile(NamespacedName("default", "promo"))
    status = client.get("Promotion", "default", "promo")["status"]
    assert status["phase"] == "Succeeded"
    assert_accepted(client.get("Promotion", "default", "promo"))


def test_syncrun_phase_is_not_advanced():
    client = InMemoryClient()
    client.create(make_obj("SyncRun", "run"))
    SyncRunReconciler(client).reconcile(NamespacedName("default", "run"))
    assert "phase" not in client.get("SyncRun", "default", "run")["status"]


def test_observed_generation_follows_generation():
    client = InMemoryClient()
    client.create(make_obj("Release", "rel", generation=7))
    ReleaseReconciler(client).reconcile(NamespacedName("default", "rel"))
    status = client.get("Release", "default", "rel")["status"]
    assert status["observedGeneration"] == 7
    assert status["conditions"][0]["observedGeneration"] == 7


def test_all_reconcilers_covers_fifteen_kinds():
    reconcilers = all_reconcilers(InMemoryClient())
    assert sorted(reconcilers) == sorted(SPECS)
    assert len(reconcilers) == 15
    for kind, reconciler in reconcilers.items():
        assert reconciler.kind == kind


@pytest.mark.parametrize("kind", sorted(SPECS))
def test_all_reconcilers_accept_every_kind(kind):
    client = InMemoryClient()
    name = f"{kind.lower()}-scaffold"
    client.create(make_obj(kind, name, generation=3))
    res = all_reconcilers(client)[kind].reconcile(NamespacedName("default", name))
    assert res == ReconcileResult()
    fetched = client.get(kind, "default", name)
    assert fetched["status"]["observedGeneration"] == 3
    assert_accepted(fetched)


def test_reconciler_only_touches_its_own_kind():
    client = InMemoryClient()
    client.create(make_obj("Source", "shared"))
    SyncPlanReconciler(client).reconcile(NamespacedName("default", "shared"))
    assert "status" not in client.get("Source", "default", "shared")