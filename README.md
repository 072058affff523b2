# keleustes

Building blocks for the Keleustes GitOps delivery control plane. The package
uses only the standard library. It has three parts:

- **Scaffold reconcilers** for the fifteen Keleustes kinds. Each one sets
  `observedGeneration` and an `Accepted` condition with reason
  `ScaffoldReconciler`. A Promotion that has no phase is also given the phase
  `Proposed`.
- **Sync phase mapping** turns an operation phase into a SyncRun phase.
- **Observability conventions** provide:
  - a closed set of label names;
  - structured log fields;
  - the reconcile event and generation metrics.

## Reconcilers

`keleustes.reconcile` holds the shared machinery:

- `ScaffoldReconciler` is the base class that each reconciler builds on.
- `Condition` is one entry in a status conditions list, along with the
  helpers `set_status_condition` and `find_status_condition`.
- `ReconcileResult` is the value that `reconcile` returns.
- `InMemoryClient` is an object store. It keeps objects as plain dicts,
  keyed by kind, namespace and name.
- `NotFoundError` is raised when a lookup fails.

The reconcilers themselves are spread over three modules:

| Module | Reconcilers |
| --- | --- |
| `keleustes.reconcile` | `ApplicationReconciler`, `CellReconciler` |
| `keleustes.inventory_reconcilers` | `ApprovalReconciler`, `DeploymentReconciler`, `DeploymentTargetReconciler`, `EnvironmentReconciler`, `FreezeWindowReconciler`, `HealthCheckReconciler`, `NotifierReconciler` |
| `keleustes.delivery_reconcilers` | `PromotionReconciler`, `PromotionPolicyReconciler`, `ReleaseReconciler`, `SourceReconciler`, `SyncPlanReconciler`, `SyncRunReconciler` |

`all_reconcilers(client)` gives you one reconciler for every kind, keyed by
kind name.

```python
from keleustes.delivery_reconcilers import all_reconcilers
from keleustes.logfields import NamespacedName
from keleustes.reconcile import InMemoryClient, find_status_condition, Condition

client = InMemoryClient()
client.create({
    "apiVersion": "keleustes.skaphos.io/v1alpha1",
    "kind": "Application",
    "metadata": {"name": "checkout", "namespace": "default"},
    "spec": {"deployment": {"strategy": "gitops", "manifest": {"type": "kustomize"}}},
})

reconcilers = all_reconcilers(client)
reconcilers["Application"].reconcile(NamespacedName("default", "checkout"))

app = client.get("Application", "default", "checkout")
print(app["status"]["observedGeneration"])  # 1
conditions = [Condition.from_dict(c) for c in app["status"]["conditions"]]
print(find_status_condition(conditions, "Accepted").reason)  # ScaffoldReconciler
```

How `InMemoryClient` handles objects:

- `create` sets `metadata.generation` to 1 if the object has none. It also
  sets a creation timestamp if there is none.
- `create` rejects duplicates with `ValueError`.
- `update_status` replaces only `status`, and it bumps `resourceVersion`.
- Reads and writes always copy, so callers never share state with the
  store.

How a reconciler behaves:

- Reconciling an object that no longer exists returns an empty
  `ReconcileResult`.
- Reconciling an object whose status is already up to date writes nothing.

`set_status_condition` adds a condition or updates one in place, and
returns whether anything changed. The transition time moves only when the
status value changes.

A reconciler works with any client that has the same `create`, `get` and
`update_status` methods as `InMemoryClient`.

## Sync phases

`keleustes.syncphase.phase_from_operation` maps an `OperationPhase` (or its
string value) to a `SyncRunPhase`:

- `Running` and `Terminating` both become `Running`. A terminating run is
  still in flight.
- `Succeeded`, `Failed` and `Error` map to the phase of the same name.
- Anything else, including the empty string, becomes `Pending`.

## Observability

**`keleustes.labels`** defines the fixed names:

- the label names, such as `LABEL_ENGINE`, `LABEL_KIND` and `LABEL_RESULT`;
- the engine identifiers, such as `ENGINE_SYNC` and `ENGINE_MANAGER`;
- the result values, such as `RESULT_SUCCESS` and `RESULT_ERROR`;
- the log field keys, such as `LOG_FIELD_TRACE_ID`.

**`keleustes.logfields`** handles structured log fields:

- `FieldLogger` wraps a standard `logging.Logger`.
  - It carries bound key/value pairs.
  - `info` emits one JSON line at info level.
  - `with_values` returns a new logger and leaves the original unchanged.
- `with_fields(logger, LogFields(...))` binds the standard fields that are
  set. Empty strings and a zero generation are left out.
- `with_resource(logger, engine, kind, nn)` binds `engine` and `kind`. It
  also binds `namespacedName` (`namespace/name`) when a name or a namespace
  is given.

**`keleustes.metrics`** holds the metrics in the process-wide `REGISTRY`:

- `register()` creates the `keleustes_reconcile_events_total` counter
  (labels: engine, kind, result) and the
  `keleustes_reconcile_observed_generation` gauge (labels: engine, kind). It
  returns the registry, and calling it more than once is safe.
- `observe_reconcile_event` and `observe_reconcile_generation` feed those two
  metrics. They do nothing until `register()` has been called.
- `Registry.gather()` returns every metric that has at least one sample,
  sorted by name.
- `Registry.register` raises `ValueError` on a duplicate name.
- `Counter.inc` rejects negative amounts.

Metrics are kept in memory only. Nothing serves them over HTTP.

## What the package does not do

The package has no command line. It does not connect to a Kubernetes cluster,
read kubeconfig files, or list, fetch or render resources as tables, YAML or
JSON.

The reconcilers only record acceptance. None of the following happens:

- sources are not polled;
- manifests are not synced;
- promotions are not driven;
- health is not evaluated;
- notifications are not dispatched.

Objects live in `InMemoryClient` or in a client that you supply.