"""Closed label vocabulary shared by every metric and structured log field.

New label keys must not be introduced casually: anything not listed here
belongs in a log field rather than a metric label, to keep cardinality bounded.
"""

# Which engine emitted the signal; bounded by the ENGINE_* values below.
LABEL_ENGINE = "engine"
# Kind name of the resource being reconciled (Application, SyncRun, ...).
LABEL_KIND = "kind"
# Terminal outcome of a unit of engine work; bounded by the RESULT_* values.
LABEL_RESULT = "result"
# Phase value from the affected resource's status.
LABEL_PHASE = "phase"
# Application name; only allowed on counters and gauges, never histograms.
LABEL_APPLICATION = "application"
# Environment name.
LABEL_ENVIRONMENT = "environment"
# DeploymentTarget name; same cardinality discipline as LABEL_APPLICATION.
LABEL_TARGET = "target"
# Regional agent identifier; used only on agent-emitted metrics.
LABEL_REGION = "region"

ENGINE_MANAGER = "manager"
ENGINE_SOURCE = "source"
ENGINE_SYNC = "sync"
ENGINE_PROMOTION = "promotion"
ENGINE_GIT_MUTATION = "git_mutation"
ENGINE_POLICY = "policy"
ENGINE_HEALTH = "health"
ENGINE_DIFF = "diff"
ENGINE_WORKER = "worker"

RESULT_SUCCESS = "success"
RESULT_ERROR = "error"
RESULT_BLOCKED = "blocked"
RESULT_CANCELED = "canceled"
RESULT_TIMEOUT = "timeout"

# Short verb-noun describing what just happened (e.g. "sync.applied").
LOG_FIELD_EVENT = "event"
# Resource generation observed by the reconcile loop.
LOG_FIELD_RECONCILE_GENERATION = "reconcileGeneration"
# Active trace context carried into log lines.
LOG_FIELD_TRACE_ID = "traceId"
LOG_FIELD_SPAN_ID = "spanId"