"""Scaffold reconcilers for the keleustes.skaphos.io resource kinds.

Each reconciler is idempotent: it records the observed generation and an
Accepted condition, and writes status only when something changed. The real
engines replace these stubs as they land.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from keleustes.logfields import NamespacedName

CONDITION_ACCEPTED = "Accepted"
REASON_SCAFFOLD_RECONCILER = "ScaffoldReconciler"
CONDITION_TRUE = "True"

_TIME_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

_log = logging.getLogger(__name__)


class NotFoundError(LookupError):
    """The requested object does not exist."""


def _now() -> datetime:
    return datetime.now(timezone.utc).replace(microsecond=0)


@dataclass
class Condition:
    """One entry of a status.conditions list."""

    type: str
    status: str
    observed_generation: int = 0
    last_transition_time: datetime | None = None
    reason: str = ""
    message: str = ""

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"type": self.type, "status": self.status}
        if self.observed_generation:
            out["observedGeneration"] = self.observed_generation
        if self.last_transition_time is not None:
            out["lastTransitionTime"] = self.last_transition_time.strftime(_TIME_FORMAT)
        out["reason"] = self.reason
        out["message"] = self.message
        return out

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Condition:
        stamp = data.get("lastTransitionTime")
        return cls(
            type=data.get("type", ""),
            status=data.get("status", ""),
            observed_generation=int(data.get("observedGeneration", 0)),
            last_transition_time=(
                datetime.strptime(stamp, _TIME_FORMAT).replace(tzinfo=timezone.utc)
                if stamp
                else None
            ),
            reason=data.get("reason", ""),
            message=data.get("message", ""),
        )


def find_status_condition(
    conditions: list[Condition], condition_type: str
) -> Condition | None:
    """Return the condition of the given type, or None."""
    return next((c for c in conditions if c.type == condition_type), None)


def set_status_condition(conditions: list[Condition], condition: Condition) -> bool:
    """Add or update a condition in place; return whether anything changed.

    The transition time moves only when the status value changes.
    """
    existing = find_status_condition(conditions, condition.type)
    if existing is None:
        new = copy.copy(condition)
        if new.last_transition_time is None:
            new.last_transition_time = _now()
        conditions.append(new)
        return True

    changed = False
    if existing.status != condition.status:
        existing.status = condition.status
        existing.last_transition_time = condition.last_transition_time or _now()
        changed = True
    for attr in ("reason", "message", "observed_generation"):
        if getattr(existing, attr) != getattr(condition, attr):
            setattr(existing, attr, getattr(condition, attr))
            changed = True
    return changed


@dataclass(frozen=True)
class ReconcileResult:
    """What the reconcile loop should do next."""

    requeue: bool = False
    requeue_after: float = 0.0


class InMemoryClient:
    """An object store keyed by kind, namespace and name.

    Objects are plain dicts in their serialized form. Reads and writes copy,
    so callers never share state with the store.
    """

    def __init__(self) -> None:
        self._objects: dict[tuple[str, str, str], dict[str, Any]] = {}

    @staticmethod
    def _key(obj: dict[str, Any]) -> tuple[str, str, str]:
        meta = obj.get("metadata", {})
        kind, name = obj.get("kind", ""), meta.get("name", "")
        if not kind or not name:
            raise ValueError("object requires kind and metadata.name")
        return kind, meta.get("namespace", ""), name

    def create(self, obj: dict[str, Any]) -> dict[str, Any]:
        """Store a new object and return the stored copy."""
        key = self._key(obj)
        if key in self._objects:
            raise ValueError(f"{key[0]} {key[2]!r} already exists in namespace {key[1]!r}")
        stored = copy.deepcopy(obj)
        meta = stored.setdefault("metadata", {})
        meta.setdefault("generation", 1)
        meta.setdefault("creationTimestamp", _now().strftime(_TIME_FORMAT))
        meta["resourceVersion"] = "1"
        self._objects[key] = stored
        return copy.deepcopy(stored)

    def get(self, kind: str, namespace: str, name: str) -> dict[str, Any]:
        """Return a copy of the stored object."""
        try:
            return copy.deepcopy(self._objects[(kind, namespace, name)])
        except KeyError:
            raise NotFoundError(
                f"{kind} {name!r} not found in namespace {namespace!r}"
            ) from None

    def update_status(self, obj: dict[str, Any]) -> dict[str, Any]:
        """Replace only the status of a stored object."""
        key = self._key(obj)
        stored = self._objects.get(key)
        if stored is None:
            raise NotFoundError(f"{key[0]} {key[2]!r} not found in namespace {key[1]!r}")
        stored["status"] = copy.deepcopy(obj.get("status", {}))
        meta = stored["metadata"]
        meta["resourceVersion"] = str(int(meta.get("resourceVersion", "0")) + 1)
        return copy.deepcopy(stored)


class ScaffoldReconciler:
    """Marks each object of `kind` Accepted and records its observed generation."""

    kind = ""
    message = ""

    def __init__(self, client: InMemoryClient) -> None:
        self.client = client

    def _adjust_status(self, status: dict[str, Any]) -> None:
        """Kind-specific status defaults; none by default."""

    def reconcile(self, request: NamespacedName) -> ReconcileResult:
        try:
            obj = self.client.get(self.kind, request.namespace, request.name)
        except NotFoundError:
            return ReconcileResult()

        status = obj.get("status") or {}
        before = copy.deepcopy(status)
        generation = obj.get("metadata", {}).get("generation", 0)

        status["observedGeneration"] = generation
        self._adjust_status(status)
        conditions = [Condition.from_dict(c) for c in status.get("conditions", [])]
        set_status_condition(
            conditions,
            Condition(
                type=CONDITION_ACCEPTED,
                status=CONDITION_TRUE,
                observed_generation=generation,
                reason=REASON_SCAFFOLD_RECONCILER,
                message=self.message,
            ),
        )
        status["conditions"] = [c.to_dict() for c in conditions]

        if status == before:
            return ReconcileResult()
        obj["status"] = status
        self.client.update_status(obj)
        _log.debug("updated %s status", self.kind, extra={"namespacedName": str(request)})
        return ReconcileResult()


class ApplicationReconciler(ScaffoldReconciler):
    kind = "Application"
    message = "Application specification accepted; reconciliation engines pending."


class CellReconciler(ScaffoldReconciler):
    kind = "Cell"
    message = "Cell specification accepted."