"""Reconcile metrics kept in a process-wide registry."""

from __future__ import annotations

import threading
from typing import Union

from keleustes.labels import LABEL_ENGINE, LABEL_KIND, LABEL_RESULT

NAMESPACE = "keleustes"


def _full_name(namespace: str, subsystem: str, name: str) -> str:
    return "_".join(part for part in (namespace, subsystem, name) if part)


class Counter:
    """A monotonically increasing value."""

    def __init__(self) -> None:
        self._value = 0.0
        self._lock = threading.Lock()

    @property
    def value(self) -> float:
        return self._value

    def inc(self, amount: float = 1.0) -> None:
        """Add amount, which must not be negative."""
        if amount < 0:
            raise ValueError("counter cannot decrease in value")
        with self._lock:
            self._value += amount


class Gauge:
    """A value that can be set arbitrarily."""

    def __init__(self) -> None:
        self._value = 0.0

    @property
    def value(self) -> float:
        return self._value

    def set(self, value: float) -> None:
        self._value = float(value)


class _MetricVec:
    metric_type = ""
    _child_type: type = Counter

    def __init__(self, name: str, help: str, label_names: list[str]) -> None:
        self.name = name
        self.help = help
        self.label_names = tuple(label_names)
        self._children: dict[tuple[str, ...], Counter | Gauge] = {}
        self._lock = threading.Lock()

    def _child(self, values: tuple[str, ...]):
        if len(values) != len(self.label_names):
            raise ValueError(
                f"{self.name}: expected {len(self.label_names)} label values, "
                f"got {len(values)}"
            )
        with self._lock:
            if values not in self._children:
                self._children[values] = self._child_type()
            return self._children[values]

    def samples(self) -> list[tuple[dict[str, str], float]]:
        """Every labelled child as (labels, value)."""
        with self._lock:
            items = list(self._children.items())
        return [(dict(zip(self.label_names, key)), child.value) for key, child in items]


class CounterVec(_MetricVec):
    """A family of counters partitioned by label values."""

    metric_type = "counter"
    _child_type = Counter

    def with_label_values(self, *args: str) -> Counter:
        return self._child(tuple(args))


class GaugeVec(_MetricVec):
    """A family of gauges partitioned by label values."""

    metric_type = "gauge"
    _child_type = Gauge

    def with_label_values(self, *args: str) -> Gauge:
        return self._child(tuple(args))


Collector = Union[CounterVec, GaugeVec]


class Registry:
    """Named metric families; a name may be registered only once."""

    def __init__(self) -> None:
        self._collectors: dict[str, Collector] = {}
        self._lock = threading.Lock()

    def register(self, *args: Collector) -> None:
        """Register every collector, failing on a duplicate name."""
        with self._lock:
            names = [c.name for c in args]
            for name in names:
                if name in self._collectors or names.count(name) > 1:
                    raise ValueError(f"duplicate metrics collector registration: {name}")
            for collector in args:
                self._collectors[collector.name] = collector

    def get(self, name: str) -> Collector:
        """Return the collector registered under name; KeyError when absent."""
        return self._collectors[name]

    def gather(self) -> dict[str, list[tuple[dict[str, str], float]]]:
        """Families with at least one sample, sorted by name."""
        with self._lock:
            collectors = sorted(self._collectors.values(), key=lambda c: c.name)
        gathered = {}
        for collector in collectors:
            samples = collector.samples()
            if samples:
                gathered[collector.name] = samples
        return gathered


REGISTRY = Registry()

_register_lock = threading.Lock()
_reconcile_events: CounterVec | None = None
_reconcile_generation: GaugeVec | None = None


def register() -> Registry:
    """Register the reconcile metrics once; later calls are no-ops."""
    global _reconcile_events, _reconcile_generation
    with _register_lock:
        if _reconcile_events is None:
            events = CounterVec(
                _full_name(NAMESPACE, "reconcile", "events_total"),
                "Count of reconcile transitions that materially changed status, "
                "by engine, kind, and result.",
                [LABEL_ENGINE, LABEL_KIND, LABEL_RESULT],
            )
            generation = GaugeVec(
                _full_name(NAMESPACE, "reconcile", "observed_generation"),
                "Latest observedGeneration reflected into status, by engine and kind.",
                [LABEL_ENGINE, LABEL_KIND],
            )
            REGISTRY.register(events, generation)
            _reconcile_events, _reconcile_generation = events, generation
    return REGISTRY


def observe_reconcile_event(engine: str, kind: str, result: str) -> None:
    """Count one status transition; does nothing before register()."""
    if _reconcile_events is None:
        return
    _reconcile_events.with_label_values(engine, kind, result).inc()


def observe_reconcile_generation(engine: str, kind: str, generation: int) -> None:
    """Record the latest observed generation; does nothing before register()."""
    if _reconcile_generation is None:
        return
    _reconcile_generation.with_label_values(engine, kind).set(float(generation))