"""Structured logging helpers that pin the standard log keys."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

from keleustes.labels import (
    LABEL_APPLICATION,
    LABEL_ENGINE,
    LABEL_ENVIRONMENT,
    LABEL_KIND,
    LABEL_REGION,
    LABEL_TARGET,
    LOG_FIELD_RECONCILE_GENERATION,
    LOG_FIELD_SPAN_ID,
    LOG_FIELD_TRACE_ID,
)


@dataclass(frozen=True)
class NamespacedName:
    """Namespace and name identifying one namespaced resource."""

    namespace: str = ""
    name: str = ""

    def __str__(self) -> str:
        return f"{self.namespace}/{self.name}"


@dataclass
class LogFields:
    """Standard structured-log fields; unset values are omitted."""

    engine: str = ""
    kind: str = ""
    application: str = ""
    environment: str = ""
    target: str = ""
    region: str = ""
    reconcile_generation: int = 0
    trace_id: str = ""
    span_id: str = ""


class FieldLogger:
    """A logger carrying bound key/value pairs, emitting one JSON line per call."""

    def __init__(
        self,
        logger: logging.Logger | None = None,
        values: dict[str, Any] | None = None,
    ) -> None:
        self._logger = logger if logger is not None else logging.getLogger("keleustes")
        self._values: dict[str, Any] = dict(values or {})

    @property
    def values(self) -> dict[str, Any]:
        """A copy of the bound key/value pairs."""
        return dict(self._values)

    def with_values(self, **kwargs: Any) -> FieldLogger:
        """Return a new logger with extra bound values; this one is unchanged."""
        return FieldLogger(self._logger, {**self._values, **kwargs})

    def info(self, message: str, **kwargs: Any) -> None:
        """Log message at info level together with the bound values."""
        entry = {"msg": message, **self._values, **kwargs}
        self._logger.info(json.dumps(entry, default=str), extra={"fields": entry})


def with_fields(logger: FieldLogger, fields: LogFields) -> FieldLogger:
    """Return a logger with the standard fields that are set baked in."""
    candidates = (
        (LABEL_ENGINE, fields.engine),
        (LABEL_KIND, fields.kind),
        (LABEL_APPLICATION, fields.application),
        (LABEL_ENVIRONMENT, fields.environment),
        (LABEL_TARGET, fields.target),
        (LABEL_REGION, fields.region),
        (LOG_FIELD_RECONCILE_GENERATION, fields.reconcile_generation),
        (LOG_FIELD_TRACE_ID, fields.trace_id),
        (LOG_FIELD_SPAN_ID, fields.span_id),
    )
    return logger.with_values(**{key: value for key, value in candidates if value})


def with_resource(
    logger: FieldLogger, engine: str, kind: str, nn: NamespacedName
) -> FieldLogger:
    """Decorate a logger with engine, kind and, when set, the namespaced name."""
    out = logger.with_values(**{LABEL_ENGINE: engine, LABEL_KIND: kind})
    if not nn.name and not nn.namespace:
        return out
    return out.with_values(namespacedName=str(nn))