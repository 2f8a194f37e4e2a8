"""
===============================================================================
FILE: crosscutting/metrics.py
===============================================================================

CRC CARD (Module)
-------------------------------------------------------------------------------
Name:
    Metrics (Prometheus)

Responsibilities:
    - Define the Prometheus metrics of the electoral core.
    - Provide small, stable functions to record events.
    - Keep cardinality low (NO user_id, NO aspirant ids, NO free text).
    - Expose a helper that renders the /metrics response.

Collaborators:
    - crosscutting.middleware: HTTP latency and counts.
    - identity.guard: decisions and discarded stale evaluations.
    - audit: audit write outcomes.
    - application.lifecycle_controller: transition outcomes.

Notes:
    - A private CollectorRegistry keeps repeated imports (tests) isolated
      from the global default registry.
    - Paths are normalized so aspirant UUIDs never become label values.
===============================================================================
"""

from __future__ import annotations

import re

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

_registry = CollectorRegistry()

# ------------------------
# HTTP
# ------------------------
_requests_total = Counter(
    "electoral_requests_total",
    "Total HTTP requests",
    ["endpoint", "method", "status"],
    registry=_registry,
)

_request_latency = Histogram(
    "electoral_request_latency_seconds",
    "HTTP request latency (seconds)",
    ["endpoint", "method"],
    buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0),
    registry=_registry,
)

# ------------------------
# Authorization
# ------------------------
_guard_decisions_total = Counter(
    "electoral_guard_decisions_total",
    "Authorization guard decisions applied",
    ["state", "role"],
    registry=_registry,
)

_guard_stale_evaluations_total = Counter(
    "electoral_guard_stale_evaluations_total",
    "Guard evaluations discarded because a newer one superseded them",
    registry=_registry,
)

_role_lookup_failures_total = Counter(
    "electoral_role_lookup_failures_total",
    "Role lookups that failed at the store (treated as denied)",
    registry=_registry,
)

# ------------------------
# Audit
# ------------------------
_audit_writes_total = Counter(
    "electoral_audit_writes_total",
    "Audit record writes by action and outcome",
    ["action", "outcome"],
    registry=_registry,
)

# ------------------------
# Lifecycle
# ------------------------
_lifecycle_transitions_total = Counter(
    "electoral_lifecycle_transitions_total",
    "Candidate lifecycle operations by outcome",
    ["operation", "outcome"],
    registry=_registry,
)


def record_request_metrics(
    endpoint: str,
    method: str,
    status_code: int,
    latency_seconds: float,
) -> None:
    """Record HTTP metrics.

    - endpoint is normalized to keep cardinality bounded.
    - status is grouped by 2xx/4xx/5xx.
    """
    normalized = _normalize_endpoint(endpoint)
    _requests_total.labels(
        endpoint=normalized,
        method=method,
        status=_status_bucket(status_code),
    ).inc()
    _request_latency.labels(endpoint=normalized, method=method).observe(
        latency_seconds
    )


def record_guard_decision(state: str, role: str | None) -> None:
    _guard_decisions_total.labels(state=state, role=role or "any").inc()


def record_stale_evaluation() -> None:
    _guard_stale_evaluations_total.inc()


def record_role_lookup_failure() -> None:
    _role_lookup_failures_total.inc()


def record_audit_write(action: str, outcome: str) -> None:
    """outcome: "written" | "failed"."""
    _audit_writes_total.labels(action=action, outcome=outcome).inc()


def record_lifecycle_transition(operation: str, outcome: str) -> None:
    """outcome: "applied" | error_code of the rejection (lowercase)."""
    _lifecycle_transitions_total.labels(operation=operation, outcome=outcome).inc()


def _normalize_endpoint(path: str) -> str:
    """Replace UUIDs and numeric ids with `{id}`."""
    path = re.sub(
        r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}",
        "{id}",
        path,
        flags=re.IGNORECASE,
    )
    return re.sub(r"/\d+", "/{id}", path)


def _status_bucket(code: int) -> str:
    if 200 <= code < 300:
        return "2xx"
    if 300 <= code < 400:
        return "3xx"
    if 400 <= code < 500:
        return "4xx"
    if 500 <= code < 600:
        return "5xx"
    return "other"


def get_metrics_response() -> tuple[bytes, str]:
    """Body and content-type for /metrics."""
    return generate_latest(_registry), CONTENT_TYPE_LATEST
