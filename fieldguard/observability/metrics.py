"""Prometheus metrics for the privacy engine.

Counts workflow transitions and per-field visibility decisions, and
times profile resolution. Labels never carry user ids.
"""

from prometheus_client import Counter, Histogram

REQUEST_TRANSITIONS = Counter(
    "fieldguard_request_transitions_total",
    "Information request status transitions",
    labelnames=["status", "trigger"],
)

FIELD_DECISIONS = Counter(
    "fieldguard_field_decisions_total",
    "Per-field visibility decisions made by the resolver",
    labelnames=["level", "outcome"],
)

RESOLVE_LATENCY = Histogram(
    "fieldguard_resolve_latency_seconds",
    "Time to resolve one profile view",
    buckets=(0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0),
)

DEPENDENCY_FAILURES = Counter(
    "fieldguard_dependency_failures_total",
    "Store failures converted to placeholders",
    labelnames=["dependency"],
)

SWEEP_EXPIRED = Counter(
    "fieldguard_sweep_expired_total",
    "Requests expired by the periodic sweep",
)

GRANT_WRITES = Counter(
    "fieldguard_grant_writes_total",
    "Grant upserts and revocations",
    labelnames=["operation"],
)
