"""Prometheus collectors for registration outcomes."""

from __future__ import annotations

from prometheus_client import Counter

from .domain.contracts import ValidationResult

VALIDATIONS = Counter(
    "registration_validations_total",
    "Registration payloads validated, by outcome.",
    ["outcome"],
)
FAILURES = Counter(
    "registration_failures_total",
    "Registration rule violations, by field and failure kind.",
    ["field", "kind"],
)


def record_validation(result: ValidationResult) -> None:
    VALIDATIONS.labels(outcome="accepted" if result.ok else "rejected").inc()
    for error in result.errors:
        FAILURES.labels(field=error.field, kind=error.kind.value).inc()
