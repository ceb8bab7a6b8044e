# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""Prometheus metrics for upstream providers, the response cache and
narrative synthesis.

Exports
-------
Collectors (names are stable, dashboards depend on them):

* ``earnings_insight_upstream_latency_seconds`` (Histogram)
* ``earnings_insight_upstream_errors_total`` (Counter)
* ``earnings_insight_upstream_http_status_total`` (Counter)
* ``earnings_insight_cache_lookups_total`` (Counter)
* ``earnings_insight_narrative_synthesis_total`` (Counter)
* ``earnings_insight_optional_source_downgrades_total`` (Counter)

Helpers:

* :func:`observe_upstream_request` – context manager for one upstream call.

Design
------
Collectors are created against the *current* default registry and reused if a
collector with the same name already exists, so module re-imports and tests
that swap ``prom.REGISTRY`` do not raise duplicate-registration errors.
"""

from __future__ import annotations

from collections.abc import Generator, Sequence
from contextlib import contextmanager, suppress
from dataclasses import dataclass, field
from time import perf_counter

import prometheus_client as prom
from prometheus_client import Counter, Histogram
from prometheus_client.registry import CollectorRegistry

__all__ = [
    "UpstreamObservation",
    "cache_lookups_total",
    "narrative_synthesis_total",
    "observe_upstream_request",
    "optional_source_downgrades_total",
    "upstream_http_status_total",
]


def _existing(registry: CollectorRegistry, name: str) -> object | None:
    # prometheus_client keeps this mapping private but stable.
    mapping = getattr(registry, "_names_to_collectors", {})
    return mapping.get(name)


def _get_or_create_histogram(
    name: str,
    doc: str,
    labelnames: Sequence[str] | None = None,
) -> Histogram:
    """Return a histogram bound to the current default registry.

    Args:
        name: Metric name.
        doc: Human-readable metric description.
        labelnames: Optional label names.

    Returns:
        The existing histogram registered under ``name``, or a new one.
    """
    registry: CollectorRegistry = prom.REGISTRY
    existing = _existing(registry, name)
    if isinstance(existing, Histogram):
        return existing
    try:
        return Histogram(name, doc, tuple(labelnames or ()), registry=registry)
    except ValueError as exc:
        again = _existing(registry, name)
        if "Duplicated timeseries" in str(exc) and isinstance(again, Histogram):
            return again
        raise


def _get_or_create_counter(
    name: str,
    doc: str,
    labelnames: Sequence[str] | None = None,
) -> Counter:
    """Counter twin of :func:`_get_or_create_histogram`.

    ``prometheus_client`` registers counters without the ``_total`` suffix, so
    the lookup strips it before checking the registry.
    """
    registry: CollectorRegistry = prom.REGISTRY
    base = name[: -len("_total")] if name.endswith("_total") else name
    existing = _existing(registry, base) or _existing(registry, name)
    if isinstance(existing, Counter):
        return existing
    try:
        return Counter(name, doc, tuple(labelnames or ()), registry=registry)
    except ValueError as exc:
        again = _existing(registry, base) or _existing(registry, name)
        if "Duplicated timeseries" in str(exc) and isinstance(again, Counter):
            return again
        raise


# ---------------------------------------------------------------------------
# Collectors
# ---------------------------------------------------------------------------

upstream_latency_seconds: Histogram = _get_or_create_histogram(
    "earnings_insight_upstream_latency_seconds",
    "Latency of calls to external providers (seconds).",
    labelnames=("provider", "endpoint", "outcome"),
)

upstream_errors_total: Counter = _get_or_create_counter(
    "earnings_insight_upstream_errors_total",
    "Errors encountered when calling external providers.",
    labelnames=("provider", "endpoint", "reason"),
)

upstream_http_status_total: Counter = _get_or_create_counter(
    "earnings_insight_upstream_http_status_total",
    "HTTP status codes returned by external providers.",
    labelnames=("provider", "endpoint", "status_code"),
)

cache_lookups_total: Counter = _get_or_create_counter(
    "earnings_insight_cache_lookups_total",
    "Response cache lookups by namespace and result (hit/miss).",
    labelnames=("namespace", "result"),
)

narrative_synthesis_total: Counter = _get_or_create_counter(
    "earnings_insight_narrative_synthesis_total",
    "Narrative synthesis requests by scope and final state.",
    labelnames=("scope", "state"),
)

optional_source_downgrades_total: Counter = _get_or_create_counter(
    "earnings_insight_optional_source_downgrades_total",
    "Optional source failures downgraded to 'absent'.",
    labelnames=("source",),
)


# ---------------------------------------------------------------------------
# Observation context manager
# ---------------------------------------------------------------------------


@dataclass
class UpstreamObservation:
    """State captured while observing an upstream call.

    Attributes:
        provider: Provider identifier (``"polygon"``, ``"finnhub"``, ...).
        endpoint: Logical endpoint name.
        start: Monotonic start time in seconds.
        outcome: ``"success"`` or ``"error"``.
        error_reason: Short, machine-readable error reason if any.
    """

    provider: str
    endpoint: str
    start: float = field(default_factory=perf_counter)
    outcome: str = "success"
    error_reason: str | None = None

    def mark_error(self, reason: str) -> None:
        self.outcome = "error"
        self.error_reason = reason


@contextmanager
def observe_upstream_request(
    *,
    provider: str,
    endpoint: str,
) -> Generator[UpstreamObservation, None, None]:
    """Record latency (and errors, if any) for one upstream request.

    Exceptions escaping the block are counted with reason ``"exception"``
    unless the caller already marked a more specific reason.
    """
    obs = UpstreamObservation(provider=provider, endpoint=endpoint)
    try:
        yield obs
    except Exception:
        if obs.error_reason is None:
            obs.mark_error("exception")
        raise
    finally:
        elapsed = perf_counter() - obs.start
        with suppress(Exception):
            upstream_latency_seconds.labels(
                provider=obs.provider,
                endpoint=obs.endpoint,
                outcome=obs.outcome,
            ).observe(elapsed)
            if obs.error_reason is not None:
                upstream_errors_total.labels(
                    provider=obs.provider,
                    endpoint=obs.endpoint,
                    reason=obs.error_reason,
                ).inc()
