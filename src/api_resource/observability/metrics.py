# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Call metrics for api-resource.

This module provides:
1. ClientMetrics - Dataclass of in-memory counters, one per client
2. PrometheusClientMetrics - Prometheus counters and histograms shared by
   every client in the process

Usage:
    metrics = ClientMetrics()
    metrics.record_outcome("GET", OUTCOME_SUCCESS, 0.12)
    stats = metrics.get_stats()

    prom = get_prometheus_client_metrics()
    prom.record_outcome("GET", OUTCOME_SUCCESS, 0.12)
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any

from prometheus_client import CollectorRegistry, Counter, Histogram

from ..exceptions import DomainError, ParseError, TransportError
from ..streaming.result import StreamResult
from .constants import (
    LATENCY_BUCKETS,
    OUTCOME_ABORTED,
    OUTCOME_DOMAIN_ERROR,
    OUTCOME_PARSE_ERROR,
    OUTCOME_SUCCESS,
    OUTCOME_TRANSPORT_ERROR,
    REQUEST_DURATION_SECONDS,
    REQUESTS_TOTAL,
    SERIALIZATION_ERRORS_TOTAL,
    STREAM_BYTES_TOTAL,
    STREAM_CHUNKS_TOTAL,
    STREAM_DURATION_SECONDS,
    STREAMING_DURATION_BUCKETS,
    STREAMS_TOTAL,
)

logger = logging.getLogger(__name__)


def outcome_label(outcome: object) -> str:
    """Map a ResponseOutcome variant to its metric label."""
    if isinstance(outcome, TransportError):
        return OUTCOME_TRANSPORT_ERROR
    if isinstance(outcome, ParseError):
        return OUTCOME_PARSE_ERROR
    if isinstance(outcome, DomainError):
        return OUTCOME_DOMAIN_ERROR
    return OUTCOME_SUCCESS


def stream_outcome_label(result: StreamResult) -> str:
    """Map a finished stream to its metric label."""
    if result.error is not None:
        return OUTCOME_TRANSPORT_ERROR
    if result.aborted:
        return OUTCOME_ABORTED
    return OUTCOME_SUCCESS


@dataclass
class ClientMetrics:
    """
    In-memory call counters for one client.

    Thread Safety:
        All updates happen under a threading.Lock, so a client shared
        between event loops in different threads still counts correctly.

    Example:
        >>> metrics = ClientMetrics()
        >>> metrics.record_outcome("GET", "success", 0.05)
        >>> metrics.successes
        1
        >>> metrics.get_success_rate()
        1.0
    """

    # Non-streaming calls
    requests_completed: int = 0
    successes: int = 0
    domain_errors: int = 0
    parse_errors: int = 0
    transport_errors: int = 0
    serialization_errors: int = 0
    total_request_seconds: float = 0.0

    # Streaming calls
    streams_completed: int = 0
    streams_failed: int = 0
    streams_aborted: int = 0
    stream_chunks: int = 0
    stream_bytes: int = 0

    _per_method: dict[str, int] = field(default_factory=dict, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def record_outcome(self, method: str, outcome: str, duration: float) -> None:
        with self._lock:
            self.requests_completed += 1
            self.total_request_seconds += duration
            if outcome == OUTCOME_SUCCESS:
                self.successes += 1
            elif outcome == OUTCOME_DOMAIN_ERROR:
                self.domain_errors += 1
            elif outcome == OUTCOME_PARSE_ERROR:
                self.parse_errors += 1
            elif outcome == OUTCOME_TRANSPORT_ERROR:
                self.transport_errors += 1
            self._per_method[method] = self._per_method.get(method, 0) + 1

    def record_stream(
        self,
        method: str,
        outcome: str,
        chunks: int,
        size: int,
        duration: float,
    ) -> None:
        with self._lock:
            if outcome == OUTCOME_SUCCESS:
                self.streams_completed += 1
            elif outcome == OUTCOME_ABORTED:
                self.streams_aborted += 1
            else:
                self.streams_failed += 1
            self.stream_chunks += chunks
            self.stream_bytes += size
            self._per_method[method] = self._per_method.get(method, 0) + 1

    def record_serialization_error(self, method: str) -> None:
        with self._lock:
            self.serialization_errors += 1

    def get_success_rate(self) -> float:
        """
        Proportion of completed non-streaming calls that succeeded.

        Returns 1.0 when nothing has completed yet.
        """
        if self.requests_completed == 0:
            return 1.0
        return self.successes / self.requests_completed

    def get_average_latency(self) -> float:
        if self.requests_completed == 0:
            return 0.0
        return self.total_request_seconds / self.requests_completed

    def get_stats(self) -> dict[str, Any]:
        """Counters as a JSON-serializable dict."""
        with self._lock:
            per_method = dict(self._per_method)
        return {
            "requests_completed": self.requests_completed,
            "successes": self.successes,
            "domain_errors": self.domain_errors,
            "parse_errors": self.parse_errors,
            "transport_errors": self.transport_errors,
            "serialization_errors": self.serialization_errors,
            "success_rate": self.get_success_rate(),
            "average_latency_seconds": self.get_average_latency(),
            "streams_completed": self.streams_completed,
            "streams_failed": self.streams_failed,
            "streams_aborted": self.streams_aborted,
            "stream_chunks": self.stream_chunks,
            "stream_bytes": self.stream_bytes,
            "per_method": per_method,
        }

    def reset(self) -> None:
        """Zero every counter."""
        with self._lock:
            self.requests_completed = 0
            self.successes = 0
            self.domain_errors = 0
            self.parse_errors = 0
            self.transport_errors = 0
            self.serialization_errors = 0
            self.total_request_seconds = 0.0
            self.streams_completed = 0
            self.streams_failed = 0
            self.streams_aborted = 0
            self.stream_chunks = 0
            self.stream_bytes = 0
            self._per_method.clear()


class PrometheusClientMetrics:
    """
    Prometheus metrics for api-resource calls.

    Metrics:
        - api_resource_requests_total{method, outcome}
        - api_resource_request_duration_seconds{method}
        - api_resource_serialization_errors_total{method}
        - api_resource_streams_total{method, outcome}
        - api_resource_stream_chunks_total{method}
        - api_resource_stream_bytes_total{method}
        - api_resource_stream_duration_seconds{method}

    Usage:
        >>> prom = PrometheusClientMetrics(registry=CollectorRegistry())
        >>> prom.record_outcome("GET", "success", 0.2)
    """

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        """
        Register the metrics.

        Args:
            registry: Optional CollectorRegistry. If None, uses the default
                registry, so only one instance may exist per process (see
                get_prometheus_client_metrics).
        """
        kwargs: dict[str, Any] = {}
        if registry is not None:
            kwargs["registry"] = registry

        self.requests = Counter(
            REQUESTS_TOTAL,
            "Total non-streaming API calls",
            ["method", "outcome"],
            **kwargs,
        )
        self.request_duration = Histogram(
            REQUEST_DURATION_SECONDS,
            "Duration of non-streaming API calls",
            ["method"],
            buckets=LATENCY_BUCKETS,
            **kwargs,
        )
        self.serialization_errors = Counter(
            SERIALIZATION_ERRORS_TOTAL,
            "API calls rejected because parameters could not be serialized",
            ["method"],
            **kwargs,
        )
        self.streams = Counter(
            STREAMS_TOTAL,
            "Total streaming API calls",
            ["method", "outcome"],
            **kwargs,
        )
        self.stream_chunks = Counter(
            STREAM_CHUNKS_TOTAL,
            "Chunks delivered by streaming API calls",
            ["method"],
            **kwargs,
        )
        self.stream_bytes = Counter(
            STREAM_BYTES_TOTAL,
            "Bytes delivered by streaming API calls",
            ["method"],
            **kwargs,
        )
        self.stream_duration = Histogram(
            STREAM_DURATION_SECONDS,
            "Duration of streaming API calls",
            ["method"],
            buckets=STREAMING_DURATION_BUCKETS,
            **kwargs,
        )

        logger.info("Prometheus client metrics initialized")

    def record_outcome(self, method: str, outcome: str, duration: float) -> None:
        self.requests.labels(method=method, outcome=outcome).inc()
        self.request_duration.labels(method=method).observe(duration)

    def record_stream(
        self,
        method: str,
        outcome: str,
        chunks: int,
        size: int,
        duration: float,
    ) -> None:
        self.streams.labels(method=method, outcome=outcome).inc()
        self.stream_chunks.labels(method=method).inc(chunks)
        self.stream_bytes.labels(method=method).inc(size)
        self.stream_duration.labels(method=method).observe(duration)

    def record_serialization_error(self, method: str) -> None:
        self.serialization_errors.labels(method=method).inc()


# Module-level singleton bound to the default registry
_prometheus_client_metrics: PrometheusClientMetrics | None = None
_prometheus_lock = threading.Lock()


def get_prometheus_client_metrics() -> PrometheusClientMetrics | None:
    """
    Get or create the process-wide Prometheus metrics.

    Thread-safe singleton initialization using double-checked locking to
    prevent prometheus_client duplicate registration errors.

    Returns:
        The shared PrometheusClientMetrics, or None if registration failed.
    """
    global _prometheus_client_metrics

    if _prometheus_client_metrics is None:
        with _prometheus_lock:
            if _prometheus_client_metrics is None:
                try:
                    _prometheus_client_metrics = PrometheusClientMetrics()
                except ValueError as e:
                    # Duplicated timeseries in the default registry
                    logger.warning(
                        f"Failed to initialize Prometheus client metrics: {e}"
                    )
                    return None

    return _prometheus_client_metrics


def reset_prometheus_client_metrics() -> None:
    """Reset the Prometheus metrics singleton (mainly for testing)."""
    global _prometheus_client_metrics
    _prometheus_client_metrics = None


__all__ = [
    "ClientMetrics",
    "PrometheusClientMetrics",
    "get_prometheus_client_metrics",
    "outcome_label",
    "reset_prometheus_client_metrics",
    "stream_outcome_label",
]
