# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Metric name constants following Prometheus naming conventions.

All metric names use the ``api_resource_`` prefix.

Naming Conventions:
    - Counter metrics end with ``_total``
    - Histogram metrics for time end with ``_seconds``

Label Best Practices:
    Only categorical labels are used:
    - ``method`` - HTTP verb (GET, POST, PUT, DELETE, ...)
    - ``outcome`` - one of OUTCOME_LABELS

    Never label by path, resource id or host: those are unbounded.
"""

# =============================================================================
# Global Prefix
# =============================================================================

METRIC_PREFIX = "api_resource"
"""Prefix for all Prometheus metrics in this library."""


# =============================================================================
# Request Metrics
# =============================================================================

REQUESTS_TOTAL = f"{METRIC_PREFIX}_requests_total"
"""Total non-streaming calls, by method and outcome."""

REQUEST_DURATION_SECONDS = f"{METRIC_PREFIX}_request_duration_seconds"
"""Time from dispatch to outcome for non-streaming calls."""

SERIALIZATION_ERRORS_TOTAL = f"{METRIC_PREFIX}_serialization_errors_total"
"""Calls rejected before dispatch because parameters could not be serialized."""


# =============================================================================
# Streaming Metrics
# =============================================================================

STREAMS_TOTAL = f"{METRIC_PREFIX}_streams_total"
"""Total streaming calls, by method and outcome."""

STREAM_CHUNKS_TOTAL = f"{METRIC_PREFIX}_stream_chunks_total"
"""Total chunks delivered by streaming calls."""

STREAM_BYTES_TOTAL = f"{METRIC_PREFIX}_stream_bytes_total"
"""Total bytes delivered by streaming calls."""

STREAM_DURATION_SECONDS = f"{METRIC_PREFIX}_stream_duration_seconds"
"""Duration of streaming calls."""


# =============================================================================
# Label values and buckets
# =============================================================================

OUTCOME_SUCCESS = "success"
OUTCOME_DOMAIN_ERROR = "domain_error"
OUTCOME_PARSE_ERROR = "parse_error"
OUTCOME_TRANSPORT_ERROR = "transport_error"
OUTCOME_ABORTED = "aborted"
"""Streams only: the consumer stopped reading before the body ended."""

OUTCOME_LABELS = (
    OUTCOME_SUCCESS,
    OUTCOME_DOMAIN_ERROR,
    OUTCOME_PARSE_ERROR,
    OUTCOME_TRANSPORT_ERROR,
)

LATENCY_BUCKETS = [0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0]
"""Histogram buckets for request latency (seconds)."""

STREAMING_DURATION_BUCKETS = [0.1, 0.5, 1, 5, 10, 30, 60, 120, 300, 600]
"""Histogram buckets for stream duration (seconds)."""


__all__ = [
    "LATENCY_BUCKETS",
    "METRIC_PREFIX",
    "OUTCOME_ABORTED",
    "OUTCOME_DOMAIN_ERROR",
    "OUTCOME_LABELS",
    "OUTCOME_PARSE_ERROR",
    "OUTCOME_SUCCESS",
    "OUTCOME_TRANSPORT_ERROR",
    "REQUESTS_TOTAL",
    "REQUEST_DURATION_SECONDS",
    "SERIALIZATION_ERRORS_TOTAL",
    "STREAMING_DURATION_BUCKETS",
    "STREAMS_TOTAL",
    "STREAM_BYTES_TOTAL",
    "STREAM_CHUNKS_TOTAL",
    "STREAM_DURATION_SECONDS",
]
