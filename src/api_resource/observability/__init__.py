# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Observability for api-resource.

Classes:
    ClientMetrics: In-memory per-client call counters.
    PrometheusClientMetrics: Prometheus counters and histograms.

Protocols:
    MetricsRecorderProtocol: Interface every metrics recorder implements.

Functions:
    get_prometheus_client_metrics: Get or create the Prometheus singleton.
    reset_prometheus_client_metrics: Reset the Prometheus singleton.
    outcome_label: Map a call outcome to its metric label.
    stream_outcome_label: Map a stream result to its metric label.
"""

from .constants import (
    LATENCY_BUCKETS,
    METRIC_PREFIX,
    OUTCOME_ABORTED,
    OUTCOME_DOMAIN_ERROR,
    OUTCOME_LABELS,
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
from .metrics import (
    ClientMetrics,
    PrometheusClientMetrics,
    get_prometheus_client_metrics,
    outcome_label,
    reset_prometheus_client_metrics,
    stream_outcome_label,
)
from .protocols import MetricsRecorderProtocol

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
    "ClientMetrics",
    "MetricsRecorderProtocol",
    "PrometheusClientMetrics",
    "get_prometheus_client_metrics",
    "outcome_label",
    "reset_prometheus_client_metrics",
    "stream_outcome_label",
]
